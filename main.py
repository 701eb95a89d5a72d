"""
Text splitter:
- Splits long text into chunks no longer than a fixed length
- Prefers sentence ends, then word gaps, then a hard cut
- Prints chunks with their character counts
- Exports the chunks to .xlsx or .csv
- Interactive mode for pasting and re-splitting text
"""

from argparse import ArgumentParser
from typing import Callable, List, Optional, Sequence
import logging
import sys

from chunking.boundary import split_chunks
from core.chunk import Chunk
from core.config import Settings, load_settings
from core.document import Document
from core.session import SplitSession
from evaluation.lengths import check_chunks, length_stats
from export.spreadsheet import export_chunks
from ingestion.loaders import document_from_text, load_document, load_stdin

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
LOGGER = logging.getLogger(__name__)

EXIT_COMMANDS = {"quit", "exit", "q"}
SPECIAL_COMMANDS = {
    "/split": "Split the text entered so far",
    "/show N": "Print chunk N of the last split",
    "/export [PATH]": "Export the last split (.xlsx or .csv)",
    "/stats": "Show chunk length statistics",
    "/history": "List previous splits",
    "/clear": "Clear the text and the chunks",
    "/help": "Show available commands",
}


def load_source(path: Optional[str], text: Optional[str]) -> Document:
    """Resolve the input: literal text, a file, or stdin for '-' / no path."""
    if text is not None:
        return document_from_text(text)

    if not path or path == "-":
        return load_stdin()

    document = load_document(path)
    if document is None:
        raise RuntimeError(f"Could not load input from: {path}")
    return document


def format_chunk(chunk: Chunk) -> str:
    return f"Chunk {chunk.index} ({chunk.length} chars)\n{chunk.text}"


def print_chunks(chunks: Sequence[Chunk]) -> None:
    for chunk in chunks:
        print(format_chunk(chunk))
        print()


def format_stats(chunks: Sequence[Chunk]) -> str:
    stats = length_stats(chunks)
    return (
        f"{stats['count']} chunks, {stats['total']} chars "
        f"(min {stats['min']:.0f}, max {stats['max']:.0f}, "
        f"mean {stats['mean']:.1f}, p95 {stats['p95']:.0f})"
    )


class SplitShell:
    """
    Interactive front end over a SplitSession.
    Plain lines go into the buffer; lines starting with '/' are commands.
    """

    def __init__(self, session: SplitSession, settings: Settings):
        self.session = session
        self.settings = settings

    def handle_command(self, command: str) -> Optional[str]:
        """Run a slash command and return the text to show, if any."""
        parts = command.strip().split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        if cmd == "/split":
            chunks = self.session.split()
            if not chunks:
                return "Nothing to split; enter some text first."
            lines = [f"Split into {len(chunks)} chunk(s):"]
            for chunk in chunks:
                lines.append(f"  [{chunk.index}] {chunk.length:>5} | {chunk.summary(60)}")
            return "\n".join(lines)

        elif cmd == "/show":
            try:
                return format_chunk(self.session.get(int(arg)))
            except ValueError:
                return "Usage: /show N"
            except IndexError as e:
                return f"No such chunk: {e}"

        elif cmd == "/export":
            path = arg or self.settings.export_path
            try:
                written = export_chunks(self.session.chunks, path, sheet_name=self.settings.sheet_name)
            except (RuntimeError, ValueError, OSError) as e:
                LOGGER.error("Export failed: %s", e)
                return f"Export failed: {e}"
            return f"Exported {len(self.session.chunks)} chunk(s) to {written}"

        elif cmd == "/stats":
            if not self.session.chunks:
                return f"No chunks yet; buffer holds {self.session.character_count} chars."
            return format_stats(self.session.chunks)

        elif cmd == "/history":
            if not self.session.history:
                return "No splits yet"
            return "\n".join(
                f"  {record.timestamp:%H:%M:%S}  {record.character_count} chars -> {record.chunk_count} chunk(s)"
                for record in self.session.history
            )

        elif cmd == "/clear":
            self.session.clear()
            return "Cleared"

        elif cmd == "/help":
            lines = ["Commands:"]
            for name, desc in SPECIAL_COMMANDS.items():
                lines.append(f"  {name}: {desc}")
            lines.append(f"  {', '.join('/' + cmd for cmd in sorted(EXIT_COMMANDS))}: Exit")
            return "\n".join(lines)

        return f"Unknown command: {cmd} (try /help)"


def interactive_loop(shell: SplitShell, read_line: Callable[[str], str] = input) -> None:
    """Read text and commands until EOF or an exit command."""
    print("\n" + "=" * 60)
    print("Text splitter")
    print(f"   Max chunk length: {shell.session.max_len} chars")
    print("-" * 60)
    print("Paste or type text, then /split.")
    print("Type /help for commands, or /quit to exit.")
    print("=" * 60 + "\n")

    while True:
        try:
            line = read_line("> ")
        except (KeyboardInterrupt, EOFError):
            print("\nBye!")
            break

        stripped = line.strip()
        # Bare exit words only count on an empty buffer; pasted text may contain them
        word = stripped.lower()
        if word.lstrip("/") in EXIT_COMMANDS and (word.startswith("/") or not shell.session):
            print("Bye!")
            break

        if stripped.startswith("/"):
            response = shell.handle_command(stripped)
            if response:
                print(f"\n{response}\n")
            continue

        if stripped or shell.session:
            shell.session.append(line)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Split long text into chunks of bounded length and export them."
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Text or PDF file to split; '-' or omitted reads stdin",
    )
    parser.add_argument(
        "-t", "--text",
        help="Split this text instead of reading a file",
    )
    parser.add_argument(
        "-n", "--max-length",
        type=int,
        help="Maximum characters per chunk (overrides TEXTSPLIT_MAX_CHUNK_LENGTH)",
    )
    parser.add_argument(
        "-o", "--export",
        help="Write the chunks to this .xlsx or .csv file",
    )
    parser.add_argument(
        "--sheet-name",
        help="Worksheet name for .xlsx exports",
    )
    parser.add_argument(
        "-i", "--interactive",
        help="Start an interactive session",
        action="store_true",
    )
    parser.add_argument(
        "--show-steps",
        help="Log length statistics for the split",
        action="store_true",
    )
    parser.add_argument(
        "--verify",
        help="Check the split invariants and fail if any is violated",
        action="store_true",
    )
    parser.add_argument(
        "-q", "--quiet",
        help="Do not print the chunks",
        action="store_true",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings().override(
            max_chunk_length=args.max_length,
            sheet_name=args.sheet_name,
        )
    except ValueError as e:
        LOGGER.error("Invalid configuration: %s", e)
        return 1

    logging.getLogger().setLevel(settings.log_level)

    if args.interactive:
        session = SplitSession(max_len=settings.max_chunk_length)
        if args.text is not None:
            session.set_text(args.text)
        interactive_loop(SplitShell(session, settings))
        return 0

    try:
        document = load_source(args.path, args.text)
    except (RuntimeError, OSError) as e:
        LOGGER.error(str(e))
        return 1

    LOGGER.info("Loaded %s (%d chars)", document.source, document.character_count)
    if document.is_blank:
        LOGGER.warning("Input is empty; nothing to split")

    chunks = split_chunks(document.text, settings.max_chunk_length)

    if args.show_steps:
        LOGGER.info("Split -> %s", format_stats(chunks))

    if not args.quiet:
        print_chunks(chunks)

    if args.verify:
        report = check_chunks(document.text, chunks, settings.max_chunk_length)
        if not report["ok"]:
            failed = [name for name, passed in report.items() if not passed and name != "ok"]
            LOGGER.error("Split check failed: %s", ", ".join(failed))
            return 1
        LOGGER.info("Split check passed")

    if args.export:
        try:
            export_chunks(chunks, args.export, sheet_name=settings.sheet_name)
        except (RuntimeError, ValueError, OSError) as e:
            LOGGER.error("Export failed: %s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
