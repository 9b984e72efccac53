# ───────────────────────── src/stylecheck/app.py ─────────────────────────
"""
CLI entrypoint for batch spelling and grammar checks.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from . import __version__
from .config import Config
from .logging_utils import log_error, setup_logger
from .spellcheck import SuggestionEngine
from .text_format import tokenize

VALID_FILE_EXT = ".txt"


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list, defaults to ``sys.argv[1:]``

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="stylecheck - Context-ranked spelling suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s essay.txt                       # Spelling suggestions
  %(prog)s essay.txt --config custom.json  # Use custom config
  %(prog)s essay.txt --grammar             # Also report grammar matches
  %(prog)s essay.txt --synonyms 16         # Ranked synonyms for one word
        """,
    )

    parser.add_argument("file", type=str, help="Plain text file to check (.txt)")

    parser.add_argument(
        "--config", type=str, help="Path to configuration file (JSON format)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured logging level",
    )

    parser.add_argument(
        "--workers", type=int, default=None, help="Threads used to rank suggestions"
    )

    parser.add_argument(
        "--grammar",
        action="store_true",
        help="Also run the grammar checker (needs stylecheck[grammar])",
    )

    parser.add_argument(
        "--synonyms",
        type=int,
        action="append",
        metavar="OFFSET",
        help="Report ranked synonyms for the word at OFFSET (needs stylecheck[nlp])",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Configuration object

    Raises:
        RuntimeError: If config file cannot be loaded
    """
    if config_path:
        try:
            import json

            config_file = Path(config_path)
            if not config_file.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

            with open(config_file, "r", encoding="utf-8") as f:
                config_data = json.load(f)

            return Config(**config_data)

        except Exception as e:
            raise RuntimeError(f"Failed to load config from {config_path}: {e}") from e

    return Config()


def read_document(path: str) -> str:
    """Read a plain text document.

    Raises:
        ValueError: If the file is not a ``.txt`` file
        FileNotFoundError: If the file does not exist
    """
    document = Path(path)
    if document.suffix.lower() != VALID_FILE_EXT:
        raise ValueError(f"Only {VALID_FILE_EXT} files can be checked: {path}")
    return document.read_text(encoding="utf-8")


def format_report(text: str, replacements: Dict[int, List[str]], label: str) -> List[str]:
    """Render one line per flagged offset: position, flagged text, suggestions.

    The flagged text is the token starting at the offset; offsets that start
    no token (punctuation matched by the grammar checker) run to the next
    whitespace.
    """
    token_ends = {token.start: token.end for token in tokenize(text)}
    lines = []
    for offset in sorted(replacements):
        end = token_ends.get(offset, offset)
        if offset not in token_ends:
            while end < len(text) and not text[end].isspace():
                end += 1
        flagged = text[offset:end]
        suggestions = ", ".join(replacements[offset]) or "(no suggestions)"
        lines.append(f"{label} {offset}: {flagged!r} -> {suggestions}")
    return lines


def setup_application(args: argparse.Namespace) -> tuple:
    """Set up application configuration and logging.

    Args:
        args: Parsed command line arguments

    Returns:
        Tuple of (config, logger)
    """
    try:
        config = load_config(args.config)
        if args.log_level:
            config.log_level = args.log_level
        if args.synonyms:
            config.enable_synonyms = True

        logger = setup_logger(config)

        logger.info("stylecheck starting")
        if args.config:
            logger.info(f"Using config file: {args.config}")

        return config, logger

    except Exception as e:
        print(f"Failed to initialize application: {e}", file=sys.stderr)
        raise


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        args = parse_arguments(argv)
        config, logger = setup_application(args)

        text = read_document(args.file)

        grammar_checker = None
        if args.grammar:
            from .grammar import LanguageToolChecker

            grammar_checker = LanguageToolChecker()

        try:
            engine = SuggestionEngine.from_config(
                config, grammar_checker=grammar_checker
            )
            report = format_report(
                text, engine.check_spelling(text, workers=args.workers), "spelling"
            )
            if grammar_checker is not None:
                report += format_report(text, engine.check_grammar(text), "grammar")
        finally:
            if grammar_checker is not None:
                grammar_checker.close()

        if args.synonyms:
            synonyms = {
                offset: engine.suggest_synonyms(text, offset) for offset in args.synonyms
            }
            report += format_report(text, synonyms, "synonyms")

        for line in report:
            print(line)

        logger.info(f"Checked {args.file}: {len(report)} issues")
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1

    except Exception as e:
        print(f"Application error: {str(e)}", file=sys.stderr)
        log_error("stylecheck run failed", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
