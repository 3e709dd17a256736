"""
Command line interface for the glossary tool.

Usage:
    eieol-glossary ingest lessons/ lesson_05.txt
    eieol-glossary find "сын"
    eieol-glossary paste "сынъ" --exact
    eieol-glossary export glossary_structured.txt --structured-out
    eieol-glossary transliterate --filter ocs2oru
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import ConfigError, GlossaryConfig, load_config
from .glossary import Glossary, GlossaryError
from .transliteration import UnknownFilterError

logger = logging.getLogger("eieol-glossary")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="eieol-glossary",
        description="Build and search a glossary from glossed source texts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Add all lessons in a directory to ./glossary.txt
  eieol-glossary ingest lessons/

  # Look up earlier glosses of a word
  eieol-glossary find "сын"

  # Merge OCS spellings into Old Russian ones
  eieol-glossary transliterate --filter ocs2oru
        """,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML config file",
    )
    parser.add_argument(
        "--glossary",
        type=Path,
        help="Glossary file (default: glossary.txt)",
    )
    parser.add_argument(
        "--structured",
        action="store_true",
        default=None,
        help="Glossary file uses the structured layout",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    ingest = commands.add_parser("ingest", help="Add glossed source files or directories")
    ingest.add_argument("paths", nargs="+", type=Path, help="Source files or directories")
    ingest.add_argument("--filter", help="Transliteration filter to apply afterwards")

    for name, help_text in (
        ("find", "Show full entries of matching headwords"),
        ("paste", "Show matching headwords as '<headword> meaning' lines"),
    ):
        query = commands.add_parser(name, help=help_text)
        query.add_argument("query", help="Text to look for in headwords")
        query.add_argument("--exact", action="store_true", help="Match the whole headword")

    export = commands.add_parser("export", help="Write the glossary to another file")
    export.add_argument("output", type=Path, help="Output file")
    export.add_argument(
        "--structured-out",
        action="store_true",
        help="Write the structured layout instead of the flat one",
    )

    transliterate = commands.add_parser("transliterate", help="Apply a transliteration filter")
    transliterate.add_argument("--filter", help="Filter name (default: from config)")

    return parser.parse_args(argv)


def _load_glossary(config: GlossaryConfig, required: bool) -> Glossary:
    if not config.glossary_path.exists() and not required:
        logger.info(f"No glossary at {config.glossary_path}, starting empty")
        return Glossary()
    return Glossary(config.glossary_path, structured=config.structured)


def _ingest(args: argparse.Namespace, config: GlossaryConfig) -> None:
    glossary = _load_glossary(config, required=False)
    for path in args.paths:
        if path.is_dir():
            report = glossary.add_directory(path, exclude=config.exclude_pattern)
            print(report)
        else:
            glossary.add_file(path)

    filter_name = args.filter or config.filter
    if filter_name:
        glossary.apply_filter(filter_name)
    glossary.export(config.glossary_path, structured=config.structured)


def _transliterate(args: argparse.Namespace, config: GlossaryConfig) -> None:
    filter_name = args.filter or config.filter
    if not filter_name:
        raise ConfigError("No transliteration filter given")
    glossary = _load_glossary(config, required=True)
    glossary.apply_filter(filter_name)
    glossary.export(config.glossary_path, structured=config.structured)


def run(args: argparse.Namespace, config: GlossaryConfig) -> None:
    """Run the selected sub-command."""
    if args.command == "ingest":
        _ingest(args, config)
    elif args.command == "find":
        print(_load_glossary(config, required=True).find(args.query, args.exact))
    elif args.command == "paste":
        print(_load_glossary(config, required=True).paste(args.query, args.exact))
    elif args.command == "export":
        glossary = _load_glossary(config, required=True)
        glossary.export(args.output, structured=args.structured_out)
    elif args.command == "transliterate":
        _transliterate(args, config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the glossary tool."""
    args = parse_args(argv)
    load_dotenv()

    try:
        config = load_config(args.config)
        updates = {}
        if args.glossary is not None:
            updates["glossary_path"] = args.glossary
        if args.structured is not None:
            updates["structured"] = args.structured
        config = config.model_copy(update=updates)

        logging.basicConfig(level=config.log_level)
        run(args, config)
    except FileNotFoundError as e:
        print(f"Error: file not found: {e.filename or e}", file=sys.stderr)
        return 1
    except (ConfigError, GlossaryError, UnknownFilterError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
