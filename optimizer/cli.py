"""CLI commands for AMP Hero Preload.

Provides commands for:
- Injecting hero image preload links into rendered AMP HTML files
"""

import argparse
import logging
import sys
from pathlib import Path

from dom.document import Document
from env_config import get_log_json, get_log_level
from optimizer.configuration import KEY_TRANSFORMERS, register
from optimizer.engine import TransformationEngine
from optimizer.errors import ErrorCollection
from optimizer.logging_config import OptimizationStatistics, setup_logging
from optimizer.transformers.force_preload_hero_image import ForcePreloadHeroImage

logger = logging.getLogger(__name__)


def _count_injected(engine: TransformationEngine) -> int:
    return sum(
        transformer.stats["preloads_injected"]
        for transformer in engine.transformers
        if isinstance(transformer, ForcePreloadHeroImage)
    )


def transform_command(args: argparse.Namespace) -> int:
    """Inject hero image preloads into HTML files.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    paths = [Path(path) for path in args.files]
    output = Path(args.output) if args.output else None

    if output and len(paths) != 1:
        logger.error("--output can only be used with a single input file")
        return 1

    configuration = register({KEY_TRANSFORMERS: list(args.transformer or [])})
    engine = TransformationEngine(configuration)
    stats = OptimizationStatistics()

    for path in paths:
        try:
            document = Document.from_html(path.read_bytes())
            errors = ErrorCollection()
            engine.optimize(document, errors)
            for error in errors:
                logger.warning(f"{path}: {error.code}: {error.message}")

            html = document.to_html()
            if args.in_place:
                path.write_text(html, encoding="utf-8")
            elif output:
                output.write_text(html, encoding="utf-8")
            else:
                sys.stdout.write(html)

            stats.record_document_processed(str(path), _count_injected(engine))
            logger.info(f"Processed {path}")

        except (OSError, ValueError) as e:
            logger.error(f"Failed to process {path}: {e}")
            stats.record_document_failed(str(path), str(e))

    stats.log_summary(logger)
    return 1 if stats.documents_failed else 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="AMP Hero Preload CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit JSON log lines (default: from LOG_JSON env var)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # transform command
    transform_parser = subparsers.add_parser(
        "transform",
        help="Inject missing hero image preload links",
    )
    transform_parser.add_argument(
        "files",
        nargs="+",
        help="HTML files to transform",
    )
    destination = transform_parser.add_mutually_exclusive_group()
    destination.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the result to this path (single input only)",
    )
    destination.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite the input files",
    )
    transform_parser.add_argument(
        "--transformer",
        action="append",
        help="Dotted path of an extra transformer to run, in order (repeatable)",
    )
    transform_parser.set_defaults(func=transform_command)

    args = parser.parse_args(argv)

    json_logs = get_log_json() if args.json_logs is None else args.json_logs
    setup_logging(
        level=args.log_level or get_log_level(),
        json_format=json_logs,
        log_file=args.log_file,
    )

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
