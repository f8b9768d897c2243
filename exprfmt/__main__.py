import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from exprfmt import FormatOptions, FormatOptionsError, format_source
from exprfmt.options import DEFAULT_INDENT_SIZE, DEFAULT_MAX_LINE_LENGTH

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Format Expr source files")
    parser.add_argument("path", help="Path to the Expr source file")
    parser.add_argument(
        "--indent-size",
        type=int,
        default=DEFAULT_INDENT_SIZE,
        help=f"Number of spaces per indent level (default: {DEFAULT_INDENT_SIZE})",
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        default=DEFAULT_MAX_LINE_LENGTH,
        help=(
            "Width above which calls and groups are expanded "
            f"(default: {DEFAULT_MAX_LINE_LENGTH})"
        ),
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--output",
        help="Write the formatted text to this path instead of standard output",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check; exit with status 1 when the file is not formatted",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        options = FormatOptions(
            indent_size=args.indent_size,
            max_line_length=args.max_line_length,
        )
    except FormatOptionsError as exc:
        logger.error("Invalid options: %s", exc)
        raise SystemExit(1) from exc

    try:
        text = Path(args.path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        raise SystemExit(1) from exc

    logger.info("Formatting %s", args.path)
    formatted = format_source(text, options)

    if args.check:
        if formatted != text:
            print(f"{args.path}: not formatted")
            raise SystemExit(1)
        logger.info("%s is already formatted", args.path)
        return

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(formatted, encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot write %s: %s", output_path, exc)
            raise SystemExit(1) from exc
        logger.info("Formatted text written to %s", output_path)
        return

    sys.stdout.write(formatted)


if __name__ == "__main__":
    main(sys.argv[1:])
