"""loggio — query Apache access logs for unique clients, top URLs and top clients."""

import logging
import sys
from argparse import ArgumentParser

from loggio.client import LoggIO
from loggio.config import OUTPUT_FORMATS, load_config, load_yaml_config
from loggio.errors import LoggIOError
from loggio.parser import SUPPORTED_FORMATS
from loggio.reader import expand_paths
from loggio.report import build_report, format_report_json, format_report_text


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="loggio",
        description="Report on Apache access log files.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Log file path(s) or glob pattern(s)",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--format",
        help=f"Log format (supported: {', '.join(SUPPORTED_FORMATS)})",
    )
    parser.add_argument(
        "--encoding",
        help="File encoding (default: utf-8)",
    )
    parser.add_argument(
        "--top",
        type=int,
        help="Number of URLs / IP addresses to list (default: 3)",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser


def run(args) -> int:
    """Read every file into one instance and print the report."""
    try:
        config = load_config(args, load_yaml_config(args.config))
    except LoggIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.top < 1:
        print("Error: --top must be at least 1", file=sys.stderr)
        return 1

    try:
        loggio = LoggIO.from_config(config)
        for path in expand_paths(args.files):
            loggio.read(path, blocking=True)
    except LoggIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = build_report(loggio, top=config.top)
    if config.output == "json":
        print(format_report_json(report))
    else:
        print(format_report_text(report))
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [LOGGIO] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    sys.exit(run(args))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
