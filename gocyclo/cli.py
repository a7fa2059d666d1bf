"""
Command-line interface for the complexity analyzer.

Exit status is 0 normally, 1 when ``-over`` is set and at least one
function was reported, and 2 for usage errors and unparsable files.
"""

import argparse
import logging
import sys
from typing import List, Optional

from gocyclo import __version__
from gocyclo.core.config import OUTPUT_FORMATS, Config, find_config
from gocyclo.core.engine import AnalysisEngine
from gocyclo.core.errors import ParseError, UsageError
from gocyclo.reporting import write_report


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_OVER_THRESHOLD = 1
EXIT_USAGE = 2

USAGE_DOC = """Calculate cyclomatic complexities of Go functions.
Usage:
        gocyclo [flags] <Go file or directory> ...

Flags:
        -over N   show functions with complexity > N only and
                  return exit code 1 if the set is non-empty
        -top N    show the top N most complex functions only
        -avg      show the average complexity over all functions,
                  not depending on whether -over or -top are set

The output fields for each line are:
<complexity> <package> <function> <start file:row:column> <end file:row:column> <id>
"""


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr with the program prefix."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="gocyclo: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gocyclo",
        description="Calculate cyclomatic complexities of Go functions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gocyclo .                          # Every function below the current directory
  gocyclo -top 10 src/               # The 10 most complex functions
  gocyclo -over 25 .                 # Fail (exit 1) if any function scores above 25
  gocyclo -avg main.go               # Append the average complexity
  gocyclo --format json -top 5 .     # JSON output
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Go files or directories to analyze",
    )
    parser.add_argument(
        "-over", "--over",
        type=int,
        metavar="N",
        help="show functions with complexity > N only and return exit code 1 if the output is non-empty",
    )
    parser.add_argument(
        "-top", "--top",
        type=int,
        metavar="N",
        help="show the top N most complex functions only",
    )
    parser.add_argument(
        "-avg", "--avg",
        action="store_const",
        const=True,
        help="show the average complexity over all functions",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to a YAML or JSON configuration file",
    )
    parser.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of files analyzed in parallel (default: 4)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="PATTERN",
        help="Skip files and directories matching PATTERN (can be repeated)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )

    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Defaults, then the config file, then command-line flags."""
    config_path = args.config or find_config(".")
    if config_path and not args.config:
        logger.debug(f"Using config file {config_path}")
    config = Config.load(config_path)
    exclude = None
    if args.exclude:
        exclude = config.exclude_patterns() + args.exclude
    return config.with_overrides(
        over=args.over,
        top=args.top,
        avg=args.avg,
        format=args.format,
        jobs=args.jobs,
        exclude=exclude,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.paths:
        sys.stderr.write(USAGE_DOC)
        return EXIT_USAGE

    try:
        config = load_config(args)
        engine = AnalysisEngine(config)
        records = engine.analyze(args.paths)
    except (UsageError, ParseError) as e:
        logger.error(str(e))
        return EXIT_USAGE

    written = write_report(
        sys.stdout,
        records,
        over=config.over(),
        top=config.top(),
        show_average=config.show_average(),
        fmt=config.output_format(),
    )

    if config.over() > 0 and written > 0:
        return EXIT_OVER_THRESHOLD
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
