"""
Command-line interface for the style checker.

Usage:
    flintpp [options] paths...
"""

import argparse
import io
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from flintpp import __version__
from flintpp.config import load_config, find_config, LintConfig
from flintpp.core.engine import LintEngine
from flintpp.core.report import OutputFormat, RenderOptions


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="flintpp",
        description="Style checker for C and C++ source files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Lint levels:
  0 : Errors only
  1 : Errors & Warnings
  2 : All feedback

Code between '// %flint: pause' and '// %flint: resume' lines is ignored.

Examples:
  flintpp src/foo.cpp                 # Lint a single file
  flintpp -r src                      # Lint a directory and its subfolders
  flintpp -r -j src > report.json     # Output the report as JSON
  flintpp -l 0 src                    # Only report errors
        """
    )

    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to lint",
    )
    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Search subfolders for files",
    )
    parser.add_argument(
        "-c", "--cmode",
        action="store_true",
        help="Only perform C based lint checks",
    )
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output report in JSON format",
    )
    parser.add_argument(
        "-l", "--level",
        type=int,
        default=None,
        help="Set the lint level (0-2, default: 2)",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Number of parallel workers (default: 4)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def configure_logging(verbose: bool = False):
    """Send package logs to stderr so stdout only carries the report."""
    logger = logging.getLogger("flintpp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_config(args: argparse.Namespace) -> LintConfig:
    """Merge the config file (if any) with command-line overrides."""
    data = {}

    if args.config:
        data = load_config(args.config)
    else:
        config_path = find_config(args.paths[0] if args.paths else ".")
        if config_path:
            data = load_config(config_path)

    # Apply command-line overrides
    if args.recursive:
        data["recursive"] = True
    if args.cmode:
        data["c_mode"] = True
    if args.json:
        data["json"] = True
    if args.level is not None:
        data["level"] = args.level
    if args.jobs is not None:
        data["jobs"] = args.jobs

    return LintConfig.from_dict(data)


def cmd_lint(args: argparse.Namespace) -> int:
    """Lint the given paths and print the report."""
    config = build_config(args)
    logging.getLogger(__name__).debug("Configuration: %s", config.to_dict())

    engine = LintEngine(config.to_engine_config())
    report = engine.run(args.paths)

    options = RenderOptions(
        output_format=OutputFormat.JSON if config.json else OutputFormat.TEXT,
        threshold=config.threshold,
    )

    # The report is written in one piece once every file is done.
    buffer = io.StringIO()
    report.render(options, buffer)
    write_output(buffer.getvalue())

    return 1 if report.errors > 0 else 0


def write_output(text: str):
    """Write the report to stdout as UTF-8, whatever the locale encoding."""
    sys.stdout.flush()
    stream = getattr(sys.stdout, "buffer", None)
    if stream is None:
        # Text-only replacement stream, e.g. an embedding application.
        sys.stdout.write(text)
    else:
        stream.write(text.encode("utf-8"))
        stream.flush()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    try:
        return cmd_lint(args)

    except KeyboardInterrupt:
        print("\nLint interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
