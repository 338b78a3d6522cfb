"""CLI entrypoint and logging utilities for the site build.

This module implements the command-line layer of the build: argument parsing,
logging setup, configuration loading, running the pipeline and translating
the outcome into a process exit code. All build logic lives in `runner.py`.

Exit codes
----------
0
    The site was built.
1
    Configuration is missing or invalid (nothing was fetched or written), or
    the build failed (a table fetch failed, or the output could not be
    written).

Examples
--------
>>> # In shell
>>> python build_site.py --output dist --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config import (
    CNAME_FILE,
    LOG_DIR,
    LOG_FILENAME_BUILD_SITE,
    LOG_FORMAT,
    OUTPUT_DIR,
    STATIC_DIR,
    TEMPLATES_DIR,
)
from src.exceptions import AppError, ConfigurationError
from src.pipeline.airtable.config import AirtableConfig

from .runner import BuildResult, run_from_config

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure logging output for the build.

    Removes existing root handlers, always logs to the console and, unless
    disabled, appends to ``logs/build_site.log``. A file handler that cannot
    be created (read-only checkout, CI sandbox) is skipped.

    Parameters
    ----------
    level : str, optional
        Logging level name, e.g. ``"DEBUG"``. Unknown names fall back to INFO.
    enable_file : bool, optional
        Whether to add the file handler.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_BUILD_SITE, mode="a")
            )
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def print_build_summary(result: BuildResult, console: Console | None = None) -> None:
    """Print a compact table describing the finished build."""
    console = console or Console(stderr=True)
    table = Table(title="Site build", show_header=True, header_style="bold")
    table.add_column("Item")
    table.add_column("Value", justify="right")
    table.add_row("Investments", str(result.investments))
    table.add_row("People", str(result.people))
    table.add_row("Images downloaded", str(result.images.downloaded))
    table.add_row("Images failed", str(result.images.failed))
    table.add_row("Pages written", ", ".join(result.pages_written) or "-")
    table.add_row("Static copied", ", ".join(result.static_copied) or "-")
    table.add_row("CNAME", "yes" if result.cname_copied else "no")
    console.print(table)
    console.print(f"Output in [bold]{result.output_dir}[/bold]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the fund website from Airtable content."
    )
    parser.add_argument("-o", "--output", type=Path, default=OUTPUT_DIR)
    parser.add_argument("--templates", type=Path, default=TEMPLATES_DIR)
    parser.add_argument("--static-root", type=Path, default=STATIC_DIR)
    parser.add_argument(
        "--cname", type=Path, default=CNAME_FILE, help="Custom-domain file to copy"
    )
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    parser.add_argument(
        "--no-summary", action="store_true", help="Skip the summary table"
    )
    return parser


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns
    -------
    argparse.Namespace
        Attributes ``output``, ``templates``, ``static_root``, ``cname``,
        ``log_level`` and ``no_summary``.
    """
    return build_parser().parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Run the build described by ``args`` and return the exit code."""
    configure_logging(
        args.log_level, enable_file=not bool(os.environ.get("DISABLE_FILE_LOGS"))
    )
    try:
        config = AirtableConfig()
    except ConfigurationError as exc:
        logger.error("%s", exc.message)
        return 1

    try:
        result = run_from_config(
            config,
            output_dir=args.output,
            templates_dir=args.templates,
            static_root=args.static_root,
            cname_path=args.cname,
        )
    except AppError as exc:
        logger.error("Build failed: %s", exc)
        return 1
    except Exception:
        logger.exception("Build failed")
        return 1

    if not args.no_summary:
        print_build_summary(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    return run(parse_arguments(argv))


if __name__ == "__main__":
    raise SystemExit(main())
