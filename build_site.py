"""Minimal launcher for the site build.

This file only parses the command line and delegates to
``src.pipeline.site_builder.cli``. It exits with the build's status code.

Usage:
    python build_site.py [--output DIR] [--templates DIR] [--static-root DIR]
                         [--cname FILE] [--log-level LEVEL] [--no-summary]

"""

from __future__ import annotations

import argparse


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line args for the launcher.

    Parameters
    ----------
    argv : list[str] | None
        Optional argv to parse. When ``None`` the real CLI args are used.
    """
    from src.pipeline.site_builder.cli import build_parser

    return build_parser().parse_args(argv)


def entry_point(argv: list[str] | None = None) -> None:
    """Run the build and exit with its status code."""
    args = parse_cli_args(argv)
    from src.pipeline.site_builder.cli import run

    raise SystemExit(run(args))


if __name__ == "__main__":
    entry_point()
