"""Build the static fund website from Airtable content.

This module provides the headless runner for the whole build: it fetches the
investments and people tables, shapes them into page data, downloads image
attachments, renders every page and copies the static assets. It is intended
for programmatic invocation; `cli.py` wraps it for the command line.

Pipeline
--------
1. Fetch ``Website - Investments`` (sorted by acquisition date) and
   ``Website - People`` concurrently.
2. Group records and compute stats (`data_aggregator`).
3. Download logos and portraits into ``<output>/images`` concurrently.
4. Render the five pages (`renderer`).
5. Copy ``css``, ``js``, ``images`` and ``CNAME``.

A fetch failure raises out of `build_site` and aborts the build. Image
download failures are logged and skipped.

Usage Examples
--------------
::

    from src.pipeline.airtable import AirtableConfig
    from src.pipeline.site_builder.runner import run_from_config

    result = run_from_config(AirtableConfig())
    print(result.pages_written)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiohttp
from aiolimiter import AsyncLimiter

from src.config import (
    CNAME_FILE,
    INVESTMENT_SORT_FIELD,
    INVESTMENTS_TABLE,
    LOGO_FIELD,
    LOGO_SUBDIR,
    OUTPUT_DIR,
    PEOPLE_TABLE,
    PERSON_IMAGE_FIELD,
    PERSON_IMAGE_SUBDIR,
    STATIC_DIR,
    STATIC_SUBDIRS,
    TEMPLATES_DIR,
)
from src.pipeline.airtable.client import AirtableClient
from src.pipeline.assets.images import ImageDownloadStats, download_all_images
from src.pipeline.assets.static_files import copy_cname, copy_static_dirs

from .data_aggregator import build_pages, build_site_data
from .renderer import create_environment, render_pages

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Summary of a finished build."""

    output_dir: Path
    investments: int = 0
    people: int = 0
    images: ImageDownloadStats = field(default_factory=ImageDownloadStats)
    pages_written: list[str] = field(default_factory=list)
    static_copied: list[str] = field(default_factory=list)
    cname_copied: bool = False


async def fetch_site_records(
    client: AirtableClient,
    session: aiohttp.ClientSession,
    rate_limiter: AsyncLimiter,
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Fetch the investments and people tables concurrently."""
    investments, people = await asyncio.gather(
        client.fetch_table(
            session,
            INVESTMENTS_TABLE,
            sort=[{"field": INVESTMENT_SORT_FIELD}],
            rate_limiter=rate_limiter,
        ),
        client.fetch_table(session, PEOPLE_TABLE, rate_limiter=rate_limiter),
    )
    return investments, people


async def build_site(
    config: Any,
    *,
    output_dir: Path | None = None,
    templates_dir: Path | None = None,
    static_root: Path | None = None,
    cname_path: Path | None = None,
    session: aiohttp.ClientSession | None = None,
) -> BuildResult:
    r"""Run the full build and return a summary.

    Parameters
    ----------
    config : Any
        Configuration object (normally `AirtableConfig`).
    output_dir, templates_dir, static_root, cname_path : Path or None, optional
        Overrides for the project defaults in `src.config`.
    session : aiohttp.ClientSession or None, optional
        Session to use. When ``None`` one is created and closed here.

    Returns
    -------
    BuildResult
        Record counts, image outcomes and the files written.

    Raises
    ------
    src.exceptions.AppError
        If either table cannot be fetched.
    OSError
        If the output tree cannot be written.
    """
    if session is None:
        async with aiohttp.ClientSession() as owned_session:
            return await build_site(
                config,
                output_dir=output_dir,
                templates_dir=templates_dir,
                static_root=static_root,
                cname_path=cname_path,
                session=owned_session,
            )

    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    templates_dir = Path(templates_dir) if templates_dir is not None else TEMPLATES_DIR
    static_root = Path(static_root) if static_root is not None else STATIC_DIR
    cname_path = Path(cname_path) if cname_path is not None else CNAME_FILE

    client = AirtableClient(config)
    rate_limiter = AsyncLimiter(config.requests_per_second, 1)

    logger.info("Fetching data from Airtable...")
    investments, people = await fetch_site_records(client, session, rate_limiter)
    logger.info("Fetched %d investments, %d people", len(investments), len(people))

    site_data = build_site_data(investments, people)
    result = BuildResult(
        output_dir=output_dir, investments=len(investments), people=len(people)
    )

    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Downloading images from Airtable...")
    semaphore = asyncio.Semaphore(config.max_concurrent_downloads)
    logo_stats, people_stats = await asyncio.gather(
        download_all_images(
            session,
            investments,
            LOGO_FIELD,
            LOGO_SUBDIR,
            output_dir,
            semaphore=semaphore,
            timeout=config.request_timeout,
        ),
        download_all_images(
            session,
            people,
            PERSON_IMAGE_FIELD,
            PERSON_IMAGE_SUBDIR,
            output_dir,
            semaphore=semaphore,
            timeout=config.request_timeout,
        ),
    )
    result.images = logo_stats + people_stats
    if result.images.failed:
        logger.warning(
            "%d image(s) could not be downloaded; remote URLs will be used",
            result.images.failed,
        )

    logger.info("Rendering templates...")
    env = create_environment(templates_dir)
    result.pages_written = render_pages(env, build_pages(site_data, config), output_dir)

    result.static_copied = copy_static_dirs(static_root, output_dir, STATIC_SUBDIRS)
    result.cname_copied = copy_cname(cname_path, output_dir)

    logger.info("Build complete! Output in %s", output_dir)
    return result


def run_from_config(config: Any, **kwargs: Any) -> BuildResult:
    """Synchronous wrapper around `build_site` for scripts and the CLI."""
    return asyncio.run(build_site(config, **kwargs))


__all__ = ["BuildResult", "build_site", "fetch_site_records", "run_from_config"]
