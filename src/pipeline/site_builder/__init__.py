"""Site Builder Pipeline Module.

Summary
-------
Provides the import surface for turning fetched Airtable records into the
static fund website: record grouping and stats (`data_aggregator`), template
helpers (`filters`, `icons`), page rendering (`renderer`), the async build
pipeline (`runner`) and its command line (`cli`).

Usage
-----
    >>> from src.pipeline.site_builder import compute_stats
    >>> compute_stats([])["home"][0]
    {'Number': '0', 'Label': 'Active Companies'}
"""

from .data_aggregator import (
    PageSpec,
    SiteData,
    board_seat_investments,
    build_pages,
    build_site_data,
    compute_stats,
    region_from_location,
    split_investments,
    split_people,
)
from .renderer import create_environment, render_page, render_pages, write_html_output
from .runner import BuildResult, build_site, run_from_config

__all__ = [
    "BuildResult",
    "PageSpec",
    "SiteData",
    "board_seat_investments",
    "build_pages",
    "build_site",
    "build_site_data",
    "compute_stats",
    "create_environment",
    "region_from_location",
    "render_page",
    "render_pages",
    "run_from_config",
    "split_investments",
    "split_people",
    "write_html_output",
]
