"""The airtable package is the hosted-data boundary of the site build.

It holds the configuration loader for the Airtable credentials and the
asynchronous, paginated table reader. Nothing in this package renders or
writes files.

Modules exported
----------------
AirtableClient
    Paginated, rate-limited reader returning each record's ``fields``.
AirtableConfig
    Environment and ``.env`` loader with validation of required keys.
build_query_params, build_table_url
    URL helpers shared by the client and its tests.

Examples
--------
>>> from src.pipeline.airtable import AirtableClient, AirtableConfig
>>> client = AirtableClient(AirtableConfig())  # doctest: +SKIP
"""

from __future__ import annotations

from .client import AirtableClient, build_query_params, build_table_url
from .config import AirtableConfig

__all__ = [
    "AirtableClient",
    "AirtableConfig",
    "build_query_params",
    "build_table_url",
]
