"""airtable.client module.

This module defines the `AirtableClient` class, the asynchronous networking
boundary for reading website tables from the Airtable records API. It builds
table URLs and query strings, follows the API's ``offset`` pagination until a
table is exhausted, and returns the ``fields`` mapping of every record.

Unlike a best-effort client, a failed read is fatal to the build: every
failure mode is raised as an exception from the project taxonomy
(`src/exceptions.py`) and the orchestrator lets it abort the run. Requests
are never retried.

Examples
--------
>>> import aiohttp
>>> from aiolimiter import AsyncLimiter
>>> from src.pipeline.airtable.client import AirtableClient
>>> class DummyConfig:
...     api_url = "https://api.airtable.com/v0"
...     base_id = "appXXXX"
...     pat = "secret"
...     request_timeout = 10
>>> client = AirtableClient(DummyConfig())
>>> async def main():
...     async with aiohttp.ClientSession() as session:
...         return await client.fetch_table(session, "Website - People")
>>> # To actually run:
>>> # import asyncio; asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import aiohttp
from aiolimiter import AsyncLimiter

from src.exceptions import (
    APIRateLimitError,
    DataValidationError,
    ExternalServiceError,
    TimeoutExceededError,
)

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def build_table_url(api_url: str, base_id: str, table_name: str) -> str:
    """Return the records endpoint for ``table_name``.

    The table name is percent-encoded as a single path segment, so names
    containing spaces or slashes are safe.

    Examples
    --------
    >>> build_table_url("https://api.airtable.com/v0", "app1", "Website - People")
    'https://api.airtable.com/v0/app1/Website%20-%20People'
    """
    return f"{api_url.rstrip('/')}/{base_id}/{quote(table_name, safe='')}"


def build_query_params(
    sort: Sequence[dict[str, str]] | None = None,
    filter_by_formula: str | None = None,
    view: str | None = None,
    offset: str | None = None,
) -> list[tuple[str, str]]:
    """Build the ordered query parameters for a table page request.

    Parameters
    ----------
    sort : sequence of dict, optional
        Entries with a ``field`` key and an optional ``direction`` key
        (``asc`` when omitted).
    filter_by_formula : str, optional
        Airtable formula restricting the returned records.
    view : str, optional
        Name of a table view to read through.
    offset : str, optional
        Pagination cursor returned by the previous page.

    Returns
    -------
    list[tuple[str, str]]
        Key/value pairs in the order they are sent.

    Examples
    --------
    >>> build_query_params(sort=[{"field": "Acquired Date"}], offset="itr1")
    [('sort[0][field]', 'Acquired Date'), ('sort[0][direction]', 'asc'), ('offset', 'itr1')]
    """
    params: list[tuple[str, str]] = []
    for index, entry in enumerate(sort or ()):
        params.append((f"sort[{index}][field]", entry["field"]))
        params.append((f"sort[{index}][direction]", entry.get("direction") or "asc"))
    if filter_by_formula:
        params.append(("filterByFormula", filter_by_formula))
    if view:
        params.append(("view", view))
    if offset:
        params.append(("offset", offset))
    return params


class AirtableClient:
    r"""Asynchronous reader for Airtable tables.

    Attributes
    ----------
    config : Any
        Configuration object (normally `AirtableConfig`) supplying ``api_url``,
        ``base_id``, ``pat`` and ``request_timeout``.

    See Also
    --------
    src.pipeline.airtable.config.AirtableConfig : Source of the attributes.
    src.pipeline.site_builder.runner.build_site : Fetches both website tables
        concurrently through one client and one rate limiter.
    """

    def __init__(self, config: Any) -> None:
        self.config = config

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.config.pat}"}

    async def fetch_table(
        self,
        session: aiohttp.ClientSession,
        table_name: str,
        *,
        sort: Sequence[dict[str, str]] | None = None,
        filter_by_formula: str | None = None,
        view: str | None = None,
        rate_limiter: AsyncLimiter | None = None,
    ) -> list[Record]:
        r"""Fetch every record of a table, following pagination to the end.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Session used for the requests. Used and not closed by this method.
        table_name : str
            Display name of the table, e.g. ``"Website - Investments"``.
        sort, filter_by_formula, view
            Forwarded to `build_query_params` on every page request.
        rate_limiter : AsyncLimiter, optional
            Shared limiter awaited before each page request.

        Returns
        -------
        list[dict[str, Any]]
            The ``fields`` mapping of each record, in API order across pages.

        Raises
        ------
        APIRateLimitError
            If the API answers HTTP 429.
        ExternalServiceError
            For any other non-200 status or a network failure.
        TimeoutExceededError
            If a page request exceeds ``config.request_timeout``.
        DataValidationError
            If a page body is not a JSON object with a ``records`` list.
        """
        url = build_table_url(self.config.api_url, self.config.base_id, table_name)
        records: list[Record] = []
        offset: str | None = None
        page = 0
        while True:
            params = build_query_params(sort, filter_by_formula, view, offset)
            if rate_limiter is not None:
                async with rate_limiter:
                    payload = await self._get_page(session, url, params, table_name)
            else:
                payload = await self._get_page(session, url, params, table_name)
            page += 1
            records.extend(
                record.get("fields", {}) or {} for record in payload["records"]
            )
            offset = payload.get("offset") or None
            logger.debug(
                "Fetched page %d of %r (%d records so far)", page, table_name, len(records)
            )
            if not offset:
                break
        return records

    async def _get_page(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: list[tuple[str, str]],
        table_name: str,
    ) -> dict[str, Any]:
        context = {"table": table_name}
        try:
            async with session.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
            ) as response:
                status = response.status
                text = await response.text()
        except asyncio.TimeoutError as exc:
            raise TimeoutExceededError(
                f'Airtable request for "{table_name}" timed out', context=context
            ) from exc
        except aiohttp.ClientError as exc:
            raise ExternalServiceError(
                f'Airtable request for "{table_name}" failed: {exc}', context=context
            ) from exc

        if status == 429:
            raise APIRateLimitError(
                f'Airtable rate limit hit for "{table_name}"',
                context={**context, "status_code": status},
            )
        if status != 200:
            raise ExternalServiceError(
                f'Airtable API error for "{table_name}": {status} {text}',
                context={**context, "status_code": status},
                transient=status >= 500,
            )
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DataValidationError(
                f'Airtable returned invalid JSON for "{table_name}"', context=context
            ) from exc
        if not isinstance(payload, dict) or not isinstance(
            payload.get("records"), list
        ):
            raise DataValidationError(
                f'Airtable response for "{table_name}" has no records list',
                context=context,
            )
        return payload
