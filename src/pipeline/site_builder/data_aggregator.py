"""data_aggregator.py: shape fetched Airtable records into page view-models.

This module is the data-oriented step between the Airtable fetch and template
rendering. It splits investments by status, picks out board seats, separates
principals from advisors (in a fixed display order), computes the headline
stats shown on the home and portfolio pages, and assembles the per-page
contexts consumed by the renderer.

Design Principles
-----------------
- No network or file I/O and no rendering.
- Records stay plain dicts keyed by Airtable field name so templates can read
  any field the table grows without code changes.
- Vocabulary (status values, roles, advisor order, static figures) comes from
  `src/config.py`.

Usage
-----
>>> investments = [
...     {"Name": "Acme", "Status": "Active", "Board Seat": "Yes", "Location": "Austin, TX"},
...     {"Name": "Birch", "Status": "Exited", "Location": "Calgary, AB, Canada"},
... ]
>>> stats = compute_stats(investments)
>>> [s["Number"] for s in stats["portfolio"]][3:]
['2', '1']
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from src.config import (
    ACTIVE_SEARCH_FUNDS,
    ADVISOR_DISPLAY_ORDER,
    ADVISOR_ROLES,
    BOARD_SEAT_YES,
    COMBINED_REVENUE,
    CONTACT_ATTACHMENT_FIELD,
    CONTACT_EMAIL,
    CONTACT_TABLE,
    ROLE_PRINCIPAL,
    STATUS_ACTIVE,
    STATUS_EXITED,
)

Record = dict[str, Any]

_UNLISTED_ADVISOR_RANK = 999


@dataclass
class SiteData:
    """All record groupings and stats needed to render the site."""

    investments: list[Record]
    active_investments: list[Record]
    exited_investments: list[Record]
    board_seats: list[Record]
    team_members: list[Record]
    advisors: list[Record]
    stats: dict[str, list[dict[str, str]]]


@dataclass
class PageSpec:
    """One page to render: template, output file name and context."""

    template: str
    output: str
    context: dict[str, Any] = field(default_factory=dict)


def split_investments(investments: Sequence[Record]) -> tuple[list[Record], list[Record]]:
    """Split investments into ``(active, exited)`` by their ``Status`` field.

    Records with any other status appear in neither list.
    """
    active = [c for c in investments if c.get("Status") == STATUS_ACTIVE]
    exited = [c for c in investments if c.get("Status") == STATUS_EXITED]
    return active, exited


def board_seat_investments(investments: Sequence[Record]) -> list[Record]:
    """Return the investments where the fund holds a board seat."""
    return [c for c in investments if c.get("Board Seat") == BOARD_SEAT_YES]


def split_people(
    people: Sequence[Record],
    advisor_order: Sequence[str] = ADVISOR_DISPLAY_ORDER,
) -> tuple[list[Record], list[Record]]:
    """Split people into ``(team_members, advisors)`` by ``Role``.

    Principals keep the order the API returned them in. Advisory board
    members and collaborators are ordered by their position in
    ``advisor_order``; names not listed there follow, in fetch order.

    Examples
    --------
    >>> people = [
    ...     {"Name": "Zed", "Role": "Collaborator"},
    ...     {"Name": "David Croll", "Role": "Advisory Board"},
    ...     {"Name": "Pat", "Role": "Principal"},
    ...     {"Name": "Jon Davis", "Role": "Advisory Board"},
    ... ]
    >>> team, advisors = split_people(people)
    >>> [p["Name"] for p in team], [p["Name"] for p in advisors]
    (['Pat'], ['Jon Davis', 'David Croll', 'Zed'])
    """
    ranks = {name: index for index, name in enumerate(advisor_order)}
    team_members = [p for p in people if p.get("Role") == ROLE_PRINCIPAL]
    advisors = sorted(
        (p for p in people if p.get("Role") in ADVISOR_ROLES),
        key=lambda p: ranks.get(p.get("Name", ""), _UNLISTED_ADVISOR_RANK),
    )
    return team_members, advisors


def region_from_location(location: Any) -> str | None:
    """Extract the state/province part of a ``Location`` value.

    ``"City, State"`` yields the last part; ``"City, State, Country"`` (or
    longer) yields the second-to-last part. Values with fewer than two parts,
    or that are not strings, yield ``None``.

    Examples
    --------
    >>> region_from_location("Austin, TX")
    'TX'
    >>> region_from_location("Calgary, AB, Canada")
    'AB'
    >>> region_from_location("Remote") is None
    True
    """
    if not isinstance(location, str) or not location:
        return None
    parts = location.split(", ")
    if len(parts) < 2:
        return None
    return parts[-2] if len(parts) > 2 else parts[-1]


def compute_stats(
    investments: Sequence[Record],
    combined_revenue: str = COMBINED_REVENUE,
    active_search_funds: str = ACTIVE_SEARCH_FUNDS,
) -> dict[str, list[dict[str, str]]]:
    r"""Compute the headline stats for the home and portfolio pages.

    Parameters
    ----------
    investments : sequence of dict
        Investment records as fetched.
    combined_revenue : str, optional
        Display figure for combined portfolio revenue (not tracked in Airtable).
    active_search_funds : str, optional
        Display figure for active search funds (not tracked in Airtable).

    Returns
    -------
    dict
        ``{"home": [...], "portfolio": [...]}`` where each entry is a list of
        ``{"Number": str, "Label": str}``. Home carries three stats; portfolio
        adds the unique region count and the board seat count.

    Notes
    -----
    Missing fields count as non-matching. Regions are counted across all
    investments, exited ones included.
    """
    frame = pd.DataFrame.from_records(list(investments))
    for column in ("Status", "Board Seat", "Location"):
        if column not in frame.columns:
            frame[column] = None

    active_count = int((frame["Status"] == STATUS_ACTIVE).sum())
    board_seat_count = int((frame["Board Seat"] == BOARD_SEAT_YES).sum())
    region_count = int(frame["Location"].map(region_from_location).dropna().nunique())

    home = [
        {"Number": f"{active_count}", "Label": "Active Companies"},
        {"Number": combined_revenue, "Label": "Combined Revenue"},
        {"Number": active_search_funds, "Label": "Active Search Funds"},
    ]
    portfolio = home + [
        {"Number": f"{region_count}", "Label": "States & Provinces"},
        {"Number": f"{board_seat_count}", "Label": "Board Seats"},
    ]
    return {"home": home, "portfolio": portfolio}


def build_site_data(
    investments: Sequence[Record],
    people: Sequence[Record],
    advisor_order: Sequence[str] = ADVISOR_DISPLAY_ORDER,
) -> SiteData:
    """Group fetched records and compute stats in one pass."""
    active, exited = split_investments(investments)
    team_members, advisors = split_people(people, advisor_order)
    return SiteData(
        investments=list(investments),
        active_investments=active,
        exited_investments=exited,
        board_seats=board_seat_investments(investments),
        team_members=team_members,
        advisors=advisors,
        stats=compute_stats(investments),
    )


def build_pages(site_data: SiteData, config: Any) -> list[PageSpec]:
    """Return the five pages of the site with their template contexts.

    ``config`` supplies the base id, form token and API URLs that the contact
    page hands to the browser script.
    """
    contact_config = {
        "pat": config.form_pat,
        "baseId": config.base_id,
        "apiUrl": config.api_url,
        "contentUrl": config.content_url,
        "table": CONTACT_TABLE,
        "attachmentField": CONTACT_ATTACHMENT_FIELD,
    }
    return [
        PageSpec(
            "index.html",
            "index.html",
            {"active_page": "index", "stats": site_data.stats["home"]},
        ),
        PageSpec(
            "portfolio.html",
            "portfolio.html",
            {
                "active_page": "portfolio",
                "stats": site_data.stats["portfolio"],
                "active_investments": site_data.active_investments,
                "exited_investments": site_data.exited_investments,
                "all_investments": site_data.investments,
            },
        ),
        PageSpec(
            "about.html",
            "about.html",
            {
                "active_page": "about",
                "team_members": site_data.team_members,
                "advisors": site_data.advisors,
                "board_seats": site_data.board_seats,
            },
        ),
        PageSpec(
            "contact.html",
            "contact.html",
            {
                "active_page": "contact",
                "airtable_config": contact_config,
                "contact_email": CONTACT_EMAIL,
            },
        ),
        PageSpec("login.html", "login.html", {"active_page": "login"}),
    ]
