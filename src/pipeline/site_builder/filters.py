"""View helpers registered as Jinja2 filters on the site environment.

Every filter accepts missing values (``None``, empty strings, empty lists)
because Airtable omits empty fields from records entirely.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from markupsafe import Markup, escape

from .icons import ICON_MAP

_PARAGRAPH_BREAK = re.compile(r"\n\n+")


def paragraphs(text: str | None) -> Markup:
    """Render multi-paragraph text as escaped ``<p>`` elements.

    Paragraphs after the first carry ``class="mt-4"`` for spacing.

    Examples
    --------
    >>> str(paragraphs("One\\n\\nTwo & three"))
    '<p>One</p>\\n          <p class="mt-4">Two &amp; three</p>'
    """
    if not text:
        return Markup("")
    rendered = [
        Markup('<p{}>{}</p>').format(
            Markup(' class="mt-4"') if index > 0 else "", escape(chunk)
        )
        for index, chunk in enumerate(_PARAGRAPH_BREAK.split(text))
    ]
    return Markup("\n          ").join(rendered)


def delay_class(index: int) -> str:
    """Cycle fade-in delays over four steps: ``delay-1`` .. ``delay-4``."""
    return f"delay-{(int(index) % 4) + 1}"


def svg_icon(name: str | None) -> Markup:
    """Return inline SVG markup for ``name``, or empty markup if unknown."""
    return Markup(ICON_MAP.get(name or "", ""))


def year(date_str: str | None) -> str:
    """Return the year of an ISO date string such as ``"2021-10-22"``."""
    if not date_str:
        return ""
    return str(date_str)[:4]


def logo_url(attachments: Sequence[dict[str, Any]] | None) -> str:
    """Prefer the downloaded copy of the first attachment, else its remote URL."""
    if not attachments:
        return ""
    first = attachments[0]
    return first.get("local_path") or first.get("url") or ""


def has_logo(attachments: Sequence[dict[str, Any]] | None) -> bool:
    return bool(attachments)


FILTERS = {
    "paragraphs": paragraphs,
    "delay_class": delay_class,
    "svg_icon": svg_icon,
    "year": year,
    "logo_url": logo_url,
    "has_logo": has_logo,
}
