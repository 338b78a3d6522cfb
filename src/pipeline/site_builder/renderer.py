"""Website rendering utilities for the static fund site.

This module turns page contexts prepared by `data_aggregator` into HTML files
using Jinja2 templates. Pages extend ``base.html`` and pull shared fragments
(head, navigation, footer, stat strip, cards) from ``templates/partials/``
with ``{% include %}``. View helpers from `filters` are registered on the
environment.

System Boundaries
-----------------
- Accepts already aggregated data; knows nothing about Airtable.
- Autoescaping is on for ``.html`` templates; helpers that emit markup
  return ``markupsafe.Markup``.
- Write errors propagate so a half-written site fails the build.

Example
-------
>>> from src.config import TEMPLATES_DIR
>>> env = create_environment(TEMPLATES_DIR)
>>> html = render_page(env, "login.html", {"active_page": "login"})
>>> "<html" in html
True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Undefined,
    select_autoescape,
)

from .data_aggregator import PageSpec
from .filters import FILTERS

logger = logging.getLogger(__name__)


def create_environment(templates_dir: Path, *, strict: bool = False) -> Environment:
    r"""Build the Jinja2 environment for the site templates.

    Parameters
    ----------
    templates_dir : Path
        Directory containing the page templates and the ``partials/`` folder.
    strict : bool, optional
        Raise on undefined variables instead of rendering them empty. Useful
        in tests; the build leaves it off because Airtable omits empty fields.

    Returns
    -------
    jinja2.Environment
        Environment with autoescaping and the site filters registered.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined if strict else Undefined,
    )
    env.filters.update(FILTERS)
    return env


def render_page(env: Environment, template_name: str, context: Mapping[str, Any]) -> str:
    """Render ``template_name`` with ``context``."""
    return env.get_template(template_name).render(**context)


def write_html_output(html_content: str, output_file: Path) -> None:
    r"""Write rendered HTML to disk, creating parent directories.

    Output encoding is UTF-8. I/O errors propagate to the caller.

    Examples
    --------
    >>> import tempfile
    >>> from pathlib import Path
    >>> target = Path(tempfile.gettempdir()) / "site" / "test_page.html"
    >>> write_html_output("<html><body>Test</body></html>", target)
    >>> target.read_text(encoding="utf-8")
    '<html><body>Test</body></html>'
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(html_content, encoding="utf-8")


def render_pages(env: Environment, pages: Iterable[PageSpec], output_dir: Path) -> list[str]:
    """Render and write every page; return the written file names in order."""
    written: list[str] = []
    for page in pages:
        html = render_page(env, page.template, page.context)
        write_html_output(html, Path(output_dir) / page.output)
        logger.info("Wrote %s", page.output)
        written.append(page.output)
    return written
