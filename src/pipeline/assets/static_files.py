"""Static asset copying for the site build.

Copies the hand-maintained asset directories (css, js, images) and the
optional ``CNAME`` domain-pinning file into the output directory. Only file
I/O; nothing here talks to the network.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_static_dirs(
    source_root: Path, dest_root: Path, names: Iterable[str]
) -> list[str]:
    """Recursively copy each named directory from ``source_root`` to ``dest_root``.

    Missing source directories are skipped. Existing destination directories
    are merged into, so downloaded images already in ``dest_root/images``
    survive the copy.

    Parameters
    ----------
    source_root : Path
        Directory holding the asset directories.
    dest_root : Path
        Output root.
    names : iterable of str
        Directory names to copy, e.g. ``("css", "js", "images")``.

    Returns
    -------
    list[str]
        Names of the directories that were copied.
    """
    copied: list[str] = []
    for name in names:
        src = Path(source_root) / name
        if not src.is_dir():
            logger.debug("Static directory %s not found, skipping", src)
            continue
        shutil.copytree(src, Path(dest_root) / name, dirs_exist_ok=True)
        copied.append(name)
    return copied


def copy_cname(cname_path: Path, dest_root: Path) -> bool:
    """Copy the custom-domain file into the output root when it exists."""
    cname_path = Path(cname_path)
    if not cname_path.is_file():
        return False
    Path(dest_root).mkdir(parents=True, exist_ok=True)
    shutil.copyfile(cname_path, Path(dest_root) / "CNAME")
    return True
