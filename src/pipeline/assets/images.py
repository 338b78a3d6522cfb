"""Download record image attachments into the output tree.

Airtable attachment URLs expire after a few hours, so the build copies each
record's first image (company logo, person portrait) next to the generated
pages and records the output-relative path on the attachment as
``local_path``. A failed download never stops the build: it is logged as a
warning and the attachment keeps its remote ``url``, which the templates use
as the fallback.

Examples
--------
>>> slugify("Acme Widgets, Inc.")
'acme-widgets-inc'
>>> attachment_extension("image/png")
'png'
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiohttp

from src.config import DEFAULT_IMAGE_MIME, FALLBACK_IMAGE_EXTENSION, FALLBACK_SLUG
from src.exceptions import AppError, ExternalServiceError

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


@dataclass
class ImageDownloadStats:
    """Outcome counts for one `download_all_images` call."""

    downloaded: int = 0
    failed: int = 0
    skipped: int = 0

    def __add__(self, other: "ImageDownloadStats") -> "ImageDownloadStats":
        return ImageDownloadStats(
            self.downloaded + other.downloaded,
            self.failed + other.failed,
            self.skipped + other.skipped,
        )


def slugify(name: str | None) -> str:
    """Turn a display name into a file-name-safe slug.

    Examples
    --------
    >>> slugify("  Jon Davis ")
    'jon-davis'
    >>> slugify("???")
    'untitled'
    """
    slug = _NON_SLUG_CHARS.sub("-", (name or "").lower()).strip("-")
    return slug or FALLBACK_SLUG


def attachment_extension(mime_type: str | None) -> str:
    """Derive a file extension from an attachment MIME type.

    Examples
    --------
    >>> attachment_extension(None)
    'jpeg'
    >>> attachment_extension("image/svg+xml")
    'svg'
    >>> attachment_extension("image/")
    'jpg'
    """
    parts = (mime_type or DEFAULT_IMAGE_MIME).split("/")
    subtype = parts[1] if len(parts) > 1 else ""
    return subtype.split("+")[0].strip().lower() or FALLBACK_IMAGE_EXTENSION


def unique_filename(slug: str, extension: str, used: set[str]) -> str:
    """Return ``<slug>.<extension>``, suffixed ``-2``, ``-3``... if already in ``used``.

    The chosen name is added to ``used``.

    Examples
    --------
    >>> used = set()
    >>> unique_filename("untitled", "png", used), unique_filename("untitled", "png", used)
    ('untitled.png', 'untitled-2.png')
    """
    filename = f"{slug}.{extension}"
    counter = 2
    while filename in used:
        filename = f"{slug}-{counter}.{extension}"
        counter += 1
    used.add(filename)
    return filename


async def download_image(
    session: aiohttp.ClientSession,
    url: str,
    dest_path: Path,
    timeout: int = 30,
) -> None:
    """Fetch ``url`` and write the response body to ``dest_path``.

    Raises
    ------
    ExternalServiceError
        If the server answers with a non-200 status.
    aiohttp.ClientError, asyncio.TimeoutError, OSError
        Propagated for the caller to log.
    """
    async with session.get(
        url, timeout=aiohttp.ClientTimeout(total=timeout)
    ) as response:
        if response.status != 200:
            raise ExternalServiceError(
                f"Failed to download image: {response.status}",
                context={"status_code": response.status},
            )
        data = await response.read()
    dest_path.write_bytes(data)


async def _download_attachment(
    session: aiohttp.ClientSession,
    record: dict[str, Any],
    attachment: dict[str, Any],
    dest_path: Path,
    local_path: str,
    semaphore: asyncio.Semaphore | None,
    timeout: int,
) -> bool:
    try:
        if semaphore is not None:
            async with semaphore:
                await download_image(session, attachment["url"], dest_path, timeout)
        else:
            await download_image(session, attachment["url"], dest_path, timeout)
    except (AppError, aiohttp.ClientError, asyncio.TimeoutError, OSError, KeyError) as exc:
        logger.warning(
            'Could not download image for "%s": %s', record.get("Name", ""), exc
        )
        return False
    attachment["local_path"] = local_path
    logger.info("Downloaded: %s", local_path)
    return True


async def download_all_images(
    session: aiohttp.ClientSession,
    records: Iterable[dict[str, Any]],
    field_name: str,
    sub_dir: str,
    dist_dir: Path,
    *,
    semaphore: asyncio.Semaphore | None = None,
    timeout: int = 30,
) -> ImageDownloadStats:
    r"""Download the first attachment of ``field_name`` for every record.

    Parameters
    ----------
    session : aiohttp.ClientSession
        Session used for the downloads.
    records : iterable of dict
        Records whose attachment lists are read and, on success, annotated
        with ``local_path``.
    field_name : str
        Attachment field, e.g. ``"Logo"``.
    sub_dir : str
        Directory under ``<dist_dir>/images`` that receives the files.
    dist_dir : Path
        Output root of the build.
    semaphore : asyncio.Semaphore, optional
        Bounds how many downloads run at once.
    timeout : int, optional
        Per-download timeout in seconds.

    Returns
    -------
    ImageDownloadStats
        Downloaded, failed and skipped (no attachment) counts.

    Notes
    -----
    Downloads run concurrently and all are awaited before returning. The
    file name is ``<slug of Name>.<extension from MIME type>``; records whose
    names share a slug get ``-2``, ``-3``... suffixes in fetch order.
    """
    image_dir = Path(dist_dir) / "images" / sub_dir
    image_dir.mkdir(parents=True, exist_ok=True)

    stats = ImageDownloadStats()
    downloads = []
    used_names: set[str] = set()
    for record in records:
        attachments = record.get(field_name)
        if not attachments:
            stats.skipped += 1
            continue
        attachment = attachments[0]
        filename = unique_filename(
            slugify(record.get("Name")),
            attachment_extension(attachment.get("type")),
            used_names,
        )
        local_path = f"images/{sub_dir}/{filename}"
        downloads.append(
            _download_attachment(
                session,
                record,
                attachment,
                image_dir / filename,
                local_path,
                semaphore,
                timeout,
            )
        )

    results = await asyncio.gather(*downloads)
    stats.downloaded = sum(1 for ok in results if ok)
    stats.failed = len(results) - stats.downloaded
    return stats
