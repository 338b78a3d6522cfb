"""Asset handling for the site build: image downloads and static file copies."""

from __future__ import annotations

from .images import (
    ImageDownloadStats,
    attachment_extension,
    download_all_images,
    download_image,
    slugify,
    unique_filename,
)
from .static_files import copy_cname, copy_static_dirs

__all__ = [
    "ImageDownloadStats",
    "attachment_extension",
    "copy_cname",
    "copy_static_dirs",
    "download_all_images",
    "download_image",
    "slugify",
    "unique_filename",
]
