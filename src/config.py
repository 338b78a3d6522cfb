"""Global configuration constants for the project.

Defines paths, Airtable table names, field vocabulary and static site
figures used across the pipeline.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
LOG_DIR: Path = PROJECT_ROOT / "logs"
TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"
STATIC_DIR: Path = PROJECT_ROOT / "static"
OUTPUT_DIR: Path = PROJECT_ROOT / "dist"
CNAME_FILE: Path = PROJECT_ROOT / "CNAME"

# Static directories copied verbatim into the output tree
STATIC_SUBDIRS: tuple[str, ...] = ("css", "js", "images")

# Airtable endpoints and defaults
AIRTABLE_API_URL: str = "https://api.airtable.com/v0"
AIRTABLE_CONTENT_URL: str = "https://content.airtable.com/v0"
DEFAULT_REQUESTS_PER_SECOND: int = 5
DEFAULT_REQUEST_TIMEOUT: int = 30
DEFAULT_MAX_CONCURRENT_DOWNLOADS: int = 8

# Airtable tables
INVESTMENTS_TABLE: str = "Website - Investments"
PEOPLE_TABLE: str = "Website - People"
CONTACT_TABLE: str = "Website - Contact"
CONTACT_ATTACHMENT_FIELD: str = "Attachment"

# Record vocabulary
STATUS_ACTIVE: str = "Active"
STATUS_EXITED: str = "Exited"
BOARD_SEAT_YES: str = "Yes"
ROLE_PRINCIPAL: str = "Principal"
ADVISOR_ROLES: tuple[str, ...] = ("Advisory Board", "Collaborator")
ADVISOR_DISPLAY_ORDER: tuple[str, ...] = (
    "Jon Davis",
    "David Croll",
    "Scott Hutchins",
    "Alfonso Blohm",
)
INVESTMENT_SORT_FIELD: str = "Acquired Date"

# Image attachments
LOGO_FIELD: str = "Logo"
LOGO_SUBDIR: str = "logos"
PERSON_IMAGE_FIELD: str = "Image"
PERSON_IMAGE_SUBDIR: str = "people"
DEFAULT_IMAGE_MIME: str = "image/jpeg"
FALLBACK_IMAGE_EXTENSION: str = "jpg"
FALLBACK_SLUG: str = "untitled"

# Figures not tracked in Airtable
COMBINED_REVENUE: str = "$150M+"
ACTIVE_SEARCH_FUNDS: str = "30+"
CONTACT_EMAIL: str = "info@davismacleodfund.com"

# Logging
LOG_FILENAME_BUILD_SITE: str = "build_site.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
