"""Configuration and environment loader for the Airtable client.

This module provides AirtableConfig, which loads, validates, and exposes all
configuration the site build needs to reach the hosted data API: the personal
access token, the base identifier, endpoint overrides and the request limits.

Role in Architecture
--------------------
- Forms the boundary between the process environment (shell, CI secrets or a
  local ``.env`` file) and the pipeline's runtime config.
- No client or rendering logic: only loading, structuring and validation.

Examples
--------
>>> import os
>>> os.environ["AIRTABLE_PAT"] = "pat-test"
>>> os.environ["AIRTABLE_BASE_ID"] = "appTEST"
>>> from src.pipeline.airtable.config import AirtableConfig
>>> cfg = AirtableConfig()
>>> cfg.base_id
'appTEST'
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

import src.config as _project_config
from src.config import (
    AIRTABLE_API_URL,
    AIRTABLE_CONTENT_URL,
    DEFAULT_MAX_CONCURRENT_DOWNLOADS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_REQUESTS_PER_SECOND,
)
from src.exceptions import ConfigurationError

REQUIRED_ENV_KEYS: tuple[str, ...] = ("AIRTABLE_PAT", "AIRTABLE_BASE_ID")


class AirtableConfig:
    r"""Configuration loader and validator for the Airtable data source.

    Attributes
    ----------
    pat : str
        Personal access token used as the bearer credential for table reads.
    base_id : str
        Identifier of the Airtable base holding the website tables.
    form_pat : str
        Token embedded in the contact page for browser-side record creation.
        Falls back to ``pat`` when ``AIRTABLE_FORM_PAT`` is unset.
    api_url : str
        Base URL of the records API.
    content_url : str
        Base URL of the attachment upload API.
    requests_per_second : int
        Rate limit applied to table reads.
    request_timeout : int
        Timeout (seconds) for each HTTP request, image downloads included.
    max_concurrent_downloads : int
        Upper bound on simultaneous image downloads.

    Notes
    -----
    Instantiate once at process start. No runtime mutation is intended.
    """

    def __init__(self) -> None:
        r"""Load and validate the Airtable configuration.

        Reads ``<PROJECT_ROOT>/.env`` when present, then the process
        environment. Variables already set in the environment take precedence
        over the file.

        Raises
        ------
        ConfigurationError
            If ``AIRTABLE_PAT`` or ``AIRTABLE_BASE_ID`` is missing or blank, or
            if a numeric setting cannot be parsed.

        Examples
        --------
        >>> import os
        >>> for key in ("AIRTABLE_PAT", "AIRTABLE_BASE_ID"):
        ...     _ = os.environ.pop(key, None)
        >>> try:
        ...     AirtableConfig()
        ... except ConfigurationError as e:
        ...     assert "AIRTABLE_PAT" in e.message
        """
        # Resolved through the module so tests can monkeypatch PROJECT_ROOT.
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)

        missing = [key for key in REQUIRED_ENV_KEYS if not os.getenv(key, "").strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                context={"missing": missing},
            )

        self.pat: str = os.environ["AIRTABLE_PAT"].strip()
        self.base_id: str = os.environ["AIRTABLE_BASE_ID"].strip()
        self.form_pat: str = os.getenv("AIRTABLE_FORM_PAT", "").strip() or self.pat
        self.api_url: str = os.getenv("AIRTABLE_API_URL", AIRTABLE_API_URL).rstrip("/")
        self.content_url: str = os.getenv(
            "AIRTABLE_CONTENT_URL", AIRTABLE_CONTENT_URL
        ).rstrip("/")
        self.requests_per_second = _int_from_env(
            "AIRTABLE_REQUESTS_PER_SECOND", DEFAULT_REQUESTS_PER_SECOND
        )
        self.request_timeout = _int_from_env("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)
        self.max_concurrent_downloads = _int_from_env(
            "MAX_CONCURRENT_DOWNLOADS", DEFAULT_MAX_CONCURRENT_DOWNLOADS
        )


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{key} must be an integer, got {raw!r}", context={"key": key}
        ) from exc
    if value < 1:
        raise ConfigurationError(f"{key} must be at least 1", context={"key": key})
    return value
