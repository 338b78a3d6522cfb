"""Tests for the root launcher script."""

import pytest

import build_site
from src.pipeline.site_builder import cli


def test_parse_cli_args_delegates_to_cli_parser(tmp_path):
    args = build_site.parse_cli_args(["--output", str(tmp_path), "--no-summary"])
    assert args.output == tmp_path
    assert args.no_summary is True


def test_entry_point_exits_with_run_status(monkeypatch):
    monkeypatch.setattr(cli, "run", lambda args: 0)
    with pytest.raises(SystemExit) as excinfo:
        build_site.entry_point(["--no-summary"])
    assert excinfo.value.code == 0


def test_entry_point_missing_env_exits_1(airtable_env, monkeypatch):
    monkeypatch.delenv("AIRTABLE_BASE_ID")
    with pytest.raises(SystemExit) as excinfo:
        build_site.entry_point(["--no-summary"])
    assert excinfo.value.code == 1
