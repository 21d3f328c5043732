"""Tests for the settings resolver and the debug logging helpers."""

import logging
from pathlib import Path

import pytest

from shelfscan.utils import config as cfg
from shelfscan.utils import debug as dbg
from shelfscan.utils import resolve_setting


def write_config(config_dir: Path, text: str) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.toml").write_text(text, encoding="utf-8")


def test_env_var_name() -> None:
    assert cfg._make_env_var_name("scan.extensions") == "SHELFSCAN_SCAN_EXTENSIONS"
    assert cfg._make_env_var_name("report.all_diagnostics") == (
        "SHELFSCAN_REPORT_ALL_DIAGNOSTICS"
    )


def test_default_when_nothing_set() -> None:
    assert resolve_setting("movie.embedded_tags", default=True) is True
    assert resolve_setting("scan.extensions", default=[".mkv"]) == [".mkv"]


def test_precedence(isolated_settings: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_config(isolated_settings, "[report]\nall_diagnostics = true\n")
    assert resolve_setting("report.all_diagnostics", default=False) is True

    monkeypatch.setenv("SHELFSCAN_REPORT_ALL_DIAGNOSTICS", "no")
    assert resolve_setting("report.all_diagnostics", default=False) is False

    assert (
        resolve_setting("report.all_diagnostics", default=False, cli_value=True) is True
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), ("on", True), ("0", False), ("off", False)],
)
def test_bool_from_env(raw: str, expected: bool, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHELFSCAN_MOVIE_EMBEDDED_TAGS", raw)
    assert resolve_setting("movie.embedded_tags", default=not expected) is expected


def test_list_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHELFSCAN_SCAN_EXCLUDED_FOLDERS", "Plex Versions, @eaDir,")
    assert resolve_setting("scan.excluded_folders", default=["Plex Versions"]) == [
        "Plex Versions",
        "@eaDir",
    ]


def test_list_from_config(isolated_settings: Path) -> None:
    write_config(isolated_settings, '[scan]\nextensions = [".mkv", ".m4v"]\n')
    assert resolve_setting("scan.extensions", default=[".mkv"]) == [".mkv", ".m4v"]


def test_wrong_type_in_config_falls_back(isolated_settings: Path) -> None:
    write_config(isolated_settings, "[scan]\nextensions = 3\n")
    assert resolve_setting("scan.extensions", default=[".mkv"]) == [".mkv"]


def test_missing_nested_key(isolated_settings: Path) -> None:
    write_config(isolated_settings, 'scan = "flat"\n')
    assert resolve_setting("scan.extensions", default=[".avi"]) == [".avi"]


def test_debug_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    assert dbg.debug_enabled() is False
    monkeypatch.setenv("SHELFSCAN_DEBUG", "1")
    assert dbg.debug_enabled() is True


def test_log_helpers_use_package_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = dbg.setup_logger()
    assert logger.name == "shelfscan"
    assert dbg.setup_logger() is logger

    caplog.set_level(logging.DEBUG, logger="shelfscan")
    dbg.debug("debug msg")
    dbg.info("info msg")
    dbg.warn("warn msg")
    dbg.error("error msg")

    assert [(r.levelname, r.getMessage()) for r in caplog.records] == [
        ("DEBUG", "debug msg"),
        ("INFO", "info msg"),
        ("WARNING", "warn msg"),
        ("ERROR", "error msg"),
    ]
