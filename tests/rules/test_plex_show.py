"""Tests for the Plex TV show verifier."""

import pytest

from shelfscan.models.core import DiagnosticKind, MediaType
from shelfscan.rules.base import VerifierConfig
from shelfscan.rules.plex import PlexMovieVerifier, PlexShowVerifier, get_verifier

ROOT = "/library/TV Shows"


def kinds(result) -> list[DiagnosticKind]:
    return [diagnostic.kind for diagnostic in result.diagnostics]


@pytest.fixture
def verifier() -> PlexShowVerifier:
    """Create a PlexShowVerifier for testing."""
    return PlexShowVerifier()


@pytest.mark.parametrize(
    "path",
    [
        f"{ROOT}/Grey's Anatomy (2005)/Season 01/Grey's Anatomy (2005) - s01e01 - Pilot.mkv",
        f"{ROOT}/Grey's Anatomy (2005)/Season 1/Grey's Anatomy (2005) - S01E02.mkv",
        f"{ROOT}/Grey's Anatomy (2005)/Season 02/Grey's Anatomy (2005) - s02e01-e02.mkv",
        f"{ROOT}/Grey's Anatomy (2005)/Specials/Grey's Anatomy (2005) - s00e01.mkv",
        f"{ROOT}/Grey's Anatomy (2005)/Grey's Anatomy (2005) - s01e03.mkv",
        f"{ROOT}/Grey's Anatomy (2005) {{tvdb-73762}}/Season 01/"
        "Grey's Anatomy (2005) - s01e04.mkv",
        f"{ROOT}/Grey's Anatomy (2005) [HD]/Season 01 [x265]/"
        "Grey's Anatomy (2005) - s01e05 - The Self-Destruct Button [1080p].mkv",
    ],
)
def test_valid_episodes(verifier: PlexShowVerifier, path: str) -> None:
    result = verifier.verify(path, ROOT)
    assert result.is_valid, result.diagnostics


def test_extras_are_skipped(verifier: PlexShowVerifier) -> None:
    assert verifier.verify(f"{ROOT}/Show/Featurettes/making of.mkv", ROOT).is_valid
    assert verifier.verify(f"{ROOT}/Show/Show-interview.mp4", ROOT).is_valid


def test_edition_tag_not_allowed(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Show/Season 01/Show - s01e01 {{edition-Cut}}.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.INVALID_TAG]
    assert result.diagnostics[0].context["prefixes"] == "tvdb-, imdb-, or tmdb-"


def test_unparseable_name(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Show/Season 01/Show 1x01.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.STRUCTURAL_MISMATCH]
    assert "Show Name - s01e01 - Episode Title" in result.diagnostics[0].message


def test_episode_numbers_must_be_ascii(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Show/Season 01/Show - s٠١e٠١.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.STRUCTURAL_MISMATCH]


def test_episode_at_root(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Show - s01e01.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.ROOT_LEVEL_EPISODE]
    assert result.diagnostics[0].context["expected"] == "Show/Season 01/Show - s01e01.mkv"


def test_season_folder_at_root(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Season 01/Show - s01e01.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.ROOT_LEVEL_EPISODE]


def test_wrong_season_folder(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Show/Season 02/Show - s01e01.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.SEASON_FOLDER_MISMATCH]
    assert result.diagnostics[0].message == (
        "Season folder 'Season 02' does not match season 1. Expected 'Season 01'"
    )


def test_special_outside_specials(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Show/Season 01/Show - s00e01.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.SEASON_FOLDER_MISMATCH]
    assert result.diagnostics[0].context["expected"] == "Specials"


def test_wrong_show_folder(verifier: PlexShowVerifier) -> None:
    result = verifier.verify(f"{ROOT}/Other Show/Season 01/Show - s01e01.mkv", ROOT)
    assert kinds(result) == [DiagnosticKind.FOLDER_MISMATCH]
    assert result.diagnostics[0].context == {"actual": "Other Show", "expected": "Show"}


def test_collect_all_reports_season_and_show() -> None:
    verifier = PlexShowVerifier(VerifierConfig(collect_all=True))
    result = verifier.verify(f"{ROOT}/Other/Season 03/Show - s01e01.mkv", ROOT)
    assert kinds(result) == [
        DiagnosticKind.SEASON_FOLDER_MISMATCH,
        DiagnosticKind.FOLDER_MISMATCH,
    ]


def test_get_verifier() -> None:
    assert isinstance(get_verifier(MediaType.MOVIE), PlexMovieVerifier)
    assert isinstance(get_verifier(MediaType.TV), PlexShowVerifier)
    assert get_verifier(MediaType.TV).media_type == MediaType.TV
    config = VerifierConfig(collect_all=True)
    assert get_verifier(MediaType.MOVIE, config).config is config
