"""Plex-specific naming verifiers for media files.

This module checks existing files against the Plex naming guides:
https://support.plex.tv/articles/naming-and-organizing-your-movie-files/
https://support.plex.tv/articles/naming-and-organizing-your-tv-show-files/

Design:
- Movie rules run in a fixed order: extras short-circuit, brace tags, core
  name pattern, year range, then either folder consistency (file inside a
  folder) or split-suffix placement (file at the library root).
- Tag and pattern failures stop the checks at once because nothing after them
  has a parsed name to work with. The remaining checks stop at the first
  failure unless VerifierConfig.collect_all is set.
- A single grammar serves both the strict form (brace tags kept in place after
  the year) and the lenient form (all annotations stripped before matching),
  selected by VerifierConfig.embedded_tags.

Folder names are compared after removing [annotations] and {imdb-}/{tmdb-}
tags, case-insensitively and with whitespace collapsed. The split suffix never
takes part in the comparison.
"""

import os
import re
from datetime import datetime
from typing import ClassVar, List, Optional, Self, Sequence

from shelfscan.models.core import (
    Diagnostic,
    DiagnosticKind,
    ExternalId,
    MediaPath,
    MediaType,
    NameComponents,
    SplitSuffix,
)
from shelfscan.rules.base import (
    Verifier,
    VerifierConfig,
    brace_tags,
    collapse_whitespace,
    strip_brackets,
    tag_content,
)
from shelfscan.rules.tables import (
    EDITION_PREFIX,
    MAX_YEAR_AHEAD,
    MEDIA_EXTENSIONS,
    MIN_YEAR,
    MOVIE_ID_PREFIXES,
    MOVIE_TAG_PREFIXES,
    SHOW_ID_PREFIXES,
    SHOW_TAG_PREFIXES,
    SPECIALS_FOLDER,
    SPLIT_TOKENS,
)

_SPLIT = r"(?P<split_token>{tokens})(?P<split_index>[0-9]+)".format(
    tokens="|".join(SPLIT_TOKENS)
)
_ID_SOURCES = "|".join(re.escape(prefix.rstrip("-")) for prefix in MOVIE_ID_PREFIXES)

# Title, year, optional id tag, optional edition tag, optional split, in order.
EMBEDDED_TAGS_PATTERN = re.compile(
    r"^(?P<title>[^{}]+?) \((?P<year>[0-9]{4})\)"
    r"(?:\s*\{(?P<id_source>" + _ID_SOURCES + r")-(?P<id_value>[^{}]*)\})?"
    r"(?:\s*\{" + re.escape(EDITION_PREFIX) + r"(?P<edition>[^{}]*)\})?"
    r"\s*(?: - " + _SPLIT + r")?$",
    re.IGNORECASE,
)

# Applied after every {...} and [...] annotation has been removed.
STRIPPED_PATTERN = re.compile(
    r"^(?P<title>.+) \((?P<year>[0-9]{4})\)\s*(?: - " + _SPLIT + r")?$",
    re.IGNORECASE,
)

_ANNOTATIONS = re.compile(r"(\{.*?\}|\[.*?\])")


def _id_tag_pattern(prefixes: Sequence[str]) -> re.Pattern[str]:
    sources = "|".join(re.escape(prefix) for prefix in prefixes)
    return re.compile(r"\s*\{(?:" + sources + r")[^}]*\}", re.IGNORECASE)


MOVIE_ID_TAG_PATTERN = _id_tag_pattern(MOVIE_ID_PREFIXES)
SHOW_ID_TAG_PATTERN = _id_tag_pattern(SHOW_ID_PREFIXES)

EPISODE_PATTERN = re.compile(
    r"^(?P<show>.+?) - s(?P<season>[0-9]{1,4})e(?P<episode>[0-9]{1,4})"
    r"(?:-?e(?P<last_episode>[0-9]{1,4}))?"
    r"(?: - (?P<title>.+))?$",
    re.IGNORECASE,
)
SEASON_FOLDER_PATTERN = re.compile(r"^season\s*(?P<season>[0-9]+)$", re.IGNORECASE)

MOVIE_SHAPE = "Movie Name (YYYY)"
MOVIE_SHAPE_OPTIONAL = "with optional {imdb-...}/{tmdb-...}, {edition-...} and ' - cd1'"
EPISODE_SHAPE = "Show Name - s01e01 - Episode Title"


def current_year_bounds() -> tuple[int, int]:
    """Return the accepted (min, max) release years as of now."""
    return MIN_YEAR, datetime.now().year + MAX_YEAR_AHEAD


def normalize_folder_name(name: str, id_tags: re.Pattern[str]) -> str:
    """Drop [annotations] and external-id tags, then collapse whitespace."""
    return collapse_whitespace(id_tags.sub("", strip_brackets(name)))


class PlexMovieVerifier(Verifier):
    """Verifier for Plex movie naming conventions.

    Movie format:
        /Movies/Movie Name (Year)/Movie Name (Year).ext
        /Movies/Movie Name (Year)/Movie Name (Year) {imdb-tt...} - cd1.ext
        /Movies/Movie Name (Year).ext
    """

    tag_prefixes: ClassVar[Sequence[str]] = MOVIE_TAG_PREFIXES

    @property
    def media_type(self: Self) -> MediaType:
        """Movies."""
        return MediaType.MOVIE

    def parse_name(self: Self, file_name: str) -> Optional[NameComponents]:
        """Decompose a movie file name into its components.

        Args:
            file_name: File name including its extension.

        Returns:
            The parsed components, or None when the name does not fit the
            expected shape. Tag prefixes and the year range are not checked.
        """
        stem, extension = os.path.splitext(file_name)
        if self.config.embedded_tags:
            if extension.lower() not in MEDIA_EXTENSIONS:
                return None
            match = EMBEDDED_TAGS_PATTERN.match(strip_brackets(stem).strip())
            if not match:
                return None
            external_id = None
            if match.group("id_source"):
                external_id = ExternalId(
                    source=match.group("id_source").lower(),
                    value=match.group("id_value"),
                )
            edition = match.group("edition")
        else:
            match = STRIPPED_PATTERN.match(_ANNOTATIONS.sub("", stem).strip())
            if not match:
                return None
            edition, external_id = self._tags_from_name(file_name)

        split = None
        if match.group("split_token"):
            split = SplitSuffix(
                token=match.group("split_token").lower(),
                index=int(match.group("split_index")),
            )
        return NameComponents(
            title=match.group("title").strip(),
            year=int(match.group("year")),
            edition=edition or None,
            external_id=external_id,
            split=split,
        )

    @staticmethod
    def _tags_from_name(file_name: str) -> tuple[Optional[str], Optional[ExternalId]]:
        """Pick the first edition tag and the first external-id tag."""
        edition: Optional[str] = None
        external_id: Optional[ExternalId] = None
        for tag in brace_tags(file_name):
            content = tag_content(tag)
            lowered = content.lower()
            if edition is None and lowered.startswith(EDITION_PREFIX):
                edition = content[len(EDITION_PREFIX) :]
            elif external_id is None:
                for prefix in MOVIE_ID_PREFIXES:
                    if lowered.startswith(prefix):
                        external_id = ExternalId(
                            source=prefix.rstrip("-"), value=content[len(prefix) :]
                        )
                        break
        return edition, external_id

    def check(self: Self, media_path: MediaPath) -> List[Diagnostic]:
        """Run the movie naming checks.

        Args:
            media_path: The decomposed path to check.

        Returns:
            Diagnostics in the order they were found; empty when compliant.
        """
        invalid_tag = self.find_invalid_tag(media_path)
        if invalid_tag:
            return [invalid_tag]

        components = self.parse_name(media_path.file_name)
        if components is None:
            return [
                Diagnostic(
                    kind=DiagnosticKind.STRUCTURAL_MISMATCH,
                    file_path=media_path.full_path,
                    context={
                        "expected": MOVIE_SHAPE,
                        "optional": MOVIE_SHAPE_OPTIONAL,
                    },
                )
            ]

        diagnostics: List[Diagnostic] = []
        checks = (
            self._check_year,
            self._check_folder,
            self._check_split_placement,
        )
        for rule in checks:
            diagnostic = rule(media_path, components)
            if diagnostic is None:
                continue
            diagnostics.append(diagnostic)
            if not self.config.collect_all:
                break
        return diagnostics

    def _check_year(
        self: Self, media_path: MediaPath, components: NameComponents
    ) -> Optional[Diagnostic]:
        min_year, max_year = current_year_bounds()
        if min_year <= components.year <= max_year:
            return None
        return Diagnostic(
            kind=DiagnosticKind.YEAR_OUT_OF_RANGE,
            file_path=media_path.full_path,
            context={
                "year": str(components.year),
                "min_year": str(min_year),
                "max_year": str(max_year),
            },
        )

    def _check_folder(
        self: Self, media_path: MediaPath, components: NameComponents
    ) -> Optional[Diagnostic]:
        # No folder identity is enforced at the library root.
        if media_path.in_root:
            return None
        expected = components.expected_folder_name()
        actual = normalize_folder_name(media_path.parent_folder_name, MOVIE_ID_TAG_PATTERN)
        if actual.casefold() == collapse_whitespace(expected).casefold():
            return None
        return Diagnostic(
            kind=DiagnosticKind.FOLDER_MISMATCH,
            file_path=media_path.full_path,
            context={"actual": media_path.parent_folder_name, "expected": expected},
        )

    def _check_split_placement(
        self: Self, media_path: MediaPath, components: NameComponents
    ) -> Optional[Diagnostic]:
        if components.split is None or not media_path.in_root:
            return None
        return Diagnostic(
            kind=DiagnosticKind.MISPLACED_SPLIT_SUFFIX,
            file_path=media_path.full_path,
            context={
                "split": str(components.split),
                "expected": components.expected_folder_name(),
            },
        )


class PlexShowVerifier(Verifier):
    """Verifier for Plex TV show naming conventions.

    TV Show format:
        /TV Shows/Show Name (Year)/Season XX/Show Name (Year) - sXXeYY - Title.ext
        /TV Shows/Show Name (Year)/Specials/Show Name (Year) - s00eYY.ext
    """

    tag_prefixes: ClassVar[Sequence[str]] = SHOW_TAG_PREFIXES

    @property
    def media_type(self: Self) -> MediaType:
        """TV shows."""
        return MediaType.TV

    def check(self: Self, media_path: MediaPath) -> List[Diagnostic]:  # noqa: C901
        """Run the episode naming checks.

        Args:
            media_path: The decomposed path to check.

        Returns:
            Diagnostics in the order they were found; empty when compliant.
        """
        invalid_tag = self.find_invalid_tag(media_path)
        if invalid_tag:
            return [invalid_tag]

        core_name = normalize_folder_name(media_path.stem, SHOW_ID_TAG_PATTERN)
        match = EPISODE_PATTERN.match(core_name)
        if not match:
            return [
                Diagnostic(
                    kind=DiagnosticKind.STRUCTURAL_MISMATCH,
                    file_path=media_path.full_path,
                    context={
                        "expected": EPISODE_SHAPE,
                        "optional": "episode title optional",
                    },
                )
            ]

        show = match.group("show").strip()
        season = int(match.group("season"))
        season_folder = SPECIALS_FOLDER if season == 0 else f"Season {season:02d}"

        if media_path.in_root:
            return [
                Diagnostic(
                    kind=DiagnosticKind.ROOT_LEVEL_EPISODE,
                    file_path=media_path.full_path,
                    context={
                        "expected": f"{show}/{season_folder}/{media_path.file_name}",
                    },
                )
            ]

        diagnostics: List[Diagnostic] = []
        parent = collapse_whitespace(strip_brackets(media_path.parent_folder_name))
        season_match = SEASON_FOLDER_PATTERN.match(parent)
        in_season_folder = bool(season_match) or parent.casefold() == (
            SPECIALS_FOLDER.casefold()
        )

        if in_season_folder:
            folder_season = int(season_match.group("season")) if season_match else 0
            if folder_season != season:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.SEASON_FOLDER_MISMATCH,
                        file_path=media_path.full_path,
                        context={
                            "actual": media_path.parent_folder_name,
                            "season": str(season),
                            "expected": season_folder,
                        },
                    )
                )
                if not self.config.collect_all:
                    return diagnostics
            if media_path.parent_in_root:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.ROOT_LEVEL_EPISODE,
                        file_path=media_path.full_path,
                        context={
                            "expected": f"{show}/{season_folder}/{media_path.file_name}",
                        },
                    )
                )
                return diagnostics
            show_folder = media_path.grandparent_folder_name
        else:
            show_folder = media_path.parent_folder_name

        actual = normalize_folder_name(show_folder, SHOW_ID_TAG_PATTERN)
        if actual.casefold() != collapse_whitespace(show).casefold():
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.FOLDER_MISMATCH,
                    file_path=media_path.full_path,
                    context={"actual": show_folder, "expected": show},
                )
            )
        return diagnostics


def get_verifier(media_type: MediaType, config: Optional[VerifierConfig] = None) -> Verifier:
    """Return the Plex verifier for *media_type*.

    Raises:
        ValueError: If no verifier exists for the media type.
    """
    if media_type == MediaType.MOVIE:
        return PlexMovieVerifier(config)
    if media_type == MediaType.TV:
        return PlexShowVerifier(config)
    raise ValueError(f"Media type {media_type} is not supported by the Plex verifiers")
