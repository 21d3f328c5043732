"""Core domain models for shelfscan.

This module defines the value objects passed between the library walker, the
naming verifiers and the report renderer.
- Every model is frozen: verifiers build them fresh per file and never mutate
  them afterwards.
- Diagnostics are structured (kind + context) rather than preformatted text so
  that the console renderer and the JSON output share one source of truth.

Design:
- MediaType selects which verifier a library is checked with.
- MediaPath is the per-call decomposition of a file path relative to the
  library root.
- NameComponents is the parsed form of a compliant movie filename.
- VerificationResult is the verdict for a single file; LibraryReport aggregates
  the verdicts of a whole scan in traversal order.
"""

import os
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePath
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class MediaType(str, Enum):
    """Type of library being checked.

    Used to pick the verifier and to label the report.
    """

    MOVIE = "movie"
    TV = "tv"


class DiagnosticKind(str, Enum):
    """Category of a naming violation.

    None of these are fatal: each one marks a single file invalid and the scan
    carries on.
    """

    STRUCTURAL_MISMATCH = "structural_mismatch"
    INVALID_TAG = "invalid_tag"
    YEAR_OUT_OF_RANGE = "year_out_of_range"
    FOLDER_MISMATCH = "folder_mismatch"
    MISPLACED_SPLIT_SUFFIX = "misplaced_split_suffix"
    SEASON_FOLDER_MISMATCH = "season_folder_mismatch"
    ROOT_LEVEL_EPISODE = "root_level_episode"


# Message templates keyed by kind; placeholders are filled from Diagnostic.context.
DIAGNOSTIC_TEMPLATES: Dict[DiagnosticKind, str] = {
    DiagnosticKind.STRUCTURAL_MISMATCH: (
        "Invalid naming format. Expected '{expected}' ({optional})"
    ),
    DiagnosticKind.INVALID_TAG: "Invalid block '{tag}'. Must be {prefixes}",
    DiagnosticKind.YEAR_OUT_OF_RANGE: (
        "Invalid year '{year}'. Must be between {min_year} and {max_year}"
    ),
    DiagnosticKind.FOLDER_MISMATCH: (
        "Folder name '{actual}' does not match expected '{expected}'"
    ),
    DiagnosticKind.MISPLACED_SPLIT_SUFFIX: (
        "Split suffix '{split}' found on a stand-alone file. "
        "Multi-part movies must be inside a '{expected}' folder"
    ),
    DiagnosticKind.SEASON_FOLDER_MISMATCH: (
        "Season folder '{actual}' does not match season {season}. "
        "Expected '{expected}'"
    ),
    DiagnosticKind.ROOT_LEVEL_EPISODE: (
        "Episode is not inside a show folder. Expected '{expected}'"
    ),
}


class Diagnostic(BaseModel):
    """A single naming violation found for a file."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    """Which rule was violated."""

    file_path: str
    """Path of the offending file, as it was passed to the verifier."""

    context: Dict[str, str] = Field(default_factory=dict)
    """Values quoted by the message (offending tag, actual/expected names...)."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        """Human-readable description of the violation."""
        return DIAGNOSTIC_TEMPLATES[self.kind].format(**self.context)


class ExternalId(BaseModel):
    """An external metadata source reference, e.g. ``{imdb-tt0372784}``."""

    model_config = ConfigDict(frozen=True)

    source: str
    value: str


class SplitSuffix(BaseModel):
    """A multi-part marker such as ``cd1`` or ``part2``."""

    model_config = ConfigDict(frozen=True)

    token: str
    index: int

    def __str__(self) -> str:
        return f"{self.token}{self.index}"


class NameComponents(BaseModel):
    """Parsed decomposition of a compliant movie filename."""

    model_config = ConfigDict(frozen=True)

    title: str
    year: int
    edition: Optional[str] = None
    """Free text of an ``{edition-...}`` tag, without the prefix."""

    external_id: Optional[ExternalId] = None
    split: Optional[SplitSuffix] = None

    def expected_folder_name(self) -> str:
        """Build the movie folder name this file belongs in.

        Format: ``Title (Year)`` or ``Title (Year) {edition-Edition}``.
        """
        parts = [self.title, f"({self.year})"]
        if self.edition:
            parts.append(f"{{edition-{self.edition}}}")
        return " ".join(parts)


class MediaPath(BaseModel):
    """A file path decomposed relative to the library root.

    Built per verification call from plain strings; nothing here touches the
    filesystem.
    """

    model_config = ConfigDict(frozen=True)

    full_path: str
    file_name: str
    parent_folder_name: str
    directory: str
    root_folder: str

    @classmethod
    def from_path(cls, file_path: str | PurePath, root_folder: str | PurePath) -> "MediaPath":
        """Decompose *file_path* for verification against *root_folder*."""
        full_path = os.fspath(file_path)
        directory = os.path.dirname(full_path)
        return cls(
            full_path=full_path,
            file_name=os.path.basename(full_path),
            parent_folder_name=os.path.basename(os.path.normpath(directory))
            if directory
            else "",
            directory=directory,
            root_folder=os.fspath(root_folder),
        )

    @property
    def stem(self) -> str:
        """File name without its final extension."""
        return os.path.splitext(self.file_name)[0]

    @property
    def extension(self) -> str:
        """Final extension including the dot, e.g. ``.mkv``."""
        return os.path.splitext(self.file_name)[1]

    @property
    def in_root(self) -> bool:
        """Whether the file sits directly in the library root.

        Paths are normalized first, so trailing separators and ``..`` segments
        do not matter.
        """
        return _normalize_dir(self.directory) == _normalize_dir(self.root_folder)

    @property
    def grandparent_folder_name(self) -> str:
        """Name of the folder containing the parent folder."""
        return os.path.basename(os.path.dirname(os.path.normpath(self.directory or os.curdir)))

    @property
    def parent_in_root(self) -> bool:
        """Whether the parent folder sits directly in the library root."""
        grandparent = os.path.dirname(os.path.normpath(self.directory or os.curdir))
        return _normalize_dir(grandparent) == _normalize_dir(self.root_folder)


def _normalize_dir(path: str) -> str:
    return os.path.normcase(os.path.normpath(os.path.abspath(path or os.curdir)))


class VerificationResult(BaseModel):
    """Verdict for a single file."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    is_valid: bool
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @classmethod
    def passed(cls, file_path: str) -> "VerificationResult":
        """Build a passing verdict."""
        return cls(file_path=file_path, is_valid=True)

    @classmethod
    def failed(cls, file_path: str, diagnostics: List[Diagnostic]) -> "VerificationResult":
        """Build a failing verdict; at least one diagnostic is required."""
        if not diagnostics:
            raise ValueError("A failing verdict needs at least one diagnostic")
        return cls(file_path=file_path, is_valid=False, diagnostics=diagnostics)


# Correctness thresholds, checked from the top down.
CORRECTNESS_QUALIFIERS = (
    (100.0, "(perfect score!)"),
    (95.0, "(excellent!)"),
    (90.0, "(great job!)"),
    (85.0, "(good effort)"),
)


class LibraryReport(BaseModel):
    """Aggregated verdicts of a library scan, in traversal order."""

    model_config = ConfigDict(frozen=True)

    root_dir: Path
    media_type: MediaType
    results: List[VerificationResult] = Field(default_factory=list)
    scan_time: datetime = Field(default_factory=datetime.now)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid_count(self) -> int:
        """Number of files that passed every check."""
        return sum(1 for result in self.results if result.is_valid)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def invalid_count(self) -> int:
        """Number of files with at least one diagnostic."""
        return self.total - self.valid_count

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        """Number of files checked."""
        return len(self.results)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def correctness(self) -> float:
        """Percentage of valid files; 0.0 for an empty library."""
        if not self.results:
            return 0.0
        return self.valid_count * 100.0 / self.total

    @computed_field  # type: ignore[prop-decorator]
    @property
    def qualifier(self) -> str:
        """Praise attached to the correctness score, or an empty string."""
        return correctness_qualifier(self.correctness)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """All diagnostics, in file order."""
        return [diag for result in self.results for diag in result.diagnostics]


def correctness_qualifier(percent: float) -> str:
    """Map a correctness percentage to its qualifier text."""
    for threshold, text in CORRECTNESS_QUALIFIERS:
        if percent >= threshold:
            return text
    return ""
