"""Base classes and shared checks for media naming verifiers.

This module defines the abstract verifier interface and the checks every
platform verifier has in common.
- VerifierConfig: groups the options that change how strictly names are parsed.
- Verifier: abstract base class; subclasses implement ``check`` for one media
  type and inherit the extras short-circuit and brace-tag validation.

Design:
- Verifiers are pure: ``verify`` works on path strings only, performs no I/O
  and keeps no state between calls, so one instance can be shared across
  threads.
- Naming violations are returned as Diagnostic values, never raised.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Self, Sequence

from shelfscan.models.core import (
    Diagnostic,
    DiagnosticKind,
    MediaPath,
    MediaType,
    VerificationResult,
)
from shelfscan.rules.tables import EXTRAS_SUBDIRECTORIES, INLINE_EXTRA_SUFFIXES

# Non-greedy so "{a} {b}" yields two tags.
BRACE_TAG_PATTERN = re.compile(r"\{.*?\}")
BRACKET_PATTERN = re.compile(r"\s*\[[^\]]*\]")
_WHITESPACE = re.compile(r"\s+")

_EXTRAS_FOLDERS_FOLDED = frozenset(name.casefold() for name in EXTRAS_SUBDIRECTORIES)


@dataclass
class VerifierConfig:
    """Configuration for verifiers."""

    embedded_tags: bool = True
    """Parse brace tags in place after the year. When False, every {...} and
    [...] annotation is stripped before the name is matched."""

    collect_all: bool = False
    """Report every failing check after parsing succeeds instead of stopping at
    the first one."""


def strip_brackets(name: str) -> str:
    """Remove ``[...]`` annotations (and the whitespace before them).

    Plex ignores bracketed text, so it never takes part in a comparison.
    A name without brackets is returned unchanged.
    """
    if not name:
        return ""
    return BRACKET_PATTERN.sub("", name)


def collapse_whitespace(name: str) -> str:
    """Squash runs of whitespace to one space and trim the ends."""
    return _WHITESPACE.sub(" ", name).strip()


def brace_tags(file_name: str) -> List[str]:
    """Return every ``{...}`` tag in *file_name*, braces included."""
    return BRACE_TAG_PATTERN.findall(file_name)


def tag_content(tag: str) -> str:
    """Strip the braces from a tag."""
    return tag[1:-1]


def describe_prefixes(prefixes: Sequence[str]) -> str:
    """Render prefixes for a message: ``edition-, imdb-, or tmdb-``."""
    if len(prefixes) == 1:
        return prefixes[0]
    return f"{', '.join(prefixes[:-1])}, or {prefixes[-1]}"


def is_extras_folder(folder_name: str) -> bool:
    """Check whether a folder holds local extras (trailers, featurettes...)."""
    return collapse_whitespace(strip_brackets(folder_name)).casefold() in (
        _EXTRAS_FOLDERS_FOLDED
    )


def has_inline_extra_suffix(file_name: str, extension: str) -> bool:
    """Check whether the file name ends with an extras marker such as ``-trailer``."""
    lowered = file_name.casefold()
    return any(
        lowered.endswith((suffix + extension).casefold())
        for suffix in INLINE_EXTRA_SUFFIXES
    )


def is_local_extra(media_path: MediaPath) -> bool:
    """Classify a file as a local extra.

    Either its parent folder is an extras folder, or the name carries an inline
    extras suffix right before the extension.
    """
    return is_extras_folder(media_path.parent_folder_name) or has_inline_extra_suffix(
        media_path.file_name, media_path.extension
    )


class Verifier(ABC):
    """Abstract base class for naming verifiers.

    A verifier decides whether one file follows a platform's naming rules
    and, if not, explains why.
    """

    tag_prefixes: ClassVar[Sequence[str]] = ()
    """Prefixes a ``{...}`` tag may start with for this media type."""

    def __init__(self: Self, config: Optional[VerifierConfig] = None) -> None:
        """Initialize a verifier.

        Args:
            config: Optional verifier configuration, defaults applied if None.
        """
        self.config = config or VerifierConfig()

    @property
    @abstractmethod
    def media_type(self: Self) -> MediaType:
        """The media type this verifier understands."""

    @abstractmethod
    def check(self: Self, media_path: MediaPath) -> List[Diagnostic]:
        """Run the naming checks for a file that is not an extra.

        Args:
            media_path: The decomposed path to check.

        Returns:
            Diagnostics in the order they were found; empty when compliant.
        """

    def verify(self: Self, file_path: str, root_folder: str) -> VerificationResult:
        """Verify a file against the naming rules.

        Args:
            file_path: Path of the media file.
            root_folder: Library root the scan started from.

        Returns:
            The verdict, with diagnostics when the file is invalid.
        """
        media_path = MediaPath.from_path(file_path, root_folder)
        if is_local_extra(media_path):
            return VerificationResult.passed(media_path.full_path)

        diagnostics = self.check(media_path)
        if diagnostics:
            return VerificationResult.failed(media_path.full_path, diagnostics)
        return VerificationResult.passed(media_path.full_path)

    def find_invalid_tag(self: Self, media_path: MediaPath) -> Optional[Diagnostic]:
        """Return a diagnostic for the first unrecognized ``{...}`` tag, if any."""
        for tag in brace_tags(media_path.file_name):
            content = tag_content(tag).casefold()
            if not any(content.startswith(prefix) for prefix in self.tag_prefixes):
                return Diagnostic(
                    kind=DiagnosticKind.INVALID_TAG,
                    file_path=media_path.full_path,
                    context={
                        "tag": tag,
                        "prefixes": describe_prefixes(self.tag_prefixes),
                    },
                )
        return None
