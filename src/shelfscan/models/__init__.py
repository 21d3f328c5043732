"""Domain models for the shelfscan application."""

from shelfscan.models.core import (
    Diagnostic,
    DiagnosticKind,
    ExternalId,
    LibraryReport,
    MediaPath,
    MediaType,
    NameComponents,
    SplitSuffix,
    VerificationResult,
)

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "ExternalId",
    "LibraryReport",
    "MediaPath",
    "MediaType",
    "NameComponents",
    "SplitSuffix",
    "VerificationResult",
]
