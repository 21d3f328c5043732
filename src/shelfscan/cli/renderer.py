"""Renderer for CLI output.

This module turns a LibraryReport into the plain-text scan report. Text is
built by pure functions (``format_*``) and only ``render_report`` writes to a
Rich console, with markup and highlighting disabled so file names containing
``[...]`` are printed verbatim.

Report layout::

    ---------- BEGIN MOVIE REPORT ----------
    <notice>
    Scan results:
    <blank line, file path, indented message per invalid file>

    Summary:

    Valid files:          NNNNNN
    Invalid files:        NNNNNN
    Total files checked:  NNNNNN
    Correctness:           XX.XX% (qualifier)
    ---------- END MOVIE REPORT ----------
"""

from typing import List

from rich.console import Console

from shelfscan.__about__ import __version__
from shelfscan.models.core import Diagnostic, LibraryReport, VerificationResult

RESOURCES = (
    "https://support.plex.tv/articles/naming-and-organizing-your-tv-show-files/",
    "https://support.plex.tv/articles/naming-and-organizing-your-movie-files/",
)


def format_header() -> str:
    """Return the one-line application banner."""
    return f"ShelfScan v{__version__} - Scans a media library for Plex naming compliance."


def format_notice() -> List[str]:
    """Return the disclaimer printed at the top of every report."""
    lines = [
        "",
        "Strict file format checking:",
        "",
        "File format checks are very strict. A file marked as invalid in this report",
        "does not necessarily mean there is a problem with it in Plex.",
        "",
        "Resources:",
        "",
    ]
    lines.extend(f"- {url}" for url in RESOURCES)
    lines.append("")
    return lines


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Return the indented message line for a diagnostic."""
    return f"  {diagnostic.message}"


def format_result(result: VerificationResult) -> List[str]:
    """Return the report lines for one file; none for a valid file."""
    if result.is_valid:
        return []
    lines = ["", result.file_path]
    lines.extend(format_diagnostic(diagnostic) for diagnostic in result.diagnostics)
    return lines


def format_summary(report: LibraryReport) -> List[str]:
    """Return the summary block with counts and correctness."""
    correctness = f"Correctness:          {report.correctness:6,.2f}% {report.qualifier}"
    return [
        "",
        "Summary:",
        "",
        f"Valid files:          {report.valid_count:6,}",
        f"Invalid files:        {report.invalid_count:6,}",
        f"Total files checked:  {report.total:6,}",
        correctness.rstrip(),
    ]


def format_report(report: LibraryReport) -> List[str]:
    """Return every line of the report, from BEGIN to END."""
    label = report.media_type.value.upper()
    lines = [f"---------- BEGIN {label} REPORT ----------"]
    lines.extend(format_notice())
    lines.append("Scan results:")
    for result in report.results:
        lines.extend(format_result(result))
    lines.extend(format_summary(report))
    lines.append("")
    lines.append(f"---------- END {label} REPORT ----------")
    return lines


def print_lines(lines: List[str], console: Console) -> None:
    """Print text lines verbatim (no markup, emoji or highlighting)."""
    for line in lines:
        console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def render_report(report: LibraryReport, console: Console | None = None) -> None:
    """Render a library report to the console.

    Args:
        report: The report to render.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()
    print_lines(format_report(report), console)
