"""Library checker tying the walker to the naming verifiers.

check_library walks a library, picks the verifier for its media type and
collects one verdict per file, in traversal order, into a LibraryReport.
"""

import logging
from pathlib import Path
from typing import Optional

from shelfscan.core.scanner import ScanOptions, find_media_files, guess_media_type
from shelfscan.models.core import LibraryReport, MediaType
from shelfscan.rules.base import VerifierConfig
from shelfscan.rules.plex import get_verifier

logger = logging.getLogger(__name__)


def check_library(
    root_dir: Path,
    media_type: Optional[MediaType] = None,
    *,
    scan_options: Optional[ScanOptions] = None,
    config: Optional[VerifierConfig] = None,
) -> LibraryReport:
    """Check every media file in a library against the Plex naming rules.

    Args:
        root_dir: Library root to scan.
        media_type: Media type of the library. Guessed from the file names when
            None.
        scan_options: Walker options (extensions, excluded folders).
        config: Verifier options.

    Returns:
        The report with one result per file found.

    Raises:
        FileNotFoundError: If the root doesn't exist.
        NotADirectoryError: If the root is not a directory.
        OSError: If the library cannot be enumerated.
    """
    root_dir = root_dir.absolute()
    files = find_media_files(root_dir, scan_options)

    if media_type is None:
        media_type = guess_media_type(files)
        logger.debug("Guessed media type %s for %s", media_type.value, root_dir)

    verifier = get_verifier(media_type, config)
    results = [verifier.verify(str(path), str(root_dir)) for path in files]

    report = LibraryReport(root_dir=root_dir, media_type=media_type, results=results)
    logger.debug(
        "Checked %d files in %s: %d valid, %d invalid",
        report.total,
        root_dir,
        report.valid_count,
        report.invalid_count,
    )
    return report
