"""Library walker for media files.

This module finds the media files under a library root and guesses whether the
library holds movies or TV shows.
- Subdirectories are visited before the files of the same directory, both in
  name order, so reports are reproducible between runs.
- Excluded folders (Plex "Optimized Versions" by default) are skipped with
  everything below them.
- Filesystem errors are not swallowed: a scan that cannot enumerate the
  library is aborted by the caller.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from shelfscan.models.core import MediaType
from shelfscan.rules.tables import DEFAULT_EXCLUDED_FOLDERS, DEFAULT_SCAN_EXTENSIONS

# Logger for this module
logger = logging.getLogger(__name__)

# A single SxxExx anywhere in the library marks it as TV.
TV_PATTERN = re.compile(r"S[0-9]{1,2}E[0-9]{1,2}", re.IGNORECASE)


@dataclass
class ScanOptions:
    """Options for the scan process."""

    extensions: Set[str] = field(default_factory=lambda: set(DEFAULT_SCAN_EXTENSIONS))
    excluded_folders: Set[str] = field(
        default_factory=lambda: set(DEFAULT_EXCLUDED_FOLDERS)
    )

    def __post_init__(self) -> None:
        # Normalize so lookups are case-insensitive and tolerate a missing dot.
        self.extensions = {
            (ext if ext.startswith(".") else f".{ext}").lower() for ext in self.extensions
        }
        self.excluded_folders = {name.casefold() for name in self.excluded_folders}


def _is_excluded(directory: Path, options: ScanOptions) -> bool:
    return directory.name.casefold() in options.excluded_folders


def _is_media_file(file_path: Path, options: ScanOptions) -> bool:
    return file_path.suffix.lower() in options.extensions


def _collect(current_dir: Path, options: ScanOptions, files: List[Path]) -> None:
    """Append the media files below *current_dir* to *files*."""
    entries = sorted(current_dir.iterdir(), key=lambda entry: entry.name)

    for entry in entries:
        if entry.is_dir():
            if _is_excluded(entry, options):
                logger.debug("Skipping excluded folder %s", entry)
                continue
            _collect(entry, options, files)

    for entry in entries:
        if entry.is_file() and _is_media_file(entry, options):
            files.append(entry)


def find_media_files(
    root_dir: Path,
    options: Optional[ScanOptions] = None,
) -> List[Path]:
    """Find all media files below a library root.

    Args:
        root_dir: The directory to scan.
        options: Extensions to collect and folders to skip. If None, default
            options will be used.

    Returns:
        Absolute paths of the media files, in traversal order.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
        NotADirectoryError: If the path is not a directory.
        OSError: If a directory cannot be enumerated.
    """
    if not root_dir.exists():
        raise FileNotFoundError(f"Directory does not exist: {root_dir}")
    if not root_dir.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root_dir}")

    if options is None:
        options = ScanOptions()

    files: List[Path] = []
    _collect(root_dir.absolute(), options, files)
    logger.debug("Found %d media files under %s", len(files), root_dir)
    return files


def guess_media_type(paths: Iterable[Path]) -> MediaType:
    """Guess whether a library holds TV shows or movies.

    Args:
        paths: The media files found in the library.

    Returns:
        MediaType.TV if any path carries an SxxExx marker, else MediaType.MOVIE.
    """
    for path in paths:
        if TV_PATTERN.search(str(path)):
            return MediaType.TV
    return MediaType.MOVIE
