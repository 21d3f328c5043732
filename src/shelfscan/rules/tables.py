"""Lookup tables shared by the Plex naming verifiers.

Every fixed set the rules consult lives here so the verifiers stay
table-driven. Values follow the Plex naming guides:
https://support.plex.tv/articles/naming-and-organizing-your-movie-files/
https://support.plex.tv/articles/local-files-for-trailers-and-extras/
"""

from typing import FrozenSet, Tuple

# Folder names (compared case-insensitively, [annotations] removed) that hold
# local extras for the movie or show one level up.
EXTRAS_SUBDIRECTORIES: Tuple[str, ...] = (
    "Behind The Scenes",
    "Deleted Scenes",
    "Featurettes",
    "Interviews",
    "Scenes",
    "Shorts",
    "Trailers",
    "Other",
)

# Suffixes that mark an extra stored next to the main file,
# e.g. "Inception (2010)-trailer.mkv".
INLINE_EXTRA_SUFFIXES: Tuple[str, ...] = (
    "-behindthescenes",
    "-deleted",
    "-featurette",
    "-interview",
    "-scene",
    "-short",
    "-trailer",
    "-other",
)

# Multi-part markers accepted after " - ", followed by a number.
SPLIT_TOKENS: Tuple[str, ...] = ("cd", "disc", "disk", "dvd", "part", "pt")

EDITION_PREFIX = "edition-"
MOVIE_ID_PREFIXES: Tuple[str, ...] = ("imdb-", "tmdb-")
SHOW_ID_PREFIXES: Tuple[str, ...] = ("tvdb-", "imdb-", "tmdb-")

MOVIE_TAG_PREFIXES: Tuple[str, ...] = (EDITION_PREFIX, *MOVIE_ID_PREFIXES)
SHOW_TAG_PREFIXES: Tuple[str, ...] = SHOW_ID_PREFIXES

# Video containers Plex will index.
MEDIA_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        ".mp4",
        ".mkv",
        ".avi",
        ".mov",
        ".wmv",
        ".m4v",
        ".mpg",
        ".mpeg",
        ".flv",
        ".webm",
        ".ts",
    }
)

# Extensions the library walker collects unless configured otherwise.
DEFAULT_SCAN_EXTENSIONS: Tuple[str, ...] = (".mkv", ".mp4", ".avi")

# Plex "Optimized Versions" live here; they are transcodes, not library content.
DEFAULT_EXCLUDED_FOLDERS: Tuple[str, ...] = ("Plex Versions",)

MIN_YEAR = 1900
# Releases may be dated up to this many years after the current one.
MAX_YEAR_AHEAD = 1

SPECIALS_FOLDER = "Specials"
