"""Naming rule verifiers for media platforms."""

from shelfscan.rules.base import Verifier, VerifierConfig
from shelfscan.rules.plex import PlexMovieVerifier, PlexShowVerifier, get_verifier

__all__ = [
    "Verifier",
    "VerifierConfig",
    "PlexMovieVerifier",
    "PlexShowVerifier",
    "get_verifier",
]
