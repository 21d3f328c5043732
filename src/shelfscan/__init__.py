# SPDX-FileCopyrightText: 2025-present ShelfScan contributors
#
# SPDX-License-Identifier: MIT

"""ShelfScan - Scans a media library for Plex naming compliance."""

from shelfscan.__about__ import __version__

__all__ = ["__version__"]
