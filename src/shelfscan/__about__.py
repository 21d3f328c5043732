# SPDX-FileCopyrightText: 2025-present ShelfScan contributors
#
# SPDX-License-Identifier: MIT
__version__ = "0.5.0"
