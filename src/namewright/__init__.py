# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""Namewright - rename script engine and destination placement for media files."""

from namewright.__about__ import __version__

__all__ = ["__version__"]
