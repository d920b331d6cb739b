# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""showsync - push missing TV episodes from a local library to a remote one."""

from showsync.__about__ import __version__

__all__ = ["__version__"]
