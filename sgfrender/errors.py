# -*- coding: utf-8 -*-

# errors.py (sgfrender exception hierarchy)
# Copyright © 2000-2021 David John Goodger (goodger@python.org)
#
# This library is free software; you can redistribute it and/or modify it
# under the terms of the GNU Lesser General Public License as published by the
# Free Software Foundation; either version 2 of the License, or (at your
# option) any later version.
#
# This library is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU Lesser General Public License
# for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# (lgpl.txt) along with this library; if not, write to the Free Software
# Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA  02111-1307  USA
# The license is currently available on the Internet at:
#     http://www.gnu.org/copyleft/lesser.html

"""
Exceptions raised by sgfrender. Every exception derives from `Error`, so a
caller can report any input or rules problem with a single ``except`` clause.
"""


class Error(Exception):
    """Base class for sgfrender exceptions."""
    pass

# Parsing Exceptions

class ParseError(Error):

    """
    Base class for parsing exceptions. `offset` is the byte offset into the
    SGF data where the problem was detected (or `None`).
    """

    def __init__(self, message, offset=None):
        if offset is not None:
            message = f'{message} (at byte offset {offset})'
        super().__init__(message)
        self.offset = offset

class StructureError(ParseError):
    """Raised by `Parser` for malformed SGF structure or exceeded limits."""
    pass

# Game Tree Exceptions

class PropertyFormatError(Error):
    """Raised by the typed `Node` accessors for malformed property values."""

    def __init__(self, message, property_id=None, value=None):
        if property_id is not None:
            message = f'{property_id}[{value}]: {message}'
        super().__init__(message)
        self.property_id = property_id
        self.value = value

class PathError(Error):
    """Raised by `GameTree.resolve()` for a nonexistent game, branch or node."""
    pass

class UnsupportedBoardSizeError(Error):
    """Raised for board dimensions outside of the supported range."""
    pass

# Rules Exceptions

class RulesError(Error):

    """
    Base class for exceptions raised while replaying moves. Carries the
    `move_number`, the board `point` (x, y), and the `color` played.
    """

    reason = 'Illegal move'

    def __init__(self, move_number, point, color, detail=None):
        message = f'{self.reason}: move {move_number}, {color} at {point}'
        if detail:
            message = f'{message}: {detail}'
        super().__init__(message)
        self.move_number = move_number
        self.point = point
        self.color = color

class IllegalMoveError(RulesError):
    """Raised by `Goban.play()` for occupied or off-board points."""
    reason = 'Illegal move'

class KoViolationError(RulesError):
    """Raised by `Goban.play()` for an immediate ko recapture."""
    reason = 'Ko violation'

class SuicideError(RulesError):
    """Raised by `Goban.play()` when a move captures nothing and has no
    liberties."""
    reason = 'Suicide'

# Option Exceptions

class OptionError(Error, ValueError):
    """Raised for invalid rendering options (canvas width, label sides,
    viewport, thread count)."""
    pass

# Output Exceptions

class UnsupportedPrimitiveError(Error):
    """Raised by an encoder for a primitive it has no mapping for."""
    pass

class UnsupportedFormatError(Error):
    """Raised for unknown output format or style names."""
    pass
