# -*- coding: utf-8 -*-

# layout.py (board geometry for diagrams)
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
Board layout: maps board points to output coordinates.

All lengths are derived from the grid pitch (the distance between adjacent
lines), which is computed so that the grid plus its margins fills the
requested canvas width. A `Layout` is a pure function of its arguments.
"""

from .errors import OptionError
from .sgf import check_board_size


STONE_RATIO = 0.48
"""Stone radius, as a fraction of the pitch."""

MIN_STONE_RADIUS = 2.0
"""Smallest stone radius (output units), for legibility on small canvases."""

FONT_RATIO = 0.55
"""Font size for text on points, as a fraction of the pitch."""

COORDINATE_FONT_RATIO = 0.5
"""Font size for coordinate labels, as a fraction of the pitch."""

CHAR_WIDTH_RATIO = 0.6
"""Estimated average character advance, as a fraction of the font size."""

EDGE_MARGIN = 0.7
"""Margin on a side without coordinate labels, in pitches."""

LABEL_CLEARANCE = 0.6
"""Space between the outermost line and coordinate labels, in pitches."""

LABEL_PADDING = 0.25
"""Space between coordinate labels and the canvas edge, in pitches."""

VIEWPORT_EXTENSION = 0.5
"""Length of grid lines beyond an interior viewport edge, in pitches."""

SIDES = 'nesw'

COLUMN_LETTERS = 'ABCDEFGHJKLMNOPQRSTUVWXYZ'
"""Go column labels ("I" is skipped)."""


class Layout:

    """
    Geometry of one diagram.

    Arguments:

    - size : (width, height) -- Board size.
    - width : number -- Requested canvas width (output units, e.g. pixels).
    - label_sides : string -- Sides with coordinate labels, any of "nesw".
    - viewport : ((x0, y0), (x1, y1)) or `None` -- Board region to show
      (inclusive corners); `None` shows the whole board.
    - flip : boolean -- Put row 0 at the bottom instead of the top.

    Attributes: `pitch`, `margins` (dict side: output units), `stone_radius`,
    `font_size`, `coordinate_font_size`, `width`, `height` (canvas), `xs`,
    `ys` (output coordinates of the visible columns and rows, increasing),
    `columns`, `rows` (the visible board columns and rows, in `xs` and `ys`
    order).
    """

    def __init__(self, size, width=800, label_sides='nw', viewport=None,
                 flip=False):
        self.size = check_board_size(size)
        if not width > 0:
            raise OptionError(f'Canvas width must be positive, not {width}')
        label_sides = label_sides.lower()
        if set(label_sides) - set(SIDES):
            raise OptionError(
                f'Label sides must be a combination of "{SIDES}", '
                f'not "{label_sides}"')
        self.label_sides = ''.join(
            side for side in SIDES if side in label_sides)
        self.flip = flip
        if viewport is None:
            viewport = ((0, 0), (size[0] - 1, size[1] - 1))
        (x0, y0), (x1, y1) = viewport
        (x0, x1), (y0, y1) = sorted((x0, x1)), sorted((y0, y1))
        if not (0 <= x0 and x1 < size[0] and 0 <= y0 and y1 < size[1]):
            raise OptionError(
                f'Viewport {viewport} is outside of the '
                f'{size[0]}x{size[1]} board')
        self.viewport = ((x0, y0), (x1, y1))
        self.columns = list(range(x0, x1 + 1))
        self.rows = list(range(y0, y1 + 1))
        if flip:
            self.rows.reverse()

        margins = {}
        for side in SIDES:
            if side in self.label_sides:
                margins[side] = (LABEL_CLEARANCE + self.label_extent(side)
                                 + LABEL_PADDING)
            else:
                margins[side] = EDGE_MARGIN
        units_wide = len(self.columns) - 1 + margins['w'] + margins['e']
        units_high = len(self.rows) - 1 + margins['n'] + margins['s']
        self.pitch = width / units_wide
        self.margins = {
            side: margin * self.pitch for (side, margin) in margins.items()}
        self.width = width
        self.height = units_high * self.pitch
        self.stone_radius = max(STONE_RATIO * self.pitch, MIN_STONE_RADIUS)
        self.font_size = FONT_RATIO * self.pitch
        self.coordinate_font_size = COORDINATE_FONT_RATIO * self.pitch
        self.xs = [self.margins['w'] + index * self.pitch
                   for index in range(len(self.columns))]
        self.ys = [self.margins['n'] + index * self.pitch
                   for index in range(len(self.rows))]
        self._x_index = {column: index
                         for (index, column) in enumerate(self.columns)}
        self._y_index = {row: index for (index, row) in enumerate(self.rows)}

    def __repr__(self):
        return '{}(size={!r}, width={!r}, pitch={:.2f})'.format(
            self.__class__.__name__, self.size, self.width, self.pitch)

    def label_extent(self, side):
        """
        Return the extent (in pitches) of the widest coordinate label on
        `side`, measured perpendicular to that side.
        """
        if side in 'ns':
            # one line of text
            return COORDINATE_FONT_RATIO
        longest = max(len(self.row_label(row)) for row in range(self.size[1]))
        return max(1, longest * CHAR_WIDTH_RATIO) * COORDINATE_FONT_RATIO

    def column_label(self, column):
        if self.size[0] <= len(COLUMN_LETTERS):
            return COLUMN_LETTERS[column]
        return str(column + 1)

    def row_label(self, row):
        """Rows are numbered from 1 at the bottom of the drawn board."""
        if self.flip:
            return str(row + 1)
        return str(self.size[1] - row)

    def contains(self, point):
        """Return True if `point` is within the visible region."""
        return point[0] in self._x_index and point[1] in self._y_index

    def point_xy(self, point):
        """Return the output coordinates (x, y) of the visible `point`."""
        return (self.xs[self._x_index[point[0]]],
                self.ys[self._y_index[point[1]]])

    def grid_bounds(self):
        """
        Return (left, top, right, bottom): the output coordinates where grid
        lines end. Lines continue past viewport edges inside the board.
        """
        (x0, y0), (x1, y1) = self.viewport
        width, height = self.size
        extension = VIEWPORT_EXTENSION * self.pitch
        top_row, bottom_row = self.rows[0], self.rows[-1]
        top_edge = 0 if not self.flip else height - 1
        bottom_edge = height - 1 if not self.flip else 0
        return (
            self.xs[0] - (extension if x0 > 0 else 0),
            self.ys[0] - (extension if top_row != top_edge else 0),
            self.xs[-1] + (extension if x1 < width - 1 else 0),
            self.ys[-1] + (extension if bottom_row != bottom_edge else 0))

    def is_edge_column(self, column):
        return column in (0, self.size[0] - 1)

    def is_edge_row(self, row):
        return row in (0, self.size[1] - 1)

    def coordinate_labels(self):
        """
        Return a list of (text, x, y) coordinate labels, centered in the
        margins of the labeled sides: north, east, south, west order.
        """
        labels = []
        offset = LABEL_CLEARANCE * self.pitch
        for side in self.label_sides:
            extent = self.label_extent(side) * self.pitch
            if side in 'ns':
                if side == 'n':
                    y = self.ys[0] - offset - extent / 2
                else:
                    y = self.ys[-1] + offset + extent / 2
                labels.extend(
                    (self.column_label(column), x, y)
                    for (column, x) in zip(self.columns, self.xs))
            else:
                if side == 'w':
                    x = self.xs[0] - offset - extent / 2
                else:
                    x = self.xs[-1] + offset + extent / 2
                labels.extend(
                    (self.row_label(row), x, y)
                    for (row, y) in zip(self.rows, self.ys))
        return labels
