# -*- coding: utf-8 -*-

# renderer.py (board position to drawing primitives)
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
Rendering: converts one `goban.Goban` position into an ordered list of
drawing primitives (`Line`, `Circle`, `Polygon`, `Text`).

Primitives are listed back to front (background, grid, stones, markup, text),
so any encoder that draws them in order layers them correctly. Each primitive
carries a `role` naming what it depicts and, for things drawn on a board
point, that `point`; encoders that cannot draw geometry (the text encoder)
use those instead of the coordinates.
"""

import collections
import logging
import math

from .errors import UnsupportedFormatError
from .goban import BLACK, WHITE
from .layout import CHAR_WIDTH_RATIO


Line = collections.namedtuple(
    'Line', 'x1 y1 x2 y2 stroke width role point opacity',
    defaults=('#000000', 1.0, 'grid', None, 1.0))

Circle = collections.namedtuple(
    'Circle', 'cx cy r fill stroke width role point opacity',
    defaults=('#000000', 'none', 0.0, 'stone_black', None, 1.0))

Polygon = collections.namedtuple(
    'Polygon', 'points fill stroke width role point opacity',
    defaults=('#000000', 'none', 0.0, 'background', None, 1.0))

Text = collections.namedtuple(
    'Text', 'x y text size fill family role point',
    defaults=('#000000', 'sans-serif', 'label', None))

PRIMITIVE_TYPES = (Line, Circle, Polygon, Text)

PRIMITIVE_ORDERING_VERSION = 1
"""Version of the primitive ordering; changes whenever output order does."""

Style = collections.namedtuple(
    'Style',
    'background line_color line_width border_width star_ratio '
    'black_fill black_stroke white_fill white_stroke stone_stroke_ratio '
    'dark_ink light_ink selected_color dim_opacity font_family')
Style.__doc__ = """\
Colors & stroke widths of a diagram. Ratios are relative to the pitch or
the stone radius; widths are in output units per 100 units of pitch."""

STYLES = {
    'simple': Style(
        background='#FFFFFF', line_color='#000000', line_width=1.5,
        border_width=3.0, star_ratio=0.1,
        black_fill='#000000', black_stroke='#000000',
        white_fill='#FFFFFF', white_stroke='#000000',
        stone_stroke_ratio=0.05, dark_ink='#000000', light_ink='#FFFFFF',
        selected_color='#0000FF', dim_opacity=0.6,
        font_family='sans-serif'),
    'fancy': Style(
        background='#DCB35C', line_color='#3D2B1F', line_width=1.5,
        border_width=3.0, star_ratio=0.11,
        black_fill='#1A1A1A', black_stroke='#000000',
        white_fill='#F8F8F0', white_stroke='#505050',
        stone_stroke_ratio=0.04, dark_ink='#000000', light_ink='#FFFFFF',
        selected_color='#1E5AC8', dim_opacity=0.5,
        font_family='serif'),
    'minimalist': Style(
        background=None, line_color='#000000', line_width=1.0,
        border_width=1.0, star_ratio=0.08,
        black_fill='#000000', black_stroke='#000000',
        white_fill='#FFFFFF', white_stroke='#000000',
        stone_stroke_ratio=0.04, dark_ink='#000000', light_ink='#FFFFFF',
        selected_color='#000000', dim_opacity=0.6,
        font_family='sans-serif'),
    }
"""Mapping of style name to `Style`."""

FONT_FALLBACKS = (1.0, 0.75, 0.6)
"""Font size factors tried, in order, when text does not fit."""

STANDARD_STAR_POINTS = {
    (9, 9): ((2, 2), (6, 2), (2, 6), (6, 6)),
    (13, 13): ((3, 3), (9, 3), (6, 6), (3, 9), (9, 9)),
    (19, 19): ((3, 3), (9, 3), (15, 3), (3, 9), (9, 9), (15, 9),
               (3, 15), (9, 15), (15, 15)),
    }
"""Star points (hoshi) of the standard board sizes, in row order."""

log = logging.getLogger(__name__)


def get_style(name):
    """Return the `Style` called `name`."""
    try:
        return STYLES[name]
    except KeyError:
        raise UnsupportedFormatError(
            f'Unknown style "{name}" (choose from: '
            f'{", ".join(sorted(STYLES))})') from None


def star_points(size):
    """
    Return the star points for a board of `size` (width, height), in row
    order. Standard sizes use `STANDARD_STAR_POINTS`. Other sizes get
    corner points on the third line (fourth line from 12 up), plus the
    center from 13 up and side points from 17 up on odd dimensions.
    """
    if size in STANDARD_STAR_POINTS:
        return list(STANDARD_STAR_POINTS[size])
    width, height = size
    if min(size) < 7:
        return []
    edge = 2 if min(size) < 12 else 3
    odd = width % 2 and height % 2
    xs = [edge, width - 1 - edge]
    ys = [edge, height - 1 - edge]
    if odd and min(size) >= 17:
        xs.insert(1, width // 2)
        ys.insert(1, height // 2)
    points = [(x, y) for y in ys for x in xs]
    if odd and 13 <= min(size) < 17:
        points.append((width // 2, height // 2))
    return sorted(points, key=lambda point: (point[1], point[0]))


class RenderOptions:

    """
    Caller options for one diagram (or a sequence of diagrams). Defaults are
    the class attributes; override them with keyword arguments:

        options = RenderOptions(width=400, style='fancy', format='text')
    """

    format = 'svg'
    """Output encoding: "svg" or "text"."""

    width = 800
    """Canvas width, in output units (pixels)."""

    style = 'simple'
    """Style name, a key of `STYLES`."""

    board_labels = True
    """Draw coordinate labels."""

    label_sides = 'nw'
    """Sides with coordinate labels (any of "nesw")."""

    viewport = None
    """Board region to show, ((x0, y0), (x1, y1)), or `None` for all."""

    flip = False
    """Put row 0 (the SGF "a" row) at the bottom."""

    move_numbers = None
    """Range (first, last) of move numbers to show on stones; `last` may be
    `None`. `None` shows no move numbers."""

    highlight_last_move = False
    """Mark the last move played."""

    strict = True
    """Raise on illegal moves; otherwise log and continue."""

    board_size = None
    """Board size (width, height) overriding the SZ property."""

    workers = None
    """Thread count for rendering diagram sequences (`None`: default)."""

    def __init__(self, **settings):
        for (name, value) in settings.items():
            if name.startswith('_') or not hasattr(self.__class__, name):
                raise TypeError(f'Unknown render option "{name}"')
            setattr(self, name, value)

    def __repr__(self):
        settings = ', '.join(
            f'{name}={getattr(self, name)!r}' for name in self.names())
        return f'{self.__class__.__name__}({settings})'

    @classmethod
    def names(cls):
        """Return the option names, in definition order."""
        return [name for (name, value) in vars(cls).items()
                if not name.startswith('_') and not callable(value)
                and not isinstance(value, classmethod)]


class Renderer:

    """
    Produces the primitives for board positions drawn with a `layout.Layout`
    and a `Style`.

    `supported_roles` (a set of role names, or `None` for all) restricts the
    output to what an encoder can represent; see `encoders.Encoder`.
    """

    def __init__(self, layout, style, supported_roles=None,
                 highlight_last_move=False, board_labels=True):
        self.layout = layout
        self.style = style
        self.supported_roles = supported_roles
        self.highlight_last_move = highlight_last_move
        self.board_labels = board_labels
        # stroke widths are given per 100 units of pitch:
        self.scale = layout.pitch / 100

    def render(self, board):
        """Return the list of primitives depicting `board`, back to front."""
        primitives = []
        primitives.extend(self.background())
        primitives.extend(self.grid(board))
        primitives.extend(self.star_points(board))
        primitives.extend(self.stones(board))
        primitives.extend(self.dimming(board))
        primitives.extend(self.markup(board))
        primitives.extend(self.territory(board))
        primitives.extend(self.lines_and_arrows(board))
        primitives.extend(self.texts(board))
        if self.board_labels:
            primitives.extend(self.coordinates())
        if self.supported_roles is not None:
            primitives = [primitive for primitive in primitives
                          if primitive.role in self.supported_roles]
        log.debug('Rendered move %d: %d primitives',
                  board.move_number, len(primitives))
        return primitives

    def visible(self, points):
        """Return the visible `points`, sorted in row order."""
        return sorted((point for point in points
                       if self.layout.contains(point)),
                      key=lambda point: (point[1], point[0]))

    def ink(self, board, point):
        """Return the markup/text color that contrasts with `point`."""
        if board.color_at(point) == BLACK:
            return self.style.light_ink
        return self.style.dark_ink

    def background(self):
        if self.style.background is None:
            return []
        width, height = self.layout.width, self.layout.height
        return [Polygon(
            ((0, 0), (width, 0), (width, height), (0, height)),
            fill=self.style.background, role='background')]

    def grid(self, board):
        """
        Return the grid lines. Board edges use the border width. Lines are
        broken around labels on empty points.
        """
        layout = self.layout
        style = self.style
        left, top, right, bottom = layout.grid_bounds()
        gap = layout.stone_radius * 0.8
        openings = [
            point for point in self.visible(board.labels)
            if board.labels[point] and board.color_at(point) is None]
        lines = []
        for (row, y) in zip(layout.rows, layout.ys):
            width = (style.border_width if layout.is_edge_row(row)
                     else style.line_width) * self.scale
            gaps = [layout.point_xy(point)[0] for point in openings
                    if point[1] == row]
            for (start, end) in self._segments(left, right, gaps, gap):
                lines.append(Line(start, y, end, y, style.line_color, width))
        for (column, x) in zip(layout.columns, layout.xs):
            width = (style.border_width if layout.is_edge_column(column)
                     else style.line_width) * self.scale
            gaps = [layout.point_xy(point)[1] for point in openings
                    if point[0] == column]
            for (start, end) in self._segments(top, bottom, gaps, gap):
                lines.append(Line(x, start, x, end, style.line_color, width))
        return lines

    @staticmethod
    def _segments(start, end, gaps, half_width):
        segments = []
        for center in sorted(gaps):
            if center - half_width > start:
                segments.append((start, center - half_width))
            start = max(start, center + half_width)
        if end > start:
            segments.append((start, end))
        return segments

    def star_points(self, board):
        radius = max(self.style.star_ratio * self.layout.pitch, 1.5)
        primitives = []
        for point in self.visible(star_points(self.layout.size)):
            if board.color_at(point) is not None or point in board.labels:
                continue
            x, y = self.layout.point_xy(point)
            primitives.append(Circle(
                x, y, radius, self.style.line_color, role='star',
                point=point))
        return primitives

    def stones(self, board):
        style = self.style
        radius = self.layout.stone_radius
        stroke_width = style.stone_stroke_ratio * radius
        primitives = []
        for point in self.visible(board.stones):
            x, y = self.layout.point_xy(point)
            if board.stones[point] == BLACK:
                primitives.append(Circle(
                    x, y, radius, style.black_fill, style.black_stroke,
                    stroke_width, 'stone_black', point))
            else:
                primitives.append(Circle(
                    x, y, radius, style.white_fill, style.white_stroke,
                    stroke_width, 'stone_white', point))
        return primitives

    def dimming(self, board):
        """Return translucent discs over dimmed stones."""
        background = self.style.background or '#FFFFFF'
        primitives = []
        for point in self.visible(board.dimmed):
            if board.color_at(point) is None:
                continue
            x, y = self.layout.point_xy(point)
            primitives.append(Circle(
                x, y, self.layout.stone_radius * 1.02, background,
                role='dim', point=point, opacity=self.style.dim_opacity))
        return primitives

    def markup(self, board):
        radius = self.layout.stone_radius
        stroke_width = radius * 0.1
        primitives = []
        for point in self.visible(board.markup):
            shape = board.markup[point]
            x, y = self.layout.point_xy(point)
            ink = self.ink(board, point)
            if shape == 'circle':
                primitives.append(Circle(
                    x, y, radius * 0.5, 'none', ink, stroke_width,
                    'circle', point))
            elif shape == 'square':
                primitives.append(Polygon(
                    self._square(x, y, radius * 0.45), 'none', ink,
                    stroke_width, 'square', point))
            elif shape == 'triangle':
                primitives.append(Polygon(
                    ((x, y - radius * 0.6),
                     (x + radius * 0.52, y + radius * 0.3),
                     (x - radius * 0.52, y + radius * 0.3)),
                    'none', ink, stroke_width, 'triangle', point))
            elif shape == 'mark':
                size = radius * 0.4
                primitives.append(Line(
                    x - size, y - size, x + size, y + size, ink,
                    stroke_width, 'mark', point))
                primitives.append(Line(
                    x - size, y + size, x + size, y - size, ink,
                    stroke_width, 'mark', point))
            elif shape == 'selected':
                primitives.append(Polygon(
                    self._square(x, y, radius * 0.55),
                    self.style.selected_color, role='selected', point=point,
                    opacity=0.5))
        if self.highlight_last_move:
            primitives.extend(self.last_move(board))
        return primitives

    def last_move(self, board):
        point = board.last_move
        if (point is None or not self.layout.contains(point)
              or board.color_at(point) is None or point in board.markup
              or point in board.labels or point in board.move_numbers):
            return []
        x, y = self.layout.point_xy(point)
        radius = self.layout.stone_radius
        return [Circle(
            x, y, radius * 0.35, 'none', self.ink(board, point),
            radius * 0.12, 'last_move', point)]

    def territory(self, board):
        radius = self.layout.stone_radius
        primitives = []
        for point in self.visible(board.territory):
            x, y = self.layout.point_xy(point)
            if board.territory[point] == BLACK:
                fill, role = self.style.black_fill, 'territory_black'
            else:
                fill, role = self.style.white_fill, 'territory_white'
            primitives.append(Polygon(
                self._square(x, y, radius * 0.3), fill, self.style.dark_ink,
                radius * 0.05, role, point))
        return primitives

    def lines_and_arrows(self, board):
        """Return LN lines & AR arrows; hidden unless both ends are
        visible."""
        layout = self.layout
        width = layout.stone_radius * 0.12
        primitives = []
        for (role, pairs) in (('line', board.lines), ('arrow', board.arrows)):
            for (start, end) in pairs:
                if not (layout.contains(start) and layout.contains(end)):
                    continue
                x1, y1 = layout.point_xy(start)
                x2, y2 = layout.point_xy(end)
                ink = self.style.selected_color
                if role == 'line':
                    primitives.append(Line(
                        x1, y1, x2, y2, ink, width, role, start))
                    continue
                length = math.hypot(x2 - x1, y2 - y1)
                ux, uy = (x2 - x1) / length, (y2 - y1) / length
                head = layout.stone_radius * 0.6
                base_x, base_y = x2 - ux * head, y2 - uy * head
                primitives.append(Line(
                    x1, y1, base_x, base_y, ink, width, role, start))
                primitives.append(Polygon(
                    ((x2, y2),
                     (base_x - uy * head / 2, base_y + ux * head / 2),
                     (base_x + uy * head / 2, base_y - ux * head / 2)),
                    ink, role=role, point=end))
        return primitives

    def texts(self, board):
        """
        Return labels (LB) and move numbers, centered on their points. A
        label on a point takes precedence over a move number.
        """
        limit = self.layout.stone_radius * 2 * 0.9
        primitives = []
        texts = {point: (str(number), 'number')
                 for (point, number) in board.move_numbers.items()
                 if board.color_at(point) is not None}
        texts.update((point, (text, 'label'))
                     for (point, text) in board.labels.items())
        for point in self.visible(texts):
            text, role = texts[point]
            if not text:
                continue
            size = fit_text(text, self.layout.font_size, limit)
            if size is None:
                log.debug('Omitted %s "%s" at %s: too wide', role, text, point)
                continue
            x, y = self.layout.point_xy(point)
            primitives.append(Text(
                x, y, text, size, self.ink(board, point),
                self.style.font_family, role, point))
        return primitives

    def coordinates(self):
        return [Text(x, y, text, self.layout.coordinate_font_size,
                     self.style.dark_ink, self.style.font_family,
                     'coordinate')
                for (text, x, y) in self.layout.coordinate_labels()]

    @staticmethod
    def _square(x, y, half):
        return ((x - half, y - half), (x + half, y - half),
                (x + half, y + half), (x - half, y + half))


def fit_text(text, font_size, limit):
    """
    Return the largest font size (trying `FONT_FALLBACKS` factors of
    `font_size`) at which `text` is no wider than `limit`, or `None`.
    """
    for factor in FONT_FALLBACKS:
        size = font_size * factor
        if len(text) * size * CHAR_WIDTH_RATIO <= limit:
            return size
    return None
