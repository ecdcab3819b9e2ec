# -*- coding: utf-8 -*-

# encoders.py (drawing primitives to output bytes)
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
Output encoders. Each encoder serializes a `Diagram` (a layout plus the
primitive list produced by `renderer.Renderer`) to bytes.

Encoders declare the primitive roles they can represent in
`supported_roles`; the renderer is given that set and emits nothing else, so
`UnsupportedPrimitiveError` signals a programming error.
"""

import collections
import xml.etree.ElementTree as ET

from .errors import UnsupportedPrimitiveError, UnsupportedFormatError
from .renderer import Line, Circle, Polygon, Text


Diagram = collections.namedtuple('Diagram', 'layout primitives')

SVG_NAMESPACE = 'http://www.w3.org/2000/svg'


def format_number(value):
    """Format `value` with at most 2 decimals and no trailing zeros."""
    text = f'{value:.2f}'.rstrip('0').rstrip('.')
    return '0' if text == '-0' else text


class Encoder:

    """
    Abstract base class for encoders. Subclasses define `name`,
    `supported_roles`, and an `encode(diagram)` method returning bytes.
    """

    name = None
    supported_roles = frozenset()

    def encode(self, diagram):
        raise NotImplementedError

    def unsupported(self, primitive):
        return UnsupportedPrimitiveError(
            f'The {self.name} encoder cannot represent '
            f'{type(primitive).__name__} primitives with role '
            f'"{primitive.role}"')


class SvgEncoder(Encoder):

    """Scalable Vector Graphics (SVG 1.1) output."""

    name = 'svg'
    supported_roles = frozenset((
        'background', 'grid', 'star', 'stone_black', 'stone_white', 'dim',
        'circle', 'square', 'triangle', 'mark', 'selected', 'last_move',
        'territory_black', 'territory_white', 'line', 'arrow', 'number',
        'label', 'coordinate',))

    def encode(self, diagram):
        layout = diagram.layout
        width = format_number(layout.width)
        height = format_number(layout.height)
        svg = ET.Element('svg', {
            'xmlns': SVG_NAMESPACE,
            'version': '1.1',
            'width': width,
            'height': height,
            'viewBox': f'0 0 {width} {height}',
            })
        for primitive in diagram.primitives:
            self.add_element(svg, primitive)
        return (b'<?xml version="1.0" encoding="UTF-8"?>\n'
                + ET.tostring(svg, encoding='unicode').encode('UTF-8')
                + b'\n')

    def add_element(self, parent, primitive):
        if primitive.role not in self.supported_roles:
            raise self.unsupported(primitive)
        if isinstance(primitive, Line):
            element = ET.SubElement(parent, 'line', {
                'x1': format_number(primitive.x1),
                'y1': format_number(primitive.y1),
                'x2': format_number(primitive.x2),
                'y2': format_number(primitive.y2),
                'stroke': primitive.stroke,
                'stroke-width': format_number(primitive.width),
                'stroke-linecap': 'square',
                })
        elif isinstance(primitive, Circle):
            element = ET.SubElement(parent, 'circle', {
                'cx': format_number(primitive.cx),
                'cy': format_number(primitive.cy),
                'r': format_number(primitive.r),
                'fill': primitive.fill,
                })
            self.add_stroke(element, primitive)
        elif isinstance(primitive, Polygon):
            element = ET.SubElement(parent, 'polygon', {
                'points': ' '.join(
                    f'{format_number(x)},{format_number(y)}'
                    for (x, y) in primitive.points),
                'fill': primitive.fill,
                })
            self.add_stroke(element, primitive)
        elif isinstance(primitive, Text):
            element = ET.SubElement(parent, 'text', {
                'x': format_number(primitive.x),
                'y': format_number(primitive.y),
                'font-size': format_number(primitive.size),
                'font-family': primitive.family,
                'text-anchor': 'middle',
                'dominant-baseline': 'central',
                'fill': primitive.fill,
                })
            element.text = primitive.text
        else:
            raise self.unsupported(primitive)
        if getattr(primitive, 'opacity', 1.0) != 1.0:
            element.set('opacity', format_number(primitive.opacity))
        element.set('class', primitive.role)

    @staticmethod
    def add_stroke(element, primitive):
        if primitive.stroke != 'none' and primitive.width > 0:
            element.set('stroke', primitive.stroke)
            element.set('stroke-width', format_number(primitive.width))


class TextEncoder(Encoder):

    """
    Plain text character grid: one character per board point, coordinate
    labels around the grid. Points are identified by the primitives'
    `point` attributes; coordinate labels by their position relative to the
    grid.
    """

    name = 'text'

    glyphs = {
        'empty': '.',
        'star': '+',
        'stone_black': 'X',
        'stone_white': 'O',
        'triangle': '^',
        'square': '#',
        'circle': '*',
        'mark': 'x',
        'selected': '!',
        'territory_black': 'b',
        'territory_white': 'w',
        }
    """Mapping of primitive role to character."""

    empty_point_roles = {
        'triangle', 'square', 'circle', 'mark', 'selected',
        'territory_black', 'territory_white', 'label',}
    """Roles that are only shown on points without a stone."""

    ignored_roles = {'background', 'grid', 'dim', 'number', 'last_move',}
    """Roles that have no character representation of their own."""

    supported_roles = frozenset(
        set(glyphs) | empty_point_roles | ignored_roles | {'coordinate'})

    def encode(self, diagram):
        layout = diagram.layout
        cells = {(column, row): self.glyphs['empty']
                 for column in layout.columns for row in layout.rows}
        stones = set()
        coordinates = collections.defaultdict(dict)
        for primitive in diagram.primitives:
            role = primitive.role
            if role not in self.supported_roles:
                raise self.unsupported(primitive)
            if role in self.ignored_roles:
                continue
            if role == 'coordinate':
                side, index = self.coordinate_position(layout, primitive)
                coordinates[side][index] = primitive.text
                continue
            point = primitive.point
            if role in ('stone_black', 'stone_white'):
                stones.add(point)
            elif point in stones:
                continue
            if role == 'label':
                if len(primitive.text) == 1:
                    cells[point] = primitive.text
            else:
                cells[point] = self.glyphs[role]
        return self.format_grid(layout, cells, coordinates).encode('UTF-8')

    @staticmethod
    def coordinate_position(layout, primitive):
        """Return (side, column or row index) of a coordinate label."""
        x, y = primitive.x, primitive.y
        if y < layout.ys[0]:
            side = 'n'
        elif y > layout.ys[-1]:
            side = 's'
        elif x < layout.xs[0]:
            side = 'w'
        else:
            side = 'e'
        if side in 'ns':
            return side, round((x - layout.xs[0]) / layout.pitch)
        return side, round((y - layout.ys[0]) / layout.pitch)

    @staticmethod
    def format_grid(layout, cells, coordinates):
        cell_width = max(
            [1] + [len(text) for text in coordinates['n'].values()]
            + [len(text) for text in coordinates['s'].values()])
        west_width = max(
            [0] + [len(text) for text in coordinates['w'].values()])
        lines = []

        def column_header(side):
            texts = [coordinates[side].get(index, '').ljust(cell_width)
                     for index in range(len(layout.columns))]
            prefix = ' ' * (west_width + 1) if west_width else ''
            return (prefix + ' '.join(texts)).rstrip()

        if coordinates['n']:
            lines.append(column_header('n'))
        for (index, row) in enumerate(layout.rows):
            parts = []
            if west_width:
                parts.append(coordinates['w'].get(index, '').rjust(west_width))
            parts.append(' '.join(
                cells[(column, row)].ljust(cell_width)
                for column in layout.columns))
            if coordinates['e']:
                parts.append(coordinates['e'].get(index, ''))
            lines.append(' '.join(parts).rstrip())
        if coordinates['s']:
            lines.append(column_header('s'))
        return '\n'.join(lines) + '\n'


ENCODERS = {encoder.name: encoder for encoder in (SvgEncoder, TextEncoder)}
"""Mapping of output format name to `Encoder` class."""


def get_encoder(name):
    """Return an instance of the encoder for the output format `name`."""
    try:
        return ENCODERS[name]()
    except KeyError:
        raise UnsupportedFormatError(
            f'Unknown output format "{name}" (choose from: '
            f'{", ".join(sorted(ENCODERS))})') from None
