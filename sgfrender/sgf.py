# -*- coding: utf-8 -*-

# sgf.py (Smart Game Format parser & game tree model)
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
=========================================
 Smart Game Format Parser & Game Tree Model
=========================================

This module contains a parser and classes for SGF, the Smart Game Format,
file format 4 (FF[4]). (See `the official SGF specification
<https://www.red-bean.com/sgf/>`_.)

Given a bytestring containing a complete SGF data instance (the contents of a
.sgf file), the `Parser` class will create a `Collection` object consisting of
one or more `GameTree` instances (one per game in the SGF file). Each
`GameTree` wraps a root `Node`; each `Node` contains an ordered mapping of
properties (ID to list of raw values) and a list of child nodes. A node with
more than one child is a branch point (variations).

Property values are stored as raw text (escapes removed, charset decoded).
Typed interpretation happens in the `Node` accessor methods (`Node.get_points`,
`Node.get_move` etc.), which validate the values against a board size.

The path to render is chosen with a `Selection` and resolved by
`GameTree.resolve()` into the list of nodes from the root to the target.

The default representation (using ``str()``/``bytes()``) of `Collection`,
`GameTree` and `Node` objects is the Smart Game Format itself.
"""

import sys
import re
import codecs
import logging
import string
import warnings

from .errors import (
    StructureError, PropertyFormatError, PathError, UnsupportedBoardSizeError)


TEXT_ENCODING = 'UTF-8'
"""Encoding used for all text output."""

DEFAULT_CHARSET = 'UTF-8'
"""Encoding assumed for property values when there is no CA property."""

DEFAULT_BOARD_SIZE = (19, 19)
"""Board size (width, height) when the root node has no SZ property."""

MAX_BOARD_SIZE = 52
"""Largest board dimension expressible with SGF point letters."""

MAX_DEPTH = 400
"""Default limit on the nesting depth of variations."""

MAX_NODES = 1000000
"""Default limit on the total number of nodes in one parse."""

POINT_LETTERS = string.ascii_lowercase + string.ascii_uppercase
"""SGF coordinate letters: "a" is 0, "z" is 25, "A" is 26, "Z" is 51."""

log = logging.getLogger(__name__)


def decode_point(text, size=None, property_id=None):
    """
    Return the (x, y) point for the two-letter SGF coordinate `text`.

    If `size` (width, height) is given, the point must lie on the board.
    Raise `PropertyFormatError` otherwise.
    """
    if len(text) != 2 or any(char not in POINT_LETTERS for char in text):
        raise PropertyFormatError(
            'Malformed point (expected two letters)', property_id, text)
    x, y = (POINT_LETTERS.index(char) for char in text)
    if size is not None and not (x < size[0] and y < size[1]):
        raise PropertyFormatError(
            f'Point is outside of the {size[0]}x{size[1]} board',
            property_id, text)
    return (x, y)


def format_point(point):
    """Return the two-letter SGF coordinate for the (x, y) `point`."""
    x, y = point
    return POINT_LETTERS[x] + POINT_LETTERS[y]


def check_board_size(size):
    """Raise `UnsupportedBoardSizeError` unless `size` is supported."""
    width, height = size
    if not (1 <= width <= MAX_BOARD_SIZE and 1 <= height <= MAX_BOARD_SIZE):
        raise UnsupportedBoardSizeError(
            f'Unsupported board size {width}x{height} (each dimension '
            f'must be between 1 and {MAX_BOARD_SIZE})')
    return size


class Collection(list):

    """
    A `Collection` is a `list` of one or more `GameTree` objects.
    """

    path = None

    def __str__(self):
        """
        SGF text representation, accessed via `str(collection)`.
        Separates game trees with a blank line.
        """
        return '\n\n'.join(str(item) for item in self)

    def __bytes__(self):
        """
        SGF bytes representation, accessed via `bytes(collection)`.
        Separates game trees with a blank line.
        """
        return b'\n\n'.join(bytes(item) for item in self)

    def __repr__(self):
        return '{}({}, ...)'.format(self.__class__.__name__, repr(self[0]))

    def game(self, number=0):
        """Return game `number` (0-based). Raise `PathError` if missing."""
        if not 0 <= number < len(self):
            raise PathError(
                f'Game number {number} does not exist (the collection '
                f'contains {len(self)} game(s))')
        return self[number]

    @classmethod
    def load(cls, path=None, data=None, parser_class=None):
        """
        Return a `Collection` loaded a filesystem `path` (`None` or "-" reads
        from <stdin>) or from `data`.

        The default `parser_class` is `Parser`.
        """
        if data is None:
            if path == '-':
                path = None
            if path:
                with open(path, 'rb') as src:
                    data = src.read()
            else:
                # read bytestring from <stdin>:
                data = sys.stdin.buffer.read()
        if parser_class is None:
            parser_class = Parser
        parser = parser_class(data)
        collection = parser.parse()
        collection.path = path
        return collection


class GameTree:

    """
    An SGF game tree: the root `Node` of one game, and through its
    descendants, every variation of the game.

    Instance attributes:

    self.root : `Node`
       The root node (game information & initial setup).

    self.charset : string
       The character set the property values were decoded from.
    """

    def __init__(self, root, charset=DEFAULT_CHARSET):
        self.root = root
        self.charset = charset

    def __eq__(self, other):
        return isinstance(other, GameTree) and self.root == other.root

    def __str__(self):
        """Return an SGF representation of this `GameTree`."""
        return self._subtree_str(self.root)

    def __bytes__(self):
        """Return an SGF bytes representation of this `GameTree`."""
        return bytes(str(self), TEXT_ENCODING)

    def __repr__(self):
        return '{}(root={!r})'.format(self.__class__.__name__, self.root)

    @classmethod
    def _subtree_str(cls, node):
        parts = ['(', str(node)]
        while len(node.children) == 1:
            node = node.children[0]
            parts.append(str(node))
        parts.extend(cls._subtree_str(child) for child in node.children)
        parts.append(')')
        return '\n'.join(parts)

    @property
    def size(self):
        """Board size (width, height) from the root node's SZ property."""
        return self.root.get_size()

    def mainline(self):
        """Return the main line of the game (first variations) as a list."""
        nodes = [self.root]
        while nodes[-1].children:
            nodes.append(nodes[-1].children[0])
        return nodes

    def resolve(self, selection=None):
        """
        Return the list of `Node` objects from the root to the node chosen by
        `selection` (a `Selection`; default: the last node of the main line).

        Raise `PathError` if the selection references a nonexistent branch,
        node, or move number.
        """
        if selection is None:
            selection = Selection()
        path = [self.root]
        forks = list(selection.variation)
        node = self.root
        while node.children:
            index = 0
            if len(node.children) > 1 and forks:
                index = forks.pop(0)
                if not 0 <= index < len(node.children):
                    raise PathError(
                        f'Variation {index} does not exist at node '
                        f'{len(path) - 1} (it has {len(node.children)} '
                        f'variations)')
            node = node.children[index]
            path.append(node)
        if forks:
            raise PathError(
                f'The variation path {list(selection.variation)} has more '
                f'entries than the line has branch points')
        if selection.move is not None:
            move_number = 0
            for (index, node) in enumerate(path):
                move_number = node.next_move_number(move_number)
                if node.is_move() and move_number == selection.move:
                    return path[:index + 1]
            raise PathError(
                f'Move {selection.move} is not on the selected line '
                f'(last move: {move_number})')
        if selection.node is not None:
            if not 0 <= selection.node < len(path):
                raise PathError(
                    f'Node {selection.node} does not exist on the selected '
                    f'line (last node: {len(path) - 1})')
            return path[:selection.node + 1]
        return path


class Selection:

    """
    The caller's choice of which node of a `GameTree` to show.

    - variation : sequence of int -- The variation (child index) to take at
      each successive branch point; the first variation is taken at branch
      points beyond the end of the sequence.
    - node : int or `None` -- Node number along the chosen line (the root is
      node 0). `None` means the last node.
    - move : int or `None` -- Alternatively, the node where move number
      `move` is played.
    - game : int -- The game (0-based) within a `Collection`.
    """

    def __init__(self, variation=(), node=None, move=None, game=0):
        self.variation = tuple(variation)
        self.node = node
        self.move = move
        self.game = game

    def __repr__(self):
        return '{}(variation={!r}, node={!r}, move={!r}, game={!r})'.format(
            self.__class__.__name__, self.variation, self.node, self.move,
            self.game)

    @staticmethod
    def parse_variation(text):
        """Return a variation tuple from text like "1,0,2" or "1.0.2"."""
        text = text.strip()
        if not text:
            return ()
        try:
            return tuple(int(part) for part in re.split(r'[,.]', text))
        except ValueError:
            raise PathError(f'Malformed variation path: "{text}"') from None


class Node(dict):

    """
    An SGF node (one move or play, or initial setup), consisting of properties
    (ID: list of values pairs), plus `self.children`, the list of following
    nodes. More than one child means variations branch from this node.

    Example: Let ``node`` be a `Node` parsed from ';B[aa]BL[250]C[comment]':

    * node['BL'] =>  ['250']
    * node['B']  =>  ['aa']
    * node.get_move('B', (19, 19)) => (0, 0)
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.children = []

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return dict.__eq__(self, other) and self.children == other.children

    def __ne__(self, other):
        equal = self.__eq__(other)
        return equal if equal is NotImplemented else not equal

    __hash__ = None

    def __str__(self):
        """Return an SGF text representation of this `Node`."""
        parts = [';']
        for (name, values) in self.items():
            parts.append(name)
            parts.append('[')
            parts.append(']['.join(self.escape_text(item) for item in values))
            parts.append(']')
        return ''.join(parts)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join('{}={!r}'.format(name, values)
                      for name, values in self.items()))

    chars_to_escape = ['\\', ']']
    """List of characters that need to be backslash-escaped."""

    chars_to_escape_pattern = re.compile(
        '(' + '|'.join(re.escape(char) for char in chars_to_escape) + ')')
    """Regexp pattern for isolating characters for backslash escaping."""

    def escape_text(self, text):
        """Add backslash-escapes to property value characters that need them."""
        return ''.join(
            # escapable characters are at all odd indexes:
            ('\\' if index % 2 else '') + part
            for (index, part) in enumerate(
                self.chars_to_escape_pattern.split(text)))

    # Node classification

    def is_move(self):
        return bool(self.keys() & self.move_required_properties)

    def is_setup(self):
        return bool(self.keys() & self.setup_stone_properties)

    def next_move_number(self, previous):
        """
        Return the move number in effect after this node, given the
        `previous` one: MN sets it, a move (including a pass) increments it.
        """
        if 'MN' in self:
            return self.get_number('MN')
        if self.is_move():
            return previous + 1
        return previous

    # Typed accessors

    def _single(self, property_id):
        values = self[property_id]
        if len(values) != 1:
            raise PropertyFormatError(
                f'Expected a single value, got {len(values)}',
                property_id, ']['.join(values))
        return values[0]

    def get_text(self, property_id, default=None):
        """Return the text value of `property_id`, or `default`."""
        if property_id not in self:
            return default
        return self._single(property_id)

    number_pattern = re.compile(r'[+-]?\d+$')
    real_pattern = re.compile(r'[+-]?(\d+(\.\d*)?|\.\d+)$')

    def get_number(self, property_id, default=None, minimum=None,
                   maximum=None):
        """
        Return the integer value of `property_id`, or `default`. Raise
        `PropertyFormatError` if it is malformed or out of range.
        """
        if property_id not in self:
            return default
        value = self._single(property_id)
        if not self.number_pattern.match(value.strip()):
            raise PropertyFormatError('Malformed number', property_id, value)
        number = int(value)
        if ((minimum is not None and number < minimum)
              or (maximum is not None and number > maximum)):
            raise PropertyFormatError(
                f'Number out of range ({minimum}..{maximum})',
                property_id, value)
        return number

    def get_real(self, property_id, default=None):
        """Return the real-number value of `property_id`, or `default`."""
        if property_id not in self:
            return default
        value = self._single(property_id)
        if not self.real_pattern.match(value.strip()):
            raise PropertyFormatError(
                'Malformed real number', property_id, value)
        return float(value)

    def get_point(self, property_id, size, default=None):
        """Return the single (x, y) point of `property_id`, or `default`."""
        if property_id not in self:
            return default
        return decode_point(self._single(property_id), size, property_id)

    def get_points(self, property_id, size):
        """
        Return the list of points of `property_id` (empty if absent).
        Compressed point lists ("aa:cc" rectangles) are expanded row by row;
        duplicates are dropped. The single empty value of an elist (e.g.
        "DD[]") yields an empty list.
        """
        if property_id not in self:
            return []
        values = self[property_id]
        if values == [''] and property_id in self.elist_properties:
            return []
        points = {}
        for value in values:
            if ':' in value:
                start, _, end = value.partition(':')
                (x0, y0) = decode_point(start, size, property_id)
                (x1, y1) = decode_point(end, size, property_id)
                for y in range(min(y0, y1), max(y0, y1) + 1):
                    for x in range(min(x0, x1), max(x0, x1) + 1):
                        points[(x, y)] = None
            else:
                points[decode_point(value, size, property_id)] = None
        return list(points)

    def get_move(self, property_id, size):
        """
        Return the point played by the move `property_id` ("B" or "W"), or
        `None` for a pass ("[]", or "[tt]" on boards up to 19x19). The point
        is not checked against the board; the simulator does that.
        """
        value = self._single(property_id)
        if value == '' or (value == 'tt' and size[0] <= 19 and size[1] <= 19):
            return None
        return decode_point(value, None, property_id)

    def get_labels(self, property_id, size):
        """Return a list of (point, text) pairs from "point:text" values."""
        labels = []
        for value in self.get(property_id, []):
            point, colon, text = value.partition(':')
            if not colon:
                raise PropertyFormatError(
                    'Expected "point:text"', property_id, value)
            labels.append((decode_point(point, size, property_id), text))
        return labels

    def get_point_pairs(self, property_id, size):
        """Return a list of (point, point) pairs from "point:point" values."""
        pairs = []
        for value in self.get(property_id, []):
            start, colon, end = value.partition(':')
            if not colon:
                raise PropertyFormatError(
                    'Expected "point:point"', property_id, value)
            pair = (decode_point(start, size, property_id),
                    decode_point(end, size, property_id))
            if pair[0] == pair[1]:
                raise PropertyFormatError(
                    'Start and end points are the same', property_id, value)
            pairs.append(pair)
        return pairs

    def get_size(self):
        """
        Return the board size (width, height) from the SZ property ("19" or
        "19:13"), defaulting to 19x19.
        """
        if 'SZ' not in self:
            return DEFAULT_BOARD_SIZE
        value = self._single('SZ')
        match = re.match(r'\s*(\d+)\s*(?::\s*(\d+)\s*)?$', value)
        if not match:
            raise PropertyFormatError('Malformed board size', 'SZ', value)
        width = int(match.group(1))
        height = int(match.group(2)) if match.group(2) else width
        return check_board_size((width, height))

    def typed(self, property_id, size):
        """
        Return the value of `property_id` decoded according to its value
        type (see `self.value_types`); unknown properties return their raw
        list of values.
        """
        value_type = self.value_types.get(property_id)
        if value_type == 'move':
            return self.get_move(property_id, size)
        elif value_type == 'point_list':
            return self.get_points(property_id, size)
        elif value_type == 'label_list':
            return self.get_labels(property_id, size)
        elif value_type == 'point_pair_list':
            return self.get_point_pairs(property_id, size)
        elif value_type == 'number':
            return self.get_number(property_id)
        elif value_type == 'real':
            return self.get_real(property_id)
        elif value_type == 'size':
            return self.get_size()
        elif value_type == 'text':
            return self.get_text(property_id)
        return list(self.get(property_id, []))

    setup_stone_properties = {'AB', 'AW', 'AE',}
    """IDs of setup properties that place or remove stones."""

    move_required_properties = {'B', 'W',}
    """IDs of properties that must appear in move nodes."""

    text_properties = {
        'AN', 'AP', 'BR', 'BT', 'C', 'CA', 'CP', 'DT', 'EV', 'GC', 'GN',
        'N', 'ON', 'OT', 'PB', 'PC', 'PW', 'RE', 'RO', 'RU', 'SO', 'US',
        'WR', 'WT',}
    """IDs of properties with values of type text & simpletext."""

    elist_properties = {'DD', 'VW', 'TB', 'TW',}
    """IDs of point-list properties that may be empty ("DD[]")."""

    value_types = {
        'B': 'move', 'W': 'move',
        'AB': 'point_list', 'AW': 'point_list', 'AE': 'point_list',
        'CR': 'point_list', 'SQ': 'point_list', 'TR': 'point_list',
        'MA': 'point_list', 'SL': 'point_list', 'DD': 'point_list',
        'TB': 'point_list', 'TW': 'point_list', 'VW': 'point_list',
        'LB': 'label_list',
        'AR': 'point_pair_list', 'LN': 'point_pair_list',
        'MN': 'number', 'HA': 'number', 'FF': 'number', 'GM': 'number',
        'PM': 'number', 'OB': 'number', 'OW': 'number',
        'KM': 'real', 'BL': 'real', 'WL': 'real', 'TM': 'real', 'V': 'real',
        'SZ': 'size',
        **{property_id: 'text' for property_id in text_properties},
        }
    """Mapping of property ID to value type, used by `Node.typed()`."""


class Parser:

    """
    Parser for SGF data. Creates a tree structure based on the SGF standard
    itself. `Parser.parse()` will return a `Collection` object for the
    entire data.

    Parsing is a single pass over the data. Nested variations recurse, and
    the nesting depth is limited by `max_depth`; the total number of nodes
    is limited by `max_nodes`. Either limit raises `StructureError`.
    """

    encoding = DEFAULT_CHARSET

    class patterns:
        """Regular expression text matching patterns."""
        game_tree_start = re.compile(rb'[^(]*(\()')
        game_tree_later = re.compile(rb'(\()\s*;')
        game_tree_next  = re.compile(rb'\s*(;|\(|\))')
        whitespace      = re.compile(rb'\s*')
        property_id     = re.compile(rb'\s*([A-Za-z]+)')
        property_start  = re.compile(rb'\s*\[')
        value_special   = re.compile(rb'[\]\\]')
        line_break      = re.compile(rb'\r\n?|\n\r?')    # CR, LF, CR/LF, LF/CR

    def __init__(self, data, max_depth=MAX_DEPTH, max_nodes=MAX_NODES):
        if isinstance(data, str):
            data = data.encode(TEXT_ENCODING)

        self.data = data
        """The complete SGF data instance (`bytes`)."""

        self.datalen = len(data)
        """Length of `self.data`."""

        self.index = 0
        """Current parsing position in `self.data`."""

        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self.node_count = 0

    def parse(self):
        """
        Parse the SGF data stored in `self.data`, and return a `Collection`.

        Raise `StructureError` if no game tree is found.
        """
        collection = Collection()
        game = self.parse_one_game(self.patterns.game_tree_start.match)
        while game is not None:
            collection.append(game)
            # text after a game is skipped unless it starts another game:
            game = self.parse_one_game(self.patterns.game_tree_later.search)
        if not collection:
            raise StructureError('No SGF game tree found', self.index)
        log.debug('Parsed %d game(s), %d node(s)',
                  len(collection), self.node_count)
        return collection

    def parse_one_game(self, find):
        """
        Parse one game from `self.data`. Return a `GameTree` containing one
        game, or `None` if no game is found. `find` is the `match` or
        `search` method of a pattern locating the opening "(" as group 1;
        data before it is skipped.
        """
        match = find(self.data, self.index)
        if not match:
            return None
        start = match.start(1)
        self.index = start + 1
        # each game starts with the default charset:
        self.encoding = self.__class__.encoding
        root = self.parse_game_tree(start, depth=1)
        return GameTree(root, self.encoding)

    def parse_game_tree(self, start, depth):
        """
        Parse one game tree (or variation) and return its first `Node`.

        Called when "(" (at offset `start`) has been consumed, ends when the
        matching ")" is consumed.

        Raise `StructureError` if a problem is encountered.
        """
        if depth > self.max_depth:
            raise StructureError(
                f'Variations are nested more than {self.max_depth} '
                f'levels deep', start)
        first = last = None
        has_variations = False
        while self.index < self.datalen:
            match = self.patterns.game_tree_next.match(self.data, self.index)
            if not match:
                offset = self.patterns.whitespace.match(
                    self.data, self.index).end()
                if offset >= self.datalen:
                    break
                raise StructureError(
                    'Expected ";", "(" or ")", found {!r}'.format(
                        self.data[offset:offset + 1].decode('latin-1')),
                    offset)
            token_offset = match.start(1)
            self.index = match.end()
            token = match.group(1)
            if token == b';':
                if has_variations:
                    raise StructureError(
                        'A node was encountered after a variation',
                        token_offset)
                node = self.parse_node()
                if last is None:
                    first = node
                else:
                    last.children.append(node)
                last = node
            elif token == b'(':
                if last is None:
                    raise StructureError(
                        'A variation must follow at least one node',
                        token_offset)
                last.children.append(
                    self.parse_game_tree(token_offset, depth + 1))
                has_variations = True
            else:
                if first is None:
                    raise StructureError(
                        'Empty game tree (no nodes)', token_offset)
                return first
        raise StructureError(
            'Unexpected end of data: game tree is not closed with ")"', start)

    def parse_node(self):
        """
        Parse and return one `Node`, which can be empty.

        Called when ";" encountered (& is consumed).

        Per the SGF standard,

            Only one of each property is allowed per node, e.g. one cannot
            have two comments in one node

        However, at least one online server (OGS) produces SGF files with
        multiple comments per node; their values are appended.
        """
        self.node_count += 1
        if self.node_count > self.max_nodes:
            raise StructureError(
                f'More than {self.max_nodes} nodes', self.index - 1)
        node = Node()
        while self.index < self.datalen:
            match = self.patterns.property_id.match(self.data, self.index)
            if not match:
                # reached end of Node
                return node
            raw_id = match.group(1)
            # FF[1]-FF[3] long names (e.g. "AddBlack"): only capitals count
            property_id = ''.join(
                char for char in raw_id.decode('ascii') if char.isupper())
            if not property_id:
                raise StructureError(
                    f'Property identifier "{raw_id.decode("ascii")}" has no '
                    f'uppercase letters', match.start(1))
            self.index = match.end()
            values = self.parse_property_value(property_id, match.start(1))
            if property_id == 'CA':
                self.set_encoding(values[0])
                # detect encoding on input, force UTF-8 on output:
                values = [TEXT_ENCODING]
            if property_id in node:
                warnings.warn(
                    f'Duplicate property ID "{property_id}" in node '
                    f'(existing value: {node[property_id]}; new value: '
                    f'{values}). Appending new value.')
                node[property_id].extend(values)
            else:
                node[property_id] = values
        return node

    def parse_property_value(self, property_id, id_offset):
        """
        Parse and return a list of decoded property values.

        Called after the property ID is consumed; ends when the next
        property, node, or branch is encountered.

        Raise `StructureError` if there is no value or a value is not
        terminated.
        """
        values = []
        while True:
            match = self.patterns.property_start.match(self.data, self.index)
            if not match:
                break
            value_start = match.end() - 1
            self.index = match.end()
            value_parts = []
            # scan for escaped characters (using '\'), unescape them
            # (remove escaped linebreaks):
            while True:
                special = self.patterns.value_special.search(
                    self.data, self.index)
                if not special or (special.group() == b'\\'
                                   and special.end() >= self.datalen):
                    raise StructureError(
                        f'Unterminated value for property "{property_id}"',
                        value_start)
                value_parts.append(self.data[self.index:special.start()])
                if special.group() == b']':
                    self.index = special.end()
                    break
                mbreak = self.patterns.line_break.match(
                    self.data, special.end())
                if mbreak:
                    # remove linebreak (soft line break):
                    self.index = mbreak.end()
                else:
                    # copy escaped character (slice to prevent
                    # int-conversion):
                    value_parts.append(
                        self.data[special.end():special.end() + 1])
                    self.index = special.end() + 1
            values.append(self.decode(b''.join(value_parts)))
        if not values:
            raise StructureError(
                f'Property "{property_id}" has no value', id_offset)
        return values

    def set_encoding(self, charset):
        """Use the CA (charset) property value to decode following text."""
        try:
            self.encoding = codecs.lookup(charset.strip()).name
        except LookupError:
            warnings.warn(
                f'Unknown charset "{charset}"; decoding as {DEFAULT_CHARSET}.')
            self.encoding = DEFAULT_CHARSET

    def decode(self, value):
        return value.decode(self.encoding, errors='replace')
