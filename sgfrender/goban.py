# -*- coding: utf-8 -*-

# goban.py (board state simulator)
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
Board state simulation: replays the nodes of one line of a game tree.

A `Goban` is a snapshot of the board after one node. Snapshots are never
modified; `Goban.apply_node()` returns the next snapshot, so snapshots that
have been handed out can be rendered independently (in parallel, even).

Rules are the simplified Go rules needed for diagrams: captures, suicide
rejection, and simple ko (a single stone may not be retaken immediately).
There is no superko.
"""

import logging

from .errors import IllegalMoveError, KoViolationError, SuicideError
from .sgf import format_point


BLACK = 'B'
WHITE = 'W'

OPPONENT = {BLACK: WHITE, WHITE: BLACK}

COLOR_NAMES = {BLACK: 'Black', WHITE: 'White'}

MARKUP_SHAPES = {
    'CR': 'circle',
    'SQ': 'square',
    'TR': 'triangle',
    'MA': 'mark',
    'SL': 'selected',
    }
"""Mapping of markup property ID to shape name."""

log = logging.getLogger(__name__)


def in_range(number, move_range):
    """Return True if move `number` is within `move_range` (first, last).
    `last` may be `None` (no upper bound)."""
    if move_range is None:
        return False
    first, last = move_range
    return number >= first and (last is None or number <= last)


class Goban:

    """
    An immutable board position.

    Instance attributes:

    - size : (width, height)
    - stones : dict -- Maps (x, y) points to `BLACK` or `WHITE`.
    - ko : (x, y) or `None` -- The point that may not be played next move.
    - move_number : int -- Number of the last move played.
    - captures : dict -- Number of stones captured *by* each color.
    - last_move : (x, y) or `None` -- Point of the last move (`None` after a
      pass or setup).
    - move_numbers : dict -- Maps points to the numbers of the moves that
      placed the stones there (only moves within the requested range).
    - markup : dict -- Maps points to shape names (see `MARKUP_SHAPES`).
    - labels : dict -- Maps points to label text.
    - territory : dict -- Maps points to `BLACK` or `WHITE`.
    - arrows, lines : tuple of ((x, y), (x, y)) pairs.
    - dimmed : frozenset of points.
    """

    def __init__(self, size, stones=None, ko=None, move_number=0,
                 captures=None, last_move=None, move_numbers=None,
                 markup=None, labels=None, territory=None, arrows=(),
                 lines=(), dimmed=frozenset()):
        self.size = size
        self.stones = {} if stones is None else stones
        self.ko = ko
        self.move_number = move_number
        self.captures = ({BLACK: 0, WHITE: 0} if captures is None
                         else captures)
        self.last_move = last_move
        self.move_numbers = {} if move_numbers is None else move_numbers
        self.markup = {} if markup is None else markup
        self.labels = {} if labels is None else labels
        self.territory = {} if territory is None else territory
        self.arrows = tuple(arrows)
        self.lines = tuple(lines)
        self.dimmed = frozenset(dimmed)

    def __repr__(self):
        return '{}(size={!r}, move_number={}, stones={})'.format(
            self.__class__.__name__, self.size, self.move_number,
            len(self.stones))

    def __str__(self):
        """Return a plain text picture of the stones ("X" black, "O"
        white), for debugging."""
        width, height = self.size
        glyphs = {BLACK: 'X', WHITE: 'O', None: '.'}
        return '\n'.join(
            ' '.join(glyphs[self.stones.get((x, y))] for x in range(width))
            for y in range(height))

    def __eq__(self, other):
        return isinstance(other, Goban) and vars(self) == vars(other)

    __hash__ = None

    def _next(self, **changes):
        """
        Return a new `Goban` with `changes` applied. Node markup (everything
        except `dimmed`, which persists until reset) is not carried over.
        """
        attributes = {
            'size': self.size,
            'stones': self.stones,
            'ko': self.ko,
            'move_number': self.move_number,
            'captures': self.captures,
            'last_move': self.last_move,
            'move_numbers': self.move_numbers,
            'dimmed': self.dimmed,
            }
        attributes.update(changes)
        return self.__class__(**attributes)

    def color_at(self, point):
        """Return `BLACK`, `WHITE`, or `None` (empty) for `point`."""
        return self.stones.get(point)

    def on_board(self, point):
        x, y = point
        return 0 <= x < self.size[0] and 0 <= y < self.size[1]

    def neighbors(self, point):
        """Return the orthogonally adjacent points that are on the board."""
        x, y = point
        candidates = ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1))
        return [neighbor for neighbor in candidates if self.on_board(neighbor)]

    def group(self, point, stones=None):
        """
        Return (group, liberties): the set of points of the chain of stones
        connected to `point`, and the set of its liberties. `stones` defaults
        to `self.stones`.
        """
        if stones is None:
            stones = self.stones
        color = stones[point]
        group = {point}
        liberties = set()
        to_process = [point]
        while to_process:
            for neighbor in self.neighbors(to_process.pop()):
                neighbor_color = stones.get(neighbor)
                if neighbor_color is None:
                    liberties.add(neighbor)
                elif neighbor_color == color and neighbor not in group:
                    group.add(neighbor)
                    to_process.append(neighbor)
        return group, liberties

    def setup(self, black=(), white=(), empty=()):
        """
        Return a new `Goban` with stones added (`black`, `white`) or removed
        (`empty`), without any legality checks. Clears the ko point.
        """
        stones = dict(self.stones)
        move_numbers = dict(self.move_numbers)
        for (points, color) in ((empty, None), (black, BLACK),
                                (white, WHITE)):
            for point in points:
                move_numbers.pop(point, None)
                if color is None:
                    stones.pop(point, None)
                else:
                    stones[point] = color
        return self._next(
            stones=stones, move_numbers=move_numbers, ko=None, last_move=None)

    def play(self, color, point, move_number=None, strict=True,
             move_range=None):
        """
        Return a new `Goban` with a stone of `color` played at `point`
        (`None` for a pass), capturing opposing groups left without
        liberties.

        `move_number` defaults to one more than the current move number. If
        it is within `move_range`, it is recorded for the point.

        With `strict` (the default), raise `IllegalMoveError` for an occupied
        or off-board point, `KoViolationError` for retaking a ko, and
        `SuicideError` for a move that captures nothing and leaves its own
        group without liberties. Otherwise these are logged as warnings: an
        off-board move is treated as a pass, an occupied point is overwritten,
        the ko is ignored, and a suicided group is removed.
        """
        if move_number is None:
            move_number = self.move_number + 1
        if point is None:
            log.debug('Move %d: %s passes', move_number, COLOR_NAMES[color])
            return self._next(ko=None, move_number=move_number,
                              last_move=None)
        stones = dict(self.stones)
        move_numbers = dict(self.move_numbers)
        if not self.on_board(point):
            self._violation(
                IllegalMoveError, strict, move_number, point, color,
                f'point is outside of the {self.size[0]}x{self.size[1]} '
                f'board')
            return self._next(ko=None, move_number=move_number,
                              last_move=None)
        if point in stones:
            self._violation(
                IllegalMoveError, strict, move_number, point, color,
                'point is occupied')
        if point == self.ko:
            self._violation(
                KoViolationError, strict, move_number, point, color,
                'the ko may not be retaken immediately')
        stones[point] = color
        captured = []
        for neighbor in self.neighbors(point):
            if stones.get(neighbor) == OPPONENT[color]:
                group, liberties = self.group(neighbor, stones)
                if not liberties:
                    captured.extend(sorted(group))
                    for stone in group:
                        del stones[stone]
        group, liberties = self.group(point, stones)
        captures = dict(self.captures)
        captures[color] += len(captured)
        if not liberties:
            self._violation(
                SuicideError, strict, move_number, point, color,
                'the move leaves its group without liberties')
            for stone in group:
                del stones[stone]
            captures[OPPONENT[color]] += len(group)
            captured.extend(sorted(group))
        for stone in captured:
            move_numbers.pop(stone, None)
        if point in stones and in_range(move_number, move_range):
            move_numbers[point] = move_number
        else:
            move_numbers.pop(point, None)
        if (len(captured) == 1 and len(group) == 1
              and liberties == set(captured)):
            ko = captured[0]
        else:
            ko = None
        log.debug('Move %d: %s %s, %d captured%s', move_number,
                  COLOR_NAMES[color], format_point(point), len(captured),
                  f', ko at {format_point(ko)}' if ko else '')
        return self._next(
            stones=stones, ko=ko, move_number=move_number, captures=captures,
            last_move=point, move_numbers=move_numbers)

    @staticmethod
    def _violation(error_class, strict, move_number, point, color, detail):
        error = error_class(move_number, point, color, detail)
        if strict:
            raise error
        log.warning('%s (ignored)', error)

    def apply_node(self, node, strict=True, move_range=None):
        """
        Return the `Goban` after the setup, moves, move number, and markup of
        `node` (an `sgf.Node`) are applied to this position.
        """
        size = self.size
        board = self
        if node.is_setup():
            board = board.setup(
                black=node.get_points('AB', size),
                white=node.get_points('AW', size),
                empty=node.get_points('AE', size))
        move_number = node.next_move_number(board.move_number)
        moves = [color for color in (BLACK, WHITE) if color in node]
        for (index, color) in enumerate(moves):
            board = board.play(
                color, node.get_move(color, size),
                move_number - len(moves) + 1 + index, strict, move_range)
        if not moves and move_number != board.move_number:
            board = board._next(move_number=move_number)
        return board.with_markup(node)

    def with_markup(self, node):
        """
        Return a copy of this position carrying the markup of `node`. Dimmed
        points (DD) carry over from the previous position unless `node`
        has a DD property ("DD[]" clears them).
        """
        size = self.size
        markup = {}
        for (property_id, shape) in MARKUP_SHAPES.items():
            for point in node.get_points(property_id, size):
                markup[point] = shape
        territory = {}
        for (property_id, color) in (('TB', BLACK), ('TW', WHITE)):
            for point in node.get_points(property_id, size):
                territory[point] = color
        if 'DD' in node:
            dimmed = node.get_points('DD', size)
        else:
            dimmed = self.dimmed
        return self._next(
            markup=markup,
            labels={point: text for (point, text)
                    in node.get_labels('LB', size) if text},
            territory=territory,
            arrows=node.get_point_pairs('AR', size),
            lines=node.get_point_pairs('LN', size),
            dimmed=dimmed)


def simulate(nodes, size, strict=True, move_range=None):
    """
    Replay `nodes` (a path from the root, see `sgf.GameTree.resolve()`) on an
    empty board of `size`. For each node that carries a move or setup
    property, yield a (node, `Goban`) pair, in order.

    The replay is sequential: each position depends on the previous one.
    """
    board = Goban(size)
    for node in nodes:
        board = board.apply_node(node, strict, move_range)
        if node.is_move() or node.is_setup():
            yield node, board


def position_at(nodes, size, strict=True, move_range=None):
    """
    Return the `Goban` after replaying all of `nodes`, carrying the markup
    of the last node.
    """
    board = Goban(size)
    for node in nodes:
        board = board.apply_node(node, strict, move_range)
    return board
