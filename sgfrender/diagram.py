# -*- coding: utf-8 -*-

# diagram.py (SGF data to diagram bytes)
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
The diagram pipeline: SGF bytes are parsed, the selected line is replayed,
and the resulting position(s) are laid out, rendered and encoded.

    svg = render(sgf_data, Selection(move=50), RenderOptions(width=400))

Rendering one position is independent of every other position, so
`render_sequence()` renders a range of moves on a thread pool after the
(sequential) replay.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from .errors import PathError, OptionError
from .sgf import Parser, Selection, check_board_size
from .goban import simulate, position_at, in_range
from .layout import Layout
from .renderer import Renderer, RenderOptions, get_style
from .encoders import Diagram, get_encoder


log = logging.getLogger(__name__)


def load_game(data, selection):
    """Parse `data` and return the `GameTree` chosen by `selection`."""
    return Parser(data).parse().game(selection.game)


def board_size(game, options):
    if options.board_size is not None:
        return check_board_size(options.board_size)
    return game.size


def make_layout(size, options):
    return Layout(
        size, options.width,
        label_sides=options.label_sides if options.board_labels else '',
        viewport=options.viewport, flip=options.flip)


class DiagramWriter:

    """
    Renders & encodes board positions with one set of `RenderOptions`. The
    layout, style and encoder are shared, read-only, between positions.
    """

    def __init__(self, size, options):
        self.options = options
        self.encoder = get_encoder(options.format)
        self.layout = make_layout(size, options)
        self.renderer = Renderer(
            self.layout, get_style(options.style),
            supported_roles=self.encoder.supported_roles,
            highlight_last_move=options.highlight_last_move,
            board_labels=options.board_labels)

    def primitives(self, board):
        return self.renderer.render(board)

    def write(self, board):
        """Return the encoded diagram (bytes) of `board`."""
        return self.encoder.encode(
            Diagram(self.layout, self.primitives(board)))


def render(data, selection=None, options=None):
    """
    Return the diagram (bytes) of the position selected from the SGF `data`.
    """
    if selection is None:
        selection = Selection()
    if options is None:
        options = RenderOptions()
    game = load_game(data, selection)
    size = board_size(game, options)
    nodes = game.resolve(selection)
    log.debug('Replaying %d node(s) on a %dx%d board', len(nodes), *size)
    board = position_at(nodes, size, options.strict, options.move_numbers)
    return DiagramWriter(size, options).write(board)


def render_sequence(data, moves, selection=None, options=None):
    """
    Return a list of (move number, diagram bytes) pairs, one for each move
    numbered within `moves` (first, last) on the selected line. `last` may
    be `None` (through the end of the line).

    The line is replayed once; the diagrams are rendered on a thread pool
    (`options.workers` threads) and returned in move order. Moves after
    `last` are not replayed, so an illegal move beyond the range does not
    prevent the diagrams. Raise `PathError` if no move falls within `moves`.
    """
    if selection is None:
        selection = Selection()
    if options is None:
        options = RenderOptions()
    if options.workers < 1:
        raise OptionError(
            f'At least 1 rendering thread is needed, not {options.workers}')
    game = load_game(data, selection)
    size = board_size(game, options)
    nodes = game.resolve(selection)
    first, last = moves
    boards = []
    for (node, board) in simulate(
            nodes, size, options.strict, options.move_numbers):
        if node.is_move() and in_range(board.move_number, moves):
            boards.append(board)
        if last is not None and board.move_number >= last:
            break
    if not boards:
        if last is None:
            numbered = f'{first} or later'
        else:
            numbered = f'{first} to {last}'
        raise PathError(f'No moves numbered {numbered} on the selected line')
    writer = DiagramWriter(size, options)
    with ThreadPoolExecutor(max_workers=options.workers) as executor:
        diagrams = list(executor.map(writer.write, boards))
    log.debug('Rendered %d diagram(s)', len(diagrams))
    return [(board.move_number, diagram)
            for (board, diagram) in zip(boards, diagrams)]
