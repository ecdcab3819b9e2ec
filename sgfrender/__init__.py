# -*- coding: utf-8 -*-

# __init__.py (sgfrender package)
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
sgfrender: SGF (Smart Game Format) Go game records to board diagrams.

    import sgfrender
    svg = sgfrender.render(sgf_data, sgfrender.Selection(move=50))

The stages are also usable on their own: `sgf.Parser` builds the game tree,
`goban.simulate()` replays a line of play, `layout.Layout` and
`renderer.Renderer` produce drawing primitives, and the classes in `encoders`
serialize them (SVG or plain text).
"""

__version__ = '1.0.0'

from .errors import (
    Error, ParseError, StructureError, PropertyFormatError, PathError,
    UnsupportedBoardSizeError, RulesError, IllegalMoveError, KoViolationError,
    SuicideError, OptionError, UnsupportedPrimitiveError,
    UnsupportedFormatError)
from .sgf import Parser, Collection, GameTree, Node, Selection
from .goban import Goban, simulate, position_at
from .layout import Layout
from .renderer import (
    Renderer, RenderOptions, Line, Circle, Polygon, Text, STYLES)
from .encoders import Diagram, SvgEncoder, TextEncoder, get_encoder
from .diagram import render, render_sequence
