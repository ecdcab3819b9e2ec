# -*- coding: utf-8 -*-

# cli.py (sgf-render command-line interface)
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
Command-line front end. The tool itself needs only two lines:

    from sgfrender import cli
    cli.main()
"""

import sys
import re
import argparse
import datetime
import logging
import textwrap

from .errors import Error
from .sgf import Selection, decode_point
from .renderer import RenderOptions, STYLES
from .encoders import ENCODERS
from .diagram import render, render_sequence


log = logging.getLogger(__name__)


class CLI:

    """
    Abstract base class that supports command-line interface tools.
    Subclasses must define:

    * An ``execute`` method as follows::

          def execute(self):
              # do everything here

    * `argument_specs`, the CLI arguments & options specifications, used as
      the arguments to `argparse.add_argument`::

          argument_specs = (
              (# Argument name or option flags (a tuple):
               ('name',),
               # Keyword arguments (a dictionary):
               {'default': None,
                'metavar': 'NAME',
                'help': ('Name that name.')}),
              # ...
              )

    * A class docstring that will be used as the description for the CLI
      --help.
    """

    def __init__(self, settings=None, argv=None):
        """Instantiate to process the command-line arguments."""
        if settings is None:
            settings = self.process_command_line(argv)
        self.settings = settings

    def run(self):
        """
        Execute the command. Return the exit status: 0 for success, 1 if an
        SGF, rules, or option error was reported.
        """
        logging.basicConfig(
            level=logging.DEBUG if self.settings.verbose else logging.WARNING,
            format='%(levelname)s: %(name)s: %(message)s')
        try:
            self.execute()
        except Error as error:
            print(
                '\n{}'.format(
                    datetime.datetime.now().isoformat(
                        sep=' ', timespec='seconds')),
                file=sys.stderr)
            log.error('%s', error)
            return 1
        return 0

    help_option_spec = (
        ('--help', '-h',),
        {'action': 'help', 'help': 'Show this help message.'})

    verbose_option_spec = (
        ('--verbose', '-v',),
        {'action': 'store_true',
         'default': False,
         'help': 'Log progress (debug messages) to standard error.'})

    @classmethod
    def process_command_line(cls, argv=None):
        """
        Return `settings`, a namespace of options & arguments to their values.

        `argv` is a list of arguments; pass `None` (the default) to use the
        command-line arguments (``sys.argv[1:]``).

        The subclass must declare `argument_specs`, the CLI arguments &
        options specifications. See the class docstring.
        """
        parser = argparse.ArgumentParser(
            description=textwrap.dedent(cls.__doc__),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            # Help option added manually (below) for consistency:
            add_help=False,)
        for names, params in cls.argument_specs:
            parser.add_argument(*names, **params)
        for names, params in (cls.verbose_option_spec, cls.help_option_spec):
            parser.add_argument(*names, **params)
        if argv is None:
            argv = sys.argv[1:]
        settings = parser.parse_args(argv)
        return settings


# Argument types

def move_range(text):
    """
    Return (first, last) from "FIRST-LAST", "FIRST-" (open-ended), or "N"
    (a single move).
    """
    match = re.match(r'\s*(\d+)\s*(?:(-)\s*(\d+)?)?\s*$', text)
    if not match:
        raise argparse.ArgumentTypeError(
            f'expected a move range like "1-50" or "10-", not "{text}"')
    first = int(match.group(1))
    if match.group(3):
        last = int(match.group(3))
    elif match.group(2):
        last = None
    else:
        last = first
    if last is not None and last < first:
        raise argparse.ArgumentTypeError(
            f'move range "{text}" ends before it begins')
    return (first, last)


def node_number(text):
    """Return a node number, or `None` for "last"."""
    if text.strip().lower() == 'last':
        return None
    try:
        number = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f'expected a node number or "last", not "{text}"') from None
    if number < 0:
        raise argparse.ArgumentTypeError('node numbers start at 0')
    return number


def worker_count(text):
    """Return a positive number of rendering threads."""
    try:
        number = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f'expected a number of threads, not "{text}"') from None
    if number < 1:
        raise argparse.ArgumentTypeError('at least 1 thread is needed')
    return number


def board_size(text):
    """Return (width, height) from "19" or "19:13"."""
    match = re.match(r'\s*(\d+)\s*(?:[:x]\s*(\d+)\s*)?$', text)
    if not match:
        raise argparse.ArgumentTypeError(
            f'expected a board size like "19" or "19:13", not "{text}"')
    width = int(match.group(1))
    return (width, int(match.group(2)) if match.group(2) else width)


def viewport(text):
    """
    Return ((x0, y0), (x1, y1)) from two SGF points, e.g. "aa:jj". Points
    are checked against the board size later.
    """
    start, separator, end = text.strip().replace('-', ':').partition(':')
    try:
        if not separator:
            raise Error('expected two points')
        return (decode_point(start), decode_point(end))
    except Error as error:
        raise argparse.ArgumentTypeError(
            f'expected a region like "aa:jj", not "{text}" ({error})'
            ) from None


def variation(text):
    try:
        return Selection.parse_variation(text)
    except Error as error:
        raise argparse.ArgumentTypeError(str(error)) from None


class RenderCLI(CLI):

    # Command-Line Interface implementation.

    """
    Render a board position from an SGF (Smart Game Format) Go game record
    as an SVG image or a plain text diagram.

    By default the position at the end of the main line of the first game
    is rendered. Choose another position with --node, --move, --variation
    and --game. With --each-move, one diagram is written per move of a
    range; the --output path must then contain "{move}", which is replaced
    by the move number.

    Examples:

        %(prog)s game.sgf -o final.svg
        %(prog)s game.sgf --move 50 --move-numbers 41-50 -o figure5.svg
        %(prog)s problem.sgf --range aa:jj -f text
        %(prog)s game.sgf --each-move 1-20 -o "move-{move}.svg"
    """

    def execute(self):
        settings = self.settings
        data = self.read_source(settings.source_file)
        selection = Selection(
            variation=settings.variation, node=settings.node,
            move=settings.move, game=settings.game)
        options = self.render_options()
        log.debug('%r, %r', selection, options)
        if settings.each_move:
            if not settings.output or '{move}' not in settings.output:
                raise Error(
                    'With --each-move, the --output path must contain '
                    '"{move}".')
            diagrams = render_sequence(
                data, settings.each_move, selection, options)
            for (move_number, diagram) in diagrams:
                self.write_output(
                    settings.output.replace('{move}', str(move_number)),
                    diagram)
        else:
            self.write_output(
                settings.output, render(data, selection, options))

    def render_options(self):
        settings = self.settings
        return RenderOptions(
            format=settings.format,
            width=settings.width,
            style=settings.style,
            board_labels=settings.board_labels,
            label_sides=settings.label_sides,
            viewport=settings.range,
            flip=settings.flip,
            move_numbers=settings.move_numbers,
            highlight_last_move=settings.highlight_last_move,
            strict=settings.strict,
            board_size=settings.board_size,
            workers=settings.workers)

    @staticmethod
    def read_source(path):
        """Return the bytes of `path` (`None` or "-" reads from <stdin>)."""
        if path and path != '-':
            with open(path, 'rb') as src:
                return src.read()
        return sys.stdin.buffer.read()

    @staticmethod
    def write_output(path, output):
        """
        Write the bytestring `output` to `path` (`None` or "-" writes to
        <stdout>).
        """
        if path and path != '-':
            with open(path, 'wb') as dest:
                dest.write(output)
        else:
            sys.stdout.buffer.write(output)

    argument_specs = (
        (('source_file',),
         {'type': str,
          'nargs': '?',
          'default': None,
          'help': ('Path to the SGF file to render. '
                   'Omit or use "-" to read from the standard input.')}),
        (('--output', '-o',),
         {'default': None,
          'help': ('Specify output file path (default: "-", output to '
                   '<stdout>, standard output).')}),
        (('--format', '-f',),
         {'choices': sorted(ENCODERS),
          'default': RenderOptions.format,
          'help': 'Output format (default: "%(default)s").'}),
        (('--game', '-g',),
         {'type': int,
          'default': 0,
          'help': ('Game number within a collection, starting at 0 '
                   '(default: %(default)s).')}),
        (('--node', '-n',),
         {'type': node_number,
          'default': None,
          'help': ('Node number to render along the selected line (the root '
                   'is 0), or "last" (default).')}),
        (('--move', '-m',),
         {'type': int,
          'default': None,
          'help': 'Render the position after the given move number.'}),
        (('--variation',),
         {'type': variation,
          'default': (),
          'metavar': 'PATH',
          'help': ('Variation to take at each branch point, e.g. "1,0,2" '
                   '(default: main line).')}),
        (('--width', '-w',),
         {'type': float,
          'default': RenderOptions.width,
          'help': 'Width of the diagram in pixels (default: %(default)s).'}),
        (('--style', '-s',),
         {'choices': sorted(STYLES),
          'default': RenderOptions.style,
          'help': 'Diagram style (default: "%(default)s").'}),
        (('--label-sides',),
         {'default': RenderOptions.label_sides,
          'metavar': 'SIDES',
          'help': ('Sides with coordinate labels, any combination of '
                   '"nesw" (default: "%(default)s").')}),
        (('--no-board-labels',),
         {'dest': 'board_labels',
          'action': 'store_false',
          'default': RenderOptions.board_labels,
          'help': 'Omit the coordinate labels.'}),
        (('--range', '-r',),
         {'type': viewport,
          'default': None,
          'metavar': 'REGION',
          'help': ('Render only part of the board, given as two corner '
                   'points in SGF coordinates, e.g. "aa:jj".')}),
        (('--flip',),
         {'action': 'store_true',
          'default': RenderOptions.flip,
          'help': 'Draw the first row (SGF "a") at the bottom.'}),
        (('--move-numbers',),
         {'type': move_range,
          'nargs': '?',
          'const': (1, None),
          'default': None,
          'metavar': 'RANGE',
          'help': ('Show move numbers on stones, for the moves in RANGE '
                   '(e.g. "41-50"; default: all moves).')}),
        (('--highlight-last-move',),
         {'action': 'store_true',
          'default': RenderOptions.highlight_last_move,
          'help': 'Mark the last move played.'}),
        (('--lenient',),
         {'dest': 'strict',
          'action': 'store_false',
          'default': RenderOptions.strict,
          'help': ('Log illegal moves as warnings and continue, instead of '
                   'failing.')}),
        (('--board-size',),
         {'type': board_size,
          'default': None,
          'metavar': 'SIZE',
          'help': 'Override the board size (SZ property), e.g. "19:13".'}),
        (('--each-move',),
         {'type': move_range,
          'default': None,
          'metavar': 'RANGE',
          'help': ('Write one diagram per move in RANGE (e.g. "1-20"), to '
                   'the --output path with "{move}" replaced.')}),
        (('--workers',),
         {'type': worker_count,
          'default': RenderOptions.workers,
          'help': 'Number of rendering threads for --each-move.'}),
        )


def main(argv=None):
    sys.exit(RenderCLI(argv=argv).run())
