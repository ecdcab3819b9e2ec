#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os

import pytest

from sgfrender import sgf
from sgfrender.errors import (
    StructureError, PropertyFormatError, PathError, UnsupportedBoardSizeError)


test_data_dir = os.path.join(os.path.dirname(__file__), 'test_data')


def parse_game(data, **kwargs):
    return sgf.Parser(data, **kwargs).parse()[0]


class TestNode:

    @staticmethod
    def node1():
        n = sgf.Node()
        n['B'] = ['aa']
        n['BL'] = ['123.45']
        n['C'] = ['text /\\[]()']
        n['LB'] = ['bb:A', 'cc:B']
        return n

    node1_str = r';B[aa]BL[123.45]C[text /\\[\]()]LB[bb:A][cc:B]'
    node1_repr = (
        r"Node(B=['aa'], BL=['123.45'], C=['text /\\[]()'], "
        r"LB=['bb:A', 'cc:B'])")

    def test_node(self):
        n1 = self.node1()
        assert str(n1) == self.node1_str
        assert repr(n1) == self.node1_repr
        assert n1.children == []

    def test_escape_text(self):
        n1 = self.node1()
        assert n1.escape_text(r'abc\def]ghi') == r'abc\\def\]ghi'

    def test_equality_includes_children(self):
        n1, n2 = self.node1(), self.node1()
        assert n1 == n2
        n2.children.append(sgf.Node(W=['bb']))
        assert n1 != n2

    def test_classification(self):
        assert sgf.Node(B=['aa']).is_move()
        assert sgf.Node(W=['']).is_move()
        assert not sgf.Node(C=['hi']).is_move()
        assert sgf.Node(AE=['aa']).is_setup()
        assert not sgf.Node(B=['aa']).is_setup()

    def test_next_move_number(self):
        assert sgf.Node(B=['aa']).next_move_number(4) == 5
        assert sgf.Node(C=['x']).next_move_number(4) == 4
        assert sgf.Node(B=['aa'], MN=['10']).next_move_number(4) == 10


class TestPoints:

    def test_decode_point(self):
        assert sgf.decode_point('aa') == (0, 0)
        assert sgf.decode_point('cb') == (2, 1)
        assert sgf.decode_point('Aa') == (26, 0)
        assert sgf.decode_point('ZZ') == (51, 51)

    @pytest.mark.parametrize('text', ['', 'a', 'abc', 'a1', '??'])
    def test_decode_point_malformed(self, text):
        with pytest.raises(PropertyFormatError):
            sgf.decode_point(text)

    def test_decode_point_off_board(self):
        assert sgf.decode_point('ii', (9, 9)) == (8, 8)
        with pytest.raises(PropertyFormatError) as excinfo:
            sgf.decode_point('jj', (9, 9), 'AB')
        assert 'AB[jj]' in str(excinfo.value)

    def test_format_point(self):
        assert sgf.format_point((0, 0)) == 'aa'
        assert sgf.format_point((26, 3)) == 'Ad'

    def test_check_board_size(self):
        assert sgf.check_board_size((1, 1)) == (1, 1)
        assert sgf.check_board_size((52, 13)) == (52, 13)
        for size in ((0, 19), (19, 0), (53, 19), (-1, -1)):
            with pytest.raises(UnsupportedBoardSizeError):
                sgf.check_board_size(size)


class TestAccessors:

    size = (19, 19)

    def test_get_points(self):
        node = sgf.Node(AB=['aa', 'cc', 'aa'])
        assert node.get_points('AB', self.size) == [(0, 0), (2, 2)]
        assert node.get_points('AW', self.size) == []

    def test_get_point(self):
        node = sgf.Node(KO=['dp'])
        assert node.get_point('KO', self.size) == (3, 15)
        assert node.get_point('B', self.size) is None
        with pytest.raises(PropertyFormatError):
            sgf.Node(KO=['aa', 'bb']).get_point('KO', self.size)

    def test_get_points_compressed(self):
        expected = [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)]
        node = sgf.Node(AB=['aa:bc'])
        assert node.get_points('AB', self.size) == expected
        # corners in either order:
        node = sgf.Node(AB=['bc:aa'])
        assert node.get_points('AB', self.size) == expected

    def test_get_points_empty_list(self):
        node = sgf.Node(DD=[''])
        assert node.get_points('DD', self.size) == []
        node = sgf.Node(AB=[''])
        with pytest.raises(PropertyFormatError):
            node.get_points('AB', self.size)

    def test_get_points_off_board(self):
        node = sgf.Node(AB=['aa:jj'])
        with pytest.raises(PropertyFormatError):
            node.get_points('AB', (9, 9))

    def test_get_move(self):
        assert sgf.Node(B=['dp']).get_move('B', self.size) == (3, 15)
        assert sgf.Node(B=['']).get_move('B', self.size) is None
        assert sgf.Node(B=['tt']).get_move('B', self.size) is None
        assert sgf.Node(B=['tt']).get_move('B', (21, 21)) == (19, 19)
        with pytest.raises(PropertyFormatError):
            sgf.Node(B=['aa', 'bb']).get_move('B', self.size)

    def test_get_labels(self):
        node = sgf.Node(LB=['aa:A', 'bb:12'])
        assert node.get_labels('LB', self.size) == [
            ((0, 0), 'A'), ((1, 1), '12')]
        with pytest.raises(PropertyFormatError):
            sgf.Node(LB=['aa']).get_labels('LB', self.size)

    def test_get_point_pairs(self):
        node = sgf.Node(AR=['aa:cc'], LN=['aa:aa'])
        assert node.get_point_pairs('AR', self.size) == [((0, 0), (2, 2))]
        with pytest.raises(PropertyFormatError):
            node.get_point_pairs('LN', self.size)

    def test_get_number(self):
        node = sgf.Node(HA=['3'], MN=['x'], PM=['5'])
        assert node.get_number('HA') == 3
        assert node.get_number('OB', default=0) == 0
        with pytest.raises(PropertyFormatError):
            node.get_number('MN')
        with pytest.raises(PropertyFormatError):
            node.get_number('PM', maximum=2)

    def test_get_real(self):
        node = sgf.Node(KM=['6.5'], BL=['abc'])
        assert node.get_real('KM') == 6.5
        with pytest.raises(PropertyFormatError):
            node.get_real('BL')

    def test_get_size(self):
        assert sgf.Node().get_size() == (19, 19)
        assert sgf.Node(SZ=['9']).get_size() == (9, 9)
        assert sgf.Node(SZ=['19:13']).get_size() == (19, 13)
        with pytest.raises(PropertyFormatError):
            sgf.Node(SZ=['big']).get_size()
        with pytest.raises(UnsupportedBoardSizeError):
            sgf.Node(SZ=['53']).get_size()
        with pytest.raises(UnsupportedBoardSizeError):
            sgf.Node(SZ=['0']).get_size()

    def test_typed(self):
        node = sgf.Node(
            B=['cd'], KM=['0.5'], AW=['aa:ab'], C=['hello'], XX=['1', '2'])
        assert node.typed('B', self.size) == (2, 3)
        assert node.typed('KM', self.size) == 0.5
        assert node.typed('AW', self.size) == [(0, 0), (0, 1)]
        assert node.typed('C', self.size) == 'hello'
        assert node.typed('XX', self.size) == ['1', '2']


class TestParser:

    sgfdata1 = rb"""       (;GM [1]FF[4]CA[UTF-8]US[someone]CP[\
  Permission to reproduce this game is given.]GN[a-b]SZ[19]KM[4.5]
HA[3]AB[pd][dp][dd];W[pp];B[nq];W[oq]C[ x started observation.
](;B[qc]C[ [b\]: \\ hi x! ;-) \\];W[kc])(;B[hc];W[oe]))   """

    sgfdata1_str = r"""(
;GM[1]FF[4]CA[UTF-8]US[someone]CP[  Permission to reproduce this game is given.]GN[a-b]SZ[19]KM[4.5]HA[3]AB[pd][dp][dd]
;W[pp]
;B[nq]
;W[oq]C[ x started observation.
]
(
;B[qc]C[ [b\]: \\ hi x! ;-) \\]
;W[kc]
)
(
;B[hc]
;W[oe]
)
)"""

    def test_sgfdata1(self):
        collection = sgf.Parser(self.sgfdata1).parse()
        assert len(collection) == 1
        game = collection[0]
        assert game.charset == 'utf-8'
        assert str(collection) == self.sgfdata1_str
        assert bytes(collection) == self.sgfdata1_str.encode('UTF-8')
        root = game.root
        assert root['AB'] == ['pd', 'dp', 'dd']
        assert root['CP'] == [
            '  Permission to reproduce this game is given.']
        branch = root.children[0].children[0].children[0]
        assert len(branch.children) == 2
        assert branch.children[0]['C'] == [' [b]: \\ hi x! ;-) \\']
        # the SGF representation parses back to an identical tree:
        collection2 = sgf.Parser(bytes(collection)).parse()
        assert collection2 == collection
        assert str(collection2) == str(collection)

    def test_mainline(self):
        game = parse_game(self.sgfdata1)
        moves = [node.get('B', node.get('W')) for node in game.mainline()]
        assert moves == [
            None, ['pp'], ['nq'], ['oq'], ['qc'], ['kc']]

    sgfdata2_unicode = (
        '(;GM[1]FF[4]CA[UTF-8]PW[しろちゃん]PB[くろくん]SZ[19]'
        ';W[pp];B[nq]C[誰が勝っている？](;B[qc]C[[しろちゃん\\]: いい手だね])'
        '(;B[hc]))')

    def test_unicode(self):
        collection = sgf.Parser(self.sgfdata2_unicode.encode('utf-8')).parse()
        root = collection[0].root
        assert root['PW'] == ['しろちゃん']
        assert root.children[0].children[0]['C'] == ['誰が勝っている？']
        collection2 = sgf.Parser(str(collection)).parse()
        assert collection2 == collection

    def test_charset(self):
        game = parse_game(b'(;CA[ISO-8859-1]C[caf\xe9])')
        assert game.root['C'] == ['caf\xe9']
        assert game.charset == 'iso8859-1'
        assert game.root['CA'] == ['UTF-8']
        # text output is UTF-8, so reparsing it gives the same text:
        collection = sgf.Parser(bytes(sgf.Collection([game]))).parse()
        assert collection[0].root['C'] == ['caf\xe9']
        assert collection[0] == game

    def test_unknown_charset(self):
        with pytest.warns(UserWarning, match='Unknown charset'):
            game = parse_game('(;CA[no-such-charset]C[café])'.encode('utf-8'))
        assert game.root['C'] == ['café']

    def test_soft_line_breaks(self):
        for line_break in (b'\n', b'\r', b'\r\n', b'\n\r'):
            game = parse_game(b'(;C[one\\' + line_break + b'two])')
            assert game.root['C'] == ['onetwo']
        # hard line breaks are kept:
        game = parse_game(b'(;C[one\ntwo])')
        assert game.root['C'] == ['one\ntwo']

    def test_escapes(self):
        game = parse_game(rb'(;C[a\]b\\c\d])')
        assert game.root['C'] == ['a]b\\cd']

    def test_whitespace(self):
        game = parse_game(b' \n(\n ; B [aa]\n\t[bb] ; W[cc] \n) \n')
        assert game.root['B'] == ['aa', 'bb']
        assert game.root.children[0]['W'] == ['cc']

    def test_long_property_names(self):
        game = parse_game(b'(;AddBlack[aa]Comment[old style])')
        assert game.root['AB'] == ['aa']
        assert game.root['C'] == ['old style']

    def test_duplicate_properties(self):
        with pytest.warns(UserWarning, match='Duplicate property ID "C"'):
            game = parse_game(b'(;C[first]C[second])')
        assert game.root['C'] == ['first', 'second']

    def test_empty_node(self):
        game = parse_game(b'(;;B[aa])')
        assert len(game.root) == 0
        assert game.root.children[0]['B'] == ['aa']

    def test_leading_text_is_skipped(self):
        game = parse_game(b'Game record follows:\n(;GN[x])')
        assert game.root['GN'] == ['x']

    def test_trailing_text_is_ignored(self):
        collection = sgf.Parser(b'(;B[aa])\n\n(see variation above)').parse()
        assert len(collection) == 1
        assert collection[0].root['B'] == ['aa']
        # text between games is skipped too:
        collection = sgf.Parser(
            b'(;GN[one]) (a note) (;GN[two]) end.').parse()
        assert [game.root['GN'] for game in collection] == [
            ['one'], ['two']]
        # a malformed later game is still an error:
        with pytest.raises(StructureError):
            sgf.Parser(b'(;GN[one])(;GN[two]').parse()

    def test_collection(self):
        collection = sgf.Parser(b'(;GN[one])\n(;GN[two])').parse()
        assert len(collection) == 2
        assert collection.game(1).root['GN'] == ['two']
        assert str(collection) == '(\n;GN[one]\n)\n\n(\n;GN[two]\n)'
        with pytest.raises(PathError):
            collection.game(2)

    def test_load(self):
        collection = sgf.Collection.load(
            os.path.join(test_data_dir, 'variations.sgf'))
        assert collection.path.endswith('variations.sgf')
        assert collection[0].size == (9, 9)
        collection = sgf.Collection.load(data=b'(;SZ[13])')
        assert collection[0].size == (13, 13)

    def test_unterminated_value(self):
        with pytest.raises(StructureError) as excinfo:
            sgf.Parser(b'(;FF[4]B[aa').parse()
        assert excinfo.value.offset == 8
        assert 'byte offset 8' in str(excinfo.value)
        with pytest.raises(StructureError) as excinfo:
            sgf.Parser(b'(;C[trailing backslash\\').parse()
        assert excinfo.value.offset == 3

    @pytest.mark.parametrize('data, offset', [
        (b'(;FF[4]', 0),               # unclosed game tree
        (b'(;FF[4](;B[aa])', 0),
        (b'()', 1),                    # no nodes
        (b'((;B[aa]))', 1),            # variation before any node
        (b'(;B[aa](;W[bb]);B[cc])', 15), # node after a variation
        (b'(;B[aa]1)', 7),             # stray character
        (b'(;B (;W[bb]))', 2),         # property without a value
        (b'(;b[aa])', 2),              # no uppercase letters in the ID
        ])
    def test_structure_errors(self, data, offset):
        with pytest.raises(StructureError) as excinfo:
            sgf.Parser(data).parse()
        assert excinfo.value.offset == offset

    @pytest.mark.parametrize('data', [b'', b'   ', b'no game here'])
    def test_no_game(self, data):
        with pytest.raises(StructureError, match='No SGF game tree found'):
            sgf.Parser(data).parse()

    def test_depth_limit(self):
        nested = b'(;' * 5 + b')' * 5
        assert parse_game(nested, max_depth=5)
        with pytest.raises(StructureError, match='nested more than 4'):
            sgf.Parser(nested, max_depth=4).parse()
        # adversarial nesting fails cleanly with the default limit:
        with pytest.raises(StructureError):
            sgf.Parser(b'(;' * 10000).parse()

    def test_node_limit(self):
        data = b'(;;;;)'
        assert parse_game(data, max_nodes=4)
        with pytest.raises(StructureError, match='More than 3 nodes'):
            sgf.Parser(data, max_nodes=3).parse()


class TestGameTree:

    sgfdata = b'(;SZ[9];B[aa](;W[bb];B[cc])(;W[dd])(;W[ee];B[ff](;W[gg])(;W[hh])))'

    def test_game_tree(self):
        n = TestNode.node1()
        g = sgf.GameTree(n)
        assert str(g) == '(\n{}\n)'.format(TestNode.node1_str)
        assert g.size == (19, 19)

    def test_resolve_main_line(self):
        game = parse_game(self.sgfdata)
        path = game.resolve()
        assert path == game.mainline()
        assert [node.get('B', node.get('W')) for node in path] == [
            None, ['aa'], ['bb'], ['cc']]
        assert game.resolve(sgf.Selection()) == path

    def test_resolve_variation(self):
        game = parse_game(self.sgfdata)
        path = game.resolve(sgf.Selection(variation=(1,)))
        assert path[-1]['W'] == ['dd']
        path = game.resolve(sgf.Selection(variation=(2, 1)))
        assert path[-1]['W'] == ['hh']
        # later branch points default to the first variation:
        path = game.resolve(sgf.Selection(variation=(2,)))
        assert path[-1]['W'] == ['gg']

    def test_resolve_bad_variation(self):
        game = parse_game(self.sgfdata)
        with pytest.raises(PathError, match='Variation 3 does not exist'):
            game.resolve(sgf.Selection(variation=(3,)))
        with pytest.raises(PathError):
            game.resolve(sgf.Selection(variation=(-1,)))
        with pytest.raises(PathError, match='more entries'):
            game.resolve(sgf.Selection(variation=(0, 0)))

    def test_resolve_move(self):
        game = parse_game(self.sgfdata)
        path = game.resolve(sgf.Selection(move=2))
        assert len(path) == 3
        assert path[-1]['W'] == ['bb']
        path = game.resolve(sgf.Selection(variation=(2,), move=3))
        assert path[-1]['B'] == ['ff']
        with pytest.raises(PathError, match='Move 4 is not on'):
            game.resolve(sgf.Selection(move=4))

    def test_resolve_node(self):
        game = parse_game(self.sgfdata)
        assert game.resolve(sgf.Selection(node=0)) == [game.root]
        assert len(game.resolve(sgf.Selection(node=3))) == 4
        with pytest.raises(PathError):
            game.resolve(sgf.Selection(node=4))

    def test_parse_variation(self):
        assert sgf.Selection.parse_variation('1,0,2') == (1, 0, 2)
        assert sgf.Selection.parse_variation('1.0.2') == (1, 0, 2)
        assert sgf.Selection.parse_variation(' ') == ()
        with pytest.raises(PathError):
            sgf.Selection.parse_variation('1,x')
