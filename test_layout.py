#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import pytest

from sgfrender import layout
from sgfrender.layout import Layout
from sgfrender.errors import UnsupportedBoardSizeError, OptionError


class TestGeometry:

    def test_19x19(self):
        lay = Layout((19, 19), 800)
        # west: clearance + "19" (2 chars) + padding; east: edge margin
        units_wide = 18 + (0.6 + 0.6 + 0.25) + 0.7
        assert lay.pitch == pytest.approx(800 / units_wide)
        units_high = 18 + (0.6 + 0.5 + 0.25) + 0.7
        assert lay.height == pytest.approx(units_high * lay.pitch)
        assert lay.width == 800
        assert lay.stone_radius == pytest.approx(0.48 * lay.pitch)
        assert lay.font_size == pytest.approx(0.55 * lay.pitch)
        assert lay.coordinate_font_size == pytest.approx(0.5 * lay.pitch)

    @pytest.mark.parametrize('dimension', range(1, 53))
    def test_grid_fills_canvas(self, dimension):
        lay = Layout((dimension, dimension), 600, label_sides='nesw')
        for coords in (lay.xs, lay.ys):
            assert len(coords) == dimension
            steps = [b - a for (a, b) in zip(coords, coords[1:])]
            assert all(step > 0 for step in steps)
            assert all(step == pytest.approx(lay.pitch) for step in steps)
        assert lay.xs[0] == pytest.approx(lay.margins['w'])
        assert lay.xs[-1] + lay.margins['e'] == pytest.approx(600)
        assert lay.ys[-1] + lay.margins['s'] == pytest.approx(lay.height)
        for side in 'nesw':
            assert (lay.margins[side]
                    >= lay.label_extent(side) * lay.pitch)

    def test_rectangular(self):
        lay = Layout((19, 9), 800)
        assert len(lay.xs) == 19
        assert len(lay.ys) == 9
        assert lay.height < lay.width

    def test_tiny_canvas(self):
        lay = Layout((52, 52), 10)
        assert lay.stone_radius == layout.MIN_STONE_RADIUS
        assert lay.width == 10

    def test_no_labels(self):
        lay = Layout((9, 9), 100, label_sides='')
        assert lay.margins == pytest.approx(
            {side: 0.7 * lay.pitch for side in 'nesw'})
        assert lay.coordinate_labels() == []

    def test_pure(self):
        assert vars(Layout((13, 13), 400)) == vars(Layout((13, 13), 400))

    @pytest.mark.parametrize('kwargs, error', [
        ({'size': (19, 19), 'width': 0}, OptionError),
        ({'size': (19, 19), 'width': -5}, OptionError),
        ({'size': (19, 19), 'label_sides': 'nx'}, OptionError),
        ({'size': (9, 9), 'viewport': ((0, 0), (9, 9))}, OptionError),
        ({'size': (53, 19)}, UnsupportedBoardSizeError),
        ({'size': (0, 19)}, UnsupportedBoardSizeError),
        ])
    def test_invalid(self, kwargs, error):
        with pytest.raises(error):
            Layout(**kwargs)

    def test_option_errors_are_value_errors(self):
        with pytest.raises(ValueError, match='outside of the 9x9 board'):
            Layout((9, 9), viewport=((0, 0), (18, 18)))


class TestLabels:

    def test_column_labels(self):
        lay = Layout((19, 19))
        assert [lay.column_label(column) for column in range(10)] == list(
            'ABCDEFGHJK')
        assert lay.column_label(18) == 'T'
        lay = Layout((26, 26))
        assert lay.column_label(0) == '1'
        assert lay.column_label(25) == '26'

    def test_row_labels(self):
        lay = Layout((19, 19))
        assert lay.row_label(0) == '19'
        assert lay.row_label(18) == '1'
        lay = Layout((19, 19), flip=True)
        assert lay.row_label(0) == '1'
        assert lay.row_label(18) == '19'

    def test_label_extent(self):
        assert Layout((9, 9)).label_extent('w') == pytest.approx(0.5)
        assert Layout((19, 19)).label_extent('w') == pytest.approx(0.6)
        assert Layout((19, 19)).label_extent('n') == pytest.approx(0.5)

    def test_label_sides_are_normalized(self):
        assert Layout((9, 9), label_sides='WSN').label_sides == 'nsw'

    def test_coordinate_labels(self):
        lay = Layout((9, 9), 450, label_sides='nw')
        labels = lay.coordinate_labels()
        assert len(labels) == 18
        north, west = labels[:9], labels[9:]
        assert [text for (text, x, y) in north] == list('ABCDEFGHJ')
        assert [text for (text, x, y) in west] == [
            '9', '8', '7', '6', '5', '4', '3', '2', '1']
        for (text, x, y) in north:
            assert 0 < y < lay.ys[0]
        assert [x for (text, x, y) in north] == lay.xs
        for (text, x, y) in west:
            assert 0 < x < lay.xs[0]
        assert [y for (text, x, y) in west] == lay.ys

    def test_coordinate_labels_all_sides(self):
        lay = Layout((9, 9), 450, label_sides='nesw')
        labels = lay.coordinate_labels()
        assert len(labels) == 36
        east = labels[9:18]
        south = labels[18:27]
        for (text, x, y) in east:
            assert lay.xs[-1] < x < lay.width
        for (text, x, y) in south:
            assert lay.ys[-1] < y < lay.height


class TestViewport:

    def test_flip(self):
        lay = Layout((9, 9), flip=True)
        assert lay.rows == list(range(8, -1, -1))
        assert lay.point_xy((0, 0))[1] == lay.ys[-1]
        assert lay.point_xy((0, 8))[1] == lay.ys[0]

    def test_viewport(self):
        lay = Layout((19, 19), 400, viewport=((12, 9), (3, 0)))
        assert lay.viewport == ((3, 0), (12, 9))
        assert lay.columns == list(range(3, 13))
        assert lay.rows == list(range(0, 10))
        assert lay.contains((3, 0))
        assert lay.contains((12, 9))
        assert not lay.contains((2, 0))
        assert not lay.contains((3, 10))
        assert lay.point_xy((3, 0)) == (lay.xs[0], lay.ys[0])

    def test_viewport_pitch(self):
        whole = Layout((19, 19), 400, label_sides='')
        part = Layout((19, 19), 400, label_sides='',
                      viewport=((0, 0), (9, 9)))
        assert part.pitch > whole.pitch
        assert part.pitch == pytest.approx(400 / (9 + 1.4))

    def test_grid_bounds(self):
        lay = Layout((19, 19), 400)
        assert lay.grid_bounds() == (
            lay.xs[0], lay.ys[0], lay.xs[-1], lay.ys[-1])
        lay = Layout((19, 19), 400, viewport=((0, 0), (9, 9)))
        half = 0.5 * lay.pitch
        left, top, right, bottom = lay.grid_bounds()
        assert (left, top) == (lay.xs[0], lay.ys[0])
        assert right == pytest.approx(lay.xs[-1] + half)
        assert bottom == pytest.approx(lay.ys[-1] + half)

    def test_grid_bounds_flipped(self):
        lay = Layout((19, 19), 400, viewport=((0, 0), (9, 9)), flip=True)
        left, top, right, bottom = lay.grid_bounds()
        # row 9 is at the top, and is not the board edge:
        assert top == pytest.approx(lay.ys[0] - 0.5 * lay.pitch)
        assert bottom == lay.ys[-1]

    def test_edges(self):
        lay = Layout((9, 9), viewport=((2, 2), (5, 5)))
        assert lay.is_edge_column(0)
        assert lay.is_edge_row(8)
        assert not lay.is_edge_column(2)
