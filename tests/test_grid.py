"""Tests for grid generation."""

import math

import pytest
from shapely.geometry import Point, Polygon, box
from shapely.ops import unary_union

from bridgeforge.grid import default_cell_size, generate_grid, grid_steps


def _rect(minx, miny, maxx, maxy) -> Polygon:
    return Polygon([(minx, miny), (minx, maxy), (maxx, maxy), (maxx, miny)])


class TestGridSteps:
    """Tests for grid_steps()."""

    def test_exact_multiple(self):
        rows, cols = grid_steps(_rect(0, 0, 1, 0.5), 0.25)
        assert (rows, cols) == (2, 4)

    def test_partial_cells_round_up(self):
        rows, cols = grid_steps(_rect(0, 0, 1.1, 0.3), 0.5)
        assert (rows, cols) == (1, 3)

    def test_empty_input(self):
        assert grid_steps([], 1.0) == (0, 0)

    def test_far_edges_reach_envelope(self):
        lo, hi = -53.133807790660725, 31.519089339220304
        cell_size = 2.3514693647189175

        _, cols = grid_steps(box(lo, 0, hi, 1), cell_size)
        rows, _ = grid_steps(box(0, -hi, 1, -lo), cell_size)

        assert lo + cols * cell_size >= hi
        assert -lo - rows * cell_size <= -hi


class TestGenerateGrid:
    """Tests for generate_grid()."""

    @pytest.mark.parametrize("cell_size", [0.1, 0.25, 0.3, 0.7, 2.0])
    def test_cell_count(self, cell_size):
        """Cell count is ceil(width / size) * ceil(height / size)."""
        poly = _rect(0.0, 0.0, 1.3, 0.55)
        minx, miny, maxx, maxy = poly.bounds
        expected = math.ceil((maxx - minx) / cell_size) * math.ceil((maxy - miny) / cell_size)

        assert len(generate_grid(poly, cell_size)) == expected

    def test_count_with_non_multiple_height(self):
        """5.701 is not a multiple of 0.1, so one more row is added."""
        poly = _rect(5.5, 5.5, 5.6, 5.701)
        assert len(generate_grid(poly, 0.1)) == 3

    def test_cells_are_valid_squares(self):
        cells = generate_grid(_rect(5.5, 5.5, 5.6, 5.7), 0.001)
        assert cells
        for cell in cells[:50]:
            assert cell.is_valid
            minx, miny, maxx, maxy = cell.bounds
            assert maxx - minx == pytest.approx(0.001)
            assert maxy - miny == pytest.approx(0.001)

    def test_full_coverage(self):
        """Every point of the input lies in at least one cell."""
        poly = Polygon([(0, 0), (1.1, 0.2), (0.9, 0.9), (0.1, 0.7)])
        cells = generate_grid(poly, 0.25)
        covered = unary_union(cells)

        assert covered.covers(poly)
        for x, y in poly.exterior.coords:
            assert any(cell.covers(Point(x, y)) for cell in cells)

    def test_last_column_reaches_envelope(self):
        """Width / size rounds to an integer but the last edge is one ulp short."""
        minx, maxx = -53.133807790660725, 31.519089339220304
        cell_size = 2.3514693647189175
        poly = box(minx, 0, maxx, 1)

        cells = generate_grid(poly, cell_size)

        assert max(cell.bounds[2] for cell in cells) >= maxx
        assert any(cell.covers(Point(maxx, 0.5)) for cell in cells)
        assert unary_union(cells).covers(poly)

    def test_grid_overhangs_input(self):
        """Sizes that do not divide the envelope give full-size edge cells."""
        poly = _rect(5.5, 5.5, 5.61, 5.71)
        cells = generate_grid(poly, 0.2)

        assert len(cells) == 2
        for cell in cells:
            assert cell.intersects(poly)
            assert cell.overlaps(poly)

    def test_starts_at_top_left(self):
        cells = generate_grid(_rect(0, 0, 2, 2), 1.0)
        assert cells[0].equals(box(0, 1, 1, 2))
        assert cells[1].equals(box(1, 1, 2, 2))
        assert cells[-1].equals(box(1, 0, 2, 1))

    def test_neighbouring_cells_share_edges(self):
        cells = generate_grid(_rect(5.5, 5.5, 5.6, 5.7), 0.1)
        for upper, lower in zip(cells, cells[1:]):
            assert upper.bounds[1] == lower.bounds[3]

    def test_multiple_geometries(self):
        polys = [_rect(0, 0, 1, 1), _rect(3, 0, 4, 1)]
        cells = generate_grid(polys, 1.0)
        assert len(cells) == 4
        assert unary_union(cells).covers(unary_union(polys))


class TestDefaultCellSize:
    """Tests for the cell size heuristic."""

    def test_mean_bbox_area(self):
        polys = [_rect(0, 0, 1, 1), _rect(0, 0, 2, 2)]
        assert default_cell_size(polys) == pytest.approx(math.sqrt(2.5) / 2)

    def test_empty(self):
        assert default_cell_size([]) == 0.0
