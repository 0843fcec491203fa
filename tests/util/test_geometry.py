"""Tests for the planar geometry helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from burgh.util.geometry import (
    Point,
    clamp,
    disc_offsets,
    lerp,
    point_in_polygon,
    point_to_segment_distance,
    points_in_polygon,
    polygon_bounds,
    polygon_centroid,
    sample_path,
    segment_intersection,
    segment_length,
    unit_normal,
)

SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


class TestPoint:
    def test_to_grid_floors(self) -> None:
        assert Point(3.9, 7.1).to_grid() == (3, 7)
        assert Point(-0.5, 0.0).to_grid() == (-1, 0)

    def test_offset_moves_along_angle(self) -> None:
        moved = Point(1, 1).offset(math.pi / 2, 5)
        assert moved.x == pytest.approx(1)
        assert moved.y == pytest.approx(6)

    def test_distance_to(self) -> None:
        assert Point(0, 0).distance_to(Point(3, 4)) == 5


class TestSegments:
    def test_clamp_and_lerp(self) -> None:
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert lerp(Point(0, 0), Point(10, 20), 0.25) == Point(2.5, 5)

    def test_segment_length(self) -> None:
        assert segment_length(Point(0, 0), Point(0, 7)) == 7

    def test_unit_normal_is_perpendicular(self) -> None:
        nx, ny = unit_normal(Point(0, 0), Point(10, 0))
        assert (nx, ny) == pytest.approx((0.0, 1.0))

    def test_unit_normal_of_zero_length_segment(self) -> None:
        assert unit_normal(Point(2, 2), Point(2, 2)) is None

    def test_crossing_segments_intersect(self) -> None:
        point = segment_intersection(
            Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0)
        )
        assert point is not None
        assert point.x == pytest.approx(5)
        assert point.y == pytest.approx(5)

    def test_parallel_segments_do_not_intersect(self) -> None:
        assert (
            segment_intersection(Point(0, 0), Point(10, 0), Point(0, 5), Point(10, 5))
            is None
        )

    def test_lines_crossing_outside_segments(self) -> None:
        """The infinite lines cross at (20, 0), beyond the first segment."""
        assert (
            segment_intersection(
                Point(0, 0), Point(10, 0), Point(20, -5), Point(20, 5)
            )
            is None
        )

    def test_degenerate_segment_returns_none(self) -> None:
        assert (
            segment_intersection(Point(1, 1), Point(1, 1), Point(0, 0), Point(5, 5))
            is None
        )

    def test_point_to_segment_distance(self) -> None:
        assert point_to_segment_distance(Point(5, 3), Point(0, 0), Point(10, 0)) == 3
        assert point_to_segment_distance(Point(13, 4), Point(0, 0), Point(10, 0)) == 5


class TestPolygons:
    def test_point_in_polygon(self) -> None:
        assert point_in_polygon(Point(5, 5), SQUARE)
        assert not point_in_polygon(Point(15, 5), SQUARE)
        assert not point_in_polygon(Point(5, -1), SQUARE)

    def test_too_few_points_is_never_inside(self) -> None:
        assert not point_in_polygon(Point(0, 0), [Point(0, 0), Point(1, 1)])

    def test_vectorized_matches_scalar(self) -> None:
        """points_in_polygon agrees with point_in_polygon on a concave shape."""
        polygon = [Point(0, 0), Point(10, 0), Point(10, 10), Point(5, 4), Point(0, 10)]
        xs, ys = np.meshgrid(
            np.arange(-2, 13) + 0.5, np.arange(-2, 13) + 0.5, indexing="ij"
        )

        inside = points_in_polygon(xs, ys, polygon)

        expected = np.array(
            [
                [point_in_polygon(Point(x, y), polygon) for x, y in zip(row_x, row_y)]
                for row_x, row_y in zip(xs, ys)
            ]
        )
        assert inside.shape == xs.shape
        assert np.array_equal(inside, expected)
        assert np.any(inside)

    def test_centroid_of_square(self) -> None:
        centroid = polygon_centroid(SQUARE)
        assert centroid.x == pytest.approx(5)
        assert centroid.y == pytest.approx(5)

    def test_centroid_of_degenerate_polygon_is_vertex_mean(self) -> None:
        line = [Point(0, 0), Point(2, 0), Point(4, 0)]
        assert polygon_centroid(line) == Point(2, 0)

    def test_bounds(self) -> None:
        assert polygon_bounds([Point(3, -1), Point(-2, 4), Point(1, 1)]) == (
            -2,
            -1,
            3,
            4,
        )


class TestPaths:
    def test_sample_path_includes_endpoints(self) -> None:
        samples = sample_path([Point(0, 0), Point(10, 0)], step=1.0)

        assert samples.shape == (11, 2)
        assert tuple(samples[0]) == (0.0, 0.0)
        assert tuple(samples[-1]) == (10.0, 0.0)

    def test_short_segments_get_minimum_steps(self) -> None:
        samples = sample_path([Point(0, 0), Point(0.5, 0)], step=1.0, min_steps=4)
        assert len(samples) == 5

    def test_polyline_samples_every_segment(self) -> None:
        samples = sample_path([Point(0, 0), Point(4, 0), Point(4, 4)], step=1.0)
        assert len(samples) == 10
        assert tuple(samples[-1]) == (4.0, 4.0)

    def test_empty_path(self) -> None:
        assert sample_path([]).shape == (0, 2)

    def test_disc_offsets(self) -> None:
        offsets = disc_offsets(1)
        assert {tuple(o) for o in offsets} == {
            (0, 0),
            (1, 0),
            (-1, 0),
            (0, 1),
            (0, -1),
        }
        assert len(disc_offsets(0)) == 1
