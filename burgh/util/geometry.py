"""Planar geometry helpers for roads, rivers, lakes and districts.

Everything here works on real-valued map coordinates. Degenerate input
(zero-length segments, parallel lines, polygons with fewer than three points)
never raises: callers get ``None``, ``False`` or an empty result instead.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from burgh import config
from burgh.types import GridPos, MapCoord


@dataclass(frozen=True)
class Point:
    """A real-valued 2D coordinate."""

    x: MapCoord
    y: MapCoord

    def to_grid(self) -> GridPos:
        """Return the grid cell containing this point."""
        return (math.floor(self.x), math.floor(self.y))

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def offset(self, angle: float, distance: float) -> Point:
        """Return the point ``distance`` away along ``angle`` (radians)."""
        return Point(
            self.x + math.cos(angle) * distance,
            self.y + math.sin(angle) * distance,
        )

    def __repr__(self) -> str:
        return f"Point(x={self.x:.2f}, y={self.y:.2f})"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation from ``a`` (t=0) to ``b`` (t=1)."""
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def segment_length(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def unit_normal(a: Point, b: Point) -> tuple[float, float] | None:
    """Unit vector perpendicular to segment a->b, or None if a == b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    return (-dy / length, dx / length)


def segment_intersection(a1: Point, a2: Point, b1: Point, b2: Point) -> Point | None:
    """Intersect segment a1-a2 with segment b1-b2.

    Uses the parametric form of both segments. Returns None when the
    determinant is zero (parallel, collinear or zero-length segments) or when
    the intersection parameters fall outside [0, 1] on either segment.
    """
    denominator = (b2.y - b1.y) * (a2.x - a1.x) - (b2.x - b1.x) * (a2.y - a1.y)
    if denominator == 0:
        return None

    ua = ((b2.x - b1.x) * (a1.y - b1.y) - (b2.y - b1.y) * (a1.x - b1.x)) / denominator
    ub = ((a2.x - a1.x) * (a1.y - b1.y) - (a2.y - a1.y) * (a1.x - b1.x)) / denominator

    if 0 <= ua <= 1 and 0 <= ub <= 1:
        return lerp(a1, a2, ua)
    return None


def point_to_segment_distance(p: Point, a: Point, b: Point) -> float:
    """Shortest distance from ``p`` to the segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return p.distance_to(a)
    t = clamp(((p.x - a.x) * dx + (p.y - a.y) * dy) / length_sq, 0.0, 1.0)
    return p.distance_to(Point(a.x + t * dx, a.y + t * dy))


# =============================================================================
# POLYGONS
# =============================================================================


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting test against a closed polygon.

    The polygon's points are taken in order; the closing edge from the last
    point back to the first is implied.
    """
    if len(polygon) < 3:
        return False

    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        pi = polygon[i]
        pj = polygon[j]
        if (pi.y > point.y) != (pj.y > point.y):
            x_cross = (pj.x - pi.x) * (point.y - pi.y) / (pj.y - pi.y) + pi.x
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def points_in_polygon(
    xs: np.ndarray, ys: np.ndarray, polygon: Sequence[Point]
) -> np.ndarray:
    """Vectorized :func:`point_in_polygon` over arrays of coordinates.

    Args:
        xs: Array of x coordinates.
        ys: Array of y coordinates, same shape as ``xs``.
        polygon: Ordered polygon points.

    Returns:
        Boolean array with the shape of ``xs``.
    """
    inside = np.zeros(np.shape(xs), dtype=bool)
    if len(polygon) < 3:
        return inside

    j = len(polygon) - 1
    for i in range(len(polygon)):
        pi = polygon[i]
        pj = polygon[j]
        j = i
        if pi.y == pj.y:
            # Horizontal edges never straddle a ray
            continue
        straddles = (pi.y > ys) != (pj.y > ys)
        x_cross = (pj.x - pi.x) * (ys - pi.y) / (pj.y - pi.y) + pi.x
        inside ^= straddles & (xs < x_cross)
    return inside


def polygon_centroid(polygon: Sequence[Point]) -> Point:
    """Area centroid of a simple polygon.

    Falls back to the vertex mean when the polygon has no area.
    """
    if not polygon:
        raise ValueError("Cannot take the centroid of an empty polygon")

    area2 = 0.0
    cx = 0.0
    cy = 0.0
    j = len(polygon) - 1
    for i in range(len(polygon)):
        pi = polygon[i]
        pj = polygon[j]
        cross = pj.x * pi.y - pi.x * pj.y
        area2 += cross
        cx += (pj.x + pi.x) * cross
        cy += (pj.y + pi.y) * cross
        j = i

    if area2 == 0:
        return Point(
            sum(p.x for p in polygon) / len(polygon),
            sum(p.y for p in polygon) / len(polygon),
        )
    return Point(cx / (3 * area2), cy / (3 * area2))


def polygon_bounds(polygon: Sequence[Point]) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) of a point sequence."""
    xs = [p.x for p in polygon]
    ys = [p.y for p in polygon]
    return (min(xs), min(ys), max(xs), max(ys))


# =============================================================================
# PATHS
# =============================================================================


def sample_path(
    points: Sequence[Point],
    step: float = config.PATH_STEP,
    min_steps: int = config.MIN_PATH_STEPS,
) -> np.ndarray:
    """Walk a polyline in small parametric steps.

    Each segment is sampled ``max(min_steps, ceil(length / step))`` times so
    that long segments stay dense and short segments still get coverage.

    Args:
        points: Polyline vertices (a single segment is two points).
        step: Target distance between samples.
        min_steps: Floor on samples per segment.

    Returns:
        Array of shape (N, 2) with the sampled (x, y) coordinates, including
        both endpoints. Empty when ``points`` is empty.
    """
    if not points:
        return np.empty((0, 2), dtype=np.float64)
    if len(points) == 1:
        return np.array([[points[0].x, points[0].y]], dtype=np.float64)

    chunks: list[np.ndarray] = []
    for start, end in zip(points, points[1:], strict=False):
        length = segment_length(start, end)
        steps = max(min_steps, math.ceil(length / step))
        t = np.linspace(0.0, 1.0, steps + 1)
        xs = start.x + (end.x - start.x) * t
        ys = start.y + (end.y - start.y) * t
        chunks.append(np.column_stack((xs, ys)))
    return np.concatenate(chunks)


@functools.cache
def disc_offsets(radius: int) -> np.ndarray:
    """Integer (dx, dy) offsets of every cell within ``radius`` of the origin."""
    span = np.arange(-radius, radius + 1)
    dx, dy = np.meshgrid(span, span, indexing="ij")
    mask = dx * dx + dy * dy <= radius * radius
    return np.column_stack((dx[mask], dy[mask]))
