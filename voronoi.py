# voronoi.py
"""
Builds a bounded Voronoi tessellation over a set of seed points.

Every cell is the bounding rectangle clipped by the perpendicular bisector
half-plane between its seed and each other seed. The clipping loop runs in
a Numba-jitted kernel, which keeps a full rebuild every frame affordable for
the tens to low hundreds of seeds the animation uses.

Degenerate inputs never raise:
  - no seeds gives an empty diagram, a single seed owns the whole rectangle;
  - collinear seeds give parallel strips;
  - coincident seeds skip each other's (undefined) bisector, so every copy
    receives the same shared cell;
  - a seed whose cell lies entirely outside the rectangle gets an empty
    (0, 2) polygon.
"""
import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple
from numba import jit

# --- Data Contracts ---
#
# build_voronoi(points: array-like (N, 2), bounds: (x0, y0, x1, y1)) -> VoronoiDiagram:
#   - Outputs: A diagram with exactly N cells, cell i belonging to points[i].
#   - Raises: ValueError if the bounds are empty (x1 <= x0 or y1 <= y0) or the
#     points are not of shape (N, 2).
#   - Invariants: Each non-empty cell is a convex polygon inside the bounds,
#     listed in counter-clockwise order for a y-up frame.

Bounds = Tuple[float, float, float, float]


@jit(nopython=True)
def _clip_cell_numba(points, index, x0, y0, x1, y1):
    """
    Numba-jitted Sutherland-Hodgman clipping of the bounding rectangle.

    Keeps the half-plane of points at least as close to points[index] as to
    points[j], written as a . v <= c with a = q - p and c = (|q|^2 - |p|^2) / 2.
    Clipping a convex polygon by a line adds at most one vertex, so the
    buffers never need more than N + 5 rows.
    """
    n = points.shape[0]
    capacity = n + 5
    poly = np.empty((capacity, 2), dtype=np.float64)
    scratch = np.empty((capacity, 2), dtype=np.float64)

    poly[0, 0] = x0
    poly[0, 1] = y0
    poly[1, 0] = x1
    poly[1, 1] = y0
    poly[2, 0] = x1
    poly[2, 1] = y1
    poly[3, 0] = x0
    poly[3, 1] = y1
    count = 4

    px = points[index, 0]
    py = points[index, 1]
    p_sq = px * px + py * py

    for j in range(n):
        if j == index or count == 0:
            continue
        qx = points[j, 0]
        qy = points[j, 1]
        ax = qx - px
        ay = qy - py
        if ax == 0.0 and ay == 0.0:
            # Coincident seed: no bisector exists
            continue
        c = 0.5 * ((qx * qx + qy * qy) - p_sq)

        out = 0
        for k in range(count):
            sx = poly[k, 0]
            sy = poly[k, 1]
            ex = poly[(k + 1) % count, 0]
            ey = poly[(k + 1) % count, 1]
            ds = ax * sx + ay * sy - c
            de = ax * ex + ay * ey - c
            # A vertex lying exactly on the bisector is its own crossing
            # point, so crossings are only emitted for strict sign changes.
            if de <= 0.0:
                if ds > 0.0 and de < 0.0:
                    t = ds / (ds - de)
                    scratch[out, 0] = sx + t * (ex - sx)
                    scratch[out, 1] = sy + t * (ey - sy)
                    out += 1
                scratch[out, 0] = ex
                scratch[out, 1] = ey
                out += 1
            elif ds < 0.0:
                t = ds / (ds - de)
                scratch[out, 0] = sx + t * (ex - sx)
                scratch[out, 1] = sy + t * (ey - sy)
                out += 1

        tmp = poly
        poly = scratch
        scratch = tmp
        count = out

    return poly[:count].copy()


def polygon_area(polygon: np.ndarray) -> float:
    """Unsigned shoelace area of a polygon given as a (K, 2) array."""
    if len(polygon) < 3:
        return 0.0
    x = polygon[:, 0]
    y = polygon[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


@dataclass
class VoronoiDiagram:
    """
    The bounded Voronoi cells of a point set, in input order.
    """
    points: np.ndarray
    bounds: Bounds
    cells: List[np.ndarray] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cells)

    def cell_polygon(self, index: int) -> np.ndarray:
        """Returns the (K, 2) vertex array of the cell owned by points[index]."""
        return self.cells[index]

    def cell_polygons(self) -> Iterator[np.ndarray]:
        """Yields every non-degenerate cell polygon (three or more vertices)."""
        for polygon in self.cells:
            if len(polygon) >= 3:
                yield polygon


def build_voronoi(points: Sequence, bounds: Bounds) -> VoronoiDiagram:
    """
    Computes the Voronoi tessellation of `points` clipped to `bounds`.

    Args:
        points: Seed coordinates, shape (N, 2).
        bounds (Bounds): The clipping rectangle as (x0, y0, x1, y1).

    Returns:
        VoronoiDiagram: One cell per seed, in the same order as the seeds.
    """
    x0, y0, x1, y1 = (float(b) for b in bounds)
    if x1 <= x0 or y1 <= y0:
        raise ValueError(f"Voronoi bounds must have positive area, got {bounds}.")

    pts = np.ascontiguousarray(points, dtype=np.float64)
    if pts.size == 0:
        pts = pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Voronoi points must have shape (N, 2), got {pts.shape}.")

    cells = [_clip_cell_numba(pts, i, x0, y0, x1, y1) for i in range(pts.shape[0])]

    if logging.getLogger().isEnabledFor(logging.DEBUG):
        empty = sum(1 for cell in cells if len(cell) < 3)
        if empty:
            logging.debug(f"Voronoi diagram has {empty} empty cells out of {len(cells)}.")

    return VoronoiDiagram(points=pts, bounds=(x0, y0, x1, y1), cells=cells)
