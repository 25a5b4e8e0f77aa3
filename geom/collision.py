# geom/collision.py
import math
from typing import Mapping, NamedTuple

from geom.polygons import polygon_edges
from src_env.world import DEFAULT_KIND, World

PARALLEL_EPS = 1e-9   # |r x s| below this: parallel/collinear, no single crossing
EPS = 1e-9            # guards the closest-point denominators


class Contact(NamedTuple):
    x: float
    y: float
    kind: str


def _project(poly, ax, ay):
    """Project polygon onto axis (ax, ay). Returns (min, max) scalar interval."""
    v0 = ax*poly[0][0] + ay*poly[0][1]
    mn = mx = v0
    for (x,y) in poly[1:]:
        v = ax*x + ay*y
        if v < mn: mn = v
        if v > mx: mx = v
    return mn, mx


def _axes(poly):
    """Unit edge normals of a polygon (one candidate separating axis per edge)."""
    axes = []
    for (x1,y1), (x2,y2) in polygon_edges(poly):
        nx, ny = -(y2 - y1), (x2 - x1)
        length = math.hypot(nx, ny) or 1.0
        axes.append((nx / length, ny / length))
    return axes


def polygons_intersect(polyA, polyB):
    """
    Separating Axis Theorem for convex polygons.
    Returns True if polygons overlap; touching boundaries count as overlap.
    """
    for ax, ay in _axes(polyA) + _axes(polyB):
        mnA, mxA = _project(polyA, ax, ay)
        mnB, mxB = _project(polyB, ax, ay)
        if mxA < mnB or mxB < mnA:
            return False  # found a separating axis
    return True


def segment_intersection(a, b, c, d):
    """Crossing point of segments ab and cd, or None (parallel/collinear included)."""
    rx, ry = b[0] - a[0], b[1] - a[1]
    sx, sy = d[0] - c[0], d[1] - c[1]
    rxs = rx*sy - ry*sx
    if abs(rxs) < PARALLEL_EPS:
        return None
    qx, qy = c[0] - a[0], c[1] - a[1]
    t = (qx*sy - qy*sx) / rxs
    u = (qx*ry - qy*rx) / rxs
    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return (a[0] + t*rx, a[1] + t*ry)
    return None


def closest_points_between_segments(a, b, c, d):
    """
    Closest points between segments ab and cd.
    Returns (point_on_ab, point_on_cd, squared_distance).
    Parameters are clamped to [0, 1]; parallel or zero-length segments fall
    through to endpoint projections.
    """
    abx, aby = b[0] - a[0], b[1] - a[1]
    cdx, cdy = d[0] - c[0], d[1] - c[1]
    acx, acy = a[0] - c[0], a[1] - c[1]

    ab2 = abx*abx + aby*aby
    cd2 = cdx*cdx + cdy*cdy
    abcd = abx*cdx + aby*cdy
    abac = abx*acx + aby*acy
    cdac = cdx*acx + cdy*acy

    s = 0.0
    denom = ab2*cd2 - abcd*abcd
    if denom > EPS:
        s = (abcd*cdac - cd2*abac) / denom
        s = max(0.0, min(1.0, s))
    t = (abcd*s + cdac) / (cd2 + EPS)
    if t < 0.0:
        t = 0.0
        s = max(0.0, min(1.0, -abac / (ab2 + EPS)))
    elif t > 1.0:
        t = 1.0
        s = max(0.0, min(1.0, (abcd - abac) / (ab2 + EPS)))

    p1 = (a[0] + s*abx, a[1] + s*aby)
    p2 = (c[0] + t*cdx, c[1] + t*cdy)
    dx, dy = p1[0] - p2[0], p1[1] - p2[1]
    return p1, p2, dx*dx + dy*dy


def contact_point(car_poly, obstacle_poly):
    """
    Point representing where the car touches the obstacle.
    First edge-edge crossing (car edges outer loop), else the point on the car
    boundary closest to the obstacle boundary.
    """
    car_edges = polygon_edges(car_poly)
    obs_edges = polygon_edges(obstacle_poly)

    for a, b in car_edges:
        for c, d in obs_edges:
            hit = segment_intersection(a, b, c, d)
            if hit is not None:
                return hit

    best, best_d2 = car_poly[0], math.inf
    for a, b in car_edges:
        for c, d in obs_edges:
            p1, _, d2 = closest_points_between_segments(a, b, c, d)
            if d2 < best_d2:
                best, best_d2 = p1, d2
    return best


def detect_collision(pose, model, world):
    """
    First solid obstacle overlapping the body polygon at `pose`, as a Contact,
    or None. Obstacles are tested in the world's order.
    """
    if world is None:
        return None
    if isinstance(world, Mapping):
        world = World.from_dict(world)

    car_poly = model.body_polygon(pose)
    for obstacle, rect in world.solid_rects():
        if polygons_intersect(car_poly, rect):
            x, y = contact_point(car_poly, rect)
            return Contact(x, y, obstacle.kind or DEFAULT_KIND)
    return None
