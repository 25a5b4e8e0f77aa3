# geom/polygons.py
import math


def local_to_world(x, y, theta, local_x, local_y):
    """Rotate (local_x, local_y) by theta, then translate by (x, y)."""
    c, s = math.cos(theta), math.sin(theta)
    return (x + local_x*c - local_y*s,
            y + local_x*s + local_y*c)


def oriented_box(center, length, width, theta):
    """
    Return a 4-vertex polygon for a rectangle centered at 'center' with heading 'theta'.
    Long side = length (front/back), short side = width (left/right).
    Vertex order: rear-left, front-left, front-right, rear-right.
    """
    x, y = center
    L = length / 2.0
    W = width  / 2.0
    corners_local = [(-L, W), (L, W), (L, -W), (-L, -W)]
    return [local_to_world(x, y, theta, px, py) for (px, py) in corners_local]


def rect_polygon(x, y, width, height):
    """Axis-aligned rectangle with corner (x, y) -> counter-clockwise polygon."""
    return [(x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height)]


def polygon_edges(poly):
    """Closed list of (start, end) edges, last vertex wrapping to the first."""
    n = len(poly)
    return [(poly[i], poly[(i+1) % n]) for i in range(n)]
