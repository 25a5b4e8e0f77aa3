"""SAT overlap, segment helpers and contact resolution."""
import math

import pytest

from geom.collision import (
    closest_points_between_segments,
    contact_point,
    detect_collision,
    polygons_intersect,
    segment_intersection,
)
from geom.polygons import rect_polygon
from src_env.world import World
from vehicles.ackermann import Ackermann
from vehicles.base import Pose, VehicleConfig

SMALL = VehicleConfig(wheelbase=2.9, track=1.6, body_length=4.6, body_width=1.8,
                      front_overhang=0.9, rear_overhang=0.8,
                      wheel_length=0.7, wheel_width=0.25, max_steer_deg=35.0)


def _unit_boxes():
    return rect_polygon(0, 0, 1, 1)


def test_sat_separated_and_overlapping_squares():
    a = _unit_boxes()
    assert polygons_intersect(a, rect_polygon(2, 2, 1, 1)) is False
    assert polygons_intersect(a, rect_polygon(0.5, 0.5, 1, 1)) is True


def test_sat_touching_edges_overlap():
    assert polygons_intersect(_unit_boxes(), rect_polygon(1, 0, 1, 1))


def test_sat_finds_diagonal_separating_axis():
    # bounding boxes overlap, the diamond's edge normal separates them
    diamond = [(2, 1), (3, 2), (2, 3), (1, 2)]
    square = rect_polygon(0, 0, 1.4, 1.4)
    assert not polygons_intersect(diamond, square)
    assert not polygons_intersect(square, diamond)


def test_segment_intersection_crossing():
    assert segment_intersection((0, 0), (2, 2), (0, 2), (2, 0)) == pytest.approx((1.0, 1.0))


def test_segment_intersection_touching_endpoint():
    assert segment_intersection((0, 0), (1, 1), (1, 1), (2, 0)) == pytest.approx((1.0, 1.0))


@pytest.mark.parametrize("a, b, c, d", [
    ((0, 0), (2, 0), (0, 1), (1, 1)),     # parallel
    ((0, 0), (2, 0), (1, 0), (3, 0)),     # collinear overlap
    ((0, 0), (1, 1), (3, 0), (2, 1)),     # lines cross beyond both segments
])
def test_segment_intersection_none(a, b, c, d):
    assert segment_intersection(a, b, c, d) is None


def test_closest_points_parallel_segments():
    p1, p2, d2 = closest_points_between_segments((0, 0), (2, 0), (0, 1), (2, 1))
    assert d2 == pytest.approx(1.0)
    assert p1[1] == pytest.approx(0.0)
    assert p2[1] == pytest.approx(1.0)


def test_closest_points_skew_segments_clamp_to_ends():
    p1, p2, d2 = closest_points_between_segments((0, 0), (1, 0), (2, 1), (2, 3))
    assert p1 == pytest.approx((1.0, 0.0))
    assert p2 == pytest.approx((2.0, 1.0))
    assert d2 == pytest.approx(2.0)


def test_closest_points_crossing_segments():
    p1, p2, d2 = closest_points_between_segments((0, 0), (2, 2), (0, 2), (2, 0))
    assert p1 == pytest.approx((1.0, 1.0))
    assert d2 == pytest.approx(0.0, abs=1e-12)


def test_contact_point_first_edge_crossing():
    car = rect_polygon(0, 0, 2, 1)
    obstacle = rect_polygon(1.5, 0.5, 1, 1)
    assert contact_point(car, obstacle) == pytest.approx((2.0, 0.5))


def test_contact_point_falls_back_to_closest_car_point():
    car = rect_polygon(0, 0, 4, 4)
    obstacle = rect_polygon(1, 1, 1, 1)   # fully inside, no edge crossings
    px, py = contact_point(car, obstacle)
    # nearest car boundary is the bottom or left edge, one unit from the obstacle
    assert min(abs(px), abs(py)) == pytest.approx(0.0, abs=1e-6)
    assert 0.0 <= px <= 4.0 and 0.0 <= py <= 4.0


def _world(*objects, offset=None):
    data = {"objects": list(objects)}
    if offset is not None:
        data["offset"] = offset
    return data


BLOCK = {"type": "rect", "x": 3.0, "y": -0.5, "width": 1.0, "height": 1.0, "solid": True}


def test_detect_collision_reports_kind():
    car = Ackermann(SMALL)
    hit = detect_collision(Pose(), car, _world(dict(BLOCK, kind="car")))
    assert hit is not None
    assert hit.kind == "car"
    assert -0.8 <= hit.x <= 3.8


def test_detect_collision_defaults_kind_to_solid():
    hit = detect_collision(Pose(), Ackermann(SMALL), World.from_dict(_world(BLOCK)))
    assert hit.kind == "solid"


@pytest.mark.parametrize("world", [
    None,
    {"objects": [dict(BLOCK, solid=False)]},
    {"objects": [dict(BLOCK, solid="yes")]},
    {"objects": [dict(BLOCK, type="circle")]},
    {"objects": [{k: v for k, v in BLOCK.items() if k != "type"}]},
    {"objects": [BLOCK], "offset": {"x": 10.0, "y": 0.0}},
])
def test_detect_collision_ignores_non_solid_and_offset_away(world):
    assert detect_collision(Pose(), Ackermann(SMALL), world) is None


def test_detect_collision_offset_brings_obstacle_in():
    far = dict(BLOCK, x=13.0)
    world = _world(far, offset={"x": -10.0, "y": 0.0})
    assert detect_collision(Pose(), Ackermann(SMALL), world) is not None


def test_detect_collision_first_obstacle_wins():
    world = _world(dict(BLOCK, kind="cone"), dict(BLOCK, x=-1.5, kind="car"))
    assert detect_collision(Pose(), Ackermann(SMALL), world).kind == "cone"


def test_detect_collision_rotated_body():
    car = Ackermann(SMALL)
    pose = Pose(heading=math.pi / 2)
    # the body now extends along +y, the block on +x is clear
    assert detect_collision(pose, car, _world(BLOCK)) is None
    ahead = dict(BLOCK, x=-0.5, y=3.0)
    assert detect_collision(pose, car, _world(ahead)) is not None
