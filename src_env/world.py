"""
world.py
Static scene container consumed by the collision checks.

A world is a flat list of obstacles plus one uniform (x, y) offset applied to
every obstacle before testing.  Only solid axis-aligned rectangles take part
in collision detection; everything else (markings, stalls, backgrounds) is
kept so that downstream consumers see the same data they passed in.
"""
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from geom.polygons import rect_polygon

RECT_TYPE = "rect"
DEFAULT_KIND = "solid"


@dataclass(frozen=True)
class Obstacle:
    type: Optional[str] = None
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    solid: bool = False
    kind: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "Obstacle":
        return cls(
            type=data.get("type"),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
            solid=data.get("solid") is True,
            kind=data.get("kind"),
        )

    @property
    def collidable(self) -> bool:
        return self.solid and self.type == RECT_TYPE


@dataclass(frozen=True)
class World:
    """Read-only obstacle layout with its uniform offset."""
    objects: Tuple[Obstacle, ...] = ()
    offset: Tuple[float, float] = (0.0, 0.0)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "World":
        data = data or {}
        off = data.get("offset") or {}
        return cls(
            objects=tuple(Obstacle.from_dict(o) for o in data.get("objects") or ()),
            offset=(float(off.get("x", 0.0)), float(off.get("y", 0.0))),
            name=data.get("name", ""),
        )

    def solid_rects(self) -> List[Tuple[Obstacle, list]]:
        """(obstacle, world-space polygon) for every collidable obstacle, in order."""
        ox, oy = self.offset
        return [(o, rect_polygon(o.x + ox, o.y + oy, o.width, o.height))
                for o in self.objects if o.collidable]
