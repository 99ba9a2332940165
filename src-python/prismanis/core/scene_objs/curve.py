"""
Copyright 2026 prismanis authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import List, Optional, Sequence

from shapely.geometry import Polygon

from ..geometry import Point, geometry
from ..transform import Transform
from ..material import Material, DEFAULT_MATERIAL
from .base_scene_obj import BaseSceneObj, Intersection


class CurveObject(BaseSceneObj):
    """
    A closed polygon ("curve") filled with a material.

    Points are stored in the local frame, relative to the centre of the
    bounding box they had when the object was created, so the Transform
    alone decides where the polygon sits in the world.

    Attributes:
        points (list of Point): Local-frame vertices; edge i joins
            ``points[i]`` and ``points[(i + 1) % n]``
    """

    type = 'curve'

    def __init__(
        self,
        points: Sequence[Point],
        transform: Transform,
        material: Material = DEFAULT_MATERIAL,
        obj_id: Optional[str] = None
    ) -> None:
        super().__init__(transform, material, obj_id)
        self.points = list(points)

    def world_points(self) -> List[Point]:
        return [self.transform.apply(p) for p in self.points]

    def world_edges(self):
        """Yield ``(p1, p2)`` for every world-space edge, closing the loop."""
        pts = self.world_points()
        n = len(pts)
        for i in range(n):
            yield pts[i], pts[(i + 1) % n]

    def to_shapely(self) -> Polygon:
        return Polygon([p.to_tuple() for p in self.world_points()])


def create_curve_object(
    points: Sequence[Point],
    material: Optional[Material] = None,
    obj_id: Optional[str] = None
) -> CurveObject:
    """
    Build a curve from world-space points.

    The points are re-centred on their bounding-box centre, which becomes
    the transform position; the bounding-box size becomes the base size.

    Raises:
        ValueError: If fewer than three points are given.
    """
    if len(points) < 3:
        raise ValueError(f"A curve needs at least 3 points, got {len(points)}")

    min_x = min(p.x for p in points)
    max_x = max(p.x for p in points)
    min_y = min(p.y for p in points)
    max_y = max(p.y for p in points)
    center = Point((min_x + max_x) / 2, (min_y + max_y) / 2)

    local = [Point(p.x - center.x, p.y - center.y) for p in points]
    transform = Transform(
        position=center,
        rotation=0.0,
        base_size=Point(max_x - min_x, max_y - min_y),
        scale=Point(1.0, 1.0)
    )
    return CurveObject(local, transform, material or DEFAULT_MATERIAL, obj_id)


def intersect_curve(
    obj: CurveObject,
    origin: Point,
    direction: Point
) -> Optional[Intersection]:
    """
    Nearest hit of a ray on the edges of a curve.

    Edges parallel to the ray are skipped. The normal is the normalized
    left perpendicular of the edge direction; its sign is left to the caller.
    """
    best = None
    for p1, p2 in obj.world_edges():
        hit = geometry.ray_segment_intersection(origin, direction, p1, p2)
        if hit is None:
            continue
        t = hit[0]
        if best is not None and t >= best.t:
            continue
        normal = geometry.normalize_vec(geometry.left_perpendicular(geometry.sub(p2, p1)))
        point = Point(origin.x + t * direction.x, origin.y + t * direction.y)
        best = Intersection(t, point, normal, obj)
    return best


def curve_contains_point(obj: CurveObject, point: Point) -> bool:
    """Even-odd point-in-polygon test on the world-space edges."""
    inside = False
    for p1, p2 in obj.world_edges():
        if (p1.y > point.y) != (p2.y > point.y):
            x_cross = p1.x + (point.y - p1.y) * (p2.x - p1.x) / (p2.y - p1.y)
            if point.x < x_cross:
                inside = not inside
    return inside
