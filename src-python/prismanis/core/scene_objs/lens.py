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

Compound lens: two circular arcs joined by the flat top and bottom edges
of a rectangular core.

Local frame: x runs across the thickness (left arc at negative x), y runs
along the height (top at negative y). The profile is evaluated at the
transform's effective height and placed with rotation and translation
only, since a circle under non-uniform scale is no longer a circle.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np

from ..geometry import Point, geometry
from ..transform import Transform
from ..material import Material, DEFAULT_MATERIAL
from .base_scene_obj import BaseSceneObj, Intersection


@dataclass(frozen=True)
class Lens:
    """
    Lens parameters.

    Attributes:
        r1 (float): Left radius. Positive bulges outward (convex), negative
            recedes (concave), ``math.inf`` is flat
        r2 (float): Right radius, same convention
        middle_thickness (float): Width of the rectangular core
    """
    r1: float
    r2: float
    middle_thickness: float


@dataclass(frozen=True)
class ArcPrimitive:
    center: Point
    radius: float
    start_angle: float
    end_angle: float
    concave: bool


@dataclass(frozen=True)
class LinePrimitive:
    p1: Point
    p2: Point
    normal: Point


Primitive = Union[ArcPrimitive, LinePrimitive]


def _is_flat(radius: float, height: float) -> bool:
    r = abs(radius)
    return math.isinf(r) or r == 0 or r < height / 2


def arc_width(radius: float, height: float) -> float:
    """How far an arc bulges beyond (or recedes into) the flat core."""
    if _is_flat(radius, height):
        return 0.0
    r = abs(radius)
    return r - math.sqrt(r * r - height * height / 4)


def arc_half_angle(radius: float, height: float) -> float:
    """Half the angle subtended by an arc, signed like the radius."""
    if _is_flat(radius, height):
        return 0.0
    return math.copysign(math.asin((height / 2) / abs(radius)), radius)


def total_width(lens: Lens, height: float) -> float:
    return arc_width(lens.r1, height) + lens.middle_thickness + arc_width(lens.r2, height)


def lens_primitives(lens: Lens, height: float) -> List[Primitive]:
    """
    Boundary primitives of the lens in its local frame.

    Returns:
        Up to four primitives: the left side, the right side (each an arc,
        or a straight segment when flat), then the top and bottom edges.
    """
    hh = height / 2
    left_w = arc_width(lens.r1, height)
    right_w = arc_width(lens.r2, height)
    width = left_w + lens.middle_thickness + right_w
    x_left = -width / 2 + left_w
    x_right = width / 2 - right_w

    prims: List[Primitive] = []

    # Left side
    if _is_flat(lens.r1, height):
        left_end = x_left
        prims.append(LinePrimitive(Point(left_end, hh), Point(left_end, -hh), Point(-1.0, 0.0)))
    else:
        r = abs(lens.r1)
        alpha = abs(arc_half_angle(lens.r1, height))
        if lens.r1 > 0:
            left_end = x_left
            prims.append(ArcPrimitive(Point(-width / 2 + r, 0.0), r,
                                      math.pi - alpha, math.pi + alpha, False))
        else:
            left_end = -width / 2
            prims.append(ArcPrimitive(Point(x_left - r, 0.0), r, -alpha, alpha, True))

    # Right side
    if _is_flat(lens.r2, height):
        right_end = x_right
        prims.append(LinePrimitive(Point(right_end, -hh), Point(right_end, hh), Point(1.0, 0.0)))
    else:
        r = abs(lens.r2)
        alpha = abs(arc_half_angle(lens.r2, height))
        if lens.r2 > 0:
            right_end = x_right
            prims.append(ArcPrimitive(Point(width / 2 - r, 0.0), r, -alpha, alpha, False))
        else:
            right_end = width / 2
            prims.append(ArcPrimitive(Point(x_right + r, 0.0), r,
                                      math.pi - alpha, math.pi + alpha, True))

    prims.append(LinePrimitive(Point(left_end, -hh), Point(right_end, -hh), Point(0.0, -1.0)))
    prims.append(LinePrimitive(Point(right_end, hh), Point(left_end, hh), Point(0.0, 1.0)))
    return prims


def _to_world(prim: Primitive, transform: Transform) -> Primitive:
    if isinstance(prim, ArcPrimitive):
        return ArcPrimitive(
            transform.apply_rigid(prim.center),
            prim.radius,
            prim.start_angle + transform.rotation,
            prim.end_angle + transform.rotation,
            prim.concave
        )
    return LinePrimitive(
        transform.apply_rigid(prim.p1),
        transform.apply_rigid(prim.p2),
        transform.apply_direction(prim.normal)
    )


class LensObject(BaseSceneObj):
    """
    A lens placed in the scene.

    The transform's base size is ``(total_width, height)``; the effective
    height is what the profile is computed from. Resizing changes the height
    but not the profile width, so the frame width goes stale until
    ``fit_frame`` is called (``Scene.end_transform`` does this).
    """

    type = 'lens'

    def __init__(
        self,
        lens: Lens,
        transform: Transform,
        material: Material = DEFAULT_MATERIAL,
        obj_id: Optional[str] = None
    ) -> None:
        super().__init__(transform, material, obj_id)
        self.lens = lens

    @property
    def height(self) -> float:
        return self.transform.effective_size.y

    def world_primitives(self) -> List[Primitive]:
        return [_to_world(p, self.transform) for p in lens_primitives(self.lens, self.height)]

    def fit_frame(self) -> None:
        """Make the frame width match the profile at the current height."""
        self.transform.base_size = Point(total_width(self.lens, self.height),
                                         self.transform.base_size.y)
        self.transform.scale = Point(1.0, self.transform.scale.y)


def create_lens_object(
    lens: Lens,
    position: Point,
    height: float,
    rotation: float = 0.0,
    material: Optional[Material] = None,
    obj_id: Optional[str] = None
) -> LensObject:
    transform = Transform(
        position=position,
        rotation=rotation,
        base_size=Point(total_width(lens, height), height),
        scale=Point(1.0, 1.0)
    )
    return LensObject(lens, transform, material or DEFAULT_MATERIAL, obj_id)


def _intersect_arc(arc: ArcPrimitive, origin: Point, direction: Point):
    for t in geometry.ray_circle_intersections(origin, direction, arc.center, arc.radius):
        point = Point(origin.x + t * direction.x, origin.y + t * direction.y)
        angle = math.atan2(point.y - arc.center.y, point.x - arc.center.x)
        if geometry.angle_in_range(angle, arc.start_angle, arc.end_angle):
            radial = Point((point.x - arc.center.x) / arc.radius,
                           (point.y - arc.center.y) / arc.radius)
            if arc.concave:
                radial = Point(-radial.x, -radial.y)
            return t, point, radial
    return None


def intersect_lens(
    obj: LensObject,
    origin: Point,
    direction: Point
) -> Optional[Intersection]:
    """
    Nearest hit of a ray on the lens boundary.

    Arcs are intersected as full circles and filtered by angular range;
    straight edges use the parametric segment test. Normals point out of
    the lens (radial for arcs).
    """
    best = None
    for prim in obj.world_primitives():
        if isinstance(prim, ArcPrimitive):
            hit = _intersect_arc(prim, origin, direction)
            if hit is None:
                continue
            t, point, normal = hit
        else:
            seg = geometry.ray_segment_intersection(origin, direction, prim.p1, prim.p2)
            if seg is None:
                continue
            t = seg[0]
            point = Point(origin.x + t * direction.x, origin.y + t * direction.y)
            normal = prim.normal
        if best is None or t < best.t:
            best = Intersection(t, point, normal, obj)
    return best


def lens_contains_point(obj: LensObject, point: Point) -> bool:
    """
    Always False: a lens is never taken as the starting medium of a ray.

    Rays whose origin lies inside a lens therefore start in the ambient
    medium. This is a known limitation.
    """
    return False


def _arc_points(arc: ArcPrimitive, samples: int) -> List[Point]:
    angles = np.linspace(arc.start_angle, arc.end_angle, samples)
    return [Point(arc.center.x + arc.radius * math.cos(a),
                  arc.center.y + arc.radius * math.sin(a)) for a in angles]


def lens_outline(obj: LensObject, samples: int = 32) -> List[Point]:
    """
    World-space outline of the lens as a closed ring (first point not repeated),
    with arcs sampled at ``samples`` points each. Used for drawing and analysis.
    """
    left, right = lens_primitives(obj.lens, obj.height)[:2]

    def side(prim: Primitive) -> List[Point]:
        if isinstance(prim, ArcPrimitive):
            return _arc_points(prim, samples)
        return [prim.p1, prim.p2]

    # Right side top to bottom, then left side bottom to top
    right_pts = sorted(side(right), key=lambda p: p.y)
    left_pts = sorted(side(left), key=lambda p: -p.y)
    return [obj.transform.apply_rigid(p) for p in right_pts + left_pts]
