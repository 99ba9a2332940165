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

Scene object kinds and their dispatch table.

The set of kinds is closed: 'curve' (polygon), 'lens' and 'light'. Ray
intersection and point containment are looked up by ``obj.type`` instead
of being methods, so adding a kind means registering its functions here.
"""

from typing import Callable, Dict, Optional

from ..geometry import Point
from .base_scene_obj import BaseSceneObj, Intersection, new_object_id
from .curve import CurveObject, create_curve_object, intersect_curve, curve_contains_point
from .lens import (
    Lens, LensObject, create_lens_object, intersect_lens, lens_contains_point,
    lens_outline, lens_primitives, arc_width, arc_half_angle, total_width,
)
from .light_source import LightObject, create_light_object

IntersectFn = Callable[[BaseSceneObj, Point, Point], Optional[Intersection]]
ContainsFn = Callable[[BaseSceneObj, Point], bool]

INTERSECTORS: Dict[str, IntersectFn] = {
    'curve': intersect_curve,
    'lens': intersect_lens,
}

CONTAINMENT: Dict[str, ContainsFn] = {
    'curve': curve_contains_point,
    'lens': lens_contains_point,
}


def is_optical(obj: BaseSceneObj) -> bool:
    """True for objects that rays interact with."""
    return obj.type in INTERSECTORS


def intersect(obj: BaseSceneObj, origin: Point, direction: Point) -> Optional[Intersection]:
    fn = INTERSECTORS.get(obj.type)
    if fn is None:
        return None
    return fn(obj, origin, direction)


def contains_point(obj: BaseSceneObj, point: Point) -> bool:
    fn = CONTAINMENT.get(obj.type)
    if fn is None:
        return False
    return fn(obj, point)


__all__ = [
    'BaseSceneObj', 'Intersection', 'new_object_id',
    'CurveObject', 'create_curve_object', 'intersect_curve', 'curve_contains_point',
    'Lens', 'LensObject', 'create_lens_object', 'intersect_lens', 'lens_contains_point',
    'lens_outline', 'lens_primitives', 'arc_width', 'arc_half_angle', 'total_width',
    'LightObject', 'create_light_object',
    'INTERSECTORS', 'CONTAINMENT', 'is_optical', 'intersect', 'contains_point',
]
