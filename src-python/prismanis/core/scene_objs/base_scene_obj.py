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

import uuid as uuid_module
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ..geometry import Point
from ..transform import Transform

if TYPE_CHECKING:
    from ..material import Material


def new_object_id() -> str:
    """Generate a fresh, never reused object id."""
    return str(uuid_module.uuid4())


@dataclass(frozen=True)
class Intersection:
    """
    The nearest hit of a ray on one scene object.

    Attributes:
        t (float): Ray parameter of the hit (distance for a unit direction)
        point (Point): World-space hit point
        normal (Point): Unit surface normal at the hit, not oriented against the ray
        obj (BaseSceneObj): The object that was hit
    """
    t: float
    point: Point
    normal: Point
    obj: 'BaseSceneObj'


class BaseSceneObj:
    """
    Base class for objects in the scene.

    Holds what every object kind shares: a unique id and an exclusively owned
    Transform. The behaviour of each kind (ray intersection, point
    containment) lives in plain functions selected by ``type`` through the
    dispatch table of the ``scene_objs`` package.

    Attributes:
        type (str): Kind tag ('curve', 'lens' or 'light')
        id (str): Unique identifier within the scene
        transform (Transform): Placement of the object in world space
        material (Material or None): Optical material, None for non-optical objects
    """

    type = 'base'

    def __init__(
        self,
        transform: Transform,
        material: Optional['Material'] = None,
        obj_id: Optional[str] = None
    ) -> None:
        self.id = obj_id if obj_id is not None else new_object_id()
        self.transform = transform
        self.material = material

    @property
    def has_material(self) -> bool:
        return self.material is not None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, transform={self.transform!r})"
