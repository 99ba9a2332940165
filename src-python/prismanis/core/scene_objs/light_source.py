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

import math
from typing import Optional, Sequence, Union

from ..constants import LIGHT_ANCHOR_SIZE
from ..geometry import Point, geometry
from ..ray import RayOptions, get_ray_config
from ..transform import Transform
from .base_scene_obj import BaseSceneObj


class LightObject(BaseSceneObj):
    """
    A light anchor that emits one ray per descriptor of its ray config.

    The anchor faces along its transform rotation. It has no material and
    takes no part in intersection or containment queries.

    Attributes:
        ray_config (list of RayOptions): The rays fired by this light
    """

    type = 'light'

    def __init__(
        self,
        ray_config: Sequence[RayOptions],
        transform: Transform,
        obj_id: Optional[str] = None
    ) -> None:
        super().__init__(transform, None, obj_id)
        self.ray_config = list(ray_config)

    @property
    def position(self) -> Point:
        return self.transform.position

    @property
    def direction(self) -> Point:
        """Unit facing direction."""
        return Point(math.cos(self.transform.rotation), math.sin(self.transform.rotation))


def create_light_object(
    ray_config: Union[str, Sequence[RayOptions]],
    position: Point,
    direction: Point = Point(1.0, 0.0),
    obj_id: Optional[str] = None
) -> LightObject:
    """
    Build a light anchor.

    Args:
        ray_config: A list of RayOptions, or the name of a preset in RAY_CONFIGS
        position: World-space anchor position
        direction: Facing direction (normalized here)

    Raises:
        ValueError: If ``ray_config`` names an unknown preset or ``direction`` is zero.
    """
    if isinstance(ray_config, str):
        ray_config = get_ray_config(ray_config)
    if geometry.length(direction) == 0:
        raise ValueError("Light direction must be a non-zero vector")
    transform = Transform(
        position=position,
        rotation=math.atan2(direction.y, direction.x),
        base_size=Point(LIGHT_ANCHOR_SIZE, LIGHT_ANCHOR_SIZE),
        scale=Point(1.0, 1.0)
    )
    return LightObject(ray_config, transform, obj_id)

