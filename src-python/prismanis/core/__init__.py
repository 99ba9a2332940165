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
from .geometry import geometry, Point, Rect, Geometry
from . import constants
from .transform import Transform
from .material import (
    Material, MATERIALS, DEFAULT_MATERIAL, AIR_MATERIAL, GLASS_MATERIAL,
    EXAGGERATED_GLASS_MATERIAL, MIRROR_MATERIAL, WATER_MATERIAL, VACUUM_MATERIAL,
    get_material, index_at, effective_material,
)
from .color_physics import wavelength_to_rgb
from .ray import RayOptions, RaySegment, RAY_CONFIGS, get_ray_config
from .optics import SnellResult, snell, critical_angle
from .scene_objs import Lens, CurveObject, LensObject, LightObject
from .scene import Scene
from .simulator import Simulator
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Rect', 'Geometry',
    'constants',
    'Transform',
    'Material', 'MATERIALS', 'DEFAULT_MATERIAL', 'AIR_MATERIAL', 'GLASS_MATERIAL',
    'EXAGGERATED_GLASS_MATERIAL', 'MIRROR_MATERIAL', 'WATER_MATERIAL', 'VACUUM_MATERIAL',
    'get_material', 'index_at', 'effective_material',
    'wavelength_to_rgb',
    'RayOptions', 'RaySegment', 'RAY_CONFIGS', 'get_ray_config',
    'SnellResult', 'snell', 'critical_angle',
    'Lens', 'CurveObject', 'LensObject', 'LightObject',
    'Scene',
    'Simulator',
    'SVGRenderer'
]
