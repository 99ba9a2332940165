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

Prismanis
=========

2D dispersive ray optics: polygons and compound lenses made of Cauchy
materials, traced with Fresnel splitting, with an undoable scene graph.

Main modules:
- core: Scene graph, materials, shapes and the ray transport engine
- analysis: Shape and segment analysis utilities (shapely, numpy)
- examples: Example simulations and demonstrations

Quick start:
    from prismanis.core.scene import Scene
    from prismanis.core.geometry import Point
    from prismanis.core.simulator import Simulator
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.geometry import Point
from .core.ray import RayOptions, RaySegment
from .core.scene import Scene
from .core.scene_objs import Lens
from .core.simulator import Simulator

__all__ = [
    'Point',
    'RayOptions',
    'RaySegment',
    'Scene',
    'Lens',
    'Simulator',
    '__version__',
]
