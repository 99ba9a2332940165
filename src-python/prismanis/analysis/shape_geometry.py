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
from dataclasses import dataclass
from typing import List, Tuple, TYPE_CHECKING

from shapely.geometry import Polygon
from shapely.ops import unary_union

from ..core.material import Material, effective_material
from ..core.scene_objs import lens_outline

if TYPE_CHECKING:
    from ..core.scene import Scene
    from ..core.scene_objs import BaseSceneObj


def object_to_polygon(obj: 'BaseSceneObj', lens_samples: int = 64) -> Polygon:
    """
    Convert a curve or lens to a Shapely Polygon in world space.

    Args:
        obj: A curve or lens object
        lens_samples: Points per lens arc

    Returns:
        A Shapely Polygon representing the object's boundary.

    Raises:
        ValueError: For objects without an area (light anchors).

    Note:
        Lens arcs are sampled, so areas and perimeters of lenses are
        slight underestimates.
    """
    if obj.type == 'curve':
        return obj.to_shapely()
    if obj.type == 'lens':
        return Polygon([p.to_tuple() for p in lens_outline(obj, lens_samples)])
    raise ValueError(f"Object of type '{obj.type}' has no polygon")


@dataclass
class ObjectGeometry:
    """
    Geometric summary of one object.

    Attributes:
        obj: The scene object
        polygon: Its Shapely Polygon
        area: Enclosed area in scene units squared
        perimeter: Boundary length
        centroid: (x, y) of the centroid
        bounds: (min_x, min_y, max_x, max_y)
    """
    obj: 'BaseSceneObj'
    polygon: Polygon
    area: float
    perimeter: float
    centroid: Tuple[float, float]
    bounds: Tuple[float, float, float, float]


def describe_object(obj: 'BaseSceneObj') -> ObjectGeometry:
    polygon = object_to_polygon(obj)
    c = polygon.centroid
    return ObjectGeometry(
        obj=obj,
        polygon=polygon,
        area=polygon.area,
        perimeter=polygon.length,
        centroid=(c.x, c.y),
        bounds=tuple(polygon.bounds),
    )


@dataclass
class ObjectOverlap:
    """
    Two objects whose interiors overlap.

    Attributes:
        obj1: First object (earlier in the scene)
        obj2: Second object
        region: Shapely geometry of the shared interior
        medium: Effective material inside the shared region, as seen by a
            ray that entered obj1 before obj2
    """
    obj1: 'BaseSceneObj'
    obj2: 'BaseSceneObj'
    region: Polygon
    medium: Material

    @property
    def area(self) -> float:
        return self.region.area

    def index_at(self, wavelength: float) -> float:
        return self.medium.index_at(wavelength)


def find_overlapping_objects(scene: 'Scene', min_area: float = 1e-9) -> List[ObjectOverlap]:
    """
    Find every pair of optical objects whose interiors overlap.

    Args:
        scene: The scene to analyse
        min_area: Overlaps with a smaller area are ignored (touching edges)

    Returns:
        List of ObjectOverlap, in scene order.
    """
    objs = scene.optical_objs
    polygons = [object_to_polygon(obj) for obj in objs]
    overlaps = []
    for i in range(len(objs)):
        for j in range(i + 1, len(objs)):
            if not polygons[i].intersects(polygons[j]):
                continue
            region = polygons[i].intersection(polygons[j])
            if region.area <= min_area:
                continue
            medium = effective_material([objs[i].material, objs[j].material])
            overlaps.append(ObjectOverlap(objs[i], objs[j], region, medium))
    return overlaps


def total_optical_area(scene: 'Scene') -> float:
    """Area covered by at least one optical object."""
    polygons = [object_to_polygon(obj) for obj in scene.optical_objs]
    if not polygons:
        return 0.0
    return unary_union(polygons).area
