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
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from .constants import (
    RAY_NUDGE, FAR_RAY_LENGTH, MIN_RAY_ENERGY, MAX_RAY_DEPTH, MAX_RAY_SEGMENTS,
    LEGACY_MAX_INTERACTIONS,
)
from .geometry import Point, geometry
from .material import Material, effective_material, index_at
from .optics import snell, refract_or_reflect
from .ray import RayOptions, RaySegment
from .scene_objs import BaseSceneObj, Intersection, LightObject, intersect, contains_point

if TYPE_CHECKING:
    from .scene import Scene


@dataclass
class _WorkItem:
    position: Point
    direction: Point
    wavelength: float
    energy: float
    inside: Dict[str, Material]
    depth: int


class Simulator:
    """
    Ray transport engine.

    Each ray is traced against a snapshot of the scene's optical objects.
    In the default 'fresnel' mode every boundary splits the ray into a
    reflected and a refracted child weighted by the Fresnel reflectance,
    and the children are processed breadth-first from a queue. The
    'critical_angle' mode follows a single polyline that either refracts or
    reflects at each boundary and never splits its energy.

    The set of media a ray is inside is tracked as an insertion-ordered
    mapping from object id to material. Hitting an object already in the
    mapping is an exit, anything else an entry.

    Attributes:
        scene (Scene): The scene to trace through
        max_depth (int): Children deeper than this are discarded
        max_segments (int): Tracing of one ray stops once it has emitted
            more segments than this
        min_energy (float): Children with less energy are discarded
        processed_ray_count (int): Work items processed since the last run()
        ray_segments (list): Segments produced by the last run()
    """

    VALID_MODES = ('fresnel', 'critical_angle')

    def __init__(
        self,
        scene: 'Scene',
        max_depth: int = MAX_RAY_DEPTH,
        max_segments: int = MAX_RAY_SEGMENTS,
        min_energy: float = MIN_RAY_ENERGY,
        mode: str = 'fresnel',
        verbose: int = 0
    ) -> None:
        """
        Initialize the simulator.

        Args:
            scene (Scene): The scene to simulate
            max_depth (int): Maximum branching depth (default: 50)
            max_segments (int): Segment cap per traced ray (default: 5000)
            min_energy (float): Energy cutoff for child rays (default: 2e-4)
            mode (str): 'fresnel' or 'critical_angle'
            verbose (int): Verbosity level (default: 0)
                0 = silent (no debug output)
                1 = verbose (show ray processing info)
                2 = very verbose/debug (show detailed refraction calculations)

        Raises:
            ValueError: On non-positive limits, a negative energy cutoff or
                an unknown mode.
        """
        if max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        if max_segments <= 0:
            raise ValueError(f"max_segments must be positive, got {max_segments}")
        if min_energy < 0:
            raise ValueError(f"min_energy must not be negative, got {min_energy}")
        self.scene: 'Scene' = scene
        self.max_depth: int = max_depth
        self.max_segments: int = max_segments
        self.min_energy: float = min_energy
        self.mode = mode
        self.verbose: int = verbose
        self.processed_ray_count: int = 0
        self.ray_segments: List[RaySegment] = []

    @property
    def mode(self) -> str:
        """Get the trace mode."""
        return self._mode

    @mode.setter
    def mode(self, value: str) -> None:
        """Set the trace mode with validation."""
        if value not in self.VALID_MODES:
            raise ValueError(
                f"Invalid mode '{value}'. "
                f"Valid options: {self.VALID_MODES}"
            )
        self._mode = value

    def run(self) -> List[RaySegment]:
        """
        Trace every light in the scene.

        Returns:
            list: The segments of all lights, in scene order
        """
        self.processed_ray_count = 0
        self.ray_segments = []
        self.scene.warning = None
        for light in self.scene.lights:
            self.ray_segments.extend(
                self._trace(light.position, light.direction, light.ray_config))
        return self.ray_segments

    def trace_light(self, light: LightObject) -> List[RaySegment]:
        return self.trace(light.position, light.direction, light.ray_config)

    def trace(
        self,
        anchor_position: Point,
        facing_direction: Point,
        ray_config: Sequence[RayOptions]
    ) -> List[RaySegment]:
        """
        Fire one ray per descriptor from a light anchor.

        Each descriptor's start offset is rotated into the anchor's frame
        (x along ``facing_direction``) and its initial angle is added to the
        facing direction. Clears ``scene.warning`` first.

        Returns:
            list: The segments of all rays, descriptor by descriptor
        """
        self.scene.warning = None
        return self._trace(anchor_position, facing_direction, ray_config)

    def _trace(self, anchor_position, facing_direction, ray_config) -> List[RaySegment]:
        facing = geometry.normalize_vec(facing_direction)
        facing_angle = math.atan2(facing.y, facing.x)
        objs = list(self.scene.optical_objs)

        segments: List[RaySegment] = []
        for options in ray_config:
            origin = anchor_position
            if options.start_pos_offset is not None:
                origin = geometry.add(origin, geometry.rotate_vec(options.start_pos_offset, facing_angle))
            direction = geometry.rotate_vec(facing, options.initial_angle)
            segments.extend(self._shoot(origin, direction, options.wavelength,
                                        options.initial_energy, objs))
        return segments

    def shoot_ray(
        self,
        origin: Point,
        direction: Point,
        wavelength: float,
        energy: float = 1.0
    ) -> List[RaySegment]:
        """
        Trace a single ray through the scene in the current mode.
        Clears ``scene.warning`` first.

        Args:
            origin: World-space start of the ray
            direction: Direction of the ray (normalized here)
            wavelength: Wavelength in nanometers
            energy: Initial energy, 0.0 to 1.0

        Returns:
            list: Emitted segments, in the order they were produced
        """
        self.scene.warning = None
        return self._shoot(origin, direction, wavelength, energy, list(self.scene.optical_objs))

    def _shoot(self, origin, direction, wavelength, energy, objs) -> List[RaySegment]:
        direction = geometry.normalize_vec(direction)
        if self._mode == 'critical_angle':
            return self._shoot_critical_angle(origin, direction, wavelength, energy, objs)
        return self._shoot_fresnel(origin, direction, wavelength, energy, objs)

    def initial_media(self, origin: Point, objs: Optional[Sequence[BaseSceneObj]] = None) -> Dict[str, Material]:
        """
        Media enclosing ``origin``, from point containment over the scene's objects.

        Lenses never report containment, so only curves can seed the mapping.
        """
        if objs is None:
            objs = self.scene.optical_objs
        return {obj.id: obj.material for obj in objs if contains_point(obj, origin)}

    @staticmethod
    def _nearest_hit(
        position: Point,
        direction: Point,
        objs: Sequence[BaseSceneObj]
    ) -> Optional[Intersection]:
        best = None
        for obj in objs:
            hit = intersect(obj, position, direction)
            if hit is not None and (best is None or hit.t < best.t):
                best = hit
        return best

    @staticmethod
    def _cross(inside: Dict[str, Material], hit: Intersection) -> Dict[str, Material]:
        after = dict(inside)
        if hit.obj.id in after:
            del after[hit.obj.id]
        else:
            after[hit.obj.id] = hit.obj.material
        return after

    def _shoot_fresnel(self, origin, direction, wavelength, energy, objs) -> List[RaySegment]:
        segments: List[RaySegment] = []
        queue = deque([_WorkItem(origin, direction, wavelength, energy,
                                 self.initial_media(origin, objs), 0)])

        while queue:
            if len(segments) > self.max_segments:
                self.scene.warning = (
                    f"Ray segment limit ({self.max_segments}) reached; "
                    f"{len(queue)} pending rays dropped"
                )
                if self.verbose >= 1:
                    print(f"  WARNING: {self.scene.warning}")
                break

            item = queue.popleft()
            if item.energy < self.min_energy or item.depth > self.max_depth:
                continue
            self.processed_ray_count += 1

            position = Point(item.position.x + RAY_NUDGE * item.direction.x,
                             item.position.y + RAY_NUDGE * item.direction.y)

            if self.verbose >= 1:
                print(f"\n### SIMULATOR processing ray {self.processed_ray_count}")
                print(f"  pos=({position.x:.4f}, {position.y:.4f}) "
                      f"dir=({item.direction.x:.4f}, {item.direction.y:.4f}) "
                      f"energy={item.energy:.5f} depth={item.depth}")

            hit = self._nearest_hit(position, item.direction, objs)
            if hit is None:
                end = Point(position.x + FAR_RAY_LENGTH * item.direction.x,
                            position.y + FAR_RAY_LENGTH * item.direction.y)
                segments.append(RaySegment((position, end), item.wavelength, item.energy))
                continue

            segments.append(RaySegment((position, hit.point), item.wavelength, item.energy))

            after = self._cross(item.inside, hit)
            n1 = index_at(effective_material(item.inside.values()), item.wavelength)
            n2 = index_at(effective_material(after.values()), item.wavelength)
            result = snell(item.direction, hit.normal, n1, n2)

            if self.verbose >= 2:
                crossing = 'exit' if hit.obj.id in item.inside else 'entry'
                print(f"  {crossing} {hit.obj.type} {hit.obj.id} at "
                      f"({hit.point.x:.4f}, {hit.point.y:.4f})")
                print(f"  n1={n1:.6f}, n2={n2:.6f}, cos_i={result.cos_i:.6f}, "
                      f"R={result.reflectance:.6f}, TIR={result.total_internal_reflection}")

            depth = item.depth + 1
            if result.total_internal_reflection:
                queue.append(_WorkItem(hit.point, result.reflected_dir, item.wavelength,
                                       item.energy, item.inside, depth))
                continue

            queue.append(_WorkItem(hit.point, result.reflected_dir, item.wavelength,
                                   item.energy * result.reflectance, item.inside, depth))
            queue.append(_WorkItem(hit.point, result.refracted_dir, item.wavelength,
                                   item.energy * (1 - result.reflectance), after, depth))

        return segments

    def _shoot_critical_angle(self, origin, direction, wavelength, energy, objs) -> List[RaySegment]:
        inside = self.initial_media(origin, objs)
        points = [origin]
        position = origin

        for _ in range(LEGACY_MAX_INTERACTIONS):
            self.processed_ray_count += 1
            position = Point(position.x + RAY_NUDGE * direction.x,
                             position.y + RAY_NUDGE * direction.y)
            hit = self._nearest_hit(position, direction, objs)
            if hit is None:
                points.append(Point(position.x + FAR_RAY_LENGTH * direction.x,
                                    position.y + FAR_RAY_LENGTH * direction.y))
                break

            points.append(hit.point)
            after = self._cross(inside, hit)
            n1 = index_at(effective_material(inside.values()), wavelength)
            n2 = index_at(effective_material(after.values()), wavelength)
            direction, refracted = refract_or_reflect(direction, hit.normal, n1, n2)

            if self.verbose >= 2:
                print(f"  n1={n1:.6f}, n2={n2:.6f}, refracted={refracted}")

            if refracted:
                inside = after
            position = hit.point

        return [RaySegment(tuple(points), wavelength, energy)]
