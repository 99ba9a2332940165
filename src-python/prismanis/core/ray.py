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
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .geometry import Point


@dataclass(frozen=True)
class RayOptions:
    """
    Descriptor of one ray emitted by a light source.

    Attributes:
        wavelength (float): Wavelength in nanometers
        initial_energy (float): Starting energy (opacity), 0.0 to 1.0
        initial_angle (float): Angle in radians added to the light's facing
            direction, counter-clockwise
        start_pos_offset (Point or None): Offset of the ray's origin in the
            light's local frame, applied before rotation
    """
    wavelength: float
    initial_energy: float
    initial_angle: float = 0.0
    start_pos_offset: Optional[Point] = None


@dataclass(frozen=True)
class RaySegment:
    """
    One emitted piece of a traced ray, ready to be drawn.

    Attributes:
        points (tuple of Point): The polyline, at least two points
        wavelength (float): Wavelength in nanometers
        energy (float): Energy (opacity) carried by the segment, 0.0 to 1.0
    """
    points: Tuple[Point, ...]
    wavelength: float
    energy: float

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def length(self) -> float:
        total = 0.0
        for p1, p2 in zip(self.points, self.points[1:]):
            total += math.hypot(p2.x - p1.x, p2.y - p1.y)
        return total

    @property
    def direction(self) -> Point:
        """Unit direction of the last leg of the polyline."""
        p1, p2 = self.points[-2], self.points[-1]
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        length = math.hypot(dx, dy)
        if length == 0:
            return Point(0.0, 0.0)
        return Point(dx / length, dy / length)


# Relative spectral weights of the sunlight preset
_SUNLIGHT_SPECTRUM = [
    (380, 0.05),
    (420, 0.12),
    (460, 0.18),
    (500, 0.2),
    (540, 0.196),
    (580, 0.17),
    (620, 0.12),
    (660, 0.07),
    (700, 0.036),
    (740, 0.01),
]


def _sunlight(weight: float = 1.0, offset: Optional[Point] = None) -> List[RayOptions]:
    return [
        RayOptions(wavelength, weight * energy, 0.0, offset)
        for wavelength, energy in _SUNLIGHT_SPECTRUM
    ]


def _fan(count: int, start_deg: float, stop_deg: float, wavelength: float,
         energy: float) -> List[RayOptions]:
    angles = np.radians(np.linspace(start_deg, stop_deg, count))
    return [RayOptions(wavelength, energy, float(angle)) for angle in angles]


def _sheet(count: int, spacing: float, wavelength: float, energy: float) -> List[RayOptions]:
    offsets = (np.arange(count) - (count - 1) / 2) * spacing
    return [
        RayOptions(wavelength, energy, 0.0, Point(0.0, float(dy)))
        for dy in offsets
    ]


SUNLIGHT_RAY_CONFIG = _sunlight()

LASER_RAY_CONFIG = [RayOptions(700, 1.0, 0.0)]

# 41 rays spread over +-1 degree
FLASHLIGHT_RAY_CONFIG = _fan(41, -1.0, 1.0, 600, 0.05)

# One ray per degree all around
LAMP_RAY_CONFIG = _fan(360, 0.0, 359.0, 600, 0.08)

# Parallel rays 3 units apart
FLOODLIGHT_RAY_CONFIG = _sheet(81, 3.0, 600, 0.05)

FLOOD_SUNLIGHT_RAY_CONFIG = [
    option
    for dy in (np.arange(41) - 20) * 1.0
    for option in _sunlight(0.4, Point(0.0, float(dy)))
]

RAY_CONFIGS: Dict[str, List[RayOptions]] = {
    'sunlight': SUNLIGHT_RAY_CONFIG,
    'laser': LASER_RAY_CONFIG,
    'flashlight': FLASHLIGHT_RAY_CONFIG,
    'lamp': LAMP_RAY_CONFIG,
    'floodlight': FLOODLIGHT_RAY_CONFIG,
    'floodsunlight': FLOOD_SUNLIGHT_RAY_CONFIG,
}


def get_ray_config(name: str) -> List[RayOptions]:
    """
    Look up a ray-source preset by name.

    Raises:
        ValueError: If the preset does not exist.
    """
    if name not in RAY_CONFIGS:
        raise ValueError(
            f"Unknown ray config '{name}'. Valid options: {tuple(RAY_CONFIGS)}"
        )
    return list(RAY_CONFIGS[name])
