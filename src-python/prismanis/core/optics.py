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

Refraction and reflection at a single dielectric boundary.

Snell's law in vector form and the unpolarized Fresnel reflectance, shared
by both trace modes of the Simulator.

References:
    http://en.wikipedia.org/wiki/Snell%27s_law#Vector_form
    http://en.wikipedia.org/wiki/Fresnel_equations
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .geometry import Point, geometry


@dataclass(frozen=True)
class SnellResult:
    """
    Outcome of a ray meeting a boundary.

    Attributes:
        reflected_dir (Point): Unit direction of the reflected ray
        refracted_dir (Point or None): Unit direction of the refracted ray,
            None on total internal reflection
        reflectance (float): Fraction of the energy reflected, in [0, 1]
            (1 on total internal reflection)
        cos_i (float): Cosine of the incidence angle
        cos_t (float): Cosine of the refraction angle (0 on total internal reflection)
    """
    reflected_dir: Point
    refracted_dir: Optional[Point]
    reflectance: float
    cos_i: float
    cos_t: float

    @property
    def total_internal_reflection(self) -> bool:
        return self.refracted_dir is None


def orient_normal(normal: Point, direction: Point) -> Point:
    """
    Normalize ``normal`` and flip it so it faces against ``direction``.
    """
    normal = geometry.normalize_vec(normal)
    if geometry.dot(normal, direction) > 0:
        normal = Point(-normal.x, -normal.y)
    return normal


def reflect(direction: Point, normal: Point, cos_i: float) -> Point:
    """Mirror ``direction`` about a normal that faces the incoming ray."""
    return geometry.normalize_vec(Point(
        direction.x + 2 * cos_i * normal.x,
        direction.y + 2 * cos_i * normal.y
    ))


def fresnel_reflectance(n1: float, n2: float, cos_i: float, cos_t: float) -> float:
    """
    Unpolarized Fresnel reflectance ``R = (rS^2 + rP^2) / 2``, clamped to [0, 1].

    Args:
        n1: Refractive index of the incident medium
        n2: Refractive index of the transmitting medium
        cos_i: Cosine of the incidence angle
        cos_t: Cosine of the refraction angle

    Returns:
        The reflected fraction of the incident energy.
    """
    denom_s = n1 * cos_i + n2 * cos_t
    denom_p = n1 * cos_t + n2 * cos_i
    if denom_s == 0 or denom_p == 0:
        return 1.0
    r_s = (n1 * cos_i - n2 * cos_t) / denom_s
    r_p = (n1 * cos_t - n2 * cos_i) / denom_p
    reflectance = (r_s * r_s + r_p * r_p) / 2
    return max(0.0, min(1.0, reflectance))


def critical_angle(n1: float, n2: float) -> Optional[float]:
    """
    Critical angle in radians for light going from ``n1`` into ``n2``.

    Returns:
        None when ``n1 <= n2`` (total internal reflection is impossible).
    """
    if n1 <= n2 or n1 <= 0:
        return None
    return math.asin(n2 / n1)


def snell(direction: Point, normal: Point, n1: float, n2: float) -> SnellResult:
    """
    Split a ray at a boundary into its reflected and refracted parts.

    Args:
        direction: Unit direction of the incident ray
        normal: Surface normal at the hit point (either orientation)
        n1: Refractive index before the boundary
        n2: Refractive index after the boundary

    Returns:
        SnellResult. A non-positive ``n2`` (a mirror) and any precision
        overshoot of ``sin(theta_t)`` past 1 are both reported as total
        internal reflection.
    """
    normal = orient_normal(normal, direction)
    cos_i = max(-1.0, min(1.0, -geometry.dot(normal, direction)))
    reflected_dir = reflect(direction, normal, cos_i)

    if n2 <= 0:
        return SnellResult(reflected_dir, None, 1.0, cos_i, 0.0)

    sin2_i = max(0.0, 1 - cos_i * cos_i)
    ratio = n1 / n2
    sin2_t = ratio * ratio * sin2_i

    if sin2_t > 1 or ratio * math.sqrt(sin2_i) > 1:
        return SnellResult(reflected_dir, None, 1.0, cos_i, 0.0)

    cos_t = math.sqrt(max(0.0, 1 - sin2_t))
    refracted_dir = geometry.normalize_vec(Point(
        ratio * direction.x + (ratio * cos_i - cos_t) * normal.x,
        ratio * direction.y + (ratio * cos_i - cos_t) * normal.y
    ))
    reflectance = fresnel_reflectance(n1, n2, cos_i, cos_t)
    return SnellResult(reflected_dir, refracted_dir, reflectance, cos_i, cos_t)


def refract_or_reflect(
    direction: Point,
    normal: Point,
    n1: float,
    n2: float
) -> Tuple[Point, bool]:
    """
    Non-splitting boundary rule: refract below the critical angle, reflect above.

    Returns:
        ``(new_direction, refracted)`` where ``refracted`` tells whether the
        ray crossed the boundary.
    """
    normal = orient_normal(normal, direction)
    cos_i = max(-1.0, min(1.0, -geometry.dot(normal, direction)))
    sin_i = math.sqrt(max(0.0, 1 - cos_i * cos_i))
    incident_angle = math.asin(sin_i)

    if n2 <= 0 or n1 <= 0:
        return reflect(direction, normal, cos_i), False

    limit = math.asin(min(1.0, n2 / n1))
    if incident_angle > limit:
        return reflect(direction, normal, cos_i), False

    sin_t = (n1 / n2) * sin_i
    if sin_t > 1:
        return reflect(direction, normal, cos_i), False

    cos_t = math.sqrt(1 - sin_t * sin_t)
    ratio = n1 / n2
    new_dir = geometry.normalize_vec(Point(
        ratio * direction.x + (ratio * cos_i - cos_t) * normal.x,
        ratio * direction.y + (ratio * cos_i - cos_t) * normal.y
    ))
    return new_dir, True
