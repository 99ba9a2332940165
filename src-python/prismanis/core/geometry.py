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

from shapely.geometry import Point as ShapelyPoint, box

from .constants import PARALLEL_EPSILON


@dataclass(frozen=True)
class Point:
    """
    A point (or vector) in 2D space.

    Points are immutable values; every operation returns a new Point.
    Can be converted to/from Shapely Point objects.
    """
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its minimum corner and its size."""
    x: float
    y: float
    width: float
    height: float

    def to_shapely(self):
        """Convert to a Shapely box polygon."""
        return box(self.x, self.y, self.x + self.width, self.y + self.height)

    def contains_point(self, p: Point) -> bool:
        return (self.x <= p.x <= self.x + self.width and
                self.y <= p.y <= self.y + self.height)


class Geometry:
    """
    Basic vector operations and the ray intersection primitives shared by
    all shape kinds.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        return Point(x, y)

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def sub(p1: Point, p2: Point) -> Point:
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale(p1: Point, factor: float) -> Point:
        return Point(p1.x * factor, p1.y * factor)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """
        Calculate the cross product, where the two points are treated as vectors.

        Returns:
            Cross product (z-component in 2D)
        """
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def length(p1: Point) -> float:
        return math.hypot(p1.x, p1.y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        return math.hypot(p2.x - p1.x, p2.y - p1.y)

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        The zero vector is returned unchanged instead of dividing by zero.
        """
        len_val = math.hypot(p1.x, p1.y)
        if len_val == 0:
            return Point(0.0, 0.0)
        return Point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def rotate_vec(p1: Point, angle: float) -> Point:
        """
        Rotate the given vector counter-clockwise by the given angle in radians.
        """
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Point(
            p1.x * cos_a - p1.y * sin_a,
            p1.x * sin_a + p1.y * cos_a
        )

    @staticmethod
    def left_perpendicular(p1: Point) -> Point:
        return Point(-p1.y, p1.x)

    @staticmethod
    def ray_segment_intersection(
        origin: Point,
        direction: Point,
        p1: Point,
        p2: Point
    ) -> Optional[Tuple[float, float]]:
        """
        Intersect the ray ``origin + t * direction`` with the segment ``p1 -> p2``.

        Solves the 2x2 system in determinant form.

        Args:
            origin: Start of the ray
            direction: Direction of the ray (need not be normalized)
            p1: First endpoint of the segment
            p2: Second endpoint of the segment

        Returns:
            ``(t, u)`` with ``t >= 0`` the ray parameter and ``u`` in ``[0, 1]``
            the segment parameter, or None when they do not meet or are parallel.
        """
        ex = p2.x - p1.x
        ey = p2.y - p1.y
        denom = ey * direction.x - ex * direction.y
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = (ex * (origin.y - p1.y) - ey * (origin.x - p1.x)) / denom
        u = (direction.x * (origin.y - p1.y) - direction.y * (origin.x - p1.x)) / denom

        if t >= 0 and 0 <= u <= 1:
            return t, u
        return None

    @staticmethod
    def ray_circle_intersections(
        origin: Point,
        direction: Point,
        center: Point,
        radius: float
    ) -> List[float]:
        """
        Intersect the ray ``origin + t * direction`` with a full circle.

        Returns:
            The non-negative ray parameters of the intersection points, in
            increasing order (empty when the ray misses the circle).
        """
        a = direction.x * direction.x + direction.y * direction.y
        if a == 0 or radius <= 0:
            return []
        ox = origin.x - center.x
        oy = origin.y - center.y
        b = ox * direction.x + oy * direction.y
        c = ox * ox + oy * oy - radius * radius

        disc = b * b - a * c
        if disc < 0:
            return []

        root = math.sqrt(disc)
        candidates = sorted(((-b - root) / a, (-b + root) / a))
        return [t for t in candidates if t >= 0]

    @staticmethod
    def normalize_angle(angle: float) -> float:
        """Map an angle to ``[0, 2*pi)``."""
        return angle % (2 * math.pi)

    @staticmethod
    def angle_in_range(angle: float, start: float, end: float) -> bool:
        """
        Test whether ``angle`` lies on the counter-clockwise sweep from
        ``start`` to ``end``, comparing modulo 2*pi.
        """
        span = Geometry.normalize_angle(end - start)
        offset = Geometry.normalize_angle(angle - start)
        return offset <= span


# Create a singleton instance for convenience
geometry = Geometry()
