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
from typing import Dict

from .geometry import Point, Rect


# Local-space sign of each corner of the transform rectangle
CORNER_SIGNS: Dict[str, tuple] = {
    'tl': (-1, -1),
    'tr': (1, -1),
    'br': (1, 1),
    'bl': (-1, 1),
}

OPPOSITE_CORNER = {'tl': 'br', 'tr': 'bl', 'br': 'tl', 'bl': 'tr'}


class Transform:
    """
    A 2D frame mapping an object's local geometry into world space.

    Local points are scaled, then rotated around the origin, then
    translated by ``position``. The frame also describes an oriented
    rectangle of ``effective_size`` centred on ``position``, which is what
    selection and resizing operate on.

    Attributes:
        position (Point): Transform origin (the centre of the object)
        rotation (float): Counter-clockwise rotation in radians
        base_size (Point): Size of the object's local geometry
        scale (Point): Non-uniform scale applied to the local geometry

    Notes:
        A Transform is owned by exactly one scene object. History snapshots
        hold clones, never shared references.
    """

    def __init__(
        self,
        position: Point = Point(0.0, 0.0),
        rotation: float = 0.0,
        base_size: Point = Point(1.0, 1.0),
        scale: Point = Point(1.0, 1.0)
    ) -> None:
        self.position = position
        self.rotation = rotation
        self.base_size = base_size
        self.scale = scale

    def clone(self) -> 'Transform':
        """Return an independent copy of this transform."""
        return Transform(self.position, self.rotation, self.base_size, self.scale)

    @property
    def effective_size(self) -> Point:
        """The base size multiplied component-wise by the scale."""
        return Point(self.base_size.x * self.scale.x, self.base_size.y * self.scale.y)

    def apply(self, point: Point) -> Point:
        """
        Map a local point to world space (scale, then rotate, then translate).
        """
        return self.apply_rigid(Point(point.x * self.scale.x, point.y * self.scale.y))

    def apply_rigid(self, point: Point) -> Point:
        """
        Map a local point to world space ignoring the scale.

        Used for geometry that is already expressed in world units, such as
        lens profiles built from the effective height.
        """
        cos_r = math.cos(self.rotation)
        sin_r = math.sin(self.rotation)
        return Point(
            point.x * cos_r - point.y * sin_r + self.position.x,
            point.x * sin_r + point.y * cos_r + self.position.y
        )

    def apply_direction(self, vec: Point) -> Point:
        """Rotate a direction vector into world space."""
        cos_r = math.cos(self.rotation)
        sin_r = math.sin(self.rotation)
        return Point(vec.x * cos_r - vec.y * sin_r, vec.x * sin_r + vec.y * cos_r)

    def corners(self) -> Dict[str, Point]:
        """
        World-space corners of the oriented ``effective_size`` rectangle.

        Returns:
            Dict with keys 'tl', 'tr', 'br', 'bl'.
        """
        size = self.effective_size
        hw = size.x / 2
        hh = size.y / 2
        return {
            key: self.apply_rigid(Point(sx * hw, sy * hh))
            for key, (sx, sy) in CORNER_SIGNS.items()
        }

    def bounding_rect(self) -> Rect:
        """Minimal axis-aligned rectangle enclosing ``corners()``."""
        pts = list(self.corners().values())
        min_x = min(p.x for p in pts)
        max_x = max(p.x for p in pts)
        min_y = min(p.y for p in pts)
        max_y = max(p.y for p in pts)
        return Rect(min_x, min_y, max_x - min_x, max_y - min_y)

    def translate(self, delta: Point) -> None:
        self.position = Point(self.position.x + delta.x, self.position.y + delta.y)

    def rotate(self, delta_radians: float) -> None:
        self.rotation += delta_radians

    def resize_against_corner(self, corner: str, new_size: Point) -> None:
        """
        Resize the rectangle by dragging ``corner`` while the opposite corner
        stays fixed in world space.

        Args:
            corner: One of 'tl', 'tr', 'br', 'bl' (the corner being dragged)
            new_size: The requested effective size. An axis whose base size is
                zero keeps its current scale.

        Raises:
            ValueError: If ``corner`` is not a known corner name.
        """
        if corner not in OPPOSITE_CORNER:
            raise ValueError(
                f"Invalid corner '{corner}'. Valid options: {tuple(OPPOSITE_CORNER)}"
            )
        anchor_key = OPPOSITE_CORNER[corner]
        anchor_before = self.corners()[anchor_key]

        scale_x = new_size.x / self.base_size.x if self.base_size.x != 0 else self.scale.x
        scale_y = new_size.y / self.base_size.y if self.base_size.y != 0 else self.scale.y
        self.scale = Point(scale_x, scale_y)

        anchor_after = self.corners()[anchor_key]
        self.translate(Point(anchor_before.x - anchor_after.x,
                             anchor_before.y - anchor_after.y))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return (self.position == other.position and
                self.rotation == other.rotation and
                self.base_size == other.base_size and
                self.scale == other.scale)

    def __repr__(self) -> str:
        return (f"Transform(position={self.position}, rotation={self.rotation}, "
                f"base_size={self.base_size}, scale={self.scale})")
