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
from typing import Iterable, List


@dataclass(frozen=True)
class Material:
    """
    An immutable dielectric described by Cauchy's dispersion equation.

    The refractive index at wavelength λ (in nanometers) is
    ``n(λ) = A + B / λ²``, so ``B`` is expressed in nm².

    Attributes:
        id: Stable identifier of the material
        display_name: Human-readable name
        A: Cauchy coefficient A (the index in the long-wavelength limit)
        B: Cauchy coefficient B, in nm²
        overlaps: True if overlapping instances add up to the ambient index,
            False if only the most recently entered instance counts
        stroke_color: CSS colour used for outlines
        fill_color: CSS colour used for interiors
    """
    id: str
    display_name: str
    A: float
    B: float
    overlaps: bool = True
    stroke_color: str = 'rgba(255,255,255,0.8)'
    fill_color: str = 'rgba(255,255,255,0.2)'

    def index_at(self, wavelength: float) -> float:
        """Refractive index at ``wavelength`` nanometers."""
        return index_at(self, wavelength)


GLASS_MATERIAL = Material(
    id='glass',
    display_name='Glass',
    A=1.5046,
    B=0.0042,
    overlaps=True,
    stroke_color='rgba(197,216,235,0.8)',
    fill_color='rgba(197,216,235,0.2)',
)

# Much stronger dispersion than real glass so colours separate visibly
EXAGGERATED_GLASS_MATERIAL = Material(
    id='exaggerated-glass',
    display_name='Exaggerated Glass',
    A=1.5,
    B=4000,
    overlaps=True,
    stroke_color='rgba(207,226,255,0.9)',
    fill_color='rgba(197,216,255,0.2)',
)

# Zero index: entering it is always a total reflection
MIRROR_MATERIAL = Material(
    id='mirror',
    display_name='Mirror',
    A=0.0,
    B=0.0,
    overlaps=True,
    stroke_color='rgba(255,255,255,1)',
    fill_color='rgba(200,200,200,1)',
)

WATER_MATERIAL = Material(
    id='water',
    display_name='Water',
    A=1.324,
    B=0.0031,
    overlaps=False,
    stroke_color='rgba(64,164,223,0.8)',
    fill_color='rgba(64,164,223,0.2)',
)

AIR_MATERIAL = Material(
    id='air',
    display_name='Air',
    A=1.000293,
    B=0.0,
    overlaps=False,
    stroke_color='rgba(255,255,255,0.2)',
    fill_color='rgba(255,255,255,0.1)',
)

VACUUM_MATERIAL = Material(
    id='vacuum',
    display_name='Vacuum',
    A=1.0,
    B=0.0,
    overlaps=False,
    stroke_color='rgba(255,255,255,0.2)',
    fill_color='rgba(0,0,0,0.5)',
)

MATERIALS: List[Material] = [
    GLASS_MATERIAL,
    EXAGGERATED_GLASS_MATERIAL,
    MIRROR_MATERIAL,
    WATER_MATERIAL,
    AIR_MATERIAL,
    VACUUM_MATERIAL,
]

DEFAULT_MATERIAL = EXAGGERATED_GLASS_MATERIAL


def get_material(material_id: str) -> Material:
    """
    Look up a preset material by id.

    Raises:
        ValueError: If no preset has this id.
    """
    for material in MATERIALS:
        if material.id == material_id:
            return material
    raise ValueError(
        f"Unknown material '{material_id}'. "
        f"Valid options: {tuple(m.id for m in MATERIALS)}"
    )


def index_at(material: Material, wavelength: float) -> float:
    """
    Cauchy's equation ``n(λ) = A + B / λ²``.

    No bounds checking: the wavelength is expected to be positive.
    """
    return material.A + material.B / (wavelength * wavelength)


def effective_material(materials: Iterable[Material]) -> Material:
    """
    Combine the materials a point is inside of into one effective medium.

    Args:
        materials: The enclosing materials, ordered from first entered to
            most recently entered.

    Returns:
        AIR when the sequence is empty. Otherwise a material whose A and B
        are the sums over all ``overlaps=True`` materials plus the most
        recently entered ``overlaps=False`` material. When that sum is zero
        (for example a lone mirror), the most recently entered material is
        returned unchanged.
    """
    materials = list(materials)
    if not materials:
        return AIR_MATERIAL

    a_sum = 0.0
    b_sum = 0.0
    exclusive = None
    for material in materials:
        if material.overlaps:
            a_sum += material.A
            b_sum += material.B
        else:
            exclusive = material
    if exclusive is not None:
        a_sum += exclusive.A
        b_sum += exclusive.B

    if a_sum == 0 and b_sum == 0:
        return materials[-1]
    if len(materials) == 1:
        return materials[0]
    return Material(
        id='+'.join(m.id for m in materials),
        display_name='Mixture',
        A=a_sum,
        B=b_sum,
        overlaps=True,
    )
