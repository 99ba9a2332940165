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

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

import numpy as np

from ..core.ray import RaySegment


@dataclass
class SegmentStatistics:
    """
    Summary of a list of ray segments.

    Attributes:
        count: Number of segments
        total_length: Sum of the polyline lengths
        min_energy: Smallest segment energy (0.0 when empty)
        max_energy: Largest segment energy (0.0 when empty)
        mean_energy: Mean segment energy (0.0 when empty)
        counts_by_wavelength: Number of segments per wavelength
    """
    count: int = 0
    total_length: float = 0.0
    min_energy: float = 0.0
    max_energy: float = 0.0
    mean_energy: float = 0.0
    counts_by_wavelength: Dict[float, int] = field(default_factory=dict)


def get_segment_statistics(segments: Sequence[RaySegment]) -> SegmentStatistics:
    if not segments:
        return SegmentStatistics()
    energies = np.array([s.energy for s in segments], dtype=float)
    lengths = np.array([s.length for s in segments], dtype=float)
    wavelengths, counts = np.unique([s.wavelength for s in segments], return_counts=True)
    return SegmentStatistics(
        count=len(segments),
        total_length=float(lengths.sum()),
        min_energy=float(energies.min()),
        max_energy=float(energies.max()),
        mean_energy=float(energies.mean()),
        counts_by_wavelength={float(w): int(c) for w, c in zip(wavelengths, counts)},
    )


def filter_segments_by_wavelength(
    segments: Iterable[RaySegment],
    wavelength: float,
    tolerance: float = 0.5
) -> List[RaySegment]:
    """Segments whose wavelength is within ``tolerance`` nm of ``wavelength``."""
    return [s for s in segments if abs(s.wavelength - wavelength) <= tolerance]


def energy_by_wavelength(segments: Iterable[RaySegment]) -> Dict[float, float]:
    """
    Total energy carried per wavelength.

    Counts every emitted segment, so a ray that is reflected back and forth
    contributes once per segment.
    """
    totals: Dict[float, float] = {}
    for s in segments:
        totals[s.wavelength] = totals.get(s.wavelength, 0.0) + s.energy
    return totals
