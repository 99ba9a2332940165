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
from .shape_geometry import (
    ObjectGeometry,
    ObjectOverlap,
    object_to_polygon,
    describe_object,
    find_overlapping_objects,
    total_optical_area,
)
from .segment_statistics import (
    SegmentStatistics,
    get_segment_statistics,
    filter_segments_by_wavelength,
    energy_by_wavelength,
)

__all__ = [
    'ObjectGeometry',
    'ObjectOverlap',
    'object_to_polygon',
    'describe_object',
    'find_overlapping_objects',
    'total_optical_area',
    'SegmentStatistics',
    'get_segment_statistics',
    'filter_segments_by_wavelength',
    'energy_by_wavelength',
]
