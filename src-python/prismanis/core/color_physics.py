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

Wavelength to display colour conversion.

The breakpoints follow the usual piecewise-linear approximation of the CIE
colour matching functions, with an intensity roll-off towards both ends of
the visible range.
"""

import math
from typing import Tuple


def _round_half_up(value: float) -> int:
    # Channel values are non-negative, so this is round-half-up
    return int(math.floor(value + 0.5))


def wavelength_to_rgb(wavelength: float) -> Tuple[int, int, int]:
    """
    Convert a wavelength (in nm) to an approximate sRGB colour.

    Wavelengths outside 380-780 nm map to black.

    Args:
        wavelength (float): Wavelength in nanometers

    Returns:
        tuple: (r, g, b) values from 0-255
    """
    r = g = b = 0.0
    if 380 <= wavelength < 440:
        r = -(wavelength - 440) / (440 - 380)
        g = 0.0
        b = 1.0
    elif 440 <= wavelength < 490:
        r = 0.0
        g = (wavelength - 440) / (490 - 440)
        b = 1.0
    elif 490 <= wavelength < 510:
        r = 0.0
        g = 1.0
        b = -(wavelength - 510) / (510 - 490)
    elif 510 <= wavelength < 580:
        r = (wavelength - 510) / (580 - 510)
        g = 1.0
        b = 0.0
    elif 580 <= wavelength < 645:
        r = 1.0
        g = -(wavelength - 645) / (645 - 580)
        b = 0.0
    elif 645 <= wavelength <= 780:
        r = 1.0
        g = 0.0
        b = 0.0

    # Intensity correction at spectrum edges
    factor = 0.0
    if 380 <= wavelength < 420:
        factor = 0.3 + (0.7 * (wavelength - 380)) / (420 - 380)
    elif 420 <= wavelength < 701:
        factor = 1.0
    elif 701 <= wavelength <= 780:
        factor = 0.3 + (0.7 * (780 - wavelength)) / (780 - 700)

    return (
        _round_half_up(r * factor * 255),
        _round_half_up(g * factor * 255),
        _round_half_up(b * factor * 255),
    )


def wavelength_to_css(wavelength: float) -> str:
    """CSS ``rgb()`` string for a wavelength."""
    r, g, b = wavelength_to_rgb(wavelength)
    return f'rgb({r}, {g}, {b})'


def energy_to_opacity(energy: float) -> float:
    """Stroke opacity of a segment: its energy clipped to [0, 1]."""
    return min(1.0, max(0.0, energy))
