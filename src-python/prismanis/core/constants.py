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

Constants used throughout the ray transport engine.

Kept in a module of their own so that the scene objects, the optics helpers
and the simulator can share them without circular imports.
"""

# Distance a ray is pushed along its direction before searching for the next
# surface, so it does not re-hit the surface it just left
RAY_NUDGE = 1e-2

# Length of the terminal segment emitted when a ray leaves the scene
FAR_RAY_LENGTH = 5000.0

# Rays dimmer than this are dropped from the work queue
MIN_RAY_ENERGY = 2e-4

# Maximum number of boundary interactions along one branch of the ray tree
MAX_RAY_DEPTH = 50

# Hard cap on the number of segments emitted for one ray descriptor
MAX_RAY_SEGMENTS = 5000

# Maximum number of interactions of a single legacy (non-splitting) ray
LEGACY_MAX_INTERACTIONS = 50

# Determinants smaller than this mean the ray and the edge are parallel
PARALLEL_EPSILON = 1e-12

# Size of the selectable square around a light anchor
LIGHT_ANCHOR_SIZE = 10.0

# Wavelengths (in nanometers)
UV_WAVELENGTH = 380          # Lower bound of the visible range
INFRARED_WAVELENGTH = 780    # Upper bound of the visible range
SODIUM_D_WAVELENGTH = 589
BLUE_WAVELENGTH = 400
RED_WAVELENGTH = 700
