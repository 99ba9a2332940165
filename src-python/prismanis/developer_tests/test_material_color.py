"""
===============================================================================
MATERIAL, DISPERSION AND COLOUR TESTS
===============================================================================

Tests for core.material, core.color_physics and core.ray presets:

1. DISPERSION
   - Cauchy formula n = A + B / λ²
   - Monotonic decrease with wavelength, limit A
2. EFFECTIVE MEDIUM POLICY
   - Empty set is air, overlapping materials sum, non-overlapping ones
     only count once, zero sums fall back to the last material
3. WAVELENGTH TO RGB
4. RAY-SOURCE PRESETS

Run with:
    python developer_tests/test_material_color.py

Or with pytest:
    pytest developer_tests/test_material_color.py -v
===============================================================================
"""

import sys
from pathlib import Path

import numpy as np

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from prismanis.core.material import (
    Material, AIR_MATERIAL, GLASS_MATERIAL, EXAGGERATED_GLASS_MATERIAL,
    MIRROR_MATERIAL, WATER_MATERIAL, DEFAULT_MATERIAL, MATERIALS,
    get_material, index_at, effective_material,
)
from prismanis.core.color_physics import wavelength_to_rgb, wavelength_to_css, energy_to_opacity
from prismanis.core.ray import RAY_CONFIGS, get_ray_config


TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# DISPERSION
# =============================================================================

def test_cauchy_formula():
    print("\nTEST: Cauchy formula")
    n = index_at(EXAGGERATED_GLASS_MATERIAL, 589)
    assert_close(n, 1.5 + 4000 / 589 ** 2, msg="n(589)")
    assert_close(EXAGGERATED_GLASS_MATERIAL.index_at(400), 1.525, msg="n(400)")
    assert index_at(MIRROR_MATERIAL, 500) == 0.0
    print(f"  n(589) = {n:.6f} - PASS")


def test_dispersion_is_monotonic():
    wavelengths = np.linspace(380, 780, 81)
    for material in (GLASS_MATERIAL, EXAGGERATED_GLASS_MATERIAL, WATER_MATERIAL):
        indices = np.array([index_at(material, w) for w in wavelengths])
        assert np.all(np.diff(indices) < 0), f"{material.id} not decreasing"
        assert_close(index_at(material, 1e9), material.A, 1e-9, f"{material.id} limit")


# =============================================================================
# EFFECTIVE MEDIUM
# =============================================================================

def test_effective_material_empty_is_air():
    assert effective_material([]) is AIR_MATERIAL


def test_effective_material_single():
    assert effective_material([GLASS_MATERIAL]) is GLASS_MATERIAL
    assert effective_material([WATER_MATERIAL]) is WATER_MATERIAL


def test_effective_material_overlapping_sum():
    mixed = effective_material([GLASS_MATERIAL, EXAGGERATED_GLASS_MATERIAL])
    assert_close(mixed.A, GLASS_MATERIAL.A + EXAGGERATED_GLASS_MATERIAL.A)
    assert_close(mixed.B, GLASS_MATERIAL.B + EXAGGERATED_GLASS_MATERIAL.B)


def test_effective_material_non_overlapping():
    """Only the most recently entered non-overlapping material counts."""
    mixed = effective_material([WATER_MATERIAL, GLASS_MATERIAL])
    assert_close(mixed.A, WATER_MATERIAL.A + GLASS_MATERIAL.A)

    other_water = Material('water2', 'Water 2', 1.4, 0.0, overlaps=False)
    mixed = effective_material([WATER_MATERIAL, other_water])
    assert_close(mixed.A, 1.4)
    mixed = effective_material([other_water, WATER_MATERIAL])
    assert_close(mixed.A, WATER_MATERIAL.A)


def test_effective_material_zero_falls_back():
    assert effective_material([MIRROR_MATERIAL]) is MIRROR_MATERIAL
    assert effective_material([MIRROR_MATERIAL, MIRROR_MATERIAL]) is MIRROR_MATERIAL


def test_material_presets():
    assert DEFAULT_MATERIAL is EXAGGERATED_GLASS_MATERIAL
    assert get_material('glass') is GLASS_MATERIAL
    assert get_material('air') is AIR_MATERIAL
    assert len({m.id for m in MATERIALS}) == len(MATERIALS)
    try:
        get_material('unobtainium')
    except ValueError:
        return
    raise AssertionError("Expected ValueError for an unknown material")


# =============================================================================
# COLOUR
# =============================================================================

def test_wavelength_to_rgb_breakpoints():
    print("\nTEST: wavelength_to_rgb")
    assert wavelength_to_rgb(440) == (0, 0, 255)
    assert wavelength_to_rgb(460) == (0, 102, 255)
    assert wavelength_to_rgb(490) == (0, 255, 255)
    assert wavelength_to_rgb(510) == (0, 255, 0)
    assert wavelength_to_rgb(580) == (255, 255, 0)
    assert wavelength_to_rgb(645) == (255, 0, 0)
    assert wavelength_to_rgb(700) == (255, 0, 0)
    print("  PASS")


def test_wavelength_to_rgb_roll_off():
    r_edge, _, _ = wavelength_to_rgb(760)
    r_mid, _, _ = wavelength_to_rgb(690)
    assert 0 < r_edge < r_mid == 255
    _, _, b_edge = wavelength_to_rgb(390)
    assert 0 < b_edge < 255


def test_wavelength_to_rgb_out_of_range():
    assert wavelength_to_rgb(300) == (0, 0, 0)
    assert wavelength_to_rgb(800) == (0, 0, 0)


def test_wavelength_to_rgb_channel_range():
    for w in range(380, 781):
        rgb = wavelength_to_rgb(w)
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in rgb), f"{w}: {rgb}"


def test_css_and_opacity():
    assert wavelength_to_css(700) == 'rgb(255, 0, 0)'
    assert energy_to_opacity(1.5) == 1.0
    assert energy_to_opacity(-0.1) == 0.0
    assert energy_to_opacity(0.25) == 0.25


# =============================================================================
# RAY-SOURCE PRESETS
# =============================================================================

def test_ray_presets():
    assert len(get_ray_config('sunlight')) == 10
    assert len(get_ray_config('flashlight')) == 41
    assert len(get_ray_config('lamp')) == 360
    assert len(get_ray_config('floodlight')) == 81
    assert len(get_ray_config('floodsunlight')) == 41 * 10

    laser = get_ray_config('laser')
    assert len(laser) == 1
    assert laser[0].wavelength == 700
    assert laser[0].initial_energy == 1.0

    flashlight = get_ray_config('flashlight')
    assert_close(flashlight[0].initial_angle, -np.radians(1.0))
    assert_close(flashlight[-1].initial_angle, np.radians(1.0))
    assert_close(flashlight[20].initial_angle, 0.0)

    offsets = [opt.start_pos_offset.y for opt in get_ray_config('floodlight')]
    assert_close(min(offsets), -120.0)
    assert_close(max(offsets), 120.0)

    for options in RAY_CONFIGS.values():
        assert all(0 <= opt.initial_energy <= 1 for opt in options)


def test_unknown_ray_preset():
    try:
        get_ray_config('torch')
    except ValueError:
        return
    raise AssertionError("Expected ValueError for an unknown preset")


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("MATERIAL, DISPERSION AND COLOUR TESTS")
    print("=" * 78)

    tests = [
        ("Cauchy formula", test_cauchy_formula),
        ("Monotonic dispersion", test_dispersion_is_monotonic),
        ("Effective medium: empty", test_effective_material_empty_is_air),
        ("Effective medium: single", test_effective_material_single),
        ("Effective medium: overlapping", test_effective_material_overlapping_sum),
        ("Effective medium: non-overlapping", test_effective_material_non_overlapping),
        ("Effective medium: zero fallback", test_effective_material_zero_falls_back),
        ("Material presets", test_material_presets),
        ("wavelength_to_rgb breakpoints", test_wavelength_to_rgb_breakpoints),
        ("wavelength_to_rgb roll-off", test_wavelength_to_rgb_roll_off),
        ("wavelength_to_rgb out of range", test_wavelength_to_rgb_out_of_range),
        ("wavelength_to_rgb channel range", test_wavelength_to_rgb_channel_range),
        ("CSS and opacity", test_css_and_opacity),
        ("Ray presets", test_ray_presets),
        ("Unknown ray preset", test_unknown_ray_preset),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
