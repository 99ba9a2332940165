"""
===============================================================================
LENS OBJECT TESTS
===============================================================================

Tests for core.scene_objs.lens:

1. PROFILE
   - Arc width and half angle, flat and degenerate radii
   - Total width and transform size
2. INTERSECTION
   - Biconvex, biconcave and flat-sided lenses on axis
   - Rotated lens
   - Rays that miss
3. OUTLINE AND CONTAINMENT

Run with:
    python developer_tests/test_lens.py

Or with pytest:
    pytest developer_tests/test_lens.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from prismanis.core.geometry import Point
from prismanis.core.scene_objs import (
    Lens, create_lens_object, intersect_lens, lens_contains_point, lens_outline,
    lens_primitives, arc_width, arc_half_angle, total_width,
)
from prismanis.core.scene_objs.lens import ArcPrimitive, LinePrimitive


TOLERANCE = 1e-9

# Arc width of a radius-100 arc over a height of 60
ARC_100_60 = 100.0 - math.sqrt(100.0 ** 2 - 30.0 ** 2)


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# PROFILE
# =============================================================================

def test_arc_width():
    print("\nTEST: arc width")
    assert_close(arc_width(100.0, 60.0), ARC_100_60)
    assert_close(arc_width(-100.0, 60.0), ARC_100_60)
    assert arc_width(math.inf, 60.0) == 0.0
    assert arc_width(0.0, 60.0) == 0.0
    # Radius too small to span the height
    assert arc_width(20.0, 60.0) == 0.0
    print(f"  arc_width(100, 60) = {arc_width(100.0, 60.0):.6f} - PASS")


def test_arc_half_angle():
    assert_close(arc_half_angle(100.0, 60.0), math.asin(0.3))
    assert_close(arc_half_angle(-100.0, 60.0), -math.asin(0.3))
    assert arc_half_angle(math.inf, 60.0) == 0.0


def test_total_width():
    lens = Lens(100.0, 100.0, 20.0)
    assert_close(total_width(lens, 60.0), 2 * ARC_100_60 + 20.0)
    assert_close(total_width(Lens(math.inf, -100.0, 5.0), 60.0), ARC_100_60 + 5.0)


def test_create_lens_object():
    lens = Lens(100.0, 100.0, 20.0)
    obj = create_lens_object(lens, Point(3.0, 4.0), 60.0, rotation=0.5)
    assert obj.type == 'lens'
    assert obj.transform.position == Point(3.0, 4.0)
    assert obj.transform.rotation == 0.5
    assert_close(obj.transform.base_size.x, 2 * ARC_100_60 + 20.0)
    assert obj.height == 60.0


def test_primitives_kinds():
    prims = lens_primitives(Lens(100.0, -100.0, 20.0), 60.0)
    assert len(prims) == 4
    assert isinstance(prims[0], ArcPrimitive) and not prims[0].concave
    assert isinstance(prims[1], ArcPrimitive) and prims[1].concave
    assert isinstance(prims[2], LinePrimitive)
    assert isinstance(prims[3], LinePrimitive)

    flat = lens_primitives(Lens(math.inf, math.inf, 20.0), 60.0)
    assert all(isinstance(p, LinePrimitive) for p in flat)


def test_concave_edges_extend_to_full_width():
    lens = Lens(-100.0, -100.0, 20.0)
    width = total_width(lens, 60.0)
    top = lens_primitives(lens, 60.0)[2]
    assert_close(top.p1.x, -width / 2)
    assert_close(top.p2.x, width / 2)
    assert_close(top.p1.y, -30.0)


# =============================================================================
# INTERSECTION
# =============================================================================

def test_biconvex_on_axis():
    print("\nTEST: biconvex lens on axis")
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(0.0, 0.0), 60.0)
    half_width = ARC_100_60 + 10.0

    entry = intersect_lens(obj, Point(-500.0, 0.0), Point(1.0, 0.0))
    assert entry is not None
    assert_close(entry.point.x, -half_width, 1e-9, "entry x")
    assert_close(entry.point.y, 0.0, 1e-9, "entry y")
    assert_close(entry.normal.x, -1.0, 1e-9, "entry normal")

    exit_hit = intersect_lens(obj, Point(-half_width + 0.01, 0.0), Point(1.0, 0.0))
    assert exit_hit is not None
    assert_close(exit_hit.point.x, half_width, 1e-9, "exit x")
    assert_close(exit_hit.normal.x, 1.0, 1e-9, "exit normal")
    print(f"  entry x = {entry.point.x:.4f}, exit x = {exit_hit.point.x:.4f} - PASS")


def test_biconvex_off_axis_normal_is_radial():
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(0.0, 0.0), 60.0)
    hit = intersect_lens(obj, Point(-500.0, 10.0), Point(1.0, 0.0))
    assert hit is not None
    center_x = -(ARC_100_60 + 10.0) + 100.0
    assert_close(hit.point.x, center_x - math.sqrt(100.0 ** 2 - 10.0 ** 2), 1e-9)
    assert_close(hit.normal.x, (hit.point.x - center_x) / 100.0, 1e-9)
    assert_close(hit.normal.y, 0.1, 1e-9)


def test_biconcave_on_axis():
    obj = create_lens_object(Lens(-100.0, -100.0, 20.0), Point(0.0, 0.0), 60.0)
    entry = intersect_lens(obj, Point(-500.0, 0.0), Point(1.0, 0.0))
    assert entry is not None
    # The vertex of a concave side sits on the edge of the middle thickness
    assert_close(entry.point.x, -10.0, 1e-9)
    assert_close(entry.normal.x, -1.0, 1e-9, "concave normal points out of the lens")


def test_biconcave_edge_hits_top_line():
    obj = create_lens_object(Lens(-100.0, -100.0, 20.0), Point(0.0, 0.0), 60.0)
    hit = intersect_lens(obj, Point(0.0, -500.0), Point(0.0, 1.0))
    assert hit is not None
    assert_close(hit.point.y, -30.0)
    assert_close(hit.normal.y, -1.0)


def test_flat_lens_is_a_slab():
    obj = create_lens_object(Lens(math.inf, math.inf, 20.0), Point(0.0, 0.0), 60.0)
    assert_close(obj.transform.base_size.x, 20.0)
    hit = intersect_lens(obj, Point(-100.0, 5.0), Point(1.0, 0.0))
    assert hit is not None
    assert_close(hit.point.x, -10.0)
    assert_close(hit.normal.x, -1.0)


def test_degenerate_radii_are_flat():
    # Zero radius, or a radius smaller than half the height, gives a straight side
    for lens in (Lens(0.0, 10.0, 20.0), Lens(-10.0, 0.0, 20.0)):
        assert_close(total_width(lens, 60.0), 20.0)
        left, right = lens_primitives(lens, 60.0)[:2]
        assert isinstance(left, LinePrimitive)
        assert isinstance(right, LinePrimitive)

        obj = create_lens_object(lens, Point(0.0, 0.0), 60.0)
        hit = intersect_lens(obj, Point(-100.0, 0.0), Point(1.0, 0.0))
        assert hit is not None
        assert_close(hit.point.x, -10.0)
        assert_close(hit.point.y, 0.0)
        assert_close(hit.normal.x, -1.0)
        assert_close(hit.normal.y, 0.0)


def test_rotated_lens():
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(0.0, 0.0), 60.0,
                             rotation=math.pi / 2)
    hit = intersect_lens(obj, Point(0.0, -500.0), Point(0.0, 1.0))
    assert hit is not None
    assert_close(hit.point.y, -(ARC_100_60 + 10.0), 1e-9)
    assert_close(hit.point.x, 0.0, 1e-9)
    assert_close(hit.normal.y, -1.0, 1e-9)


def test_ray_misses_lens():
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(0.0, 0.0), 60.0)
    assert intersect_lens(obj, Point(-500.0, 100.0), Point(1.0, 0.0)) is None
    assert intersect_lens(obj, Point(500.0, 0.0), Point(1.0, 0.0)) is None


# =============================================================================
# OUTLINE AND CONTAINMENT
# =============================================================================

def test_outline():
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(50.0, 0.0), 60.0)
    outline = lens_outline(obj, samples=17)
    assert len(outline) == 34
    xs = [p.x for p in outline]
    ys = [p.y for p in outline]
    assert_close(max(xs), 50.0 + ARC_100_60 + 10.0, 1e-6)
    assert_close(min(xs), 50.0 - ARC_100_60 - 10.0, 1e-6)
    assert_close(min(ys), -30.0, 1e-9)
    assert_close(max(ys), 30.0, 1e-9)


def test_fit_frame_after_resize():
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(0.0, 0.0), 60.0)
    obj.transform.resize_against_corner('br', Point(50.0, 30.0))
    obj.fit_frame()
    assert obj.transform.scale.x == 1.0
    assert_close(obj.height, 30.0)
    assert_close(obj.transform.effective_size.x, total_width(obj.lens, 30.0))


def test_lens_never_contains_points():
    obj = create_lens_object(Lens(100.0, 100.0, 20.0), Point(0.0, 0.0), 60.0)
    assert not lens_contains_point(obj, Point(0.0, 0.0))


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("LENS OBJECT TESTS")
    print("=" * 78)

    tests = [
        ("Arc width", test_arc_width),
        ("Arc half angle", test_arc_half_angle),
        ("Total width", test_total_width),
        ("create_lens_object()", test_create_lens_object),
        ("Primitive kinds", test_primitives_kinds),
        ("Concave edge extent", test_concave_edges_extend_to_full_width),
        ("Biconvex on axis", test_biconvex_on_axis),
        ("Biconvex off axis", test_biconvex_off_axis_normal_is_radial),
        ("Biconcave on axis", test_biconcave_on_axis),
        ("Biconcave top edge", test_biconcave_edge_hits_top_line),
        ("Flat slab", test_flat_lens_is_a_slab),
        ("Degenerate radii", test_degenerate_radii_are_flat),
        ("Rotated lens", test_rotated_lens),
        ("Misses", test_ray_misses_lens),
        ("Outline", test_outline),
        ("fit_frame()", test_fit_frame_after_resize),
        ("Containment", test_lens_never_contains_points),
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
