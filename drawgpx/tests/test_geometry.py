"""
Test geodesy primitives, shape scaling and arc-length resampling.
"""

import math

from ..models.geo import GeoPoint
from ..processing.geometry import (
    shape_perimeter_km,
    scale_shape,
    resample_shape,
    target_vertex_count,
)
from ..utils.geodesy import haversine_km, interpolate, line_length_km, point_along
from .stubs import PARIS_TRIANGLE


# Square around the equator with extra vertices on its southern edge: the
# vertex mean sits south of the area centroid (0.01, 0.01).
LOPSIDED_SQUARE = [
    GeoPoint(lat=0.0, lon=0.0),
    GeoPoint(lat=0.02, lon=0.0),
    GeoPoint(lat=0.02, lon=0.02),
    GeoPoint(lat=0.0, lon=0.02),
    GeoPoint(lat=0.0, lon=0.015),
    GeoPoint(lat=0.0, lon=0.01),
    GeoPoint(lat=0.0, lon=0.005),
]


def assert_close_points(a: GeoPoint, b: GeoPoint, tol: float = 1e-7):
    assert abs(a.lat - b.lat) < tol, f"{a} != {b}"
    assert abs(a.lon - b.lon) < tol, f"{a} != {b}"


def test_haversine():
    """Test great-circle distance."""
    print("\n=== Testing Haversine Distance ===")

    # One degree of latitude is ~111.2 km
    d = haversine_km(GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=1.0, lon=0.0))
    assert 111.0 < d < 111.4

    p = GeoPoint(lat=48.85, lon=2.35)
    assert haversine_km(p, p) == 0.0

    a, b = PARIS_TRIANGLE[0], PARIS_TRIANGLE[1]
    assert math.isclose(haversine_km(a, b), haversine_km(b, a))

    print("✓ Haversine distance works")


def test_interpolate_and_point_along():
    """Test interpolation along segments and polylines."""
    print("\n=== Testing Interpolation ===")

    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=1.0)

    mid = interpolate(a, b, 0.5)
    assert_close_points(mid, GeoPoint(lat=0.0, lon=0.5))
    assert interpolate(a, b, 0.0) == a
    assert interpolate(a, b, 1.0) == b

    line = [a, b, GeoPoint(lat=1.0, lon=1.0)]
    total = line_length_km(line)
    assert point_along(line, 0.0) == a
    assert point_along(line, total + 10.0) == line[-1]
    assert_close_points(point_along(line, haversine_km(a, b)), b, tol=1e-6)

    print("✓ Interpolation works")


def test_perimeter():
    """Test closed-shape perimeter."""
    print("\n=== Testing Perimeter ===")

    expected = (
        haversine_km(PARIS_TRIANGLE[0], PARIS_TRIANGLE[1])
        + haversine_km(PARIS_TRIANGLE[1], PARIS_TRIANGLE[2])
        + haversine_km(PARIS_TRIANGLE[2], PARIS_TRIANGLE[0])
    )
    assert math.isclose(shape_perimeter_km(PARIS_TRIANGLE), expected)

    assert shape_perimeter_km([]) == 0.0
    assert shape_perimeter_km([PARIS_TRIANGLE[0]]) == 0.0

    print(f"✓ Perimeter works ({expected:.3f} km)")


def test_scale_to_current_perimeter_is_identity():
    """Scaling to the current perimeter leaves the shape in place."""
    print("\n=== Testing Scale Idempotence ===")

    current = shape_perimeter_km(PARIS_TRIANGLE)
    scaled = scale_shape(PARIS_TRIANGLE, current)

    assert len(scaled) == len(PARIS_TRIANGLE)
    assert math.isclose(shape_perimeter_km(scaled), current, rel_tol=1e-6)
    for original, result in zip(PARIS_TRIANGLE, scaled):
        assert_close_points(original, result)

    print("✓ Scaling to current perimeter is identity")


def test_scale_hits_target_perimeter():
    """Scaled perimeter matches the requested length."""
    print("\n=== Testing Scale Accuracy ===")

    for shape in (PARIS_TRIANGLE, LOPSIDED_SQUARE):
        for target in (0.5, 2.0, 5.0, 21.1, 42.2, 100.0):
            scaled = scale_shape(shape, target)
            perimeter = shape_perimeter_km(scaled)
            assert abs(perimeter - target) / target < 0.01, (target, perimeter)

    print("✓ Scaled perimeter within 1% of target")


def test_scale_paris_triangle_scenario():
    """Triangle in Paris scaled to 5 km."""
    print("\n=== Testing Paris Triangle Scenario ===")

    scaled = scale_shape(PARIS_TRIANGLE, 5.0)

    assert len(scaled) == 3
    assert abs(shape_perimeter_km(scaled) - 5.0) <= 0.05
    # Input untouched
    assert PARIS_TRIANGLE[0] == GeoPoint(lat=48.85, lon=2.35)

    print("✓ Paris triangle scales to ~5 km")


def test_scale_about_area_centroid():
    """The fixed point of the scaling is the area centroid, not the vertex mean."""
    print("\n=== Testing Scale Origin ===")

    current = shape_perimeter_km(LOPSIDED_SQUARE)
    scaled = scale_shape(LOPSIDED_SQUARE, 2 * current)

    # For a similarity with factor 2: origin = 2 * P - P'
    for original, result in zip(LOPSIDED_SQUARE, scaled):
        origin_lat = 2 * original.lat - result.lat
        origin_lon = 2 * original.lon - result.lon
        assert abs(origin_lat - 0.01) < 1e-4, origin_lat
        assert abs(origin_lon - 0.01) < 1e-4, origin_lon

    print("✓ Scaling is centred on the area centroid")


def test_scale_preserves_proportions():
    """Edge length ratios survive scaling."""
    print("\n=== Testing Scale Proportions ===")

    scaled = scale_shape(PARIS_TRIANGLE, 12.0)

    def edges(shape):
        return [haversine_km(shape[i], shape[(i + 1) % len(shape)]) for i in range(len(shape))]

    before, after = edges(PARIS_TRIANGLE), edges(scaled)
    for i in range(1, 3):
        assert math.isclose(before[i] / before[0], after[i] / after[0], rel_tol=1e-3)

    print("✓ Proportions preserved")


def test_scale_degenerate_inputs():
    """Too few points or zero perimeter return the input unchanged."""
    print("\n=== Testing Scale Degenerate Inputs ===")

    two = PARIS_TRIANGLE[:2]
    assert scale_shape(two, 5.0) is two

    p = GeoPoint(lat=10.0, lon=10.0)
    collapsed = [p, p, p]
    assert scale_shape(collapsed, 5.0) is collapsed

    print("✓ Degenerate shapes are returned unchanged")


def test_scale_collinear_shape():
    """Zero-area shapes still scale (about the vertex mean)."""
    print("\n=== Testing Scale Collinear Shape ===")

    line = [
        GeoPoint(lat=0.0, lon=0.0),
        GeoPoint(lat=0.0, lon=0.01),
        GeoPoint(lat=0.0, lon=0.02),
    ]
    scaled = scale_shape(line, 10.0)
    assert len(scaled) == 3
    assert abs(shape_perimeter_km(scaled) - 10.0) < 0.1

    print("✓ Collinear shape scales")


def test_resample_count_law():
    """resample(shape, n) always returns n + 1 points."""
    print("\n=== Testing Resample Count ===")

    for shape in (PARIS_TRIANGLE, LOPSIDED_SQUARE):
        for n in (1, 2, 3, 7, 12, 13, 50, 101):
            resampled = resample_shape(shape, n)
            assert len(resampled) == n + 1, (n, len(resampled))

    print("✓ Resampling returns n + 1 points")


def test_resample_closed_loop():
    """First and last resampled points coincide."""
    print("\n=== Testing Resample Coverage ===")

    for n in (1, 5, 12, 40):
        resampled = resample_shape(PARIS_TRIANGLE, n)
        assert resampled[0] == PARIS_TRIANGLE[0]
        assert resampled[-1] == resampled[0]

    # Already-closed input is not closed twice
    closed = PARIS_TRIANGLE + [PARIS_TRIANGLE[0]]
    a = resample_shape(closed, 9)
    b = resample_shape(PARIS_TRIANGLE, 9)
    for p, q in zip(a, b):
        assert_close_points(p, q, tol=1e-9)

    print("✓ Resampled trace closes the loop")


def test_resample_even_spacing():
    """Points on a square land on its corners when n divides evenly."""
    print("\n=== Testing Resample Spacing ===")

    square = [
        GeoPoint(lat=0.0, lon=0.0),
        GeoPoint(lat=0.01, lon=0.0),
        GeoPoint(lat=0.01, lon=0.01),
        GeoPoint(lat=0.0, lon=0.01),
    ]
    resampled = resample_shape(square, 8)

    for corner_index, corner in enumerate(square):
        assert_close_points(resampled[corner_index * 2], corner, tol=1e-6)
    assert_close_points(resampled[1], GeoPoint(lat=0.005, lon=0.0), tol=1e-6)

    print("✓ Resampled points are evenly spaced")


def test_resample_degenerate_inputs():
    """Short and zero-length shapes."""
    print("\n=== Testing Resample Degenerate Inputs ===")

    single = [GeoPoint(lat=1.0, lon=1.0)]
    assert resample_shape(single, 12) == single
    assert resample_shape([], 12) == []

    p = GeoPoint(lat=1.0, lon=1.0)
    resampled = resample_shape([p, p, p], 5)
    assert len(resampled) == 6
    assert all(q == p for q in resampled)

    try:
        resample_shape(PARIS_TRIANGLE, 0)
        assert False, "Expected ValueError"
    except ValueError:
        pass

    print("✓ Degenerate resampling handled")


def test_target_vertex_count():
    """Adaptive vertex-count policy."""
    print("\n=== Testing Vertex Count Policy ===")

    assert target_vertex_count(1.0) == 12
    assert target_vertex_count(5.0) == 12
    assert target_vertex_count(24.0) == 12
    assert target_vertex_count(25.0) == 13  # 12.5 rounds up
    assert target_vertex_count(42.2) == 21
    assert target_vertex_count(100.0) == 50
    assert target_vertex_count(10.0, km_per_point=0.5, minimum=4) == 20

    print("✓ Vertex count policy works")


def run_all_tests():
    """Run all geometry tests."""
    print("\n" + "=" * 60)
    print("GEOMETRY - COMPREHENSIVE TEST SUITE")
    print("=" * 60)

    test_haversine()
    test_interpolate_and_point_along()
    test_perimeter()
    test_scale_to_current_perimeter_is_identity()
    test_scale_hits_target_perimeter()
    test_scale_paris_triangle_scenario()
    test_scale_about_area_centroid()
    test_scale_preserves_proportions()
    test_scale_degenerate_inputs()
    test_scale_collinear_shape()
    test_resample_count_law()
    test_resample_closed_loop()
    test_resample_even_spacing()
    test_resample_degenerate_inputs()
    test_target_vertex_count()

    print("\n" + "=" * 60)
    print("✅ ALL GEOMETRY TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
