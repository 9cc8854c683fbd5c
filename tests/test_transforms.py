"""
Coordinate Transform Tests
==========================

Hyperbolic <-> Normalized <-> Screen conversions, including the domain edges
(disk center, disk boundary, outside the viewport).
"""
import math

import pytest

from poincaredisk.model.geometry_primitives import (
    HyperbolicPoint, NormalizedPoint, ScreenPoint, Viewport
)
from poincaredisk.model.transforms import (
    hyperbolic_to_normalized, hyperbolic_to_screen, normalized_to_hyperbolic,
    normalized_to_screen, screen_to_normalized
)

# Axial pairs whose Klein image lies inside the unit disk (tanh²x + tanh²y < 1)
CHART_POINTS = [
    HyperbolicPoint(0.5, -0.3),
    HyperbolicPoint(0.7, 0.2),
    HyperbolicPoint(-1.2, 0.1),
    HyperbolicPoint(0.0, 2.0),
    HyperbolicPoint(0.01, -0.02),
    HyperbolicPoint(-0.6, -0.6),
]


class TestHyperbolicToNormalized:

    def test_origin_maps_to_origin(self):
        result = hyperbolic_to_normalized(HyperbolicPoint(0.0, 0.0))
        assert result == NormalizedPoint(0.0, 0.0)

    @pytest.mark.parametrize("point", CHART_POINTS + [
        HyperbolicPoint(1.0, 1.0),
        HyperbolicPoint(50.0, 50.0),
        HyperbolicPoint(-300.0, 2.0),
        HyperbolicPoint(1e6, 0.0),
        HyperbolicPoint(-20.0, -20.0),
    ])
    def test_result_inside_unit_disk(self, point):
        """Every finite input lands strictly inside the disk, never NaN."""
        result = hyperbolic_to_normalized(point)
        assert result.is_finite()
        assert result.x ** 2 + result.y ** 2 < 1.0

    def test_axis_point_matches_closed_form(self):
        """On an axis the map is x -> tanh(x) / (1 + sech(x)) = tanh(x / 2)."""
        result = hyperbolic_to_normalized(HyperbolicPoint(1.3, 0.0))
        assert result.x == pytest.approx(math.tanh(0.65))
        assert result.y == 0.0

    def test_symmetry(self):
        p = hyperbolic_to_normalized(HyperbolicPoint(0.4, -0.9))
        q = hyperbolic_to_normalized(HyperbolicPoint(-0.4, 0.9))
        assert q.x == pytest.approx(-p.x)
        assert q.y == pytest.approx(-p.y)


class TestNormalizedToHyperbolic:

    @pytest.mark.parametrize("point", CHART_POINTS)
    def test_round_trip(self, point):
        back = normalized_to_hyperbolic(hyperbolic_to_normalized(point))
        assert back is not None
        assert back.x == pytest.approx(point.x, abs=1e-9)
        assert back.y == pytest.approx(point.y, abs=1e-9)

    def test_center_has_no_result(self):
        assert normalized_to_hyperbolic(NormalizedPoint(0.0, 0.0)) is None

    @pytest.mark.parametrize("point", [
        NormalizedPoint(1.0, 0.0),
        NormalizedPoint(0.0, -1.0),
        NormalizedPoint(0.8, 0.8),
        NormalizedPoint(1.5, 0.0),
    ])
    def test_boundary_and_outside_are_rejected(self, point):
        assert normalized_to_hyperbolic(point) is None

    def test_near_boundary_never_returns_infinity(self):
        result = normalized_to_hyperbolic(NormalizedPoint(1.0 - 1e-12, 0.0))
        assert result is None or result.is_finite()

    def test_result_is_hyperbolic_frame(self):
        result = normalized_to_hyperbolic(NormalizedPoint(0.3, 0.1))
        assert isinstance(result, HyperbolicPoint)


class TestScreenTransforms:

    def test_center_maps_to_origin(self, viewport):
        result = screen_to_normalized(ScreenPoint(100.0, 100.0), viewport)
        assert result == NormalizedPoint(0.0, 0.0)

    def test_y_axis_is_flipped(self, viewport):
        result = screen_to_normalized(ScreenPoint(100.0, 50.0), viewport)
        assert result.x == pytest.approx(0.0)
        assert result.y == pytest.approx(0.5)

    def test_uniform_scale_uses_shorter_side(self):
        wide = Viewport(0.0, 0.0, 400.0, 200.0)
        result = screen_to_normalized(ScreenPoint(250.0, 100.0), wide)
        assert result.x == pytest.approx(0.5)
        assert result.y == pytest.approx(0.0)

    def test_offset_viewport(self):
        shifted = Viewport(50.0, 20.0, 200.0, 200.0)
        result = screen_to_normalized(ScreenPoint(150.0, 120.0), shifted)
        assert result == NormalizedPoint(0.0, 0.0)

    def test_outside_viewport(self, viewport):
        assert screen_to_normalized(ScreenPoint(-1.0, 100.0), viewport) is None
        assert screen_to_normalized(ScreenPoint(100.0, 201.0), viewport) is None

    def test_inside_viewport_but_outside_disk(self, viewport):
        assert screen_to_normalized(ScreenPoint(0.0, 0.0), viewport) is None
        assert screen_to_normalized(ScreenPoint(195.0, 195.0), viewport) is None

    def test_normalized_to_screen_inverts_screen_to_normalized(self):
        vp = Viewport(10.0, 30.0, 640.0, 480.0)
        screen = ScreenPoint(400.0, 200.0)
        normalized = screen_to_normalized(screen, vp)
        back = normalized_to_screen(normalized, vp)
        assert back.x == pytest.approx(screen.x)
        assert back.y == pytest.approx(screen.y)

    def test_hyperbolic_origin_is_drawn_at_viewport_center(self, viewport):
        assert hyperbolic_to_screen(HyperbolicPoint(0.0, 0.0), viewport) == ScreenPoint(100.0, 100.0)
