"""
Geodesic Arc Tests
==================

The arc of a geodesic must be a circle orthogonal to the unit circle passing
through both projected endpoints, or a straight chord when the endpoints are
collinear with the disk center.
"""
import math

import numpy as np
import pytest

from poincaredisk.model.arcs import arc_points, distance_to_arc, geodesic_arc
from poincaredisk.model.geometry_primitives import (
    HyperbolicPoint, HyperbolicSegment, NormalizedPoint
)
from poincaredisk.model.transforms import hyperbolic_to_normalized, normalized_to_hyperbolic

GENERAL_SEGMENTS = [
    HyperbolicSegment(HyperbolicPoint(0.5, 0.1), HyperbolicPoint(-0.2, 0.7)),
    HyperbolicSegment(HyperbolicPoint(-0.8, -0.3), HyperbolicPoint(0.4, -0.9)),
    HyperbolicSegment(HyperbolicPoint(1.1, 0.2), HyperbolicPoint(-1.0, 0.3)),
    HyperbolicSegment(HyperbolicPoint(0.05, 0.02), HyperbolicPoint(0.01, -0.06)),
    HyperbolicSegment(HyperbolicPoint(-0.3, 0.6), HyperbolicPoint(0.6, -0.2)),
]


def _segment_between(u: NormalizedPoint, v: NormalizedPoint) -> HyperbolicSegment:
    return HyperbolicSegment(normalized_to_hyperbolic(u), normalized_to_hyperbolic(v))


class TestDegenerateArcs:

    def test_segment_through_origin_is_straight(self):
        arc = geodesic_arc(HyperbolicSegment(HyperbolicPoint(-8.0, 0.0), HyperbolicPoint(0.0, 0.0)))
        assert arc.is_straight
        assert math.isinf(arc.radius)
        assert arc.center == NormalizedPoint(0.0, 0.0)

    def test_points_on_a_diameter_are_straight(self):
        arc = geodesic_arc(HyperbolicSegment(HyperbolicPoint(0.5, 0.5), HyperbolicPoint(-0.3, -0.3)))
        assert arc.is_straight
        assert arc.start_angle == pytest.approx(math.pi / 4)
        assert arc.end_angle == pytest.approx(-3 * math.pi / 4)

    def test_straight_arc_keeps_endpoints(self):
        segment = HyperbolicSegment(HyperbolicPoint(0.4, 0.0), HyperbolicPoint(-0.9, 0.0))
        arc = geodesic_arc(segment)
        assert arc.start == hyperbolic_to_normalized(segment.start)
        assert arc.end == hyperbolic_to_normalized(segment.end)
        assert arc.sweep == 0.0


class TestGeneralArcs:

    @pytest.mark.parametrize("segment", GENERAL_SEGMENTS)
    def test_circle_is_orthogonal_to_unit_circle(self, segment):
        arc = geodesic_arc(segment)
        assert not arc.is_straight
        assert arc.center.x ** 2 + arc.center.y ** 2 == pytest.approx(arc.radius ** 2 + 1.0, rel=1e-9)

    @pytest.mark.parametrize("segment", GENERAL_SEGMENTS)
    def test_circle_passes_through_both_endpoints(self, segment):
        arc = geodesic_arc(segment)
        for end in (segment.start, segment.end):
            p = hyperbolic_to_normalized(end)
            assert p.distance_to(arc.center) == pytest.approx(arc.radius, rel=1e-9)

    @pytest.mark.parametrize("segment", GENERAL_SEGMENTS)
    def test_minor_arc_is_selected(self, segment):
        arc = geodesic_arc(segment)
        assert 0.0 <= arc.sweep <= math.pi

    def test_orientation_does_not_change_the_circle(self):
        segment = GENERAL_SEGMENTS[0]
        forward = geodesic_arc(segment)
        backward = geodesic_arc(HyperbolicSegment(segment.end, segment.start))
        assert forward.center.x == pytest.approx(backward.center.x)
        assert forward.center.y == pytest.approx(backward.center.y)
        assert forward.radius == pytest.approx(backward.radius)
        assert forward.sweep == pytest.approx(backward.sweep)

    def test_known_geodesic(self):
        """
        The circle centered at (1, 1) with radius 1 is orthogonal to the unit
        circle (|c|² = 2 = r² + 1), so any two disk points on it span it.
        """
        u = NormalizedPoint(1.0 - math.sqrt(0.5), 1.0 - math.sqrt(0.5))
        v = NormalizedPoint(1.0 - 1.0 * math.cos(math.radians(20)), 1.0 - math.sin(math.radians(20)))
        arc = geodesic_arc(_segment_between(u, v))
        assert arc.center.x == pytest.approx(1.0, abs=1e-9)
        assert arc.center.y == pytest.approx(1.0, abs=1e-9)
        assert arc.radius == pytest.approx(1.0, abs=1e-9)


class TestArcSampling:

    @pytest.mark.parametrize("segment", GENERAL_SEGMENTS)
    def test_samples_run_between_projected_endpoints(self, segment):
        arc = geodesic_arc(segment)
        samples = arc_points(arc, n_points=32)
        assert samples.shape == (32, 2)

        u = hyperbolic_to_normalized(segment.start).to_array()
        v = hyperbolic_to_normalized(segment.end).to_array()
        first, last = samples[0], samples[-1]
        assert (np.allclose(first, u) and np.allclose(last, v)) or \
            (np.allclose(first, v) and np.allclose(last, u))

    @pytest.mark.parametrize("segment", GENERAL_SEGMENTS)
    def test_samples_stay_inside_disk(self, segment):
        samples = arc_points(geodesic_arc(segment))
        assert np.all(np.hypot(samples[:, 0], samples[:, 1]) < 1.0)

    def test_straight_samples_are_the_chord(self):
        arc = geodesic_arc(HyperbolicSegment(HyperbolicPoint(-8.0, 0.0), HyperbolicPoint(0.0, 0.0)))
        samples = arc_points(arc)
        assert samples.shape == (2, 2)
        assert samples[1] == pytest.approx([0.0, 0.0])


class TestDistanceToArc:

    def test_point_on_arc_is_hit(self):
        arc = geodesic_arc(GENERAL_SEGMENTS[0])
        middle = arc_points(arc, n_points=33)[16]
        assert distance_to_arc(arc, NormalizedPoint(*middle)) == pytest.approx(0.0, abs=1e-12)

    def test_point_beside_arc_measures_radial_gap(self):
        arc = geodesic_arc(GENERAL_SEGMENTS[0])
        angle = arc.start_angle + arc.sweep / 2
        target = NormalizedPoint(
            arc.center.x + (arc.radius - 0.01) * math.cos(angle),
            arc.center.y + (arc.radius - 0.01) * math.sin(angle),
        )
        assert distance_to_arc(arc, target) == pytest.approx(0.01)

    def test_point_outside_the_sweep_is_missed(self):
        arc = geodesic_arc(GENERAL_SEGMENTS[0])
        angle = arc.start_angle - 0.2
        target = NormalizedPoint(
            arc.center.x + arc.radius * math.cos(angle),
            arc.center.y + arc.radius * math.sin(angle),
        )
        assert math.isinf(distance_to_arc(arc, target))

    def test_straight_chord(self):
        arc = geodesic_arc(HyperbolicSegment(HyperbolicPoint(-1.0, 0.0), HyperbolicPoint(1.0, 0.0)))
        assert distance_to_arc(arc, NormalizedPoint(0.1, 0.015)) == pytest.approx(0.015)
        assert math.isinf(distance_to_arc(arc, NormalizedPoint(0.9, 0.0)))


class TestFarNearlyCoincidentEndpoints:
    """
    Far-away points saturate onto almost the same spot near the boundary; the
    circle solve is then badly conditioned and the radicand can round below 0.
    """

    def test_known_case(self):
        segment = HyperbolicSegment(HyperbolicPoint(-22.672, -6.2307), HyperbolicPoint(-22.673, -6.2312))
        arc = geodesic_arc(segment)
        assert arc.is_straight or (math.isfinite(arc.radius) and arc.radius >= 0.0)

    def test_random_far_pairs(self):
        rng = np.random.default_rng(7)
        starts = rng.uniform(-40.0, 40.0, size=(5000, 2))
        offsets = rng.uniform(-1e-3, 1e-3, size=(5000, 2))

        for (x, y), (dx, dy) in zip(starts, offsets):
            segment = HyperbolicSegment(HyperbolicPoint(float(x), float(y)),
                                        HyperbolicPoint(float(x + dx), float(y + dy)))
            arc = geodesic_arc(segment)
            if not arc.is_straight:
                assert math.isfinite(arc.radius)
                assert arc.radius >= 0.0
                assert np.all(np.isfinite(arc_points(arc, n_points=8)))
