"""
Geodesic arcs of the Poincaré disk.

A geodesic through two disk points u, v is either a diameter (when u, v and
the origin are collinear) or the arc of the unique circle through u and v
that meets the unit circle at right angles. Writing that circle as
x² + y² + a·x + b·y + 1 = 0 (the constant term 1 is what makes it orthogonal
to the unit circle) and substituting u and v gives a 2x2 linear system in
(a, b), solved here by Cramer's rule.

See: https://en.wikipedia.org/wiki/Poincar%C3%A9_disk_model
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from poincaredisk.config import ARC_SAMPLES, COLLINEAR_EPS, RADICAND_EPS
from poincaredisk.model.geometry_primitives import (
    Arc, HyperbolicSegment, NormalizedPoint, ORIGIN_NORMALIZED
)
from poincaredisk.model.transforms import hyperbolic_to_normalized

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def geodesic_arc(segment: HyperbolicSegment) -> Arc:
    """
    Compute the drawable arc of the geodesic between two hyperbolic points.

    Args:
        segment: The two endpoints, in the Hyperbolic frame.

    Returns:
        An Arc in the Normalized frame. For the degenerate case (endpoints
        collinear with the disk center) the arc is a straight chord with
        center (0, 0), infinite radius and the endpoints' polar angles.
        Otherwise it is the minor arc of the orthogonal circle, oriented so
        that it runs with increasing angle from start_angle to end_angle.
    """
    u = hyperbolic_to_normalized(segment.start)
    v = hyperbolic_to_normalized(segment.end)
    u1, u2 = u.x, u.y
    v1, v2 = v.x, v.y

    d = u1 * v2 - u2 * v1

    if abs(d) < COLLINEAR_EPS:
        return Arc(
            center=ORIGIN_NORMALIZED,
            radius=math.inf,
            start_angle=math.atan2(u2, u1),
            end_angle=math.atan2(v2, v1),
            is_straight=True,
            start=u,
            end=v,
        )

    u_sq = u1 ** 2 + u2 ** 2
    v_sq = v1 ** 2 + v2 ** 2

    a = (u2 * (v_sq + 1.0) - v2 * (u_sq + 1.0)) / d
    b = (v1 * (u_sq + 1.0) - u1 * (v_sq + 1.0)) / d

    center = NormalizedPoint(-a / 2.0, -b / 2.0)

    half_sq = (a / 2.0) ** 2 + (b / 2.0) ** 2
    radicand = half_sq - 1.0
    if radicand < 0.0:
        # Roundoff in a, b grows like 1 / |d|; nearly coincident points close to
        # the boundary land here with a true radius of almost zero
        tolerance = RADICAND_EPS * (1.0 + half_sq) / abs(d)
        assert radicand > -tolerance, f"Negative radicand {radicand} for {segment}"
        logger.debug("Clamped negative radicand %g to zero for %s.", radicand, segment)
        radicand = 0.0
    radius = math.sqrt(radicand)

    start_angle = math.atan2(u2 - center.y, u1 - center.x)
    end_angle = math.atan2(v2 - center.y, v1 - center.x)

    # Keep the minor arc
    if end_angle < start_angle:
        end_angle += TWO_PI
    if end_angle - start_angle > math.pi:
        start_angle, end_angle = end_angle, start_angle
        u, v = v, u

    return Arc(
        center=center,
        radius=radius,
        start_angle=start_angle,
        end_angle=end_angle,
        is_straight=False,
        start=u,
        end=v,
    )


def arc_points(arc: Arc, n_points: int = ARC_SAMPLES) -> npt.NDArray[np.float64]:
    """
    Sample the drawable curve of an arc in the Normalized frame.

    Args:
        arc: The arc to sample.
        n_points: Number of samples (including endpoints). Straight chords
            always yield their two endpoints only.

    Returns:
        Array of shape (n, 2) running from arc.start to arc.end.
    """
    if arc.is_straight:
        return np.array([[arc.start.x, arc.start.y], [arc.end.x, arc.end.y]])

    angles = arc.start_angle + np.linspace(0.0, arc.sweep, max(2, n_points))
    x = arc.center.x + arc.radius * np.cos(angles)
    y = arc.center.y + arc.radius * np.sin(angles)
    return np.column_stack((x, y))


def distance_to_arc(arc: Arc, target: NormalizedPoint) -> float:
    """
    Distance from a disk point to the drawn geodesic, for hit testing.

    Returns math.inf when the target projects outside the arc's extent
    (beyond the chord's endpoints, or outside the arc's angular sweep).
    """
    if arc.is_straight:
        p0 = arc.start.to_array()
        direction = arc.end.to_array() - p0
        length_sq = float(np.dot(direction, direction))
        if length_sq == 0.0:
            return math.inf

        t = float(np.dot(target.to_array() - p0, direction)) / length_sq
        if t < 0.0 or t > 1.0:
            return math.inf

        projection = p0 + t * direction
        return float(np.hypot(*(projection - target.to_array())))

    dx = target.x - arc.center.x
    dy = target.y - arc.center.y
    offset = (math.atan2(dy, dx) - arc.start_angle) % TWO_PI
    if offset > arc.sweep:
        return math.inf

    return abs(math.hypot(dx, dy) - arc.radius)
