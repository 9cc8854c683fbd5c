"""
Coordinate transforms between the Hyperbolic, Normalized and Screen frames.

Hyperbolic points are stored in axial coordinates. They are mapped to the
Beltrami-Klein disk with a componentwise `tanh` and then to the Poincaré disk
(the Normalized frame). Screen points map to the Normalized frame through the
viewport: center to origin, uniform scale by half the shorter side, y flipped.

See: https://en.wikipedia.org/wiki/Coordinate_systems_for_the_hyperbolic_plane
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from poincaredisk.config import KLEIN_RADIUS_LIMIT
from poincaredisk.model.geometry_primitives import (
    HyperbolicPoint, NormalizedPoint, ScreenPoint, Viewport
)

logger = logging.getLogger(__name__)


def hyperbolic_to_normalized(point: HyperbolicPoint) -> NormalizedPoint:
    """
    Project a hyperbolic point into the Poincaré disk.

    Axial pairs whose Klein image falls on or outside the unit circle
    (e.g. (1, 1), or inputs so large that tanh rounds to ±1) have no exact
    image; they are saturated radially onto KLEIN_RADIUS_LIMIT, so the result
    always lies strictly inside the unit disk.
    """
    xb, yb = math.tanh(point.x), math.tanh(point.y)
    rb_sq = xb ** 2 + yb ** 2

    if rb_sq >= KLEIN_RADIUS_LIMIT ** 2:
        factor = KLEIN_RADIUS_LIMIT / math.sqrt(rb_sq)
        xb, yb = xb * factor, yb * factor
        rb_sq = KLEIN_RADIUS_LIMIT ** 2
        logger.debug("Saturated %s onto the Klein radius limit.", point)

    s = 1.0 + math.sqrt(1.0 - rb_sq)
    return NormalizedPoint(xb / s, yb / s)


def normalized_to_hyperbolic(point: NormalizedPoint) -> Optional[HyperbolicPoint]:
    """
    Recover axial hyperbolic coordinates of a disk point.

    Returns None for the exact disk center (the radial rescaling divides by
    the radius) and for points on or outside the unit circle, where atanh
    diverges.
    """
    rp = point.norm
    if rp == 0.0 or not rp < 1.0:
        return None

    rb = 2.0 * rp / (1.0 + rp ** 2)
    xb = point.x / rp * rb
    yb = point.y / rp * rb

    # rb rounds to 1.0 for rp within ~1e-8 of the boundary
    if abs(xb) >= 1.0 or abs(yb) >= 1.0:
        logger.debug("Rejected %s: too close to the disk boundary.", point)
        return None

    result = HyperbolicPoint(math.atanh(xb), math.atanh(yb))
    if not result.is_finite():
        return None
    return result


def screen_to_normalized(point: ScreenPoint, viewport: Viewport) -> Optional[NormalizedPoint]:
    """
    Map a pixel position to the disk.

    Returns None when the point lies outside the viewport or outside the
    drawn unit disk.
    """
    if not viewport.contains(point):
        return None

    scale = viewport.scale
    if scale <= 0.0:
        return None

    center = viewport.center
    nx = (point.x - center.x) / scale
    ny = -(point.y - center.y) / scale  # screen y grows downward

    if nx * nx + ny * ny > 1.0:
        return None

    return NormalizedPoint(nx, ny)


def normalized_to_screen(point: NormalizedPoint, viewport: Viewport) -> ScreenPoint:
    """Inverse of the affine part of `screen_to_normalized`."""
    center = viewport.center
    scale = viewport.scale
    return ScreenPoint(center.x + point.x * scale, center.y - point.y * scale)


def hyperbolic_to_screen(point: HyperbolicPoint, viewport: Viewport) -> ScreenPoint:
    return normalized_to_screen(hyperbolic_to_normalized(point), viewport)
