"""
Frame-tagged Geometric Primitives.

Every point carries the coordinate frame it lives in. Arithmetic is only
defined between two values of the same frame; combining frames requires an
explicit transform from `poincaredisk.model.transforms`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar, Optional, TypeVar, TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


class Frame(StrEnum):
    HYPERBOLIC = "Hyperbolic"
    NORMALIZED = "Normalized"
    SCREEN = "Screen"


# Stable handle of a point inside a Graph arena
PointId = int

_P = TypeVar("_P", bound="_FramePoint")


@dataclass(frozen=True)
class _FramePoint:
    x: float
    y: float

    frame: ClassVar[Frame]

    def _check_frame(self, other: object, op: str) -> None:
        if not isinstance(other, _FramePoint):
            raise TypeError(f"Cannot {op} {type(other).__name__} and {type(self).__name__}.")
        if other.frame is not self.frame:
            raise TypeError(
                f"Cannot {op} a {other.frame} point and a {self.frame} point; "
                f"transform one of them first."
            )

    def __add__(self: _P, other: _P) -> _P:
        self._check_frame(other, "add")
        return type(self)(self.x + other.x, self.y + other.y)

    def __sub__(self: _P, other: _P) -> _P:
        self._check_frame(other, "subtract")
        return type(self)(self.x - other.x, self.y - other.y)

    def __mul__(self: _P, scalar: float) -> _P:
        return type(self)(self.x * scalar, self.y * scalar)

    def __truediv__(self: _P, scalar: float) -> _P:
        if scalar == 0.0: raise ZeroDivisionError
        return type(self)(self.x / scalar, self.y / scalar)

    def __neg__(self: _P) -> _P:
        return type(self)(-self.x, -self.y)

    def distance_to(self: _P, other: _P) -> float:
        self._check_frame(other, "measure distance between")
        return math.hypot(self.x - other.x, self.y - other.y)

    @property
    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


@dataclass(frozen=True)
class HyperbolicPoint(_FramePoint):
    """Axial coordinates of a point of the hyperbolic plane. Unbounded."""
    frame: ClassVar[Frame] = Frame.HYPERBOLIC


@dataclass(frozen=True)
class NormalizedPoint(_FramePoint):
    """A point of the Poincaré disk, x² + y² < 1."""
    frame: ClassVar[Frame] = Frame.NORMALIZED


@dataclass(frozen=True)
class ScreenPoint(_FramePoint):
    """Pixel coordinates, y grows downward."""
    frame: ClassVar[Frame] = Frame.SCREEN


ORIGIN_NORMALIZED = NormalizedPoint(0.0, 0.0)


@dataclass(frozen=True)
class Viewport:
    """The pixel rectangle the unit disk is drawn into."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> ScreenPoint:
        return ScreenPoint(self.left + self.width / 2, self.top + self.height / 2)

    @property
    def scale(self) -> float:
        """Pixels per normalized unit (half of the shorter side)."""
        return min(self.width, self.height) / 2

    def contains(self, point: ScreenPoint) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


@dataclass(frozen=True)
class Line:
    """An edge of the graph, referencing its endpoints by handle."""
    start: PointId
    end: PointId

    def other(self, pid: PointId) -> Optional[PointId]:
        """The opposite endpoint of `pid`, or None if the line does not touch it."""
        if self.start == pid:
            return self.end
        if self.end == pid:
            return self.start
        return None


@dataclass(frozen=True)
class HyperbolicSegment:
    """A geodesic segment given by endpoint values (not handles)."""
    start: HyperbolicPoint
    end: HyperbolicPoint


@dataclass(frozen=True)
class Arc:
    """
    Drawable representation of a geodesic in the disk.

    The curve runs in the direction of increasing angle from `start_angle`
    to `end_angle` (modulo 2π) around `center`. For straight chords
    `radius` is `math.inf` and the angles are the polar angles of the two
    endpoints seen from the disk center.
    """
    center: NormalizedPoint
    radius: float
    start_angle: float
    end_angle: float
    is_straight: bool
    start: NormalizedPoint = field(default=ORIGIN_NORMALIZED)
    end: NormalizedPoint = field(default=ORIGIN_NORMALIZED)

    @property
    def sweep(self) -> float:
        """Angular extent of the arc, in [0, π] for geodesic arcs."""
        if self.is_straight:
            return 0.0
        return (self.end_angle - self.start_angle) % (2 * math.pi)
