"""
Point/Line Graph (Data Model)
=============================
This module defines the graph the user edits: an arena of hyperbolic points
addressed by stable integer handles, and a list of lines referencing those
handles.

Why handles?
------------
1. Identity: two points with equal coordinates are still distinct entities.
2. Editing: moving a point replaces its arena slot; every line referencing
   the handle follows automatically, no line ever holds a stale copy.
3. Integrity: deleting points cascades to every line touching them in a
   single swap, so no dangling edge is ever observable.

Contract:
    `add_line` does not check that its handles exist or differ. Callers (the
    interaction controller) only pass handles obtained from this graph.
"""
from __future__ import annotations

import itertools
import logging
from collections import deque
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

import numpy as np

from poincaredisk.config import LINE_PICK_TOLERANCE, POINT_PICK_THRESHOLD
from poincaredisk.model.arcs import distance_to_arc, geodesic_arc
from poincaredisk.model.geometry_primitives import (
    Arc, HyperbolicPoint, HyperbolicSegment, Line, NormalizedPoint, PointId
)
from poincaredisk.model.transforms import hyperbolic_to_normalized

logger = logging.getLogger(__name__)


class Graph:
    """Points and geodesic lines of the hyperbolic plane."""

    def __init__(self) -> None:
        self._points: Dict[PointId, HyperbolicPoint] = {}
        self._lines: List[Line] = []
        self._ids = itertools.count()

    # ------------------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------------------

    @property
    def points(self) -> Mapping[PointId, HyperbolicPoint]:
        """Read-only view of the arena, in insertion order."""
        return MappingProxyType(self._points)

    @property
    def lines(self) -> Tuple[Line, ...]:
        return tuple(self._lines)

    def point(self, pid: PointId) -> HyperbolicPoint:
        return self._points[pid]

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, pid: object) -> bool:
        return pid in self._points

    def __iter__(self) -> Iterator[PointId]:
        return iter(self._points)

    def segment(self, line: Line) -> HyperbolicSegment:
        """Resolve a line's handles into endpoint values."""
        return HyperbolicSegment(self._points[line.start], self._points[line.end])

    def geodesic_arc(self, line: Line) -> Arc:
        return geodesic_arc(self.segment(line))

    def lines_touching(self, pids: Iterable[PointId]) -> List[Line]:
        wanted = set(pids)
        return [line for line in self._lines if line.start in wanted or line.end in wanted]

    # ------------------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------------------

    def add_point(self, point: HyperbolicPoint) -> PointId:
        """Insert a point (no deduplication) and return its handle."""
        pid = next(self._ids)
        self._points[pid] = point
        logger.debug("Added point %d at (%.4f, %.4f).", pid, point.x, point.y)
        return pid

    def add_line(self, start: PointId, end: PointId) -> Line:
        line = Line(start=start, end=end)
        self._lines.append(line)
        logger.debug("Added line %d -> %d.", start, end)
        return line

    def move_point(self, pid: PointId, point: HyperbolicPoint) -> None:
        if pid not in self._points:
            raise KeyError(pid)
        self._points[pid] = point

    def move_points(self, positions: Mapping[PointId, HyperbolicPoint]) -> None:
        """Replace several arena slots at once; all handles must exist."""
        missing = [pid for pid in positions if pid not in self._points]
        if missing:
            raise KeyError(missing[0])
        self._points.update(positions)
        logger.debug("Moved %d point(s).", len(positions))

    def remove_point(self, pid: PointId) -> None:
        self.remove_points([pid])

    def remove_points(self, pids: Iterable[PointId]) -> None:
        """Delete points and every line that references any of them."""
        doomed: Set[PointId] = set(pids)
        if not doomed:
            return

        points = {pid: p for pid, p in self._points.items() if pid not in doomed}
        lines = [line for line in self._lines if line.start not in doomed and line.end not in doomed]

        removed_lines = len(self._lines) - len(lines)
        removed_points = len(self._points) - len(points)
        self._points, self._lines = points, lines
        logger.debug("Removed %d point(s) and %d line(s).", removed_points, removed_lines)

    def clear(self) -> None:
        self._points = {}
        self._lines = []
        logger.debug("Graph cleared.")

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    def find_point_near(
        self,
        target: NormalizedPoint,
        threshold: float = POINT_PICK_THRESHOLD
    ) -> Optional[PointId]:
        """
        Return the first point, in insertion order, closer than `threshold`.

        This is a first-match policy, not a nearest-match one: when several
        points lie within the threshold the oldest wins, even if a younger
        point is closer to the target.
        """
        if not self._points:
            return None

        pids = list(self._points)
        projected = np.array([hyperbolic_to_normalized(p).to_array() for p in self._points.values()])
        distances = np.hypot(projected[:, 0] - target.x, projected[:, 1] - target.y)

        hits = np.flatnonzero(distances < threshold)
        if hits.size == 0:
            return None
        return pids[int(hits[0])]

    def find_line_near(
        self,
        target: NormalizedPoint,
        tolerance: float = LINE_PICK_TOLERANCE
    ) -> Optional[Line]:
        """Return the first line whose drawn geodesic passes within `tolerance`."""
        for line in self._lines:
            if distance_to_arc(self.geodesic_arc(line), target) < tolerance:
                return line
        return None

    def find_connected_components(self, start: PointId) -> Set[PointId]:
        """All points reachable from `start` through lines, `start` included."""
        visited: Set[PointId] = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for line in self.lines_touching([current]):
                neighbour = line.other(current)
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)
        return visited
