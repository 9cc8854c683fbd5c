"""
Graph Commands
==============
Discrete edits emitted by the interaction controller and applied to a Graph.

Each command is an immutable description of one atomic edit, so the
controller can log it, broadcast it and apply it without the Graph knowing
anything about editing modes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from poincaredisk.model.geometry_primitives import HyperbolicPoint, Line, PointId
from poincaredisk.model.graph import Graph


@dataclass(frozen=True)
class GraphCommand:
    def apply(self, graph: Graph) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class AddPoint(GraphCommand):
    point: HyperbolicPoint

    def apply(self, graph: Graph) -> PointId:
        return graph.add_point(self.point)


@dataclass(frozen=True)
class AddLine(GraphCommand):
    start: PointId
    end: PointId

    def apply(self, graph: Graph) -> Line:
        return graph.add_line(self.start, self.end)


@dataclass(frozen=True)
class RemovePoints(GraphCommand):
    pids: Tuple[PointId, ...]

    def apply(self, graph: Graph) -> None:
        graph.remove_points(self.pids)


@dataclass(frozen=True)
class BeginTranslate(GraphCommand):
    """Marks the start of a drag; the graph is untouched until the commit."""
    pids: Tuple[PointId, ...]

    def apply(self, graph: Graph) -> None:
        return None


@dataclass(frozen=True)
class CommitTranslate(GraphCommand):
    positions: Mapping[PointId, HyperbolicPoint] = field(default_factory=dict)

    def apply(self, graph: Graph) -> None:
        graph.move_points(self.positions)


@dataclass(frozen=True)
class ClearGraph(GraphCommand):
    def apply(self, graph: Graph) -> None:
        graph.clear()
