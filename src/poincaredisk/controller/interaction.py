"""
Interaction State Machine
=========================
Translates pointer and keyboard input into graph commands.

Why is this file needed?
------------------------
1. Decoupling: the Qt canvas only forwards raw events (in screen pixels);
   all editing rules live here and can be tested without a window.
2. Explicit modes: Select / Translate / Add are states of one machine, and
   every edit leaves it as a discrete command (see `commands.py`).

Keys:
    s, t, a       switch to Select, Translate, Add
    Shift (held)  Select: pick whole connected components
                  Add: keep chaining lines from the last point
    Delete/Backspace  remove the selected points (and their lines)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from poincaredisk.controller.commands import (
    AddLine, AddPoint, BeginTranslate, CommitTranslate, GraphCommand, RemovePoints
)
from poincaredisk.model.geometry_primitives import (
    HyperbolicPoint, HyperbolicSegment, NormalizedPoint, PointId, ScreenPoint, Viewport
)
from poincaredisk.model.graph import Graph
from poincaredisk.model.transforms import normalized_to_hyperbolic, screen_to_normalized

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    SELECT = "Select"
    TRANSLATE = "Translate"
    ADD = "Add"


class Key(StrEnum):
    SHIFT = "Shift"
    DELETE = "Delete"
    BACKSPACE = "Backspace"
    SELECT = "s"
    TRANSLATE = "t"
    ADD = "a"


MODE_KEYS = {
    Key.SELECT: Mode.SELECT,
    Key.TRANSLATE: Mode.TRANSLATE,
    Key.ADD: Mode.ADD,
}


@dataclass(frozen=True)
class TranslateSession:
    """Snapshot of a drag: the moved points as they were, and their centroid."""
    origins: Dict[PointId, HyperbolicPoint]
    centroid: HyperbolicPoint

    @classmethod
    def capture(cls, graph: Graph, pids: List[PointId]) -> TranslateSession:
        origins = {pid: graph.point(pid) for pid in pids}
        n = len(origins)
        centroid = HyperbolicPoint(
            sum(p.x for p in origins.values()) / n,
            sum(p.y for p in origins.values()) / n,
        )
        return cls(origins=origins, centroid=centroid)

    def positions_for(self, anchor: HyperbolicPoint) -> Dict[PointId, HyperbolicPoint]:
        """Re-center the group on `anchor`, keeping each point's hyperbolic offset."""
        return {pid: anchor + (p - self.centroid) for pid, p in self.origins.items()}


class EditorController(QObject):
    """Editing state (mode, selection, hover) over a Graph."""
    changed = Signal()
    mode_changed = Signal(str)
    command_executed = Signal(object)

    def __init__(self, graph: Graph, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.graph = graph

        self._mode: Mode = Mode.SELECT
        self._shift: bool = False
        self._selection: List[PointId] = []
        self._hovered: Optional[PointId] = None
        self._first_selected: Optional[PointId] = None
        self._cursor: Optional[NormalizedPoint] = None
        self._session: Optional[TranslateSession] = None

    # ------------------------------------------------------------------------------
    # Public state
    # ------------------------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def mode_text(self) -> str:
        return f"Mode: {self._mode}"

    @property
    def selection(self) -> Tuple[PointId, ...]:
        return tuple(self._selection)

    @property
    def hovered(self) -> Optional[PointId]:
        return self._hovered

    @property
    def first_selected(self) -> Optional[PointId]:
        return self._first_selected

    @property
    def cursor(self) -> Optional[NormalizedPoint]:
        return self._cursor

    @property
    def shift_pressed(self) -> bool:
        return self._shift

    @property
    def is_dragging(self) -> bool:
        return self._mode is Mode.TRANSLATE and self._session is not None

    def translate_preview(self) -> Dict[PointId, HyperbolicPoint]:
        """
        Where the dragged points would land if the user clicked now.

        Empty when no drag is active, the cursor is outside the disk, or the
        cursor sits exactly on the disk center (which has no hyperbolic image).
        """
        if not self.is_dragging or self._cursor is None:
            return {}
        anchor = normalized_to_hyperbolic(self._cursor)
        if anchor is None:
            return {}
        return self._session.positions_for(anchor)

    def preview_segments(self) -> List[HyperbolicSegment]:
        """Segments of lines whose both endpoints are being dragged."""
        positions = self.translate_preview()
        if not positions:
            return []
        return [
            HyperbolicSegment(positions[line.start], positions[line.end])
            for line in self.graph.lines
            if line.start in positions and line.end in positions
        ]

    def is_being_dragged(self, pid: PointId) -> bool:
        return self.is_dragging and pid in self._session.origins

    # ------------------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------------------

    def execute(self, command: GraphCommand) -> Any:
        """Apply a command to the graph and broadcast it."""
        logger.debug("Executing %s", command)
        result = command.apply(self.graph)
        self.command_executed.emit(command)
        return result

    def set_mode(self, mode: Mode) -> None:
        mode = Mode(mode)
        if mode is Mode.TRANSLATE and self._mode is not Mode.TRANSLATE:
            if self._selection:
                pids = tuple(self._selection)
                self.execute(BeginTranslate(pids))
                self._session = TranslateSession.capture(self.graph, list(pids))
        elif self._mode is Mode.TRANSLATE and mode is not Mode.TRANSLATE:
            self._session = None

        self._mode = mode
        if mode is not Mode.ADD:
            self._first_selected = None

        logger.info(self.mode_text)
        self.mode_changed.emit(self.mode_text)
        self.changed.emit()

    def delete_selection(self) -> None:
        if not self._selection:
            return
        self.execute(RemovePoints(tuple(self._selection)))
        self._selection = []
        self._session = None
        self._drop_stale_references()
        self.changed.emit()

    def reset(self) -> None:
        """Forget every handle-based state, e.g. after the graph was cleared."""
        self._selection = []
        self._hovered = None
        self._first_selected = None
        self._session = None
        if self._mode is not Mode.SELECT:
            self.set_mode(Mode.SELECT)
        else:
            self.changed.emit()

    # ------------------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------------------

    def key_pressed(self, key: str) -> None:
        if key == Key.SHIFT:
            self._shift = True
        elif key in (Key.DELETE, Key.BACKSPACE):
            self.delete_selection()
        elif key.lower() in MODE_KEYS:
            self.set_mode(MODE_KEYS[Key(key.lower())])

    def key_released(self, key: str) -> None:
        if key == Key.SHIFT:
            self._shift = False
            if self._mode is Mode.ADD:
                self._first_selected = None
            self.changed.emit()

    def pointer_moved(self, screen: ScreenPoint, viewport: Viewport) -> None:
        self._cursor = screen_to_normalized(screen, viewport)

        if self._cursor is None:
            self._hovered = None
        elif not self.is_dragging:
            self._hovered = self.graph.find_point_near(self._cursor)

        self.changed.emit()

    def pointer_left(self) -> None:
        self._cursor = None
        self._hovered = None
        self.changed.emit()

    def clicked(self, screen: ScreenPoint, viewport: Viewport) -> None:
        target = screen_to_normalized(screen, viewport)
        if target is None:
            return
        self._cursor = target

        if self.is_dragging:
            self._commit_translate()
        elif self._mode is Mode.SELECT:
            self._select_at(target)
        elif self._mode is Mode.ADD:
            self._add_at(target)

        self.changed.emit()

    def double_clicked(self, screen: ScreenPoint, viewport: Viewport) -> None:
        if self._mode is not Mode.ADD:
            return
        target = screen_to_normalized(screen, viewport)
        if target is None or self.graph.find_point_near(target) is not None:
            return

        point = normalized_to_hyperbolic(target)
        if point is not None:
            self.execute(AddPoint(point))
            self.changed.emit()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _commit_translate(self) -> None:
        positions = self.translate_preview()
        if not positions:
            return
        self.execute(CommitTranslate(positions))
        self.set_mode(Mode.SELECT)

    def _select_at(self, target: NormalizedPoint) -> None:
        clicked_point = self.graph.find_point_near(target)

        if clicked_point is not None:
            if self._shift:
                self._selection = self._ordered(self.graph.find_connected_components(clicked_point))
            elif clicked_point in self._selection:
                self._selection = []
            else:
                self._selection = [clicked_point]
            return

        clicked_line = self.graph.find_line_near(target)
        if clicked_line is not None:
            if self._shift:
                reachable = self.graph.find_connected_components(clicked_line.start)
                reachable |= self.graph.find_connected_components(clicked_line.end)
                self._selection = self._ordered(reachable)
            else:
                self._selection = [clicked_line.start, clicked_line.end]
            return

        self._selection = []

    def _add_at(self, target: NormalizedPoint) -> None:
        clicked_point = self.graph.find_point_near(target)

        if clicked_point is not None:
            if self._first_selected is None:
                self._first_selected = clicked_point
            elif self._first_selected != clicked_point:
                self.execute(AddLine(self._first_selected, clicked_point))
                self._first_selected = clicked_point if self._shift else None
            return

        point = normalized_to_hyperbolic(target)
        if point is None:
            return

        pid = self.execute(AddPoint(point))
        if self._first_selected is not None:
            self.execute(AddLine(self._first_selected, pid))
            self._first_selected = pid if self._shift else None

    def _ordered(self, pids) -> List[PointId]:
        """Arrange a set of handles in graph insertion order."""
        return [pid for pid in self.graph.points if pid in pids]

    def _drop_stale_references(self) -> None:
        if self._hovered is not None and self._hovered not in self.graph:
            self._hovered = None
        if self._first_selected is not None and self._first_selected not in self.graph:
            self._first_selected = None
