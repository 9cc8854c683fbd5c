from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from poincaredisk import config
from poincaredisk.controller.interaction import EditorController, Key, Mode
from poincaredisk.model.arcs import arc_points, geodesic_arc
from poincaredisk.model.geometry_primitives import (
    HyperbolicPoint, HyperbolicSegment, NormalizedPoint, PointId, ScreenPoint, Viewport
)
from poincaredisk.model.transforms import hyperbolic_to_normalized, normalized_to_screen


def _key_code(key) -> int:
    # Qt.Key is a Python enum on recent PySide6, a plain int on older ones
    return key.value if hasattr(key, "value") else int(key)


QT_KEY_NAMES = {
    _key_code(Qt.Key_Shift): Key.SHIFT,
    _key_code(Qt.Key_Delete): Key.DELETE,
    _key_code(Qt.Key_Backspace): Key.BACKSPACE,
}


class DiskCanvas(QWidget):
    """
    Draws the Poincaré disk, the graph and the editing overlays, and forwards
    mouse/keyboard input to the controller.

    Drawing happens in the Normalized frame; every coordinate goes through
    `normalized_to_screen` with the widget's current viewport.
    """

    def __init__(self, controller: EditorController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.graph = controller.graph

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(200, 200)

        # Qt sends press, release, double-click, release for a double click
        self._release_after_double_click = False

        self.controller.changed.connect(self.update)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def viewport(self) -> Viewport:
        return Viewport(0.0, 0.0, float(self.width()), float(self.height()))

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            self.paint_scene(painter, self.viewport())
        finally:
            painter.end()

    def paint_scene(self, painter: QPainter, viewport: Viewport) -> None:
        """Draw everything onto `painter` for the given viewport."""
        ctrl = self.controller
        mode = ctrl.mode
        selection = set(ctrl.selection)
        scale = viewport.scale
        line_width = max(1.0, config.LINE_WIDTH * scale)

        painter.fillRect(QRectF(viewport.left, viewport.top, viewport.width, viewport.height),
                         QColor(config.BACKGROUND_COLOR))

        # Disk
        center = viewport.center
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor(config.DISK_COLOR)))
        painter.drawEllipse(QPointF(center.x, center.y), scale, scale)

        # Pending line in Add mode
        if mode is Mode.ADD and ctrl.first_selected is not None and ctrl.cursor is not None:
            start = hyperbolic_to_normalized(self.graph.point(ctrl.first_selected))
            self._draw_polyline(
                painter, viewport,
                np.array([[start.x, start.y], [ctrl.cursor.x, ctrl.cursor.y]]),
                config.PENDING_COLOR, line_width
            )

        # Lines
        for line in self.graph.lines:
            if ctrl.is_being_dragged(line.start) and ctrl.is_being_dragged(line.end):
                continue
            color = config.SELECTED_COLOR if line.start in selection and line.end in selection \
                else config.LINE_COLOR
            self._draw_polyline(painter, viewport, arc_points(self.graph.geodesic_arc(line)), color, line_width)

        # Points
        for pid, point in self.graph.points.items():
            if ctrl.is_being_dragged(pid):
                continue
            radius = config.POINT_RADIUS * (2 if pid == ctrl.hovered else 1)
            self._draw_point(painter, viewport, hyperbolic_to_normalized(point), radius, self._point_color(pid))

        # Translate preview
        self._draw_preview(painter, viewport, ctrl.translate_preview().values(),
                           ctrl.preview_segments(), line_width)

    def _point_color(self, pid: PointId) -> str:
        ctrl = self.controller
        mode = ctrl.mode
        if pid in ctrl.selection:
            if mode is Mode.ADD or pid == ctrl.first_selected:
                return config.PENDING_COLOR
            return config.SELECTED_COLOR
        if pid == ctrl.hovered:
            return config.PENDING_COLOR if mode is Mode.ADD else config.HOVER_COLOR
        if pid == ctrl.first_selected:
            return config.PENDING_COLOR
        return config.POINT_COLOR

    def _draw_preview(
        self,
        painter: QPainter,
        viewport: Viewport,
        points: Iterable[HyperbolicPoint],
        segments: Iterable[HyperbolicSegment],
        line_width: float
    ) -> None:
        for point in points:
            self._draw_point(painter, viewport, hyperbolic_to_normalized(point),
                             config.POINT_RADIUS, config.PREVIEW_COLOR)
        for segment in segments:
            self._draw_polyline(painter, viewport, arc_points(geodesic_arc(segment)),
                                config.PREVIEW_COLOR, line_width)

    @staticmethod
    def _draw_point(
        painter: QPainter,
        viewport: Viewport,
        point: NormalizedPoint,
        radius: float,
        color: str
    ) -> None:
        screen = normalized_to_screen(point, viewport)
        r = radius * viewport.scale
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor(color)))
        painter.drawEllipse(QPointF(screen.x, screen.y), r, r)

    @staticmethod
    def _draw_polyline(
        painter: QPainter,
        viewport: Viewport,
        points: np.ndarray,
        color: str,
        width: float
    ) -> None:
        polygon = QPolygonF()
        for x, y in points:
            screen = normalized_to_screen(NormalizedPoint(float(x), float(y)), viewport)
            polygon.append(QPointF(screen.x, screen.y))

        pen = QPen(QColor(color))
        pen.setWidthF(width)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawPolyline(polygon)

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    @staticmethod
    def _screen_point(event) -> ScreenPoint:
        pos = event.position()
        return ScreenPoint(float(pos.x()), float(pos.y()))

    def mouseMoveEvent(self, event) -> None:
        self.controller.pointer_moved(self._screen_point(event), self.viewport())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            if self._release_after_double_click:
                self._release_after_double_click = False
            else:
                self.controller.clicked(self._screen_point(event), self.viewport())
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._release_after_double_click = True
            self.controller.double_clicked(self._screen_point(event), self.viewport())
        super().mouseDoubleClickEvent(event)

    def leaveEvent(self, event) -> None:
        self.controller.pointer_left()
        super().leaveEvent(event)

    def keyPressEvent(self, event) -> None:
        key = QT_KEY_NAMES.get(_key_code(event.key()), event.text())
        if key:
            self.controller.key_pressed(key)
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event) -> None:
        key = QT_KEY_NAMES.get(_key_code(event.key()))
        if key:
            self.controller.key_released(key)
        super().keyReleaseEvent(event)
