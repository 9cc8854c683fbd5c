"""
Static figure export of the graph (matplotlib).

Uses the object-oriented `Figure` API instead of pyplot so exporting from
inside the running Qt application never touches a GUI backend.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from matplotlib.figure import Figure
from matplotlib.patches import Circle

from poincaredisk import config
from poincaredisk.model.arcs import arc_points
from poincaredisk.model.geometry_primitives import PointId
from poincaredisk.model.graph import Graph
from poincaredisk.model.transforms import hyperbolic_to_normalized

logger = logging.getLogger(__name__)


def render_figure(
    graph: Graph,
    selection: Iterable[PointId] = (),
    title: Optional[str] = None
) -> Figure:
    """
    Draw the unit disk with every line and point of the graph.

    Args:
        graph: The graph to draw.
        selection: Handles drawn in the selection color; a line is highlighted
            when both its endpoints are selected.
        title: Figure title. Defaults to a timestamp.

    Returns:
        A matplotlib Figure with a single equal-aspect axes.
    """
    selected = set(selection)

    fig = Figure(figsize=(config.EXPORT_SIZE_INCHES, config.EXPORT_SIZE_INCHES))
    ax = fig.add_subplot(1, 1, 1)
    ax.set_aspect('equal')
    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.axis('off')

    ax.add_patch(Circle((0.0, 0.0), 1.0, facecolor=config.DISK_COLOR, edgecolor='black', lw=1))

    for line in graph.lines:
        coords = arc_points(graph.geodesic_arc(line))
        color = config.SELECTED_COLOR if line.start in selected and line.end in selected else config.LINE_COLOR
        ax.plot(coords[:, 0], coords[:, 1], color=color, lw=1.5)

    for pid, point in graph.points.items():
        projected = hyperbolic_to_normalized(point)
        color = config.SELECTED_COLOR if pid in selected else config.POINT_COLOR
        ax.plot(projected.x, projected.y, 'o', color=color, ms=4)

    if title is None:
        title = f"Poincaré disk exported at {datetime.now().strftime('%d.%m.%Y %H:%M:%S')}"
    ax.set_title(title)

    return fig


def save_figure(graph: Graph, path: str, selection: Iterable[PointId] = (), dpi: int = config.EXPORT_DPI) -> None:
    """Render the graph and write it to `path` (format from the extension)."""
    fig = render_figure(graph, selection=selection)
    fig.savefig(path, dpi=dpi)
    logger.info("Exported %d point(s) and %d line(s) to %s", len(graph), len(graph.lines), path)
