import os
import sys

import pytest

# Headless Qt for widget rendering tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Allow running the suite from a checkout without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from poincaredisk.model.geometry_primitives import HyperbolicPoint, Viewport
from poincaredisk.model.graph import Graph


@pytest.fixture
def graph() -> Graph:
    return Graph()


@pytest.fixture
def viewport() -> Viewport:
    """A square 200x200 pixel viewport: 100 px per normalized unit."""
    return Viewport(0.0, 0.0, 200.0, 200.0)


@pytest.fixture
def square_graph(graph):
    """A, B, C chained by lines A-B, B-C; D isolated."""
    a = graph.add_point(HyperbolicPoint(-0.5, 0.2))
    b = graph.add_point(HyperbolicPoint(0.3, 0.4))
    c = graph.add_point(HyperbolicPoint(0.6, -0.3))
    d = graph.add_point(HyperbolicPoint(-0.4, -0.6))
    graph.add_line(a, b)
    graph.add_line(b, c)
    return graph, (a, b, c, d)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
