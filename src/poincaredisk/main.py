"""
Application Initialization
==========================
This module constructs the Model-View-Controller objects and starts the Qt
Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the data model (Graph).
2. Instantiates the EditorController on top of it.
3. Instantiates the Main Window (View), passing the controller in.
4. Prevents circular import errors by being the orchestrator.
"""
import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

from poincaredisk import __version__, config
from poincaredisk.controller.interaction import EditorController
from poincaredisk.logging_config import install_qt_message_handler, setup_logging
from poincaredisk.model.graph import Graph
from poincaredisk.view.main_window import MainWindow

ORG_ID = "poincaredisk"
APP_ID = "poincare-disk-editor"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="poincaredisk",
        description="Place points and draw geodesics in the Poincaré disk."
    )
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationDisplayName(config.VISIBLE_APP_NAME)
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)
    install_qt_message_handler()

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model and Controller
    graph = Graph()
    controller = EditorController(graph)

    # 4. Initialize the Main Window, passing the controller
    window = MainWindow(controller)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
