"""
Configuration & Global Constants
================================
This module serves as the central registry for tunables and global constants.

Why is this file needed?
------------------------
Abstraction: It prevents magic numbers (pick radii, tolerances, colors)
scattered throughout the model, controller and view layers.

Exports:
    POINT_PICK_THRESHOLD (float): Normalized distance for point hit tests.
    LINE_PICK_TOLERANCE (float): Normalized distance for line hit tests.
    COLLINEAR_EPS (float): Determinant below which an arc is a straight chord.
    KLEIN_RADIUS_LIMIT (float): Saturation radius of the axial (Klein) chart.
"""

VISIBLE_APP_NAME: str = "Poincaré Disk"

# Geometry
COLLINEAR_EPS: float = 1e-10
RADICAND_EPS: float = 1e-12
KLEIN_RADIUS_LIMIT: float = 1.0 - 1e-9
ARC_SAMPLES: int = 64

# Picking (normalized disk units)
POINT_PICK_THRESHOLD: float = 0.03
LINE_PICK_TOLERANCE: float = 0.02

# Drawing (normalized disk units / colors)
POINT_RADIUS: float = 0.01
LINE_WIDTH: float = 0.01

DISK_COLOR: str = "#efefef"
BACKGROUND_COLOR: str = "black"
POINT_COLOR: str = "black"
LINE_COLOR: str = "black"
SELECTED_COLOR: str = "red"
HOVER_COLOR: str = "#666666"
PENDING_COLOR: str = "#00ffff"
PREVIEW_COLOR: str = "green"

# Export
EXPORT_DPI: int = 150
EXPORT_SIZE_INCHES: float = 6.0
