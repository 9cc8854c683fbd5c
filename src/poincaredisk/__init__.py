"""Interactive graph editor for the Poincaré disk model of the hyperbolic plane."""

__version__ = "0.1.0"
