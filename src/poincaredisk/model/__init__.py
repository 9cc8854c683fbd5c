"""
The MODEL layer contains the hyperbolic geometry engine and the graph.
It has NO knowledge of the GUI (Qt) or of the figure export (matplotlib).
It deals with coordinate frames, geodesic arcs and point/line topology.
"""
