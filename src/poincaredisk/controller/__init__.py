"""
The CONTROLLER layer turns user intent into graph commands.
It owns the editing mode and selection, never any geometry of its own.
"""
