"""
The VIEW layer draws the disk (Qt canvas, matplotlib export) and forwards
input events to the controller.
"""
