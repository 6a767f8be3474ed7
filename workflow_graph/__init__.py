"""
Workflow Graph Layout Engine

Turns declarative workflow step graphs (tasks, conditions, parallel fan-out,
fork/join regions) into positioned node/edge layouts annotated with live
execution status, ready for a visualization surface.
"""

__version__ = "1.0.0"
