"""
Revit-free building blocks for viewops.

Modules:
- errors: InvalidArgument / UnsupportedViewKind / UnsupportedValue / NotFound
- geometry: Point3, Line, Rectangle, BoundingBox, Transform3
- view_kinds: kind normalization and the per-kind policy table
- diagnostics: Diagnostics recorder
"""

from .diagnostics import Diagnostics
from .errors import InvalidArgument, NotFound, UnsupportedValue, UnsupportedViewKind, ViewOpsError
from .geometry import BoundingBox, Line, Point3, Rectangle, Transform3

__all__ = [
    "Diagnostics",
    "ViewOpsError",
    "InvalidArgument",
    "NotFound",
    "UnsupportedValue",
    "UnsupportedViewKind",
    "BoundingBox",
    "Line",
    "Point3",
    "Rectangle",
    "Transform3",
]
