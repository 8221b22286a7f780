"""
Revit-specific view and element operations.

Modules:
- host: RevitHost document/geometry adapter
- transactions: MutationScope
- elements: element facade
- placement: is_on_sheet / is_titleblock_schedule
- callouts: callout creation and reference linkage
- view_basis: view coordinate system (O, R, U, F)
- view_geometry: outline and crop region
- views: filters, templates, worksets, duplicate, rename
"""

from .host import RevitHost
from .transactions import MutationScope

__all__ = ["RevitHost", "MutationScope"]
