"""
viewops: view and element operations over a Revit document.

Every operation takes an explicit DocumentSession (host document adapter,
mutation scope, config, diagnostics) and native element/view handles.

Modules:
- config: Config (tolerances, best-effort policy, diagnostics cap)
- session: DocumentSession
- core.view_kinds: view kind names and placement/callout policies
- core.geometry: Point3 / Line / Rectangle / BoundingBox / Transform3
- core.diagnostics: structured diagnostics recorder
- revit.transactions: MutationScope (open-if-needed / close-once)
- revit.elements: element facade
- revit.placement, revit.callouts: view relationship resolution
- revit.view_geometry: outline and crop region
- revit.views: composite view operations
- entry_dynamo: Dynamo entry point
"""

__version__ = "1.0.0"

from .config import Config
from .session import DocumentSession

__all__ = ["Config", "DocumentSession"]
