"""
Dynamo entry point for view operations.

Usage in a Dynamo Python node:

    import viewops.entry_dynamo as vd
    session = vd.open_session()
    OUT = vd.run(session, "set_name", UnwrapElement(IN[0]), IN[1])
"""

from .config import Config
from .core.diagnostics import Diagnostics
from .core.errors import InvalidArgument
from .core.geometry import BoundingBox, Line, Point3, Rectangle


def get_current_document():
    """Get current Revit document (works in both IronPython and CPython3).

    Returns:
        Revit Document object

    Raises:
        RuntimeError: If not running in Revit/Dynamo context
    """
    # Try CPython3 approach first (Dynamo 3.x, pythonnet)
    try:
        import clr

        clr.AddReference("RevitServices")
        from RevitServices.Persistence import DocumentManager

        doc = DocumentManager.Instance.CurrentDBDocument
        if doc is not None:
            return doc
    except ImportError:
        pass  # Fall through to IronPython approach

    # Try IronPython / pyRevit approach
    try:
        doc = __revit__.ActiveUIDocument.Document  # noqa: F821
        return doc
    except NameError:
        pass

    raise RuntimeError(
        "Not running in Revit/Dynamo context. "
        "Use get_current_document() in a Dynamo Python node, "
        "or build DocumentSession.for_document(doc) directly."
    )


def open_session(doc=None, cfg=None, diag=None):
    """DocumentSession over doc (current document when omitted)."""
    from .session import DocumentSession

    if cfg is None:
        cfg = Config()
    if diag is None:
        diag = Diagnostics(max_events=cfg.max_diag_events)
    if doc is None:
        doc = get_current_document()
    return DocumentSession.for_document(doc, cfg=cfg, diag=diag)


def _point_converter():
    """Unit-aware Dynamo Point -> Revit XYZ converter, None outside Dynamo."""
    try:
        import clr

        clr.AddReference("RevitNodes")
        from Revit.GeometryConversion import GeometryPrimitiveConverter

        return lambda p: GeometryPrimitiveConverter.ToXyz(p, True)
    except Exception:
        return None


def _to_point3(p, to_xyz):
    # Dynamo geometry is in display units; ToXyz scales it to feet
    if to_xyz is not None:
        p = to_xyz(p)
    return Point3(p.X, p.Y, p.Z)


def from_dynamo_geometry(value, to_xyz=None):
    """Convert Dynamo geometry arguments to viewops geometry.

    BoundingBox (MinPoint/MaxPoint) -> BoundingBox, Rectangle or Polygon
    (4 Points) -> Rectangle, Point -> Point3, other curves -> Line between
    their end points. Lists are converted item by item; anything else
    (elements, strings, numbers, viewops types) is returned unchanged.
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (Point3, Line, Rectangle, BoundingBox)):
        return value
    if isinstance(value, (list, tuple)):
        return [from_dynamo_geometry(v, to_xyz) for v in value]

    if hasattr(value, "MinPoint") and hasattr(value, "MaxPoint"):
        return BoundingBox(_to_point3(value.MinPoint, to_xyz), _to_point3(value.MaxPoint, to_xyz))

    points = getattr(value, "Points", None)
    if points is not None:
        points = list(points)
        if len(points) == 4:
            return Rectangle(*[_to_point3(p, to_xyz) for p in points])
        raise InvalidArgument("polygon extents must have 4 corner points, got {}".format(len(points)))

    if hasattr(value, "StartPoint") and hasattr(value, "EndPoint"):
        return Line(_to_point3(value.StartPoint, to_xyz), _to_point3(value.EndPoint, to_xyz))

    if hasattr(value, "AsVector") and all(hasattr(value, a) for a in ("X", "Y", "Z")):
        return _to_point3(value, to_xyz)

    return value


def _operations():
    from .revit import callouts, elements, placement, view_geometry, views

    ops = {}
    for module in (elements, placement, callouts, view_geometry, views):
        for name in getattr(module, "__all__", ()):
            ops[name] = getattr(module, name)
    return ops


def run(session, operation, *args, **kwargs):
    """Run one named operation and package its result with diagnostics.

    Dynamo geometry arguments are converted with from_dynamo_geometry first.

    Returns:
        dict with "result" (or "error") plus the session's diagnostics
    """
    ops = _operations()
    fn = ops.get(operation)
    if fn is None:
        return {
            "error": "Unknown operation '{}'".format(operation),
            "operations": sorted(ops),
            "diagnostics": session.diag.to_dict(),
        }

    try:
        to_xyz = _point_converter()
        args = [from_dynamo_geometry(a, to_xyz) for a in args]
        kwargs = {k: from_dynamo_geometry(v, to_xyz) for k, v in kwargs.items()}
        result = fn(session, *args, **kwargs)
    except Exception as e:
        session.diag.error(
            phase="entry_dynamo",
            callsite=operation,
            message="operation failed",
            exc=e,
        )
        return {
            "error": "{}: {}".format(type(e).__name__, e),
            "diagnostics": session.diag.to_dict(),
        }

    return {"result": result, "diagnostics": session.diag.to_dict()}
