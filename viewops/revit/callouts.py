"""
Callout creation and reference-view linkage.

Callouts can only be drawn in plan, ceiling plan, elevation, section and
detail views; every other parent kind raises UnsupportedViewKind before a
mutation scope is opened.
"""

from ..core.errors import InvalidArgument, UnsupportedViewKind
from ..core.geometry import BoundingBox
from ..core.view_kinds import callout_parent_kinds, is_callout_parent_kind, view_kind_name
from .safe_api import elem_id, same_id, try_as_view
from .transactions import mutation

__all__ = [
    "create_callout",
    "create_reference_callout",
    "change_referenced_view",
    "get_reference_callouts",
    "callout_parent",
]


def _require_view(view, name="view"):
    v = try_as_view(view)
    if v is None:
        raise InvalidArgument("{} must be a View".format(name))
    return v


def _require_callout_parent(view):
    v = _require_view(view)
    kind = view_kind_name(v)
    if not is_callout_parent_kind(kind):
        raise UnsupportedViewKind(kind or "<none>", operation="callout creation")
    return v


def extent_corners(extent):
    """(min, max) corner points of a Rectangle / BoundingBox extent."""
    if extent is None:
        raise InvalidArgument("extent is required")
    if isinstance(extent, BoundingBox):
        box = extent
    elif hasattr(extent, "bounding_box"):
        box = extent.bounding_box()
    else:
        raise InvalidArgument("extent must be a Rectangle or BoundingBox")
    return box.min_point, box.max_point


def create_callout(session, parent_view, type_element, extent):
    """Create a callout of type_element inside parent_view; returns the new view."""
    parent = _require_callout_parent(parent_view)
    if type_element is None:
        raise InvalidArgument("callout type is required")
    p_min, p_max = extent_corners(extent)

    with mutation(session):
        callout = session.host.create_callout(parent, type_element, p_min, p_max)

    session.diag.info(
        phase="callouts",
        callsite="create_callout",
        message="callout created",
        view_id=elem_id(parent),
        elem_id=elem_id(callout),
    )
    return callout


def create_reference_callout(session, parent_view, reference_view, extent):
    """Create a callout in parent_view that references reference_view.

    Returns parent_view; the reference callout itself is found through
    get_reference_callouts().
    """
    parent = _require_callout_parent(parent_view)
    reference = _require_view(reference_view, "reference view")
    p_min, p_max = extent_corners(extent)

    with mutation(session):
        session.host.create_reference_callout(parent, reference, p_min, p_max)

    return parent_view


def change_referenced_view(session, callout, reference):
    """Repoint a reference callout/section at another view; returns callout."""
    if callout is None:
        raise InvalidArgument("callout is required")
    if reference is None:
        raise InvalidArgument("reference view is required")
    ref = _require_view(reference, "reference view")

    with mutation(session):
        session.host.change_referenced_view(callout, ref)

    return callout


def get_reference_callouts(session, view):
    """Lazily yield the reference callout elements placed in view.

    Recomputed on each call; the generator can be restarted by calling again.
    """
    v = _require_view(view)
    ids = list(v.GetReferenceCallouts())

    def _iter():
        for callout_id in ids:
            element = session.host.get_element(callout_id)
            if element is not None:
                yield element

    return _iter()


def callout_parent(session, callout):
    """Parent view of a callout, or None when it has no resolvable parent.

    The host only records the parent's name, and names are unique per view
    family only (a floor plan and a ceiling plan can both be "Level 1"), so
    candidates are narrowed to the kinds this callout can live in. A name
    that still matches more than one view is reported and resolves to None.
    """
    v = _require_view(callout, "callout")
    parent_name = session.host.callout_parent_name(v)
    if not parent_name:
        return None

    kinds = callout_parent_kinds(view_kind_name(v))
    candidates = []
    for view in session.host.iter_views():
        if view.IsTemplate or view.Name != parent_name or same_id(view.Id, v.Id):
            continue
        if view_kind_name(view) in kinds:
            candidates.append(view)

    if len(candidates) == 1:
        return candidates[0]
    if candidates:
        session.diag.warn(
            phase="callouts",
            callsite="callout_parent",
            message="parent view name is ambiguous",
            elem_id=elem_id(v),
            extra={"parent_name": parent_name, "candidates": [elem_id(c) for c in candidates]},
        )
    return None
