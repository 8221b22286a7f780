"""
Element facade: type resolution, deletion, visibility, bounds, worksharing.

All functions take the DocumentSession first; elements are native handles.
"""

from ..core.errors import InvalidArgument, NotFound
from .safe_api import elem_id, id_value, is_invalid_id, safe_call, same_id, try_as_view
from .transactions import mutation

__all__ = [
    "element_type",
    "delete",
    "is_visible",
    "bounding_box",
    "worksharing_info",
    "owner_view",
    "phase_demolished",
]


def element_type(session, element):
    """Type element of element (NotFound when the type id does not resolve)."""
    if element is None:
        raise InvalidArgument("element is required")

    type_id = element.GetTypeId()
    if is_invalid_id(type_id):
        raise NotFound("Element {} has no type".format(elem_id(element)))

    type_elem = session.host.get_element(type_id)
    if type_elem is None:
        raise NotFound("Type {} of element {} not found".format(id_value(type_id), elem_id(element)))
    return type_elem


def delete(session, element):
    """Delete element from the document.

    Best-effort: a deletion the document rejects (e.g. the element has
    dependents) returns False and is recorded in session.diag, so callers can
    batch-delete and keep partial success.
    """
    if element is None:
        raise InvalidArgument("element is required")

    def _delete():
        with mutation(session):
            session.host.delete_element(element.Id)
        return True

    return safe_call(
        session.diag,
        phase="elements",
        callsite="delete",
        fn=_delete,
        default=False,
        context={"elem_id": elem_id(element)},
        policy=session.best_effort_policy,
    )


def is_visible(session, element, view):
    """True if element is among the visible elements of its category in view."""
    if element is None:
        raise InvalidArgument("element is required")
    v = try_as_view(view)
    if v is None:
        raise InvalidArgument("view must be a View")

    category = getattr(element, "Category", None)
    if category is None:
        return False

    for visible_id in session.host.iter_visible_element_ids(v, category.Id):
        if same_id(visible_id, element.Id):
            return True
    return False


def bounding_box(session, element, view=None):
    """Element bounds, in view's context when supplied; None when unavailable."""
    if element is None:
        raise InvalidArgument("element is required")

    v = None
    if view is not None:
        v = try_as_view(view)
        if v is None:
            raise InvalidArgument("view must be a View")

    native = element.get_BoundingBox(v)
    if native is None:
        session.diag.debug(
            phase="elements",
            callsite="bounding_box",
            message="element has no bounds in this context",
            view_id=elem_id(v),
            elem_id=elem_id(element),
        )
        return None
    return session.host.read_bounding_box(native)


def worksharing_info(session, element):
    """{'Creator', 'Owner', 'LastChangedBy'} for element. Read-only."""
    if element is None:
        raise InvalidArgument("element is required")
    return dict(session.host.worksharing_tooltip(element.Id))


def owner_view(session, element):
    """View that owns a view-specific element, or None."""
    if element is None:
        raise InvalidArgument("element is required")
    owner_id = getattr(element, "OwnerViewId", None)
    if is_invalid_id(owner_id):
        return None
    return try_as_view(session.host.get_element(owner_id))


def phase_demolished(session, element):
    """Integer id of the phase the element is demolished in (-1 when none)."""
    if element is None:
        raise InvalidArgument("element is required")
    value = id_value(getattr(element, "DemolishedPhaseId", None))
    return -1 if value is None else value
