"""
Composite view operations: filters, templates, worksets, duplicate, rename.

Each mutating operation validates its inputs first, then performs all of its
writes inside the session's single mutation scope, and returns the handle it
was given (duplicate returns the new view).
"""

from ..core.errors import InvalidArgument
from ..core.view_kinds import (
    VIEW_TEMPLATE_KEY,
    require_duplicate_option,
    require_view_kind,
    require_workset_visibility,
    view_kind_name,
)
from .safe_api import elem_id, id_value, is_invalid_id, safe_call, try_as_view
from .transactions import mutation

__all__ = [
    "remove_filter",
    "get_view_template",
    "set_view_template",
    "remove_view_template",
    "get_by_type",
    "set_workset_visibility",
    "duplicate",
    "set_name",
]


def _require_view(view, name="view"):
    v = try_as_view(view)
    if v is None:
        raise InvalidArgument("{} must be a View".format(name))
    return v


def _unwrap(element):
    """Native element behind a Dynamo wrapper (or the element itself)."""
    inner = getattr(element, "InternalElement", None)
    return inner if inner is not None else element


def remove_filter(session, view, filters):
    """Remove the given filter elements from view.

    Membership is checked against the view's live filter ids; filters that
    are not applied are skipped. An empty list opens no scope. Returns view.
    """
    v = _require_view(view)
    filters = [_unwrap(f) for f in (filters or []) if f is not None]
    if not filters:
        return view

    applied = set(id_value(fid) for fid in v.GetFilters())

    removed = 0
    with mutation(session):
        for f in filters:
            if id_value(f.Id) in applied:
                v.RemoveFilter(f.Id)
                applied.discard(id_value(f.Id))
                removed += 1

    session.diag.debug(
        phase="views",
        callsite="remove_filter",
        message="filters removed",
        view_id=elem_id(v),
        extra={"requested": len(filters), "removed": removed},
    )
    return view


def get_view_template(session, view):
    """Template applied to view, or None."""
    v = _require_view(view)
    template_id = v.ViewTemplateId
    if is_invalid_id(template_id):
        return None
    return session.host.get_element(template_id)


def set_view_template(session, view, template):
    """Apply template to view; InvalidArgument when it is not valid for view."""
    v = _require_view(view)
    t = _require_view(template, "view template")

    # Checked before the scope is acquired; an ambient scope held by the
    # caller stays open across the check and the write.
    if not v.IsValidViewTemplate(t.Id):
        raise InvalidArgument("Specified View Template is not valid for this View.")

    with mutation(session):
        v.ViewTemplateId = t.Id

    return view


def remove_view_template(session, view):
    """Detach the view's template.

    Best-effort: failures are recorded in session.diag and otherwise
    swallowed (see Config.best_effort_policy). Returns view.
    """
    v = _require_view(view)

    def _clear():
        with mutation(session):
            session.host.clear_view_template(v, session.cfg.template_parameter)
        return True

    safe_call(
        session.diag,
        phase="views",
        callsite="remove_view_template",
        fn=_clear,
        default=False,
        context={"view_id": elem_id(v)},
        policy=session.best_effort_policy,
    )
    return view


def get_by_type(session, view_type):
    """All non-template views of a kind, or all templates for "View Template".

    3D view templates are excluded from the "View Template" result.
    """
    if view_type == VIEW_TEMPLATE_KEY:
        return [
            v
            for v in session.host.iter_views()
            if v.IsTemplate and view_kind_name(v) != "ThreeD"
        ]

    kind = require_view_kind(view_type)
    return [
        v
        for v in session.host.iter_views()
        if not v.IsTemplate and view_kind_name(v) == kind
    ]


def set_workset_visibility(session, view, worksets, visibility):
    """Set view-specific visibility for every workset in one scope. Returns view."""
    v = _require_view(view)
    host_name = require_workset_visibility(visibility)
    worksets = [w for w in (worksets or []) if w is not None]
    if not worksets:
        return view

    value = session.host.workset_visibility_value(host_name)
    with mutation(session):
        for w in worksets:
            ws = getattr(w, "InternalWorkset", None) or w
            v.SetWorksetVisibility(ws.Id, value)

    return view


def duplicate(session, view, name, options):
    """Duplicate view with the given option and name it; returns the new view."""
    v = _require_view(view)
    option = require_duplicate_option(options)
    if name is None or not str(name).strip():
        raise InvalidArgument("name must not be empty")

    option_value = session.host.duplicate_option_value(option)
    with mutation(session):
        new_id = v.Duplicate(option_value)
        new_view = session.host.get_element(new_id)
        new_view.Name = name

    session.diag.info(
        phase="views",
        callsite="duplicate",
        message="view duplicated",
        view_id=elem_id(v),
        elem_id=elem_id(new_view),
        extra={"option": option},
    )
    return new_view


def set_name(session, view, name):
    """Rename view; InvalidArgument for a blank name. Returns view."""
    v = _require_view(view)
    if name is None or not str(name).strip():
        raise InvalidArgument("name must not be empty")

    with mutation(session):
        v.Name = name

    return view
