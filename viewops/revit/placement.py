"""
View placement resolution.

A view's placement is recomputed on every call from (view kind, document
state). The kind selects a strategy through VIEW_KIND_POLICIES:

    never    -> False, no collector is touched
    sheet    -> some sheet lists the view among its placed views
    schedule -> some non-titleblock ScheduleSheetInstance points at the view
"""

from ..core.errors import InvalidArgument
from ..core.view_kinds import (
    PLACEMENT_NEVER,
    PLACEMENT_SCHEDULE,
    PLACEMENT_SHEET,
    policy_for,
    view_kind_name,
)
from .safe_api import elem_id, safe_call, same_id, try_as_schedule, try_as_view

__all__ = ["is_on_sheet", "is_titleblock_schedule"]


def _never_placed(session, view):
    return False


def _placed_on_sheet(session, view):
    for sheet in session.host.iter_sheets():
        for placed_id in sheet.GetAllPlacedViews():
            if same_id(placed_id, view.Id):
                return True
    return False


def _placed_as_schedule(session, view):
    schedule = try_as_schedule(view)
    if schedule is None:
        raise InvalidArgument("Invalid View")

    for ssi in session.host.iter_schedule_sheet_instances():
        if ssi.IsTitleblockRevisionSchedule:
            continue
        if same_id(ssi.ScheduleId, schedule.Id):
            return True
    return False


_PLACEMENT_STRATEGIES = {
    PLACEMENT_NEVER: _never_placed,
    PLACEMENT_SHEET: _placed_on_sheet,
    PLACEMENT_SCHEDULE: _placed_as_schedule,
}


def placement_kind(view):
    """Placement strategy name for a view (UnsupportedViewKind when unknown)."""
    return policy_for(view_kind_name(view)).placement


def is_on_sheet(session, view):
    """True if view is placed on a sheet (directly or as a schedule instance)."""
    v = try_as_view(view)
    if v is None:
        raise InvalidArgument("view must be a View")

    strategy = _PLACEMENT_STRATEGIES[placement_kind(v)]
    return strategy(session, v)


def is_titleblock_schedule(session, view):
    """Soft capability test: True only for titleblock revision schedules.

    Anything that is not schedule-capable answers False instead of raising.
    session may be None; when given, unreadable flags are recorded in its
    diagnostics.
    """
    schedule = try_as_schedule(view)
    if schedule is None:
        return False

    diag = session.diag if session is not None else None
    policy = session.best_effort_policy if session is not None else "default"
    return bool(
        safe_call(
            diag,
            phase="placement",
            callsite="is_titleblock_schedule",
            fn=lambda: schedule.IsTitleblockRevisionSchedule,
            default=False,
            context={"view_id": elem_id(schedule)},
            policy=policy,
        )
    )
