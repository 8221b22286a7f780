# viewops/revit/safe_api.py

from typing import Any, Callable, Dict, Optional, TypeVar

from ..core.view_kinds import PLACEMENT_SCHEDULE, VIEW_KIND_POLICIES, view_kind_name

T = TypeVar("T")

INVALID_ID_VALUE = -1


def safe_call(
    diag: Any,
    *,
    phase: str,
    callsite: str,
    fn: Callable[[], T],
    default: T,
    context: Optional[Dict[str, Any]] = None,
    policy: str = "default",  # "default" | "raise"
) -> T:
    """
    Execute fn() and handle exceptions in a controlled, observable way.

    policy:
      - "default": record error, return default
      - "raise":   record error, then re-raise
    """
    try:
        return fn()
    except Exception as e:
        ctx = context or {}

        if diag is not None:
            try:
                diag.error(
                    phase=phase,
                    callsite=callsite,
                    message="Exception in safe_call",
                    exc=e,
                    view_id=ctx.get("view_id"),
                    elem_id=ctx.get("elem_id"),
                    extra=ctx,
                )
            except Exception:
                # Diagnostics must never crash the operation
                pass

        if policy == "raise":
            raise

        return default


def id_value(element_id):
    """Integer value of an ElementId-like object (or int). None when unreadable."""
    if element_id is None:
        return None
    if isinstance(element_id, int):
        return element_id
    # Revit 2024+ exposes Value; IntegerValue is kept on older hosts
    for attr in ("IntegerValue", "Value"):
        try:
            return int(getattr(element_id, attr))
        except Exception:
            continue
    return None


def elem_id(element):
    """Integer id of an element, None when unreadable (diagnostics helper)."""
    return id_value(getattr(element, "Id", None))


def is_invalid_id(element_id):
    v = id_value(element_id)
    return v is None or v == INVALID_ID_VALUE


def same_id(a, b):
    va = id_value(a)
    return va is not None and va == id_value(b)


def try_as_view(obj):
    """Capability check: obj when it behaves like a view, else None.

    A view is anything exposing ViewType and an Id; Dynamo wrapper elements
    are unwrapped through InternalElement first.
    """
    if obj is None:
        return None
    inner = getattr(obj, "InternalElement", None)
    if inner is not None:
        obj = inner
    try:
        if getattr(obj, "ViewType", None) is None:
            return None
        if getattr(obj, "Id", None) is None:
            return None
    except Exception:
        return None
    return obj


def try_as_schedule(obj):
    """Capability check: obj when it is a schedule-kind view exposing the
    titleblock flag, else None. Never raises."""
    view = try_as_view(obj)
    if view is None:
        return None
    policy = VIEW_KIND_POLICIES.get(view_kind_name(view))
    if policy is None or policy.placement != PLACEMENT_SCHEDULE:
        return None
    try:
        getattr(view, "IsTitleblockRevisionSchedule")
    except Exception:
        return None
    return view
