"""
View kinds and their placement/callout policies (single source of truth).

Notes
-----
- Must be importable under pytest (outside Revit). Autodesk is only touched
  inside view_kind_name(), and only when it is importable.
- A view's kind is normalized to a stable name string; every policy lookup
  goes through VIEW_KIND_POLICIES instead of per-call switches.
"""

from collections import namedtuple

from .errors import UnsupportedValue, UnsupportedViewKind

# Placement strategies
PLACEMENT_NEVER = "never"
PLACEMENT_SHEET = "sheet"
PLACEMENT_SCHEDULE = "schedule"

ViewKindPolicy = namedtuple("ViewKindPolicy", ["placement", "callout_parent"])

VIEW_KIND_POLICIES = {
    # Browser/internal entries and sheets themselves are never "placed"
    "Undefined": ViewKindPolicy(PLACEMENT_NEVER, False),
    "ProjectBrowser": ViewKindPolicy(PLACEMENT_NEVER, False),
    "SystemBrowser": ViewKindPolicy(PLACEMENT_NEVER, False),
    "Internal": ViewKindPolicy(PLACEMENT_NEVER, False),
    "DrawingSheet": ViewKindPolicy(PLACEMENT_NEVER, False),
    # Graphical views: placed through a sheet's viewports
    "FloorPlan": ViewKindPolicy(PLACEMENT_SHEET, True),
    "EngineeringPlan": ViewKindPolicy(PLACEMENT_SHEET, False),
    "AreaPlan": ViewKindPolicy(PLACEMENT_SHEET, False),
    "CeilingPlan": ViewKindPolicy(PLACEMENT_SHEET, True),
    "Elevation": ViewKindPolicy(PLACEMENT_SHEET, True),
    "Section": ViewKindPolicy(PLACEMENT_SHEET, True),
    "Detail": ViewKindPolicy(PLACEMENT_SHEET, True),
    "ThreeD": ViewKindPolicy(PLACEMENT_SHEET, False),
    "DraftingView": ViewKindPolicy(PLACEMENT_SHEET, False),
    "Legend": ViewKindPolicy(PLACEMENT_SHEET, False),
    "Report": ViewKindPolicy(PLACEMENT_SHEET, False),
    "CostReport": ViewKindPolicy(PLACEMENT_SHEET, False),
    "LoadsReport": ViewKindPolicy(PLACEMENT_SHEET, False),
    "PressureLossReport": ViewKindPolicy(PLACEMENT_SHEET, False),
    "Walkthrough": ViewKindPolicy(PLACEMENT_SHEET, False),
    "Rendering": ViewKindPolicy(PLACEMENT_SHEET, False),
    # Schedules: placed through ScheduleSheetInstance records
    "Schedule": ViewKindPolicy(PLACEMENT_SCHEDULE, False),
    "PanelSchedule": ViewKindPolicy(PLACEMENT_SCHEDULE, False),
    "ColumnSchedule": ViewKindPolicy(PLACEMENT_SCHEDULE, False),
}

VIEW_KINDS = tuple(VIEW_KIND_POLICIES)

# Host enum spellings that differ from ours
_KIND_ALIASES = {
    "PresureLossReport": "PressureLossReport",
    "LoadReport": "LoadsReport",
}

# Sequential codes some Dynamo contexts print for View.ViewType. These are
# not the Revit ViewType enum values (Section is 117 there); real enum members
# are matched in view_kind_name before this map is consulted. Unknown codes
# come back as the numeric string so they stay visible.
_KIND_CODES = {
    1: "FloorPlan",
    2: "CeilingPlan",
    3: "Elevation",
    4: "ThreeD",
    5: "Schedule",
    6: "DrawingSheet",
    7: "ProjectBrowser",
    8: "Report",
    9: "DraftingView",
    10: "Legend",
    11: "Section",
    12: "Detail",
    13: "Rendering",
    14: "Walkthrough",
    15: "SystemBrowser",
    16: "CostReport",
    17: "LoadsReport",
    18: "ColumnSchedule",
    19: "PanelSchedule",
    20: "PressureLossReport",
    21: "AreaPlan",
    22: "EngineeringPlan",
}

# String-keyed options accepted by view operations
VIEW_TEMPLATE_KEY = "View Template"

DUPLICATE_OPTIONS = ("Duplicate", "AsDependent", "WithDetailing")

# "Default" is the documented alias of the host's UseGlobalSetting
WORKSET_VISIBILITIES = ("Visible", "Hidden", "UseGlobalSetting", "Default")
_WORKSET_VISIBILITY_ALIASES = {"Default": "UseGlobalSetting"}


def normalize_kind(value):
    """Normalize an enum / name / numeric code into a kind name string.

    Returns '' for None. Never raises.
    """
    if value is None:
        return ""

    # 1) Name-like values ("FloorPlan", "ViewType.FloorPlan")
    try:
        s = str(value) or ""
        s_clean = s.split(".")[-1]
        if s_clean and not s_clean.lstrip("-").isdigit():
            return _KIND_ALIASES.get(s_clean, s_clean)
    except Exception:
        pass

    # 2) Some enum wrappers expose Name
    try:
        name = getattr(value, "Name", "") or ""
        if name:
            return _KIND_ALIASES.get(name, name)
    except Exception:
        pass

    # 3) Numeric form
    try:
        code = value if isinstance(value, int) else int(str(value))
    except Exception:
        return ""
    return _KIND_CODES.get(code, str(code))


def view_kind_name(view):
    """Kind name of a view, '' when the object has no ViewType.

    In Dynamo, View.ViewType may stringify as a number, so when the Revit
    enum is importable we compare against its members first.
    """
    if view is None:
        return ""

    vt = getattr(view, "ViewType", None)
    if vt is None:
        return ""

    try:
        from Autodesk.Revit.DB import ViewType as _VT

        for name in VIEW_KINDS + tuple(_KIND_ALIASES):
            member = getattr(_VT, name, None)
            if member is not None and vt == member:
                return _KIND_ALIASES.get(name, name)
    except Exception:
        pass

    return normalize_kind(vt)


def policy_for(kind):
    """Policy for a kind name; UnsupportedViewKind for anything unknown."""
    policy = VIEW_KIND_POLICIES.get(kind)
    if policy is None:
        raise UnsupportedViewKind(kind or "<none>")
    return policy


def is_callout_parent_kind(kind):
    policy = VIEW_KIND_POLICIES.get(kind)
    return bool(policy is not None and policy.callout_parent)


def require_view_kind(name):
    """Validate a view-type option string (exact match)."""
    if name not in VIEW_KIND_POLICIES:
        raise UnsupportedValue("view type", name, VIEW_KINDS + (VIEW_TEMPLATE_KEY,))
    return name


def require_duplicate_option(name):
    if name not in DUPLICATE_OPTIONS:
        raise UnsupportedValue("duplicate option", name, DUPLICATE_OPTIONS)
    return name


def require_workset_visibility(name):
    """Validate a visibility option and return the host enum name."""
    if name not in WORKSET_VISIBILITIES:
        raise UnsupportedValue("workset visibility", name, WORKSET_VISIBILITIES)
    return _WORKSET_VISIBILITY_ALIASES.get(name, name)


# Kinds a callout of a given kind can have been drawn in. Plan-type callouts
# keep their parent's kind; detail callouts can sit in any callout parent.
CALLOUT_PARENT_KINDS = tuple(k for k, p in VIEW_KIND_POLICIES.items() if p.callout_parent)

_CALLOUT_PARENT_KINDS_BY_KIND = {
    "FloorPlan": ("FloorPlan",),
    "CeilingPlan": ("CeilingPlan",),
    "Elevation": ("Elevation", "Section", "Detail"),
    "Section": ("Elevation", "Section", "Detail"),
}


def callout_parent_kinds(callout_kind):
    """Parent kinds a callout of callout_kind may belong to."""
    return _CALLOUT_PARENT_KINDS_BY_KIND.get(callout_kind, CALLOUT_PARENT_KINDS)
