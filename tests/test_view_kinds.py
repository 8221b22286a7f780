import pytest

from viewops.core.errors import UnsupportedValue, UnsupportedViewKind
from viewops.core.view_kinds import (
    PLACEMENT_NEVER,
    PLACEMENT_SCHEDULE,
    PLACEMENT_SHEET,
    VIEW_KIND_POLICIES,
    callout_parent_kinds,
    is_callout_parent_kind,
    normalize_kind,
    policy_for,
    require_duplicate_option,
    require_view_kind,
    require_workset_visibility,
    view_kind_name,
)


class _Enumish:
    def __init__(self, text, name=""):
        self._text = text
        self.Name = name

    def __str__(self):
        return self._text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("FloorPlan", "FloorPlan"),
        ("ViewType.Section", "Section"),
        (1, "FloorPlan"),
        ("4", "ThreeD"),
        (214, "214"),
        (0, "0"),
        ("PresureLossReport", "PressureLossReport"),
        ("LoadReport", "LoadsReport"),
        (None, ""),
        (999, "999"),
    ],
)
def test_normalize_kind(raw, expected):
    assert normalize_kind(raw) == expected


def test_normalize_kind_uses_enum_name_when_str_is_numeric():
    assert normalize_kind(_Enumish("11", name="Section")) == "Section"


def test_view_kind_name_without_view_type():
    assert view_kind_name(object()) == ""
    assert view_kind_name(None) == ""


def test_every_kind_has_exactly_one_placement():
    placements = {PLACEMENT_NEVER, PLACEMENT_SHEET, PLACEMENT_SCHEDULE}
    for kind, policy in VIEW_KIND_POLICIES.items():
        assert policy.placement in placements, kind


def test_placement_groups():
    assert policy_for("DrawingSheet").placement == PLACEMENT_NEVER
    assert policy_for("Internal").placement == PLACEMENT_NEVER
    assert policy_for("ThreeD").placement == PLACEMENT_SHEET
    assert policy_for("PanelSchedule").placement == PLACEMENT_SCHEDULE


def test_policy_for_unknown_kind_raises():
    with pytest.raises(UnsupportedViewKind) as ei:
        policy_for("Hologram")
    assert ei.value.kind == "Hologram"


def test_callout_parent_kinds():
    allowed = sorted(k for k in VIEW_KIND_POLICIES if is_callout_parent_kind(k))
    assert allowed == ["CeilingPlan", "Detail", "Elevation", "FloorPlan", "Section"]
    assert not is_callout_parent_kind("Hologram")


def test_callout_parent_kinds_by_callout_kind():
    assert callout_parent_kinds("CeilingPlan") == ("CeilingPlan",)
    assert "FloorPlan" not in callout_parent_kinds("Section")
    assert sorted(callout_parent_kinds("Detail")) == ["CeilingPlan", "Detail", "Elevation", "FloorPlan", "Section"]
    assert callout_parent_kinds("") == callout_parent_kinds("Detail")


def test_require_view_kind_is_exact():
    assert require_view_kind("Legend") == "Legend"
    with pytest.raises(UnsupportedValue) as ei:
        require_view_kind("legend")
    assert ei.value.option == "view type"
    assert "View Template" in ei.value.allowed


def test_require_duplicate_option():
    assert require_duplicate_option("AsDependent") == "AsDependent"
    with pytest.raises(UnsupportedValue):
        require_duplicate_option("Copy")


def test_workset_visibility_default_alias():
    assert require_workset_visibility("Default") == "UseGlobalSetting"
    assert require_workset_visibility("Hidden") == "Hidden"
    with pytest.raises(UnsupportedValue):
        require_workset_visibility("Invisible")
