# tests/fakes.py
"""
Duck-typed stand-ins for a Revit document, its views and the host adapter.

FakeHost subclasses RevitHost and overrides only the methods that need
Autodesk, so the adapter's pure geometry conversions are exercised as-is.
Writes to fake views outside an open mutation raise, like Revit does.
"""

from viewops.core.geometry import Point3
from viewops.revit.host import RevitHost


class FakeDocumentError(Exception):
    """Raised where Revit would throw (modification outside transaction,
    rejected deletion, open crop loop)."""


class FakeId:
    def __init__(self, v):
        self.IntegerValue = int(v)

    def __eq__(self, other):
        return isinstance(other, FakeId) and other.IntegerValue == self.IntegerValue

    def __hash__(self):
        return hash(self.IntegerValue)

    def __repr__(self):
        return f"FakeId({self.IntegerValue})"


INVALID = FakeId(-1)


class FakeXYZ:
    def __init__(self, x, y, z):
        self.X, self.Y, self.Z = float(x), float(y), float(z)


class FakeTransform:
    def __init__(self, origin, bx, by, bz):
        self.Origin = FakeXYZ(*origin)
        self.BasisX = FakeXYZ(*bx)
        self.BasisY = FakeXYZ(*by)
        self.BasisZ = FakeXYZ(*bz)


PLAN_FRAME = ((0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1))
# Looking north: right = +X, up = +Z, toward viewer = -Y
NORTH_ELEVATION_FRAME = ((0, 0, 0), (1, 0, 0), (0, 0, 1), (0, -1, 0))


class FakeBoundingBoxXYZ:
    def __init__(self, mn, mx, transform=None):
        self.Min = mn
        self.Max = mx
        self.Transform = transform


class FakeUV:
    def __init__(self, u, v):
        self.U, self.V = float(u), float(v)


class FakeOutline:
    def __init__(self, umin, vmin, umax, vmax):
        self.Min = FakeUV(umin, vmin)
        self.Max = FakeUV(umax, vmax)


class FakeCategory:
    def __init__(self, cat_id, name="Walls"):
        self.Id = FakeId(cat_id)
        self.Name = name


class FakeCurveLoop:
    def __init__(self, curves):
        self.curves = list(curves)

    def is_closed(self, tol=1e-9):
        n = len(self.curves)
        for i in range(n):
            if not self.curves[i].end.is_almost_equal(self.curves[(i + 1) % n].start, tol):
                return False
        return True


class FakeElement:
    def __init__(self, host, eid, category=None, type_id=-1, bbox=None, view_bboxes=None,
                 owner_view_id=-1, demolished_phase_id=-1):
        self._host = host
        self.Id = FakeId(eid)
        self.Category = category
        self._type_id = FakeId(type_id)
        self._bbox = bbox
        self._view_bboxes = dict(view_bboxes or {})
        self.OwnerViewId = FakeId(owner_view_id)
        self.DemolishedPhaseId = FakeId(demolished_phase_id)

    def GetTypeId(self):
        return self._type_id

    def get_BoundingBox(self, view):
        if view is None:
            return self._bbox
        return self._view_bboxes.get(view.Id.IntegerValue)


class _FakeShapeManager:
    def __init__(self, view):
        self._view = view

    def SetCropShape(self, loop):
        self._view._host.require_open("SetCropShape")
        if not loop.curves or not loop.is_closed():
            raise FakeDocumentError("curve loop is not closed")
        frame = self._view._host.read_transform(self._view._crop.Transform)
        pts = []
        for c in loop.curves:
            pts.append(frame.inverse_of_point(c.start))
            pts.append(frame.inverse_of_point(c.end))
        self._view._crop = FakeBoundingBoxXYZ(
            FakeXYZ(min(p.x for p in pts), min(p.y for p in pts), min(p.z for p in pts)),
            FakeXYZ(max(p.x for p in pts), max(p.y for p in pts), max(p.z for p in pts)),
            self._view._crop.Transform,
        )
        self._view.crop_shape = loop


class FakeView(FakeElement):
    def __init__(self, host, eid, view_type, name="View", is_template=False, template_id=-1,
                 frame=PLAN_FRAME, outline=(0, 0, 1, 1), valid_template_kinds=None, **kw):
        super().__init__(host, eid, **kw)
        self.ViewType = view_type
        self.IsTemplate = is_template
        self._name = name
        self._template_id = FakeId(template_id)
        self._crop_active = False
        self._crop_visible = False
        self._crop = FakeBoundingBoxXYZ(FakeXYZ(0, 0, 0), FakeXYZ(1, 1, 1), FakeTransform(*frame))
        self.Outline = FakeOutline(*outline)
        self.filter_ids = []
        self.workset_visibility = {}
        self.reference_callout_ids = []
        self.valid_template_kinds = valid_template_kinds
        self.crop_shape = None
        self.parent_name = None
        self.referenced_view_id = None
        self.fail_template_clear = False

    # --- writable properties guarded by the open mutation

    @property
    def Name(self):
        return self._name

    @Name.setter
    def Name(self, value):
        self._host.require_open("Name")
        self._name = value

    @property
    def ViewTemplateId(self):
        return self._template_id

    @ViewTemplateId.setter
    def ViewTemplateId(self, value):
        self._host.require_open("ViewTemplateId")
        self._template_id = value

    @property
    def CropBoxActive(self):
        return self._crop_active

    @CropBoxActive.setter
    def CropBoxActive(self, value):
        self._host.require_open("CropBoxActive")
        self._crop_active = bool(value)

    @property
    def CropBoxVisible(self):
        return self._crop_visible

    @CropBoxVisible.setter
    def CropBoxVisible(self, value):
        self._host.require_open("CropBoxVisible")
        self._crop_visible = bool(value)

    @property
    def CropBox(self):
        return self._crop

    @CropBox.setter
    def CropBox(self, value):
        self._host.require_open("CropBox")
        self._crop = value

    # --- methods

    def GetCropRegionShapeManager(self):
        return _FakeShapeManager(self)

    def GetFilters(self):
        return list(self.filter_ids)

    def RemoveFilter(self, filter_id):
        self._host.require_open("RemoveFilter")
        self.filter_ids.remove(filter_id)

    def SetWorksetVisibility(self, workset_id, visibility):
        self._host.require_open("SetWorksetVisibility")
        self.workset_visibility[workset_id.IntegerValue] = visibility

    def IsValidViewTemplate(self, template_id):
        template = self._host.get_element(template_id)
        if template is None or not template.IsTemplate:
            return False
        kinds = self.valid_template_kinds or (self.ViewType,)
        return template.ViewType in kinds

    def Duplicate(self, option):
        self._host.require_open("Duplicate")
        dup = self._host.add_view(self.ViewType, name=self._name + " Copy")
        dup.duplicated_with = option
        return dup.Id

    def GetReferenceCallouts(self):
        return list(self.reference_callout_ids)


class FakeScheduleView(FakeView):
    def __init__(self, host, eid, view_type="Schedule", is_titleblock=False, **kw):
        super().__init__(host, eid, view_type, **kw)
        self.IsTitleblockRevisionSchedule = is_titleblock


class FakeSheet(FakeView):
    def __init__(self, host, eid, placed=(), **kw):
        super().__init__(host, eid, "DrawingSheet", **kw)
        self.placed_ids = [FakeId(v) for v in placed]

    def GetAllPlacedViews(self):
        return set(self.placed_ids)


class FakeScheduleSheetInstance:
    def __init__(self, schedule_id, is_titleblock=False):
        self.ScheduleId = FakeId(schedule_id)
        self.IsTitleblockRevisionSchedule = is_titleblock


class FakeWorkset:
    def __init__(self, wid, name="Workset1"):
        self.Id = FakeId(wid)
        self.Name = name


class FakeHost(RevitHost):
    """In-memory document + adapter."""

    def __init__(self):
        super().__init__(doc=self)
        self.elements = {}
        self.schedule_instances = []
        self.visible = {}  # view id -> set of element ids
        self.protected_ids = set()
        self.tooltips = {}
        self._next_id = 1000

        self.is_open = False
        self.begin_count = 0
        self.end_count = 0
        self.abandon_count = 0
        self.sheet_queries = 0
        self.schedule_queries = 0

    # --- building the fake document

    def _new_id(self):
        self._next_id += 1
        return self._next_id

    def add(self, element):
        self.elements[element.Id.IntegerValue] = element
        return element

    def add_view(self, view_type, eid=None, **kw):
        return self.add(FakeView(self, eid or self._new_id(), view_type, **kw))

    def add_schedule(self, eid=None, view_type="Schedule", **kw):
        return self.add(FakeScheduleView(self, eid or self._new_id(), view_type=view_type, **kw))

    def add_sheet(self, placed=(), eid=None, **kw):
        return self.add(FakeSheet(self, eid or self._new_id(), placed=placed, **kw))

    def add_element(self, eid=None, **kw):
        return self.add(FakeElement(self, eid or self._new_id(), **kw))

    def require_open(self, what):
        if not self.is_open:
            raise FakeDocumentError(f"Modification outside transaction: {what}")

    # --- adapter protocol

    def get_element(self, element_id):
        if element_id is None:
            return None
        return self.elements.get(getattr(element_id, "IntegerValue", element_id))

    def invalid_element_id(self):
        return INVALID

    def iter_views(self):
        for e in list(self.elements.values()):
            if isinstance(e, FakeView):
                yield e

    def iter_sheets(self):
        self.sheet_queries += 1
        for e in list(self.elements.values()):
            if isinstance(e, FakeSheet):
                yield e

    def iter_schedule_sheet_instances(self):
        self.schedule_queries += 1
        for ssi in self.schedule_instances:
            yield ssi

    def iter_visible_element_ids(self, view, category_id):
        for eid in sorted(self.visible.get(view.Id.IntegerValue, ())):
            e = self.elements.get(eid)
            if e is not None and e.Category is not None and e.Category.Id == category_id:
                yield e.Id

    def delete_element(self, element_id):
        self.require_open("Delete")
        if element_id.IntegerValue in self.protected_ids:
            raise FakeDocumentError("element has dependents")
        del self.elements[element_id.IntegerValue]
        return [element_id]

    def worksharing_tooltip(self, element_id):
        return self.tooltips[element_id.IntegerValue]

    def create_callout(self, parent_view, type_element, p_min, p_max):
        self.require_open("CreateCallout")
        callout = self.add_view(getattr(type_element, "view_kind", "Detail"), name="Callout")
        callout.parent_name = parent_view.Name
        callout.callout_extent = (p_min, p_max)
        return callout

    def create_reference_callout(self, parent_view, reference_view, p_min, p_max):
        self.require_open("CreateReferenceCallout")
        ref = self.add_element()
        ref.referenced_view_id = reference_view.Id
        ref.callout_extent = (p_min, p_max)
        parent_view.reference_callout_ids.append(ref.Id)

    def change_referenced_view(self, callout, reference_view):
        self.require_open("ChangeReferencedView")
        callout.referenced_view_id = reference_view.Id

    def callout_parent_name(self, callout):
        return getattr(callout, "parent_name", None)

    def clear_view_template(self, view, parameter_name):
        self.require_open("clear_view_template")
        if view.fail_template_clear:
            raise FakeDocumentError(f"parameter {parameter_name} is read-only")
        view.ViewTemplateId = self.invalid_element_id()

    def duplicate_option_value(self, name):
        return "ViewDuplicateOption." + name

    def workset_visibility_value(self, name):
        return "WorksetVisibility." + name

    def begin_mutation(self):
        # EnsureInTransaction joins an already open transaction
        self.begin_count += 1
        self.is_open = True

    def end_mutation(self):
        if not self.is_open:
            raise FakeDocumentError("no open transaction")
        self.end_count += 1
        self.is_open = False

    def abandon_mutation(self):
        self.abandon_count += 1
        self.is_open = False

    # --- geometry adapter (native side)

    def to_point(self, p):
        return FakeXYZ(p.x, p.y, p.z)

    def make_transform(self, frame):
        return FakeTransform(
            frame.origin.as_tuple(),
            frame.basis_x.as_tuple(),
            frame.basis_y.as_tuple(),
            frame.basis_z.as_tuple(),
        )

    def make_bounding_box(self, box):
        transform = self.make_transform(box.transform) if box.transform is not None else None
        return FakeBoundingBoxXYZ(self.to_point(box.min_point), self.to_point(box.max_point), transform)

    def make_curve_loop(self, curves):
        return FakeCurveLoop(curves)


def xyz_bbox(mn, mx):
    return FakeBoundingBoxXYZ(FakeXYZ(*mn), FakeXYZ(*mx))


def point(x, y, z=0.0):
    return Point3(x, y, z)
