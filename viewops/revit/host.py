"""
Revit document adapter (document handle + geometry adapter).

Notes
-----
- Must be importable under pytest (outside Revit). Do not import Autodesk at
  module import time; Revit-only resolution happens inside methods.
- Tests substitute a fake object exposing the same methods.
- begin_mutation/end_mutation/abandon_mutation are called by MutationScope only.
"""

from ..core.geometry import BoundingBox, Point3, Transform3


class RevitHost(object):
    """Adapter over a native Revit Document."""

    def __init__(self, doc):
        if doc is None:
            raise ValueError("RevitHost requires a Revit Document")
        self.doc = doc
        self._transaction = None

    # ------------------------------------------------------------------
    # Element lookup / collection

    def get_element(self, element_id):
        if element_id is None:
            return None
        return self.doc.GetElement(element_id)

    def invalid_element_id(self):
        from Autodesk.Revit.DB import ElementId

        return ElementId.InvalidElementId

    def _collect(self, cls):
        from Autodesk.Revit.DB import FilteredElementCollector

        return FilteredElementCollector(self.doc).OfClass(cls)

    def iter_views(self):
        from Autodesk.Revit.DB import View

        for v in self._collect(View):
            yield v

    def iter_sheets(self):
        from Autodesk.Revit.DB import ViewSheet

        for s in self._collect(ViewSheet):
            yield s

    def iter_schedule_sheet_instances(self):
        from Autodesk.Revit.DB import ScheduleSheetInstance

        for ssi in self._collect(ScheduleSheetInstance):
            yield ssi

    def iter_visible_element_ids(self, view, category_id):
        """Ids of non-type elements of one category visible in view."""
        from Autodesk.Revit.DB import FilteredElementCollector

        collector = (
            FilteredElementCollector(self.doc, view.Id)
            .OfCategoryId(category_id)
            .WhereElementIsNotElementType()
        )
        for e in collector:
            yield e.Id

    # ------------------------------------------------------------------
    # Writes (callers hold the mutation scope)

    def delete_element(self, element_id):
        return self.doc.Delete(element_id)

    def create_callout(self, parent_view, type_element, p_min, p_max):
        from Autodesk.Revit.DB import ViewSection

        return ViewSection.CreateCallout(
            self.doc, parent_view.Id, type_element.Id, self.to_point(p_min), self.to_point(p_max)
        )

    def create_reference_callout(self, parent_view, reference_view, p_min, p_max):
        from Autodesk.Revit.DB import ViewSection

        ViewSection.CreateReferenceCallout(
            self.doc, parent_view.Id, reference_view.Id, self.to_point(p_min), self.to_point(p_max)
        )

    def change_referenced_view(self, callout, reference_view):
        from Autodesk.Revit.DB import ReferenceableViewUtils

        ReferenceableViewUtils.ChangeReferencedView(self.doc, callout.Id, reference_view.Id)

    def clear_view_template(self, view, parameter_name):
        """Point the view's template parameter at the invalid id."""
        from Autodesk.Revit.DB import BuiltInParameter

        bip = getattr(BuiltInParameter, parameter_name)
        param = view.get_Parameter(bip)
        if param is None:
            raise AttributeError("View has no parameter {}".format(parameter_name))
        param.Set(self.invalid_element_id())

    # ------------------------------------------------------------------
    # Reads that need host utilities

    def worksharing_tooltip(self, element_id):
        from Autodesk.Revit.DB import WorksharingUtils

        info = WorksharingUtils.GetWorksharingTooltipInfo(self.doc, element_id)
        return {
            "Creator": info.Creator,
            "Owner": info.Owner,
            "LastChangedBy": info.LastChangedBy,
        }

    def callout_parent_name(self, callout):
        """Name of the view a callout was drawn in, None when it has none.

        Revit exposes the parent only by name (SECTION_PARENT_VIEW_NAME);
        resolving the name to a view is left to callouts.callout_parent.
        """
        from Autodesk.Revit.DB import BuiltInParameter

        param = callout.get_Parameter(BuiltInParameter.SECTION_PARENT_VIEW_NAME)
        if param is None:
            return None
        return param.AsString() or None

    # ------------------------------------------------------------------
    # Enumerations

    def duplicate_option_value(self, name):
        from Autodesk.Revit.DB import ViewDuplicateOption

        return getattr(ViewDuplicateOption, name)

    def workset_visibility_value(self, name):
        from Autodesk.Revit.DB import WorksetVisibility

        return getattr(WorksetVisibility, name)

    # ------------------------------------------------------------------
    # Mutation context

    def begin_mutation(self):
        """Enter Dynamo's shared transaction, or start a plain Transaction."""
        try:
            from RevitServices.Transactions import TransactionManager
        except ImportError:
            TransactionManager = None

        if TransactionManager is not None:
            TransactionManager.Instance.EnsureInTransaction(self.doc)
            return

        from Autodesk.Revit.DB import Transaction

        self._transaction = Transaction(self.doc, "viewops")
        self._transaction.Start()

    def end_mutation(self):
        if self._transaction is not None:
            t, self._transaction = self._transaction, None
            t.Commit()
            return

        from RevitServices.Transactions import TransactionManager

        TransactionManager.Instance.TransactionTaskDone()

    def abandon_mutation(self):
        """Close the context after a failed body.

        Dynamo's shared transaction is resolved by Dynamo itself. A plain
        Transaction is committed with whatever the body applied so the next
        Start() is not refused; it is rolled back only if the commit fails.
        """
        if self._transaction is None:
            return

        t, self._transaction = self._transaction, None
        try:
            t.Commit()
        except Exception:
            t.RollBack()
            raise

    # ------------------------------------------------------------------
    # Geometry adapter

    def to_point(self, p):
        from Autodesk.Revit.DB import XYZ

        return XYZ(p.x, p.y, p.z)

    def from_point(self, xyz):
        return Point3(xyz.X, xyz.Y, xyz.Z)

    def read_transform(self, t):
        if t is None:
            return None
        return Transform3(
            origin=self.from_point(t.Origin),
            basis_x=self.from_point(t.BasisX),
            basis_y=self.from_point(t.BasisY),
            basis_z=self.from_point(t.BasisZ),
        )

    def make_transform(self, frame):
        from Autodesk.Revit.DB import Transform

        t = Transform.Identity
        t.Origin = self.to_point(frame.origin)
        t.BasisX = self.to_point(frame.basis_x)
        t.BasisY = self.to_point(frame.basis_y)
        t.BasisZ = self.to_point(frame.basis_z)
        return t

    def read_bounding_box(self, bbox):
        if bbox is None:
            return None
        return BoundingBox(
            self.from_point(bbox.Min),
            self.from_point(bbox.Max),
            transform=self.read_transform(getattr(bbox, "Transform", None)),
        )

    def make_bounding_box(self, box):
        from Autodesk.Revit.DB import BoundingBoxXYZ

        native = BoundingBoxXYZ()
        if box.transform is not None:
            native.Transform = self.make_transform(box.transform)
        native.Min = self.to_point(box.min_point)
        native.Max = self.to_point(box.max_point)
        return native

    def make_curve_loop(self, curves):
        """Append curves to one CurveLoop in the given order (no validation)."""
        from Autodesk.Revit.DB import CurveLoop
        from Autodesk.Revit.DB import Line as RevitLine

        loop = CurveLoop()
        for c in curves:
            loop.Append(RevitLine.CreateBound(self.to_point(c.start), self.to_point(c.end)))
        return loop
