"""
View outline and crop region geometry.

Notes on API correctness:
    Revit's View.CropBox is a BoundingBoxXYZ whose Min/Max are expressed in
    the crop box's own frame (CropBox.Transform). Reads map all 8 corners to
    model space before taking bounds; writes map the requested model-space
    box back into that frame, so set_crop_box followed by crop_box returns
    the same box for any view whose axes are aligned with the model axes.
"""

from ..core.errors import InvalidArgument
from ..core.geometry import BoundingBox, Rectangle, curves_bounding_box
from .safe_api import elem_id, try_as_view
from .transactions import mutation
from .view_basis import ViewBasis, make_view_basis

__all__ = ["outline", "crop_box", "set_crop_box", "set_crop_box_by_curves"]


def _require_view(view):
    v = try_as_view(view)
    if v is None:
        raise InvalidArgument("view must be a View")
    return v


def outline(session, view):
    """View outline as a Rectangle at local Z = 0.

    Corners are ordered (min,min) -> (max,min) -> (max,max) -> (min,max).
    """
    v = _require_view(view)
    o = v.Outline
    basis = ViewBasis.plan()

    return Rectangle.by_corner_points(
        basis.uv_to_xyz(o.Min.U, o.Min.V),
        basis.uv_to_xyz(o.Max.U, o.Min.V),
        basis.uv_to_xyz(o.Max.U, o.Max.V),
        basis.uv_to_xyz(o.Min.U, o.Max.V),
    )


def crop_box(session, view):
    """Model-space bounds of the view's crop box."""
    v = _require_view(view)
    native = v.CropBox
    if native is None:
        raise InvalidArgument("View has no crop box")
    return session.host.read_bounding_box(native).to_world()


def _box_in_crop_frame(session, view, box):
    """Express a model-space box in the view's crop frame."""
    frame = make_view_basis(session.host, view, diag=session.diag).as_transform()
    world = box.to_world()
    local_corners = [frame.inverse_of_point(p) for p in world.corners()]
    return BoundingBox.from_points(local_corners, transform=frame)


def set_crop_box(session, view, box):
    """Activate and show the crop region, then set its extents to box.

    All three writes happen inside one mutation scope. Returns view.
    """
    v = _require_view(view)
    if box is None:
        raise InvalidArgument("bounding box is required")

    local_box = _box_in_crop_frame(session, v, box)
    native = session.host.make_bounding_box(local_box)

    with mutation(session):
        v.CropBoxActive = True
        v.CropBoxVisible = True
        v.CropBox = native

    requested = box.to_world()
    extra = {"min": requested.min_point.as_tuple(), "max": requested.max_point.as_tuple()}
    actual = crop_box(session, v)
    if actual.is_almost_equal(requested, session.cfg.geom_tolerance_ft):
        session.diag.debug(
            phase="view_geometry",
            callsite="set_crop_box",
            message="crop box set",
            view_id=elem_id(v),
            extra=extra,
        )
    else:
        # Frames rotated off the model axes widen the stored extents
        extra["actual_min"] = actual.min_point.as_tuple()
        extra["actual_max"] = actual.max_point.as_tuple()
        session.diag.warn(
            phase="view_geometry",
            callsite="set_crop_box",
            message="crop box differs from the requested box",
            view_id=elem_id(v),
            extra=extra,
        )
    return view


def set_crop_box_by_curves(session, view, curves):
    """Set a (possibly non-rectangular) crop shape from curves.

    Curves are appended to one loop in the given order. Gaps and open loops
    are not checked here; the document rejects them when the shape is set.
    Returns view.
    """
    v = _require_view(view)
    if curves is None:
        raise InvalidArgument("curves are required")
    curves = list(curves)
    if not curves:
        raise InvalidArgument("curves must not be empty")

    loop = session.host.make_curve_loop(curves)
    shape_manager = v.GetCropRegionShapeManager()

    with mutation(session):
        v.CropBoxActive = True
        v.CropBoxVisible = True
        shape_manager.SetCropShape(loop)

    session.diag.debug(
        phase="view_geometry",
        callsite="set_crop_box_by_curves",
        message="crop shape set",
        view_id=elem_id(v),
        extra={"curves": len(curves), "extent": repr(curves_bounding_box(curves))},
    )
    return view
