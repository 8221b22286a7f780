"""
View basis extraction for view geometry.

Provides the view coordinate system (O, R, U, F) and the mapping between a
view's 2D parametric (U/V) space and 3D model space.
"""

from ..core.geometry import Point3, Transform3
from .safe_api import elem_id


class ViewBasis:
    """View coordinate system with origin and basis vectors.

    Attributes:
        origin: View origin point (O) in model coordinates
        right: Right vector (R) - view X axis
        up: Up vector (U) - view Y axis
        forward: Forward/view direction vector (F) - view Z axis (into screen)

    Example:
        >>> # Plan view looking down at Z=0
        >>> basis = ViewBasis(
        ...     origin=(0, 0, 0),
        ...     right=(1, 0, 0),
        ...     up=(0, 1, 0),
        ...     forward=(0, 0, -1)
        ... )
        >>> basis.uv_to_xyz(5, 10).as_tuple()
        (5.0, 10.0, 0.0)
    """

    def __init__(self, origin, right, up, forward):
        self.origin = tuple(origin)
        self.right = tuple(right)
        self.up = tuple(up)
        self.forward = tuple(forward)

    @classmethod
    def plan(cls, origin=(0.0, 0.0, 0.0)):
        """Basis of a plan looking down -Z (also the UV plane of view outlines)."""
        return cls(origin, (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, -1.0))

    @classmethod
    def from_transform(cls, frame):
        """Basis from a crop-box frame (BasisZ points toward the viewer)."""
        z = frame.basis_z
        return cls(
            frame.origin.as_tuple(),
            frame.basis_x.as_tuple(),
            frame.basis_y.as_tuple(),
            (-z.x, -z.y, -z.z),
        )

    def as_transform(self):
        """Crop-box style frame: local X=right, Y=up, Z=toward the viewer."""
        f = self.forward
        return Transform3(
            origin=self.origin,
            basis_x=self.right,
            basis_y=self.up,
            basis_z=(-f[0], -f[1], -f[2]),
        )

    def uv_to_xyz(self, u, v, w=0.0):
        """Project view-local (u, v, w) back into model space.

        w=0 places the point on the view plane through the origin.

        Example:
            >>> basis = ViewBasis((0,0,0), (1,0,0), (0,0,1), (0,1,0))
            >>> basis.uv_to_xyz(2, 3).as_tuple()
            (2.0, 0.0, 3.0)
        """
        o, r, up, f = self.origin, self.right, self.up, self.forward
        return Point3(
            o[0] + u * r[0] + v * up[0] + w * f[0],
            o[1] + u * r[1] + v * up[1] + w * f[1],
            o[2] + u * r[2] + v * up[2] + w * f[2],
        )

    def __repr__(self):
        return f"ViewBasis(origin={self.origin}, right={self.right}, up={self.up}, forward={self.forward})"


def make_view_basis(host, view, diag=None):
    """Extract the view basis, preferring the crop box frame.

    Order:
        1) view.CropBox.Transform (the frame crop extents are expressed in)
        2) Origin / RightDirection / UpDirection / ViewDirection
        3) plan identity, with an ERROR diagnostic
    """
    view_id = elem_id(view)

    try:
        crop = getattr(view, "CropBox", None)
        frame = host.read_transform(getattr(crop, "Transform", None)) if crop is not None else None
        if frame is not None:
            return ViewBasis.from_transform(frame)
    except Exception as e:
        if diag is not None:
            diag.warn(
                phase="view_basis",
                callsite="make_view_basis",
                message="Could not read crop box transform; using view directions",
                exc=e,
                view_id=view_id,
            )

    try:
        origin = host.from_point(view.Origin)
        right = host.from_point(view.RightDirection)
        up = host.from_point(view.UpDirection)
        try:
            vd = host.from_point(view.ViewDirection)
        except Exception:
            vd = right.cross(up)
        return ViewBasis(origin.as_tuple(), right.as_tuple(), up.as_tuple(), (-vd.x, -vd.y, -vd.z))
    except Exception as e:
        if diag is not None:
            diag.error(
                phase="view_basis",
                callsite="make_view_basis",
                message="make_view_basis failed; falling back to plan basis",
                exc=e,
                view_id=view_id,
            )

    return ViewBasis.plan()
