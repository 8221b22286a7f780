"""
Geometry primitives for view operations.

Plain value types used on the package side of the geometry adapter. The host
adapter converts them to and from native XYZ / Line / BoundingBoxXYZ /
CurveLoop objects; nothing here imports Autodesk.
"""

class Point3:
    """3D point (or vector) in feet.

    Example:
        >>> p = Point3(1, 2, 3)
        >>> p + Point3(1, 1, 1)
        Point3(2.000, 3.000, 4.000)
    """

    def __init__(self, x, y, z=0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def as_tuple(self):
        return (self.x, self.y, self.z)

    def __add__(self, other):
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, k):
        return Point3(self.x * k, self.y * k, self.z * k)

    def dot(self, other):
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        return Point3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def is_almost_equal(self, other, tol=1e-9):
        return (
            abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(self.z - other.z) <= tol
        )

    def __eq__(self, other):
        if not isinstance(other, Point3):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"Point3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


def as_point(p):
    """Coerce Point3 / native XYZ / (x, y, z) tuple into a Point3."""
    if isinstance(p, Point3):
        return p
    if hasattr(p, "X") and hasattr(p, "Y"):
        return Point3(p.X, p.Y, getattr(p, "Z", 0.0))
    if len(p) == 2:
        return Point3(p[0], p[1], 0.0)
    return Point3(p[0], p[1], p[2])


class Transform3:
    """Rigid frame: origin plus orthonormal basis (x, y, z) in world space.

    of_point maps frame-local coordinates to world; inverse_of_point maps
    world back into the frame. The inverse relies on the basis being
    orthonormal, which holds for view and crop-box frames.
    """

    def __init__(self, origin=None, basis_x=None, basis_y=None, basis_z=None):
        self.origin = as_point(origin) if origin is not None else Point3(0, 0, 0)
        self.basis_x = as_point(basis_x) if basis_x is not None else Point3(1, 0, 0)
        self.basis_y = as_point(basis_y) if basis_y is not None else Point3(0, 1, 0)
        self.basis_z = as_point(basis_z) if basis_z is not None else Point3(0, 0, 1)

    def of_point(self, p):
        p = as_point(p)
        return (
            self.origin
            + self.basis_x.scaled(p.x)
            + self.basis_y.scaled(p.y)
            + self.basis_z.scaled(p.z)
        )

    def inverse_of_point(self, p):
        d = as_point(p) - self.origin
        return Point3(d.dot(self.basis_x), d.dot(self.basis_y), d.dot(self.basis_z))

    def __repr__(self):
        return (
            f"Transform3(origin={self.origin}, x={self.basis_x}, "
            f"y={self.basis_y}, z={self.basis_z})"
        )


class BoundingBox:
    """Axis-aligned 3D box, optionally expressed in a local frame.

    When transform is set, min_point/max_point are frame-local and
    world_corners() maps all 8 corners through the frame.

    Example:
        >>> BoundingBox(Point3(10, 5, 3), Point3(0, 0, 0)).max_point.as_tuple()
        (10.0, 5.0, 3.0)
    """

    def __init__(self, min_point, max_point, transform=None):
        lo = as_point(min_point)
        hi = as_point(max_point)
        # Normalize so min <= max on every axis
        self.min_point = Point3(min(lo.x, hi.x), min(lo.y, hi.y), min(lo.z, hi.z))
        self.max_point = Point3(max(lo.x, hi.x), max(lo.y, hi.y), max(lo.z, hi.z))
        self.transform = transform

    @classmethod
    def from_points(cls, points, transform=None):
        pts = [as_point(p) for p in points]
        if not pts:
            raise ValueError("BoundingBox.from_points requires at least one point")
        return cls(
            Point3(min(p.x for p in pts), min(p.y for p in pts), min(p.z for p in pts)),
            Point3(max(p.x for p in pts), max(p.y for p in pts), max(p.z for p in pts)),
            transform=transform,
        )

    def corners(self):
        """All 8 corners in the box's own (possibly local) coordinates."""
        mn, mx = self.min_point, self.max_point
        return [
            Point3(mn.x, mn.y, mn.z),
            Point3(mx.x, mn.y, mn.z),
            Point3(mn.x, mx.y, mn.z),
            Point3(mx.x, mx.y, mn.z),
            Point3(mn.x, mn.y, mx.z),
            Point3(mx.x, mn.y, mx.z),
            Point3(mn.x, mx.y, mx.z),
            Point3(mx.x, mx.y, mx.z),
        ]

    def world_corners(self):
        if self.transform is None:
            return self.corners()
        return [self.transform.of_point(p) for p in self.corners()]

    def to_world(self):
        """World-axis bounds of this box (identity if already world)."""
        return BoundingBox.from_points(self.world_corners())

    def is_almost_equal(self, other, tol=1e-9):
        return self.min_point.is_almost_equal(other.min_point, tol) and self.max_point.is_almost_equal(
            other.max_point, tol
        )

    def __repr__(self):
        return f"BoundingBox(min={self.min_point}, max={self.max_point})"


class Line:
    """Bound line segment; the only curve kind crop loops are built from here."""

    def __init__(self, start, end):
        self.start = as_point(start)
        self.end = as_point(end)

    def __repr__(self):
        return f"Line({self.start} -> {self.end})"


class Rectangle:
    """Closed planar quadrilateral given by 4 corner points in order."""

    def __init__(self, p1, p2, p3, p4):
        self.points = [as_point(p1), as_point(p2), as_point(p3), as_point(p4)]

    @classmethod
    def by_corner_points(cls, p1, p2, p3, p4):
        return cls(p1, p2, p3, p4)

    @classmethod
    def by_min_max(cls, min_point, max_point, z=0.0):
        """Axis-aligned rectangle in a plane of constant Z."""
        lo, hi = as_point(min_point), as_point(max_point)
        return cls(
            Point3(lo.x, lo.y, z),
            Point3(hi.x, lo.y, z),
            Point3(hi.x, hi.y, z),
            Point3(lo.x, hi.y, z),
        )

    def curves(self):
        """The 4 edges as a closed loop, in corner order."""
        pts = self.points
        return [Line(pts[i], pts[(i + 1) % 4]) for i in range(4)]

    def bounding_box(self):
        return BoundingBox.from_points(self.points)

    def __repr__(self):
        return "Rectangle({})".format(", ".join(repr(p) for p in self.points))


def curves_bounding_box(curves):
    """World bounds of the end points of a curve sequence."""
    pts = []
    for c in curves:
        pts.append(c.start)
        pts.append(c.end)
    return BoundingBox.from_points(pts)
