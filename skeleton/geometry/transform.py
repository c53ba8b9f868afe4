"""
Segment transform calculation.

A template authored as a unit segment from the origin along local +X is
placed onto an arbitrary segment by

    Translate(start) * Axes(axis1, -axis2, -axis3) * Scale(length, 1, 1)

where ``axis2`` is the direction of the intersection between the plane
perpendicular to the segment and the horizontal plane through its end point.
"""

from typing import Optional, Union

import numpy as np
from ezdxf.math import Matrix44
from pydantic import BaseModel, ConfigDict

from .primitives import ORIGIN, X_AXIS, Z_AXIS, Plane, Point3, Vector3

# Distance below which callers treat endpoints as equal and skip the edge.
LENGTH_TOLERANCE = 1e-9


class DegenerateSegmentError(ValueError):
    """Raised when a segment has no length."""

    def __init__(self, start: Point3, end: Point3):
        self.start = start
        self.end = end
        super().__init__(
            f"Degenerate segment from ({start.x}, {start.y}, {start.z}) "
            f"to ({end.x}, {end.y}, {end.z})"
        )


class Transform:
    """4x4 homogeneous transform acting on column vectors."""

    def __init__(self, matrix=None):
        if matrix is None:
            matrix = np.identity(4)
        matrix = np.array(matrix, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"Transform matrix must be 4x4, got {matrix.shape}")
        self._matrix = matrix

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translation(cls, offset: Union[Vector3, Point3]) -> "Transform":
        matrix = np.identity(4)
        matrix[:3, 3] = offset.to_array()
        return cls(matrix)

    @classmethod
    def scaling(
        cls,
        sx: float,
        sy: Optional[float] = None,
        sz: Optional[float] = None,
        origin: Point3 = ORIGIN,
    ) -> "Transform":
        """
        Scale about ``origin``.

        A single factor scales uniformly; otherwise each axis is scaled
        independently.
        """
        if sy is None and sz is None:
            sy = sz = sx
        elif sy is None or sz is None:
            raise ValueError("Per-axis scaling needs sx, sy and sz")
        scale = cls(np.diag([sx, sy, sz, 1.0]))
        if origin == ORIGIN:
            return scale
        return cls.translation(origin) * scale * cls.translation(ORIGIN - origin)

    @classmethod
    def axes(
        cls,
        origin: Point3,
        xaxis: Vector3,
        yaxis: Vector3,
        zaxis: Vector3,
    ) -> "Transform":
        """
        Map the world axes onto the given axes placed at ``origin``.

        The axes are normalized; they are expected to be mutually orthogonal.

        Raises:
            ValueError: If any axis has zero length
        """
        matrix = np.identity(4)
        matrix[:3, 0] = xaxis.normalize().to_array()
        matrix[:3, 1] = yaxis.normalize().to_array()
        matrix[:3, 2] = zaxis.normalize().to_array()
        matrix[:3, 3] = origin.to_array()
        return cls(matrix)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def origin(self) -> Point3:
        return Point3.from_iterable(self._matrix[:3, 3])

    @property
    def xaxis(self) -> Vector3:
        return Vector3.from_iterable(self._matrix[:3, 0])

    @property
    def yaxis(self) -> Vector3:
        return Vector3.from_iterable(self._matrix[:3, 1])

    @property
    def zaxis(self) -> Vector3:
        return Vector3.from_iterable(self._matrix[:3, 2])

    def __mul__(self, other: "Transform") -> "Transform":
        # (a * b) applies b first
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(self._matrix @ other._matrix)

    def apply(self, point: Point3) -> Point3:
        """Transform a point."""
        result = self._matrix @ np.append(point.to_array(), 1.0)
        return Point3.from_iterable(result[:3])

    def apply_vector(self, vector: Vector3) -> Vector3:
        """Transform a direction; translation is ignored."""
        return Vector3.from_iterable(self._matrix[:3, :3] @ vector.to_array())

    def inverse(self) -> "Transform":
        return Transform(np.linalg.inv(self._matrix))

    def allclose(self, other: "Transform", rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        return bool(np.allclose(self._matrix, other._matrix, rtol=rtol, atol=atol))

    def to_matrix44(self) -> Matrix44:
        """Convert to an ezdxf Matrix44 (row-vector convention)."""
        return Matrix44(self._matrix.T.flatten().tolist())

    def __repr__(self) -> str:
        rows = ", ".join(str(row.tolist()) for row in self._matrix)
        return f"Transform([{rows}])"


class SegmentFrame(BaseModel):
    """Raw axes chosen for a segment before sign flipping and normalization."""
    model_config = ConfigDict(frozen=True)

    axis1: Vector3
    axis2: Vector3
    axis3: Vector3
    vertical: bool = False


def segment_frame(start: Point3, end: Point3, tolerance: float = 0.0) -> SegmentFrame:
    """
    Choose the axes for the segment from ``start`` to ``end``.

    ``axis1`` runs along the segment. ``axis2`` is the intersection of the
    plane perpendicular to the segment through ``start`` with the horizontal
    plane through ``end``; for vertical segments the planes are parallel and
    ``axis2`` falls back to the world X axis. ``axis3 = axis1 x axis2``.

    Raises:
        DegenerateSegmentError: If the length is not greater than ``tolerance``
    """
    axis1 = start.vector_to(end)
    if axis1.length <= tolerance:
        raise DegenerateSegmentError(start, end)

    plane1 = Plane(point=start, normal=axis1)
    plane2 = Plane(point=Point3(x=0.0, y=0.0, z=end.z), normal=Z_AXIS)
    line = plane1.intersect(plane2)

    vertical = line is None
    axis2 = X_AXIS if vertical else line.direction
    axis3 = axis1.cross(axis2)
    return SegmentFrame(axis1=axis1, axis2=axis2, axis3=axis3, vertical=vertical)


def compute_transform(start: Point3, end: Point3, tolerance: float = 0.0) -> Transform:
    """
    Rotation and translation that place the local X axis along a segment.

    The local Y and Z axes map to ``-axis2`` and ``-axis3`` of
    :func:`segment_frame`. No scaling is included; see
    :func:`segment_transform`.

    Raises:
        DegenerateSegmentError: If the length is not greater than ``tolerance``
    """
    frame = segment_frame(start, end, tolerance)
    rotation = Transform.axes(ORIGIN, frame.axis1, -frame.axis2, -frame.axis3)
    return Transform.translation(start - ORIGIN) * rotation


def segment_scale(start: Point3, end: Point3, tolerance: float = 0.0) -> float:
    """Scale factor along local X: the segment length."""
    length = start.distance_to(end)
    if length <= tolerance:
        raise DegenerateSegmentError(start, end)
    return length


def segment_transform(start: Point3, end: Point3, tolerance: float = 0.0) -> Transform:
    """
    Full placement of a unit template segment onto ``start -> end``.

    Maps ``(0, 0, 0)`` to ``start`` and ``(1, 0, 0)`` to ``end``.
    """
    length = segment_scale(start, end, tolerance)
    return compute_transform(start, end, tolerance) * Transform.scaling(length, 1.0, 1.0)
