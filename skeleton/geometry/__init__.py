"""Geometry primitives and the segment transform calculator"""

from .primitives import ORIGIN, X_AXIS, Y_AXIS, Z_AXIS, Line3, Plane, Point3, Vector3
from .transform import (
    DegenerateSegmentError,
    SegmentFrame,
    Transform,
    compute_transform,
    segment_frame,
    segment_scale,
    segment_transform,
)

__all__ = [
    "ORIGIN",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
    "Line3",
    "Plane",
    "Point3",
    "Vector3",
    "DegenerateSegmentError",
    "SegmentFrame",
    "Transform",
    "compute_transform",
    "segment_frame",
    "segment_scale",
    "segment_transform",
]
