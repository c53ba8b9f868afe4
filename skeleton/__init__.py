"""Skeleton: replace group edges with 3D polyline copies of a unit template"""

from .geometry.transform import DegenerateSegmentError, Transform, compute_transform, segment_transform

__version__ = "1.0.0"

__all__ = ["DegenerateSegmentError", "Transform", "compute_transform", "segment_transform"]
