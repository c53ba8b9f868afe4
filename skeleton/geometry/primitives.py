"""3D points, vectors and planes used by the transform calculator."""

import math
from typing import Iterable, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict


class Vector3(BaseModel):
    """3D displacement vector."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3":
        x, y, z = (float(v) for v in values)
        return cls(x=x, y=y, z=z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(x=self.x * scalar, y=self.y * scalar, z=self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(x=-self.x, y=-self.y, z=-self.z)

    @property
    def length(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            x=self.y * other.z - self.z * other.y,
            y=self.z * other.x - self.x * other.z,
            z=self.x * other.y - self.y * other.x,
        )

    def normalize(self) -> "Vector3":
        """Return the unit vector with the same direction.

        Raises:
            ValueError: If the vector has zero length
        """
        length = self.length
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector3(x=self.x / length, y=self.y / length, z=self.z / length)

    def reverse(self) -> "Vector3":
        return -self

    def is_parallel(self, other: "Vector3", tolerance: float = 1e-12) -> bool:
        """True when both vectors lie on the same line (either sense)."""
        scale = self.length * other.length
        if scale == 0.0:
            return False
        return self.cross(other).length <= tolerance * scale

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


class Point3(BaseModel):
    """3D point in model units."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Point3":
        x, y, z = (float(v) for v in values)
        return cls(x=x, y=y, z=z)

    def __add__(self, other: Vector3) -> "Point3":
        # Point + Vector = Point
        if isinstance(other, Vector3):
            return Point3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        # Point - Point = Vector, Point - Vector = Point
        if isinstance(other, Point3):
            return Vector3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)
        return NotImplemented

    def vector_to(self, other: "Point3") -> Vector3:
        """Vector from this point to ``other``."""
        return other - self

    def distance_to(self, other: "Point3") -> float:
        return (other - self).length

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


ORIGIN = Point3()
X_AXIS = Vector3(x=1.0)
Y_AXIS = Vector3(y=1.0)
Z_AXIS = Vector3(z=1.0)


class Line3(BaseModel):
    """Infinite line given by a point and a direction."""
    model_config = ConfigDict(frozen=True)

    point: Point3
    direction: Vector3


class Plane(BaseModel):
    """Plane through ``point`` perpendicular to ``normal``."""
    model_config = ConfigDict(frozen=True)

    point: Point3
    normal: Vector3

    @property
    def offset(self) -> float:
        """Signed distance term ``h`` of the plane equation ``n . x = h``."""
        return self.normal.dot(self.point - ORIGIN)

    def intersect(self, other: "Plane", tolerance: float = 1e-12) -> Optional[Line3]:
        """
        Intersect two planes.

        The direction of the resulting line is ``normalize(n1 x n2)`` where
        ``n1`` is this plane's normal.

        Returns:
            The intersection line, or None when the planes are parallel
        """
        n1 = self.normal
        n2 = other.normal
        direction = n1.cross(n2)
        denominator = direction.dot(direction)
        if denominator <= (tolerance * n1.length * n2.length) ** 2:
            return None

        # p = (h1 (n2 x u) + h2 (u x n1)) / |u|^2 lies on both planes
        h1 = self.offset
        h2 = other.offset
        offset = (n2.cross(direction) * h1 + direction.cross(n1) * h2) * (1.0 / denominator)
        return Line3(point=ORIGIN + offset, direction=direction.normalize())
