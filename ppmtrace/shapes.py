"""
Geometric shapes for the ray tracer.

Only spheres are supported. A Scene is an ordered collection of them
answering any-hit queries.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional
import math

from .vec3 import Point3, DegenerateVectorError
from .ray import Ray


class Sphere:
    """A sphere defined by center and radius."""

    __slots__ = ('center', 'radius')

    def __init__(self, center: Point3, radius: float):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere, must be >= 0 (0 is a single point)
        """
        radius = float(radius)
        if not radius >= 0:
            raise ValueError(f"Sphere radius must be non-negative, got {radius}")
        self.center = center
        self.radius = radius

    def intersects(self, ray: Ray) -> bool:
        """Test whether the ray meets the sphere at or ahead of its origin.

        Substituting P(t) = O + tD into |P - C|^2 = r^2 gives the quadratic
        at^2 + bt + c = 0 with a = D·D, b = 2 D·(O-C), c = |O-C|^2 - r^2.
        A hit needs two distinct real roots (a grazing double root counts
        as a miss) and a positive far root: sqrt(disc) - b > 0.

        Raises:
            DegenerateVectorError: if the ray direction has zero length
        """
        a = ray.direction.length_squared()
        if a == 0:
            raise DegenerateVectorError(f"Ray direction has zero length: {ray!r}")

        oc = ray.origin - self.center
        b = 2.0 * ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant <= 0.0:
            return False

        return math.sqrt(discriminant) - b > 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return self.center == other.center and self.radius == other.radius

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius})"


class Scene:
    """An ordered list of spheres."""

    def __init__(self, objects: Optional[Iterable[Sphere]] = None):
        self.objects: List[Sphere] = list(objects) if objects else []

    @classmethod
    def single(cls, sphere: Optional[Sphere]) -> Scene:
        """Build a scene holding zero or one sphere."""
        return cls([sphere] if sphere is not None else [])

    def add(self, sphere: Sphere) -> None:
        self.objects.append(sphere)

    def clear(self) -> None:
        self.objects.clear()

    def intersects(self, ray: Ray) -> bool:
        """Return True if the ray hits any object in the scene."""
        return any(obj.intersects(ray) for obj in self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene({self.objects!r})"
