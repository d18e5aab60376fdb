"""
Camera module for generating primary rays.

An axis-aligned pinhole camera looking down -Z. The viewport is a
rectangle `focal_length` in front of the eye, spanned by the horizontal
and vertical basis vectors.
"""

from __future__ import annotations
from typing import Optional
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """Maps normalized image coordinates to world-space rays."""

    def __init__(
        self,
        aspect_ratio: float = 16.0 / 9.0,
        viewport_height: float = 2.0,
        focal_length: float = 1.0,
        origin: Optional[Point3] = None
    ):
        """Create a camera.

        Args:
            aspect_ratio: Width / Height ratio of the viewport
            viewport_height: Height of the viewport in world units
            focal_length: Distance from the eye to the viewport plane
            origin: Camera position in world space (default: the origin)
        """
        for name, value in (('aspect_ratio', aspect_ratio),
                            ('viewport_height', viewport_height),
                            ('focal_length', focal_length)):
            if not value > 0:
                raise ValueError(f"Camera {name} must be positive, got {value}")

        self.aspect_ratio = float(aspect_ratio)
        self.viewport_height = float(viewport_height)
        self.viewport_width = self.aspect_ratio * self.viewport_height
        self.focal_length = float(focal_length)

        self.origin = origin if origin is not None else Point3(0, 0, 0)
        self.horizontal = Vec3(self.viewport_width, 0, 0)
        self.vertical = Vec3(0, self.viewport_height, 0)
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - Vec3(0, 0, self.focal_length)
        )

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray for the given UV coordinates on the image plane.

        Args:
            u: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            v: Vertical coordinate [0, 1] (0 = bottom, 1 = top)

        Returns:
            A ray from the camera through the viewport point. The
            direction is left unnormalized.
        """
        direction = (
            self.lower_left_corner
            + self.horizontal * u
            + self.vertical * v
            - self.origin
        )
        return Ray(self.origin, direction)

    def __repr__(self) -> str:
        return (f"Camera(origin={self.origin!r}, viewport={self.viewport_width:.4f}x"
                f"{self.viewport_height:.4f}, focal_length={self.focal_length})")
