"""Tests for Ray class."""

import pytest
from ppmtrace.vec3 import Vec3, Point3
from ppmtrace.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.origin == origin

    def test_stores_direction_unnormalized(self):
        direction = Vec3(1, 2, 3)
        ray = Ray(Point3(0, 0, 0), direction)
        assert ray.direction == direction
        assert ray.direction.length_squared() == 14.0

    def test_from_points(self):
        ray = Ray.from_points(Point3(1, 1, 1), Point3(4, 5, 1))
        assert ray.origin == Point3(1, 1, 1)
        assert ray.direction == Vec3(3, 4, 0)

    def test_from_points_passes_through_end(self):
        start = Point3(-2, 0.5, 3)
        end = Point3(7, -1, 0)
        ray = Ray.from_points(start, end)
        assert ray.at(1.0) == end


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.at(0) == origin

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        point = ray.at(5)
        assert (point.x, point.y, point.z) == (5, 0, 0)

    def test_at_negative(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.at(-5).x == -5

    def test_at_uses_direction_magnitude(self):
        ray = Ray(Point3(1, 0, 0), Vec3(0, 2, 0))
        assert ray.at(3) == Point3(1, 6, 0)

    def test_at_does_not_mutate(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 1, 1))
        ray.at(2)
        assert ray.origin == Point3(0, 0, 0)
        assert ray.direction == Vec3(1, 1, 1)


class TestRayRepr:
    """Test Ray string representation."""

    def test_repr(self):
        s = repr(Ray(Point3(1, 2, 3), Vec3(0, 1, 0)))
        assert "Ray" in s
        assert "origin" in s
        assert "direction" in s
