"""
ppmtrace - A minimal Python ray tracer

Casts one ray per pixel through an axis-aligned pinhole camera, tests it
against a scene of spheres and writes the result as a binary PPM (P6):
- Vector math backed by numpy
- 8-bit colors with saturating addition
- Sky gradient background
- JSON/YAML scene descriptions
"""

__version__ = "0.1.0"
__author__ = "ppmtrace Team"

from .vec3 import Vec3, Point3, DegenerateVectorError
from .color import Color, BLACK, WHITE, RED, SKY_BLUE
from .ray import Ray
from .shapes import Sphere, Scene
from .camera import Camera
from .renderer import Renderer, RenderSettings
from .ppm import PPMWriter, PPMWriteError, SinkUnavailableError, open_sink, ppm_header, write_ppm
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
