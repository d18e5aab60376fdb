"""
Scene description parser.

Supports a JSON or YAML scene description with:
- Camera configuration
- Render settings
- Objects (spheres)

Example scene file:
```yaml
camera:
  aspect_ratio: 1.7777777778
  viewport_height: 2.0
  focal_length: 1.0
  origin: [0, 0, 0]

render:
  width: 1920          # height is derived from the aspect ratio if omitted
  foreground: [255, 0, 0]
  horizon: "#ffffff"
  zenith: {r: 128, g: 180, b: 255}
  sky_brightness: 2.0
  clamp_scaling: false
  threads: 1

objects:
  - type: sphere
    center: [0, 0, -1]
    radius: 0.5
```
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Tuple, Union
import json

from .vec3 import Vec3, Point3
from .color import Color
from .camera import Camera
from .shapes import Sphere, Scene
from .renderer import RenderSettings


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.scene: Scene = Scene()
        self.camera: Camera = None
        self.settings: RenderSettings = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (.json, .yaml or .yml)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        if path.suffix in ('.yaml', '.yml'):
            try:
                import yaml
            except ImportError:
                raise SceneParseError("PyYAML not installed. Install with: pip install pyyaml")
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SceneParseError(f"Invalid YAML in {filepath}: {e}") from e
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping, got {type(data).__name__}")

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        if 'objects' in data:
            self._parse_objects(data['objects'])

        self._parse_camera(self._section(data, 'camera'))
        self._parse_settings(self._section(data, 'render'))

        return self.scene, self.camera, self.settings

    def _section(self, data: Dict[str, Any], key: str) -> Dict[str, Any]:
        """Return a mapping section; a missing or empty (null) one is {}."""
        section = data.get(key)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise SceneParseError(f"'{key}' must be a mapping, got {type(section).__name__}")
        return section

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Vec3(
                    float(data.get('x', 0)),
                    float(data.get('y', 0)),
                    float(data.get('z', 0))
                )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse an 8-bit Color from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Color must have 3 components, got {len(data)}")
                return Color(int(data[0]), int(data[1]), int(data[2]))
            elif isinstance(data, dict):
                return Color(
                    int(data.get('r', 0)),
                    int(data.get('g', 0)),
                    int(data.get('b', 0))
                )
            elif isinstance(data, str):
                # Hex colors
                if data.startswith('#') and len(data) == 7:
                    return Color(int(data[1:3], 16), int(data[3:5], 16), int(data[5:7], 16))
                raise SceneParseError(f"Cannot parse color from string: {data}")
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Color from: {data} ({e})") from e
        raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")

        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object entry must be a mapping, got: {obj_data}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, -1]))
                try:
                    radius = float(obj_data.get('radius', 0.5))
                    self.scene.add(Sphere(center, radius))
                except (TypeError, ValueError) as e:
                    raise SceneParseError(f"Invalid sphere: {e}") from e
            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        origin = self._parse_vec3(camera_data['origin']) if 'origin' in camera_data else Point3(0, 0, 0)
        try:
            self.camera = Camera(
                aspect_ratio=float(camera_data.get('aspect_ratio', 16.0 / 9.0)),
                viewport_height=float(camera_data.get('viewport_height', 2.0)),
                focal_length=float(camera_data.get('focal_length', 1.0)),
                origin=origin
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section. Must run after _parse_camera."""
        kwargs: Dict[str, Any] = {}
        for key in ('foreground', 'horizon', 'zenith'):
            if key in settings_data:
                kwargs[key] = self._parse_color(settings_data[key])

        try:
            if 'sky_brightness' in settings_data:
                kwargs['sky_brightness'] = float(settings_data['sky_brightness'])
            clamp = settings_data.get('clamp_scaling', False)
            if not isinstance(clamp, bool):
                raise SceneParseError(f"clamp_scaling must be true or false, got {clamp!r}")
            kwargs['clamp_scaling'] = clamp
            kwargs['num_threads'] = int(settings_data.get('threads', 1))

            width = int(settings_data.get('width', 1920))
            if 'height' in settings_data:
                self.settings = RenderSettings(width=width, height=int(settings_data['height']), **kwargs)
            else:
                self.settings = RenderSettings.from_width(width, self.camera.aspect_ratio, **kwargs)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to load a scene file."""
    return SceneParser().parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to parse a scene dictionary."""
    return SceneParser().parse_dict(data)
