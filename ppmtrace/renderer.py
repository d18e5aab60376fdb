"""
Renderer module - the heart of the ray tracer.

Casts one ray per pixel, colors hits with a fixed foreground color and
misses with a sky gradient, and streams the result in scan order.
"""

from __future__ import annotations
import math
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass
from itertools import islice
from typing import BinaryIO, Callable, Deque, Iterator, List, Optional
import numpy as np

from .color import Color, RED, WHITE, SKY_BLUE
from .ray import Ray
from .camera import Camera
from .shapes import Scene
from .ppm import PPMWriter


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 1920
    height: int = 1080
    foreground: Color = None
    horizon: Color = None
    zenith: Color = None
    sky_brightness: float = 2.0
    clamp_scaling: bool = False  # False: scaled channels wrap on overflow
    num_threads: int = 1

    def __post_init__(self):
        if self.width < 2 or self.height < 2:
            raise ValueError(
                f"Image must be at least 2x2 pixels, got {self.width}x{self.height}"
            )
        if not math.isfinite(self.sky_brightness):
            raise ValueError(f"sky_brightness must be finite, got {self.sky_brightness}")
        if self.num_threads < 1:
            raise ValueError(f"num_threads must be at least 1, got {self.num_threads}")
        if self.foreground is None:
            self.foreground = RED
        if self.horizon is None:
            self.horizon = WHITE
        if self.zenith is None:
            self.zenith = SKY_BLUE

    @classmethod
    def from_width(cls, width: int, aspect_ratio: float = 16.0 / 9.0, **kwargs) -> RenderSettings:
        """Derive the image height from the width and aspect ratio."""
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)


class Renderer:
    """Single-ray-per-pixel renderer with optional row parallelism."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0),
                called after each completed row
        """
        self._progress_callback = callback

    def _scale(self, color: Color, factor: float) -> Color:
        if self.settings.clamp_scaling:
            return color.scale_clamped(factor)
        return color.scale(factor)

    def sky_color(self, ray: Ray) -> Color:
        """Blend horizon and zenith by the height of the ray direction.

        Args:
            ray: The ray direction to use for gradient

        Returns:
            Sky color at this direction
        """
        unit_direction = ray.direction.unit()
        t = 0.5 * (unit_direction.y + 1.0)
        blend = self._scale(self.settings.horizon, 1.0 - t) + self._scale(self.settings.zenith, t)
        return self._scale(blend, self.settings.sky_brightness)

    def ray_color(self, ray: Ray, scene: Scene) -> Color:
        """Foreground color on a hit, sky gradient otherwise."""
        if scene.intersects(ray):
            return self.settings.foreground
        return self.sky_color(ray)

    def _render_row(self, m: int, scene: Scene, camera: Camera) -> List[Color]:
        width = self.settings.width
        v = m / (self.settings.height - 1)
        return [
            self.ray_color(camera.get_ray(n / (width - 1), v), scene)
            for n in range(width)
        ]

    def rows(self, scene: Scene, camera: Camera) -> Iterator[List[Color]]:
        """Yield the image rows in emission order.

        The row counter m runs from height down to 1 and v = m / (height - 1),
        so the first row emitted is the top of the viewport.
        """
        height = self.settings.height
        counters = range(height, 0, -1)

        if self.settings.num_threads > 1:
            yield from self._threaded_rows(counters, scene, camera)
        else:
            for done, m in enumerate(counters, start=1):
                row = self._render_row(m, scene, camera)
                self._report(done, height)
                yield row

    def _threaded_rows(self, counters: range, scene: Scene,
                       camera: Camera) -> Iterator[List[Color]]:
        """Compute rows on a thread pool, at most 2 * num_threads ahead.

        Futures are consumed in submission order, so emission order is
        unchanged. If the consumer stops early (for example on a write
        error), rows not yet started are cancelled.
        """
        num_threads = self.settings.num_threads
        remaining = iter(counters)
        pending: Deque[Future] = deque()

        with ThreadPoolExecutor(max_workers=num_threads) as executor:
            try:
                for m in islice(remaining, 2 * num_threads):
                    pending.append(executor.submit(self._render_row, m, scene, camera))

                done = 0
                while pending:
                    row = pending.popleft().result()
                    for m in islice(remaining, 1):
                        pending.append(executor.submit(self._render_row, m, scene, camera))
                    done += 1
                    self._report(done, len(counters))
                    yield row
            finally:
                for future in pending:
                    future.cancel()

    def _report(self, done: int, total: int) -> None:
        if self._progress_callback:
            self._progress_callback(done / total)

    def pixels(self, scene: Scene, camera: Camera) -> Iterator[Color]:
        """Yield every pixel color in scan order."""
        for row in self.rows(scene, camera):
            yield from row

    def render(self, scene: Scene, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Returns:
            uint8 array of shape (height, width, 3); row 0 is the first
            row emitted (the top of the image)
        """
        image = np.zeros((self.settings.height, self.settings.width, 3), dtype=np.uint8)
        for i, row in enumerate(self.rows(scene, camera)):
            image[i] = [c.to_array() for c in row]
        return image

    def render_to(self, sink: BinaryIO, scene: Scene, camera: Camera) -> None:
        """Render straight into a binary P6 stream.

        Any error raised while writing propagates and abandons the frame;
        rows that have not started rendering are dropped.
        """
        with PPMWriter(sink, self.settings.width, self.settings.height) as writer, \
                closing(self.rows(scene, camera)) as rows:
            for row in rows:
                writer.write_row(row)
