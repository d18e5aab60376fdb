"""
Binary PPM (P6) output.

The stream is a text header "P6\\n<width> <height>\\n255\\n" followed by
width * height RGB byte triples in row-major order, with no padding and
nothing after the last pixel.
"""

from __future__ import annotations
from pathlib import Path
from typing import BinaryIO, Iterable, Union
import numpy as np

from .color import Color


class SinkUnavailableError(OSError):
    """The output stream could not be opened or created."""
    pass


class PPMWriteError(Exception):
    """The pixel stream did not match the dimensions in the header."""
    pass


def ppm_header(width: int, height: int) -> bytes:
    """Return the P6 header for an image of the given size."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    return f"P6\n{width} {height}\n255\n".encode('ascii')


def open_sink(path: Union[str, Path]) -> BinaryIO:
    """Open `path` for binary writing, creating parent directories.

    Raises:
        SinkUnavailableError: if the file cannot be created
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, 'wb')
    except OSError as e:
        raise SinkUnavailableError(f"Cannot open output file {path}: {e}") from e


class PPMWriter:
    """Streams pixels into a binary P6 image.

    The header is written with the first pixel. close() verifies that
    exactly width * height pixels were written.
    """

    def __init__(self, stream: BinaryIO, width: int, height: int):
        self.stream = stream
        self.width = width
        self.height = height
        self._header = ppm_header(width, height)
        self._header_written = False
        self._pixels_written = 0

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @property
    def pixels_written(self) -> int:
        return self._pixels_written

    def write_header(self) -> None:
        if not self._header_written:
            self.stream.write(self._header)
            self._header_written = True

    def write_pixel(self, color: Color) -> None:
        """Append one pixel.

        Raises:
            PPMWriteError: if the image is already complete
        """
        if self._pixels_written >= self.total_pixels:
            raise PPMWriteError(
                f"Too many pixels for a {self.width}x{self.height} image"
            )
        self.write_header()
        color.write(self.stream)
        self._pixels_written += 1

    def write_row(self, row: Iterable[Color]) -> None:
        for color in row:
            self.write_pixel(color)

    def close(self) -> None:
        """Finish the image and flush the stream.

        Raises:
            PPMWriteError: if fewer pixels than the header promises were written
        """
        self.write_header()
        if self._pixels_written != self.total_pixels:
            raise PPMWriteError(
                f"Incomplete image: wrote {self._pixels_written} of "
                f"{self.total_pixels} pixels"
            )
        self.stream.flush()

    def __enter__(self) -> PPMWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # A failed render leaves the image incomplete; only verify on success
        if exc_type is None:
            self.close()


def write_ppm(stream: BinaryIO, image: np.ndarray) -> None:
    """Write an (height, width, 3) uint8 image as P6."""
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 image, got {image.dtype}")

    height, width = image.shape[:2]
    stream.write(ppm_header(width, height))
    stream.write(np.ascontiguousarray(image).tobytes())
    stream.flush()
