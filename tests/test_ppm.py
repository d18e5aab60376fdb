"""Tests for the binary PPM sink."""

import io
import pytest
import numpy as np
from PIL import Image

from ppmtrace.color import Color
from ppmtrace.ppm import (
    PPMWriter, PPMWriteError, SinkUnavailableError,
    open_sink, ppm_header, write_ppm
)


class TestHeader:
    """Test the P6 header."""

    def test_header_bytes(self):
        assert ppm_header(2, 2) == b"P6\n2 2\n255\n"

    def test_header_large(self):
        assert ppm_header(1920, 1080) == b"P6\n1920 1080\n255\n"

    @pytest.mark.parametrize("w,h", [(0, 1), (1, 0), (-3, 4)])
    def test_invalid_dimensions(self, w, h):
        with pytest.raises(ValueError):
            ppm_header(w, h)


class TestPPMWriter:
    """Test streaming pixels."""

    def test_exact_stream(self):
        sink = io.BytesIO()
        with PPMWriter(sink, 2, 1) as writer:
            writer.write_pixel(Color(1, 2, 3))
            writer.write_pixel(Color(4, 5, 6))
        assert sink.getvalue() == b"P6\n2 1\n255\n\x01\x02\x03\x04\x05\x06"

    def test_header_written_once(self):
        sink = io.BytesIO()
        writer = PPMWriter(sink, 1, 2)
        writer.write_header()
        writer.write_pixel(Color(0, 0, 0))
        writer.write_header()
        writer.write_pixel(Color(0, 0, 0))
        writer.close()
        assert sink.getvalue().count(b"P6") == 1
        assert len(sink.getvalue()) == len(ppm_header(1, 2)) + 6

    def test_write_row(self):
        sink = io.BytesIO()
        with PPMWriter(sink, 3, 1) as writer:
            writer.write_row([Color(255, 0, 0)] * 3)
        assert writer.pixels_written == 3

    def test_too_many_pixels(self):
        writer = PPMWriter(io.BytesIO(), 1, 1)
        writer.write_pixel(Color())
        with pytest.raises(PPMWriteError):
            writer.write_pixel(Color())

    def test_incomplete_image_raises_on_close(self):
        writer = PPMWriter(io.BytesIO(), 2, 2)
        writer.write_pixel(Color())
        with pytest.raises(PPMWriteError):
            writer.close()

    def test_exception_in_block_propagates_without_close_check(self):
        with pytest.raises(RuntimeError):
            with PPMWriter(io.BytesIO(), 2, 2) as writer:
                writer.write_pixel(Color())
                raise RuntimeError("boom")

    def test_decodes_with_pillow(self):
        sink = io.BytesIO()
        colors = [Color(10, 20, 30), Color(40, 50, 60), Color(70, 80, 90),
                  Color(100, 110, 120), Color(130, 140, 150), Color(160, 170, 180)]
        with PPMWriter(sink, 3, 2) as writer:
            writer.write_row(colors)

        sink.seek(0)
        image = Image.open(sink)
        assert image.format == 'PPM'
        assert image.size == (3, 2)
        assert image.getpixel((0, 0)) == (10, 20, 30)
        assert image.getpixel((2, 1)) == (160, 170, 180)


class TestWritePPM:
    """Test writing a whole array."""

    def test_array_roundtrip_via_pillow(self):
        image = np.arange(4 * 3 * 3, dtype=np.uint8).reshape(3, 4, 3)
        sink = io.BytesIO()
        write_ppm(sink, image)

        assert sink.getvalue().startswith(b"P6\n4 3\n255\n")
        sink.seek(0)
        decoded = np.asarray(Image.open(sink))
        np.testing.assert_array_equal(decoded, image)

    def test_rejects_float_image(self):
        with pytest.raises(ValueError):
            write_ppm(io.BytesIO(), np.zeros((2, 2, 3)))

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            write_ppm(io.BytesIO(), np.zeros((2, 2), dtype=np.uint8))


class TestOpenSink:
    """Test opening output files."""

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "out.ppm"
        with open_sink(path) as sink:
            sink.write(b"x")
        assert path.read_bytes() == b"x"

    def test_unwritable_path_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(SinkUnavailableError):
            open_sink(blocker / "out.ppm")

    def test_sink_error_is_os_error(self):
        assert issubclass(SinkUnavailableError, OSError)
