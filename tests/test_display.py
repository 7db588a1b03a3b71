"""Tests for the display surfaces."""

import numpy as np
import pytest

from matrix_snake.display import DrawTarget, FrameBuffer, ScaledDisplay
from matrix_snake.snake import Pixel, Point


class _RecordingTarget(DrawTarget):
    """Collects pixel writes without a pixel store."""

    def __init__(self, width: int, height: int) -> None:
        self._size = (width, height)
        self.pixels: list[Pixel] = []

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def draw_iter(self, pixels):
        self.pixels.extend(pixels)


class TestFrameBufferInit:
    def test_monochrome(self):
        fb = FrameBuffer(8, 4)
        assert fb.size == (8, 4)
        assert fb.cells.shape == (4, 8)
        assert np.all(fb.cells == 0)

    def test_rgb(self):
        fb = FrameBuffer(8, 4, channels=3, background=(1, 2, 3))
        assert fb.cells.shape == (4, 8, 3)
        assert fb.get(7, 3) == (1, 2, 3)

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError, match="positive"):
            FrameBuffer(0, 4)

    def test_invalid_channels(self):
        with pytest.raises(ValueError, match="channels"):
            FrameBuffer(4, 4, channels=0)

    def test_wide_dtype_holds_packed_colors(self):
        fb = FrameBuffer(4, 4, dtype=np.uint32)
        fb.draw_pixel(Pixel(Point(1, 1), 0xFF0000))
        fb.fill_solid(2, 2, 2, 2, 0x00FF00)
        assert fb.cells.dtype == np.uint32
        assert fb.get(1, 1) == 0xFF0000
        assert fb.get(3, 3) == 0x00FF00


class TestFrameBufferDrawing:
    def test_draw_iter(self):
        fb = FrameBuffer(4, 4)
        fb.draw_iter([Pixel(Point(1, 2), 5), Pixel(Point(3, 0), 7)])
        assert fb.get(1, 2) == 5
        assert fb.get(3, 0) == 7
        assert fb.cells[2, 1] == 5

    def test_out_of_bounds_pixels_are_clipped(self):
        fb = FrameBuffer(4, 4)
        fb.draw_iter([Pixel(Point(4, 0), 1), Pixel(Point(-1, 2), 1)])
        assert fb.lit_cells() == []

    def test_fill_solid(self):
        fb = FrameBuffer(6, 6)
        fb.fill_solid(1, 2, 3, 2, 9)
        assert len(fb.lit_cells()) == 6
        assert fb.get(1, 2) == 9
        assert fb.get(3, 3) == 9
        assert fb.get(4, 3) == 0

    def test_fill_solid_clipped(self):
        fb = FrameBuffer(4, 4)
        fb.fill_solid(3, 3, 5, 5, 1)
        assert fb.lit_cells() == [(3, 3)]

    def test_clear(self):
        fb = FrameBuffer(3, 3, channels=3)
        fb.clear((4, 5, 6))
        assert fb.get(0, 0) == (4, 5, 6)
        assert fb.get(2, 2) == (4, 5, 6)

    def test_to_text(self):
        fb = FrameBuffer(3, 2)
        fb.draw_pixel(Pixel(Point(1, 0), 1))
        assert fb.to_text() == ".#.\n..."
        assert fb.to_text(on="O", off=" ") == " O \n   "

    def test_to_text_rgb(self):
        fb = FrameBuffer(2, 1, channels=3)
        fb.draw_pixel(Pixel(Point(0, 0), (0, 0, 9)))
        assert fb.to_text() == "#."


class TestDrawTargetDefaults:
    def test_fill_solid_emits_block(self):
        target = _RecordingTarget(8, 8)
        target.fill_solid(2, 3, 2, 2, "c")
        assert sorted(p.point for p in target.pixels) == [
            (2, 3), (2, 4), (3, 3), (3, 4),
        ]

    def test_clear_covers_surface(self):
        target = _RecordingTarget(3, 2)
        target.clear(0)
        assert len(target.pixels) == 6


class TestScaledDisplay:
    def test_logical_size(self):
        scaled = ScaledDisplay(FrameBuffer(128, 64), 3, 3)
        assert scaled.size == (42, 21)

    def test_logical_size_per_axis(self):
        scaled = ScaledDisplay(FrameBuffer(128, 64), 4, 8)
        assert scaled.size == (32, 8)

    def test_invalid_scale(self):
        with pytest.raises(ValueError, match="Scale"):
            ScaledDisplay(FrameBuffer(8, 8), 0, 1)

    def test_pixel_becomes_block(self):
        fb = FrameBuffer(12, 12)
        scaled = ScaledDisplay(fb, 3, 2)
        scaled.draw_pixel(Pixel(Point(1, 2), 4))
        lit = fb.lit_cells()
        assert len(lit) == 6
        assert set(lit) == {(x, y) for x in range(3, 6) for y in range(4, 6)}
        assert fb.get(3, 4) == 4

    def test_unit_scale_is_identity(self):
        fb = FrameBuffer(4, 4)
        ScaledDisplay(fb, 1, 1).draw_iter([Pixel(Point(2, 3), 1)])
        assert fb.lit_cells() == [(2, 3)]

    def test_works_over_plain_draw_target(self):
        target = _RecordingTarget(8, 8)
        ScaledDisplay(target, 2, 2).draw_pixel(Pixel(Point(1, 1), "c"))
        assert sorted(p.point for p in target.pixels) == [
            (2, 2), (2, 3), (3, 2), (3, 3),
        ]
        assert {p.color for p in target.pixels} == {"c"}

    def test_nested_scaling(self):
        fb = FrameBuffer(8, 8)
        inner = ScaledDisplay(ScaledDisplay(fb, 2, 2), 2, 2)
        assert inner.size == (2, 2)
        inner.draw_pixel(Pixel(Point(1, 1), 1))
        assert len(fb.lit_cells()) == 16
        assert fb.get(4, 4) == 1

    def test_surface_errors_propagate(self):
        class _Broken(_RecordingTarget):
            def draw_iter(self, pixels):
                raise OSError("bus error")

        with pytest.raises(OSError, match="bus error"):
            ScaledDisplay(_Broken(4, 4), 1, 1).draw_pixel(Pixel(Point(0, 0), 1))
