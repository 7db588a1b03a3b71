"""Pixel-addressable output surfaces."""

from __future__ import annotations

import abc
from collections.abc import Iterable
from typing import Any

import numpy as np
import numpy.typing as npt

from matrix_snake.snake import Pixel, Point


class DrawTarget(abc.ABC):
    """A surface that accepts pixel writes and reports its size.

    Pixels outside ``size`` are dropped by the surface rather than
    reported as errors.
    """

    @property
    @abc.abstractmethod
    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` in pixels."""

    @abc.abstractmethod
    def draw_iter(self, pixels: Iterable[Pixel]) -> None:
        """Write each pixel to the surface."""

    def draw_pixel(self, pixel: Pixel) -> None:
        self.draw_iter((pixel,))

    def fill_solid(
        self, x: int, y: int, width: int, height: int, color: Any,
    ) -> None:
        """Fill the axis-aligned rectangle at (x, y) with *color*."""
        self.draw_iter(
            Pixel(Point(x + dx, y + dy), color)
            for dy in range(height)
            for dx in range(width)
        )

    def clear(self, color: Any) -> None:
        """Fill the whole surface with *color*."""
        width, height = self.size
        self.fill_solid(0, 0, width, height, color)


class FrameBuffer(DrawTarget):
    """NumPy-backed in-memory surface.

    Cells are indexed ``cells[y, x]``; with ``channels > 1`` each cell holds
    a color tuple along the last axis. Each value must fit *dtype*; the
    default byte storage suits 8-bit channels, while packed colors such as
    ``0xFF0000`` need a wider type like ``np.uint32``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        channels: int = 1,
        background: Any = 0,
        dtype: npt.DTypeLike = np.uint8,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("FrameBuffer dimensions must be positive.")
        if channels < 1:
            raise ValueError("channels must be at least 1.")
        self.width = width
        self.height = height
        self.channels = channels
        shape = (height, width) if channels == 1 else (height, width, channels)
        self.cells = np.zeros(shape, dtype=dtype)
        self.cells[:] = background

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies on the surface."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Any:
        """Return the color at the given coordinate."""
        value = self.cells[y, x]
        if self.channels == 1:
            return int(value)
        return tuple(value.tolist())

    def draw_iter(self, pixels: Iterable[Pixel]) -> None:
        for (x, y), color in pixels:
            if self.in_bounds(x, y):
                self.cells[y, x] = color

    def fill_solid(
        self, x: int, y: int, width: int, height: int, color: Any,
    ) -> None:
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + width, self.width), min(y + height, self.height)
        if x0 < x1 and y0 < y1:
            self.cells[y0:y1, x0:x1] = color

    def lit_cells(self) -> list[tuple[int, int]]:
        """Return ``(x, y)`` of every cell that is not fully zero."""
        mask = self.cells if self.channels == 1 else self.cells.any(axis=-1)
        ys, xs = np.nonzero(mask)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_text(self, on: str = "#", off: str = ".") -> str:
        """Render the surface as text, one line per pixel row."""
        mask = self.cells if self.channels == 1 else self.cells.any(axis=-1)
        return "\n".join(
            "".join(on if cell else off for cell in row)
            for row in mask.tolist()
        )


class ScaledDisplay(DrawTarget):
    """Draws each logical pixel as a ``scale_x`` by ``scale_y`` block.

    The logical size is the wrapped surface's size divided by the scale,
    rounded down.
    """

    def __init__(self, target: DrawTarget, scale_x: int, scale_y: int) -> None:
        if scale_x < 1 or scale_y < 1:
            raise ValueError("Scale factors must be at least 1.")
        self.target = target
        self.scale_x = scale_x
        self.scale_y = scale_y

    @property
    def size(self) -> tuple[int, int]:
        width, height = self.target.size
        return width // self.scale_x, height // self.scale_y

    def draw_iter(self, pixels: Iterable[Pixel]) -> None:
        for (x, y), color in pixels:
            self.target.fill_solid(
                x * self.scale_x,
                y * self.scale_y,
                self.scale_x,
                self.scale_y,
                color,
            )
