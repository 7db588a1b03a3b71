"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import numpy as np

from matrix_snake.snake import Pixel, Point

if TYPE_CHECKING:
    from matrix_snake.rng import RandomSource
    from matrix_snake.snake import Snake

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 256


class NoFreeCellError(RuntimeError):
    """Raised when every grid cell is covered by a snake."""


class Food:
    """A single food cell that relocates onto free cells on demand.

    Candidates are drawn from one 32-bit random value per attempt: the top
    byte picks the column and the next byte the row. After
    ``max_attempts`` rejected draws the free cells are enumerated instead,
    so placement always terminates.
    """

    def __init__(
        self,
        color: Any,
        rng: RandomSource,
        size_x: int,
        size_y: int,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if not (2 <= size_x <= 256 and 2 <= size_y <= 256):
            raise ValueError("Grid dimensions must be between 2 and 256.")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.size_x = size_x
        self.size_y = size_y
        self.rng = rng
        self.max_attempts = max_attempts
        self.place = Pixel(Point(0, 0), color)

    @property
    def point(self) -> Point:
        return self.place.point

    def get_pixel(self) -> Pixel:
        """Return the current placement."""
        return self.place

    def replace(self, snakes: Iterable[Snake]) -> Point:
        """Move the food to a cell no live snake cell covers.

        Returns the new position. Raises :class:`NoFreeCellError` if the
        snakes cover the whole grid; the old placement is kept in that case.
        """
        snakes = list(snakes)
        for _ in range(self.max_attempts):
            value = self.rng.next_u32()
            candidate = Point(
                ((value >> 24) & 0xFF) % self.size_x,
                ((value >> 16) & 0xFF) % self.size_y,
            )
            if not any(snake.contains(candidate) for snake in snakes):
                return self._commit(candidate)

        logger.debug(
            "No free cell after %d draws, scanning the grid.",
            self.max_attempts,
        )
        free = self.free_cells(snakes)
        if not free:
            logger.warning(
                "No free cell left on the %dx%d grid.", self.size_x, self.size_y,
            )
            raise NoFreeCellError(
                f"No free cell for food on a {self.size_x}x{self.size_y} grid."
            )
        return self._commit(free[self.rng.next_u32() % len(free)])

    def free_cells(self, snakes: Iterable[Snake]) -> list[Point]:
        """Return every cell not covered by a live snake cell, row by row."""
        free = np.ones((self.size_y, self.size_x), dtype=bool)
        for snake in snakes:
            for x, y in snake.body:
                free[y, x] = False
        ys, xs = np.nonzero(free)
        return [Point(x, y) for y, x in zip(ys.tolist(), xs.tolist(), strict=True)]

    def _commit(self, point: Point) -> Point:
        self.place = Pixel(point, self.place.color)
        logger.debug("Food placed at (%d, %d).", point.x, point.y)
        return point

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {"position": list(self.place.point)}
