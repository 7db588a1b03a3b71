"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import Any, NamedTuple


class Point(NamedTuple):
    """A grid coordinate, ``x`` across and ``y`` down."""

    x: int
    y: int


class Pixel(NamedTuple):
    """A point paired with the color it is painted in."""

    point: Point
    color: Any


class Direction(enum.Enum):
    """Movement directions with (dx, dy) values.

    ``NONE`` keeps the head in place.
    """

    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    NONE = (0, 0)


class Snake:
    """A snake stored in a fixed-capacity body buffer.

    ``parts`` always holds exactly ``max_size`` pixels; only the first
    ``len(snake)`` of them are live, head first. The last slot stays free so
    that a step can shift the body back by one before the head moves.
    """

    def __init__(
        self,
        color: Any,
        size_x: int,
        size_y: int,
        *,
        start: Point = Point(0, 0),
        direction: Direction = Direction.NONE,
        length: int = 5,
        max_size: int = 20,
    ) -> None:
        if max_size < 2:
            raise ValueError("max_size must be at least 2.")
        if not 0 < length <= max_size - 1:
            raise ValueError(
                f"Snake length must be between 1 and {max_size - 1}."
            )
        if size_x < 1 or size_y < 1:
            raise ValueError("Grid dimensions must be positive.")
        self.color = color
        self.size_x = size_x
        self.size_y = size_y
        self.max_size = max_size
        start = Point(start[0] % size_x, start[1] % size_y)
        self.parts: list[Pixel] = [Pixel(start, color)] * max_size
        self.length = length
        self.direction = direction

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Pixel]:
        for i in range(self.length):
            yield self.parts[i]

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.parts[0].point

    @property
    def body(self) -> list[Point]:
        """Return the live cells, head first."""
        return [part.point for part in self]

    def set_direction(self, direction: Direction) -> None:
        """Replace the direction used by the next step."""
        self.direction = direction

    def contains(self, point: Point) -> bool:
        """Check whether any live cell sits on *point*."""
        return any(part.point == point for part in self)

    def grow(self) -> None:
        """Extend the snake by one cell, capped at ``max_size - 1``."""
        if self.length < self.max_size - 1:
            self.length += 1

    def make_step(self) -> None:
        """Move the snake one cell in its current direction.

        The body shifts back one slot first, so the old head becomes
        ``parts[1]``. With ``Direction.NONE`` the head stays put and the
        first two live cells end up on the same coordinate.
        """
        for i in range(self.length, 0, -1):
            self.parts[i] = self.parts[i - 1]

        dx, dy = self.direction.value
        x, y = self.parts[0].point
        # Each axis wraps on its own.
        new_head = Point((x + dx) % self.size_x, (y + dy) % self.size_y)
        self.parts[0] = Pixel(new_head, self.color)

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other live cell."""
        head = self.head
        return any(
            self.parts[i].point == head for i in range(1, self.length)
        )

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(p) for p in self.body],
            "direction": self.direction.name.lower(),
            "length": self.length,
            "max_size": self.max_size,
        }
