"""Tick-based game engine driving up to three snakes and one food cell."""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from matrix_snake.display import DrawTarget, ScaledDisplay
from matrix_snake.food import Food, NoFreeCellError
from matrix_snake.snake import Direction, Point, Snake

if TYPE_CHECKING:
    from matrix_snake.config import GameConfig
    from matrix_snake.rng import RandomSource

logger = logging.getLogger(__name__)

MAX_PLAYERS = 3

# Start cell and heading per player slot. Coordinates are reduced modulo the
# grid size, so the layout fits any board.
_SPAWN_LAYOUT: list[tuple[Point, Direction]] = [
    (Point(0, 0), Direction.RIGHT),
    (Point(0, 7), Direction.RIGHT),
    (Point(31, 14), Direction.LEFT),
]


class GameStatus(enum.Enum):
    """Outcome of a single tick."""

    CONTINUE = "continue"
    END = "end"


class SnakeGame:
    """Step-based multiplayer snake engine.

    All three snake slots are always built; only the first
    ``player_count`` are moved, checked and drawn. Each call to
    :meth:`draw` advances the game by exactly one tick and renders the
    result onto the caller's surface.
    """

    def __init__(
        self,
        grid_width: int,
        grid_height: int,
        scale_x: int,
        scale_y: int,
        rng: RandomSource,
        snake_colors: Sequence[Any],
        food_color: Any,
        food_lifetime: int,
        player_count: int = 1,
        *,
        max_size: int = 20,
        initial_length: int = 5,
    ) -> None:
        if not 1 <= player_count <= MAX_PLAYERS:
            raise ValueError(f"player_count must be between 1 and {MAX_PLAYERS}.")
        if len(snake_colors) != MAX_PLAYERS:
            raise ValueError(f"Exactly {MAX_PLAYERS} snake colors are required.")
        if food_lifetime < 1:
            raise ValueError("food_lifetime must be at least 1.")
        if scale_x < 1 or scale_y < 1:
            raise ValueError("Scale factors must be at least 1.")

        self.grid_width = grid_width
        self.grid_height = grid_height
        self.scale_x = scale_x
        self.scale_y = scale_y
        self.player_count = player_count
        self.food_lifetime = food_lifetime

        self.all_snakes: list[Snake] = [
            Snake(
                color,
                grid_width,
                grid_height,
                start=start,
                direction=direction,
                length=initial_length,
                max_size=max_size,
            )
            for color, (start, direction) in zip(
                snake_colors, _SPAWN_LAYOUT, strict=True,
            )
        ]

        self.food = Food(food_color, rng, grid_width, grid_height)
        self.food.replace(self.snakes)
        self.food_age = 0

        self.tick = 0
        self.status = GameStatus.CONTINUE

    @classmethod
    def from_config(
        cls, config: GameConfig, rng: RandomSource | None = None,
    ) -> SnakeGame:
        """Build a game from a :class:`GameConfig`.

        Without *rng*, a NumPy-backed source seeded from the config is used.
        """
        if rng is None:
            from matrix_snake.rng import NumpyRandomSource

            rng = NumpyRandomSource(config.seed)
        return cls(
            config.grid_width,
            config.grid_height,
            config.scale_x,
            config.scale_y,
            rng,
            config.snake_colors,
            config.food_color,
            config.food_lifetime,
            config.player_count,
            max_size=config.max_size,
            initial_length=config.initial_length,
        )

    @property
    def snakes(self) -> list[Snake]:
        """Return the snakes that take part in the game."""
        return self.all_snakes[: self.player_count]

    def set_direction(self, player_index: int, direction: Direction) -> None:
        """Set the direction a player's snake takes on the next tick."""
        if not 0 <= player_index < self.player_count:
            raise ValueError(
                f"player_index {player_index} out of range "
                f"[0, {self.player_count})."
            )
        self.all_snakes[player_index].set_direction(direction)

    def draw(self, target: DrawTarget) -> GameStatus:
        """Advance the game by one tick and render it onto *target*.

        A self-collision ends the whole game at once: later snakes are not
        moved and nothing is drawn. Only the first snake found on the food
        during a tick grows. Errors raised by *target* propagate. A full
        board raises :class:`NoFreeCellError` and ends the game.
        """
        if self.status is GameStatus.END:
            return self.status

        hit = False
        for index, snake in enumerate(self.snakes):
            snake.make_step()
            if snake.self_collision():
                self._end(index)
                return self.status
            if not hit and snake.contains(self.food.point):
                snake.grow()
                hit = True

        self.food_age += 1
        if self.food_age >= self.food_lifetime or hit:
            try:
                self.food.replace(self.snakes)
            except NoFreeCellError:
                # The board is full; the tick cannot complete.
                self.status = GameStatus.END
                self.tick += 1
                logger.info("Board filled up at tick %d.", self.tick)
                raise
            self.food_age = 0

        self.tick += 1

        display = ScaledDisplay(target, self.scale_x, self.scale_y)
        for snake in self.snakes:
            display.draw_iter(snake)
        display.draw_pixel(self.food.get_pixel())

        return self.status

    def _end(self, player_index: int) -> None:
        """Mark the game as finished."""
        self.status = GameStatus.END
        self.tick += 1
        logger.info(
            "Snake %d ran into itself at tick %d with length %d.",
            player_index,
            self.tick,
            len(self.all_snakes[player_index]),
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "status": self.status.value,
            "food_age": self.food_age,
            "food": self.food.to_dict(),
            "snakes": [s.to_dict() for s in self.snakes],
            "config": {
                "grid_width": self.grid_width,
                "grid_height": self.grid_height,
                "scale_x": self.scale_x,
                "scale_y": self.scale_y,
                "player_count": self.player_count,
                "food_lifetime": self.food_lifetime,
            },
        }
