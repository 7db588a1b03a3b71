"""Game configuration and display presets."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _as_color(value: Any) -> Any:
    """JSON turns color tuples into lists; turn them back."""
    return tuple(value) if isinstance(value, list) else value


@dataclass(frozen=True)
class GameConfig:
    """Everything needed to build a :class:`~matrix_snake.game.SnakeGame`.

    Grid dimensions are in logical cells; the surface the game draws on
    should measure ``grid_width * scale_x`` by ``grid_height * scale_y``.
    Supports JSON serialization for reproducibility.
    """

    grid_width: int = 8
    grid_height: int = 8
    scale_x: int = 1
    scale_y: int = 1
    snake_colors: tuple[Any, ...] = ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    food_color: Any = (255, 255, 0)
    food_lifetime: int = 10
    player_count: int = 1
    max_size: int = 20
    initial_length: int = 5
    seed: int | None = None

    def __post_init__(self) -> None:
        if not (2 <= self.grid_width <= 256 and 2 <= self.grid_height <= 256):
            raise ValueError("grid_width and grid_height must be between 2 and 256.")
        if self.scale_x < 1 or self.scale_y < 1:
            raise ValueError("scale_x and scale_y must be at least 1.")
        if len(self.snake_colors) != 3:
            raise ValueError("snake_colors must hold exactly 3 colors.")
        if self.food_lifetime < 1:
            raise ValueError("food_lifetime must be at least 1.")
        if not 1 <= self.player_count <= 3:
            raise ValueError("player_count must be between 1 and 3.")
        if self.max_size < 2:
            raise ValueError("max_size must be at least 2.")
        if not 0 < self.initial_length <= self.max_size - 1:
            raise ValueError("initial_length must be between 1 and max_size - 1.")

    @property
    def surface_size(self) -> tuple[int, int]:
        """Pixel size of the surface this configuration renders onto."""
        return self.grid_width * self.scale_x, self.grid_height * self.scale_y

    @property
    def channels(self) -> int:
        """Number of color channels, 1 for monochrome colors."""
        if isinstance(self.food_color, tuple):
            return len(self.food_color)
        return 1

    def with_overrides(self, **overrides: Any) -> GameConfig:
        """Return a copy with the non-``None`` overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values) if values else self

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a JSON object.")
        unknown = sorted(set(raw) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"{path}: unknown config keys: {', '.join(unknown)}.")
        if "snake_colors" in raw:
            raw["snake_colors"] = tuple(_as_color(c) for c in raw["snake_colors"])
        if "food_color" in raw:
            raw["food_color"] = _as_color(raw["food_color"])
        return cls(**raw)


PRESETS: dict[str, GameConfig] = {
    # RGB LED matrix, one display pixel per cell.
    "8x8": GameConfig(
        grid_width=8,
        grid_height=8,
        snake_colors=((255, 0, 0), (0, 255, 0), (0, 0, 255)),
        food_color=(255, 255, 0),
        food_lifetime=10,
        max_size=20,
    ),
    # Monochrome 128x64 OLED, magnified so cells stay visible.
    "128x64": GameConfig(
        grid_width=32,
        grid_height=16,
        scale_x=4,
        scale_y=4,
        snake_colors=(1, 1, 1),
        food_color=1,
        food_lifetime=50,
        max_size=100,
    ),
}
