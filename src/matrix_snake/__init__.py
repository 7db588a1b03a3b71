"""Matrix Snake: grid snake engine for pixel-addressable displays."""

from matrix_snake.config import PRESETS, GameConfig
from matrix_snake.display import DrawTarget, FrameBuffer, ScaledDisplay
from matrix_snake.food import Food, NoFreeCellError
from matrix_snake.game import GameStatus, SnakeGame
from matrix_snake.rng import NumpyRandomSource, RandomSource
from matrix_snake.snake import Direction, Pixel, Point, Snake

__all__ = [
    "PRESETS",
    "Direction",
    "DrawTarget",
    "Food",
    "FrameBuffer",
    "GameConfig",
    "GameStatus",
    "NoFreeCellError",
    "NumpyRandomSource",
    "Pixel",
    "Point",
    "RandomSource",
    "ScaledDisplay",
    "Snake",
    "SnakeGame",
]
