"""Falling, rotating, swaying snowflakes drawn over any rectangular viewport."""

from snowfall.canvas import Canvas, PygameCanvas
from snowfall.field import SNOWFLAKE_COUNT, Particle, SnowField
from snowfall.sprite import generate_snowflake_sprite, sprite_to_surface

__version__ = "0.1.0"

__all__ = [
    "Canvas",
    "Particle",
    "PygameCanvas",
    "SNOWFLAKE_COUNT",
    "SnowField",
    "generate_snowflake_sprite",
    "sprite_to_surface",
]
