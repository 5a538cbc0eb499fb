import math
from typing import Protocol

import numpy as np
import pygame

from snowfall.sprite import sprite_to_surface


class Canvas(Protocol):
    """Drawing surface the snow field renders onto."""

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def rotate(self, degrees: float, px: float = 0.0, py: float = 0.0) -> None: ...

    def draw_image(self, image, width: float, height: float) -> None: ...

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color, width: int = 1) -> None: ...


def translation(dx, dy):
    """3x3 affine matrix moving points by (dx, dy)."""
    return np.array([[1.0, 0.0, dx],
                     [0.0, 1.0, dy],
                     [0.0, 0.0, 1.0]])


def rotation(degrees):
    """3x3 affine matrix rotating points clockwise on a y-down screen."""
    theta = math.radians(degrees)
    c, s = math.cos(theta), math.sin(theta)
    return np.array([[c, -s, 0.0],
                     [s, c, 0.0],
                     [0.0, 0.0, 1.0]])


class PygameCanvas:
    """
    Canvas backed by a pygame surface, with a save/restore stack of affine transforms.

    Attributes:
        surface (pygame.Surface): Target surface all drawing goes to.
        matrix (np.ndarray): Current 3x3 transform from local to surface coordinates.
    """

    def __init__(self, surface):
        self.surface = surface
        self.matrix = np.identity(3)
        self._stack = []
        self._image_cache = None

    def save(self):
        self._stack.append(self.matrix.copy())

    def restore(self):
        self.matrix = self._stack.pop()

    def translate(self, dx, dy):
        self.matrix = self.matrix @ translation(dx, dy)

    def rotate(self, degrees, px=0.0, py=0.0):
        """Rotate subsequent drawing by the given degrees about the local point (px, py)."""
        self.matrix = self.matrix @ translation(px, py) @ rotation(degrees) @ translation(-px, -py)

    def map_point(self, x, y):
        """Transform a local point to surface coordinates."""
        mx, my, _ = self.matrix @ np.array([x, y, 1.0])
        return float(mx), float(my)

    def _as_surface(self, image):
        # Arrays are converted once; the field hands over the same sprite every frame
        if isinstance(image, pygame.Surface):
            return image
        if self._image_cache is None or self._image_cache[0] is not image:
            self._image_cache = (image, sprite_to_surface(image))
        return self._image_cache[1]

    def draw_image(self, image, width, height):
        """
        Draw an image scaled to a width x height rectangle at the local origin.

        The scaled image is rotated by the current transform's rotation and blitted so that the
        centre of the destination rectangle lands on its transformed position.

        Args:
            image (pygame.Surface | np.ndarray): Source image, a surface or an RGBA array.
            width (float): Destination width in local units.
            height (float): Destination height in local units.
        """
        a, b = self.matrix[0, 0], self.matrix[1, 0]
        scale = math.hypot(a, b)
        angle = math.degrees(math.atan2(b, a))

        size = (max(1, round(width * scale)), max(1, round(height * scale)))
        scaled = pygame.transform.smoothscale(self._as_surface(image), size)
        # pygame rotates counterclockwise for positive angles
        rotated = pygame.transform.rotate(scaled, -angle)

        cx, cy = self.map_point(width / 2, height / 2)
        rect = rotated.get_rect(center=(round(cx), round(cy)))
        self.surface.blit(rotated, rect)

    def draw_line(self, x0, y0, x1, y1, color, width=1):
        start = self.map_point(x0, y0)
        end = self.map_point(x1, y1)
        if width <= 1:
            pygame.draw.aaline(self.surface, color, start, end)
        else:
            pygame.draw.line(self.surface, color, start, end, width)
