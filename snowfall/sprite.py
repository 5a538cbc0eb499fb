import logging
import math

import cv2
import numpy as np
import pygame

# Sprite constants
BASE_SIZE = 20                  # Spoke-to-spoke diameter of the snowflake in pixels
STROKE_WIDTH = 2                # Stroke width of each spoke in pixels
SPOKE_COUNT = 6                 # Number of spokes radiating from the centre
SUBPIXEL_BITS = 4               # Fractional bits used when rasterising spoke end points

# Colors (RGB)
WHITE = (255, 255, 255)
SHADOW_GRAY = (136, 136, 136)

logger = logging.getLogger(__name__)


def blur_sigma(radius):
    """Convert a blur-mask radius in pixels to a Gaussian standard deviation."""
    return 0.57735 * radius + 0.5


def draw_spokes(mask, cx, cy, length):
    """
    Rasterise the six-spoke snowflake shape into a coverage mask.

    Each spoke is an anti-aliased line from the centre outwards at a multiple of 60 degrees.
    End points keep their fractional part so the shape registers identically across passes.

    Args:
        mask (np.ndarray): Single channel uint8 image drawn into in place.
        cx (float): x-coordinate of the shape centre in pixels.
        cy (float): y-coordinate of the shape centre in pixels.
        length (float): Length of each spoke in pixels.
    """
    scale = 1 << SUBPIXEL_BITS
    centre = (round(cx * scale), round(cy * scale))
    for i in range(SPOKE_COUNT):
        angle = math.radians(i * 360 / SPOKE_COUNT)
        end = (round((cx + math.cos(angle) * length) * scale),
               round((cy + math.sin(angle) * length) * scale))
        cv2.line(mask, centre, end, 255, STROKE_WIDTH, cv2.LINE_AA, SUBPIXEL_BITS)


def generate_snowflake_sprite(base_size=BASE_SIZE):
    """
    Build the snowflake sprite: white spokes over a soft gray drop shadow.

    The canvas is padded by a fifth of the base size on every side so the blurred shadow has
    room to fade out. The same spoke shape is drawn twice, once blurred in gray and once sharp
    in white, and the white pass is composited over the shadow.

    Args:
        base_size (int): Diameter of the snowflake in pixels.

    Returns:
        np.ndarray: RGBA image of shape (canvas_size, canvas_size, 4) with straight alpha.
    """
    shadow_margin = base_size // 5
    canvas_size = base_size + shadow_margin * 2
    center = canvas_size / 2
    length = base_size / 2

    # Shadow pass
    shadow_mask = np.zeros((canvas_size, canvas_size), dtype=np.uint8)
    draw_spokes(shadow_mask, center, center, length)
    shadow = cv2.GaussianBlur(shadow_mask.astype(np.float32) / 255, (0, 0), blur_sigma(shadow_margin))

    # Foreground pass
    flake_mask = np.zeros((canvas_size, canvas_size), dtype=np.uint8)
    draw_spokes(flake_mask, center, center, length)
    flake = flake_mask.astype(np.float32) / 255

    # Source-over compositing of the white flake onto the shadow
    alpha = flake + shadow * (1 - flake)
    shadow_weight = shadow * (1 - flake)
    safe_alpha = np.where(alpha > 0, alpha, 1)
    rgb = (np.multiply.outer(flake, WHITE) + np.multiply.outer(shadow_weight, SHADOW_GRAY)) / safe_alpha[..., None]

    sprite = np.zeros((canvas_size, canvas_size, 4), dtype=np.uint8)
    sprite[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    sprite[..., 3] = np.clip(np.rint(alpha * 255), 0, 255).astype(np.uint8)
    logger.debug("Generated %dx%d snowflake sprite", canvas_size, canvas_size)
    return sprite


def sprite_to_surface(rgba):
    """Convert an RGBA sprite array into a per-pixel-alpha pygame surface."""
    height, width = rgba.shape[:2]
    return pygame.image.frombytes(np.ascontiguousarray(rgba).tobytes(), (width, height), "RGBA")
