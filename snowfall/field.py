import logging
import math

import numpy as np

from snowfall.sprite import generate_snowflake_sprite

# Snowflake constants
BASE_SIZE = 20.0                # Drawn size of a scale-1 snowflake in pixels
BASE_SPEED = 2.0                # Minimum fall speed in pixels per frame; speeds span [BASE, 2 * BASE)
ROTATION_SPEED = 1.0            # Rotation speed multiplier in degrees per frame
SNOWFLAKE_COUNT = 100           # Number of snowflakes in the field
SWAY_AMPLITUDE = 15.0           # Horizontal sway of a scale-1 snowflake in pixels
TIME_STEP = 0.05                # Sway clock advance per frame

logger = logging.getLogger(__name__)


class Particle:
    """
    Represents a single snowflake in the field.

    Attributes:
        x (float): Horizontal position of the sprite's top-left corner, in pixels.
        y (float): Vertical position of the sprite's top-left corner, in pixels.
        fall_speed (float): Downward speed in pixels per frame.
        size (float): Drawn width and height in pixels; larger flakes are nearer.
        angle (float): Current rotation in degrees.
        rotation_speed (float): Signed rotation speed in degrees per frame.
        sway_amplitude (float): Maximum horizontal sway offset in pixels.
        sway_phase (float): Phase offset of the sway oscillation in radians.
        elapsed (float): Sway clock, reset whenever the flake respawns.
    """

    def __init__(self, x, y, fall_speed, size, angle, rotation_speed, sway_amplitude, sway_phase):
        self.x = x
        self.y = y
        self.fall_speed = fall_speed
        self.size = size
        self.angle = angle
        self.rotation_speed = rotation_speed
        self.sway_amplitude = sway_amplitude
        self.sway_phase = sway_phase
        self.elapsed = 0.0

    def __repr__(self):
        return f"Particle(x={self.x:.1f}, y={self.y:.1f}, size={self.size:.1f})"

    @classmethod
    def spawn(cls, width, height, rng):
        """
        Create a snowflake with random motion and appearance inside the viewport.

        Args:
            width (float): Viewport width in pixels.
            height (float): Viewport height in pixels.
            rng (np.random.Generator): Source of uniform random numbers.

        Returns:
            Particle: The new snowflake.
        """
        scale = rng.random() + 0.5
        x = width * rng.random()
        y = height * rng.random()
        fall_speed = BASE_SPEED + rng.random() * BASE_SPEED
        angle = 360.0 * rng.random()
        rotation_speed = (rng.random() + 0.5) * ROTATION_SPEED
        if rng.random() < 0.5:
            rotation_speed = -rotation_speed
        sway_phase = rng.random() * 2 * math.pi
        return cls(float(x), float(y), float(fall_speed), float(scale * BASE_SIZE), float(angle),
                   float(rotation_speed), float(scale * SWAY_AMPLITUDE), float(sway_phase))

    def update(self, width, height, rng):
        """
        Advance the snowflake by one frame, respawning it at the top once it leaves the bottom.

        Args:
            width (float): Viewport width in pixels, used to pick the respawn column.
            height (float): Viewport height in pixels.
            rng (np.random.Generator): Source of uniform random numbers.

        Returns:
            bool: True if the snowflake wrapped around this frame.
        """
        self.y += self.fall_speed
        self.angle += self.rotation_speed
        self.elapsed += TIME_STEP

        if self.y > height:
            self.y = 0.0
            self.x = float(width * rng.random())
            self.elapsed = 0.0
            return True
        return False

    def sway_offset(self):
        """Current horizontal sway in pixels, bounded by the sway amplitude."""
        return math.sin(self.elapsed + self.sway_phase) * self.sway_amplitude

    def draw(self, canvas, sprite):
        """
        Draw the snowflake sprite scaled to its size and rotated about its own centre.

        Args:
            canvas (Canvas): Drawing surface with a save/restore transform stack.
            sprite: Image handle understood by the canvas.
        """
        half = self.size / 2
        canvas.save()
        canvas.translate(self.x + self.sway_offset(), self.y)
        canvas.rotate(self.angle, half, half)
        canvas.draw_image(sprite, self.size, self.size)
        canvas.restore()


class SnowField:
    """
    Manages the snowflakes of one viewport and advances them frame by frame.

    The field is a plain simulation object: the host tells it the viewport size with
    on_viewport_resize and calls tick once per frame with a drawing surface.

    Attributes:
        sprite: The shared snowflake image, generated once when the field is built.
        rng (np.random.Generator): Random source for seeding and respawning snowflakes.
        width (float): Width of the current viewport in pixels.
        height (float): Height of the current viewport in pixels.
    """

    def __init__(self, sprite=None, rng=None):
        self.sprite = generate_snowflake_sprite() if sprite is None else sprite
        self.rng = np.random.default_rng() if rng is None else rng
        self.width = 0.0
        self.height = 0.0
        self._particles = []

    @property
    def particles(self):
        """Snowflakes in draw order, largest last."""
        return tuple(self._particles)

    def __len__(self):
        return len(self._particles)

    def on_viewport_resize(self, width, height):
        """
        Replace every snowflake with a fresh random set for the new viewport.

        Negative dimensions are clamped to zero; a zero-sized viewport gives a degenerate field
        whose flakes all sit on its edge.

        Args:
            width (float): New viewport width in pixels.
            height (float): New viewport height in pixels.
        """
        if width < 0 or height < 0:
            logger.warning("Negative viewport %sx%s clamped to zero", width, height)
        self.width = max(0, width)
        self.height = max(0, height)

        self._particles = [Particle.spawn(self.width, self.height, self.rng) for _ in range(SNOWFLAKE_COUNT)]

        # Larger flakes are nearer, so they are drawn last
        self._particles.sort(key=lambda p: p.size, reverse=True)
        logger.debug("Seeded %d snowflakes for %sx%s viewport", len(self._particles), self.width, self.height)

    def tick(self, canvas, width=None, height=None):
        """
        Update and draw every snowflake for a single frame.

        Args:
            canvas (Canvas | None): Drawing surface; when None the field advances without drawing.
            width (float, optional): Viewport width; defaults to the last resize.
            height (float, optional): Viewport height; defaults to the last resize.
        """
        width = self.width if width is None else width
        height = self.height if height is None else height

        for particle in self._particles:
            particle.update(width, height, self.rng)
            if canvas is not None:
                particle.draw(canvas, self.sprite)
