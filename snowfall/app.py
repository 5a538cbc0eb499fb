import logging

import cv2
import numpy as np
import pygame

from snowfall.canvas import PygameCanvas
from snowfall.field import SnowField
from snowfall.sprite import generate_snowflake_sprite, sprite_to_surface

# Window constants
WIDTH, HEIGHT = 360, 640        # Initial window dimensions in pixels
FPS = 60                        # Target frame rate

# Recording constants
RECORD_VIDEO = False            # Capture every frame into an mp4 file
VIDEO_PATH = 'snowfall.mp4'     # Output path for the captured video

# Colors
NIGHT_SKY = (16, 24, 48)

logger = logging.getLogger(__name__)


def open_video(path, width, height):
    """Open an mp4 writer for frames of the given size."""
    fourcc = cv2.VideoWriter_fourcc(*'mp4v')
    return cv2.VideoWriter(path, fourcc, float(FPS), (width, height))


def capture_frame(screen, out):
    """Capture the current screen frame for video recording."""
    width, height = screen.get_size()
    frame = pygame.image.tobytes(screen, 'RGB')
    frame = np.frombuffer(frame, dtype=np.uint8)
    frame = frame.reshape((height, width, 3))
    frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)
    out.write(frame)


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Snowfall")
    clock = pygame.time.Clock()

    field = SnowField(sprite=sprite_to_surface(generate_snowflake_sprite()))
    field.on_viewport_resize(*screen.get_size())
    logger.info("Snowfall started at %dx%d", *screen.get_size())

    # Video frames must keep the initial size; resizing ends the recording
    out = open_video(VIDEO_PATH, *screen.get_size()) if RECORD_VIDEO else None

    # Main animation loop
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                field.on_viewport_resize(*screen.get_size())
                if out is not None:
                    out.release()
                    out = None
                    logger.info("Window resized, video recording stopped")

        # ---- Drawing ----
        screen.fill(NIGHT_SKY)
        field.tick(PygameCanvas(screen), *screen.get_size())
        pygame.display.flip()

        if out is not None:
            capture_frame(screen, out)

        # Schedule the next frame
        clock.tick(FPS)

    # Clean up and exit
    if out is not None:
        out.release()
        logger.info("Saved video to %s", VIDEO_PATH)
    pygame.quit()


if __name__ == "__main__":
    main()
