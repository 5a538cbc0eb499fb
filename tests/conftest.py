import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pytest


class RecordingCanvas:
    """Canvas double that records every call made on it."""

    def __init__(self):
        self.calls = []

    def save(self):
        self.calls.append(("save",))

    def restore(self):
        self.calls.append(("restore",))

    def translate(self, dx, dy):
        self.calls.append(("translate", dx, dy))

    def rotate(self, degrees, px=0.0, py=0.0):
        self.calls.append(("rotate", degrees, px, py))

    def draw_image(self, image, width, height):
        self.calls.append(("draw_image", image, width, height))

    def draw_line(self, x0, y0, x1, y1, color, width=1):
        self.calls.append(("draw_line", x0, y0, x1, y1, color, width))

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def canvas():
    return RecordingCanvas()
