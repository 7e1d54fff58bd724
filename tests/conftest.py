from __future__ import annotations

from concurrent.futures import Future
from typing import Callable, Tuple

import numpy as np
import pytest
from PIL import Image

from dotpfp.config import CANVAS_SIZE


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    def make(color: Tuple[int, ...], size: Tuple[int, int] = (CANVAS_SIZE, CANVAS_SIZE)) -> Image.Image:
        mode = "RGBA" if len(color) == 4 else "RGB"
        return Image.new(mode, size, color)

    return make


@pytest.fixture
def gradient_image() -> Image.Image:
    """Горизонтальный градиент от чёрного к белому, не квадратный."""
    row = np.linspace(0, 255, 320).astype(np.uint8)
    arr = np.tile(row, (240, 1))
    return Image.fromarray(np.stack([arr, arr, arr], axis=-1))


@pytest.fixture
def watermark() -> Image.Image:
    logo = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
    logo.paste((200, 30, 30, 255), (8, 8, 56, 56))
    return logo


class ManualExecutor:
    """Executor, который выполняет задачи только по команде теста."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args):
        future = Future()
        self.pending.append((future, fn, args))
        return future

    def run_all(self):
        for future, fn, args in self.pending:
            try:
                future.set_result(fn(*args))
            except Exception as exc:
                future.set_exception(exc)


@pytest.fixture
def executor() -> ManualExecutor:
    return ManualExecutor()
