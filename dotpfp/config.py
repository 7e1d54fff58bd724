"""Константы рендера, диапазоны слайдеров и пресеты режимов.

Значения зашиты в код, чтобы результат рендера был стабильным.
Переменные окружения и файлы настроек здесь не читаются.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from dotpfp.models.render_model import HalftoneMode

# --- Холст ---
# Сторона канонического квадратного холста, px. Не меняется между рендерами.
CANVAS_SIZE: int = 600
# Фон, на который кладётся исходник перед замером яркости (прозрачное = белое).
MATTE_COLOR = (255, 255, 255, 255)

# --- Сетка ---
# spacing = density² × SPACING_FACTOR
SPACING_FACTOR: float = 0.5
# Минимальный шаг сетки, px: шаг меньше пикселя повторно читает те же пиксели.
MIN_SPACING: float = 1.0

# --- Водяной знак ---
LOGO_SIZE_RATIO: float = 0.15
LOGO_PADDING_RATIO: float = 0.04
WATERMARK_PATH: Path = Path(__file__).resolve().parent / "assets" / "genlayer-logo.png"

# --- Экспорт ---
DOWNLOAD_FILENAME: str = "genlayer-dot-pfp.png"
SHARE_INTENT_URL: str = "https://twitter.com/intent/tweet"
SHARE_CAPTION: str = "Just generated my GenLayer dot-style PFP 🧬⚫⚪"
SHARE_URL: str = "https://genlayer.ai"


@dataclass(frozen=True)
class SliderRange:
    """Границы слайдера. `clamp` применяется на границе UI -> рендер."""
    minimum: float
    maximum: float
    step: float
    default: float

    @property
    def number_of_steps(self) -> int:
        return int(round((self.maximum - self.minimum) / self.step))

    def clamp(self, value: float) -> float:
        return max(self.minimum, min(self.maximum, value))


DOT_SIZE_RANGE = SliderRange(minimum=2, maximum=8, step=1, default=4)
DENSITY_RANGE = SliderRange(minimum=3, maximum=7, step=1, default=5)
LOGO_OPACITY_RANGE = SliderRange(minimum=0.0, maximum=1.0, step=0.05, default=0.4)


PRINT_MODE = HalftoneMode(
    key="print",
    label="Печать (чёрные точки)",
    background=(255, 255, 255, 255),
    foreground=(0, 0, 0, 255),
    luma_weights=(0.299, 0.587, 0.114),  # ITU-R BT.601
    gamma=1.8,
    ink_coverage=True,
    min_radius=0.6,
    max_radius_ratio=0.9,
    visibility_threshold=0.5,
)

NEGATIVE_MODE = HalftoneMode(
    key="negative",
    label="Негатив (белые точки)",
    background=(0, 0, 0, 255),
    foreground=(255, 255, 255, 255),
    luma_weights=(1 / 3, 1 / 3, 1 / 3),
    gamma=1.0,
    ink_coverage=False,
    min_radius=0.0,
    max_radius_ratio=0.9,
    visibility_threshold=0.5,
)

MODES: Dict[str, HalftoneMode] = {mode.key: mode for mode in (PRINT_MODE, NEGATIVE_MODE)}
# TODO: confirm the default polarity with the product owner; print is the shipped page's look.
DEFAULT_MODE: str = PRINT_MODE.key
