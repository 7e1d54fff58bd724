"""Модели параметров рендера полутона.

Принципы:
- SRP: только данные и проверка их инвариантов.
- Неизменяемость: параметры передаются в рендер по значению.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class HalftoneMode:
    """Именованный пресет полярности и кривой отклика.

    Fields:
        key: Машинное имя пресета ("print", "negative").
        label: Подпись для UI.
        background: Цвет фона холста.
        foreground: Цвет точек.
        luma_weights: Веса R, G, B для яркости.
        gamma: Показатель степенной кривой.
        ink_coverage: True: тёмное даёт крупную точку (краска); False: светлое.
        min_radius: Нижняя граница радиуса видимой точки, px.
        max_radius_ratio: Верхняя граница радиуса как доля `dot_size`.
        visibility_threshold: Точки меньше этого радиуса не рисуются, px.
    """
    key: str
    label: str
    background: RGBA
    foreground: RGBA
    luma_weights: Tuple[float, float, float]
    gamma: float
    ink_coverage: bool
    min_radius: float
    max_radius_ratio: float
    visibility_threshold: float


@dataclass(frozen=True)
class RenderParameters:
    """Параметры одного прохода рендера.

    Raises:
        ValueError: если `dot_size` не положителен, `density` даёт шаг сетки
            меньше MIN_SPACING,
            `logo_opacity` вне [0, 1] или режим неизвестен.
    """
    dot_size: float
    density: float
    logo_opacity: float
    mode: str = "print"  # config.DEFAULT_MODE; config imports this module

    def __post_init__(self) -> None:
        # local import: config depends on this module for HalftoneMode
        from dotpfp.config import MIN_SPACING, MODES, SPACING_FACTOR

        if not self.dot_size > 0:
            raise ValueError(f"dot_size должен быть > 0: {self.dot_size}")
        if not self.density > 0:
            raise ValueError(f"density должен быть > 0: {self.density}")
        if self.density * self.density * SPACING_FACTOR < MIN_SPACING:
            raise ValueError(f"density слишком мал: шаг сетки меньше {MIN_SPACING} px: {self.density}")
        if not 0.0 <= self.logo_opacity <= 1.0:
            raise ValueError(f"logo_opacity вне диапазона [0, 1]: {self.logo_opacity}")
        if self.mode not in MODES:
            raise ValueError(f"Неизвестный режим: {self.mode}")

    @property
    def halftone_mode(self) -> HalftoneMode:
        from dotpfp.config import MODES

        return MODES[self.mode]


@dataclass(frozen=True)
class Dot:
    """Одна точка полутона: центр на холсте и итоговый радиус."""
    x: float
    y: float
    radius: float
