from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np
from PIL import Image, ImageDraw

from dotpfp.config import CANVAS_SIZE, MATTE_COLOR, MIN_SPACING, SPACING_FACTOR
from dotpfp.models.render_model import Dot, HalftoneMode, RenderParameters
from dotpfp.services.watermark_service import WatermarkService

logger = logging.getLogger(__name__)


class HalftoneService:
    """Превращает исходник в чёрно-белый точечный полутон на каноническом холсте.

    Рендер чистый: каждый вызов собирает новый холст, входы не мутируются.
    """

    def __init__(self, size: int = CANVAS_SIZE) -> None:
        self.size = size

    # ---------- Вспомогательные функции ----------
    def spacing(self, density: float) -> float:
        """Шаг сетки в пикселях: квадратичная зависимость от плотности.

        Raises:
            ValueError: если шаг получается меньше MIN_SPACING.
        """
        spacing = density * density * SPACING_FACTOR if density > 0 else 0.0
        if not spacing >= MIN_SPACING:
            raise ValueError(f"Шаг сетки меньше {MIN_SPACING} px для density={density}")
        return spacing

    def grid_axis(self, spacing: float) -> np.ndarray:
        """Координаты узлов по одной оси: 0, spacing, 2·spacing, ... < size.

        Узлов ровно ceil(size / spacing).
        """
        if not spacing >= MIN_SPACING:
            raise ValueError(f"spacing должен быть >= {MIN_SPACING}: {spacing}")
        count = int(math.ceil(self.size / spacing))
        axis = np.arange(count, dtype=np.float64) * spacing
        return axis[axis < self.size]

    def resample(self, source: Image.Image) -> Image.Image:
        """
        Приводит исходник к квадрату size×size (билинейно) поверх белой подложки.
        """
        resized = source.convert("RGBA").resize((self.size, self.size), Image.Resampling.BILINEAR)
        matte = Image.new("RGBA", (self.size, self.size), MATTE_COLOR)
        return Image.alpha_composite(matte, resized)

    def brightness(self, rgba: np.ndarray, mode: HalftoneMode) -> np.ndarray:
        """
        Взвешенная сумма каналов R, G, B в диапазоне [0..255].
        """
        weights = np.asarray(mode.luma_weights, dtype=np.float64)
        return rgba[..., :3].astype(np.float64) @ weights

    def dot_radii(self, brightness: np.ndarray | float, dot_size: float, mode: HalftoneMode) -> np.ndarray:
        """
        Радиусы точек для значений яркости [0..255].

        raw = dot_size · coverage^gamma, где coverage = 1 − b/255 для режима
        "краски" и b/255 для негатива. Если raw не выше порога видимости, точка
        гасится (радиус 0). Иначе радиус зажимается в
        [min_radius, max_radius_ratio · dot_size] и снова проверяется порогом.
        """
        normalized = np.clip(np.asarray(brightness, dtype=np.float64) / 255.0, 0.0, 1.0)
        coverage = 1.0 - normalized if mode.ink_coverage else normalized
        raw = dot_size * np.power(coverage, mode.gamma)
        clamped = np.clip(raw, mode.min_radius, dot_size * mode.max_radius_ratio)
        visible = (raw > mode.visibility_threshold) & (clamped > mode.visibility_threshold)
        return np.where(visible, clamped, 0.0)

    # ---------- Основной алгоритм ----------
    def compute_dots(self, buffer: Image.Image | np.ndarray, params: RenderParameters) -> List[Dot]:
        """
        Обходит сетку построчно и возвращает видимые точки.

        Пиксель для узла (x, y) берётся по координатам (floor(x), floor(y)).
        """
        mode = params.halftone_mode
        rgba = np.asarray(buffer)
        spacing = self.spacing(params.density)
        axis = self.grid_axis(spacing)
        index = np.floor(axis).astype(np.intp)

        samples = rgba[index][:, index]  # (rows, cols, 4), row-major by y
        radii = self.dot_radii(self.brightness(samples, mode), params.dot_size, mode)

        dots: List[Dot] = []
        for row, y in enumerate(axis):
            for col, x in enumerate(axis):
                radius = float(radii[row, col])
                if radius > 0:
                    dots.append(Dot(x=float(x), y=float(y), radius=radius))
        logger.debug(
            "Halftone grid: spacing=%.2f, samples=%d, dots=%d", spacing, axis.size ** 2, len(dots)
        )
        return dots

    def render(
        self,
        source: Optional[Image.Image],
        params: RenderParameters,
        watermark: Optional[Image.Image] = None,
    ) -> Image.Image:
        """Полный проход: ресемплинг, точки, водяной знак.

        Args:
            source: Декодированный исходник пользователя.
            params: Размер точки, плотность, прозрачность логотипа, режим.
            watermark: Логотип; если ещё не загружен (`None`), шаг пропускается.

        Returns:
            Новый RGBA-холст size×size.

        Raises:
            ValueError: если исходник не передан.
        """
        if source is None:
            raise ValueError("Нет декодированного изображения для рендера")

        mode = params.halftone_mode
        buffer = self.resample(source)
        dots = self.compute_dots(buffer, params)

        canvas = Image.new("RGBA", (self.size, self.size), mode.background)
        draw = ImageDraw.Draw(canvas)
        for dot in dots:
            draw.ellipse(
                [dot.x - dot.radius, dot.y - dot.radius, dot.x + dot.radius, dot.y + dot.radius],
                fill=mode.foreground,
            )

        if watermark is not None:
            canvas = WatermarkService.composite(canvas, watermark, params.logo_opacity)
        return canvas
