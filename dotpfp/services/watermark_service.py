"""Водяной знак: фоновая загрузка ассета, размещение и альфа-смешивание.

Принципы:
- Загрузка однократная и неотменяемая; пока она не завершилась, знака "нет".
- Ошибка загрузки не доходит до UI: логируется и трактуется как отсутствие знака.
"""
from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from dotpfp.config import LOGO_PADDING_RATIO, LOGO_SIZE_RATIO, WATERMARK_PATH

logger = logging.getLogger(__name__)


def _decode_watermark(path: Path) -> Image.Image:
    with Image.open(path) as opened:
        image = opened.convert("RGBA")
    image.load()
    return image


class WatermarkService:
    def __init__(self, path: str | Path = WATERMARK_PATH, executor: Optional[Executor] = None) -> None:
        self.path = Path(path)
        self._executor = executor
        self._future: Optional[Future] = None

    def start_loading(self) -> Future:
        """Запускает загрузку ассета в фоне. Повторный вызов возвращает тот же future."""
        if self._future is None:
            executor = self._executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="watermark")
            self._future = executor.submit(_decode_watermark, self.path)
            self._future.add_done_callback(self._log_outcome)
            if self._executor is None:
                # single-shot: let the worker thread exit once the load is done
                executor.shutdown(wait=False)
        return self._future

    def is_settled(self) -> bool:
        """True, когда загрузка завершилась (успешно или нет)."""
        return self._future is not None and self._future.done()

    def current(self) -> Optional[Image.Image]:
        """Логотип, если он уже загружен; иначе `None`."""
        if not self.is_settled() or self._future.exception() is not None:
            return None
        return self._future.result()

    def _log_outcome(self, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.warning("Watermark %s unavailable: %s", self.path, exc)
        else:
            logger.debug("Watermark %s loaded", self.path)

    # ---------- Геометрия и смешивание ----------
    @staticmethod
    def placement(size: int) -> Tuple[int, int, int, int]:
        """
        Бокс логотипа (left, top, right, bottom) в правом нижнем углу холста size×size.
        """
        logo_size = int(round(size * LOGO_SIZE_RATIO))
        padding = int(round(size * LOGO_PADDING_RATIO))
        origin = size - logo_size - padding
        return origin, origin, origin + logo_size, origin + logo_size

    @classmethod
    def composite(cls, canvas: Image.Image, watermark: Image.Image, opacity: float) -> Image.Image:
        """
        Накладывает логотип с прозрачностью `opacity` и возвращает новый холст.
        При opacity = 0 результат совпадает с холстом попиксельно.
        """
        out = canvas.convert("RGBA") if canvas.mode != "RGBA" else canvas.copy()
        if opacity <= 0:
            return out

        left, top, right, bottom = cls.placement(out.width)
        logo = watermark.convert("RGBA").resize((right - left, bottom - top), Image.Resampling.LANCZOS)
        if opacity < 1:
            alpha = logo.getchannel("A").point(lambda a: int(round(a * opacity)))
            logo.putalpha(alpha)
        out.alpha_composite(logo, dest=(left, top))
        return out
