"""Загрузка пользовательского изображения с диска.

Принципы:
- SRP: класс отвечает только за декодирование и базовые свойства файла.
- Ошибки не глотаются: решение "ничего не показывать" принимает контроллер.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from dotpfp.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Декодирует изображение и возвращает его вместе с метаданными.

        Для анимированных форматов (GIF, WebP) берётся первый кадр.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` в режиме RGBA.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение или повреждён.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as opened:
                opened.seek(0)
                pil_image = opened.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc
        except OSError as exc:
            # truncated or otherwise broken payload
            raise ValueError(f"Не удалось декодировать изображение: {path}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info("Loaded %s (%dx%d)", path.name, width, height)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
        )
