"""Экспорт результата: PNG-файл для скачивания и ссылка "поделиться".

Оба действия только читают холст.
"""
from __future__ import annotations

import io
import logging
import webbrowser
from pathlib import Path
from typing import Callable
from urllib.parse import quote

from PIL import Image

from dotpfp.config import DOWNLOAD_FILENAME, SHARE_CAPTION, SHARE_INTENT_URL, SHARE_URL

logger = logging.getLogger(__name__)

# same set of characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


class ExportService:
    def to_png_bytes(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save_png(self, image: Image.Image, target: str | Path) -> Path:
        """Сохраняет холст в PNG.

        Args:
            image: Отрендеренный холст.
            target: Путь к файлу или каталог (тогда имя `genlayer-dot-pfp.png`).

        Returns:
            Фактический путь записанного файла.
        """
        path = Path(target)
        if path.is_dir():
            path = path / DOWNLOAD_FILENAME
        path.write_bytes(self.to_png_bytes(image))
        logger.info("Saved %s", path)
        return path

    def share_url(self, caption: str = SHARE_CAPTION, url: str = SHARE_URL) -> str:
        text = quote(caption, safe=_URI_COMPONENT_SAFE)
        link = quote(url, safe=_URI_COMPONENT_SAFE)
        return f"{SHARE_INTENT_URL}?text={text}&url={link}"

    def share(self, opener: Callable[[str], object] = webbrowser.open) -> str:
        """Открывает шаблон твита во внешнем браузере. Картинка не передаётся."""
        intent = self.share_url()
        opener(intent)
        logger.info("Opened share intent")
        return intent
