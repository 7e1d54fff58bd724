"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Callable, Optional

import customtkinter as ctk
from PIL import Image

from dotpfp.config import DOWNLOAD_FILENAME
from dotpfp.models.image_model import ImageData
from dotpfp.services.export_service import ExportService
from dotpfp.services.halftone_service import HalftoneService
from dotpfp.services.image_service import ImageService
from dotpfp.services.watermark_service import WatermarkService
from dotpfp.ui.image_viewer import ImageViewer
from dotpfp.ui.sidebar import Sidebar
from dotpfp.ui.bottom_bar import BottomBar

logger = logging.getLogger(__name__)

WATERMARK_POLL_MS = 50


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка исходника через `ImageService` и мгновенный рендер.
    - Полный перерендер на каждое изменение параметров через `HalftoneService`.
    - Ожидание водяного знака и перерендер, когда он появился.
    - Скачивание и «поделиться» через `ExportService`.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _halftone_service: HalftoneService = field(default_factory=HalftoneService)
    _watermark_service: WatermarkService = field(default_factory=WatermarkService)
    _export_service: ExportService = field(default_factory=ExportService)
    _open_dialog: Callable[..., str] = filedialog.askopenfilename
    _save_dialog: Callable[..., str] = filedialog.asksaveasfilename
    _current_image: Optional[ImageData] = None
    _rendered: Optional[Image.Image] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий и запускает загрузку водяного знака.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_params_change = self._handle_params_change
        self.bottom.on_download = self._handle_download
        self.bottom.on_share = self._handle_share

        self._watermark_service.start_loading()
        self._poll_watermark()

    @property
    def rendered(self) -> Optional[Image.Image]:
        return self._rendered

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = self._open_dialog(
                title="Выберите фото",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.load_source(file_path)

    def load_source(self, file_path: str | Path) -> None:
        """Загружает исходник и сразу рендерит его с текущими параметрами.

        Нечитаемый файл оставляет прошлое состояние нетронутым.
        """
        try:
            image_data = self._image_service.load_image(file_path)
        except (FileNotFoundError, ValueError) as exc:
            logger.warning("Upload ignored: %s", exc)
            self.bottom.set_status(f"Не удалось открыть: {Path(file_path).name}")
            return

        self._current_image = image_data
        self.viewer.set_source(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self.bottom.set_status(image_data.path.name)
        self._render()

    def _handle_params_change(self) -> None:
        self._render()

    def _handle_download(self) -> None:
        if self._rendered is None:
            return
        try:
            target = self._save_dialog(
                title="Сохранить PNG",
                initialfile=DOWNLOAD_FILENAME,
                defaultextension=".png",
                filetypes=(("PNG", "*.png"),),
            )
        except TclError:
            return

        if not target:
            return
        try:
            saved = self._export_service.save_png(self._rendered, target)
        except OSError as exc:
            logger.warning("Save failed: %s", exc)
            self.bottom.set_status(f"Не удалось сохранить: {exc}")
            return
        self.bottom.set_status(f"Сохранено: {saved.name}")

    def _handle_share(self) -> None:
        self._export_service.share()

    # ---- Helpers ----
    def _render(self) -> None:
        """Перерисовывает холст с нуля по актуальным значениям слайдеров."""
        if self._current_image is None:
            return
        params = self.sidebar.get_render_parameters()
        self._rendered = self._halftone_service.render(
            self._current_image.pil_image,
            params,
            self._watermark_service.current(),
        )
        self.viewer.set_rendered(self._rendered)

    def _poll_watermark(self) -> None:
        if self._watermark_service.is_settled():
            self._render()
            return
        self.window.after(WATERMARK_POLL_MS, self._poll_watermark)
