"""Виджет предпросмотра: полутон по размеру области, исходник по удержанию пробела.

Принципы:
- SRP: отвечает только за показ готовых изображений.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk


class ImageViewer(ctk.CTkFrame):
    """Канва с результатом рендера и быстрым просмотром «до»."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._source_image: Optional[Image.Image] = None
        self._rendered_image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._hold_before_active: bool = False

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<ButtonPress-1>", lambda _e: self._canvas.focus_set())

        # Hold space to preview the uploaded source
        self._canvas.bind("<KeyPress-space>", self._on_space_down)
        self._canvas.bind("<KeyRelease-space>", self._on_space_up)

    # ---- Public API ----
    def set_source(self, image: Image.Image) -> None:
        """Запоминает исходник для просмотра «до» и сбрасывает прошлый результат."""
        self._source_image = image
        self._rendered_image = None
        self._render_image()

    def set_rendered(self, image: Optional[Image.Image]) -> None:
        """Показывает новый результат рендера (может быть None)."""
        self._rendered_image = image
        self._render_image()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        self._render_image()

    def _current_image(self) -> Optional[Image.Image]:
        if self._hold_before_active or self._rendered_image is None:
            return self._source_image
        return self._rendered_image

    def _render_image(self) -> None:
        self._canvas.delete("all")
        image = self._current_image()
        if image is None:
            return

        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        img_w, img_h = image.size
        scale = min(canvas_w / img_w, canvas_h / img_h)
        scaled_w = max(1, int(img_w * scale))
        scaled_h = max(1, int(img_h * scale))

        resized = image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)
        self._tk_image = ImageTk.PhotoImage(resized)
        x = (canvas_w - scaled_w) // 2
        y = (canvas_h - scaled_h) // 2
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _on_space_down(self, _event: tk.Event) -> None:
        if not self._hold_before_active:
            self._hold_before_active = True
            self._render_image()

    def _on_space_up(self, _event: tk.Event) -> None:
        if self._hold_before_active:
            self._hold_before_active = False
            self._render_image()
