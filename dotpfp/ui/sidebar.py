"""Боковая панель: загрузка фото, информация о файле, параметры полутона.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через `get_render_parameters`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from dotpfp.config import DEFAULT_MODE, DENSITY_RANGE, DOT_SIZE_RANGE, LOGO_OPACITY_RANGE, MODES, SliderRange
from dotpfp.models.image_model import ImageData
from dotpfp.models.render_model import RenderParameters


def _format_bytes(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, параметры."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_params_change: Optional[Callable[[], None]] = None

        self._title = ctk.CTkLabel(self, text="GenLayer Dot PFP", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Загрузить фото…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Исходник", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Parameters
        self._params_title = ctk.CTkLabel(self, text="Параметры", font=ctk.CTkFont(size=16, weight="bold"))
        self._params_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        self._mode_labels = {mode.label: key for key, mode in MODES.items()}
        self._mode_menu = ctk.CTkOptionMenu(
            self, values=list(self._mode_labels), command=self._on_mode_change
        )
        self._mode_menu.set(MODES[DEFAULT_MODE].label)
        self._mode_menu.grid(row=7, column=0, padx=8, pady=(0, 8), sticky="ew")
        self._mode = DEFAULT_MODE

        self._dot_size_slider, self._dot_size_val = self._add_slider(8, "Размер точки", DOT_SIZE_RANGE, "{:.0f}")
        self._density_slider, self._density_val = self._add_slider(11, "Плотность", DENSITY_RANGE, "{:.0f}")
        self._opacity_slider, self._opacity_val = self._add_slider(14, "Прозрачность логотипа", LOGO_OPACITY_RANGE, "{:.2f}")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # public API (sync from controller)
    def set_image_info(self, data: ImageData) -> None:
        self._path_val.set(str(data.path))
        self._dims_val.set(f"{data.width}×{data.height} px, {data.mode}")
        self._size_val.set(_format_bytes(data.size_bytes))

    def get_render_parameters(self) -> RenderParameters:
        """Снимок текущих значений слайдеров, зажатых в свои диапазоны."""
        return RenderParameters(
            dot_size=DOT_SIZE_RANGE.clamp(self._dot_size_slider.get()),
            density=DENSITY_RANGE.clamp(self._density_slider.get()),
            logo_opacity=LOGO_OPACITY_RANGE.clamp(round(self._opacity_slider.get(), 2)),
            mode=self._mode,
        )

    # builders
    def _add_slider(self, row: int, title: str, bounds: SliderRange, fmt: str):
        value = ctk.StringVar(value=fmt.format(bounds.default))
        label = ctk.CTkLabel(self, text=f"{title}:")
        label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="w")

        def on_change(raw: float) -> None:
            value.set(fmt.format(bounds.clamp(raw)))
            self._emit_params_change()

        slider = ctk.CTkSlider(
            self,
            from_=bounds.minimum,
            to=bounds.maximum,
            number_of_steps=bounds.number_of_steps,
            command=on_change,
        )
        slider.set(bounds.default)
        slider.grid(row=row + 1, column=0, padx=8, pady=(0, 2), sticky="ew")
        value_label = ctk.CTkLabel(self, textvariable=value, width=48, anchor="w")
        value_label.grid(row=row + 2, column=0, padx=8, pady=(0, 8), sticky="w")
        return slider, value

    # events
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _on_mode_change(self, label: str) -> None:
        self._mode = self._mode_labels.get(label, DEFAULT_MODE)
        self._emit_params_change()

    def _emit_params_change(self) -> None:
        if self.on_params_change:
            self.on_params_change()
