from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_download: Optional[Callable[[], None]] = None
        self.on_share: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # status stretches

        self._status = ctk.StringVar(value="Загрузите фото, чтобы начать")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="w")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")

        self._download_btn = ctk.CTkButton(self, text="Скачать", width=120, command=self._on_download_click)
        self._download_btn.grid(row=0, column=1, padx=6, pady=8, sticky="e")

        self._share_btn = ctk.CTkButton(
            self, text="Поделиться в X", width=140, fg_color="transparent", border_width=1,
            command=self._on_share_click,
        )
        self._share_btn.grid(row=0, column=2, padx=(6, 10), pady=8, sticky="e")

    # public API (sync from controller)
    def set_status(self, text: str) -> None:
        self._status.set(text)

    # events
    def _on_download_click(self) -> None:
        if self.on_download:
            self.on_download()

    def _on_share_click(self) -> None:
        if self.on_share:
            self.on_share()
