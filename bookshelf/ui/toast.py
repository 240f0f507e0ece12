"""Notifications éphémères affichées dans le coin de la fenêtre."""

from __future__ import annotations

import tkinter as tk

from bookshelf.services import Notification

TOAST_DURATION_MS = 5000
TOAST_WIDTH = 320
TOAST_MARGIN = 16
TOAST_SPACING = 8
TOAST_COLORS = {
    "error": "#E53E3E",
    "info": "#3182CE",
}


class ToastNotifier:
    """Empile des toasts en bas à droite de ``root`` et les retire après délai."""

    def __init__(self, root: tk.Tk, duration_ms: int = TOAST_DURATION_MS) -> None:
        self._root = root
        self._duration_ms = duration_ms
        self._toasts: list[tk.Toplevel] = []

    def show(self, notification: Notification) -> None:
        background = TOAST_COLORS.get(notification.status, TOAST_COLORS["info"])

        toast = tk.Toplevel(self._root, bg=background)
        toast.overrideredirect(True)
        toast.attributes("-topmost", True)

        title = tk.Label(
            toast,
            text=notification.title,
            bg=background,
            fg="#FFFFFF",
            font=("Helvetica", 11, "bold"),
            anchor="w",
        )
        title.pack(fill=tk.X, padx=12, pady=(10, 0))
        description = tk.Label(
            toast,
            text=notification.description,
            bg=background,
            fg="#FFFFFF",
            font=("Helvetica", 10),
            anchor="w",
            justify=tk.LEFT,
            wraplength=TOAST_WIDTH - 24,
        )
        description.pack(fill=tk.X, padx=12, pady=(2, 10))

        for widget in (toast, title, description):
            widget.bind("<Button-1>", lambda _, t=toast: self._dismiss(t))

        self._toasts.append(toast)
        self._layout()
        toast.after(self._duration_ms, lambda: self._dismiss(toast))

    def _dismiss(self, toast: tk.Toplevel) -> None:
        if toast not in self._toasts:
            return
        self._toasts.remove(toast)
        toast.destroy()
        self._layout()

    def _layout(self) -> None:
        self._root.update_idletasks()
        right = self._root.winfo_rootx() + self._root.winfo_width() - TOAST_MARGIN
        bottom = self._root.winfo_rooty() + self._root.winfo_height() - TOAST_MARGIN

        for toast in reversed(self._toasts):
            toast.update_idletasks()
            height = toast.winfo_reqheight()
            top = bottom - height
            toast.geometry(f"{TOAST_WIDTH}x{height}+{right - TOAST_WIDTH}+{top}")
            bottom = top - TOAST_SPACING
