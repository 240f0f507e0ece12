"""Interface Tkinter principale."""

from __future__ import annotations

import logging
import queue
import threading
import tkinter as tk
from tkinter import ttk
from typing import Callable

import sv_ttk

from bookshelf.actions import BookshelfActions
from bookshelf.services import ApiClient, Notification
from bookshelf.state import AppState
from bookshelf.ui.formatting import layout_for
from bookshelf.ui.toast import ToastNotifier

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#171923"
SIDEBAR_COLOR = "#1A202C"
CODE_BACKGROUND_COLOR = "#2D3748"
TEXT_COLOR = "#FFFFFF"
STATUS_NEUTRAL_COLOR = "#A0AEC0"
STATUS_SUCCESS_COLOR = "#48BB78"
SIDEBAR_WIDTH = 420
UI_QUEUE_POLL_MS = 50


class MainWindow:
    """Fenêtre principale : formulaire de connexion à gauche, livres à droite."""

    def __init__(
        self,
        client: ApiClient,
        state: AppState | None = None,
        *,
        theme: str = "dark",
    ) -> None:
        self._state = state or AppState()
        self._ui_queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()

        self.root = tk.Tk()
        self.root.title("Bookshelf – Get All Books")
        self.root.geometry("1080x640")
        self.root.minsize(860, 480)

        sv_ttk.set_theme(theme)
        self.root.configure(bg=BACKGROUND_COLOR)
        self._configure_styles()

        self._toasts = ToastNotifier(self.root)
        self._actions = BookshelfActions(client, self._state, self._post_notification)

        self._email_var = tk.StringVar()
        self._password_var = tk.StringVar()
        self._email_var.trace_add("write", lambda *_: self._on_input_changed("email"))
        self._password_var.trace_add("write", lambda *_: self._on_input_changed("password"))

        self.root.columnconfigure(0, weight=0, minsize=SIDEBAR_WIDTH)
        self.root.columnconfigure(1, weight=1)
        self.root.rowconfigure(0, weight=1)

        self._build_sidebar()
        self._build_books_panel()

        self._unsubscribe = self._state.subscribe(lambda: self._post(self._render))
        self._render()
        self.root.after(UI_QUEUE_POLL_MS, self._drain_ui_queue)

    # --------------------------------------------------------------------- UI -
    def _configure_styles(self) -> None:
        style = ttk.Style()
        style.configure("Main.TFrame", background=BACKGROUND_COLOR)
        style.configure("Sidebar.TFrame", background=SIDEBAR_COLOR)
        style.configure(
            "Heading.TLabel",
            background=BACKGROUND_COLOR,
            foreground=TEXT_COLOR,
            font=("Helvetica", 24, "bold"),
        )
        style.configure(
            "Status.TLabel",
            background=SIDEBAR_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 11),
        )
        style.configure("TButton", padding=(16, 8))
        self.root.option_add("*Font", "Helvetica 11")

    def _build_sidebar(self) -> None:
        frame = ttk.Frame(self.root, style="Sidebar.TFrame", padding=24)
        frame.grid(row=0, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(0, weight=1)
        frame.rowconfigure(2, weight=1)

        self._status_label = ttk.Label(frame, text="Non connecté", style="Status.TLabel")
        self._status_label.grid(row=0, column=0, sticky="s", pady=(0, 16))

        self._login_form = ttk.Frame(frame, style="Sidebar.TFrame")
        self._login_form.grid(row=1, column=0, sticky="ew")
        self._login_form.columnconfigure(0, weight=1)

        self._email_entry = ttk.Entry(self._login_form, textvariable=self._email_var)
        self._email_entry.grid(row=0, column=0, sticky="ew", pady=(0, 8), ipady=4)
        self._add_placeholder(self._email_entry, self._email_var, "input email")

        self._password_entry = ttk.Entry(
            self._login_form, textvariable=self._password_var, show="•"
        )
        self._password_entry.grid(row=1, column=0, sticky="ew", pady=(0, 8), ipady=4)
        self._add_placeholder(self._password_entry, self._password_var, "input password")
        self._password_entry.bind("<Return>", lambda _: self.login())

        self._login_button = ttk.Button(
            self._login_form,
            text="Login",
            command=self.login,
            style="Accent.TButton",
        )
        self._login_button.grid(row=2, column=0)

        self._logout_button = ttk.Button(frame, text="Logout", command=self.logout)

    def _build_books_panel(self) -> None:
        frame = ttk.Frame(self.root, style="Main.TFrame", padding=24)
        frame.grid(row=0, column=1, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(2, weight=1)

        heading = ttk.Label(frame, text="Get All Books", style="Heading.TLabel")
        heading.grid(row=0, column=0, sticky="w", pady=(0, 16))

        self._books_button = ttk.Button(frame, text="Get Books", command=self.fetch_books)

        self._books_container = ttk.Frame(frame, style="Main.TFrame")
        self._books_container.columnconfigure(0, weight=1)
        self._books_container.rowconfigure(0, weight=1)

        self._books_text = tk.Text(
            self._books_container,
            bg=CODE_BACKGROUND_COLOR,
            fg=TEXT_COLOR,
            font=("Courier", 11),
            relief=tk.FLAT,
            borderwidth=0,
            highlightthickness=0,
            padx=12,
            pady=12,
            wrap=tk.NONE,
        )
        self._books_text.grid(row=0, column=0, sticky="nsew")

        scrollbar = ttk.Scrollbar(
            self._books_container,
            orient=tk.VERTICAL,
            command=self._books_text.yview,
        )
        scrollbar.grid(row=0, column=1, sticky="ns")
        self._books_text.configure(yscrollcommand=scrollbar.set, state=tk.DISABLED)

    @staticmethod
    def _add_placeholder(entry: ttk.Entry, variable: tk.StringVar, hint: str) -> None:
        """Affiche ``hint`` comme texte indicatif tant que le champ est vide."""
        tooltip = ttk.Label(entry, text=hint, foreground=STATUS_NEUTRAL_COLOR)
        tooltip.bind("<Button-1>", lambda _: entry.focus_set())

        def refresh(*_: object) -> None:
            if variable.get() or entry.focus_get() is entry:
                tooltip.place_forget()
            else:
                tooltip.place(x=8, rely=0.5, anchor="w")

        variable.trace_add("write", refresh)
        entry.bind("<FocusIn>", refresh, add="+")
        entry.bind("<FocusOut>", refresh, add="+")
        refresh()

    # ------------------------------------------------------------- Threading -
    def _post(self, callback: Callable[[], None]) -> None:
        """Planifie ``callback`` sur le thread Tk, quel que soit l'appelant."""
        self._ui_queue.put(callback)

    def _post_notification(self, notification: Notification) -> None:
        self._post(lambda: self._toasts.show(notification))

    def _drain_ui_queue(self) -> None:
        while True:
            try:
                callback = self._ui_queue.get_nowait()
            except queue.Empty:
                break
            callback()
        self.root.after(UI_QUEUE_POLL_MS, self._drain_ui_queue)

    def _run_in_background(self, action: Callable[[], None]) -> None:
        thread = threading.Thread(target=action, name=action.__name__, daemon=True)
        logger.debug("Lancement de l'action %s", thread.name)
        thread.start()

    # --------------------------------------------------------------- Callbacks -
    def _on_input_changed(self, name: str) -> None:
        variable = self._email_var if name == "email" else self._password_var
        current = getattr(self._state.session.login_input, name)
        if variable.get() != current:
            self._actions.update_login_input(name, variable.get())

    def login(self) -> None:
        self._run_in_background(self._actions.login)

    def logout(self) -> None:
        self._actions.logout()

    def fetch_books(self) -> None:
        self._run_in_background(self._actions.fetch_books)

    def _render(self) -> None:
        """Met à jour l'interface en fonction de l'état de l'application."""
        session = self._state.session
        login_input = session.login_input

        if self._email_var.get() != login_input.email:
            self._email_var.set(login_input.email)
        if self._password_var.get() != login_input.password:
            self._password_var.set(login_input.password)

        layout = layout_for(self._state)
        self._status_label.configure(
            text=layout.status_text,
            foreground=STATUS_SUCCESS_COLOR if session.is_logged_in else STATUS_NEUTRAL_COLOR,
        )
        self._login_button.configure(text=layout.login_label)
        self._books_button.configure(text=layout.books_label)

        if layout.show_login_form:
            self._login_form.grid()
        else:
            self._login_form.grid_remove()
        if layout.show_logout_button:
            self._logout_button.grid(row=1, column=0)
        else:
            self._logout_button.grid_remove()
        if layout.show_books_button:
            self._books_button.grid(row=1, column=0, sticky="w", pady=(0, 16))
        else:
            self._books_button.grid_remove()
        if layout.show_books_panel:
            self._books_container.grid(row=2, column=0, sticky="nsew")
            self._set_books_text(layout.books_json)
        else:
            self._books_container.grid_remove()

    def _set_books_text(self, content: str) -> None:
        self._books_text.configure(state=tk.NORMAL)
        self._books_text.delete("1.0", tk.END)
        self._books_text.insert("1.0", content)
        self._books_text.configure(state=tk.DISABLED)

    # ----------------------------------------------------------------- Public -
    def run(self) -> None:
        try:
            self.root.mainloop()
        finally:
            self._unsubscribe()
