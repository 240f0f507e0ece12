"""Point d'entrée de l'application Bookshelf."""

from __future__ import annotations

import logging
import sys
import tkinter as tk
from tkinter import messagebox

from bookshelf.config import ConfigError, load_config
from bookshelf.services import ApiClient
from bookshelf.state import AppState
from bookshelf.ui.app import MainWindow

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _show_config_error(exc: ConfigError) -> None:
    """Affiche l'erreur sans laisser apparaître de fenêtre racine vide."""
    root = tk.Tk()
    root.withdraw()
    try:
        messagebox.showerror("Configuration invalide", str(exc), parent=root)
    finally:
        root.destroy()


def main() -> None:
    """Initialise les dépendances puis lance l'interface Tkinter."""
    try:
        config = load_config()
    except ConfigError as exc:
        _show_config_error(exc)
        sys.exit(1)

    logging.basicConfig(level=config.log_level_value, format=LOG_FORMAT)
    logging.getLogger(__name__).info("API cible : %s", config.base_url)

    with ApiClient(config) as client:
        state = AppState()
        app = MainWindow(client=client, state=state, theme=config.theme)
        app.run()


if __name__ == "__main__":
    main()
