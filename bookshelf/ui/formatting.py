"""Mise en forme du panneau de livres et choix des contrôles visibles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable

from bookshelf.models import Book
from bookshelf.state import AppState

PENDING_SUFFIX = "…"


def format_books_json(books: Iterable[Book]) -> str:
    """Rend la liste de livres en JSON brut, indenté de deux espaces."""
    return json.dumps([book.to_dict() for book in books], indent=2, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class ViewLayout:
    """Ce que la fenêtre doit afficher pour un état donné."""

    show_login_form: bool
    show_logout_button: bool
    show_books_button: bool
    show_books_panel: bool
    status_text: str
    login_label: str
    books_label: str
    books_json: str


def _label(text: str, pending: bool) -> str:
    return text + (PENDING_SUFFIX if pending else "")


def layout_for(state: AppState) -> ViewLayout:
    """Seul un refresh token non vide fait basculer la vue en mode connecté."""
    session = state.session
    logged_in = session.is_logged_in

    return ViewLayout(
        show_login_form=not logged_in,
        show_logout_button=logged_in,
        show_books_button=logged_in,
        show_books_panel=logged_in,
        status_text="Connecté" if logged_in else "Non connecté",
        login_label=_label("Login", session.login_pending),
        books_label=_label("Get Books", state.book_list.loading),
        books_json=format_books_json(state.book_list.books) if logged_in else "",
    )
