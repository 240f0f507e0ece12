"""Structures de données partagées entre la couche UI et les actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from bookshelf.models import Book, Credentials, LoginInput

StateListener = Callable[[], None]


class SessionPhase(str, Enum):
    LOGGED_OUT = "logged_out"
    LOGGING_IN = "logging_in"
    LOGGED_IN = "logged_in"


@dataclass(slots=True)
class SessionState:
    """Jetons, saisie de connexion et indicateur de connexion en cours."""

    credentials: Credentials = field(default_factory=Credentials)
    login_input: LoginInput = field(default_factory=LoginInput)
    login_pending: bool = False
    login_in_flight: bool = False

    @property
    def is_logged_in(self) -> bool:
        """Seul critère de session valide : un refresh token non vide."""
        return self.credentials.is_logged_in

    @property
    def phase(self) -> SessionPhase:
        if self.is_logged_in:
            return SessionPhase.LOGGED_IN
        if self.login_in_flight:
            return SessionPhase.LOGGING_IN
        return SessionPhase.LOGGED_OUT

    def reset(self) -> None:
        self.credentials = Credentials()
        self.login_input = LoginInput()


@dataclass(slots=True)
class BookListState:
    books: list[Book] = field(default_factory=list)
    loading: bool = False

    def replace(self, books: Iterable[Book]) -> None:
        self.books = list(books)


@dataclass(slots=True)
class AppState:
    """État interne de l'application, observé par la vue."""

    session: SessionState = field(default_factory=SessionState)
    book_list: BookListState = field(default_factory=BookListState)
    _listeners: list[StateListener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Enregistre un observateur ; retourne la fonction de désabonnement."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify_changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------ Mutations -
    def set_credentials(self, credentials: Credentials) -> None:
        self.session.credentials = credentials
        self.notify_changed()

    def set_login_field(self, name: str, value: str) -> None:
        if name not in ("email", "password"):
            raise ValueError(f"Champ de connexion inconnu : {name!r}")
        setattr(self.session.login_input, name, value)
        self.notify_changed()

    def set_login_pending(self, pending: bool) -> None:
        self.session.login_pending = pending
        self.notify_changed()

    def set_login_in_flight(self, in_flight: bool) -> None:
        self.session.login_in_flight = in_flight
        self.notify_changed()

    def set_books(self, books: Iterable[Book]) -> None:
        self.book_list.replace(books)
        self.notify_changed()

    def set_books_loading(self, loading: bool) -> None:
        self.book_list.loading = loading
        self.notify_changed()

    def reset(self) -> None:
        """Réinitialise la session (jetons et saisie)."""
        self.session.reset()
        self.notify_changed()
