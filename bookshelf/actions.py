"""Actions déclenchées par la vue : connexion, déconnexion, jetons et livres."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from bookshelf.models import Credentials, parse_books
from bookshelf.services import (
    ApiClient,
    ApiRequestError,
    Notification,
    UnauthorizedPolicy,
    dispatch_error,
)
from bookshelf.services.error_dispatcher import Notifier
from bookshelf.services.http_client import ERR_BAD_RESPONSE
from bookshelf.state import AppState

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
REFRESH_TOKEN_PATH = "/auth/refresh-token"
BOOKS_PATH = "/books"
HTTP_CREATED = 201

T = TypeVar("T")


class BookshelfActions:
    """Relie la vue, l'état de l'application et le client HTTP."""

    def __init__(self, client: ApiClient, state: AppState, notify: Notifier) -> None:
        self._client = client
        self._state = state
        self._notify = notify

    def update_login_input(self, name: str, value: str) -> None:
        self._state.set_login_field(name, value)

    def login(self) -> None:
        self._state.set_login_in_flight(True)
        self._state.set_login_pending(True)
        try:
            self._submit_login()
        finally:
            self._state.set_login_in_flight(False)

    def _submit_login(self) -> None:
        try:
            response = self._client.post(
                LOGIN_PATH, json=self._state.session.login_input.as_payload()
            )
            credentials = _decode(Credentials.from_payload, response.data, response.status_code)
        except ApiRequestError as exc:
            dispatch_error(exc, self._notify, self._state.set_login_pending)
            return

        logger.info("Connexion réussie pour %s", self._state.session.login_input.email)
        self._state.set_credentials(credentials)
        self._state.set_login_pending(False)

    def logout(self) -> None:
        self._state.reset()
        logger.info("Session fermée")

    def refresh_token(self) -> None:
        """Demande un nouveau jeton puis invite l'utilisateur à réessayer.

        Le jeton obtenu n'est pas appliqué aux identifiants et la requête
        d'origine n'est pas relancée.
        """
        body = {"refresh_token": self._state.session.credentials.refresh_token}
        try:
            response = self._client.post(REFRESH_TOKEN_PATH, json=body)
        except ApiRequestError as exc:
            dispatch_error(exc, self._notify)
            return

        if response.status_code == HTTP_CREATED:
            self._notify(
                Notification(status="info", title="Refresh", description="Please try again")
            )

    def fetch_books(self) -> None:
        self._state.set_books_loading(True)
        try:
            response = self._client.get(BOOKS_PATH, with_credentials=True)
            books = _decode(parse_books, response.data, response.status_code)
        except ApiRequestError as exc:
            dispatch_error(
                exc,
                self._notify,
                self._state.set_books_loading,
                UnauthorizedPolicy(enabled=True, on_unauthorized=self.refresh_token),
            )
            return

        logger.info("%d livre(s) reçu(s)", len(books))
        self._state.set_books(books)
        self._state.set_books_loading(False)


def _decode(parser: Callable[[Any], T], data: Any, status_code: int) -> T:
    """Convertit un corps 2xx ; un corps mal formé devient une ``ApiRequestError``."""
    try:
        return parser(data)
    except ValueError as exc:
        raise ApiRequestError(
            str(exc), code=ERR_BAD_RESPONSE, status_code=status_code
        ) from exc
