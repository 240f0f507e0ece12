"""Traitement centralisé des appels en échec.

Chaque action passe son erreur à :func:`dispatch_error`, qui choisit entre
une notification à l'utilisateur et un rappel de récupération (401).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Literal

from bookshelf.services.http_client import ApiRequestError

logger = logging.getLogger(__name__)

NotificationStatus = Literal["error", "info"]


@dataclass(frozen=True, slots=True)
class Notification:
    """Message destiné à l'utilisateur (toast)."""

    status: NotificationStatus
    title: str
    description: str


Notifier = Callable[[Notification], None]
PendingSetter = Callable[[bool], None]


@dataclass(frozen=True, slots=True)
class UnauthorizedPolicy:
    """Redirige un 401 vers ``on_unauthorized`` au lieu d'une notification."""

    enabled: bool
    on_unauthorized: Callable[[], None]


def dispatch_error(
    error: ApiRequestError,
    notify: Notifier,
    set_pending: PendingSetter | None = None,
    policy: UnauthorizedPolicy | None = None,
) -> None:
    """Transforme un appel en échec en notification ou en récupération déléguée."""
    payload = error.payload

    if payload is not None:
        if policy is not None and policy.enabled and payload.status_code == 401:
            logger.debug("401 délégué au gestionnaire de récupération")
            policy.on_unauthorized()
            if set_pending is not None:
                set_pending(False)
            return

        logger.debug("Erreur serveur %s : %s", payload.status_code, payload.message)
        notify(
            Notification(
                status="error",
                title=str(payload.status_code),
                description=json.dumps(payload.message, separators=(",", ":")),
            )
        )
        return

    notify(Notification(status="error", title=error.code, description=error.message))
    logger.warning("Erreur de transport : %s (%s)", error.message, error.code)
    if set_pending is not None:
        set_pending(False)
