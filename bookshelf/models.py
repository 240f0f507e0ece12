"""Modèles de données échangés avec l'API d'authentification et de livres."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Credentials:
    """Paire de jetons représentant une session."""

    access_token: str = ""
    refresh_token: str = ""

    @property
    def is_logged_in(self) -> bool:
        return bool(self.refresh_token)

    @classmethod
    def from_payload(cls, data: Any) -> "Credentials":
        """Construit les identifiants à partir du corps de ``/auth/login``."""
        if not isinstance(data, Mapping):
            raise ValueError("La réponse de connexion n'est pas un objet JSON.")
        tokens = {}
        for name in ("access_token", "refresh_token"):
            value = data.get(name, "")
            if not isinstance(value, str):
                raise ValueError(f"Jeton {name} invalide : chaîne attendue, reçu {value!r}.")
            tokens[name] = value
        return cls(**tokens)


@dataclass(slots=True)
class LoginInput:
    """Saisie du formulaire de connexion, modifiée champ par champ."""

    email: str = ""
    password: str = ""

    def as_payload(self) -> dict[str, str]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True, slots=True)
class Book:
    id: str
    title: str
    author: str
    category: str
    year: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Book":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            author=str(data["author"]),
            category=str(data["category"]),
            year=int(data["year"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """Charge utile d'erreur renvoyée par le service distant."""

    status_code: int
    message: list[str]
    error: str = ""

    @classmethod
    def from_payload(cls, data: Any, status_code: int) -> "ErrorResponse | None":
        """Retourne la charge utile structurée, ou None si le corps n'en est pas une.

        ``message`` peut arriver sous forme de chaîne unique : elle est alors
        placée dans une liste. Sans ``statusCode``, le statut HTTP est utilisé.
        """
        if not isinstance(data, Mapping):
            return None

        message = data.get("message", [])
        if isinstance(message, str):
            message = [message]
        elif not isinstance(message, list):
            message = [str(message)]

        raw_status = data.get("statusCode", status_code)
        try:
            code = int(raw_status)
        except (TypeError, ValueError):
            code = status_code

        return cls(
            status_code=code,
            message=[str(item) for item in message],
            error=str(data.get("error") or ""),
        )


def parse_books(data: Any) -> list[Book]:
    """Convertit le corps de ``GET /books`` en liste ordonnée de livres.

    Lève ``ValueError`` si le corps n'est pas une liste d'objets conformes.
    """
    if not isinstance(data, list):
        raise ValueError("La liste de livres attendue n'est pas un tableau JSON.")
    try:
        return [Book.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Livre mal formé dans la réponse : {exc}") from exc
