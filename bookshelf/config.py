"""Gestion centralisée de la configuration du client Bookshelf."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:4000"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_THEME = "dark"
_THEMES = ("dark", "light")


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Paramètres nécessaires pour dialoguer avec l'API des livres."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    theme: str = DEFAULT_THEME

    @property
    def log_level_value(self) -> int:
        """Niveau numérique utilisable par ``logging``."""
        return logging.getLevelName(self.log_level)


def _parse_base_url(raw: str) -> str:
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"BOOKSHELF_API_URL invalide : {raw!r} (http ou https attendu).")
    return raw.rstrip("/")


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"BOOKSHELF_API_TIMEOUT doit être un nombre : {raw!r}.") from exc
    if value <= 0:
        raise ConfigError("BOOKSHELF_API_TIMEOUT doit être strictement positif.")
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"BOOKSHELF_LOG_LEVEL inconnu : {raw!r}.")
    return level


def _parse_theme(raw: str) -> str:
    theme = raw.strip().lower()
    if theme not in _THEMES:
        raise ConfigError(f"BOOKSHELF_THEME doit valoir 'dark' ou 'light', pas {raw!r}.")
    return theme


def load_config() -> ApiConfig:
    """Charge la configuration depuis l'environnement (et un éventuel ``.env``)."""
    load_dotenv()

    return ApiConfig(
        base_url=_parse_base_url(os.getenv("BOOKSHELF_API_URL", DEFAULT_BASE_URL)),
        timeout=_parse_timeout(os.getenv("BOOKSHELF_API_TIMEOUT")),
        log_level=_parse_log_level(os.getenv("BOOKSHELF_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        theme=_parse_theme(os.getenv("BOOKSHELF_THEME", DEFAULT_THEME)),
    )
