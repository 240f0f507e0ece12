"""Client de bureau pour l'API de livres."""

__version__ = "0.1.0"
