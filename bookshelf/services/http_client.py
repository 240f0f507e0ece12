"""Client HTTP préconfiguré pour l'API d'authentification et de livres."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from bookshelf.config import ApiConfig
from bookshelf.models import ErrorResponse

logger = logging.getLogger(__name__)

ERR_NETWORK = "ERR_NETWORK"
ERR_TIMEOUT = "ETIMEDOUT"
ERR_BAD_REQUEST = "ERR_BAD_REQUEST"
ERR_BAD_RESPONSE = "ERR_BAD_RESPONSE"
ERR_REQUEST = "ERR_REQUEST"


class ApiRequestError(RuntimeError):
    """Erreur levée pour tout appel en échec (réponse non 2xx ou transport)."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        status_code: int | None = None,
        payload: ErrorResponse | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.payload = payload

    @property
    def has_payload(self) -> bool:
        return self.payload is not None


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Réponse 2xx décodée."""

    status_code: int
    data: Any


class ApiClient:
    """Client lié à une adresse de base fixe, utilisé pour tous les appels."""

    def __init__(self, config: ApiConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self._config.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        with_credentials: bool = False,
    ) -> ApiResponse:
        """Exécute l'appel et retourne le corps JSON décodé d'une réponse 2xx.

        Avec ``with_credentials`` les cookies de la session sont joints à la
        requête ; sinon elle part sans cookie. Les cookies posés par le serveur
        sont toujours conservés dans la session.
        """
        outgoing = requests.Request(method.upper(), self.url_for(path), json=json)
        if with_credentials:
            prepared = self._session.prepare_request(outgoing)
        else:
            prepared = outgoing.prepare()

        try:
            response = self._session.send(prepared, timeout=self._config.timeout)
        except requests.Timeout as exc:
            logger.warning("Délai dépassé pour %s %s : %s", method.upper(), path, exc)
            raise ApiRequestError(
                f"timeout of {self._config.timeout}s exceeded", code=ERR_TIMEOUT
            ) from exc
        except requests.ConnectionError as exc:
            logger.warning("Erreur réseau pour %s %s : %s", method.upper(), path, exc)
            raise ApiRequestError("Network Error", code=ERR_NETWORK) from exc
        except requests.RequestException as exc:
            logger.warning("Échec de la requête %s %s : %s", method.upper(), path, exc)
            raise ApiRequestError(str(exc), code=ERR_REQUEST) from exc

        logger.debug("%s %s -> %s", method.upper(), path, response.status_code)
        if not 200 <= response.status_code < 300:
            raise _error_from_response(response)

        try:
            data = response.json() if response.content else None
        except ValueError as exc:
            raise ApiRequestError(
                "Invalid JSON in response",
                code=ERR_BAD_RESPONSE,
                status_code=response.status_code,
            ) from exc
        return ApiResponse(status_code=response.status_code, data=data)

    def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> ApiResponse:
        return self.request("POST", path, **kwargs)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


def _error_from_response(response: requests.Response) -> ApiRequestError:
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None

    return ApiRequestError(
        f"Request failed with status code {status}",
        code=ERR_BAD_RESPONSE if status >= 500 else ERR_BAD_REQUEST,
        status_code=status,
        payload=ErrorResponse.from_payload(body, status),
    )
