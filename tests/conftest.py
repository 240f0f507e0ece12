from unittest.mock import MagicMock

import pytest

from bookshelf.actions import BookshelfActions
from bookshelf.models import ErrorResponse
from bookshelf.services import ApiClient, ApiRequestError
from bookshelf.services.http_client import ERR_BAD_REQUEST, ERR_NETWORK
from bookshelf.state import AppState


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def notifications():
    """Collecte les notifications émises au lieu de les afficher."""
    return []


@pytest.fixture
def client():
    return MagicMock(spec=ApiClient)


@pytest.fixture
def actions(client, state, notifications):
    return BookshelfActions(client, state, notifications.append)


def server_error(status, message, error="Error"):
    return ApiRequestError(
        f"Request failed with status code {status}",
        code=ERR_BAD_REQUEST,
        status_code=status,
        payload=ErrorResponse(status_code=status, message=message, error=error),
    )


def network_error():
    return ApiRequestError("Network Error", code=ERR_NETWORK)
