import json

import pytest
import requests

from bookshelf.config import ApiConfig
from bookshelf.models import ErrorResponse
from bookshelf.services import ApiClient, ApiRequestError
from bookshelf.services.http_client import (
    ERR_BAD_REQUEST,
    ERR_BAD_RESPONSE,
    ERR_NETWORK,
    ERR_REQUEST,
    ERR_TIMEOUT,
)


def _response(status, body=None, raw=None):
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    return requests.Session()


@pytest.fixture
def sent(session, monkeypatch):
    """Intercepte ``Session.send`` ; ``sent.reply`` fixe la réponse ou l'exception."""

    class Recorder:
        prepared = []
        kwargs = []
        reply = _response(200, {})

    def fake_send(prepared, **kwargs):
        Recorder.prepared.append(prepared)
        Recorder.kwargs.append(kwargs)
        if isinstance(Recorder.reply, Exception):
            raise Recorder.reply
        return Recorder.reply

    Recorder.prepared = []
    Recorder.kwargs = []
    monkeypatch.setattr(session, "send", fake_send)
    return Recorder


@pytest.fixture
def api(session):
    return ApiClient(ApiConfig(base_url="http://localhost:4000"), session=session)


def test_post_sends_json_to_base_url(api, sent):
    sent.reply = _response(201, {"access_token": "T1", "refresh_token": "R1"})

    response = api.post("/auth/login", json={"email": "a@b.com", "password": "x"})

    request = sent.prepared[0]
    assert request.method == "POST"
    assert request.url == "http://localhost:4000/auth/login"
    assert json.loads(request.body) == {"email": "a@b.com", "password": "x"}
    assert response.status_code == 201
    assert response.data == {"access_token": "T1", "refresh_token": "R1"}


def test_url_for_handles_slashes():
    client = ApiClient(ApiConfig(base_url="http://api.example.com"))
    assert client.url_for("books") == "http://api.example.com/books"
    assert client.url_for("/books") == "http://api.example.com/books"


def test_timeout_is_forwarded(session, sent):
    client = ApiClient(ApiConfig(timeout=2.5), session=session)

    client.get("/books")

    assert sent.kwargs[0]["timeout"] == 2.5


def test_no_timeout_by_default(api, sent):
    api.get("/books")

    assert sent.kwargs[0]["timeout"] is None


def test_credentials_attach_session_cookies(api, session, sent):
    session.cookies.set("session", "xyz")

    api.get("/books", with_credentials=True)
    api.get("/books")

    with_cookies, without_cookies = sent.prepared
    assert "session=xyz" in with_cookies.headers.get("Cookie", "")
    assert "Cookie" not in without_cookies.headers


def test_error_with_structured_payload(api, sent):
    sent.reply = _response(
        401, {"statusCode": 401, "message": ["unauthorized"], "error": "Unauthorized"}
    )

    with pytest.raises(ApiRequestError) as excinfo:
        api.get("/books", with_credentials=True)

    error = excinfo.value
    assert error.status_code == 401
    assert error.code == ERR_BAD_REQUEST
    assert error.payload == ErrorResponse(
        status_code=401, message=["unauthorized"], error="Unauthorized"
    )
    assert error.has_payload


def test_server_error_without_json_body(api, sent):
    sent.reply = _response(502, raw=b"<html>Bad gateway</html>")

    with pytest.raises(ApiRequestError) as excinfo:
        api.get("/books")

    error = excinfo.value
    assert error.payload is None
    assert error.code == ERR_BAD_RESPONSE
    assert error.message == "Request failed with status code 502"


def test_invalid_json_on_success(api, sent):
    sent.reply = _response(200, raw=b"not json")

    with pytest.raises(ApiRequestError) as excinfo:
        api.get("/books")

    assert excinfo.value.code == ERR_BAD_RESPONSE
    assert excinfo.value.status_code == 200


def test_empty_success_body_decodes_to_none(api, sent):
    sent.reply = _response(201)

    assert api.post("/auth/refresh-token", json={"refresh_token": "R1"}).data is None


@pytest.mark.parametrize(
    "exc, code",
    [
        (requests.ConnectionError("refused"), ERR_NETWORK),
        (requests.ReadTimeout("slow"), ERR_TIMEOUT),
        (requests.exceptions.InvalidURL("bad"), ERR_REQUEST),
    ],
)
def test_transport_failures(api, sent, exc, code):
    sent.reply = exc

    with pytest.raises(ApiRequestError) as excinfo:
        api.get("/books")

    assert excinfo.value.code == code
    assert excinfo.value.status_code is None
    assert excinfo.value.payload is None


def test_context_manager_closes_session(session, monkeypatch):
    closed = []
    monkeypatch.setattr(session, "close", lambda: closed.append(True))

    with ApiClient(ApiConfig(), session=session):
        pass

    assert closed == [True]


def test_base_address_is_only_reachable_through_url_for():
    client = ApiClient(ApiConfig(base_url="http://api.example.com"))

    assert not hasattr(client, "base_url")
    assert client.url_for("") == "http://api.example.com/"
