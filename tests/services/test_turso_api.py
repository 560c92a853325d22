import pytest

from tursofork.models import SeedReference
from tursofork.services.remote import FailureKind, call_remote
from tursofork.services.turso_api import TursoClient, TursoClientError, TursoTransportError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK", text=None):
        self.status_code = status_code
        self.payload = payload
        self.reason = reason
        if text is not None:
            self.content = text.encode("utf-8")
        else:
            self.content = b"{}" if payload is not None else b""

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeRequestsModule:
    class RequestException(Exception):
        pass

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload={})
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def build_client(requests_module):
    return TursoClient(
        organization="acme",
        api_token="secret",
        base_url="https://api.example.com/",
        timeout=12.0,
        requests_module=requests_module,
    )


def test_get_database_unwraps_envelope_and_sends_auth_header():
    requests_module = FakeRequestsModule(
        FakeResponse(payload={"database": {"Name": "main", "group": "default", "Hostname": "main-acme.turso.io"}})
    )
    client = build_client(requests_module)

    descriptor = client.get_database("main")

    method, url, kwargs = requests_module.calls[0]
    assert method == "GET"
    assert url == "https://api.example.com/v1/organizations/acme/databases/main"
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["timeout"] == 12.0
    assert descriptor.name == "main"
    assert descriptor.group == "default"
    assert descriptor.hostname == "main-acme.turso.io"


def test_create_database_posts_seed_payload():
    requests_module = FakeRequestsModule(
        FakeResponse(payload={"database": {"DbId": "abc", "Hostname": "fork-acme.turso.io", "Name": "fork"}})
    )
    client = build_client(requests_module)

    descriptor = client.create_database("fork", group="default", seed=SeedReference(name="main"))

    method, url, kwargs = requests_module.calls[0]
    assert method == "POST"
    assert url.endswith("/v1/organizations/acme/databases")
    assert kwargs["json"] == {
        "name": "fork",
        "group": "default",
        "seed": {"type": "database", "name": "main"},
    }
    assert descriptor.hostname == "fork-acme.turso.io"
    assert descriptor.db_id == "abc"


def test_delete_database_accepts_empty_body():
    requests_module = FakeRequestsModule(FakeResponse(payload=None))
    client = build_client(requests_module)

    client.delete_database("fork")

    method, url, _ = requests_module.calls[0]
    assert method == "DELETE"
    assert url.endswith("/databases/fork")


def test_create_database_token_passes_query_parameters():
    requests_module = FakeRequestsModule(FakeResponse(payload={"jwt": "token-value"}))
    client = build_client(requests_module)

    token = client.create_database_token("fork", expiration="1d", authorization="read-only")

    method, url, kwargs = requests_module.calls[0]
    assert method == "POST"
    assert url.endswith("/databases/fork/auth/tokens")
    assert kwargs["params"] == {"expiration": "1d", "authorization": "read-only"}
    assert token.jwt == "token-value"


def test_error_response_raises_client_error_with_status():
    requests_module = FakeRequestsModule(
        FakeResponse(status_code=404, payload={"error": "could not find database with name fork"})
    )
    client = build_client(requests_module)

    with pytest.raises(TursoClientError, match="could not find database") as exc_info:
        client.get_database("fork")

    assert exc_info.value.status_code == 404


def test_error_response_without_json_uses_status_line():
    requests_module = FakeRequestsModule(
        FakeResponse(status_code=502, payload=None, reason="Bad Gateway", text="<html>")
    )
    client = build_client(requests_module)

    with pytest.raises(TursoClientError, match="HTTP 502: Bad Gateway"):
        client.delete_database("fork")


def test_transport_errors_are_not_client_errors():
    requests_module = FakeRequestsModule(
        error=FakeRequestsModule.RequestException("Max retries exceeded with url: /databases/preview-404")
    )
    client = build_client(requests_module)

    with pytest.raises(TursoTransportError, match="preview-404") as exc_info:
        client.get_database("preview-404")

    assert not isinstance(exc_info.value, TursoClientError)


def test_transport_error_with_not_found_text_is_a_generic_failure():
    requests_module = FakeRequestsModule(
        error=FakeRequestsModule.RequestException("host not found: api.example.com")
    )
    client = build_client(requests_module)

    result = call_remote(client.get_database, "fork")

    assert not result.ok
    assert result.failure.kind == FailureKind.ERROR
    assert not result.failure.from_client
