"""Minimal Turso Platform API client."""

from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from tursofork.models import DatabaseDescriptor, DatabaseToken, SeedReference

DEFAULT_BASE_URL = "https://api.turso.tech"


class TursoClientError(Exception):
    """Raised when the Platform API answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TursoTransportError(Exception):
    """Raised when a request never produced an HTTP response."""


class TursoClient:
    """Database operations for a single organization."""

    def __init__(
        self,
        organization: str,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        requests_module=requests,
    ):
        self.organization = organization
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.requests = requests_module
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        org = quote(self.organization, safe="")
        return f"{self.base_url}/v1/organizations/{org}{path}"

    @staticmethod
    def _database_path(name: str) -> str:
        return f"/databases/{quote(name, safe='')}"

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])

        reason = getattr(response, "reason", "") or ""
        return f"HTTP {response.status_code}: {reason}".strip()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.requests.request(
                method,
                self._url(path),
                headers=self._headers,
                timeout=self.timeout,
                **kwargs,
            )
        except self.requests.RequestException as exc:
            raise TursoTransportError(f"Request to Turso API failed: {exc}") from exc

        if response.status_code >= 400:
            raise TursoClientError(self._error_message(response), status_code=response.status_code)

        if not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as exc:
            raise TursoClientError(f"Invalid JSON in Turso API response: {exc}") from exc
        return payload if isinstance(payload, dict) else {}

    @staticmethod
    def _unwrap_database(payload: Dict[str, Any]) -> Dict[str, Any]:
        database = payload.get("database")
        return database if isinstance(database, dict) else payload

    def get_database(self, name: str) -> DatabaseDescriptor:
        payload = self._request("GET", self._database_path(name))
        return DatabaseDescriptor.from_response(self._unwrap_database(payload))

    def create_database(self, name: str, group: str, seed: SeedReference) -> DatabaseDescriptor:
        payload = self._request(
            "POST",
            "/databases",
            json={"name": name, "group": group, "seed": seed.as_payload()},
        )
        return DatabaseDescriptor.from_response(self._unwrap_database(payload))

    def delete_database(self, name: str) -> None:
        self._request("DELETE", self._database_path(name))

    def create_database_token(
        self,
        name: str,
        expiration: str = "never",
        authorization: str = "full-access",
    ) -> DatabaseToken:
        payload = self._request(
            "POST",
            f"{self._database_path(name)}/auth/tokens",
            params={"expiration": expiration, "authorization": authorization},
        )
        return DatabaseToken.from_response(payload)
