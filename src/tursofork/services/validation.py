"""Input validation helpers for tursofork."""

from urllib.parse import urlparse

from tursofork.errors import ForkError
from tursofork.models import ForkConfig


class ValidationService:
    """Cross-field checks run before any remote call."""

    TOKEN_AUTHORIZATIONS = ("full-access", "read-only")
    LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}

    def validate(self, config: ForkConfig):
        self.ensure_replace_has_source(config)
        self.ensure_token_authorization(config.token_authorization)
        self.ensure_api_url(config.api_url)

    def ensure_replace_has_source(self, config: ForkConfig):
        if config.replace and not config.existing_database_name:
            raise ForkError(
                "The replace option can only be used when existing_database_name is provided "
                "to prevent accidental database deletion."
            )

    def ensure_token_authorization(self, authorization: str):
        if authorization not in self.TOKEN_AUTHORIZATIONS:
            allowed = ", ".join(self.TOKEN_AUTHORIZATIONS)
            raise ForkError(
                f"Invalid token_authorization '{authorization}'. Supported values: {allowed}"
            )

    def ensure_api_url(self, api_url: str):
        parsed = urlparse(api_url)
        scheme = parsed.scheme.lower()
        if scheme not in {"http", "https"} or not parsed.hostname:
            raise ForkError(f"api_url must be an http(s) URL: {api_url}")
        if scheme == "http" and parsed.hostname not in self.LOCAL_HOSTS:
            raise ForkError(f"api_url uses insecure HTTP: {api_url}. Switch to HTTPS.")

    def parse_timeout(self, value: str, default: float) -> float:
        if not value:
            return default
        try:
            timeout = float(value)
        except ValueError as exc:
            raise ForkError(f"api_timeout must be a number of seconds, got '{value}'") from exc
        if timeout <= 0:
            raise ForkError(f"api_timeout must be greater than zero, got '{value}'")
        return timeout
