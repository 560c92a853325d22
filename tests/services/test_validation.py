import pytest

from tursofork.errors import ForkError
from tursofork.models import ForkConfig
from tursofork.services.validation import ValidationService


def make_config(**overrides):
    values = {
        "organization_name": "acme",
        "api_token": "secret",
        "existing_database_name": "main",
        "new_database_name": "fork",
    }
    values.update(overrides)
    return ForkConfig(**values)


def test_replace_requires_existing_database_name():
    service = ValidationService()

    with pytest.raises(ForkError, match="prevent accidental database deletion"):
        service.validate(make_config(replace=True, existing_database_name=""))


def test_replace_with_source_is_valid():
    ValidationService().validate(make_config(replace=True))


def test_rejects_unknown_token_authorization():
    with pytest.raises(ForkError, match="Invalid token_authorization 'admin'"):
        ValidationService().validate(make_config(token_authorization="admin"))


@pytest.mark.parametrize(
    "api_url",
    ["ftp://api.turso.tech", "api.turso.tech", "http://api.turso.tech"],
)
def test_rejects_unusable_api_urls(api_url):
    with pytest.raises(ForkError, match="api_url"):
        ValidationService().validate(make_config(api_url=api_url))


def test_allows_plain_http_for_localhost():
    ValidationService().validate(make_config(api_url="http://localhost:8080"))


def test_parse_timeout():
    service = ValidationService()

    assert service.parse_timeout("", 30.0) == 30.0
    assert service.parse_timeout("12.5", 30.0) == 12.5
    with pytest.raises(ForkError, match="number of seconds"):
        service.parse_timeout("soon", 30.0)
    with pytest.raises(ForkError, match="greater than zero"):
        service.parse_timeout("0", 30.0)
