"""Shared domain models for tursofork."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

CONNECTION_SCHEME = "libsql"


def _first_present(payload: Dict[str, Any], synonyms: Sequence[str]) -> Optional[str]:
    for key in synonyms:
        value = payload.get(key)
        if value:
            return str(value)
    return None


def connection_url(hostname: str) -> str:
    return f"{CONNECTION_SCHEME}://{hostname}"


@dataclass(frozen=True)
class ForkConfig:
    """Validated inputs for a single fork invocation."""

    organization_name: str
    api_token: str = field(repr=False)
    existing_database_name: str
    new_database_name: str
    group_name: str = ""
    replace: bool = False
    create_database_token: bool = False
    dry_run: bool = False
    token_expiration: str = "never"
    token_authorization: str = "full-access"
    api_url: str = "https://api.turso.tech"
    api_timeout: float = 30.0


@dataclass(frozen=True)
class SeedReference:
    """Source a new database is cloned from."""

    name: str
    type: str = "database"

    def as_payload(self) -> Dict[str, str]:
        return {"type": self.type, "name": self.name}


@dataclass(frozen=True)
class DatabaseDescriptor:
    """Database record returned by the Platform API.

    The API is inconsistent about field casing, so every field is decoded from an
    ordered list of accepted spellings and the first non-empty one wins.
    """

    NAME_FIELDS = ("name", "Name")
    GROUP_FIELDS = ("group",)
    HOSTNAME_FIELDS = ("hostname", "Hostname")
    DB_ID_FIELDS = ("DbId", "dbId", "id")

    name: Optional[str] = None
    group: Optional[str] = None
    hostname: Optional[str] = None
    db_id: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_response(cls, payload: Any) -> "DatabaseDescriptor":
        if not isinstance(payload, dict):
            return cls()

        return cls(
            name=_first_present(payload, cls.NAME_FIELDS),
            group=_first_present(payload, cls.GROUP_FIELDS),
            hostname=_first_present(payload, cls.HOSTNAME_FIELDS),
            db_id=_first_present(payload, cls.DB_ID_FIELDS),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class DatabaseToken:
    """Access token issued for a single database."""

    jwt: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_response(cls, payload: Any) -> "DatabaseToken":
        if not isinstance(payload, dict):
            return cls()
        return cls(jwt=_first_present(payload, ("jwt",)))
