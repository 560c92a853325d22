"""Configuration loader for tursofork."""

from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

from tursofork.errors import ForkError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "organization_name",
        "existing_database_name",
        "new_database_name",
        "group_name",
        "replace",
        "create_database_token",
        "dry_run",
        "token_expiration",
        "token_authorization",
        "api_url",
        "api_timeout",
        "verbose",
        "log_file",
    }
    SECRET_KEYS = {"api_token"}

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        try:
            text = Path(config_path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ForkError(f"Config file not found: {config_path}") from exc
        except OSError as exc:
            raise ForkError(f"Cannot read config file '{config_path}': {exc}") from exc

        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ForkError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ForkError("Config file must contain a YAML mapping at the root.")

        self._reject_unknown_keys(set(parsed))
        return parsed

    def _reject_unknown_keys(self, keys: Set[str]):
        unknown = sorted(keys - self.SUPPORTED_KEYS)
        if not unknown:
            return

        message = f"Unknown configuration keys: {', '.join(unknown)}"
        if self.SECRET_KEYS & keys:
            message += (
                ". Credentials are never read from the config file; "
                "pass --api-token or set TURSO_API_TOKEN instead."
            )
        raise ForkError(message)
