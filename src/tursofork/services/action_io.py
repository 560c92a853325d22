"""GitHub Actions inputs, outputs and workflow commands."""

import logging
import os
import uuid
from typing import Dict, Mapping, Optional, Set

import click

from tursofork.errors import ForkError

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class SecretMaskFilter(logging.Filter):
    """Replaces registered secret values in log records."""

    MASK = "***"

    def __init__(self):
        super().__init__()
        self.secrets: Set[str] = set()

    def add(self, secret: str):
        if secret:
            self.secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, self.MASK)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class ActionIO:
    """Status provider with the same contract as the Actions toolkit."""

    def __init__(
        self,
        logger: logging.Logger,
        overrides: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.logger = logger
        self.overrides = dict(overrides or {})
        self.environ = os.environ if environ is None else environ
        self.outputs: Dict[str, str] = {}
        self.failed = False
        self.failure_message: Optional[str] = None
        self.mask_filter = self._install_mask_filter()

    def _install_mask_filter(self) -> SecretMaskFilter:
        for existing in self.logger.filters:
            if isinstance(existing, SecretMaskFilter):
                return existing

        mask_filter = SecretMaskFilter()
        self.logger.addFilter(mask_filter)
        return mask_filter

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def _issue(self, command: str, message: str = "", properties: Optional[Dict[str, str]] = None):
        props = ""
        if properties:
            props = " " + ",".join(f"{key}={escape_property(value)}" for key, value in properties.items())
        click.echo(f"::{command}{props}::{escape_data(message)}")

    def get_input(self, name: str, required: bool = False) -> str:
        if name in self.overrides:
            value = self.overrides[name]
        else:
            env_name = f"INPUT_{name.replace(' ', '_').upper()}"
            value = self.environ.get(env_name, "")

        value = (value or "").strip()
        if required and not value:
            raise ForkError(f"Input required and not supplied: {name}")
        return value

    def get_boolean_input(self, name: str, default: bool = False) -> bool:
        value = self.get_input(name)
        if not value:
            return default
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise ForkError(
            f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
        )

    def set_output(self, name: str, value: str):
        self.outputs[name] = value
        output_file = self.environ.get("GITHUB_OUTPUT")
        if not output_file:
            self._issue("set-output", value, {"name": name})
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ForkError(f"Unexpected input: output '{name}' contains the heredoc delimiter")
        try:
            with open(output_file, "a", encoding="utf-8") as file_obj:
                file_obj.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        except OSError as exc:
            raise ForkError(f"Could not write output '{name}' to {output_file}: {exc}") from exc

    def set_secret(self, secret: str):
        self.mask_filter.add(secret)
        self._issue("add-mask", secret)

    def debug(self, message: str):
        self.logger.debug(message)

    def info(self, message: str):
        self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def set_failed(self, message: str):
        self.failed = True
        self.failure_message = message
        self._issue("error", message)
        self.logger.error(message)
