import logging
from typing import Callable, Optional

from .errors import ForkError
from .errors_catalog import remediation_hint
from .models import DatabaseDescriptor, ForkConfig, SeedReference, connection_url
from .services.action_io import ActionIO
from .services.dry_run import DryRunReporter
from .services.remote import FailureKind, RemoteFailure, call_remote
from .services.turso_api import DEFAULT_BASE_URL, TursoClient
from .services.validation import ValidationService

logger = logging.getLogger("tursofork")

DEFAULT_API_TIMEOUT = 30.0


class DatabaseForker:
    """Creates a database fork seeded from an existing database."""

    def __init__(
        self,
        action_io: Optional[ActionIO] = None,
        client_factory: Callable[..., TursoClient] = TursoClient,
    ):
        self.action_io = action_io or ActionIO(logger=logger)
        self.client_factory = client_factory
        self.validation_service = ValidationService()
        self.dry_run_reporter = DryRunReporter()
        self.client: Optional[TursoClient] = None

    def read_config(self) -> ForkConfig:
        io = self.action_io
        return ForkConfig(
            organization_name=io.get_input("organization_name", required=True),
            api_token=io.get_input("api_token", required=True),
            existing_database_name=io.get_input("existing_database_name", required=True),
            new_database_name=io.get_input("new_database_name", required=True),
            group_name=io.get_input("group_name"),
            replace=io.get_boolean_input("replace"),
            create_database_token=io.get_boolean_input("create_database_token"),
            dry_run=io.get_boolean_input("dry_run"),
            token_expiration=io.get_input("token_expiration") or "never",
            token_authorization=io.get_input("token_authorization") or "full-access",
            api_url=io.get_input("api_url") or DEFAULT_BASE_URL,
            api_timeout=self.validation_service.parse_timeout(
                io.get_input("api_timeout"), DEFAULT_API_TIMEOUT
            ),
        )

    def report_dry_run(self, config: ForkConfig):
        for line in self.dry_run_reporter.describe(config):
            self.action_io.info(line)

    def resolve_group(self, config: ForkConfig) -> str:
        if config.group_name:
            return config.group_name

        self.action_io.info(
            f"Fetching group information for database: {config.existing_database_name}"
        )
        result = call_remote(self.client.get_database, config.existing_database_name)
        if not result.ok:
            raise ForkError(f"Failed to fetch database: {result.failure.message}")

        descriptor: DatabaseDescriptor = result.value
        if not descriptor.group:
            raise ForkError("Group name not found in existing database response")

        self.action_io.info(f"Found group: {descriptor.group}")
        return descriptor.group

    def remove_existing_fork(self, config: ForkConfig):
        target = config.new_database_name
        self.action_io.info(f"Checking if database fork '{target}' exists...")

        lookup = call_remote(self.client.get_database, target)
        if not lookup.ok:
            if lookup.failure.kind == FailureKind.NOT_FOUND:
                self.action_io.info(f"Database fork '{target}' does not exist, skipping deletion")
                return
            raise ForkError(f"Failed to check if database fork exists: {lookup.failure.message}")

        self.action_io.info(f"Database fork '{target}' exists, deleting...")
        deletion = call_remote(self.client.delete_database, target)
        if not deletion.ok:
            raise ForkError(f"Failed to delete existing database fork: {deletion.failure.message}")

        self.action_io.info(f"✓ Successfully deleted existing database fork '{target}'")

    def _creation_failure_message(self, config: ForkConfig, failure: RemoteFailure) -> str:
        message = f"Failed to create database fork: {failure.message}"
        if not failure.from_client:
            return message

        hint_code = "fork_still_exists" if config.replace else "fork_may_exist"
        return f"{message} {remediation_hint(hint_code, database=config.new_database_name)}"

    def create_fork(self, config: ForkConfig, group: str) -> str:
        target = config.new_database_name
        source = config.existing_database_name
        self.action_io.info(
            f"Creating database fork '{target}' in group '{group}' from seed '{source}'"
        )

        result = call_remote(
            self.client.create_database,
            target,
            group=group,
            seed=SeedReference(name=source),
        )
        if not result.ok:
            raise ForkError(self._creation_failure_message(config, result.failure))

        descriptor: DatabaseDescriptor = result.value
        if not descriptor.hostname:
            raise ForkError("Hostname not found in response")

        self.action_io.set_output("hostname", descriptor.hostname)
        self.action_io.set_output("database_url", connection_url(descriptor.hostname))
        return descriptor.hostname

    def issue_token(self, config: ForkConfig):
        target = config.new_database_name
        self.action_io.info(f"Creating authentication token for database: {target}")

        result = call_remote(
            self.client.create_database_token,
            target,
            expiration=config.token_expiration,
            authorization=config.token_authorization,
        )
        if not result.ok:
            raise ForkError(f"Failed to create database token: {result.failure.message}")

        token = result.value
        if not token.jwt:
            raise ForkError("Token not found in response")

        self.action_io.set_secret(token.jwt)
        self.action_io.info("Database token created successfully")
        self.action_io.set_output("database_token", token.jwt)

    def run(self) -> int:
        try:
            config = self.read_config()
            self.action_io.set_secret(config.api_token)
            self.validation_service.validate(config)

            if config.dry_run:
                self.report_dry_run(config)
                return self.action_io.exit_code

            self.client = self.client_factory(
                organization=config.organization_name,
                api_token=config.api_token,
                base_url=config.api_url,
                timeout=config.api_timeout,
            )

            group = self.resolve_group(config)
            if config.replace:
                self.remove_existing_fork(config)
            self.create_fork(config, group)
            if config.create_database_token:
                self.issue_token(config)

            self.action_io.info("✓ Database fork created successfully")
        except ForkError as exc:
            self.action_io.set_failed(str(exc))
        except Exception as exc:
            logger.debug("Unexpected error", exc_info=True)
            self.action_io.set_failed(str(exc) or "Unknown error occurred")

        return self.action_io.exit_code
