import logging
import os

import click
from rich.logging import RichHandler

from .core import DatabaseForker
from .errors import ForkError
from .services.action_io import ActionIO
from .services.config_loader import ConfigLoader
from .services.validation import ValidationService


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _as_input(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option("--organization-name", required=False, help="Turso organization slug.")
@click.option(
    "--api-token",
    required=False,
    envvar="TURSO_API_TOKEN",
    help="Turso Platform API token (or TURSO_API_TOKEN).",
)
@click.option("--existing-database-name", required=False, help="Database to fork from.")
@click.option("--new-database-name", required=False, help="Name of the database fork.")
@click.option(
    "--group-name",
    required=False,
    help="Group for the fork. Defaults to the group of the existing database.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to .tursofork.yml if present.",
)
@click.option(
    "--replace",
    is_flag=True,
    default=None,
    help="Delete an existing database with the fork's name before creating it.",
)
@click.option(
    "--create-database-token",
    is_flag=True,
    default=None,
    help="Issue an authentication token for the new fork.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Validate inputs and print planned operations without calling the API.",
)
@click.option(
    "--token-expiration",
    required=False,
    help="Token lifetime such as '2w1d30m', or 'never' (default).",
)
@click.option(
    "--token-authorization",
    required=False,
    type=click.Choice(ValidationService.TOKEN_AUTHORIZATIONS),
    help="Token access level (default: full-access).",
)
@click.option("--api-url", required=False, help="Platform API base URL.")
@click.option(
    "--api-timeout",
    required=False,
    type=float,
    default=None,
    help="HTTP timeout in seconds for each API request (default: 30).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(
    organization_name,
    api_token,
    existing_database_name,
    new_database_name,
    group_name,
    config,
    replace,
    create_database_token,
    dry_run,
    token_expiration,
    token_authorization,
    api_url,
    api_timeout,
    verbose,
    log_file,
):
    """Fork a Turso database, optionally replacing an existing fork.

    Values not given on the command line fall back to the config file and then to
    GitHub Actions inputs (INPUT_* environment variables).
    """
    logger = logging.getLogger("tursofork")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), ".tursofork.yml")
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except ForkError as exc:
        raise click.ClickException(str(exc)) from exc

    inputs = {
        "organization_name": _resolve_option(organization_name, config_values, "organization_name"),
        "api_token": api_token,
        "existing_database_name": _resolve_option(
            existing_database_name, config_values, "existing_database_name"
        ),
        "new_database_name": _resolve_option(new_database_name, config_values, "new_database_name"),
        "group_name": _resolve_option(group_name, config_values, "group_name"),
        "replace": _resolve_option(replace, config_values, "replace"),
        "create_database_token": _resolve_option(
            create_database_token, config_values, "create_database_token"
        ),
        "dry_run": _resolve_option(dry_run, config_values, "dry_run"),
        "token_expiration": _resolve_option(token_expiration, config_values, "token_expiration"),
        "token_authorization": _resolve_option(
            token_authorization, config_values, "token_authorization"
        ),
        "api_url": _resolve_option(api_url, config_values, "api_url"),
        "api_timeout": _resolve_option(api_timeout, config_values, "api_timeout"),
    }
    overrides = {key: _as_input(value) for key, value in inputs.items() if value is not None}

    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    action_io = ActionIO(logger=logger, overrides=overrides)
    forker = DatabaseForker(action_io=action_io)
    raise SystemExit(forker.run())


if __name__ == "__main__":
    main()
