import logging
import os

import click
from rich.logging import RichHandler

from .constants import DEFAULT_DATABASE, DEFAULT_PASSWORD, DEFAULT_PORT, DEFAULT_WAIT_TIMEOUT
from .core import PresetRunner
from .errors import PresetError
from .preset import preset
from .services.config_loader import ConfigLoader

DEFAULT_CONFIG_FILE = ".mssqlpreset.yml"


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _optional_str(value):
    return None if value is None else str(value)


def _resolve_list(cli_values, config, key):
    if cli_values:
        return list(cli_values)
    return list(config.get(key) or [])


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option("--database", required=False, help=f"Database to create (default: {DEFAULT_DATABASE})")
@click.option(
    "--password",
    required=False,
    help="Administrator (sa) password. Must satisfy the SQL Server password policy.",
)
@click.option(
    "--query",
    "queries",
    multiple=True,
    help="Statement to run in the new database. Repeat to run several, in order.",
)
@click.option(
    "--queries-file",
    "queries_files",
    multiple=True,
    type=click.Path(),
    help="File whose contents run as one statement, before any --query. Repeatable.",
)
@click.option(
    "--accept-eula",
    "license",
    is_flag=True,
    default=None,
    help="Accept the SQL Server EULA. The image does not start without it.",
)
@click.option("--port", type=int, default=None, help=f"Server port inside the container (default: {DEFAULT_PORT})")
@click.option("--version", "version", required=False, help="Image tag, e.g. 2019-latest")
@click.option(
    "--wait-timeout",
    type=float,
    default=None,
    help=f"Seconds to wait for the server to become ready (default: {DEFAULT_WAIT_TIMEOUT:g})",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option("--detach", is_flag=True, default=None, help="Leave the container running and exit.")
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(
    database,
    password,
    queries,
    queries_files,
    license,
    port,
    version,
    wait_timeout,
    config,
    detach,
    verbose,
    log_file,
):
    """Start a disposable SQL Server container with a seeded database."""
    logger = logging.getLogger("mssqlpreset")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except PresetError as exc:
        raise click.ClickException(str(exc)) from exc

    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")
    detach = bool(_resolve_option(detach, config_values, "detach", default=False))

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

    try:
        mssql = preset(
            database=str(_resolve_option(database, config_values, "database", default=DEFAULT_DATABASE)),
            password=str(_resolve_option(password, config_values, "password", default=DEFAULT_PASSWORD)),
            queries=_resolve_list(queries, config_values, "queries"),
            queries_files=_resolve_list(queries_files, config_values, "queries_files"),
            license=bool(_resolve_option(license, config_values, "license", default=False)),
            port=int(_resolve_option(port, config_values, "port", default=DEFAULT_PORT)),
            version=_optional_str(_resolve_option(version, config_values, "version")),
            wait_timeout=_resolve_option(wait_timeout, config_values, "wait_timeout", default=DEFAULT_WAIT_TIMEOUT),
        )
    except PresetError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(PresetRunner(mssql, detach=detach).run())


if __name__ == "__main__":
    main()
