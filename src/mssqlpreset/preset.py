"""Microsoft SQL Server preset.

A preset tells a container runtime which image to run, which port to publish,
which environment to pass, how to tell that the server is ready and how to
initialize it. Used without options it creates the ``mydb`` database with the
``Gn0m!ck~`` administrator password (user ``sa``). The image refuses to start
unless its EULA is accepted with ``license=True``.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .constants import (
    DEFAULT_DATABASE,
    DEFAULT_PASSWORD,
    DEFAULT_PORT,
    DEFAULT_PORT_NAME,
    DEFAULT_WAIT_TIMEOUT,
    ENV_ACCEPT_EULA,
    ENV_PASSWORD,
    ENV_TCP_PORT,
    IMAGE,
)
from .errors import PresetError
from .errors_catalog import actionable_error
from .models import ContainerOptions, NamedPort, PresetConfig
from .services.connection import ConnectionService
from .services.healthcheck import HealthcheckService
from .services.initializer import InitializerService

logger = logging.getLogger("mssqlpreset")


def _invalid(option: str, reason: str) -> PresetError:
    return PresetError(actionable_error("invalid_option", option=option, reason=reason))


def read_queries_files(paths: Iterable[str]) -> List[str]:
    """Reads each file as a single statement, in the given order."""
    statements = []
    for path in paths:
        try:
            statements.append(Path(path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise PresetError(
                actionable_error("queries_file_unreadable", path=path, cause=exc)
            ) from exc
    return statements


def build_config(
    database: str = DEFAULT_DATABASE,
    password: str = DEFAULT_PASSWORD,
    queries: Iterable[str] = (),
    queries_files: Iterable[str] = (),
    license: bool = False,
    port: int = DEFAULT_PORT,
    version: Optional[str] = None,
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT,
) -> PresetConfig:
    if not isinstance(database, str):
        raise _invalid("database", f"expected a string, got {database!r}")
    if not database.strip():
        raise _invalid("database", "must not be empty")
    if not isinstance(password, str):
        raise _invalid("password", "expected a string")
    if not password:
        raise _invalid("password", "must not be empty")
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise _invalid("port", f"expected an integer between 1 and 65535, got {port!r}")
    if isinstance(wait_timeout, bool) or not isinstance(wait_timeout, (int, float)):
        raise _invalid("wait_timeout", f"expected a number of seconds, got {wait_timeout!r}")
    if wait_timeout <= 0:
        raise _invalid("wait_timeout", f"must be positive, got {wait_timeout!r}")
    if version is not None and not isinstance(version, str):
        raise _invalid("version", f"expected an image tag string, got {version!r}")
    if isinstance(queries, str):
        raise _invalid("queries", "expected a list of statements, got a single string")

    statements = read_queries_files(queries_files) + list(queries)
    for statement in statements:
        if not isinstance(statement, str):
            raise _invalid("queries", f"statements must be strings, got {statement!r}")

    return PresetConfig(
        database=database,
        password=password,
        queries=tuple(statements),
        license=bool(license),
        port=port,
        version=version or None,
        wait_timeout=float(wait_timeout),
    )


class MSSQLPreset:
    """Container preset for Microsoft SQL Server."""

    def __init__(self, config: PresetConfig, driver_module=None):
        self.config = config
        connection_kwargs = {"logger": logger, "password": config.password}
        if driver_module is not None:
            connection_kwargs["driver_module"] = driver_module
        self.connection_service = ConnectionService(**connection_kwargs)
        self.healthcheck_service = HealthcheckService(
            logger=logger,
            connection_service=self.connection_service,
        )
        self.initializer_service = InitializerService(
            logger=logger,
            connection_service=self.connection_service,
        )

    @property
    def license_accepted(self) -> bool:
        return self.config.license

    def image(self) -> str:
        if self.config.version:
            return f"{IMAGE}:{self.config.version}"
        return IMAGE

    def ports(self) -> Dict[str, NamedPort]:
        return {DEFAULT_PORT_NAME: NamedPort(DEFAULT_PORT_NAME, "tcp", self.config.port)}

    def env(self) -> List[str]:
        env = [f"{ENV_PASSWORD}={self.config.password}"]
        if self.config.port != DEFAULT_PORT:
            env.append(f"{ENV_TCP_PORT}={self.config.port}")
        if self.config.license:
            env.append(f"{ENV_ACCEPT_EULA}=Y")
        return env

    def options(self) -> ContainerOptions:
        return ContainerOptions(
            healthcheck=self.healthcheck,
            init=self.init,
            env=tuple(self.env()),
            wait_timeout=self.config.wait_timeout,
        )

    def healthcheck(self, container):
        self.healthcheck_service.check(container.address(DEFAULT_PORT_NAME))

    def init(self, container):
        self.initializer_service.initialize(
            container.address(DEFAULT_PORT_NAME),
            self.config.database,
            self.config.queries,
        )

    def dsn(self, container) -> str:
        return self.connection_service.dsn(
            container.address(DEFAULT_PORT_NAME),
            self.config.database,
        )


def preset(driver_module=None, **options) -> MSSQLPreset:
    """Creates a SQL Server preset from keyword options (see ``build_config``)."""
    return MSSQLPreset(build_config(**options), driver_module=driver_module)
