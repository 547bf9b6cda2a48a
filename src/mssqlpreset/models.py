"""Shared domain models for mssql-preset."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from mssqlpreset.constants import (
    DEFAULT_DATABASE,
    DEFAULT_PASSWORD,
    DEFAULT_PORT,
    DEFAULT_PORT_NAME,
    DEFAULT_WAIT_TIMEOUT,
)


@dataclass(frozen=True)
class PresetConfig:
    """Resolved preset options. Built once, never mutated."""

    database: str = DEFAULT_DATABASE
    password: str = DEFAULT_PASSWORD
    queries: Tuple[str, ...] = ()
    license: bool = False
    port: int = DEFAULT_PORT
    version: Optional[str] = None
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT


@dataclass(frozen=True)
class NamedPort:
    name: str
    protocol: str
    port: int


@dataclass(frozen=True)
class ContainerOptions:
    """What a preset asks of the orchestrator besides image and ports."""

    healthcheck: Callable
    init: Callable
    env: Tuple[str, ...] = ()
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT


@dataclass(frozen=True)
class RunningContainer:
    """A container started by the docker runtime."""

    run_id: str
    name: str
    container_id: str
    host: str
    ports: Dict[str, int] = field(default_factory=dict)

    def address(self, port_name: str = DEFAULT_PORT_NAME) -> str:
        if port_name not in self.ports:
            raise KeyError(f"Port '{port_name}' is not published by container {self.name}")
        return f"{self.host}:{self.ports[port_name]}"
