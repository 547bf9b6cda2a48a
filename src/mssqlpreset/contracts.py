"""Capabilities exchanged between a preset and the container runtime."""

from typing import Callable, Dict, Protocol

from mssqlpreset.models import ContainerOptions, NamedPort


class Container(Protocol):
    """A live container; presets only read its addresses."""

    def address(self, port_name: str) -> str:
        ...


HealthcheckFunc = Callable[[Container], None]


class Preset(Protocol):
    """Anything that can describe a container to the runtime."""

    def image(self) -> str:
        ...

    def ports(self) -> Dict[str, NamedPort]:
        ...

    def options(self) -> ContainerOptions:
        ...
