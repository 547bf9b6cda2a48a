"""Docker runtime services for mssql-preset."""

import time
import uuid
from typing import Callable, Dict, List, Tuple

from mssqlpreset.contracts import HealthcheckFunc, Preset
from mssqlpreset.errors import PresetError
from mssqlpreset.errors_catalog import actionable_error
from mssqlpreset.models import RunningContainer

LABEL = "mssqlpreset.run_id"
PORT_LOOKUP_RETRIES = 3
PORT_LOOKUP_BACKOFF_SECONDS = 0.5
LOGS_TIMEOUT_SECONDS = 15.0


class DockerRuntimeService:
    """Starts preset containers with the docker CLI and waits for them."""

    def __init__(
        self,
        logger,
        console,
        host: str = "127.0.0.1",
        poll_interval: float = 0.25,
        max_poll_interval: float = 2.0,
    ):
        self.logger = logger
        self.console = console
        self.host = host
        self.poll_interval = poll_interval
        self.max_poll_interval = max_poll_interval

    def validate_environment(self, run_cmd: Callable):
        self.console.print("[blue]Validating Docker environment...[/blue]")
        run_cmd(["docker", "--version"], capture_output=True)
        self.console.print("[green]Docker is available.[/green]")

    @staticmethod
    def _split_env(env) -> Tuple[List[str], Dict[str, str]]:
        names: List[str] = []
        values: Dict[str, str] = {}
        for item in env:
            name, _, value = item.partition("=")
            names.append(name)
            values[name] = value
        return names, values

    def build_run_command(self, name: str, run_id: str, preset: Preset) -> Tuple[List[str], Dict[str, str]]:
        # Values travel through the process environment so passwords stay out of argv.
        env_names, env_values = self._split_env(preset.options().env)

        cmd = ["docker", "run", "-d", "--name", name, "--label", f"{LABEL}={run_id}"]
        for env_name in env_names:
            cmd += ["-e", env_name]
        for port in preset.ports().values():
            cmd += ["-p", f"{self.host}::{port.port}/{port.protocol}"]
        cmd.append(preset.image())
        return cmd, env_values

    @staticmethod
    def _parse_host_port(output: str) -> int:
        for line in output.splitlines():
            _, sep, port = line.strip().rpartition(":")
            if sep and port.isdigit():
                return int(port)
        raise PresetError(f"Could not parse published port from docker output: {output!r}")

    def _published_ports(self, container_id: str, preset: Preset, run_cmd: Callable) -> Dict[str, int]:
        # Port bindings can lag behind `docker run` returning.
        ports: Dict[str, int] = {}
        for port_name, port in preset.ports().items():
            port_result = run_cmd(
                ["docker", "port", container_id, f"{port.port}/{port.protocol}"],
                check=True,
                capture_output=True,
                retry_count=PORT_LOOKUP_RETRIES,
                retry_backoff_seconds=PORT_LOOKUP_BACKOFF_SECONDS,
            )
            ports[port_name] = self._parse_host_port(port_result.stdout)
        return ports

    def start(self, preset: Preset, run_cmd: Callable) -> RunningContainer:
        run_id = uuid.uuid4().hex[:10]
        name = f"mssqlpreset_{run_id}"

        if not getattr(preset, "license_accepted", True):
            self.logger.warning(
                "EULA not accepted; the SQL Server image will refuse to start. Pass license=True."
            )

        self.console.print(f"[blue]Starting {preset.image()} as {name}...[/blue]")
        cmd, env = self.build_run_command(name, run_id, preset)
        result = run_cmd(cmd, check=True, capture_output=True, env=env)
        container_id = result.stdout.strip()

        try:
            ports = self._published_ports(container_id, preset, run_cmd)
        except BaseException:
            self.logger.warning("Removing container %s after failed port lookup", name)
            run_cmd(["docker", "rm", "-f", "-v", container_id], check=False, capture_output=True)
            raise

        container = RunningContainer(
            run_id=run_id,
            name=name,
            container_id=container_id,
            host=self.host,
            ports=ports,
        )
        self.logger.info("Container %s started with ports %s", name, ports)
        return container

    def wait_until_ready(self, container: RunningContainer, healthcheck: HealthcheckFunc, wait_timeout: float):
        """Calls the healthcheck until it passes. Every preset error counts as not ready."""
        self.console.print("[yellow]Waiting for database to be ready...[/yellow]")

        deadline = time.monotonic() + wait_timeout
        interval = self.poll_interval
        attempts = 0

        while True:
            attempts += 1
            try:
                healthcheck(container)
            except PresetError as exc:
                if time.monotonic() + interval > deadline:
                    raise PresetError(
                        actionable_error(
                            "not_ready",
                            name=container.name,
                            timeout=wait_timeout,
                            cause=exc,
                        )
                    ) from exc
                self.logger.debug("Not ready yet (attempt %s): %s", attempts, exc)
                time.sleep(interval)
                interval = min(interval * 2, self.max_poll_interval)
                continue

            self.console.print("[green]Database is ready.[/green]")
            self.logger.info("Container %s ready after %s attempt(s)", container.name, attempts)
            return

    def logs(self, container: RunningContainer, run_cmd: Callable, tail: int = 50) -> str:
        result = run_cmd(
            ["docker", "logs", "--tail", str(tail), container.container_id],
            check=False,
            capture_output=True,
            timeout=LOGS_TIMEOUT_SECONDS,
        )
        return "\n".join(part.strip() for part in (result.stdout, result.stderr) if part)

    def stop(self, container: RunningContainer, run_cmd: Callable):
        self.console.print(f"[dim]Removing container {container.name}...[/dim]")
        self.logger.info("Removing container %s", container.name)
        run_cmd(["docker", "rm", "-f", "-v", container.container_id], check=False, capture_output=True)
