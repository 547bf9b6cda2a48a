import logging
import time
from typing import Dict, List, Optional

from rich.console import Console

from .contracts import Preset
from .errors import PresetError
from .models import RunningContainer
from .services.command_runner import CommandRunner
from .services.docker_runtime import DockerRuntimeService

console = Console()
logger = logging.getLogger("mssqlpreset")


class PresetRunner:
    """Runs a preset to completion: start, wait until ready, initialize once."""

    def __init__(self, preset: Preset, detach: bool = False, command_timeout: Optional[float] = 300.0):
        self.preset = preset
        self.detach = detach
        self.container: Optional[RunningContainer] = None

        self.command_runner = CommandRunner(logger=logger, default_timeout=command_timeout)
        self.docker_runtime_service = DockerRuntimeService(logger=logger, console=console)

    def _run_cmd(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        retry_count: int = 0,
        retry_backoff_seconds: float = 0.0,
    ):
        return self.command_runner.run(
            cmd,
            check=check,
            capture_output=capture_output,
            env=env,
            timeout=timeout,
            retry_count=retry_count,
            retry_backoff_seconds=retry_backoff_seconds,
        )

    def start(self) -> RunningContainer:
        self.docker_runtime_service.validate_environment(self._run_cmd)
        self.container = self.docker_runtime_service.start(self.preset, self._run_cmd)
        options = self.preset.options()

        try:
            self.docker_runtime_service.wait_until_ready(
                self.container,
                options.healthcheck,
                options.wait_timeout,
            )
            console.print("[blue]Initializing database...[/blue]")
            options.init(self.container)
        except BaseException:
            # Interrupts included.
            try:
                container_logs = self.docker_runtime_service.logs(self.container, self._run_cmd)
            except PresetError as exc:
                container_logs = ""
                logger.debug("Could not read container logs: %s", exc)
            if container_logs:
                logger.debug("Container logs:\n%s", container_logs)
            self.stop()
            raise

        return self.container

    def stop(self):
        if self.container is None:
            return
        self.docker_runtime_service.stop(self.container, self._run_cmd)
        self.container = None

    def wait_for_interrupt(self):
        console.print("[dim]Press Ctrl+C to stop and remove the container.[/dim]")
        while True:
            time.sleep(1)

    def run(self) -> int:
        try:
            logger.info("Starting SQL Server container...")
            container = self.start()

            console.print(f"[bold green]Container {container.name} is ready.[/bold green]")
            console.print(f"Address: {container.address()}")
            console.print(f"Connection URL: {self.preset.dsn(container)}")

            if self.detach:
                console.print(f"[dim]Container left running. Remove it with: docker rm -f {container.name}[/dim]")
                return 0

            self.wait_for_interrupt()
            return 0

        except KeyboardInterrupt:
            console.print("[yellow]Stopping...[/yellow]")
            logger.info("Interrupted by user")
            return 0
        except PresetError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
        finally:
            if not self.detach:
                self.stop()
