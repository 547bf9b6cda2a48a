"""Subprocess execution service for mssql-preset."""

import os
import subprocess
import time
from typing import Dict, List, Optional

from mssqlpreset.errors import PresetError


class CommandRunner:
    """Runs docker CLI commands with consistent error handling."""

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    @staticmethod
    def _failure_message(cmd_str: str, result: subprocess.CompletedProcess, capture_output: bool) -> str:
        message = f"Command failed ({result.returncode}): {cmd_str}"
        stderr = (result.stderr or "").strip() if capture_output else ""
        return f"{message}\n{stderr}" if stderr else message

    def _backoff(self, attempt: int, max_attempts: int, delay: float, reason: str):
        self.logger.warning("Attempt %s/%s %s; retrying in %.1fs.", attempt, max_attempts, reason, delay)
        time.sleep(delay)

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        timeout: Optional[float] = None,
        retry_count: int = 0,
        retry_backoff_seconds: float = 0.0,
        env: Optional[Dict[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        """Runs ``cmd``; ``env`` is layered over the current process environment."""
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        process_env = {**os.environ, **env} if env else None
        effective_timeout = timeout if timeout is not None else self.default_timeout
        max_attempts = max(1, retry_count + 1)

        for attempt in range(1, max_attempts + 1):
            is_last = attempt == max_attempts
            try:
                result = subprocess.run(
                    cmd,
                    text=True,
                    capture_output=capture_output,
                    timeout=effective_timeout,
                    env=process_env,
                )
            except FileNotFoundError as exc:
                raise PresetError(
                    f"Required command not found: {cmd[0]}. Install it and make sure it is on PATH."
                ) from exc
            except subprocess.TimeoutExpired as exc:
                if is_last:
                    raise PresetError(f"Command timed out after {effective_timeout}s: {cmd_str}") from exc
                self._backoff(attempt, max_attempts, retry_backoff_seconds, f"timed out: {cmd_str}")
                continue
            except OSError as exc:
                raise PresetError(f"Failed to execute command: {cmd_str}. {exc}") from exc

            if capture_output and result.stdout:
                self.logger.debug("Command output: %s", result.stdout.strip())

            if result.returncode == 0:
                return result

            message = self._failure_message(cmd_str, result, capture_output)
            if not is_last:
                self._backoff(attempt, max_attempts, retry_backoff_seconds, message)
                continue
            if check:
                raise PresetError(message)

            self.logger.warning(message)
            return result

        raise PresetError(f"Command failed after retries: {cmd_str}")
