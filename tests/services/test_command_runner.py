import sys

import pytest

from mssqlpreset.errors import PresetError
from mssqlpreset.services.command_runner import CommandRunner


def test_command_runner_raises_with_stderr(dummy_logger):
    runner = CommandRunner(logger=dummy_logger)

    with pytest.raises(PresetError, match="no such container"):
        runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('no such container'); sys.exit(1)"],
            check=True,
            capture_output=True,
        )


def test_command_runner_returns_when_check_disabled(dummy_logger):
    runner = CommandRunner(logger=dummy_logger)

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.exit(1)"],
        check=False,
        capture_output=True,
    )

    assert result.returncode == 1


def test_command_runner_passes_extra_environment(dummy_logger):
    runner = CommandRunner(logger=dummy_logger)

    result = runner.run(
        [sys.executable, "-c", "import os; print(os.environ['SA_PASSWORD'])"],
        capture_output=True,
        env={"SA_PASSWORD": "Gn0m!ck~"},
    )

    assert result.stdout.strip() == "Gn0m!ck~"


def test_command_runner_retries_before_success(tmp_path, monkeypatch, dummy_logger):
    runner = CommandRunner(logger=dummy_logger)
    monkeypatch.chdir(tmp_path)

    command = [
        sys.executable,
        "-c",
        (
            "from pathlib import Path;"
            "p=Path('retry-counter.txt');"
            "n=int(p.read_text()) if p.exists() else 0;"
            "p.write_text(str(n+1));"
            "import sys; sys.exit(1 if n == 0 else 0)"
        ),
    ]

    result = runner.run(command, capture_output=True, retry_count=1)

    assert result.returncode == 0
    assert (tmp_path / "retry-counter.txt").read_text() == "2"


def test_command_runner_timeout_raises_error(dummy_logger):
    runner = CommandRunner(logger=dummy_logger, default_timeout=0.1)

    with pytest.raises(PresetError, match="timed out"):
        runner.run([sys.executable, "-c", "import time; time.sleep(2)"], capture_output=True)


def test_command_runner_reports_missing_binary(dummy_logger):
    runner = CommandRunner(logger=dummy_logger)

    with pytest.raises(PresetError, match="Required command not found"):
        runner.run(["mssqlpreset-definitely-missing-binary"])
