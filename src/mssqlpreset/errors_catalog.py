"""Actionable error catalog for mssql-preset."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "connection_failed": {
        "what": "Could not connect to database '{database}' at {address}: {cause}",
        "next": "The server may still be starting. Wait for the healthcheck or check container logs.",
    },
    "unexpected_healthcheck_result": {
        "what": "Unexpected healthcheck result: 1 != {value}",
        "next": "The server answered but is not healthy. Inspect the container logs.",
    },
    "database_creation_failed": {
        "what": "Can't create database '{database}': {cause}",
        "next": "Use a database name that does not exist yet and run initialization only once.",
    },
    "seed_statement_failed": {
        "what": "Seed statement #{index} failed: {statement} ({cause})",
        "next": "Fix the statement. Statements before it were already applied and are not rolled back.",
    },
    "invalid_option": {
        "what": "Invalid option '{option}': {reason}",
        "next": "Check the preset options or the configuration file.",
    },
    "queries_file_unreadable": {
        "what": "Could not read queries file: {path} ({cause})",
        "next": "Check that the file exists and is readable UTF-8 text.",
    },
    "not_ready": {
        "what": "Container {name} was not ready after {timeout}s: {cause}",
        "next": "Increase `--wait-timeout` and make sure the EULA is accepted with `--accept-eula`.",
    },
}


def actionable_error(code: str, **kwargs: object) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
