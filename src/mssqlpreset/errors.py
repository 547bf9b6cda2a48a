"""Domain errors for mssql-preset."""

from typing import Any


class PresetError(RuntimeError):
    """Raised when a container cannot be prepared for use."""


class PresetConnectionError(PresetError, ConnectionError):
    """Raised when a database session cannot be established."""

    def __init__(self, message: str, address: str, database: str):
        super().__init__(message)
        self.address = address
        self.database = database


class UnexpectedHealthcheckResult(PresetError):
    """Raised when the liveness query answers with something other than 1."""

    def __init__(self, message: str, value: Any):
        super().__init__(message)
        self.value = value


class DatabaseCreationError(PresetError):
    """Raised when the configured database cannot be created."""

    def __init__(self, message: str, database: str):
        super().__init__(message)
        self.database = database


class SeedStatementError(PresetError):
    """Raised on the first seed statement that fails. Earlier ones stay applied."""

    def __init__(self, message: str, statement: str, index: int):
        super().__init__(message)
        self.statement = statement
        self.index = index
