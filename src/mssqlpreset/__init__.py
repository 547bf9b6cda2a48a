"""
mssql-preset - disposable Microsoft SQL Server containers for integration tests
"""

__version__ = "0.1.0"

from .errors import (
    DatabaseCreationError,
    PresetConnectionError,
    PresetError,
    SeedStatementError,
    UnexpectedHealthcheckResult,
)
from .preset import MSSQLPreset, build_config, preset

__all__ = [
    "DatabaseCreationError",
    "MSSQLPreset",
    "PresetConnectionError",
    "PresetError",
    "SeedStatementError",
    "UnexpectedHealthcheckResult",
    "build_config",
    "preset",
]
