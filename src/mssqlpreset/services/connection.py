"""SQL Server session services for mssql-preset."""

from typing import Tuple
from urllib.parse import quote

import pymssql

from mssqlpreset.constants import ADMIN_USER, LOGIN_TIMEOUT
from mssqlpreset.errors import PresetConnectionError
from mssqlpreset.errors_catalog import actionable_error


class ConnectionService:
    """Opens administrative sessions against a SQL Server address."""

    def __init__(self, logger, password: str, driver_module=pymssql, login_timeout: int = LOGIN_TIMEOUT):
        self.logger = logger
        self.password = password
        self.driver = driver_module
        self.login_timeout = login_timeout

    @staticmethod
    def split_address(address: str) -> Tuple[str, str]:
        host, sep, port = address.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"Address must look like host:port, got '{address}'")
        return host.strip("[]"), port

    def dsn(self, address: str, database: str) -> str:
        return "sqlserver://{user}:{password}@{address}?database={database}".format(
            user=ADMIN_USER,
            password=quote(self.password, safe=""),
            address=address,
            database=quote(database, safe=""),
        )

    def connect(self, address: str, database: str):
        """Returns an autocommit DB-API connection logged in as the administrator."""
        host, port = self.split_address(address)
        self.logger.debug("Connecting to %s at %s as %s", database, address, ADMIN_USER)

        try:
            return self.driver.connect(
                server=host,
                port=port,
                user=ADMIN_USER,
                password=self.password,
                database=database,
                login_timeout=self.login_timeout,
                autocommit=True,
            )
        except self.driver.Error as exc:
            raise PresetConnectionError(
                actionable_error("connection_failed", database=database, address=address, cause=exc),
                address=address,
                database=database,
            ) from exc
