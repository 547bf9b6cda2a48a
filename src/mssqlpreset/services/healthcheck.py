"""Readiness probe for mssql-preset."""

from contextlib import closing

from mssqlpreset.constants import HEALTHCHECK_QUERY, MASTER_DATABASE
from mssqlpreset.errors import PresetConnectionError, UnexpectedHealthcheckResult
from mssqlpreset.errors_catalog import actionable_error


class HealthcheckService:
    """Answers whether a server can serve queries yet. Never retries by itself."""

    def __init__(self, logger, connection_service):
        self.logger = logger
        self.connection_service = connection_service

    @staticmethod
    def _is_one(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and value == 1

    def check(self, address: str):
        conn = self.connection_service.connect(address, MASTER_DATABASE)
        driver_error = self.connection_service.driver.Error

        with closing(conn):
            try:
                cursor = conn.cursor()
                cursor.execute(HEALTHCHECK_QUERY)
                row = cursor.fetchone()
            except driver_error as exc:
                raise PresetConnectionError(
                    actionable_error(
                        "connection_failed",
                        database=MASTER_DATABASE,
                        address=address,
                        cause=exc,
                    ),
                    address=address,
                    database=MASTER_DATABASE,
                ) from exc

        value = row[0] if row else None
        if not self._is_one(value):
            raise UnexpectedHealthcheckResult(
                actionable_error("unexpected_healthcheck_result", value=repr(value)),
                value=value,
            )

        self.logger.debug("Healthcheck passed for %s", address)
