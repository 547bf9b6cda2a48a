"""Database creation and seeding for mssql-preset."""

from contextlib import closing
from typing import Sequence

from mssqlpreset.constants import MASTER_DATABASE
from mssqlpreset.errors import DatabaseCreationError, SeedStatementError
from mssqlpreset.errors_catalog import actionable_error


class InitializerService:
    """Brings a fresh server to the requested database state, once.

    The sequence is: create the database from ``master``, reconnect to it and
    run the seed statements in order. The first failing statement stops the
    run. Nothing is rolled back, so a failure leaves the database partially
    seeded.
    """

    def __init__(self, logger, connection_service):
        self.logger = logger
        self.connection_service = connection_service

    @staticmethod
    def quote_name(name: str) -> str:
        return "[" + name.replace("]", "]]") + "]"

    def create_database(self, address: str, database: str):
        driver_error = self.connection_service.driver.Error
        conn = self.connection_service.connect(address, MASTER_DATABASE)

        with closing(conn):
            try:
                conn.cursor().execute(f"create database {self.quote_name(database)}")
            except driver_error as exc:
                raise DatabaseCreationError(
                    actionable_error("database_creation_failed", database=database, cause=exc),
                    database=database,
                ) from exc

        self.logger.info("Created database %s", database)

    def run_statements(self, address: str, database: str, statements: Sequence[str]):
        driver_error = self.connection_service.driver.Error
        conn = self.connection_service.connect(address, database)

        with closing(conn):
            cursor = conn.cursor()
            for index, statement in enumerate(statements):
                self.logger.debug("Running seed statement #%s on %s", index, database)
                try:
                    cursor.execute(statement)
                except driver_error as exc:
                    raise SeedStatementError(
                        actionable_error(
                            "seed_statement_failed",
                            index=index,
                            statement=statement,
                            cause=exc,
                        ),
                        statement=statement,
                        index=index,
                    ) from exc

        self.logger.info("Applied %s seed statement(s) to %s", len(statements), database)

    def initialize(self, address: str, database: str, statements: Sequence[str]):
        self.create_database(address, database)
        self.run_statements(address, database, statements)
