"""Shared constants for mssql-preset."""

IMAGE = "mcr.microsoft.com/mssql/server"

DEFAULT_PORT_NAME = "default"
DEFAULT_PORT = 1433
DEFAULT_DATABASE = "mydb"
DEFAULT_PASSWORD = "Gn0m!ck~"
DEFAULT_WAIT_TIMEOUT = 30.0

MASTER_DATABASE = "master"
ADMIN_USER = "sa"

HEALTHCHECK_QUERY = "select 1"
LOGIN_TIMEOUT = 10

ENV_PASSWORD = "SA_PASSWORD"
ENV_ACCEPT_EULA = "ACCEPT_EULA"
ENV_TCP_PORT = "MSSQL_TCP_PORT"
