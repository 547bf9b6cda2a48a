import pytest


class FakeDriverError(Exception):
    pass


class FakeCursor:
    def __init__(self, driver, database):
        self.driver = driver
        self.database = database

    def execute(self, statement):
        self.driver.executed.append((self.database, statement))
        if statement in self.driver.failing_statements:
            raise FakeDriverError(f"failed: {statement}")

    def fetchone(self):
        return self.driver.row


class FakeConnection:
    def __init__(self, driver, database):
        self.driver = driver
        self.database = database
        self.closed = False

    def cursor(self):
        return FakeCursor(self.driver, self.database)

    def close(self):
        self.closed = True


class FakeDriver:
    """Stands in for the pymssql module."""

    Error = FakeDriverError

    def __init__(self):
        self.connect_calls = []
        self.connections = []
        self.executed = []
        self.failing_statements = set()
        self.connect_error = None
        self.failing_databases = set()
        self.row = (1,)

    def connect(self, **kwargs):
        self.connect_calls.append(kwargs)
        if self.connect_error is not None:
            raise FakeDriverError(self.connect_error)
        if kwargs["database"] in self.failing_databases:
            raise FakeDriverError(f"Cannot open database \"{kwargs['database']}\"")
        conn = FakeConnection(self, kwargs["database"])
        self.connections.append(conn)
        return conn


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


class FakeContainer:
    def __init__(self, address="127.0.0.1:14330"):
        self._address = address
        self.requested_ports = []

    def address(self, port_name):
        self.requested_ports.append(port_name)
        return self._address


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def dummy_logger():
    return DummyLogger()


@pytest.fixture
def dummy_console():
    return DummyConsole()


@pytest.fixture
def fake_container():
    return FakeContainer()
