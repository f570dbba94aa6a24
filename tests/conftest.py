import pytest
from fastapi.testclient import TestClient

from pos_terminal.config import Settings
from pos_terminal.database import Base, create_db_engine, create_session_factory
from pos_terminal.main import create_app
from pos_terminal.utils.printer import PrinterConnectionError, PrinterError


class FakeConnection:
    """Printer connection that records what it is sent."""

    def __init__(self, fail_on_emit=False):
        self.fail_on_emit = fail_on_emit
        self.directives = []
        self.closed = False

    def emit(self, directives):
        if self.fail_on_emit:
            raise PrinterError("paper out")
        self.directives.extend(directives)

    def close(self):
        self.closed = True


class FakePrinterDriver:
    """Printer driver that never touches the network."""

    def __init__(self):
        self.reachable = True
        self.fail_on_emit = False
        self.addresses = []
        self.connections = []

    def open(self, address):
        self.addresses.append(address)
        if not self.reachable:
            raise PrinterConnectionError(f"Could not connect to printer at {address}")
        connection = FakeConnection(fail_on_emit=self.fail_on_emit)
        self.connections.append(connection)
        return connection

    @property
    def printed(self):
        """Directives of every job, flattened in the order they were sent."""
        return [d for connection in self.connections for d in connection.directives]


def make_settings(**overrides):
    values = {"DATABASE_URL": "sqlite://", "PRINTER_IP": "10.0.0.50", "STATIC_DIR": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="function")
def printer_driver():
    return FakePrinterDriver()


@pytest.fixture(scope="function")
def app_factory(printer_driver):
    """Build applications with settings overridden per test."""
    def factory(**overrides):
        return create_app(make_settings(**overrides), printer_driver=printer_driver)
    return factory


@pytest.fixture(scope="function")
def app(app_factory):
    """Fresh application on its own in-memory database for each test."""
    return app_factory()


@pytest.fixture(scope="function")
def client(app):
    """Create test client; entering it runs startup (tables + seed catalog)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def empty_db_session():
    """Session on a fresh, unseeded database for service-level tests."""
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
