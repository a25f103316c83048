# tests/conftest.py
import pytest
import logging
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from alliance_wars.main import app
from alliance_wars.db.base import Base
from alliance_wars.api.deps import get_db
from alliance_wars.core.config import Settings
from alliance_wars.services.command_dispatcher import CommandDispatcher
from alliance_wars.services.game_store import GameStore

SQLALCHEMY_DATABASE_URL_TEST = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL_TEST,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

START_TIME = 1_700_000_000

@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create tables once for the entire test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """
    Provides a clean, isolated database session for each test function
    by using transactions and rollbacks.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture
def test_settings() -> Settings:
    return Settings(ADMIN_PLAYER_IDS=["web-client"], ADMIN_API_TOKEN="test-admin-token")

@pytest.fixture
def store(db_session, test_settings) -> GameStore:
    return GameStore(db_session, test_settings)

class FakeClock:
    """Settable replacement for time.time()."""
    def __init__(self, now: int = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def dispatcher(store, test_settings, clock) -> CommandDispatcher:
    return CommandDispatcher(store, settings=test_settings, clock=clock)

@pytest.fixture(scope="function")
def client(db_session) -> TestClient:
    """TestClient whose requests share the test's rolled-back session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)

def pytest_configure(config):
    """
    Hook to configure logging levels before tests are run.
    This silences noisy third-party libraries.
    """
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
