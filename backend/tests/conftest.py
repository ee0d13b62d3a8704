"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path

import pytest
from sqlalchemy.orm import Session

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Tests run against a private in-memory database with quiet, file-less logging
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.core.database import Base, get_engine, get_session_local  # noqa: E402


@pytest.fixture(scope="function")
def db() -> Session:
    """Create a database session with a fresh schema"""
    import app.models  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    session = get_session_local()()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def factory_service(db: Session):
    """FactoryService bound to the test session"""
    from app.services.factory_service import FactoryService
    return FactoryService(db)


@pytest.fixture(scope="function")
def acme_factory(factory_service):
    """The example gateway used throughout the tests"""
    return factory_service.create_factory(
        factory_id="gw-42",
        label="Acme Gateway",
        customer_id="12345",
        public_key="pk_test_abc",
    )


@pytest.fixture(scope="function")
def client(db: Session):
    """Create test client with database dependency override"""
    from app.core.database import get_db
    from fastapi.testclient import TestClient
    from main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()
