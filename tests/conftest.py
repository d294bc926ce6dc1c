import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_CONNECT_RETRIES"] = "1"
os.environ["SEED_CATALOG"] = "0"
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "cargoplan-tests", "app.log")

import pytest
from fastapi.testclient import TestClient

from cargoplan.database import SessionLocal, engine, get_db
from cargoplan.main import app
from cargoplan.model import InMemoryCatalog
from cargoplan.models import Base

from .sample_catalog import CONTAINER_TYPES, ITEM_TYPES


@pytest.fixture
def catalog():
    return InMemoryCatalog(ITEM_TYPES, CONTAINER_TYPES)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
