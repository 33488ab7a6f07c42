import os
import tempfile

# Must be set before blog_service.config is imported.
TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
os.environ["JWT_SECRET"] = TEST_SECRET
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(
    tempfile.gettempdir(), f"blog_service_test_{os.getpid()}.db"
)
os.environ["COOKIE_SECURE"] = "false"
os.environ["HASH_ROUNDS"] = "1000"

import pytest
from fastapi.testclient import TestClient

from blog_service import models  # noqa: F401
from blog_service.db import Base, engine
from blog_service.main import app


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_client():
    """Extra clients with their own cookie jars, for multi-user scenarios."""
    return lambda: TestClient(app)
