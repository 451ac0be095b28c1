"""
Shared test fixtures — SQLite test database, test client, sample configurations.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set env before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["AI_REQUEST_DELAY_SECONDS"] = "0"

from estimator.database import Base, get_db
from estimator.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def baseline_config_data(**overrides) -> dict:
    """Medium web app, 10 screens, 5 integrations — totals 708 hours."""
    data = {
        "complexity": "medium",
        "platform": "web",
        "unique_screens": 10,
        "pm_involvement": 30,
        "custom_branding": False,
        "animation_level": "simple",
        "api_integrations": 5,
        "business_logic_complexity": "medium",
        "security_level": "standard",
        "database_size": "medium",
        "test_coverage": "integration",
        "uat_days": 5,
        "support_days": 30,
        "cicd_setup": True,
        "cloud_provider": "aws",
        "custom_items": [],
        "project_name": "Baseline Web App",
    }
    data.update(overrides)
    return data


@pytest.fixture
def config_data():
    return baseline_config_data()
