"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed companies, users, jobs and an application
- Auth headers for an admin and a regular user
"""

import os
from decimal import Decimal

# Keep the application engine off PostgreSQL while tests import main
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.core.security import create_access_token, get_password_hash
from app.models import Application, Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Companies c1..c3, users u1/u2 plus an admin, jobs j1..j3, and u1 applied to j1.

    Returns a dict with the generated job ids.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.add_all([
        User(username="u1", password=get_password_hash("password1"), first_name="U1F",
             last_name="U1L", email="u1@email.com", is_admin=False),
        User(username="u2", password=get_password_hash("password2"), first_name="U2F",
             last_name="U2L", email="u2@email.com", is_admin=False),
        User(username="admin", password=get_password_hash("password3"), first_name="AdF",
             last_name="AdL", email="admin@email.com", is_admin=True),
    ])
    db_session.flush()

    jobs = [
        Job(title="J1", salary=100, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="J2", salary=200, equity=Decimal("0.2"), company_handle="c1"),
        Job(title="J3", salary=300, equity=None, company_handle="c2"),
    ]
    db_session.add_all(jobs)
    db_session.flush()

    db_session.add(Application(username="u1", job_id=jobs[0].id))
    db_session.commit()

    return {"job_ids": [job.id for job in jobs]}


@pytest.fixture
def admin_headers():
    """Bearer header for the seeded admin"""
    return {"Authorization": f"Bearer {create_access_token('admin', True)}"}


@pytest.fixture
def u1_headers():
    """Bearer header for the seeded non-admin u1"""
    return {"Authorization": f"Bearer {create_access_token('u1', False)}"}


@pytest.fixture
def u2_headers():
    """Bearer header for the seeded non-admin u2"""
    return {"Authorization": f"Bearer {create_access_token('u2', False)}"}
