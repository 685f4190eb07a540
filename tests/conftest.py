"""
SolverHub - Test Configuration and Fixtures
"""
import os

# Set testing environment before anything reads settings
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['DEMO_MODE'] = 'false'
os.environ['DEMO_ACCOUNTS_ENABLED'] = 'true'
os.environ['REQUIRE_EMAIL_CONFIRMATION'] = 'false'
os.environ['SEED_DEMO_DATA'] = 'false'
os.environ['LOG_LEVEL'] = 'WARNING'

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import update

from solverhub.main import app
from solverhub.core.config import get_settings
from solverhub.core.session import AuthManager, AuthSession
from solverhub.db.postgres import drop_db, get_db_session, init_db
from solverhub.schemas.schemas import ProblemCreate
from solverhub.services import problem_service

fake = Faker()

PASSWORD = 'testpassword123'


@pytest.fixture(autouse=True)
def db():
    """Fresh tables for every test"""
    init_db()
    yield
    drop_db()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def manager() -> AuthManager:
    return AuthManager()


def student_profile(**extra) -> dict:
    data = {
        'name': fake.name(),
        'role': 'student',
        'university': 'Stanford University',
        'major': 'Computer Science',
        'graduation_year': '2025',
        'experience_level': 'intermediate',
        'skills': ['Python', 'React'],
    }
    data.update(extra)
    return data


def startup_profile(**extra) -> dict:
    data = {
        'name': fake.company(),
        'role': 'startup',
        'company_name': fake.company(),
        'company_description': 'Building tools for farmers.',
        'sectors': ['AgTech'],
        'hiring_status': 'hiring',
    }
    data.update(extra)
    return data


def signed_up(manager: AuthManager, profile: dict) -> AuthSession:
    session = AuthSession()
    result = manager.signup(session, fake.unique.email(), PASSWORD, profile)
    assert result.success, result.error
    return session


@pytest.fixture
def student_session(manager) -> AuthSession:
    return signed_up(manager, student_profile())


@pytest.fixture
def startup_session(manager) -> AuthSession:
    return signed_up(manager, startup_profile())


@pytest.fixture
def other_startup_session(manager) -> AuthSession:
    return signed_up(manager, startup_profile())


@pytest.fixture
def open_problem(startup_session):
    problem = problem_service.create_problem(startup_session, ProblemCreate(
        title='Build a recommendation engine',
        description='Suggest crops based on soil data.',
        required_skills=['Python', 'Machine Learning'],
        experience_level='advanced',
        compensation='$3000',
    ))
    assert problem is not None
    return problem


def auth_headers(session: AuthSession) -> dict:
    return {'Authorization': f'Bearer {session.access_token}'}


def feature(table, row_id: str) -> None:
    """Mark a row featured, the way seeded demo data is."""
    with get_db_session() as db:
        db.execute(update(table).where(table.c.id == row_id).values(featured=True))
