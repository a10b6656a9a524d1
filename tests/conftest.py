"""Pytest fixtures for the Studio Portal tests.

This module provides fixtures for setting up a test application and
context. Uses the in-memory store backend with seeding off so each test
starts from empty collections and never touches development data.
"""
import pytest

from studio_portal import create_app
from studio_portal.config import Config
from studio_portal.models import TaskStatus
from studio_portal.services import client_project_service


class TestConfig(Config):
    """Test configuration using the in-memory store backend.

    This ensures tests are isolated from development data and run quickly.
    """
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret-key'
    STORE_BACKEND = 'memory'
    SEED_DATA = False
    ADMIN_PASSWORD = 'test-password'
    SERVICE_TOKEN = ''
    LOG_LEVEL = 'WARNING'


class SeededTestConfig(TestConfig):
    """Same as TestConfig but with the bundled seed data visible."""
    SEED_DATA = True


@pytest.fixture(scope='function')
def app():
    """Create and configure a test application instance.

    Each call builds a fresh memory backend, so collections start empty.

    Yields:
        Flask application configured for testing.
    """
    app = create_app(TestConfig)

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def seeded_app():
    """Test application whose unpersisted collections show seed data."""
    app = create_app(SeededTestConfig)

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for the application.

    Args:
        app: Flask application fixture.

    Returns:
        Flask test client for making HTTP requests.
    """
    return app.test_client()


@pytest.fixture(scope='function')
def auth_headers(client):
    """Log in and return headers carrying the admin bearer token."""
    response = client.post('/api/login', json={'password': TestConfig.ADMIN_PASSWORD})
    token = response.get_json()['token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def sample_tasks():
    """Two done, one in progress, one todo: 50% complete."""
    return [
        {'id': 'task-1', 'title': 'Design review', 'status': TaskStatus.DONE},
        {'id': 'task-2', 'title': 'Copy review', 'status': TaskStatus.DONE},
        {'id': 'task-3', 'title': 'Build API', 'status': TaskStatus.IN_PROGRESS},
        {'id': 'task-4', 'title': 'Load testing', 'status': TaskStatus.TODO},
    ]


@pytest.fixture
def sample_client_project_data(sample_tasks):
    """Provide sample data for creating a client project.

    Returns:
        Dictionary with valid client project data.
    """
    return {
        'name': 'Trading Portal',
        'client_name': 'AlphaBank',
        'project_id': 'p2',
        'summary': 'Portal revamp.',
        'start_date': '2026-01-05',
        'end_date': '2026-06-30',
        'budget_used': 40,
        'tasks': sample_tasks,
    }


@pytest.fixture
def create_client_project(app):
    """Factory fixture to create client projects in the store."""
    def _create_client_project(**kwargs):
        defaults = {
            'name': 'Test Engagement',
            'project_id': 'p1',
        }
        defaults.update(kwargs)
        return client_project_service.create_client_project(defaults)
    return _create_client_project
