"""
Shared fixtures for dashboard tests.

Provides a mocked backend client (the only network boundary) and a Flask
test client whose routes use it.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dashboard.api_client import GradAppClient
from dashboard.stores import ControllerState, StateRegistry


@pytest.fixture
def mock_api():
    """Mock GradAppClient with empty-but-successful defaults."""
    api = MagicMock(spec=GradAppClient)
    api.get_profile.return_value = {}
    api.list_applications.return_value = []
    api.list_education.return_value = []
    api.list_publications.return_value = []
    api.get_suggestions.return_value = {"reach": [], "match": [], "safe": []}
    return api


@pytest.fixture
def state():
    return ControllerState()


@pytest.fixture
def app():
    """Flask app configured for testing."""
    from dashboard.app import app as flask_app
    flask_app.config["TESTING"] = True
    flask_app.config["SECRET_KEY"] = "test-secret-key"
    return flask_app


@pytest.fixture
def client(app, mock_api):
    """Flask test client backed by mock_api and a fresh state registry."""
    with patch("dashboard.routes.get_client", return_value=mock_api), \
            patch("dashboard.routes._registry", StateRegistry()):
        with app.test_client() as test_client:
            yield test_client


@pytest.fixture
def sample_educations():
    return [
        {
            "id": 1,
            "institution": "MIT",
            "degree": "BSc",
            "field_of_study": "Computer Science",
            "start_year": 2018,
            "end_year": 2022,
            "gpa": 3.8,
            "gpa_scale": 4,
            "currently_enrolled": False,
        },
        {
            "id": 2,
            "institution": "ETH Zurich",
            "degree": "MSc",
            "field_of_study": "Robotics",
            "start_year": 2023,
            "end_year": None,
            "gpa": None,
            "gpa_scale": None,
            "currently_enrolled": True,
        },
    ]


@pytest.fixture
def sample_publications():
    return [
        {
            "id": 7,
            "title": "Learning to Grasp",
            "venue": "ICRA",
            "year": 2023,
            "journal_type": "Conference",
            "author_type": None,
            "first_author": True,
            "url": "https://example.org/grasp",
        },
        {
            "id": 8,
            "title": "Sim2Real Survey",
            "venue": None,
            "year": None,
            "journal_type": None,
            "author_type": "Co-author",
            "first_author": False,
            "url": "",
        },
    ]
