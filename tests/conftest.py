"""Pytest configuration and fixtures."""
import os
import sys
import json
from pathlib import Path
from typing import Dict, Any, List

import pytest

# Add the project root to the Python path
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Read by ui.app at import time
os.environ.update({
    "RATELIMIT_ENABLED": "false",
    "LOG_LEVEL": "WARNING",
    "FLASK_SECRET": "test-secret",
})

from portfolio.models import Publication  # noqa: E402

# Sample test data
SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "j1",
        "title": "Deep Roots of Soil Carbon",
        "authors": ["Alice Smith", "Bob Jones"],
        "year": 2020,
        "category": "Journal Article",
        "keywords": ["soil", "Carbon Sequestration"],
        "abstract": "A field study of erosion on terraced hillsides.",
        "journal": "Soil Journal",
        "volume": "3",
        "issue": "2",
        "pages": "10-20",
        "downloadRequestable": True,
        "featured": True,
        "previewFile": "j1.pdf",
    },
    {
        "id": "b1",
        "title": "Water Rights in Practice",
        "authors": ["Carol White"],
        "year": 2021,
        "category": "Book Chapter",
        "keywords": ["governance"],
        "abstract": "Institutions for irrigation in small catchments.",
        "book": "Handbook of Commons",
        "pages": "5-9",
        "publisher": "Acme Press",
        "downloadRequestable": False,
        "featured": False,
        "previewFile": "b1.pdf",
    },
    {
        "id": "c1",
        "title": "Terraces and Tenure",
        "authors": ["Dan Brown"],
        "year": 2021,
        "category": "Conference Paper",
        "keywords": ["land"],
        "abstract": "Panel data on titles and conservation investment.",
        "downloadRequestable": True,
        "featured": True,
        "previewFile": "c1.pdf",
    },
]


@pytest.fixture
def catalog_payload() -> Dict[str, Any]:
    """A catalog document with three publications."""
    return {"publications": [dict(record) for record in SAMPLE_RECORDS]}


@pytest.fixture
def catalog_file(tmp_path, catalog_payload) -> Path:
    """Catalog document written to a temporary file."""
    path = tmp_path / "publications.json"
    path.write_text(json.dumps(catalog_payload), encoding="utf-8")
    return path


@pytest.fixture
def publications(catalog_payload) -> List[Publication]:
    return [Publication.from_dict(entry) for entry in catalog_payload["publications"]]


@pytest.fixture
def app(catalog_file, tmp_path):
    """The Flask app pointed at the temporary catalog and audit file."""
    from ui.app import app as flask_app

    flask_app.config.update(
        TESTING=True,
        WTF_CSRF_ENABLED=False,
        SECRET_KEY="test-secret",
        APP_ENV="production",
        CATALOG_SOURCE=str(catalog_file),
        AUDIT_FILE=str(tmp_path / "audit.jsonl"),
        DETERRENTS_ENABLED=True,
    )
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def valid_request() -> Dict[str, Any]:
    """A download request that passes validation."""
    return {
        "name": "Jane Doe",
        "email": "jane@example.org",
        "institution": "University of Testing",
        "purpose": "Literature review",
        "publicationId": "j1",
        "agreeToTerms": True,
    }
