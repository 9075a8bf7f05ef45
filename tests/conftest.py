"""
Pytest configuration and fixtures
"""
import json

import pytest
from fastapi.testclient import TestClient

from exam_backend.config import Settings
from exam_backend.database import JsonStore
from exam_backend.main import create_app


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def db(data_dir):
    """An initialized store in a temporary directory"""
    store = JsonStore(data_dir)
    store.ensure_initialized()
    return store


@pytest.fixture
def client(data_dir):
    """Test client running the app lifespan against a temporary data directory"""
    app = create_app(Settings(data_dir=str(data_dir)))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seed(data_dir):
    """Write a collection file directly, bypassing the API"""
    def _seed(collection, documents):
        data_dir.mkdir(parents=True, exist_ok=True)
        (data_dir / f"{collection}.json").write_text(json.dumps(documents), encoding="utf-8")
    return _seed


@pytest.fixture
def student_payload():
    return {
        "name": "Asha",
        "father": "Ravi",
        "roll": "1",
        "className": "10",
        "phone": "9876543210",
    }


@pytest.fixture
def exam_payload():
    return {
        "title": "T1",
        "subject": "Math",
        "className": "10",
        "duration": 30,
        "questions": [
            {"text": "2+2", "options": ["3", "4"], "correct": 1},
            {"text": "1+1", "options": ["1", "2"], "correct": 1},
        ],
    }
