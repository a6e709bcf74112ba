"""
Tests de l'identification de l'enseignant (en-tête X-Teacher-Id).
Le client ici n'écrase pas get_current_teacher_id : seule la BDD est mockée.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from tutorplan.database import get_db
from tutorplan.main import app


@pytest.fixture
def raw_client(mock_db):
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_teacher(verified=True):
    teacher = MagicMock()
    teacher.is_verified = verified
    return teacher


def test_en_tete_absent(raw_client):
    response = raw_client.get("/api/v1/schools")
    assert response.status_code == 401


def test_en_tete_non_numerique(raw_client):
    response = raw_client.get("/api/v1/schools", headers={"X-Teacher-Id": "alice"})
    assert response.status_code == 401


def test_enseignant_inconnu(raw_client, mock_db):
    mock_db.get.return_value = None
    response = raw_client.get("/api/v1/schools", headers={"X-Teacher-Id": "42"})
    assert response.status_code == 403


def test_enseignant_non_verifie(raw_client, mock_db):
    mock_db.get.return_value = make_teacher(verified=False)
    response = raw_client.get("/api/v1/schools", headers={"X-Teacher-Id": "42"})
    assert response.status_code == 403
    assert "non vérifié" in response.json()["detail"]


def test_enseignant_verifie(raw_client, mock_db):
    mock_db.get.return_value = make_teacher()
    with patch("tutorplan.routers.schools.school_service.list_schools") as mock:
        mock.return_value = []
        response = raw_client.get("/api/v1/schools", headers={"X-Teacher-Id": "42"})

    assert response.status_code == 200
    assert mock.call_args.args[1] == 42
