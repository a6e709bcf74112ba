"""
Tests d'intégration API pour les écoles et les élèves.
Testent les URLs, les codes HTTP, la validation et la traduction des échecs métier.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

from tutorplan.core.outcomes import Ack, Failure, IdResult, Result
from tutorplan.schemas.lesson import StudentLessons
from tutorplan.schemas.school import SchoolDetails, SchoolStudent, SchoolSummary
from tutorplan.schemas.student import StudentSummary

TEACHER_ID = 1


# --- Helpers ---

def make_school_summary(**kwargs) -> SchoolSummary:
    return SchoolSummary(
        id=kwargs.get("id", 1),
        name=kwargs.get("name", "Lycée Hergé"),
        color=kwargs.get("color", "#1a73e8"),
        hourly_rate=kwargs.get("hourly_rate", Decimal("40.00")),
    )


SCHOOL_BODY = {"name": "Lycée Hergé", "color": "#1a73e8", "hourly_rate": "40.00"}


# ============================================================
# /api/v1/schools
# ============================================================

def test_create_school_succes(client):
    """Création valide → 201 avec l'identifiant."""
    with patch("tutorplan.routers.schools.school_service.create_school") as mock:
        mock.return_value = IdResult.ok(7)
        response = client.post("/api/v1/schools", json=SCHOOL_BODY)

    assert response.status_code == 201
    assert response.json() == {"success": True, "id": 7}
    assert mock.call_args.args[1] == TEACHER_ID


def test_create_school_nom_duplique(client):
    """Nom déjà utilisé par l'enseignant → 409."""
    with patch("tutorplan.routers.schools.school_service.create_school") as mock:
        mock.return_value = IdResult.fail(Failure.NAME_CONFLICT, "Une école avec le nom 'Lycée Hergé' existe déjà.")
        response = client.post("/api/v1/schools", json=SCHOOL_BODY)

    assert response.status_code == 409
    assert "existe déjà" in response.json()["detail"]


def test_create_school_couleur_invalide(client):
    """Couleur hors format #RRGGBB → 422."""
    response = client.post("/api/v1/schools", json={**SCHOOL_BODY, "color": "bleu"})
    assert response.status_code == 422


def test_list_schools(client):
    with patch("tutorplan.routers.schools.school_service.list_schools") as mock:
        mock.return_value = [make_school_summary(), make_school_summary(id=2, name="Athénée")]
        response = client.get("/api/v1/schools")

    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Lycée Hergé", "Athénée"]


def test_get_school_details(client):
    details = SchoolDetails(
        **make_school_summary().model_dump(),
        coordinates=[],
        students=[SchoolStudent(id=3, name="Emma", subject="Maths", disabled=False, hours=Decimal("1.50"))],
        total_hours=Decimal("1.50"),
        amount=Decimal("60.00"),
    )
    with patch("tutorplan.routers.schools.school_service.get_school") as mock:
        mock.return_value = Result.ok(details)
        response = client.get("/api/v1/schools/1")

    assert response.status_code == 200
    assert Decimal(response.json()["total_hours"]) == Decimal("1.50")
    assert Decimal(response.json()["amount"]) == Decimal("60.00")


def test_get_school_d_un_autre_enseignant(client):
    """Refus du guard → 403."""
    with patch("tutorplan.routers.schools.school_service.get_school") as mock:
        mock.return_value = Result.fail(Failure.ACCESS_DENIED, "refus")
        response = client.get("/api/v1/schools/99")

    assert response.status_code == 403


def test_delete_school(client):
    with patch("tutorplan.routers.schools.school_service.delete_school") as mock:
        mock.return_value = Ack.ok()
        response = client.delete("/api/v1/schools/1")

    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 1}


# ============================================================
# /api/v1/students
# ============================================================

def test_list_students(client):
    with patch("tutorplan.routers.students.student_service.list_students") as mock:
        mock.return_value = [
            StudentSummary(id=3, subject="Maths", name="Emma", school=make_school_summary(), disabled=False),
        ]
        response = client.get("/api/v1/students")

    assert response.status_code == 200
    assert response.json()[0]["school"]["name"] == "Lycée Hergé"


def test_create_student_nom_vide(client):
    response = client.post("/api/v1/students", json={"school_id": 1, "subject": "Maths", "name": " "})
    assert response.status_code == 422


def test_create_student_ecole_d_un_autre(client):
    with patch("tutorplan.routers.students.student_service.create_student") as mock:
        mock.return_value = IdResult.fail(Failure.ACCESS_DENIED, "refus")
        response = client.post("/api/v1/students", json={"school_id": 9, "subject": "Maths", "name": "Emma"})

    assert response.status_code == 403


def test_disable_student(client):
    with patch("tutorplan.routers.students.student_service.disable_student") as mock:
        mock.return_value = Ack.ok()
        response = client.post("/api/v1/students/3/disable")

    assert response.status_code == 200
    mock.assert_called_once()


def test_get_student_hours(client):
    with patch("tutorplan.routers.students.student_service.get_student_hours") as mock:
        mock.return_value = Result.ok(Decimal("2.25"))
        response = client.get("/api/v1/students/3/hours")

    assert response.status_code == 200
    assert response.json()["student_id"] == 3
    assert Decimal(response.json()["hours"]) == Decimal("2.25")


def test_get_student_lessons_parametre_date(client):
    with patch("tutorplan.routers.students.lesson_service.get_student_lessons") as mock:
        mock.return_value = Result.ok(StudentLessons(date=date(2024, 3, 15), lessons=[], hours=Decimal("0.00")))
        response = client.get("/api/v1/students/3/lessons", params={"date": "2024-03-15"})

    assert response.status_code == 200
    assert mock.call_args.args[3] == date(2024, 3, 15)


def test_create_school_coordonnees_dupliquees(client):
    """Deux coordonnées du même type → 422, le service n'est pas appelé."""
    with patch("tutorplan.routers.schools.school_service.create_school") as mock:
        response = client.post("/api/v1/schools", json={**SCHOOL_BODY, "coordinates": [
            {"type": "PHONE", "value": "1"},
            {"type": "PHONE", "value": "2"},
        ]})

    assert response.status_code == 422
    mock.assert_not_called()


def test_update_student_coordonnees_dupliquees(client):
    with patch("tutorplan.routers.students.student_service.update_student") as mock:
        response = client.put("/api/v1/students/3", json={
            "school_id": 1, "subject": "Maths", "name": "Emma",
            "coordinates": [{"type": "mobile", "value": "1"}, {"type": "MOBILE", "value": "2"}],
        })

    assert response.status_code == 422
    mock.assert_not_called()
