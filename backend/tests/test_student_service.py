"""
Tests du service des élèves : propriété via l'école, désactivation, heures.
"""

from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from tutorplan.core.outcomes import Failure
from tutorplan.models.lesson import Lesson
from tutorplan.models.student import Student
from tutorplan.schemas.coordinate import CoordinateItem
from tutorplan.schemas.student import StudentForm
from tutorplan.services.student_service import (
    create_student,
    delete_student,
    disable_student,
    enable_student,
    get_student,
    get_student_hours,
    list_students,
    update_student,
)


def test_student_form_champ_vide_rejete():
    with pytest.raises(ValidationError):
        StudentForm(school_id=1, subject="  ", name="Emma")


def test_student_form_coordonnees_de_meme_type_rejetees():
    with pytest.raises(ValidationError):
        StudentForm(school_id=1, subject="Maths", name="Emma", coordinates=[
            CoordinateItem(type="EMAIL", value="emma@example.be"),
            CoordinateItem(type="EMAIL", value="emma.d@example.be"),
        ])


def test_list_students_toutes_ecoles_de_l_enseignant(db_session, seeded):
    students = list_students(db_session, seeded.teacher_a)
    assert [s.name for s in students] == ["Emma"]
    assert students[0].school.name == "Lycée Hergé"


def test_create_student_dans_mon_ecole(db_session, seeded):
    result = create_student(db_session, seeded.teacher_a, StudentForm(
        school_id=seeded.school_a, subject="Chimie", name="Hugo",
        coordinates=[CoordinateItem(type="EMAIL", value="hugo@example.be")],
    ))
    assert result.success is True
    assert db_session.get(Student, result.value).name == "Hugo"


def test_create_student_dans_l_ecole_d_un_autre_refuse(db_session, seeded):
    result = create_student(db_session, seeded.teacher_a, StudentForm(
        school_id=seeded.school_b, subject="Chimie", name="Hugo",
    ))
    assert result.failure == Failure.ACCESS_DENIED
    assert db_session.query(Student).filter_by(name="Hugo").count() == 0


def test_get_student_details(db_session, seeded):
    result = get_student(db_session, seeded.teacher_a, seeded.student_a)
    assert result.success is True
    assert result.value.hours == Decimal("1.00")
    assert result.value.school.id == seeded.school_a
    assert result.value.coordinates == []


def test_get_student_hours(db_session, seeded):
    db_session.add(Lesson(student_id=seeded.student_a, date=date(2024, 4, 2),
                          start_time=time(16, 0), end_time=time(16, 45), version=1))
    db_session.commit()
    result = get_student_hours(db_session, seeded.teacher_a, seeded.student_a)
    assert result.value == Decimal("1.75")


def test_get_student_hours_autre_enseignant_refuse(db_session, seeded):
    result = get_student_hours(db_session, seeded.teacher_b, seeded.student_a)
    assert result.failure == Failure.ACCESS_DENIED


def test_update_student_vers_l_ecole_d_un_autre_refuse(db_session, seeded):
    ack = update_student(db_session, seeded.teacher_a, seeded.student_a, StudentForm(
        school_id=seeded.school_b, subject="Maths", name="Emma",
    ))
    assert ack.failure == Failure.ACCESS_DENIED
    student = db_session.get(Student, seeded.student_a)
    assert student.school_id == seeded.school_a


def test_update_student_succes(db_session, seeded):
    ack = update_student(db_session, seeded.teacher_a, seeded.student_a, StudentForm(
        school_id=seeded.school_a, subject="Algèbre", name="Emma D.",
    ))
    assert ack.success is True
    student = db_session.get(Student, seeded.student_a)
    db_session.refresh(student)
    assert student.subject == "Algèbre"


def test_disable_puis_enable(db_session, seeded):
    assert disable_student(db_session, seeded.teacher_a, seeded.student_a).success
    student = db_session.get(Student, seeded.student_a)
    db_session.refresh(student)
    assert student.disabled is True

    assert enable_student(db_session, seeded.teacher_a, seeded.student_a).success
    db_session.refresh(student)
    assert student.disabled is False


def test_disable_autre_enseignant_refuse(db_session, seeded):
    ack = disable_student(db_session, seeded.teacher_b, seeded.student_a)
    assert ack.failure == Failure.ACCESS_DENIED


def test_delete_student_supprime_ses_lecons(db_session, seeded):
    ack = delete_student(db_session, seeded.teacher_a, seeded.student_a)
    assert ack.success is True
    assert db_session.get(Student, seeded.student_a) is None
    assert db_session.query(Lesson).filter_by(student_id=seeded.student_a).count() == 0


def test_delete_student_inexistant_refuse(db_session, seeded):
    ack = delete_student(db_session, seeded.teacher_a, 999)
    assert ack.failure == Failure.ACCESS_DENIED
