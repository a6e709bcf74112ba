"""
Guard de propriété : prouve qu'un enseignant possède, de proche en proche,
l'école / l'élève / la leçon visé(e) avant toute lecture ou modification.

Un identifiant inexistant produit le même refus qu'un élément appartenant à un
autre enseignant : on ne révèle pas l'existence des données d'autrui.
"""

import logging
from typing import Callable, Dict, Optional

from tutorplan.core.entity_kind import EntityKind
from tutorplan.core.outcomes import Failure, Outcome
from tutorplan.repository import LessonRepository

logger = logging.getLogger(__name__)


class OwnershipGuard:

    def __init__(self, repository: LessonRepository):
        self.repository = repository
        self._resolvers: Dict[EntityKind, Callable[[int], Optional[int]]] = {
            EntityKind.SCHOOL: repository.owner_of_school,
            EntityKind.STUDENT: repository.owner_of_student,
            EntityKind.LESSON: repository.owner_of_lesson,
        }

    def authorize(self, teacher_id: int, kind: EntityKind, entity_id: int) -> Outcome:
        owner = self._resolvers[kind](entity_id)
        if owner is None or owner != teacher_id:
            logger.warning(
                "Accès refusé : enseignant %s → %s %s", teacher_id, kind.value, entity_id
            )
            return Outcome.fail(
                Failure.ACCESS_DENIED,
                f"L'enseignant {teacher_id} ne peut pas accéder à {kind.value.lower()} {entity_id}.",
            )
        return Outcome.ok()

    def check_school(self, teacher_id: int, school_id: int) -> Outcome:
        return self.authorize(teacher_id, EntityKind.SCHOOL, school_id)

    def check_student(self, teacher_id: int, student_id: int) -> Outcome:
        return self.authorize(teacher_id, EntityKind.STUDENT, student_id)

    def check_lesson(self, teacher_id: int, lesson_id: int) -> Outcome:
        return self.authorize(teacher_id, EntityKind.LESSON, lesson_id)
