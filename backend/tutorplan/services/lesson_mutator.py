"""
Modification de la plage horaire d'une leçon depuis le planning (change / move).

Étapes :
1. Guard : l'enseignant possède la leçon
2. Lecture de la plage courante + sa version
3. Application de change() ou move()
4. Validation : fin > début, sur une seule date, dans les limites du calendrier,
   sinon aucune écriture
5. UPDATE conditionnel sur la version lue (concurrence optimiste)
6. 1 ligne → succès ; 0 ligne → leçon supprimée (NOT_FOUND) ou modifiée
   par un autre écrivain entre 2 et 5 (CONFLICT)
"""

import logging
from typing import Callable

from tutorplan.core import intervals
from tutorplan.core.intervals import LessonChange, LessonRange
from tutorplan.core.outcomes import Ack, Failure
from tutorplan.repository import LessonRepository
from tutorplan.services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)

RangeTransform = Callable[[LessonRange, LessonChange], LessonRange]


class LessonMutator:

    def __init__(self, repository: LessonRepository, guard: OwnershipGuard):
        self.repository = repository
        self.guard = guard

    def change_lesson(self, teacher_id: int, lesson_id: int, delta: LessonChange) -> Ack:
        """Décale la date et allonge/raccourcit la leçon (seule la fin bouge)."""
        return self._apply(teacher_id, lesson_id, delta, intervals.change)

    def move_lesson(self, teacher_id: int, lesson_id: int, delta: LessonChange) -> Ack:
        """Déplace la leçon en conservant sa durée."""
        return self._apply(teacher_id, lesson_id, delta, intervals.move)

    def _apply(self, teacher_id: int, lesson_id: int, delta: LessonChange, transform: RangeTransform) -> Ack:
        outcome = self.guard.check_lesson(teacher_id, lesson_id)
        if not outcome.success:
            return Ack.from_outcome(outcome)

        current = self.repository.read_lesson_range(lesson_id)
        if current is None:
            return Ack.fail(Failure.NOT_FOUND, "Leçon introuvable.")

        try:
            new_range = transform(current.range, delta)
        except OverflowError:
            logger.info("Décalage hors calendrier pour la leçon %s : %s", lesson_id, delta)
            return Ack.fail(Failure.INVALID_RANGE, "Le décalage demandé sort du calendrier.")
        if not new_range.is_valid() or not new_range.is_single_day():
            logger.info(
                "Plage refusée pour la leçon %s : %s → %s", lesson_id, new_range.start, new_range.end
            )
            return Ack.fail(
                Failure.INVALID_RANGE,
                "La fin de la leçon doit être après son début, le même jour.",
            )

        try:
            count = self.repository.write_lesson_range(lesson_id, new_range, current.version)
        except Exception:
            self.repository.rollback()
            raise

        if count == 0:
            self.repository.rollback()
            if self.repository.lesson_exists(lesson_id):
                logger.warning("Conflit d'écriture sur la leçon %s (version %s)", lesson_id, current.version)
                return Ack.fail(Failure.CONFLICT, "La leçon a été modifiée entre-temps.")
            return Ack.fail(Failure.NOT_FOUND, "Leçon introuvable.")

        self.repository.commit()
        logger.info(
            "Leçon %s : %s (%+d j, %+d min) → %s - %s",
            lesson_id, transform.__name__, delta.day_delta, delta.minute_delta,
            new_range.start, new_range.end.time(),
        )
        return Ack.ok(count)
