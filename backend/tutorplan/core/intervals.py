"""
Arithmétique des plages horaires de leçon.

Deux transformations pures sur une LessonRange, paramétrées par un LessonChange :
- change : décale la date des deux bornes, les minutes ne s'appliquent qu'à la fin
           (la leçon s'allonge ou se raccourcit, l'heure de début reste fixe)
- move   : décale la date et les minutes des deux bornes (la durée est conservée)

Aucune correction n'est faite ici : un delta négatif important peut produire
une plage invalide, c'est à l'appelant de vérifier is_valid().
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass(frozen=True)
class LessonChange:
    """Décalage demandé par le planning (glisser-déposer ou redimensionnement)."""
    day_delta: int = 0
    minute_delta: int = 0


@dataclass(frozen=True)
class LessonRange:
    start: datetime
    end: datetime

    @classmethod
    def from_lesson(cls, day: date, start_time: time, end_time: time) -> "LessonRange":
        return cls(datetime.combine(day, start_time), datetime.combine(day, end_time))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def is_valid(self) -> bool:
        return self.end > self.start

    def is_single_day(self) -> bool:
        """Une leçon est stockée sur une seule date : la fin doit rester le même jour."""
        return self.start.date() == self.end.date()


def change(lesson_range: LessonRange, delta: LessonChange) -> LessonRange:
    start, end = lesson_range.start, lesson_range.end
    if delta.day_delta:
        start += timedelta(days=delta.day_delta)
        end += timedelta(days=delta.day_delta)
    if delta.minute_delta:
        # Seule la fin bouge
        end += timedelta(minutes=delta.minute_delta)
    return LessonRange(start, end)


def move(lesson_range: LessonRange, delta: LessonChange) -> LessonRange:
    shift = timedelta(days=delta.day_delta, minutes=delta.minute_delta)
    return LessonRange(lesson_range.start + shift, lesson_range.end + shift)
