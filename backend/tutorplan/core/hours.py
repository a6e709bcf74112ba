"""
Calcul des heures de cours pour la facturation.

Chaque intervalle est converti en heures décimales à 2 chiffres (ROUND_HALF_UP)
au moment de la conversion. Les totaux additionnent ces valeurs déjà arrondies :
l'addition de décimaux de même échelle est exacte, aucun arrondi n'est réintroduit.
"""

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple, Union

HOURS_SCALE = Decimal("0.01")
ZERO_HOURS = Decimal("0.00")

TimeLike = Union[time, datetime]


class InvalidInterval(ValueError):
    """Intervalle dont la fin n'est pas strictement après le début."""


def _as_datetime(value: TimeLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(date.min, value)


def duration(start: TimeLike, end: TimeLike) -> Decimal:
    """Durée en heures décimales : (fin − début) en minutes / 60, arrondie à 0.01."""
    start_dt, end_dt = _as_datetime(start), _as_datetime(end)
    if end_dt <= start_dt:
        raise InvalidInterval(f"La fin ({end}) doit être strictement après le début ({start}).")
    minutes = Decimal((end_dt - start_dt) // timedelta(seconds=1)) / Decimal(60)
    return (minutes / Decimal(60)).quantize(HOURS_SCALE, rounding=ROUND_HALF_UP)


def aggregate(intervals: Iterable[Tuple[TimeLike, TimeLike]]) -> Decimal:
    """Somme des durées (déjà arrondies) d'une liste d'intervalles."""
    total = ZERO_HOURS
    for start, end in intervals:
        total += duration(start, end)
    return total


def sum_hours(values: Iterable[Decimal]) -> Decimal:
    """Somme de totaux déjà calculés (ex. total d'une école = somme de ses élèves)."""
    total = ZERO_HOURS
    for value in values:
        total += value
    return total


def amount(hours: Decimal, hourly_rate: Decimal) -> Decimal:
    """Montant facturé = heures × taux horaire, arrondi au centime."""
    return (hours * Decimal(hourly_rate)).quantize(HOURS_SCALE, rounding=ROUND_HALF_UP)
