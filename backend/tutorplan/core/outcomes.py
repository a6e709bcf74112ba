"""
Résultats typés des opérations métier.

Les échecs attendus (accès refusé, plage invalide, élément introuvable, conflit)
ne sont pas des exceptions : ils sont retournés comme valeurs et traduits en
codes HTTP par les routers. Seules les pannes inattendues (BDD indisponible)
remontent en exception jusqu'au handler global.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Failure(str, Enum):
    ACCESS_DENIED = "access_denied"
    INVALID_RANGE = "invalid_range"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    NAME_CONFLICT = "name_conflict"


@dataclass(frozen=True)
class Outcome:
    """Succès ou échec sans valeur, retourné par le guard."""
    success: bool
    failure: Optional[Failure] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "Outcome":
        return cls(success=True)

    @classmethod
    def fail(cls, failure: Failure, message: Optional[str] = None) -> "Outcome":
        return cls(success=False, failure=failure, message=message)


@dataclass(frozen=True)
class Ack(Outcome):
    """Acquittement d'une écriture : succès + nombre de lignes affectées."""
    count: int = 0

    @classmethod
    def ok(cls, count: int = 1) -> "Ack":
        return cls(success=True, count=count)

    @classmethod
    def of(cls, count: int) -> "Ack":
        """0 ligne affectée = l'élément a disparu entre-temps."""
        if count > 0:
            return cls.ok(count)
        return cls.fail(Failure.NOT_FOUND, "Aucune ligne affectée.")

    @classmethod
    def fail(cls, failure: Failure, message: Optional[str] = None) -> "Ack":
        return cls(success=False, failure=failure, message=message)

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "Ack":
        return cls(success=outcome.success, failure=outcome.failure, message=outcome.message)


@dataclass(frozen=True)
class IdResult(Outcome):
    """Résultat d'une création : succès + identifiant attribué."""
    value: Optional[int] = None

    @classmethod
    def ok(cls, value: int) -> "IdResult":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, failure: Failure, message: Optional[str] = None) -> "IdResult":
        return cls(success=False, failure=failure, message=message)

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "IdResult":
        return cls(success=outcome.success, failure=outcome.failure, message=outcome.message)


@dataclass(frozen=True)
class Result(Outcome, Generic[T]):
    """Résultat d'une lecture : succès + valeur lue."""
    value: Optional[T] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, failure: Failure, message: Optional[str] = None) -> "Result[T]":
        return cls(success=False, failure=failure, message=message)

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "Result[T]":
        return cls(success=outcome.success, failure=outcome.failure, message=outcome.message)
