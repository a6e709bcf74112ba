"""
Traduction des résultats métier typés en réponses HTTP.
"""

from fastapi import HTTPException

from tutorplan.core.outcomes import Ack, Failure, Outcome
from tutorplan.schemas.outcome import AckResponse

FAILURE_STATUS = {
    Failure.ACCESS_DENIED: 403,
    Failure.INVALID_RANGE: 422,
    Failure.NOT_FOUND: 404,
    Failure.CONFLICT: 409,
    Failure.NAME_CONFLICT: 409,
}


def raise_for_failure(outcome: Outcome) -> None:
    """Lève une HTTPException si le résultat est un échec."""
    if outcome.success:
        return
    raise HTTPException(
        status_code=FAILURE_STATUS.get(outcome.failure, 400),
        detail=outcome.message or outcome.failure.value,
    )


def ack_response(ack: Ack) -> AckResponse:
    raise_for_failure(ack)
    return AckResponse(success=True, count=ack.count)
