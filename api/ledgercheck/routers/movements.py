import logging

from fastapi import APIRouter, Depends

from ledgercheck.config import Settings, get_settings
from ledgercheck.reconciler import reconcile
from ledgercheck.schemas.movements import ValidateMovementsRequest, ValidateMovementsResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movements", tags=["movements"])


@router.post(
    "/validation",
    response_model=ValidateMovementsResponse,
    response_model_exclude_none=True,
    status_code=200,
)
def validate_movements(payload: ValidateMovementsRequest, settings: Settings = Depends(get_settings)):
    """Check movements against balance checkpoints. Read-only.

    Always 200 for a well-formed body, whatever the outcome; the body says
    whether the movements were accepted and why not.
    """
    result = reconcile(
        payload.to_movements(),
        payload.to_checkpoints(),
        tolerance=settings.balance_tolerance,
    )
    logger.info(
        "Validated %d movements against %d balances: %s (%d reasons)",
        len(payload.movements),
        len(payload.balances),
        "accepted" if result.accepted else "rejected",
        len(result.reasons),
    )
    return ValidateMovementsResponse.from_result(result)
