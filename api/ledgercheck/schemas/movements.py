from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from ledgercheck.models.ledger import (
    BalanceMismatch,
    Checkpoint,
    Movement,
    Reason,
    ReasonType,
    ValidationResult,
)

ACCEPTED = "Accepted"
FAILED = "Validation failed"

# Keeps every sum representable as a JSON number
MAX_ABS_AMOUNT = Decimal("1e15")
Money = Annotated[Decimal, Field(ge=-MAX_ABS_AMOUNT, le=MAX_ABS_AMOUNT)]


def _as_utc(value: datetime) -> datetime:
    # Bare timestamps are read as UTC so they compare with "Z" ones
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MovementIn(BaseModel):
    id: int
    date: datetime
    label: str
    amount: Money  # negative = debit, positive = credit

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class BalanceIn(BaseModel):
    date: datetime
    balance: Money

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class ValidateMovementsRequest(BaseModel):
    movements: List[MovementIn]
    balances: List[BalanceIn]

    def to_movements(self) -> list[Movement]:
        return [Movement(id=m.id, date=m.date, label=m.label, amount=m.amount) for m in self.movements]

    def to_checkpoints(self) -> list[Checkpoint]:
        return [Checkpoint(date=b.date, balance=b.balance) for b in self.balances]


class MovementReasonDetails(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    movement_id: int


class BalanceMismatchDetails(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    balance_start_date: datetime
    balance_end_date: datetime
    expected_final_balance: Decimal
    calculated_final_balance: Decimal

    @field_serializer("expected_final_balance", "calculated_final_balance")
    def as_number(self, value: Decimal) -> float:
        return float(value)


class ReasonOut(BaseModel):
    type: ReasonType
    message: str
    details: Optional[Union[BalanceMismatchDetails, MovementReasonDetails]] = None

    @classmethod
    def from_reason(cls, reason: Reason) -> "ReasonOut":
        details = reason.details()
        if details is None:
            out = None
        elif isinstance(reason, BalanceMismatch):
            out = BalanceMismatchDetails(**details)
        else:
            out = MovementReasonDetails(**details)
        return cls(type=reason.type, message=reason.message.value, details=out)


class ValidateMovementsResponse(BaseModel):
    message: str
    reasons: Optional[List[ReasonOut]] = None

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidateMovementsResponse":
        if result.accepted:
            return cls(message=ACCEPTED)
        return cls(message=FAILED, reasons=[ReasonOut.from_reason(r) for r in result.reasons])
