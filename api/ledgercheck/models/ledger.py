from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Union


class ReasonType(str, Enum):
    DUPLICATE = "DUPLICATE"
    BALANCE_MISMATCH = "BALANCE_MISMATCH"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    UNVERIFIABLE_MOVEMENTS = "UNVERIFIABLE_MOVEMENTS"


class ReasonMessage(str, Enum):
    DUPLICATE = "Duplicate operation"
    POSITIVE_BALANCE_MISMATCH = "Possible duplicate or incorrect movement(s)"
    NEGATIVE_BALANCE_MISMATCH = "Possible missing movement(s)"
    OUT_OF_BOUNDS = "Movement out of bounds"
    UNVERIFIABLE_MOVEMENTS_NO_CHECK_POINT = "Unverifiable movements, no balance check point available"
    UNVERIFIABLE_MOVEMENTS_ONLY_ONE_CHECK_POINT = "Unverifiable movements, only one balance check point available"


class MismatchDirection(str, Enum):
    POSITIVE = "POSITIVE"  # computed >= expected
    NEGATIVE = "NEGATIVE"  # computed < expected


@dataclass(frozen=True)
class Movement:
    id: int
    date: datetime
    label: str
    amount: Decimal


@dataclass(frozen=True)
class Checkpoint:
    """Attested running balance as of `date`."""

    date: datetime
    balance: Decimal


@dataclass(frozen=True)
class DuplicateMovement:
    movement_id: int
    type: Literal[ReasonType.DUPLICATE] = field(default=ReasonType.DUPLICATE, init=False)

    @property
    def message(self) -> ReasonMessage:
        return ReasonMessage.DUPLICATE

    def details(self) -> dict:
        return {"movement_id": self.movement_id}


@dataclass(frozen=True)
class OutOfBoundsMovement:
    movement_id: int
    type: Literal[ReasonType.OUT_OF_BOUNDS] = field(default=ReasonType.OUT_OF_BOUNDS, init=False)

    @property
    def message(self) -> ReasonMessage:
        return ReasonMessage.OUT_OF_BOUNDS

    def details(self) -> dict:
        return {"movement_id": self.movement_id}


@dataclass(frozen=True)
class BalanceMismatch:
    interval_start: datetime
    interval_end: datetime
    expected_balance: Decimal
    computed_balance: Decimal
    direction: MismatchDirection
    type: Literal[ReasonType.BALANCE_MISMATCH] = field(default=ReasonType.BALANCE_MISMATCH, init=False)

    @property
    def message(self) -> ReasonMessage:
        if self.direction is MismatchDirection.NEGATIVE:
            return ReasonMessage.NEGATIVE_BALANCE_MISMATCH
        return ReasonMessage.POSITIVE_BALANCE_MISMATCH

    def details(self) -> dict:
        return {
            "balance_start_date": self.interval_start,
            "balance_end_date": self.interval_end,
            "expected_final_balance": self.expected_balance,
            "calculated_final_balance": self.computed_balance,
        }


@dataclass(frozen=True)
class UnverifiableMovements:
    # 0 or 1; only changes the message
    checkpoint_count: int
    type: Literal[ReasonType.UNVERIFIABLE_MOVEMENTS] = field(default=ReasonType.UNVERIFIABLE_MOVEMENTS, init=False)

    @property
    def message(self) -> ReasonMessage:
        if self.checkpoint_count == 0:
            return ReasonMessage.UNVERIFIABLE_MOVEMENTS_NO_CHECK_POINT
        return ReasonMessage.UNVERIFIABLE_MOVEMENTS_ONLY_ONE_CHECK_POINT

    def details(self) -> None:
        return None


Reason = Union[DuplicateMovement, OutOfBoundsMovement, BalanceMismatch, UnverifiableMovements]


@dataclass(frozen=True)
class ValidationResult:
    reasons: tuple[Reason, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.reasons
