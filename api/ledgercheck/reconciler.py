"""Consistency check between ledger movements and balance checkpoints.

Exposes:
- reconcile(movements, checkpoints) -> ValidationResult

Movements and checkpoints are sorted by date (stable, the caller's sequences
are left untouched). With fewer than two checkpoints nothing can be verified
and a single UNVERIFIABLE_MOVEMENTS reason is returned. Otherwise two passes
run over the sorted movements:

1. duplicates on (date, amount, label) and movements outside
   [first checkpoint, last checkpoint];
2. for each pair of consecutive checkpoints, the movements dated in
   [start, end) are summed onto the start balance and compared to the end
   balance within a tolerance of 0.01.
"""

import logging
from decimal import Decimal, InvalidOperation, localcontext
from operator import attrgetter
from typing import Iterable, Optional, Sequence

from .models.ledger import (
    BalanceMismatch,
    Checkpoint,
    DuplicateMovement,
    MismatchDirection,
    Movement,
    OutOfBoundsMovement,
    Reason,
    UnverifiableMovements,
    ValidationResult,
)

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Convert an amount to Decimal, going through str for floats.

    Signaling NaNs become quiet ones so they can be hashed and summed.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if value.is_snan():
        return Decimal("NaN")
    return value


def reconcile(
    movements: Iterable[Movement],
    checkpoints: Iterable[Checkpoint],
    tolerance: Optional[Decimal] = None,
) -> ValidationResult:
    """Validate movements against a series of balance checkpoints.

    Reasons are ordered: duplicate and out-of-bounds findings in movement date
    order first, then balance mismatches in interval order. A movement dated
    exactly at the last checkpoint is in bounds but belongs to no interval.
    """
    tolerance = BALANCE_TOLERANCE if tolerance is None else to_decimal(tolerance)

    sorted_movements = sorted(movements, key=attrgetter("date"))
    sorted_checkpoints = sorted(checkpoints, key=attrgetter("date"))

    if len(sorted_checkpoints) < 2:
        logger.debug(
            "Cannot verify %d movements with %d checkpoint(s)",
            len(sorted_movements),
            len(sorted_checkpoints),
        )
        return ValidationResult(reasons=(UnverifiableMovements(checkpoint_count=len(sorted_checkpoints)),))

    window_start = sorted_checkpoints[0].date
    window_end = sorted_checkpoints[-1].date

    reasons: list[Reason] = []
    reasons.extend(detect_duplicates_and_out_of_bounds(sorted_movements, window_start, window_end))
    reasons.extend(check_balance_mismatches(sorted_checkpoints, sorted_movements, tolerance))
    return ValidationResult(reasons=tuple(reasons))


def detect_duplicates_and_out_of_bounds(movements: Sequence[Movement], window_start, window_end) -> list[Reason]:
    """Single pass over date-sorted movements.

    A movement repeating the (date, amount, label) of an earlier one is a
    duplicate; every repeat after the first occurrence is reported. When a
    movement is both, the duplicate reason comes first.
    """
    seen: set[tuple] = set()
    reasons: list[Reason] = []

    for movement in movements:
        key = (movement.date, to_decimal(movement.amount), movement.label)
        if key in seen:
            reasons.append(DuplicateMovement(movement_id=movement.id))
        else:
            seen.add(key)

        if movement.date < window_start or movement.date > window_end:
            reasons.append(OutOfBoundsMovement(movement_id=movement.id))

    return reasons


def check_balance_mismatches(
    checkpoints: Sequence[Checkpoint],
    movements: Sequence[Movement],
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> list[Reason]:
    """Compare each checkpoint with the previous one plus the movements in between.

    Both sequences must be sorted by date. The movement cursor only moves
    forward: anything dated before the interval end is consumed, and counted
    only if it is not before the interval start.
    """
    if len(checkpoints) < 2:
        return []

    reasons: list[Reason] = []
    index = 0

    # NaN or opposite infinities give a NaN delta instead of raising
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        for start, end in zip(checkpoints, checkpoints[1:]):
            interval_sum = Decimal("0")
            while index < len(movements) and movements[index].date < end.date:
                if movements[index].date >= start.date:
                    interval_sum += to_decimal(movements[index].amount)
                index += 1

            computed = to_decimal(start.balance) + interval_sum
            expected = to_decimal(end.balance)
            delta = computed - expected

            if delta.is_nan() or abs(delta) <= tolerance:
                continue
            reasons.append(
                BalanceMismatch(
                    interval_start=start.date,
                    interval_end=end.date,
                    expected_balance=expected,
                    computed_balance=computed,
                    direction=MismatchDirection.NEGATIVE if delta < 0 else MismatchDirection.POSITIVE,
                )
            )

    return reasons
