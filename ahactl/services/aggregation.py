"""
Folds per-device outcomes into a single verdict.
"""

from typing import Iterable, List

from ahactl.errors import AggregateError, TargetExecutionError, describe
from ahactl.services.command_service import Outcome
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)


def fold(outcomes: Iterable[Outcome]) -> None:
    """
    Log every outcome and raise if any of them failed.

    Successful responses are only logged, never returned.

    Args:
        outcomes: One outcome per requested device, in completion order

    Raises:
        AggregateError: Listing every failed device
    """
    errors: List[TargetExecutionError] = []

    for outcome in outcomes:
        if outcome.ok:
            logger.info(
                "device_processed",
                device=outcome.name,
                response=outcome.message.strip()
            )
            continue

        logger.warning(
            "device_processing_failed",
            device=outcome.name,
            error=describe(outcome.error.cause)
        )
        errors.append(outcome.error)

    if errors:
        raise AggregateError(errors)
