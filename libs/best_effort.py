"""Fire-and-forget execution of auxiliary work

Some steps (history bookkeeping, for example) must never block the primary
deliverable of an operation. ``best_effort`` runs such a step, logs any
failure with its traceback and hands back a Result instead of raising.
"""

import logging
from typing import Awaitable, Optional, TypeVar

from libs.result import Error, Result, Return

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def best_effort(
    operation: Awaitable[T],
    description: str,
    log: Optional[logging.Logger] = None,
) -> Result[T]:
    """
    Await an auxiliary operation, absorbing any exception it raises

    Args:
        operation: Awaitable performing the auxiliary work
        description: Human readable name of the step, used in log lines
        log: Logger to report failures to (defaults to this module's logger)

    Returns:
        Result with the operation's value, or BEST_EFFORT_FAILED
    """
    log = log or logger
    try:
        value = await operation
    except Exception as e:
        log.exception(f"{description} failed, continuing without it: {e}")
        return Return.err(
            Error(
                code="BEST_EFFORT_FAILED",
                message=f"{description} failed",
                reason=str(e),
            )
        )
    return Return.ok(value)
