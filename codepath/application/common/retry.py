"""Bounded retry for optimistic (version checked) writes."""

from collections.abc import Callable
from typing import TypeVar

import structlog

from codepath.exceptions import ConcurrentUpdateError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def retry_on_conflict(operation: Callable[[], T], attempts: int, entity_type: str, key: object) -> T:
    """
    Run a read-modify-write operation until its compare-and-swap succeeds.

    The operation must re-read its inputs on every call. A
    ConcurrentUpdateError raised by the repository triggers another attempt;
    after `attempts` losses the last error propagates.

    Args:
        operation: Callable performing one read-modify-write cycle
        attempts: Maximum number of cycles
        entity_type: Name used in logs and the final error
        key: Identifier of the contested entity

    Returns:
        The operation's result
    """
    last_error: ConcurrentUpdateError | None = None
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except ConcurrentUpdateError as e:
            last_error = e
            logger.warning(
                "concurrent_update_retry", entity_type=entity_type, key=str(key), attempt=attempt
            )
    raise last_error or ConcurrentUpdateError(entity_type, key)
