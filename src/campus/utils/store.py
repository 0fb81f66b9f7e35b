"""Store-failure translation for command dispatch."""

from contextlib import contextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError

from campus.exceptions import ExternalStoreError

logger = structlog.get_logger(__name__)

# Commands that converge to the same state when re-issued after a failure.
RETRY_SAFE_OPERATIONS = frozenset(
    {
        "EnsureProfile",
        "SubmitRegistration",
        "ProvisionCafeteria",
    }
)


@contextmanager
def store_guard(operation: str):
    """Surface store failures as ``ExternalStoreError`` ("outcome unknown")."""
    try:
        yield
    except SQLAlchemyError as exc:
        retry_safe = operation in RETRY_SAFE_OPERATIONS
        logger.error(
            "Store call failed, outcome unknown",
            operation=operation,
            retry_safe=retry_safe,
            error=str(exc),
        )
        raise ExternalStoreError(
            {"store": [f"{operation} could not be confirmed by the store; its outcome is unknown"]},
            retry_safe=retry_safe,
        ) from exc
