"""
Transaction primitive for counter-mutating operations

run_transaction executes a unit of work against db.session and commits it.
Lock and optimistic-concurrency conflicts are retried transparently; every
other error rolls the session back and propagates unchanged.
"""

import time
from typing import Callable, Optional, TypeVar
from flask import current_app
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError
from itassets import db
from itassets.buisness.core.errors import TransactionConflict
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.core.transaction")

T = TypeVar("T")

# Driver messages that signal a lock or serialization conflict
_CONFLICT_MARKERS = (
    "database is locked",
    "could not serialize access",
    "deadlock detected",
    "lock wait timeout",
)


def is_conflict(error: Exception) -> bool:
    """Tell whether a storage error is a retryable concurrency conflict"""
    if isinstance(error, StaleDataError):
        return True
    if isinstance(error, OperationalError):
        message = str(error.orig if error.orig is not None else error).lower()
        return any(marker in message for marker in _CONFLICT_MARKERS)
    return False


def run_transaction(work: Callable[..., T], max_attempts: Optional[int] = None) -> T:
    """
    Run ``work(session)`` in one transaction and commit it.

    Args:
        work: Callable receiving the session; it must not commit itself
        max_attempts: Override for TRANSACTION_MAX_ATTEMPTS

    Returns:
        Whatever ``work`` returned, after a successful commit

    Raises:
        TransactionConflict: If every attempt hit a concurrency conflict
    """
    attempts = max_attempts or current_app.config['TRANSACTION_MAX_ATTEMPTS']
    backoff = current_app.config['TRANSACTION_RETRY_BACKOFF_SECONDS']
    session = db.session

    for attempt in range(1, attempts + 1):
        try:
            result = work(session)
            session.commit()
            return result
        except (OperationalError, StaleDataError) as e:
            session.rollback()
            if not is_conflict(e):
                raise
            if attempt == attempts:
                logger.error(f"Transaction conflict persisted after {attempts} attempts: {e}")
                raise TransactionConflict(
                    f"Storage transaction conflicted {attempts} times; giving up"
                ) from e
            logger.warning(f"Transaction conflict on attempt {attempt}/{attempts}, retrying")
            if backoff:
                time.sleep(backoff * attempt)
        except Exception:
            session.rollback()
            raise
