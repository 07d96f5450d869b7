"""
Transaction helpers for import pipelines

- is_transaction_conflict: recognizes the serialization/deadlock failures an import tolerates
- apply_transaction_timeouts: applies the configured lock wait and statement budgets
"""

import logging

from flask import current_app, has_app_context
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATEs: serialization_failure, deadlock_detected
TRANSACTION_CONFLICT_CODES = {'40001', '40P01'}

DEFAULT_MAX_WAIT_MS = 60000
DEFAULT_TIMEOUT_MS = 200000


def _sqlstate(error: DBAPIError):
    orig = getattr(error, 'orig', None)
    if orig is None:
        return None

    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, 'pgcode', None) or getattr(orig, 'sqlstate', None)
    if code is None:
        diag = getattr(orig, 'diag', None)
        code = getattr(diag, 'sqlstate', None)
    return code


def is_transaction_conflict(error: Exception) -> bool:
    """Whether a database error is a transaction conflict (serialization failure or deadlock)."""
    if not isinstance(error, OperationalError):
        return False
    return _sqlstate(error) in TRANSACTION_CONFLICT_CODES


def apply_transaction_timeouts(session: Session):
    """
    Apply lock wait and statement timeouts to the current transaction.

    Uses SET LOCAL, so the values end with the transaction. Only PostgreSQL
    supports them; other dialects are left alone.
    """
    bind = session.get_bind()
    if bind.dialect.name != 'postgresql':
        return

    max_wait_ms = DEFAULT_MAX_WAIT_MS
    timeout_ms = DEFAULT_TIMEOUT_MS
    if has_app_context():
        max_wait_ms = int(current_app.config.get('TRANSACTION_MAX_WAIT_MS', DEFAULT_MAX_WAIT_MS))
        timeout_ms = int(current_app.config.get('TRANSACTION_TIMEOUT_MS', DEFAULT_TIMEOUT_MS))

    session.execute(text(f"SET LOCAL lock_timeout = {max_wait_ms}"))
    session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))
    logger.debug(f"Transaction timeouts set: lock_timeout={max_wait_ms}ms, statement_timeout={timeout_ms}ms")
