"""Classify driver errors that the API treats specially."""

from sqlalchemy.exc import DBAPIError, TimeoutError as PoolTimeoutError

_EXHAUSTED_MARKERS = (
    "too many connections",
    "too many clients",
    "max_user_connections",
    "remaining connection slots are reserved",
)
_MISSING_TABLE_MARKERS = (
    "no such table",
    "undefinedtable",
    "doesn't exist",
)


def _message(exc: BaseException) -> str:
    orig = getattr(exc, "orig", None)
    parts = [str(exc), type(exc).__name__]
    if orig is not None:
        parts += [str(orig), type(orig).__name__]
    return " ".join(parts).lower()


def is_connection_exhausted(exc: BaseException) -> bool:
    """True for connection-limit errors and pool checkout timeouts."""
    if isinstance(exc, PoolTimeoutError):
        return True
    if not isinstance(exc, DBAPIError):
        return False
    msg = _message(exc)
    return "toomanyconnections" in msg or any(m in msg for m in _EXHAUSTED_MARKERS)


def is_missing_table(exc: BaseException) -> bool:
    """True when the query hit a table that has not been migrated yet."""
    if not isinstance(exc, DBAPIError):
        return False
    msg = _message(exc)
    if any(m in msg for m in _MISSING_TABLE_MARKERS):
        return True
    # PostgreSQL: relation "xyz" does not exist
    return "relation" in msg and "does not exist" in msg
