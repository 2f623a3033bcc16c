"""Database package: engine, session, base, retry helpers."""

from wodtracker.db.retry import execute_with_retry, run_with_retry
from wodtracker.db.session import async_session_maker, get_db

__all__ = ["async_session_maker", "execute_with_retry", "get_db", "run_with_retry"]
