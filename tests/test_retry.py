"""Tests for connection-exhaustion classification and retry."""
import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError, TimeoutError as PoolTimeoutError

from wodtracker.db.errors import is_connection_exhausted, is_missing_table
from wodtracker.db.retry import run_with_retry


def db_error(message: str, cls=OperationalError):
    return cls("SELECT 1", {}, Exception(message))


class TestIsConnectionExhausted:
    @pytest.mark.parametrize(
        "message",
        [
            "FATAL: sorry, too many clients already",
            "Too many connections",
            "User has exceeded the 'max_user_connections' resource",
            "remaining connection slots are reserved for non-replication superuser connections",
        ],
    )
    def test_connection_limit_messages(self, message):
        assert is_connection_exhausted(db_error(message)) is True

    def test_driver_exception_name(self):
        class TooManyConnectionsError(Exception):
            pass

        exc = OperationalError("SELECT 1", {}, TooManyConnectionsError("limit"))
        assert is_connection_exhausted(exc) is True

    def test_pool_timeout(self):
        assert is_connection_exhausted(PoolTimeoutError("QueuePool limit reached")) is True

    def test_other_errors_are_not_exhaustion(self):
        assert is_connection_exhausted(db_error("syntax error at or near")) is False
        assert is_connection_exhausted(ValueError("too many connections")) is False


class TestIsMissingTable:
    @pytest.mark.parametrize(
        "message",
        ["no such table: workouts", 'relation "workout_components" does not exist'],
    )
    def test_missing_table_messages(self, message):
        assert is_missing_table(db_error(message, ProgrammingError)) is True

    def test_missing_column_is_not_missing_table(self):
        assert is_missing_table(db_error("no such column: wod_details")) is False


class TestRunWithRetry:
    async def test_retries_until_success(self):
        calls = []

        async def operation():
            calls.append(1)
            if len(calls) < 3:
                raise db_error("too many connections")
            return "ok"

        assert await run_with_retry(operation, attempts=3, initial_delay=0) == "ok"
        assert len(calls) == 3

    async def test_reraises_after_last_attempt(self):
        calls = []

        async def operation():
            calls.append(1)
            raise db_error("too many connections")

        with pytest.raises(OperationalError):
            await run_with_retry(operation, attempts=3, initial_delay=0)
        assert len(calls) == 3

    async def test_other_errors_are_not_retried(self):
        calls = []

        async def operation():
            calls.append(1)
            raise db_error("division by zero")

        with pytest.raises(OperationalError):
            await run_with_retry(operation, attempts=3, initial_delay=0)
        assert len(calls) == 1
