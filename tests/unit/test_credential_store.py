"""Unit tests for integrity error classification."""

from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from src.kernel.identity.credential_store import is_unique_violation


def integrity_error(orig) -> IntegrityError:
    return IntegrityError("INSERT INTO identities ...", {}, orig)


class TestIsUniqueViolation:
    """Tests for is_unique_violation."""

    @pytest.mark.parametrize(
        "orig,expected",
        [
            (SimpleNamespace(sqlstate="23505"), True),
            (SimpleNamespace(sqlstate="23502"), False),
            (SimpleNamespace(pgcode="23505"), True),
            (SimpleNamespace(pgcode="23503"), False),
        ],
    )
    def test_postgres_sqlstate(self, orig, expected):
        assert is_unique_violation(integrity_error(orig)) is expected

    def test_sqlite_unique_message(self):
        orig = Exception("UNIQUE constraint failed: identities.email")

        assert is_unique_violation(integrity_error(orig))

    @pytest.mark.parametrize(
        "message",
        [
            "NOT NULL constraint failed: identities.password_hash",
            "FOREIGN KEY constraint failed",
        ],
    )
    def test_sqlite_other_constraints(self, message):
        assert not is_unique_violation(integrity_error(Exception(message)))
