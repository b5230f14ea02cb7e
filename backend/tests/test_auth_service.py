"""
HealthTrack Backend — Auth Service Unit Tests
==============================================

What:  Registration and login rules, with a mock session and patched
       password primitives (no real DB or bcrypt).
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import AuthError, ConflictError, DatabaseError, ValidationError
from app.security import decode_access_token
from app.services.auth_service import AuthService


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


class TestRegister:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,email,password",
        [
            (None, "a@example.com", "pw"),
            ("Ann", "", "pw"),
            ("Ann", "a@example.com", None),
        ],
    )
    async def test_missing_field_rejected(self, mock_db_session, name, email, password):
        with pytest.raises(ValidationError, match="All fields required"):
            await self.service.register(mock_db_session, name, email, password)
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_email_conflicts(self, mock_db_session):
        mock_db_session.execute.return_value = _result(3)

        with pytest.raises(ConflictError, match="Email already exists"):
            await self.service.register(mock_db_session, "Ann", "a@example.com", "pw")
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_conflicts(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("duplicate key"))
        )

        with patch("app.services.auth_service.hash_password", AsyncMock(return_value="hashed")):
            with pytest.raises(ConflictError):
                await self.service.register(mock_db_session, "Ann", "a@example.com", "pw")
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_success_stores_hash_and_returns_id(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        mock_db_session.add = MagicMock(side_effect=lambda user: setattr(user, "id", 42))

        with patch("app.services.auth_service.hash_password", AsyncMock(return_value="hashed")):
            result = await self.service.register(mock_db_session, "Ann", "a@example.com", "pw")

        assert result.user_id == 42
        assert result.model_dump(by_alias=True) == {
            "message": "User registered successfully",
            "userId": 42,
        }
        stored = mock_db_session.add.call_args.args[0]
        assert stored.password_hash == "hashed"
        assert stored.email == "a@example.com"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )
        with pytest.raises(DatabaseError):
            await self.service.register(mock_db_session, "Ann", "a@example.com", "pw")


class TestLogin:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    async def test_missing_field_rejected(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.login(mock_db_session, "a@example.com", "")

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_identical(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        with pytest.raises(AuthError) as unknown:
            await self.service.login(mock_db_session, "nobody@example.com", "pw")

        user = SimpleNamespace(id=1, password_hash="stored")
        mock_db_session.execute.return_value = _result(user)
        with patch("app.services.auth_service.verify_password", AsyncMock(return_value=False)):
            with pytest.raises(AuthError) as wrong:
                await self.service.login(mock_db_session, "a@example.com", "bad")

        assert unknown.value.message == wrong.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_success_returns_token_for_user(self, mock_db_session):
        user = SimpleNamespace(id=9, password_hash="stored")
        mock_db_session.execute.return_value = _result(user)

        with patch("app.services.auth_service.verify_password", AsyncMock(return_value=True)):
            result = await self.service.login(mock_db_session, "a@example.com", "pw")

        assert decode_access_token(result.token) == 9
