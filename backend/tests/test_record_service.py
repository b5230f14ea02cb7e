"""
HealthTrack Backend — Record Service Unit Tests
================================================

What:  Report ID generation, date-of-birth rules and the create/get/update
       paths against a mock session.
"""

import re
from datetime import date, timedelta, datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.services.record_service import RecordService, generate_report_id, parse_dob


class TestReportId:

    def test_uses_initials_time_digits_and_random_digit(self):
        with patch("app.services.record_service.random.randint", return_value=7):
            report_id = generate_report_id("jane doe", "flu", now_ms=1700000048213)
        assert report_id == "JF82137"

    def test_empty_name_and_condition_fall_back(self):
        report_id = generate_report_id("", "", now_ms=1234567890123)
        assert re.fullmatch(r"XZ0123\d", report_id)

    def test_uses_current_time_by_default(self):
        assert re.fullmatch(r"AB\d{5}", generate_report_id("Alice", "bronchitis"))


class TestParseDob:

    def test_past_date_accepted(self):
        assert parse_dob("2000-01-01") == date(2000, 1, 1)

    def test_today_accepted(self):
        today = datetime.now(timezone.utc).date()
        assert parse_dob(today.isoformat()) == today

    def test_future_date_rejected(self):
        tomorrow = datetime.now(timezone.utc).date() + timedelta(days=1)
        with pytest.raises(ValidationError, match="future"):
            parse_dob(tomorrow.isoformat())

    def test_future_datetime_rejected(self):
        later = datetime.now(timezone.utc) + timedelta(hours=1)
        with pytest.raises(ValidationError, match="future"):
            parse_dob(later.isoformat())

    def test_datetime_with_z_suffix_accepted(self):
        assert parse_dob("1990-05-17T08:30:00Z") == date(1990, 5, 17)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid date of birth"):
            parse_dob("last tuesday")


class TestCreateRecord:

    def setup_method(self):
        self.service = RecordService()

    @pytest.mark.asyncio
    async def test_missing_field_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="All fields required"):
            await self.service.create_record(mock_db_session, 1, "Flu", "2000-01-01", "")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_persists_record_with_generated_id(self, mock_db_session):
        name_result = MagicMock()
        name_result.scalar_one_or_none.return_value = "Jane Doe"
        mock_db_session.execute.return_value = name_result

        result = await self.service.create_record(mock_db_session, 1, "Flu", "2000-01-01", "F")

        assert re.fullmatch(r"JF\d{5}", result.report_id)
        record = mock_db_session.add.call_args.args[0]
        assert record.user_id == 1
        assert record.report_id == result.report_id
        assert record.dob == date(2000, 1, 1)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_user_name_uses_unknown(self, mock_db_session):
        name_result = MagicMock()
        name_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = name_result

        result = await self.service.create_record(mock_db_session, 1, "asthma", "2000-01-01", "F")

        assert result.report_id.startswith("UA")


class TestGetRecord:

    def setup_method(self):
        self.service = RecordService()

    @pytest.mark.asyncio
    async def test_found_returns_joined_view(self, mock_db_session):
        row = SimpleNamespace(
            name="Jane Doe", condition="Flu", dob=date(2000, 1, 1), gender="F", report_id="JF12345"
        )
        mock_result = MagicMock()
        mock_result.first.return_value = row
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_record(mock_db_session, "JF12345")

        assert result.model_dump(mode="json") == {
            "name": "Jane Doe",
            "condition": "Flu",
            "dob": "2000-01-01",
            "gender": "F",
            "report_id": "JF12345",
        }

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.first.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError, match="Record not found"):
            await self.service.get_record(mock_db_session, "ZZ00000")

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )
        with pytest.raises(DatabaseError):
            await self.service.get_record(mock_db_session, "JF12345")


class TestUpdateRecord:

    def setup_method(self):
        self.service = RecordService()

    @pytest.mark.asyncio
    async def test_unknown_report_id_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 0
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.update_record(mock_db_session, "NOPE", "Cold", "2001-02-03", "M")
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_future_dob_rejected_before_query(self, mock_db_session):
        future = (datetime.now(timezone.utc).date() + timedelta(days=30)).isoformat()
        with pytest.raises(ValidationError, match="future"):
            await self.service.update_record(mock_db_session, "JF12345", "Cold", future, "M")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_db_session.execute.return_value = mock_result

        result = await self.service.update_record(mock_db_session, "JF12345", "Cold", "2001-02-03", "M")

        assert result.message == "Record updated successfully"
        mock_db_session.commit.assert_awaited_once()
