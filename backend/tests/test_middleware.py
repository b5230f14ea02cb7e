"""
HealthTrack Backend — Middleware Tests
=======================================

What:  Request ID propagation and access-log attribution.
"""

import logging

import pytest

ACCESS_LOGGER = "healthtrack.access"


def access_records(caplog, method, path):
    return [
        r for r in caplog.records
        if r.name == ACCESS_LOGGER and r.method == method and r.path == path
    ]


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/dlq/DLQ_AA0000")

        rid = response.headers["X-Request-ID"]
        assert len(rid) == 8
        assert response.json()["request_id"] == rid

    @pytest.mark.asyncio
    async def test_client_value_echoed(self, test_client):
        response = await test_client.get("/record/XX00000", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("supplied", ["x" * 65, "two words", "id;user=1"])
    async def test_unsafe_client_value_replaced(self, test_client, supplied):
        response = await test_client.get("/dlq/DLQ_AA0000", headers={"X-Request-ID": supplied})

        rid = response.headers["X-Request-ID"]
        assert rid != supplied
        assert len(rid) == 8
        assert response.json()["request_id"] == rid


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_protected_route_logs_user_id(self, test_client, register_and_login, caplog):
        user_id, headers = await register_and_login()
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.post(
            "/record", json={"condition": "Flu", "dob": "2000-01-01", "gender": "M"}, headers=headers
        )

        [record] = access_records(caplog, "POST", "/record")
        assert record.user_id == user_id
        assert record.status == 200
        assert f"user={user_id}" in record.getMessage()

    @pytest.mark.asyncio
    async def test_public_route_logged_anonymous(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/dlq/DLQ_AA0000")

        [record] = access_records(caplog, "GET", "/dlq/DLQ_AA0000")
        assert record.user_id is None
        assert record.levelno == logging.WARNING  # 404
        assert "user=-" in record.getMessage()

    @pytest.mark.asyncio
    async def test_rejected_token_logged_anonymous(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.post(
            "/record",
            json={"condition": "Flu", "dob": "2000-01-01", "gender": "M"},
            headers={"Authorization": "Bearer garbage"},
        )

        [record] = access_records(caplog, "POST", "/record")
        assert record.status == 401
        assert record.user_id is None

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/health")

        assert access_records(caplog, "GET", "/health") == []

    @pytest.mark.asyncio
    async def test_many_requests_never_throttled(self, test_client):
        for _ in range(150):
            response = await test_client.get("/dlq/DLQ_AA0000")
            assert response.status_code == 404
