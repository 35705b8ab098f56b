"""
Listing API — Middleware Tests
==============================

What we test:
    ✅ Access log records carry listing id and caller
    ✅ Malformed incoming request ids are replaced
"""

import logging

import pytest

from listing_api.middleware.request_id import resolve_request_id


def _access_records(caplog):
    return [r for r in caplog.records if r.name == "listing_api.access"]


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_records_listing_and_caller(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="listing_api.access"):
            await test_client.patch(
                "/listings/999/field", json={"status_id": 2}, headers={"X-User-ID": "7"}
            )

        (record,) = _access_records(caplog)
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert record.listing_id == "999"
        assert record.caller == "7"
        assert "listing=999 caller=7" in record.getMessage()

    @pytest.mark.asyncio
    async def test_collection_request_has_no_listing(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="listing_api.access"):
            await test_client.get("/listings")

        (record,) = _access_records(caplog)
        assert record.listing_id == "-"
        assert record.caller == "-"

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="listing_api.access"):
            await test_client.get("/health")

        assert _access_records(caplog) == []


class TestRequestId:

    def test_plain_token_kept(self):
        assert resolve_request_id("gw-42.a_b") == "gw-42.a_b"

    @pytest.mark.parametrize("incoming", [None, "", "has space", "x" * 65, "trailing\n"])
    def test_malformed_replaced(self, incoming):
        rid = resolve_request_id(incoming)

        assert rid != incoming
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_malformed_header_not_echoed(self, test_client):
        response = await test_client.get("/listings/999", headers={"X-Request-ID": "a b"})

        assert response.headers["X-Request-ID"] != "a b"
        assert response.json()["request_id"] == response.headers["X-Request-ID"]
