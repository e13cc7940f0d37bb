"""
Tests for the Supabase store adapter.
"""

import asyncio
from unittest.mock import MagicMock, patch

import httpx
import pytest
from postgrest.exceptions import APIError

from fitcoach.db import client as db_client
from fitcoach.db.client import (
    count_rows,
    get_latest_workout_plan,
    get_profile,
    log_progress,
    save_nutrition_plan,
    save_workout_plan,
    upsert_profile,
)
from fitcoach.errors import StoreError, StoreNotConfiguredError


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


@pytest.fixture
def store(mock_supabase):
    with patch("fitcoach.db.client.get_client", return_value=mock_supabase):
        yield mock_supabase


def _api_error(message="boom"):
    return APIError({"message": message, "code": "500", "hint": None, "details": None})


class TestGetClient:
    """Tests for client construction."""

    def test_missing_credentials(self):
        mock_settings = MagicMock(store_configured=False)
        with patch.object(db_client, "_client", None), \
             patch.object(db_client, "settings", mock_settings):
            with pytest.raises(StoreNotConfiguredError):
                db_client.get_client()

    def test_singleton(self):
        mock_settings = MagicMock(store_configured=True, supabase_url="https://x.supabase.co", supabase_key="k")
        with patch.object(db_client, "_client", None), \
             patch.object(db_client, "settings", mock_settings), \
             patch.object(db_client, "create_client", return_value=MagicMock()) as mock_create:
            first = db_client.get_client()
            second = db_client.get_client()

        assert first is second
        mock_create.assert_called_once_with("https://x.supabase.co", "k")


class TestProfiles:
    """Tests for profile reads and upserts."""

    def test_get_profile(self, store, sample_profile):
        store.table.return_value.execute.return_value = MagicMock(data=sample_profile)

        assert _run(get_profile(42)) == sample_profile
        store.table.assert_called_with("profiles")
        store.table.return_value.eq.assert_called_with("user_id", 42)

    def test_get_profile_missing_row(self, store):
        store.table.return_value.execute.return_value = None
        assert _run(get_profile(42)) is None

    def test_get_profile_store_error_reads_as_absent(self, store):
        store.table.return_value.execute.side_effect = _api_error()
        assert _run(get_profile(42)) is None

    def test_get_profile_connection_error_reads_as_absent(self, store):
        store.table.return_value.execute.side_effect = httpx.ConnectError("connection refused")
        assert _run(get_profile(42)) is None

    def test_get_profile_not_configured_reads_as_absent(self):
        with patch("fitcoach.db.client.get_client", side_effect=StoreNotConfiguredError("missing")):
            assert _run(get_profile(42)) is None

    def test_upsert_profile_payload(self, store):
        _run(upsert_profile(42, {"age": "30", "username": "jane"}))

        mock_table = store.table.return_value
        data = mock_table.upsert.call_args.args[0]
        assert data["user_id"] == 42
        assert data["age"] == "30"
        assert data["username"] == "jane"
        assert "updated_at" in data
        assert mock_table.upsert.call_args.kwargs == {"on_conflict": "user_id"}

    def test_upsert_error_raises_store_error(self, store):
        store.table.return_value.execute.side_effect = _api_error("denied")

        with pytest.raises(StoreError) as exc_info:
            _run(upsert_profile(42, {}))

        assert exc_info.value.table == "profiles"
        assert "denied" in str(exc_info.value)


class TestPlans:
    """Tests for plan inserts and reads."""

    def test_save_workout_plan(self, store):
        result = _run(save_workout_plan(42, "plan text"))

        store.table.assert_called_with("workout_plans")
        store.table.return_value.insert.assert_called_once_with(
            {"user_id": 42, "plan_data": {"content": "plan text"}}
        )
        assert result == {"id": "row-1"}

    def test_save_nutrition_plan(self, store):
        _run(save_nutrition_plan(42, "meals"))
        store.table.assert_called_with("nutrition_plans")

    def test_latest_workout_plan(self, store):
        row = {"id": "p2", "plan_data": {"content": "newest"}}
        store.table.return_value.execute.return_value = MagicMock(data=[row])

        assert _run(get_latest_workout_plan(42)) == row
        mock_table = store.table.return_value
        mock_table.order.assert_called_once_with("created_at", desc=True)
        mock_table.limit.assert_called_once_with(1)

    def test_latest_workout_plan_none(self, store):
        store.table.return_value.execute.return_value = MagicMock(data=[])
        assert _run(get_latest_workout_plan(42)) is None


class TestProgressLogs:
    """Tests for progress inserts."""

    def test_log_progress_payload(self, store):
        _run(log_progress(42, {"weight": None, "mood": "ok", "energy_level": "Low"}))

        store.table.assert_called_with("progress_logs")
        store.table.return_value.insert.assert_called_once_with(
            {"user_id": 42, "weight": None, "mood": "ok", "energy_level": "Low"}
        )

    def test_timeout_raises_store_error(self, store):
        store.table.return_value.execute.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(StoreError) as exc_info:
            _run(log_progress(42, {}))

        assert exc_info.value.table == "progress_logs"

    def test_log_progress_error(self, store):
        store.table.return_value.execute.side_effect = _api_error()
        with pytest.raises(StoreError):
            _run(log_progress(42, {}))


def test_count_rows(store):
    store.table.return_value.execute.return_value = MagicMock(count=7)
    assert count_rows("profiles") == 7
    store.table.return_value.select.assert_called_with("*", count="exact")
