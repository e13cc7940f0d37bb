"""
FitCoach - Supabase Client.

Low-level database access. All queries go through here.

Tables:
- profiles: one row per Telegram user (upserted wholesale)
- workout_plans / nutrition_plans: append-only generated plans
- progress_logs: append-only weight / mood / energy check-ins
"""

import logging
from datetime import datetime, timezone

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from fitcoach.config import settings
from fitcoach.errors import StoreError, StoreNotConfiguredError

logger = logging.getLogger(__name__)

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    Raises StoreNotConfiguredError when credentials are missing.
    """
    global _client

    if _client is None:
        if not settings.store_configured:
            raise StoreNotConfiguredError("Supabase credentials missing")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_key,
        )

    return _client


def _execute(query, table: str):
    """Run a query builder, mapping PostgREST and transport errors to StoreError."""
    try:
        return query.execute()
    except APIError as e:
        raise StoreError(f"{table}: {e.message}", table=table) from e
    except httpx.HTTPError as e:
        raise StoreError(f"{table}: {e}", table=table) from e


# =============================================================================
# Profile Operations
# =============================================================================


async def get_profile(user_id: int) -> dict | None:
    """
    Get a user's profile, or None if they haven't onboarded.

    Store failures are logged and read as "no profile".
    """
    try:
        client = get_client()
        response = _execute(
            client.table("profiles").select("*").eq("user_id", user_id).maybe_single(),
            "profiles",
        )
    except StoreError as e:
        logger.error(f"Error fetching profile for {user_id}: {e}")
        return None

    # maybe_single() yields no response at all when the row is missing
    if response is None:
        return None
    return response.data


async def upsert_profile(user_id: int, fields: dict) -> dict:
    """Create or replace a user's profile."""
    client = get_client()
    data = {
        "user_id": user_id,
        **fields,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }
    response = _execute(
        client.table("profiles").upsert(data, on_conflict="user_id"),
        "profiles",
    )
    return response.data[0]


# =============================================================================
# Plan Operations
# =============================================================================


async def save_workout_plan(user_id: int, content: str) -> dict:
    """Append a generated workout plan."""
    return await _insert_plan("workout_plans", user_id, content)


async def save_nutrition_plan(user_id: int, content: str) -> dict:
    """Append a generated nutrition plan."""
    return await _insert_plan("nutrition_plans", user_id, content)


async def _insert_plan(table: str, user_id: int, content: str) -> dict:
    client = get_client()
    data = {"user_id": user_id, "plan_data": {"content": content}}
    response = _execute(client.table(table).insert(data), table)
    return response.data[0]


async def get_latest_workout_plan(user_id: int) -> dict | None:
    """Get the most recently generated workout plan."""
    client = get_client()
    response = _execute(
        client.table("workout_plans")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(1),
        "workout_plans",
    )
    return response.data[0] if response.data else None


# =============================================================================
# Progress Operations
# =============================================================================


async def log_progress(user_id: int, entry: dict) -> dict:
    """
    Append a progress check-in.

    entry keys: weight, mood, energy_level
    """
    client = get_client()
    data = {"user_id": user_id, **entry}
    response = _execute(client.table("progress_logs").insert(data), "progress_logs")
    return response.data[0]


# =============================================================================
# Diagnostics
# =============================================================================

TABLES = ["profiles", "workout_plans", "nutrition_plans", "progress_logs"]


def count_rows(table: str) -> int | None:
    """Exact row count for a table (used by `fitcoach db`)."""
    client = get_client()
    response = _execute(client.table(table).select("*", count="exact").limit(0), table)
    return response.count
