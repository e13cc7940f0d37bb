"""
FitCoach - Database Client.

Provides Supabase access for profiles, plans and progress logs.
"""

from fitcoach.db.client import (
    get_client,
    get_latest_workout_plan,
    get_profile,
    log_progress,
    save_nutrition_plan,
    save_workout_plan,
    upsert_profile,
)

__all__ = [
    "get_client",
    "get_profile",
    "upsert_profile",
    "save_workout_plan",
    "save_nutrition_plan",
    "get_latest_workout_plan",
    "log_progress",
]
