"""
Plan Generation.

/workout and /diet: generate from the profile, persist a plan record, send it.
/motivation: generate a short message, nothing persisted.

A failed generation persists nothing and sends a static apology.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fitcoach.coach.generation import (
    generate_motivation,
    generate_nutrition_plan,
    generate_workout_plan,
)
from fitcoach.conversation.transport import InboundMessage, Responder
from fitcoach.db.client import get_profile, save_nutrition_plan, save_workout_plan

logger = logging.getLogger(__name__)

PROFILE_REQUIRED = "Please complete your /profile first."
MOTIVATION_FALLBACK = "Keep pushing! Your only limit is you. 💪"


@dataclass(frozen=True)
class PlanKind:
    """How one plan type is generated, stored and announced."""
    name: str
    notice: str
    apology: str
    generate: Callable[[dict], Awaitable[str]]
    save: Callable[[int, str], Awaitable[dict]]


WORKOUT = PlanKind(
    name="workout",
    notice="🏋️ Generating your personalized workout plan... This may take a moment.",
    apology="Sorry, I failed to generate a workout plan. Please try again.",
    generate=generate_workout_plan,
    save=save_workout_plan,
)

NUTRITION = PlanKind(
    name="nutrition",
    notice="🥗 Creating your nutrition plan...",
    apology="Sorry, I failed to generate a diet plan.",
    generate=generate_nutrition_plan,
    save=save_nutrition_plan,
)


async def send_plan(kind: PlanKind, message: InboundMessage, responder: Responder) -> None:
    profile = await get_profile(message.user_id)
    if not profile:
        await responder.send_text(PROFILE_REQUIRED)
        return

    await responder.send_text(kind.notice)
    try:
        plan = await kind.generate(profile)
        await kind.save(message.user_id, plan)
    except Exception as e:
        logger.error(f"{kind.name.title()} generation error for {message.user_id}: {e}")
        await responder.send_text(kind.apology)
        return

    logger.info(f"Saved {kind.name} plan for {message.user_id}")
    await responder.send_markdown(plan)


async def send_workout_plan(message: InboundMessage, responder: Responder) -> None:
    await send_plan(WORKOUT, message, responder)


async def send_nutrition_plan(message: InboundMessage, responder: Responder) -> None:
    await send_plan(NUTRITION, message, responder)


async def send_motivation(message: InboundMessage, responder: Responder) -> None:
    profile = await get_profile(message.user_id)
    if not profile:
        await responder.send_text(PROFILE_REQUIRED)
        return

    try:
        text = await generate_motivation(profile)
    except Exception as e:
        logger.error(f"Motivation error for {message.user_id}: {e}")
        text = MOTIVATION_FALLBACK
    await responder.send_text(text)
