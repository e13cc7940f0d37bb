"""
FitCoach - Generation Service.

One completion call per feature. Each function builds the role-tagged
messages and returns the generated text; failures surface as CompletionError.
"""

from fitcoach.llm.client import call_llm_chat
from fitcoach.prompts.coach import (
    MOTIVATION_TASK,
    NUTRITION_TASK,
    PROGRESS_FEEDBACK_TASK,
    SYSTEM_PROMPT,
    WORKOUT_TASK,
    chat_system_prompt,
    serialize_profile,
)


def _task_messages(template: str, profile: dict | None) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": template.format(profile=serialize_profile(profile))},
    ]


async def chat_reply(user_input: str, profile: dict | None) -> str:
    """Free-form answer with the profile as system context."""
    messages = [
        {"role": "system", "content": chat_system_prompt(profile)},
        {"role": "user", "content": user_input},
    ]
    return await call_llm_chat(messages=messages, node_name="chat")


async def generate_workout_plan(profile: dict) -> str:
    return await call_llm_chat(
        messages=_task_messages(WORKOUT_TASK, profile),
        node_name="workout",
    )


async def generate_nutrition_plan(profile: dict) -> str:
    return await call_llm_chat(
        messages=_task_messages(NUTRITION_TASK, profile),
        node_name="nutrition",
    )


async def generate_motivation(profile: dict | None) -> str:
    return await call_llm_chat(
        messages=_task_messages(MOTIVATION_TASK, profile),
        node_name="motivation",
    )


async def progress_feedback(
    weight: float | None,
    mood: str,
    energy: str,
    profile: dict | None,
) -> str:
    """Short encouragement for a check-in that was just logged."""
    weight_text = "unknown" if weight is None else f"{weight}kg"
    user_input = PROGRESS_FEEDBACK_TASK.format(weight=weight_text, mood=mood, energy=energy)
    messages = [
        {"role": "system", "content": chat_system_prompt(profile)},
        {"role": "user", "content": user_input},
    ]
    return await call_llm_chat(messages=messages, node_name="progress_feedback")
