"""
Profile display for /profile.
"""

from fitcoach.conversation.transport import InboundMessage, Responder
from fitcoach.db.client import get_profile

NO_PROFILE = "You haven't set up a profile yet! Type /start to begin."

# (label, profile key, unit suffix)
PROFILE_FIELDS: list[tuple[str, str, str]] = [
    ("Age", "age", ""),
    ("Gender", "gender", ""),
    ("Height", "height", " cm"),
    ("Weight", "weight", " kg"),
    ("Goal", "goal", ""),
    ("Level", "fitness_level", ""),
    ("Location", "training_location", ""),
    ("Diet", "diet_type", ""),
]


def format_profile_card(profile: dict) -> str:
    """Markdown card with the main profile attributes."""
    lines = ["📋 *User Fitness Profile*", ""]
    for label, key, unit in PROFILE_FIELDS:
        lines.append(f"{label}: {profile.get(key)}{unit}")
    return "\n".join(lines)


async def show_profile(message: InboundMessage, responder: Responder) -> None:
    profile = await get_profile(message.user_id)
    if not profile:
        await responder.send_text(NO_PROFILE)
        return
    await responder.send_markdown(format_profile_card(profile))
