"""
FitCoach - Coach Prompts.

Structure:
- SYSTEM_PROMPT: persona and safety rules (always the system message)
- *_TASK: user-message templates, formatted with the serialized profile
"""

import json


# =============================================================================
# Persona
# =============================================================================

SYSTEM_PROMPT = """You are AI FITCOACH PRO, a highly intelligent, professional, and motivational virtual gym trainer and fitness assistant.
Expertise: Certified personal trainer, Sports nutritionist, Physiotherapist, Mental coach, Lifestyle mentor.
Mission: Help user achieve best physical, mental, and lifestyle health using science-based methods.
Tone: Friendly, Respectful, Supportive, Confident, Motivating, Professional.
Rules:
- Never promote steroids.
- Never shame user.
- Never give extreme diets.
- Never risk health (prioritize safety).
- Use emojis moderately."""


# =============================================================================
# Tasks
# =============================================================================

WORKOUT_TASK = """Task: Create a highly personalized workout plan based on the user's profile.
User Profile: {profile}

Include:
- Warm-up
- Main exercises (Sets, Reps, Tempo, Rest)
- Alternatives
- Cool-down
- Stretching

Format as clear Telegram-friendly markdown with emojis."""

NUTRITION_TASK = """Task: Create a personalized nutrition and diet plan based on the user's profile.
User Profile: {profile}

Include:
- Personalized calorie targets
- Macro breakdown (Protein/Carbs/Fat)
- Meal plans (Breakfast, Lunch, Dinner, Snacks)
- Local/Budget-friendly options
- Hydration advice

Format as clear Telegram-friendly markdown with emojis."""

MOTIVATION_TASK = """Task: Generate a short, powerful motivational message for the user today.
User Profile: {profile}

Keep it concise and punchy."""

PROGRESS_FEEDBACK_TASK = (
    "The user just logged their progress: Weight: {weight}, Mood: {mood}, "
    "Energy: {energy}. Give a quick encouraging feedback."
)


def serialize_profile(profile: dict | None) -> str:
    """JSON view of a profile for prompt injection (empty object when absent)."""
    return json.dumps(profile or {}, ensure_ascii=False, default=str)


def chat_system_prompt(profile: dict | None) -> str:
    """Persona plus the user's profile as context for free-form chat."""
    return f"{SYSTEM_PROMPT}\nUser Context: {serialize_profile(profile)}"
