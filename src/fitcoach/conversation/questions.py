"""
Onboarding questionnaire.

Fixed, ordered table. Each answer is stored in the profile under `key`.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OnboardingQuestion:
    """One onboarding step. `options` is empty for free-text questions."""
    key: str
    prompt: str
    options: tuple[str, ...] = ()

    @property
    def is_choice(self) -> bool:
        return bool(self.options)

    def match_option(self, answer: str) -> str | None:
        """The option an answer names (case-insensitive), or None."""
        normalized = answer.strip().casefold()
        for option in self.options:
            if option.casefold() == normalized:
                return option
        return None


ONBOARDING_QUESTIONS: tuple[OnboardingQuestion, ...] = (
    OnboardingQuestion("age", "What is your age?"),
    OnboardingQuestion("gender", "What is your gender?", ("Male", "Female", "Other")),
    OnboardingQuestion("height", "What is your height in cm?"),
    OnboardingQuestion("weight", "What is your weight in kg?"),
    OnboardingQuestion(
        "fitness_level",
        "What is your fitness level?",
        ("Beginner", "Intermediate", "Advanced"),
    ),
    OnboardingQuestion(
        "training_experience",
        "Tell me about your training experience (e.g., 1 year, never trained).",
    ),
    OnboardingQuestion(
        "available_equipment",
        "What equipment do you have access to? (e.g., Full Gym, Dumbbells only, Bodyweight)",
    ),
    OnboardingQuestion(
        "training_location",
        "Where do you prefer to train?",
        ("Gym", "Home", "Outdoor"),
    ),
    OnboardingQuestion(
        "injuries",
        'Do you have any injuries or medical issues I should know about? (Type "None" if none)',
    ),
    OnboardingQuestion(
        "diet_type",
        "What is your diet type?",
        ("No restrictions", "Vegan", "Halal", "Keto", "Vegetarian", "Other"),
    ),
    OnboardingQuestion(
        "daily_schedule",
        "Briefly describe your daily schedule (e.g., Work 9-5, Active, Sedentary).",
    ),
    OnboardingQuestion("sleep_hours", "How many hours do you sleep on average?"),
    OnboardingQuestion(
        "stress_level",
        "What is your current stress level?",
        ("Low", "Moderate", "High"),
    ),
    OnboardingQuestion(
        "goal",
        "What is your main goal?",
        ("Fat loss", "Muscle gain", "Strength", "Endurance", "Flexibility", "General health"),
    ),
)

QUESTION_KEYS = tuple(q.key for q in ONBOARDING_QUESTIONS)
