"""
FitCoach Conversation System.

Per-user dialog state and routing for a single incoming-text handler:
1. Onboarding - fixed questionnaire that builds the profile
2. Progress - weight / mood / energy check-in
3. Chat - free-form fallback when no dialog is active
"""

from .machine import Conversation, DialogPolicy
from .questions import ONBOARDING_QUESTIONS, OnboardingQuestion
from .state import OnboardingState, ProgressState, ProgressStep, StateStore
from .transport import InboundMessage, Responder

__all__ = [
    "Conversation",
    "DialogPolicy",
    "ONBOARDING_QUESTIONS",
    "OnboardingQuestion",
    "OnboardingState",
    "ProgressState",
    "ProgressStep",
    "StateStore",
    "InboundMessage",
    "Responder",
]
