"""
Conversation State Machine.

Routes every inbound text to one of three modes based on the sender's state:
- no state        -> free-form chat
- OnboardingState -> next questionnaire answer
- ProgressState   -> next progress check-in answer

State is dropped only after the durable write's outcome is known.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Literal

from fitcoach.coach.generation import chat_reply, progress_feedback
from fitcoach.conversation.questions import ONBOARDING_QUESTIONS, OnboardingQuestion
from fitcoach.conversation.state import (
    OnboardingState,
    ProgressState,
    ProgressStep,
    StateStore,
)
from fitcoach.conversation.transport import InboundMessage, Responder
from fitcoach.db.client import get_profile, log_progress, upsert_profile

logger = logging.getLogger(__name__)


# =============================================================================
# Messages
# =============================================================================

WELCOME_NEW = (
    "👋 Welcome! I’m AI FITCOACH PRO, your personal Telegram fitness trainer.\n\n"
    "Let’s build your strongest body and mind together 💪🔥\n\n"
    "First, I need to know you better."
)
WELCOME_BACK = (
    "👋 Welcome back, {name}! I’m AI FITCOACH PRO.\n\n"
    "Type /workout for a new plan or /profile to see your data."
)
SAVING_PROFILE = "🔄 Saving your profile and preparing your journey..."
PROFILE_SAVED = (
    "✅ Profile saved! You are ready to go.\n\n"
    "Try these commands:\n"
    "/workout - Generate a workout plan\n"
    "/diet - Generate a nutrition plan\n"
    "/profile - View your profile"
)
PROFILE_SAVE_FAILED = "❌ Error saving profile. Please try /start again."
PROFILE_SAVE_RETRY = "❌ Error saving profile. Send any message to try again."
INVALID_CHOICE = "Please choose one of the options below."

PROFILE_REQUIRED = "Please complete your /profile first."
ASK_WEIGHT = "Please enter your current weight (kg):"
INVALID_WEIGHT = "Please enter your weight as a number, e.g. 72.5"
ASK_MOOD = "How is your mood today? (e.g. Great, Tired, Motivated)"
ASK_ENERGY = "What is your energy level? (Low/Medium/High)"
PROGRESS_LOGGED = "📈 Progress logged successfully! Keep up the great work."
PROGRESS_FAILED = "Failed to log progress. Please try again."
PROGRESS_RETRY = "Failed to log progress. Send any message to try again."

CHAT_FAILED = "Sorry, I encountered an error while thinking. Please try again."


# =============================================================================
# Input parsing
# =============================================================================

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_weight(text: str, *, strict: bool = False) -> float | None:
    """
    Parse a weight answer.

    Lenient: the leading number wins ("72.5kg" -> 72.5), None when there is none.
    Strict: the whole answer must be a finite number (comma decimals allowed).
    """
    if strict:
        try:
            value = float(text.strip().replace(",", "."))
        except ValueError:
            return None
        return value if math.isfinite(value) else None

    match = _LEADING_NUMBER.match(text)
    return float(match.group(1)) if match else None


@dataclass(frozen=True)
class DialogPolicy:
    """Product decisions for multi-step dialogs."""
    answer_validation: Literal["lenient", "strict"] = "lenient"
    keep_dialog_on_failure: bool = False

    @property
    def strict(self) -> bool:
        return self.answer_validation == "strict"

    @classmethod
    def from_settings(cls) -> "DialogPolicy":
        from fitcoach.config import settings

        return cls(
            answer_validation=settings.answer_validation,
            keep_dialog_on_failure=settings.keep_dialog_on_failure,
        )


class Conversation:
    """Per-user dialog routing for onboarding, progress logging and chat."""

    def __init__(
        self,
        states: StateStore | None = None,
        policy: DialogPolicy | None = None,
        questions: tuple[OnboardingQuestion, ...] = ONBOARDING_QUESTIONS,
    ) -> None:
        self.states = states if states is not None else StateStore()
        self.policy = policy or DialogPolicy()
        self.questions = questions

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    async def start(self, message: InboundMessage, responder: Responder) -> None:
        """/start: welcome back a known user, or begin onboarding."""
        async with self.states.session(message.user_id):
            profile = await get_profile(message.user_id)
            if profile:
                name = message.first_name or "there"
                await responder.send_text(WELCOME_BACK.format(name=name))
                return

            await responder.send_text(WELCOME_NEW)
            self.states.set(message.user_id, OnboardingState())
            logger.info(f"Onboarding started for {message.user_id}")
            await self.ask_question(responder, 0)

    async def begin_progress(self, message: InboundMessage, responder: Responder) -> None:
        """/progress: start a weight / mood / energy check-in."""
        async with self.states.session(message.user_id):
            profile = await get_profile(message.user_id)
            if not profile:
                await responder.send_text(PROFILE_REQUIRED)
                return

            await responder.send_text(ASK_WEIGHT)
            self.states.set(message.user_id, ProgressState())

    async def handle_text(self, message: InboundMessage, responder: Responder) -> None:
        """Route a non-command text to the active dialog, or to chat."""
        if message.text is None:
            return

        async with self.states.session(message.user_id):
            state = self.states.get(message.user_id)

            if state is None:
                await self._chat(message, responder)
            elif isinstance(state, ProgressState):
                await self._advance_progress(message, responder, state)
            else:
                await self._advance_onboarding(message, responder, state)

    async def cancel_dialog(self, user_id: int) -> bool:
        """Drop any active dialog. Returns True if there was one."""
        async with self.states.session(user_id):
            dropped = self.states.clear(user_id)
        if dropped is not None:
            logger.info(f"Dropped {type(dropped).__name__} for {user_id}")
        return dropped is not None

    async def ask_question(self, responder: Responder, index: int) -> None:
        question = self.questions[index]
        if question.is_choice:
            await responder.send_choices(question.prompt, question.options)
        else:
            await responder.send_text(question.prompt, clear_keyboard=True)

    # -------------------------------------------------------------------------
    # Onboarding
    # -------------------------------------------------------------------------

    async def _advance_onboarding(
        self,
        message: InboundMessage,
        responder: Responder,
        state: OnboardingState,
    ) -> None:
        if state.step >= len(self.questions):
            # Answers complete, previous save failed and was kept for retry
            await self._finish_onboarding(message, responder, state)
            return

        question = self.questions[state.step]
        answer = message.text

        if self.policy.strict and question.is_choice:
            answer = question.match_option(answer)
            if answer is None:
                await responder.send_text(INVALID_CHOICE)
                await self.ask_question(responder, state.step)
                return

        state = state.answer(question.key, answer)
        self.states.set(message.user_id, state)

        if state.step < len(self.questions):
            await self.ask_question(responder, state.step)
        else:
            await self._finish_onboarding(message, responder, state)

    async def _finish_onboarding(
        self,
        message: InboundMessage,
        responder: Responder,
        state: OnboardingState,
    ) -> None:
        await responder.send_text(SAVING_PROFILE, clear_keyboard=True)
        try:
            await upsert_profile(message.user_id, {
                **state.answers,
                "username": message.username,
                "full_name": message.display_name,
            })
        except Exception as e:
            logger.error(f"Save profile error for {message.user_id}: {e}")
            if self.policy.keep_dialog_on_failure:
                await responder.send_text(PROFILE_SAVE_RETRY)
            else:
                self.states.clear(message.user_id)
                await responder.send_text(PROFILE_SAVE_FAILED)
            return

        self.states.clear(message.user_id)
        logger.info(f"Onboarding complete for {message.user_id}")
        await responder.send_text(PROFILE_SAVED)

    # -------------------------------------------------------------------------
    # Progress logging
    # -------------------------------------------------------------------------

    async def _advance_progress(
        self,
        message: InboundMessage,
        responder: Responder,
        state: ProgressState,
    ) -> None:
        text = message.text

        if state.step == ProgressStep.AWAITING_WEIGHT:
            weight = parse_weight(text, strict=self.policy.strict)
            if weight is None and self.policy.strict:
                await responder.send_text(INVALID_WEIGHT)
                return
            self.states.set(message.user_id, state.with_weight(weight))
            await responder.send_text(ASK_MOOD)

        elif state.step == ProgressStep.AWAITING_MOOD:
            self.states.set(message.user_id, state.with_mood(text))
            await responder.send_text(ASK_ENERGY)

        elif state.step == ProgressStep.AWAITING_ENERGY:
            state = state.with_energy(text)
            self.states.set(message.user_id, state)
            await self._save_progress(message, responder, state)

        else:
            await self._save_progress(message, responder, state)

    async def _save_progress(
        self,
        message: InboundMessage,
        responder: Responder,
        state: ProgressState,
    ) -> None:
        try:
            await log_progress(message.user_id, state.to_entry())
        except Exception as e:
            logger.error(f"Progress log error for {message.user_id}: {e}")
            if self.policy.keep_dialog_on_failure:
                await responder.send_text(PROGRESS_RETRY)
            else:
                self.states.clear(message.user_id)
                await responder.send_text(PROGRESS_FAILED)
            return

        self.states.clear(message.user_id)
        await responder.send_text(PROGRESS_LOGGED)

        try:
            profile = await get_profile(message.user_id)
            feedback = await progress_feedback(state.weight, state.mood, state.energy, profile)
        except Exception as e:
            # Entry is already stored; the encouragement is best-effort
            logger.error(f"Progress feedback error for {message.user_id}: {e}")
            return
        await responder.send_text(feedback)

    # -------------------------------------------------------------------------
    # Chat
    # -------------------------------------------------------------------------

    async def _chat(self, message: InboundMessage, responder: Responder) -> None:
        profile = await get_profile(message.user_id)
        try:
            reply = await chat_reply(message.text, profile)
        except Exception as e:
            logger.error(f"Chat error for {message.user_id}: {e}")
            await responder.send_text(CHAT_FAILED)
            return
        await responder.send_text(reply)
