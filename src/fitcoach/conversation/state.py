"""
Conversation State Management.

Tracks which multi-step dialog (if any) each user is in and what has been
collected so far. State is in-memory only and is lost on restart.

No entry for a user means idle: their text goes to free-form chat.
"""

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import AsyncIterator


@dataclass(frozen=True)
class OnboardingState:
    """Questionnaire in progress. `step` indexes the question being answered."""
    step: int = 0
    answers: dict[str, str] = field(default_factory=dict)

    def answer(self, key: str, text: str) -> "OnboardingState":
        """Record an answer and move to the next question."""
        return OnboardingState(step=self.step + 1, answers={**self.answers, key: text})


class ProgressStep(Enum):
    """Progress check-in sub-steps, in order."""
    AWAITING_WEIGHT = "awaiting_weight"
    AWAITING_MOOD = "awaiting_mood"
    AWAITING_ENERGY = "awaiting_energy"
    PENDING_SAVE = "pending_save"        # All answers in, store write failed


@dataclass(frozen=True)
class ProgressState:
    """Progress check-in in progress."""
    step: ProgressStep = ProgressStep.AWAITING_WEIGHT
    weight: float | None = None
    mood: str | None = None
    energy: str | None = None

    def with_weight(self, weight: float | None) -> "ProgressState":
        return replace(self, step=ProgressStep.AWAITING_MOOD, weight=weight)

    def with_mood(self, mood: str) -> "ProgressState":
        return replace(self, step=ProgressStep.AWAITING_ENERGY, mood=mood)

    def with_energy(self, energy: str) -> "ProgressState":
        return replace(self, step=ProgressStep.PENDING_SAVE, energy=energy)

    def to_entry(self) -> dict:
        """Payload for the progress_logs table."""
        return {"weight": self.weight, "mood": self.mood, "energy_level": self.energy}


ConversationState = OnboardingState | ProgressState


class StateStore:
    """
    Per-user conversation state, keyed by user id.

    Each user has their own lock; handlers run inside `session(user_id)` so
    messages from one user are processed strictly in order and never touch
    another user's entry. A lock lives only while a session holds or awaits it.
    """

    def __init__(self) -> None:
        self._states: dict[int, ConversationState] = {}
        self._locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._sessions: defaultdict[int, int] = defaultdict(int)

    def get(self, user_id: int) -> ConversationState | None:
        return self._states.get(user_id)

    def set(self, user_id: int, state: ConversationState) -> None:
        self._states[user_id] = state

    def clear(self, user_id: int) -> ConversationState | None:
        """Drop a user's state, returning what was there."""
        return self._states.pop(user_id, None)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    @asynccontextmanager
    async def session(self, user_id: int) -> AsyncIterator[None]:
        """Serialize handling for one user."""
        lock = self._locks[user_id]
        self._sessions[user_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._sessions[user_id] -= 1
            if not self._sessions[user_id]:
                del self._sessions[user_id]
                del self._locks[user_id]
