"""FitCoach error taxonomy.

Adapters map library exceptions (postgrest, openai) onto these so call sites
can catch one type per collaborator.
"""


__all__ = [
    "FitcoachError",
    "StoreError",
    "StoreNotConfiguredError",
    "CompletionError",
]


class FitcoachError(Exception):
    """Base class for all FitCoach errors."""

    pass


class StoreError(FitcoachError):
    """A durable store operation failed."""

    def __init__(self, message: str, *, table: str | None = None):
        super().__init__(message)
        self.table = table


class StoreNotConfiguredError(StoreError):
    """SUPABASE_URL or SUPABASE_KEY is missing."""

    pass


class CompletionError(FitcoachError):
    """The completion service call failed or returned no text."""

    pass
