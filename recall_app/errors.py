# recall_app/errors.py
from __future__ import annotations


class RecallError(Exception):
    """Base for every error the quiz surfaces to a player.

    ``user_message`` is the copy shown inline; ``str(exc)`` keeps the
    technical detail for logs.
    """

    user_message = "Something went wrong. Please try again."

    def __init__(self, detail: str = "", user_message: str | None = None):
        super().__init__(detail or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class ValidationError(RecallError):
    user_message = "Please check your input and try again."


class PoolExhausted(RecallError):
    user_message = "Unable to load names right now. Please try again in a moment."


class InsufficientPool(PoolExhausted):
    """Raised by the sampler when the pool cannot fill a full sample."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"requested {requested} names but only {available} available")


class NetworkError(RecallError):
    user_message = "Unable to load names right now. Please try again in a moment."


class PersistenceError(RecallError):
    user_message = "Could not sync this run. Your score is still shown locally."
