# recall_app/games/name_recall/logic/machine.py
"""Session brain for one recall run.

welcome -> memorize -> recall -> result -> welcome

``transition(state, event)`` is pure: it returns the next state plus a tuple
of effects for the controller to run. Every timer and network request is
stamped with the ``epoch`` it was issued under; the epoch is bumped on each
stage change and on reset, so late ticks and stale responses fall through
as no-ops.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .payloads import ResultPayload
from .sampler import DISPLAY_COUNT
from .scorer import RecallOutcome, parse_answers, score_recall

MEMORIZE_SECONDS = 60
SCORING_FLOOR_SECONDS = 2.5
RESULT_RESET_SECONDS = 10

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MSG_BAD_EMAIL = "Enter a valid email to continue."
MSG_NO_ANSWERS = "Add at least one name before submitting."
MSG_FETCH_FAILED = "Unable to load names right now. Please try again in a moment."
MSG_SAVE_FAILED = "Could not sync this run. Your score is still shown locally."


class Stage(str, Enum):
    WELCOME = "welcome"
    MEMORIZE = "memorize"
    RECALL = "recall"
    RESULT = "result"


@dataclass(frozen=True)
class SessionState:
    stage: Stage = Stage.WELCOME
    epoch: int = 0
    email: str = ""
    presented_names: Tuple[str, ...] = ()
    pool_size: Optional[int] = None
    time_left: int = MEMORIZE_SECONDS
    recall_text: str = ""
    outcome: Optional[RecallOutcome] = None
    error: str = ""
    persistence_error: str = ""
    loading: bool = False
    calculating: bool = False
    saving: bool = False

    @property
    def parsed_answers(self) -> Tuple[str, ...]:
        return tuple(parse_answers(self.recall_text))


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class EmailChanged:
    email: str

@dataclass(frozen=True)
class StartRequested:
    email: Optional[str] = None

@dataclass(frozen=True)
class NamesLoaded:
    epoch: int
    names: Tuple[str, ...]
    pool_size: Optional[int] = None

@dataclass(frozen=True)
class NamesFailed:
    epoch: int
    message: str = MSG_FETCH_FAILED

@dataclass(frozen=True)
class Tick:
    epoch: int

@dataclass(frozen=True)
class SkipRequested:
    pass

@dataclass(frozen=True)
class RecallChanged:
    text: str

@dataclass(frozen=True)
class RecallSubmitted:
    text: Optional[str] = None

@dataclass(frozen=True)
class ScoringDue:
    epoch: int

@dataclass(frozen=True)
class ResultSaved:
    epoch: int

@dataclass(frozen=True)
class ResultSaveFailed:
    epoch: int
    message: str = MSG_SAVE_FAILED

@dataclass(frozen=True)
class ResetTimeout:
    epoch: int

@dataclass(frozen=True)
class ResetRequested:
    pass


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FetchNames:
    epoch: int
    count: int = DISPLAY_COUNT

@dataclass(frozen=True)
class StartCountdown:
    epoch: int
    seconds: int = MEMORIZE_SECONDS

@dataclass(frozen=True)
class CancelTimers:
    pass

@dataclass(frozen=True)
class StartScoring:
    epoch: int
    delay: float = SCORING_FLOOR_SECONDS

@dataclass(frozen=True)
class SubmitResult:
    epoch: int
    payload: ResultPayload = field(compare=False)

@dataclass(frozen=True)
class ScheduleReset:
    epoch: int
    delay: float = RESULT_RESET_SECONDS


NOTHING: tuple = ()


@dataclass(frozen=True)
class MachineSettings:
    display_count: int = DISPLAY_COUNT
    memorize_seconds: int = MEMORIZE_SECONDS
    scoring_floor: float = SCORING_FLOOR_SECONDS
    reset_seconds: float = RESULT_RESET_SECONDS


DEFAULT_SETTINGS = MachineSettings()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def _advance(state: SessionState, stage: Stage, **changes) -> SessionState:
    return replace(state, stage=stage, epoch=state.epoch + 1, **changes)


def _fresh(state: SessionState, settings: MachineSettings) -> SessionState:
    return SessionState(epoch=state.epoch + 1, time_left=settings.memorize_seconds)


def transition(state: SessionState, event, settings: MachineSettings = DEFAULT_SETTINGS):
    """Apply ``event`` to ``state``. Returns ``(new_state, effects)``."""
    stage = state.stage

    if isinstance(event, ResetRequested):
        return _fresh(state, settings), (CancelTimers(),)

    # ---- welcome ----
    if isinstance(event, EmailChanged):
        if stage is not Stage.WELCOME or state.loading:
            return state, NOTHING
        return replace(state, email=event.email), NOTHING

    if isinstance(event, StartRequested):
        if stage is not Stage.WELCOME or state.loading:
            return state, NOTHING
        email = (event.email if event.email is not None else state.email).strip()
        if not is_valid_email(email):
            return replace(state, email=email, error=MSG_BAD_EMAIL), NOTHING
        nxt = replace(state, email=email, error="", persistence_error="", loading=True)
        return nxt, (FetchNames(nxt.epoch, settings.display_count),)

    if isinstance(event, NamesLoaded):
        if stage is not Stage.WELCOME or not state.loading or event.epoch != state.epoch:
            return state, NOTHING
        names = tuple(event.names)
        if len(names) < settings.display_count:
            return replace(state, loading=False, error=MSG_FETCH_FAILED), NOTHING
        names = names[:settings.display_count]
        nxt = _advance(
            state, Stage.MEMORIZE,
            presented_names=names,
            pool_size=event.pool_size if event.pool_size is not None else len(names),
            time_left=settings.memorize_seconds,
            recall_text="",
            loading=False,
            error="",
        )
        return nxt, (StartCountdown(nxt.epoch, settings.memorize_seconds),)

    if isinstance(event, NamesFailed):
        if stage is not Stage.WELCOME or not state.loading or event.epoch != state.epoch:
            return state, NOTHING
        return replace(state, loading=False, error=event.message), NOTHING

    # ---- memorize ----
    if isinstance(event, Tick):
        if stage is not Stage.MEMORIZE or event.epoch != state.epoch:
            return state, NOTHING
        left = state.time_left - 1
        if left > 0:
            return replace(state, time_left=left), NOTHING
        return _advance(state, Stage.RECALL, time_left=settings.memorize_seconds), (CancelTimers(),)

    if isinstance(event, SkipRequested):
        if stage is not Stage.MEMORIZE:
            return state, NOTHING
        return _advance(state, Stage.RECALL, time_left=settings.memorize_seconds), (CancelTimers(),)

    # ---- recall ----
    if isinstance(event, RecallChanged):
        if stage is not Stage.RECALL or state.calculating:
            return state, NOTHING
        return replace(state, recall_text=event.text), NOTHING

    if isinstance(event, RecallSubmitted):
        if stage is not Stage.RECALL or state.calculating:
            return state, NOTHING
        if event.text is not None:
            state = replace(state, recall_text=event.text)
        if not state.parsed_answers:
            return replace(state, error=MSG_NO_ANSWERS), NOTHING
        nxt = replace(state, calculating=True, error="")
        return nxt, (StartScoring(nxt.epoch, settings.scoring_floor),)

    if isinstance(event, ScoringDue):
        if stage is not Stage.RECALL or not state.calculating or event.epoch != state.epoch:
            return state, NOTHING
        outcome = score_recall(state.recall_text, state.presented_names)
        nxt = _advance(
            state, Stage.RESULT,
            outcome=outcome,
            calculating=False,
            error="",
            saving=bool(state.email),
            persistence_error="",
        )
        effects = []
        if state.email:
            effects.append(SubmitResult(nxt.epoch, ResultPayload(
                email=state.email,
                names_presented=state.presented_names,
                answers_submitted=outcome.parsed_answers,
                score=outcome.score,
                status=outcome.status,
            )))
        effects.append(ScheduleReset(nxt.epoch, settings.reset_seconds))
        return nxt, tuple(effects)

    # ---- result ----
    if isinstance(event, ResultSaved):
        if stage is not Stage.RESULT or event.epoch != state.epoch:
            return state, NOTHING
        return replace(state, saving=False), NOTHING

    if isinstance(event, ResultSaveFailed):
        if stage is not Stage.RESULT or event.epoch != state.epoch:
            return state, NOTHING
        return replace(state, saving=False, persistence_error=event.message), NOTHING

    if isinstance(event, ResetTimeout):
        if stage is not Stage.RESULT or event.epoch != state.epoch:
            return state, NOTHING
        return _fresh(state, settings), (CancelTimers(),)

    raise TypeError(f"unknown event: {event!r}")
