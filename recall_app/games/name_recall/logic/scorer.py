# recall_app/games/name_recall/logic/scorer.py
"""Recall scoring.

Free text is split on whitespace/commas, normalized and deduplicated, then
diffed against the presented names. Everything here is a pure function of
its arguments.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

TARGET_COUNT = 15  # UI copy only; see STATUS_RULES for the real thresholds


@dataclass(frozen=True)
class StatusRule:
    label: str
    threshold: int
    copy: str


# Descending thresholds; first match wins.
STATUS_RULES: Tuple[StatusRule, ...] = (
    StatusRule("excellent", 20, "Elite recall. You nailed the full target set."),
    StatusRule("better",    15, "Strong performance. Keep sharpening that focus."),
    StatusRule("good",      10, "Solid baseline. Another run can push you higher."),
    StatusRule("fail",       0, "Warm up again and give it another go."),
)

STATUS_LABELS = tuple(rule.label for rule in STATUS_RULES)

_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class RecallOutcome:
    parsed_answers: Tuple[str, ...]
    correct: Tuple[str, ...]
    incorrect: Tuple[str, ...]
    missed: Tuple[str, ...]
    score: int
    status: str

    @property
    def status_copy(self) -> str:
        return status_for(self.score).copy

    def to_dict(self) -> Dict:
        return {
            "parsed_answers": list(self.parsed_answers),
            "correct": list(self.correct),
            "incorrect": list(self.incorrect),
            "missed": list(self.missed),
            "score": self.score,
            "status": self.status,
        }


def normalize(value: str) -> str:
    return value.strip().lower()


def parse_answers(text: str) -> List[str]:
    """Tokens in first-seen order, lowercased, no empties, no repeats."""
    seen: Dict[str, None] = {}
    for piece in _SPLIT_RE.split(text or ""):
        token = normalize(piece)
        if token:
            seen.setdefault(token, None)
    return list(seen)


def status_for(score: int) -> StatusRule:
    for rule in STATUS_RULES:
        if score >= rule.threshold:
            return rule
    return STATUS_RULES[-1]


def score_recall(recall_text: str, presented_names: Sequence[str]) -> RecallOutcome:
    answers = parse_answers(recall_text)

    reference: Dict[str, str] = {}
    for name in presented_names:
        reference[normalize(name)] = name

    correct: List[str] = []
    incorrect: List[str] = []
    for answer in answers:
        original = reference.get(answer)
        if original is None:
            incorrect.append(answer)
        elif original not in correct:
            correct.append(original)
        # else: already claimed; dropped, not counted as incorrect

    missed = [name for name in presented_names if name not in correct]
    score = len(correct)
    return RecallOutcome(
        parsed_answers=tuple(answers),
        correct=tuple(correct),
        incorrect=tuple(incorrect),
        missed=tuple(missed),
        score=score,
        status=status_for(score).label,
    )
