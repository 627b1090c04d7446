# recall_app/games/name_recall/logic/payloads.py
"""Wire payloads shared by the API routes and the API client."""
from __future__ import annotations
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, List, Tuple

from recall_app.errors import ValidationError
from .scorer import STATUS_LABELS


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but not a number on the wire
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:  # ints too large for a float
        return False


@dataclass(frozen=True)
class NamesPayload:
    names: Tuple[str, ...]
    pool_size: int

    def to_json(self) -> Dict[str, Any]:
        return {"names": list(self.names), "poolSize": self.pool_size}


@dataclass(frozen=True)
class ResultPayload:
    email: str
    names_presented: Tuple[str, ...]
    answers_submitted: Tuple[str, ...]
    score: float
    status: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "namesPresented": list(self.names_presented),
            "answersSubmitted": list(self.answers_submitted),
            "score": self.score,
            "status": self.status,
        }

    @classmethod
    def from_json(cls, body: Any) -> "ResultPayload":
        """Validate a POSTed body. Raises ValidationError on any mismatch."""
        if not isinstance(body, dict):
            raise ValidationError("body is not an object", "Invalid payload.")
        email = body.get("email")
        names = body.get("namesPresented")
        answers = body.get("answersSubmitted")
        score = body.get("score")
        status = body.get("status")

        problems: List[str] = []
        if not isinstance(email, str) or not email.strip():
            problems.append("email")
        if not isinstance(names, list):
            problems.append("namesPresented")
        if not isinstance(answers, list):
            problems.append("answersSubmitted")
        if not _is_finite_number(score):
            problems.append("score")
        if status not in STATUS_LABELS:
            problems.append("status")
        if problems:
            raise ValidationError("invalid fields: " + ", ".join(problems), "Invalid payload.")

        return cls(
            email=email,
            names_presented=tuple(names),
            answers_submitted=tuple(answers),
            score=score,
            status=status,
        )
