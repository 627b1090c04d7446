# recall_app/games/name_recall/logic/sampler.py
from __future__ import annotations
import random
from typing import List, Optional, Sequence, TypeVar

from recall_app.errors import InsufficientPool

T = TypeVar("T")

DISPLAY_COUNT = 20


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Fisher-Yates shuffle of a copy; the input is left alone."""
    rnd = rng or random
    copy = list(items)
    for i in range(len(copy) - 1, 0, -1):
        j = rnd.randint(0, i)
        copy[i], copy[j] = copy[j], copy[i]
    return copy


def sample_names(pool: Sequence[str], count: int = DISPLAY_COUNT,
                 rng: Optional[random.Random] = None) -> List[str]:
    """Uniform sample of ``count`` names without replacement.

    Never returns a short list: a pool smaller than ``count`` raises
    InsufficientPool.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if len(pool) < count:
        raise InsufficientPool(requested=count, available=len(pool))
    return shuffled(pool, rng)[:count]
