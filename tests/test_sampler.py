import random

import pytest

from recall_app.errors import InsufficientPool, PoolExhausted
from recall_app.games.name_recall.logic.sampler import DISPLAY_COUNT, sample_names, shuffled


@pytest.mark.parametrize("size", [20, 21, 35, 200])
def test_sample_returns_twenty_unique_names_from_pool(size):
    pool = [f"n{i}" for i in range(size)]
    for seed in range(10):
        picked = sample_names(pool, rng=random.Random(seed))
        assert len(picked) == DISPLAY_COUNT
        assert len(set(picked)) == DISPLAY_COUNT
        assert set(picked) <= set(pool)


@pytest.mark.parametrize("size", [0, 1, 19])
def test_small_pool_raises_instead_of_short_list(size):
    pool = [f"n{i}" for i in range(size)]
    with pytest.raises(InsufficientPool) as exc:
        sample_names(pool)
    assert exc.value.requested == 20
    assert exc.value.available == size
    assert isinstance(exc.value, PoolExhausted)


def test_sample_does_not_mutate_pool():
    pool = [f"n{i}" for i in range(25)]
    before = list(pool)
    sample_names(pool, rng=random.Random(1))
    assert pool == before


def test_seeded_rng_is_deterministic():
    pool = [f"n{i}" for i in range(40)]
    assert sample_names(pool, rng=random.Random(7)) == sample_names(pool, rng=random.Random(7))


def test_shuffle_is_a_permutation():
    items = list(range(50))
    out = shuffled(items, random.Random(3))
    assert sorted(out) == items


def test_every_element_can_be_drawn():
    pool = [f"n{i}" for i in range(25)]
    rng = random.Random(11)
    seen = set()
    for _ in range(200):
        seen.update(sample_names(pool, rng=rng))
    assert seen == set(pool)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        sample_names(["a"], -1)
