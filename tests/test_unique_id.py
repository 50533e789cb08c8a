from __future__ import annotations

import random
import re

import pytest

from uikernel.utils.unique_id import ALPHABET, UniqueId


def test_alphabet_has_fifty_letters_without_z():
    assert len(ALPHABET) == 50
    assert len(set(ALPHABET)) == 50
    assert "Z" not in ALPHABET and "z" not in ALPHABET


def test_default_id_format():
    pool = UniqueId()
    assert re.fullmatch(r"[A-Ya-y]{3}", pool.id)


@pytest.mark.parametrize("falsy", [None, False, 0, "", [], {}])
def test_get_falsy_mints_nothing(falsy):
    pool = UniqueId()
    assert pool.get(falsy) is None
    assert pool.tracked == 0


@pytest.mark.parametrize("truthy", [True, 1, "label", ["x"]])
def test_get_truthy_mints(truthy):
    pool = UniqueId()
    value = pool.get(truthy)
    assert isinstance(value, str)
    assert pool.tracked == 1


def test_configured_length():
    assert len(UniqueId(7).id) == 7


@pytest.mark.parametrize("bad", [2, 0, -10, 1.5, float("nan"), "5"])
def test_invalid_length_clamps_to_three(bad):
    assert len(UniqueId(bad).id) == 3


def test_ids_unique_up_to_limit():
    pool = UniqueId()
    ids = {pool.id for _ in range(10_000)}
    assert len(ids) == 10_000


def test_store_resets_after_limit():
    pool = UniqueId(limit=5)
    for _ in range(6):
        pool.id
    assert pool.tracked == 6
    pool.id
    assert pool.tracked == 1


@pytest.mark.parametrize("bad", [0, -1, 50**3, "100"])
def test_invalid_limit_uses_default(bad):
    assert UniqueId(limit=bad).limit == 10_000


def test_seeded_rng_is_reproducible():
    a = UniqueId(rng=random.Random(42))
    b = UniqueId(rng=random.Random(42))
    assert [a.id for _ in range(5)] == [b.id for _ in range(5)]


class _ScriptedRng:
    def __init__(self, letters):
        self._letters = iter(letters)

    def choice(self, _seq):
        return next(self._letters)


def test_collision_is_redrawn():
    pool = UniqueId(rng=_ScriptedRng("AAA" "AAA" "BBB"))
    assert pool.id == "AAA"
    assert pool.id == "BBB"
