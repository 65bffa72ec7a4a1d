# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import random

import pytest
from vikey.composer import MAX_SYLLABLE_LENGTH, TelexComposer, VniComposer
from vikey.composer.tables import split_tone

KEYS = "aeiouyAEOUdDwWsfrxjzqgnhct0123456789áờẤ"


def check_state(composer, text):
    state = composer.state
    buffer = composer.peek_buffer()
    assert len(buffer) <= MAX_SYLLABLE_LENGTH
    assert text.endswith("".join(buffer))
    toned = [i for i, char in enumerate(buffer) if split_tone(char)[1] is not None]
    assert len(toned) <= 1
    if toned:
        assert state.tone_index == toned[0]
        assert state.tone_applied is split_tone(buffer[toned[0]])[1]
    else:
        assert state.tone_applied is None
        assert state.tone_index is None


@pytest.mark.parametrize("composer_class", [TelexComposer, VniComposer])
@pytest.mark.parametrize("seed", range(5))
def test_random_typing_keeps_invariants(composer_class, seed):
    rng = random.Random(seed)
    for _ in range(400):
        composer = composer_class()
        text = ""
        keys = "".join(rng.choice(KEYS) for _ in range(rng.randint(1, 24)))
        for key in keys:
            text = composer.process_key(key).apply(text, key)
            check_state(composer, text)


@pytest.mark.parametrize("composer_class", [TelexComposer, VniComposer])
def test_random_typing_is_deterministic(composer_class):
    rng = random.Random(1234)
    keys = "".join(rng.choice(KEYS) for _ in range(200))
    first, second = composer_class(), composer_class()
    assert [first.process_key(k) for k in keys] == [second.process_key(k) for k in keys]
