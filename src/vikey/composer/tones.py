# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing

from .tables import (
    DIPHTHONGS_TONE_FIRST,
    DIPHTHONGS_TONE_SECOND,
    GLIDE_CLUSTERS,
    TRIPHTHONGS,
    is_modified_vowel,
    is_vowel,
    plain_letter,
)


def vowel_positions(buffer: collections.abc.Sequence[str]) -> list[int]:
    positions = [i for i, char in enumerate(buffer) if is_vowel(char)]
    if len(positions) >= 2:
        first = positions[0]
        # gia, quý: the i/u is part of the onset when a vowel follows it directly
        if first > 0 and positions[1] == first + 1:
            onset = buffer[first - 1].lower() + plain_letter(buffer[first])
            if onset in GLIDE_CLUSTERS:
                positions = positions[1:]
    return positions


def find_tone_position(buffer: collections.abc.Sequence[str]) -> typing.Optional[int]:
    """Pick the vowel in a syllable that should carry the tone mark.

    The rules, in order:
        1. A lone vowel takes the tone.
        2. A modified vowel (ă â ê ô ơ ư) takes the tone. The scan runs from the end of the syllable,
           not the start, so with two of them (ươ) the later one wins: người, not ngừơi.
        3. A triphthong puts the tone on its middle vowel (khoái, khuỷu).
        4. Diphthongs have a fixed side: oa/oe/uy take it on the second vowel (hoà, thuý),
           ai/ao/ua and friends on the first (chào, mùa).
        5. Otherwise the last vowel takes it if a consonant follows, else the one before it.

    Returns None when the buffer has no vowel at all.
    """
    positions = vowel_positions(buffer)
    if not positions:
        return None
    if len(positions) == 1:
        return positions[0]

    for pos in reversed(positions):
        if is_modified_vowel(buffer[pos]):
            return pos

    letters = "".join(plain_letter(buffer[pos]) for pos in positions)
    if len(positions) >= 3 and letters[-3:] in TRIPHTHONGS:
        return positions[-2]

    pair = letters[-2:]
    if pair in DIPHTHONGS_TONE_SECOND:
        return positions[-1]
    if pair in DIPHTHONGS_TONE_FIRST:
        return positions[-2]

    last = positions[-1]
    if last < len(buffer) - 1:
        return last
    return positions[-2]
