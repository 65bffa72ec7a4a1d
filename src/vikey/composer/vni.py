# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

from ..commontypes import InputMethod
from .base import SyllableComposer
from .tables import (
    D_STROKE,
    VNI_MODIFIER_KEYS,
    VNI_STROKE_KEY,
    VNI_TONE_KEYS,
    base_vowel,
    follows_q,
    is_vowel,
    match_case,
    plain_letter,
    remove_modifier,
    set_modifier,
)
from .types import EditInstruction


class VniComposer(SyllableComposer):
    """VNI: digits carry the diacritics.

    1-5 are the tones, 6 adds a circumflex (â ê ô), 7 (or 8) a breve or horn (ă ơ ư) and 9
    strokes a d. Modifier digits may come after the consonants that close the syllable.
    """

    input_method = InputMethod.VNI

    def process_key(self, char: str) -> EditInstruction:
        if char == VNI_STROKE_KEY:
            edit = self._stroke(char)
            if edit is not None:
                return edit
        elif char in VNI_TONE_KEYS:
            return self._press_tone(VNI_TONE_KEYS[char], char)
        elif char in VNI_MODIFIER_KEYS:
            edit = self._modify(char)
            if edit is not None:
                return edit
        return self._append(char)

    def _stroke(self, char: str) -> typing.Optional[EditInstruction]:
        buffer = self.state.buffer
        if not buffer:
            return None
        last = buffer[-1]
        index = len(buffer) - 1
        if last.lower() == "d":
            return self._replace(index, [match_case(D_STROKE, last.isupper())])
        if last.lower() == D_STROKE:
            return self._escape_modifier(index, match_case("d", last.isupper()), char)
        return None

    def _modify(self, char: str) -> typing.Optional[EditInstruction]:
        modified = VNI_MODIFIER_KEYS[char]
        buffer = self.state.buffer
        for i in reversed(range(len(buffer))):
            current = buffer[i]
            if not is_vowel(current):
                continue
            plain = plain_letter(current)
            if plain not in modified:
                continue
            target = modified[plain]
            if base_vowel(current) == target:
                return self._escape_modifier(i, remove_modifier(current), char)
            if target == "ơ" and i > 0 and base_vowel(buffer[i - 1]) == "u" and not follows_q(buffer, i - 1):
                # uo7 -> ươ, but quơ keeps its u
                return self._replace(i - 1, [set_modifier(buffer[i - 1], "ư"), set_modifier(current, target), *buffer[i + 1 :]])
            return self._replace(i, [set_modifier(current, target), *buffer[i + 1 :]])
        return None