# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

from ..commontypes import InputMethod
from .base import SyllableComposer
from .tables import (
    D_STROKE,
    TELEX_STROKE_KEY,
    TELEX_TONE_KEYS,
    TELEX_TRANSFORMS,
    TELEX_UNDO_KEY,
    base_vowel,
    follows_q,
    is_modified_vowel,
    match_case,
    plain_letter,
    remove_modifier,
    set_modifier,
)
from .types import EditInstruction

logger = logging.getLogger(__name__)


class TelexComposer(SyllableComposer):
    """Telex: letters double as diacritic keys.

    aa -> â, aw -> ă, ee -> ê, oo -> ô, ow -> ơ, uw -> ư, uow -> ươ, dd -> đ; s f r x j add
    the five tones and z takes back the last tone or modifier.
    """

    input_method = InputMethod.TELEX

    def process_key(self, char: str) -> EditInstruction:
        key = char.lower()

        if key == TELEX_UNDO_KEY:
            edit = self._undo()
            if edit is not None:
                return edit
        elif key in TELEX_TONE_KEYS:
            return self._press_tone(TELEX_TONE_KEYS[key], char)
        elif key == TELEX_STROKE_KEY:
            edit = self._stroke(char)
            if edit is not None:
                return edit

        edit = self._transform(char)
        if edit is not None:
            return edit
        return self._append(char)

    def _undo(self) -> typing.Optional[EditInstruction]:
        edit = self._remove_tone()
        if edit is not None:
            return edit
        buffer = self.state.buffer
        for i in reversed(range(len(buffer))):
            if is_modified_vowel(buffer[i]):
                logger.debug("Undoing modifier on %r", buffer[i])
                self.state.enter_escape()
                return self._replace(i, [remove_modifier(buffer[i]), *buffer[i + 1 :]])
        return None

    def _stroke(self, char: str) -> typing.Optional[EditInstruction]:
        buffer = self.state.buffer
        if not buffer:
            return None
        last = buffer[-1]
        index = len(buffer) - 1
        if last.lower() == TELEX_STROKE_KEY:
            return self._replace(index, [match_case(D_STROKE, last.isupper() or char.isupper())])
        if last.lower() == D_STROKE:
            return self._escape_modifier(index, match_case(TELEX_STROKE_KEY, last.isupper()), char)
        return None

    def _transform(self, char: str) -> typing.Optional[EditInstruction]:
        buffer = self.state.buffer
        key = char.lower()
        upper = char.isupper()

        if len(buffer) >= 2 and not follows_q(buffer, len(buffer) - 2):
            tail = buffer[-2:]
            result = TELEX_TRANSFORMS.get((plain_letter(tail[0]), plain_letter(tail[1]), key))
            if result is not None and [base_vowel(c) for c in tail] != list(result):
                new_chars = [set_modifier(c, m) for c, m in zip(tail, result, strict=True)]
                return self._replace(len(buffer) - 2, [match_case(c, c.isupper() or upper) for c in new_chars])

        if buffer:
            last = buffer[-1]
            index = len(buffer) - 1
            result = TELEX_TRANSFORMS.get((plain_letter(last), key))
            if result is None:
                return None
            if base_vowel(last) == result:
                return self._escape_modifier(index, remove_modifier(last), char)
            new_char = set_modifier(last, result)
            return self._replace(index, [match_case(new_char, last.isupper() or upper)])
        return None
