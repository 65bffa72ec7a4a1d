# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import collections.abc
import logging
import typing

from ..commontypes import InputMethod
from .tables import add_tone, split_tone
from .tones import find_tone_position
from .types import MAX_SYLLABLE_LENGTH, PASSTHROUGH, EditInstruction, SyllableState, Tone

logger = logging.getLogger(__name__)


class SyllableComposer(abc.ABC):
    """Turns keystrokes into Vietnamese text, one syllable at a time.

    Subclasses decide what each key means under their convention; the buffer bookkeeping and
    the tone handling live here so both conventions place and undo tones the same way.
    """

    input_method: typing.ClassVar[InputMethod]

    def __init__(self):
        self.state = SyllableState()

    @abc.abstractmethod
    def process_key(self, char: str) -> EditInstruction: ...

    def reset(self):
        self.state.reset()

    def peek_buffer(self) -> tuple[str, ...]:
        return tuple(self.state.buffer)

    def _append(self, char: str, keep_escape: bool = False) -> EditInstruction:
        state = self.state
        if not keep_escape:
            state.leave_escape()
        tone = split_tone(char)[1]
        if tone is not None:
            return self._append_toned(char, tone)
        state.buffer.append(char)
        self._trim()
        return PASSTHROUGH

    def _append_toned(self, char: str, tone: Tone) -> EditInstruction:
        "A character typed with its tone already on it takes over tone tracking."
        state = self.state
        buffer = state.buffer
        toned = [i for i, c in enumerate(buffer) if split_tone(c)[1] is not None]
        state.tone_applied = tone
        state.tone_index = len(buffer)
        if not toned:
            buffer.append(char)
            self._trim()
            return PASSTHROUGH
        logger.debug("Typed %r over an existing tone, keeping only the new one", char)
        return self._replace(toned[0], [add_tone(c, None) for c in buffer[toned[0] :]] + [char])

    def _trim(self):
        state = self.state
        while len(state.buffer) > MAX_SYLLABLE_LENGTH:
            del state.buffer[0]
            if state.tone_index is None:
                continue
            if state.tone_index == 0:
                logger.debug("Evicted the toned character, dropping tone tracking")
                state.clear_tone()
            else:
                state.tone_index -= 1

    def _replace(self, index: int, chars: collections.abc.Iterable[str]) -> EditInstruction:
        "Replace everything from index onward and report the edit needed to match."
        buffer = self.state.buffer
        backspaces = len(buffer) - index
        buffer[index:] = chars
        replacement = "".join(buffer[index:])
        self._trim()
        return EditInstruction(backspace_count=backspaces, replacement=replacement)

    def _escape_modifier(self, index: int, reverted: str, char: str) -> EditInstruction:
        "Put back the unmodified letter and let the repeated key through as typed."
        logger.debug("Escaping modifier at %d with %r", index, char)
        self.state.enter_escape()
        return self._replace(index, [reverted, *self.state.buffer[index + 1 :], char])

    def _tracked_tone_index(self) -> typing.Optional[int]:
        state = self.state
        index = state.tone_index
        if state.tone_applied is None or index is None:
            return None
        if not 0 <= index < len(state.buffer) or split_tone(state.buffer[index])[1] is None:
            logger.debug("Tone tracking pointed at %r, which no longer holds a tone", index)
            state.clear_tone()
            return None
        return index

    def _press_tone(self, tone: Tone, char: str) -> EditInstruction:
        state = self.state
        index = self._tracked_tone_index()
        if index is not None:
            if state.tone_applied is tone:
                return self._escape_tone(index)
            return self._change_tone(index, tone)
        if state.escape_mode and state.escaped_tone is tone:
            return self._append(char, keep_escape=True)
        edit = self._apply_tone(tone)
        if edit is None:
            return self._append(char)
        return edit

    def _escape_tone(self, index: int) -> EditInstruction:
        logger.debug("Escaping tone %s at %d", self.state.tone_applied.name, index)
        return self._strip_tone(index, escaped=self.state.tone_applied)

    def _strip_tone(self, index: int, escaped: typing.Optional[Tone] = None) -> EditInstruction:
        state = self.state
        state.clear_tone()
        state.enter_escape(escaped)
        return self._replace(index, [add_tone(state.buffer[index], None), *state.buffer[index + 1 :]])

    def _change_tone(self, index: int, tone: Tone) -> EditInstruction:
        state = self.state
        logger.debug("Changing tone %s to %s at %d", state.tone_applied.name, tone.name, index)
        state.tone_applied = tone
        return self._replace(index, [add_tone(state.buffer[index], tone), *state.buffer[index + 1 :]])

    def _apply_tone(self, tone: Tone) -> typing.Optional[EditInstruction]:
        state = self.state
        index = find_tone_position(state.buffer)
        if index is None:
            return None
        state.tone_applied = tone
        state.tone_index = index
        state.leave_escape()
        return self._replace(index, [add_tone(state.buffer[index], tone), *state.buffer[index + 1 :]])

    def _remove_tone(self) -> typing.Optional[EditInstruction]:
        index = self._tracked_tone_index()
        if index is None:
            return None
        return self._strip_tone(index)
