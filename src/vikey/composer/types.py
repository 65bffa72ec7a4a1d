# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

# The longest Vietnamese syllable ("nghiêng") is seven letters.
MAX_SYLLABLE_LENGTH = 7


class Tone(enum.IntEnum):
    # Values match the VNI tone digits.
    ACUTE = 1  # sắc
    GRAVE = 2  # huyền
    HOOK_ABOVE = 3  # hỏi
    TILDE = 4  # ngã
    DOT_BELOW = 5  # nặng


class EditInstruction(msgspec.Struct, frozen=True):
    """What the caller should do to the text in front of the cursor.

    Delete ``backspace_count`` characters, then insert ``replacement``. An instruction with no
    backspaces and no replacement means the original keystroke should go through untouched.
    """

    backspace_count: int = 0
    replacement: typing.Optional[str] = None

    @property
    def is_passthrough(self):
        return self.backspace_count == 0 and self.replacement is None

    def apply(self, text: str, typed: str) -> str:
        if self.is_passthrough:
            return text + typed
        if self.backspace_count:
            text = text[: -self.backspace_count]
        return text + (self.replacement or "")


PASSTHROUGH = EditInstruction()


class SyllableState(msgspec.Struct):
    buffer: list[str] = msgspec.field(default_factory=list)
    tone_applied: typing.Optional[Tone] = None
    tone_index: typing.Optional[int] = None
    escape_mode: bool = False
    # the tone a repeated tone key took back; pressing it again types the key
    escaped_tone: typing.Optional[Tone] = None

    def enter_escape(self, tone: typing.Optional[Tone] = None):
        self.escape_mode = True
        self.escaped_tone = tone

    def leave_escape(self):
        self.escape_mode = False
        self.escaped_tone = None

    def clear_tone(self):
        self.tone_applied = None
        self.tone_index = None

    def reset(self):
        self.buffer.clear()
        self.clear_tone()
        self.leave_escape()
