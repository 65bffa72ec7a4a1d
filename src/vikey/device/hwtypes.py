from __future__ import annotations

import enum
import typing

import msgspec

from ..composer.types import EditInstruction
from .eventsource import KeyCode


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2


class KeyEvent(msgspec.Struct, frozen=True):
    key: KeyCode
    press: KeyPress

    @classmethod
    def pressed(cls, key: KeyCode):
        return cls(key=key, press=KeyPress.PRESSED)

    @classmethod
    def released(cls, key: KeyCode):
        return cls(key=key, press=KeyPress.RELEASED)


class ModifierAnnotation(msgspec.Struct, frozen=True):
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    capslock: bool = False

    @property
    def is_chord(self):
        "True when a shortcut modifier is held, so the key is a command rather than text."
        return self.alt or self.ctrl or self.meta


class AnnotatedKeyEvent(msgspec.Struct, frozen=True):
    key: KeyCode
    press: KeyPress
    annotation: ModifierAnnotation
    character: typing.Optional[str] = None
    is_modifier: bool = False


class ComposedKeyEvent(msgspec.Struct, frozen=True):
    event: AnnotatedKeyEvent
    edit: EditInstruction
