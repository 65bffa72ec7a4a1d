# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing
import unicodedata

from .commontypes import InputMethod
from .composer import PASSTHROUGH, EditInstruction, make_composer
from .device.eventsource import SYLLABLE_BREAKING_KEYS

if typing.TYPE_CHECKING:
    from .composer import SyllableComposer
    from .device.hwtypes import AnnotatedKeyEvent
    from .settings import Settings

logger = logging.getLogger(__name__)


def is_word_boundary(char: str) -> bool:
    # whitespace, plus anything Unicode files under punctuation (P*) or symbols (S*)
    return char.isspace() or unicodedata.category(char)[0] in "PS"


class TypingSession:
    """Drives one composer for one stream of typing.

    The session decides where syllables end (word boundaries, cursor movement, shortcuts, mode
    changes); the composer only ever sees the letters and digits in between.
    """

    composer: SyllableComposer
    settings: typing.Optional[Settings]

    def __init__(
        self,
        input_method: InputMethod = InputMethod.TELEX,
        enabled: bool = True,
        settings: typing.Optional[Settings] = None,
    ):
        self.composer = make_composer(input_method)
        self.enabled = enabled
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings):
        "Build a session whose mode changes are written back to settings."
        return cls(input_method=settings.input_method, enabled=settings.vietnamese_mode, settings=settings)

    @property
    def input_method(self) -> InputMethod:
        return self.composer.input_method

    def set_input_method(self, input_method: InputMethod):
        if input_method is self.input_method:
            self.composer.reset()
            return
        logger.debug("Switching input method from %s to %s", self.input_method.display_name, input_method.display_name)
        self.composer = make_composer(input_method)
        if self.settings is not None:
            self.settings.set_input_method(input_method)
            self.settings.save()

    def set_enabled(self, enabled: bool):
        self.composer.reset()
        self.enabled = enabled
        if self.settings is not None and self.settings.vietnamese_mode != enabled:
            self.settings.toggle_vietnamese_mode()
            self.settings.save()

    def toggle_enabled(self):
        self.set_enabled(not self.enabled)

    def boundary(self):
        self.composer.reset()

    def handle_character(self, char: str) -> EditInstruction:
        if not self.enabled:
            return PASSTHROUGH
        if is_word_boundary(char):
            self.boundary()
            return PASSTHROUGH
        if not char.isalnum():
            return PASSTHROUGH
        return self.composer.process_key(char)

    def handle_key_event(self, event: AnnotatedKeyEvent) -> EditInstruction:
        if event.is_modifier:
            return PASSTHROUGH
        if event.annotation.is_chord or event.key in SYLLABLE_BREAKING_KEYS:
            self.boundary()
            return PASSTHROUGH
        if event.character is None:
            return PASSTHROUGH
        return self.handle_character(event.character)

    def type_text(self, text: str, into: str = "") -> str:
        "Type text one character at a time, applying each edit the way a text field would."
        for char in text:
            into = self.handle_character(char).apply(into, char)
        return into
