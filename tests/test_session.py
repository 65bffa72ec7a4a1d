# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pytest
from vikey.commontypes import InputMethod
from vikey.composer import PASSTHROUGH, EditInstruction, TelexComposer, VniComposer
from vikey.device.eventsource import KeyCode
from vikey.device.hwtypes import AnnotatedKeyEvent, KeyPress, ModifierAnnotation
from vikey.session import TypingSession, is_word_boundary
from vikey.settings import Settings


@pytest.mark.parametrize("char", [" ", "\t", "\n", ".", ",", "!", "?", "-", "(", "'", '"', "+", "$"])
def test_word_boundaries(char):
    assert is_word_boundary(char)


@pytest.mark.parametrize("char", ["a", "Z", "ư", "7"])
def test_not_word_boundaries(char):
    assert not is_word_boundary(char)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("xin chaof", "xin chào"),
        ("Tooi laf nguowif Vieetj Nam.", "Tôi là người Việt Nam."),
        ("ddaau, ddaay?", "đâu, đây?"),
        ("as-s", "á-s"),
    ],
)
def test_type_text_telex(text, expected):
    assert TypingSession().type_text(text) == expected


def test_type_text_vni():
    session = TypingSession(input_method=InputMethod.VNI)
    assert session.type_text("Xin cha2o, to6i la2 ngu7o72i Vie65t Nam") == "Xin chào, tôi là người Việt Nam"


def test_type_text_continues_existing_text():
    session = TypingSession()
    text = session.type_text("chao")
    assert session.type_text("f", into=text) == "chào"


def test_disabled_session_passes_everything_through():
    session = TypingSession(enabled=False)
    assert session.handle_character("a") == PASSTHROUGH
    assert session.type_text("chaof") == "chaof"
    assert session.composer.peek_buffer() == ()


def test_toggle_resets_syllable():
    session = TypingSession()
    text = session.type_text("a")
    session.toggle_enabled()
    assert not session.enabled
    session.toggle_enabled()
    assert session.enabled
    assert session.type_text("a", into=text) == "aa"


def test_set_input_method():
    session = TypingSession()
    assert isinstance(session.composer, TelexComposer)
    session.type_text("a")
    session.set_input_method(InputMethod.VNI)
    assert session.input_method is InputMethod.VNI
    assert isinstance(session.composer, VniComposer)
    assert session.composer.peek_buffer() == ()
    assert session.type_text("a6") == "â"


def test_set_same_input_method_resets_syllable():
    session = TypingSession()
    session.type_text("a")
    composer = session.composer
    session.set_input_method(InputMethod.TELEX)
    assert session.composer is composer
    assert composer.peek_buffer() == ()
    assert session.handle_character("s") == PASSTHROUGH


def test_from_settings():
    settings = Settings.for_test()
    settings.set_input_method(InputMethod.VNI)
    settings.toggle_vietnamese_mode()
    session = TypingSession.from_settings(settings)
    assert session.input_method is InputMethod.VNI
    assert not session.enabled


def event(key, character=None, is_modifier=False, **modifiers):
    return AnnotatedKeyEvent(
        key=key,
        press=KeyPress.PRESSED,
        annotation=ModifierAnnotation(**modifiers),
        character=character,
        is_modifier=is_modifier,
    )


def test_handle_key_event():
    session = TypingSession()
    assert session.handle_key_event(event(KeyCode.KEY_A, "a")) == PASSTHROUGH
    assert session.handle_key_event(event(KeyCode.KEY_LEFTSHIFT, is_modifier=True, shift=True)) == PASSTHROUGH
    assert session.composer.peek_buffer() == ("a",)
    assert session.handle_key_event(event(KeyCode.KEY_S, "s")) == EditInstruction(backspace_count=1, replacement="á")


@pytest.mark.parametrize(
    "breaker",
    [
        event(KeyCode.KEY_LEFT),
        event(KeyCode.KEY_BACKSPACE),
        event(KeyCode.KEY_ENTER),
        event(KeyCode.KEY_ESC),
        event(KeyCode.KEY_C, "c", ctrl=True),
        event(KeyCode.KEY_TAB, alt=True),
    ],
)
def test_breaking_keys_reset(breaker):
    session = TypingSession()
    session.handle_key_event(event(KeyCode.KEY_A, "a"))
    assert session.handle_key_event(breaker) == PASSTHROUGH
    assert session.composer.peek_buffer() == ()
    assert session.handle_key_event(event(KeyCode.KEY_S, "s")) == PASSTHROUGH


def test_mode_changes_are_saved(tmp_path):
    path = tmp_path / "settings.json"
    Settings.for_test().save(path)
    session = TypingSession.from_settings(Settings.load(path))

    session.toggle_enabled()
    assert not session.settings.vietnamese_mode
    assert not Settings.load(path).vietnamese_mode

    session.set_input_method(InputMethod.VNI)
    assert session.settings.input_method is InputMethod.VNI
    assert Settings.load(path).input_method is InputMethod.VNI

    session.set_enabled(True)
    reloaded = Settings.load(path)
    assert reloaded.vietnamese_mode
    assert TypingSession.from_settings(reloaded).type_text("a6") == "â"


def test_session_without_settings_saves_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session = TypingSession()
    session.toggle_enabled()
    session.set_input_method(InputMethod.VNI)
    assert session.settings is None
    assert list(tmp_path.iterdir()) == []
