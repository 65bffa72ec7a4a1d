# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pytest
from vikey.composer import PASSTHROUGH, EditInstruction, VniComposer


def feed(composer, keys):
    return [composer.process_key(key) for key in keys]


def typed(keys):
    composer = VniComposer()
    text = ""
    for key in keys:
        text = composer.process_key(key).apply(text, key)
    return text


@pytest.mark.parametrize(
    "keys,expected",
    [
        ("a6", "â"),
        ("a7", "ă"),
        ("a8", "ă"),
        ("e6", "ê"),
        ("o6", "ô"),
        ("o7", "ơ"),
        ("u7", "ư"),
    ],
)
def test_vowel_modifiers(keys, expected):
    composer = VniComposer()
    assert feed(composer, keys) == [PASSTHROUGH, EditInstruction(backspace_count=1, replacement=expected)]


def test_d_stroke():
    composer = VniComposer()
    assert feed(composer, "d9")[-1] == EditInstruction(backspace_count=1, replacement="đ")
    composer.reset()
    assert feed(composer, "D9")[-1] == EditInstruction(backspace_count=1, replacement="Đ")


def test_nine_without_d_is_literal():
    composer = VniComposer()
    assert feed(composer, "a9") == [PASSTHROUGH, PASSTHROUGH]
    assert composer.peek_buffer() == ("a", "9")


@pytest.mark.parametrize("digit,expected", [("1", "á"), ("2", "à"), ("3", "ả"), ("4", "ã"), ("5", "ạ")])
def test_tones(digit, expected):
    composer = VniComposer()
    feed(composer, "a")
    assert composer.process_key(digit) == EditInstruction(backspace_count=1, replacement=expected)


def test_tone_before_last_vowel():
    composer = VniComposer()
    assert feed(composer, "cha2")[-1] == EditInstruction(backspace_count=1, replacement="à")
    composer.process_key("o")
    assert "".join(composer.peek_buffer()) == "chào"


@pytest.mark.parametrize(
    "keys,expected",
    [
        ("chao2", "chào"),
        ("vie6t5", "việt"),
        ("thu7o7ng2", "thường"),
        ("thuo7ng2", "thường"),
        ("toi6", "tôi"),
        ("tuoi63", "tuổi"),
        ("d9uo7c5", "được"),
        ("khoai1", "khoái"),
        ("hoa2", "hoà"),
        ("qua1", "quá"),
        ("quo7", "quơ"),
        ("Vie65t", "Việt"),
    ],
)
def test_words(keys, expected):
    assert typed(keys) == expected


def test_uo_horn():
    composer = VniComposer()
    assert feed(composer, "uo7")[-1] == EditInstruction(backspace_count=2, replacement="ươ")


def test_modifier_after_final_consonant():
    composer = VniComposer()
    assert feed(composer, "than6")[-1] == EditInstruction(backspace_count=2, replacement="ân")


def test_uppercase():
    composer = VniComposer()
    assert feed(composer, "A6")[-1] == EditInstruction(backspace_count=1, replacement="Â")


def test_escape_tone():
    composer = VniComposer()
    assert feed(composer, "a11")[-1] == EditInstruction(backspace_count=1, replacement="a")
    assert composer.state.escape_mode
    assert composer.state.tone_applied is None


def test_tone_change():
    composer = VniComposer()
    assert feed(composer, "a12")[-1] == EditInstruction(backspace_count=1, replacement="à")


@pytest.mark.parametrize("keys,expected", [("a112", "à"), ("a113", "ả"), ("a111", "a1"), ("a665", "ạ6")])
def test_tone_after_escape(keys, expected):
    assert typed(keys) == expected


def test_typed_toned_character_replaces_tone():
    composer = VniComposer()
    feed(composer, "o2")
    assert composer.process_key("ó") == EditInstruction(backspace_count=1, replacement="oó")
    assert composer.state.tone_index == 1
    assert composer.process_key("1") == EditInstruction(backspace_count=1, replacement="o")


@pytest.mark.parametrize("keys,expected", [("a66", "a6"), ("o77", "o7"), ("d99", "d9")])
def test_escape_modifier(keys, expected):
    assert typed(keys) == expected


def test_switch_modifier():
    composer = VniComposer()
    assert feed(composer, "a76")[-1] == EditInstruction(backspace_count=1, replacement="â")


def test_modifier_keeps_tone():
    composer = VniComposer()
    assert feed(composer, "a16")[-1] == EditInstruction(backspace_count=1, replacement="ấ")


@pytest.mark.parametrize("keys", ["b6", "i7", "e7", "u6"])
def test_modifier_without_vowel(keys):
    composer = VniComposer()
    assert feed(composer, keys) == [PASSTHROUGH, PASSTHROUGH]


def test_tone_without_vowel():
    composer = VniComposer()
    assert feed(composer, "bc1") == [PASSTHROUGH] * 3


def test_other_digits_and_letters_are_literal():
    composer = VniComposer()
    assert feed(composer, "a0sfrxjz") == [PASSTHROUGH] * 8


def test_buffer_trimming():
    composer = VniComposer()
    feed(composer, "a1")
    for key in "bcghklmnpt":
        assert composer.process_key(key) == PASSTHROUGH
        assert len(composer.peek_buffer()) <= 7
    assert composer.state.tone_applied is None
    assert composer.process_key("1") == PASSTHROUGH
