# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import typing

import pygtrie

from .types import Tone

BASE_VOWELS = frozenset("aeiouy")
MODIFIED_VOWELS = frozenset("ăâêôơư")

# Each row: the untoned vowel, then its ACUTE, GRAVE, HOOK_ABOVE, TILDE and DOT_BELOW forms.
_TONE_ROWS = [
    "a á à ả ã ạ",
    "ă ắ ằ ẳ ẵ ặ",
    "â ấ ầ ẩ ẫ ậ",
    "e é è ẻ ẽ ẹ",
    "ê ế ề ể ễ ệ",
    "i í ì ỉ ĩ ị",
    "o ó ò ỏ õ ọ",
    "ô ố ồ ổ ỗ ộ",
    "ơ ớ ờ ở ỡ ợ",
    "u ú ù ủ ũ ụ",
    "ư ứ ừ ử ữ ự",
    "y ý ỳ ỷ ỹ ỵ",
]

TONE_MARKS: dict[str, dict[Tone, str]] = {}
TONED_TO_BASE: dict[str, tuple[str, Tone]] = {}
for _row in _TONE_ROWS:
    _base, *_toned = _row.split()
    TONE_MARKS[_base] = dict(zip(Tone, _toned, strict=True))
    for _tone, _char in TONE_MARKS[_base].items():
        TONED_TO_BASE[_char] = (_base, _tone)
del _row, _base, _toned, _tone, _char

MODIFIED_TO_PLAIN = {
    "ă": "a",
    "â": "a",
    "ê": "e",
    "ô": "o",
    "ơ": "o",
    "ư": "u",
}

D_STROKE = "đ"

# Telex
TELEX_TONE_KEYS = {
    "s": Tone.ACUTE,
    "f": Tone.GRAVE,
    "r": Tone.HOOK_ABOVE,
    "x": Tone.TILDE,
    "j": Tone.DOT_BELOW,
}
TELEX_UNDO_KEY = "z"
TELEX_STROKE_KEY = "d"

# Keys are space-separated key sequences, with the already-typed letters given in plain form.
TELEX_SEQUENCES = {
    "a a": "â",
    "a w": "ă",
    "e e": "ê",
    "o o": "ô",
    "o w": "ơ",
    "u w": "ư",
    "u o w": "ươ",
}


def make_sequence_trie(sequences: dict[str, str]) -> pygtrie.Trie:
    return pygtrie.Trie({tuple(k.split()): v for k, v in sequences.items()})


TELEX_TRANSFORMS = make_sequence_trie(TELEX_SEQUENCES)

# VNI
VNI_TONE_KEYS = {str(tone.value): tone for tone in Tone}
VNI_STROKE_KEY = "9"
_CIRCUMFLEX = {"a": "â", "e": "ê", "o": "ô"}
_BREVE_OR_HORN = {"a": "ă", "o": "ơ", "u": "ư"}
VNI_MODIFIER_KEYS = {
    "6": _CIRCUMFLEX,
    "7": _BREVE_OR_HORN,
    # some VNI layouts put the breve on 8
    "8": _BREVE_OR_HORN,
}

# Tone placement data, keyed by plain letters.
DIPHTHONGS_TONE_FIRST = frozenset({"ai", "ao", "au", "ay", "eo", "eu", "ia", "iu", "oi", "ua", "ui", "uu"})
DIPHTHONGS_TONE_SECOND = frozenset({"oa", "oe", "uy", "ie", "ye", "ue", "uo"})
TRIPHTHONGS = frozenset({"oai", "oay", "oeo", "uya", "uyu", "uoi", "uou", "ieu", "yeu"})
# The vowel letter of these onsets belongs to the consonant when another vowel follows.
GLIDE_CLUSTERS = frozenset({"gi", "qu"})


def match_case(char: str, upper: bool) -> str:
    return char.upper() if upper else char.lower()


def split_tone(char: str) -> tuple[str, typing.Optional[Tone]]:
    "Split a character into its untoned form (case kept) and its tone, if any."
    lower = char.lower()
    if lower in TONED_TO_BASE:
        base, tone = TONED_TO_BASE[lower]
        return match_case(base, char.isupper()), tone
    return char, None


def add_tone(char: str, tone: typing.Optional[Tone]) -> str:
    "Return the vowel with its tone replaced by the given one (None strips the tone)."
    base, _ = split_tone(char)
    if tone is None:
        return base
    return match_case(TONE_MARKS[base.lower()][tone], base.isupper())


def base_vowel(char: str) -> str:
    "Lowercase, untoned form of the character. Modifiers are kept: ấ -> â."
    lower = char.lower()
    if lower in TONED_TO_BASE:
        return TONED_TO_BASE[lower][0]
    return lower


def plain_letter(char: str) -> str:
    "Lowercase letter with tone and modifier both removed: ấ -> a."
    base = base_vowel(char)
    return MODIFIED_TO_PLAIN.get(base, base)


def is_vowel(char: str) -> bool:
    base = base_vowel(char)
    return base in BASE_VOWELS or base in MODIFIED_VOWELS


def is_modified_vowel(char: str) -> bool:
    return base_vowel(char) in MODIFIED_VOWELS


def set_modifier(char: str, modified: str) -> str:
    "Replace the vowel quality of a character, keeping its tone and case."
    _, tone = split_tone(char)
    return add_tone(match_case(modified, char.isupper()), tone)


def remove_modifier(char: str) -> str:
    return set_modifier(char, plain_letter(char))


def follows_q(buffer: typing.Sequence[str], index: int) -> bool:
    "True when the u at index belongs to a qu onset, which never takes a horn (quơ, not qươ)."
    return index > 0 and buffer[index - 1].lower() == "q"
