# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum


# Linux evdev key codes (linux/input-event-codes.h), limited to what a typing keyboard sends.
class KeyCode(enum.IntEnum):
    KEY_ESC = 1
    KEY_1 = 2
    KEY_2 = 3
    KEY_3 = 4
    KEY_4 = 5
    KEY_5 = 6
    KEY_6 = 7
    KEY_7 = 8
    KEY_8 = 9
    KEY_9 = 10
    KEY_0 = 11
    KEY_MINUS = 12
    KEY_EQUAL = 13
    KEY_BACKSPACE = 14
    KEY_TAB = 15
    KEY_Q = 16
    KEY_W = 17
    KEY_E = 18
    KEY_R = 19
    KEY_T = 20
    KEY_Y = 21
    KEY_U = 22
    KEY_I = 23
    KEY_O = 24
    KEY_P = 25
    KEY_LEFTBRACE = 26
    KEY_RIGHTBRACE = 27
    KEY_ENTER = 28
    KEY_LEFTCTRL = 29
    KEY_A = 30
    KEY_S = 31
    KEY_D = 32
    KEY_F = 33
    KEY_G = 34
    KEY_H = 35
    KEY_J = 36
    KEY_K = 37
    KEY_L = 38
    KEY_SEMICOLON = 39
    KEY_APOSTROPHE = 40
    KEY_GRAVE = 41
    KEY_LEFTSHIFT = 42
    KEY_BACKSLASH = 43
    KEY_Z = 44
    KEY_X = 45
    KEY_C = 46
    KEY_V = 47
    KEY_B = 48
    KEY_N = 49
    KEY_M = 50
    KEY_COMMA = 51
    KEY_DOT = 52
    KEY_SLASH = 53
    KEY_RIGHTSHIFT = 54
    KEY_LEFTALT = 56
    KEY_SPACE = 57
    KEY_CAPSLOCK = 58
    KEY_RIGHTCTRL = 97
    KEY_RIGHTALT = 100
    KEY_HOME = 102
    KEY_UP = 103
    KEY_PAGEUP = 104
    KEY_LEFT = 105
    KEY_RIGHT = 106
    KEY_END = 107
    KEY_DOWN = 108
    KEY_PAGEDOWN = 109
    KEY_INSERT = 110
    KEY_DELETE = 111
    KEY_LEFTMETA = 125
    KEY_RIGHTMETA = 126


# Keys that move the cursor or rewrite text behind the engine's back; the syllable ends there.
SYLLABLE_BREAKING_KEYS = frozenset(
    {
        KeyCode.KEY_ESC,
        KeyCode.KEY_BACKSPACE,
        KeyCode.KEY_TAB,
        KeyCode.KEY_ENTER,
        KeyCode.KEY_HOME,
        KeyCode.KEY_UP,
        KeyCode.KEY_PAGEUP,
        KeyCode.KEY_LEFT,
        KeyCode.KEY_RIGHT,
        KeyCode.KEY_END,
        KeyCode.KEY_DOWN,
        KeyCode.KEY_PAGEDOWN,
        KeyCode.KEY_INSERT,
        KeyCode.KEY_DELETE,
    }
)
