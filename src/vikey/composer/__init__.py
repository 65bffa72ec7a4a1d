# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from ..commontypes import InputMethod
from .base import SyllableComposer
from .telex import TelexComposer
from .types import MAX_SYLLABLE_LENGTH, PASSTHROUGH, EditInstruction, SyllableState, Tone
from .vni import VniComposer

COMPOSERS: dict[InputMethod, type[SyllableComposer]] = {
    InputMethod.TELEX: TelexComposer,
    InputMethod.VNI: VniComposer,
}


def make_composer(method: InputMethod) -> SyllableComposer:
    return COMPOSERS[method]()


__all__ = [
    "COMPOSERS",
    "MAX_SYLLABLE_LENGTH",
    "PASSTHROUGH",
    "EditInstruction",
    "InputMethod",
    "SyllableComposer",
    "SyllableState",
    "TelexComposer",
    "Tone",
    "VniComposer",
    "make_composer",
]
