# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import logging
import pathlib

import msgspec
import trio

from ..commontypes import VikeyError
from .hwtypes import KeyEvent

logger = logging.getLogger(__name__)


class RecordingError(VikeyError):
    pass


def load_recording(path: pathlib.Path) -> list[KeyEvent]:
    try:
        return msgspec.json.decode(path.read_bytes(), type=list[KeyEvent])
    except (OSError, msgspec.DecodeError) as exc:
        raise RecordingError(f"Could not read key recording {path}: {exc}") from exc


def save_recording(events: collections.abc.Iterable[KeyEvent], path: pathlib.Path):
    path.write_bytes(msgspec.json.encode(list(events)))


class Replayer:
    def __init__(self, events: collections.abc.Sequence[KeyEvent]):
        self.events = events

    @classmethod
    def load(cls, path: pathlib.Path):
        return cls(load_recording(path))

    async def run(self, sink: trio.MemorySendChannel[KeyEvent]):
        async with sink:
            for event in self.events:
                await sink.send(event)
        logger.debug("Replayed %d key events", len(self.events))
