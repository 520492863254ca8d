# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import pathlib
from contextlib import aclosing

import msgspec
import trio

from .hwtypes import MidiEvent


class RecordedEvent(msgspec.Struct, frozen=True):
    elapsed: float
    event: MidiEvent


class Recorder:
    def __init__(self, wrapped: collections.abc.AsyncGenerator[MidiEvent, None]):
        self.wrapped = wrapped
        self.zero_time = None
        self.recorded: list[RecordedEvent] = []

    def save_events(self, path: pathlib.Path):
        path.write_bytes(msgspec.json.encode(self.recorded))

    async def events(self) -> collections.abc.AsyncGenerator[MidiEvent, None]:
        async with aclosing(self.wrapped) as wrapped:
            async for event in wrapped:
                now = trio.current_time()
                if self.zero_time is None:
                    self.zero_time = now
                self.recorded.append(RecordedEvent(elapsed=now - self.zero_time, event=event))
                yield event


class Replayer:
    def __init__(self, recorded: collections.abc.Sequence[RecordedEvent]):
        self.recorded = list(recorded)

    @classmethod
    def load(cls, path: pathlib.Path):
        return cls(msgspec.json.decode(path.read_bytes(), type=list[RecordedEvent]))

    async def events(self, realtime: bool = False) -> collections.abc.AsyncGenerator[MidiEvent, None]:
        start = trio.current_time()
        for recorded in self.recorded:
            if realtime:
                await trio.sleep_until(start + recorded.elapsed)
            else:
                await trio.lowlevel.checkpoint()
            yield recorded.event
