# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pathlib
from contextlib import aclosing

import pytest
import trio
import trio.testing

from midihitter.device.hwtypes import MidiEvent, MidiStatus
from midihitter.device.recorded import RecordedEvent, Recorder, Replayer

EVENTS = [
    MidiEvent(status=MidiStatus.CONTROL, data1=1, data2=127),
    MidiEvent(status=MidiStatus.CONTROL, data1=1, data2=1),
    MidiEvent(status=MidiStatus.NOTE_ON, data1=53, data2=100, timestamp=12.5),
]


async def spaced_source(seconds: float):
    for event in EVENTS:
        yield event
        await trio.sleep(seconds)


async def test_record_and_replay(tmp_path: pathlib.Path, autojump_clock: trio.testing.MockClock):
    recorder = Recorder(spaced_source(2))
    async with aclosing(recorder.events()) as events:
        passed_through = [event async for event in events]
    assert passed_through == EVENTS
    assert [recorded.elapsed for recorded in recorder.recorded] == pytest.approx([0, 2, 4])

    capture = tmp_path / "capture.json"
    recorder.save_events(capture)

    replayer = Replayer.load(capture)
    assert replayer.recorded == recorder.recorded
    async with aclosing(replayer.events()) as events:
        assert [event async for event in events] == EVENTS


async def test_realtime_replay_keeps_spacing(autojump_clock: trio.testing.MockClock):
    replayer = Replayer([RecordedEvent(elapsed=offset, event=event) for offset, event in zip((0.0, 1.5, 4.0), EVENTS)])
    start = trio.current_time()
    arrivals = []
    async with aclosing(replayer.events(realtime=True)) as events:
        async for _event in events:
            arrivals.append(trio.current_time() - start)
    assert arrivals == pytest.approx([0.0, 1.5, 4.0])
