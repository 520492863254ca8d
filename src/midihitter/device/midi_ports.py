# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import mido
import trio

from .hwtypes import MidiEvent, MidiStatus, PortNotFoundError

logger = logging.getLogger(__name__)


def input_names() -> list[str]:
    return sorted(set(mido.get_input_names()))


def find_input(name: str, available: typing.Optional[collections.abc.Iterable[str]] = None) -> str:
    """Find the input port called name, or failing that, the first one whose name starts with it."""
    if available is None:
        available = input_names()
    available = list(available)
    if name in available:
        return name
    for candidate in available:
        if candidate.startswith(name):
            return candidate
    raise PortNotFoundError(f"no input found for: {name}")


def event_from_message(message: mido.Message, timestamp: typing.Optional[float] = None) -> typing.Optional[MidiEvent]:
    if message.type == "sysex":
        return None
    data = message.bytes()
    return MidiEvent(
        status=data[0],
        data1=data[1] if len(data) > 1 else 0,
        data2=data[2] if len(data) > 2 else 0,
        timestamp=timestamp,
    )


class MidiPortSource:
    def __init__(self, port_name: typing.Optional[str] = None):
        self.port_name = port_name

    async def events(self) -> collections.abc.AsyncGenerator[MidiEvent, None]:
        with mido.open_input(self.port_name) as port:
            logger.debug("monitoring MIDI port: %s", port.name)
            while not port.closed:
                message = await trio.to_thread.run_sync(port.receive, abandon_on_cancel=True)
                event = event_from_message(message, timestamp=trio.current_time())
                if event is None:
                    logger.debug("Skipping %s message", MidiStatus.SYSEX.name)
                    continue
                yield event
