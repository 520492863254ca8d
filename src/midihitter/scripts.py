# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import argparse
from contextlib import aclosing

import trio

from .device.hwtypes import PortNotFoundError, describe_status
from .device.midi_ports import MidiPortSource, find_input

midi_events_parser = argparse.ArgumentParser()
midi_events_parser.add_argument("port", nargs="?", help="MIDI port name (or prefix); the default input if omitted")


def print_midi_events():
    port = midi_events_parser.parse_args().port
    if port is not None:
        try:
            port = find_input(port)
        except PortNotFoundError as exc:
            raise SystemExit(str(exc)) from exc

    async def runner():
        async with aclosing(MidiPortSource(port).events()) as events:
            async for event in events:
                print(f"{describe_status(event.status):>10} {event.data1:3d} {event.data2:3d}")

    try:
        trio.run(runner)
    except KeyboardInterrupt:
        pass
