# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import argparse
import contextlib
import logging
import pathlib
import sys

import trio

from .device.hwtypes import PortNotFoundError
from .device.keysender import LoggingKeySender, XTestKeySender
from .device.midi_ports import MidiPortSource, find_input, input_names
from .device.recorded import Recorder, Replayer
from .engine.dispatch import Dispatcher
from .settings import Settings

logger = logging.getLogger(__name__)


parser = argparse.ArgumentParser(prog="midihitter", description="Send keystrokes to X11 when MIDI controls are used.")
parser.add_argument("-p", "--port", help="MIDI port name (or prefix) to watch")
parser.add_argument("-l", "--list", action="store_true", help="List the found input ports")
parser.add_argument("-v", "--verbose", action="store_true", help="Display unmapped MIDI events and be more verbose")
parser.add_argument("--settings", type=pathlib.Path, help="JSON settings file; the built-in mapping is used if omitted")
parser.add_argument("--dry-run", action="store_true", help="Log the keys instead of sending them to the display")
capture_group = parser.add_mutually_exclusive_group()
capture_group.add_argument("--record", type=pathlib.Path, metavar="PATH", help="Save the events seen to PATH on exit")
capture_group.add_argument("--replay", type=pathlib.Path, metavar="PATH", help="Read events from a recording instead of a port")


def main(argv=sys.argv):
    parsed = parser.parse_args(argv[1:])
    logging.basicConfig(level=logging.DEBUG if parsed.verbose else logging.INFO)

    if parsed.list:
        for name in input_names():
            print(name)
        return 0

    settings = Settings.load(parsed.settings) if parsed.settings is not None else Settings.default()
    rules = settings.build_rule_table()
    logger.debug("Loaded %d rules", len(rules))

    recorder = None
    if parsed.replay is not None:
        source = Replayer.load(parsed.replay).events(realtime=True)
    else:
        port_name = parsed.port if parsed.port is not None else settings.port
        if port_name is not None:
            try:
                port_name = find_input(port_name)
            except PortNotFoundError as exc:
                print(exc, file=sys.stderr)
                return 1
        source = MidiPortSource(port_name).events()
        if parsed.record is not None:
            recorder = Recorder(source)
            source = recorder.events()

    if parsed.dry_run:
        sink_context = contextlib.nullcontext(LoggingKeySender())
    else:
        sink_context = XTestKeySender(settings.display)

    try:
        with sink_context as sink:
            dispatcher = Dispatcher(rules, sink)
            trio.run(dispatcher.run, source)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        if recorder is not None:
            recorder.save_events(parsed.record)
            logger.info("Saved %d events to %s", len(recorder.recorded), parsed.record)
    return 0
