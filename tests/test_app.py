# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import pathlib

import mido
import msgspec
import pytest

from midihitter.app import main
from midihitter.device.hwtypes import MidiEvent, MidiStatus
from midihitter.device.recorded import RecordedEvent


def write_capture(path: pathlib.Path, *events: MidiEvent):
    path.write_bytes(msgspec.json.encode([RecordedEvent(elapsed=0.0, event=event) for event in events]))


def test_list_ports(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture):
    monkeypatch.setattr(mido, "get_input_names", lambda: ["Midi Through", "Arturia MiniLab", "Arturia MiniLab"])
    assert main(["midihitter", "-l"]) == 0
    assert capsys.readouterr().out == "Arturia MiniLab\nMidi Through\n"


def test_missing_port(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture):
    monkeypatch.setattr(mido, "get_input_names", lambda: ["Midi Through"])
    assert main(["midihitter", "--port", "Launchpad", "--dry-run"]) == 1
    assert "no input found for: Launchpad" in capsys.readouterr().err


def test_replay_dry_run(tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO)
    capture = tmp_path / "capture.json"
    write_capture(
        capture,
        MidiEvent(status=MidiStatus.CONTROL, data1=39, data2=127),
        MidiEvent(status=MidiStatus.CONTROL, data1=39, data2=0),
        MidiEvent(status=MidiStatus.NOTE_ON, data1=53, data2=100),
    )
    assert main(["midihitter", "--replay", str(capture), "--dry-run"]) == 0
    hits = [record.getMessage() for record in caplog.records if record.getMessage().startswith("would hit key")]
    assert hits == ["would hit key space with modifiers ()", "would hit key b with modifiers ('Control_L',)"]
