# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

from ..commontypes import ANY, MidiHitterError, Wildcard


class HardwareError(MidiHitterError):
    pass


class PortNotFoundError(HardwareError):
    pass


class InvalidActionError(MidiHitterError):
    pass


@enum.unique
class MidiStatus(enum.IntEnum):
    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLY_AT = 0xA0
    CONTROL = 0xB0
    PROGRAM = 0xC0
    CHANNEL_AT = 0xD0
    PITCHBEND = 0xE0
    SYSEX = 0xF0
    MTC = 0xF1
    SONGPOS = 0xF2
    SONGSEL = 0xF3
    TUNE = 0xF6
    EOX = 0xF7
    CLOCK = 0xF8
    F9 = 0xF9
    START = 0xFA
    CONTINUE = 0xFB
    STOP = 0xFC
    FD = 0xFD
    ACTIVE = 0xFE
    RESET = 0xFF


def describe_status(status: int) -> str:
    try:
        return MidiStatus(status).name
    except ValueError:
        return str(int(status))


DataByte = typing.Union[int, Wildcard]


class Identity(msgspec.Struct, frozen=True):
    status: int
    data1: DataByte
    data2: DataByte

    @classmethod
    def of(cls, status: int, *data: int):
        """Build a registration identity; omitted data bytes are wildcards.

        Identity.of(MidiStatus.CONTROL, 1) matches every value sent by controller 1.
        """
        if len(data) > 2:
            raise ValueError(f"At most two data bytes, got {data!r}")
        padded = tuple(data) + (ANY,) * (2 - len(data))
        return cls(status=int(status), data1=padded[0], data2=padded[1])

    def __str__(self):
        return f"{describe_status(self.status)}({self.data1!r}, {self.data2!r})"


class MidiEvent(msgspec.Struct, frozen=True):
    status: int
    data1: int
    data2: int
    timestamp: typing.Optional[float] = None

    @property
    def identity(self) -> Identity:
        return Identity(status=self.status, data1=self.data1, data2=self.data2)

    def __str__(self):
        return f"{describe_status(self.status)} data1={self.data1} data2={self.data2}"


class KeyAction(msgspec.Struct, frozen=True):
    key: str
    modifiers: tuple[str, ...] = ()
