# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum


class Wildcard(enum.Enum):
    ANY = "*"

    def __repr__(self):
        return "ANY"


# Registered in place of a data byte to mean "match any value at this position".
ANY = Wildcard.ANY

# Stand-in for the previous data byte when nothing has been seen yet; below every real MIDI value.
NO_PRIOR = -1


class MidiHitterError(Exception):
    pass
