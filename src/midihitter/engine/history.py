# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

from ..commontypes import ANY
from ..device.hwtypes import Identity, MidiEvent


class HistoryStore:
    """The most recent event seen for each (status, data1) pair.

    Entries are only ever written under concrete values. Reads resolve data1 exactly, with no
    fallback to ANY; unlike RuleTable.lookup, an ANY data1 never finds anything. The data2 level
    holds a single slot, so the stored event answers a query for any data2, ANY included.
    """

    _latest: dict[tuple[int, int], MidiEvent]

    def __init__(self):
        self._latest = {}

    def record(self, identity: Identity, event: MidiEvent):
        if identity.data1 is ANY or identity.data2 is ANY:
            raise ValueError(f"History is only recorded under concrete identities, not {identity}")
        self._latest[(identity.status, identity.data1)] = event

    def lookup_previous(self, identity: Identity) -> typing.Optional[MidiEvent]:
        if identity.data1 is ANY:
            return None
        return self._latest.get((identity.status, identity.data1))

    def __len__(self):
        return len(self._latest)
