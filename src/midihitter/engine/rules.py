# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections
import typing

import msgspec

from ..commontypes import ANY, MidiHitterError
from ..device.hwtypes import DataByte, Identity
from .matching import MatchSpec


class RuleNotFoundError(MidiHitterError):
    def __init__(self, identity: Identity):
        self.identity = identity
        super().__init__(f"no rule for key: {identity}")


class RuleTableFrozenError(MidiHitterError):
    pass


class Rule(msgspec.Struct, frozen=True, kw_only=True):
    key: str
    match_data1: typing.Optional[MatchSpec] = None
    match_data2: typing.Optional[MatchSpec] = None


class RuleTable:
    """Rules keyed by (status, data1, data2), where data1 and data2 may be registered as ANY.

    A lookup picks the data1 bucket first: the event's own data1 if anything at all was registered
    for it, and only otherwise the ANY bucket. Inside that bucket the event's data2 is tried, then ANY.
    So an exact data1 registration shadows every ANY-data1 rule for the same status, even when the
    exact bucket has nothing for the event's data2.
    """

    _buckets: dict[Identity, list[Rule]]
    _primaries: set[tuple[int, DataByte]]

    def __init__(self):
        self._buckets = collections.defaultdict(list)
        self._primaries = set()
        self.frozen = False

    def register(self, identity: Identity, rule: Rule):
        if self.frozen:
            raise RuleTableFrozenError(f"Cannot register {rule!r} for {identity} once dispatch has started")
        self._buckets[identity].append(rule)
        self._primaries.add((identity.status, identity.data1))

    def freeze(self):
        self.frozen = True

    def lookup(self, identity: Identity) -> tuple[Rule, ...]:
        data1 = identity.data1
        if (identity.status, data1) not in self._primaries:
            data1 = ANY
            if (identity.status, data1) not in self._primaries:
                raise RuleNotFoundError(identity)
        for data2 in (identity.data2, ANY):
            bucket = self._buckets.get(Identity(status=identity.status, data1=data1, data2=data2))
            if bucket:
                return tuple(bucket)
        raise RuleNotFoundError(identity)

    def __len__(self):
        return sum(len(bucket) for bucket in self._buckets.values())
