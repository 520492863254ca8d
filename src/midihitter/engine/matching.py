# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Value comparisons between a data byte and the one seen before it."""
from __future__ import annotations

import enum
import typing

import msgspec

from ..commontypes import MidiHitterError


class InvalidMatchPolicyError(MidiHitterError):
    pass


@enum.unique
class MatchPolicy(enum.Enum):
    EXACT = "exact"
    INCREASING = "increasing"
    DECREASING = "decreasing"
    PASSES_INCREASING = "passes_increasing"
    PASSES_DECREASING = "passes_decreasing"


class MatchSpec(msgspec.Struct, frozen=True, kw_only=True):
    """Describes how a watched data byte should be changing for a rule to fire.

    value is only meaningful for EXACT; threshold only for the PASSES_* policies.
    """

    policy: MatchPolicy
    value: typing.Optional[int] = None
    threshold: typing.Optional[int] = None

    def __post_init__(self):
        if self.policy is MatchPolicy.EXACT and self.value is None:
            raise ValueError("An exact match needs a value")
        if self.policy in (MatchPolicy.PASSES_INCREASING, MatchPolicy.PASSES_DECREASING) and self.threshold is None:
            raise ValueError(f"A {self.policy.value} match needs a threshold")

    def matches(self, current: int, previous: int) -> bool:
        return evaluate(self.policy, current, previous, self)


def exact(value: int) -> MatchSpec:
    return MatchSpec(policy=MatchPolicy.EXACT, value=value)


def increasing() -> MatchSpec:
    return MatchSpec(policy=MatchPolicy.INCREASING)


def decreasing() -> MatchSpec:
    return MatchSpec(policy=MatchPolicy.DECREASING)


def passes_increasing(threshold: int) -> MatchSpec:
    return MatchSpec(policy=MatchPolicy.PASSES_INCREASING, threshold=threshold)


def passes_decreasing(threshold: int) -> MatchSpec:
    return MatchSpec(policy=MatchPolicy.PASSES_DECREASING, threshold=threshold)


def evaluate(policy: MatchPolicy, current: int, previous: int, spec: MatchSpec) -> bool:
    match policy:
        case MatchPolicy.EXACT:
            return current == spec.value
        case MatchPolicy.INCREASING:
            return current > previous
        case MatchPolicy.DECREASING:
            return current < previous
        case MatchPolicy.PASSES_INCREASING:
            return current > spec.threshold and previous <= spec.threshold
        case MatchPolicy.PASSES_DECREASING:
            return current < spec.threshold and previous >= spec.threshold
    raise InvalidMatchPolicyError(f"Unrecognized match policy {policy!r}")
