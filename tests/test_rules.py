# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pytest

from midihitter.commontypes import ANY
from midihitter.device.hwtypes import Identity, MidiStatus
from midihitter.engine.matching import exact
from midihitter.engine.rules import Rule, RuleNotFoundError, RuleTable, RuleTableFrozenError

CC = MidiStatus.CONTROL


def test_identity_of_pads_with_wildcards():
    assert Identity.of(CC) == Identity(status=0xB0, data1=ANY, data2=ANY)
    assert Identity.of(CC, 1) == Identity(status=0xB0, data1=1, data2=ANY)
    assert Identity.of(CC, 1, 127) == Identity(status=0xB0, data1=1, data2=127)
    with pytest.raises(ValueError):
        Identity.of(CC, 1, 2, 3)


def test_exact_lookup_keeps_registration_order():
    table = RuleTable()
    first = Rule(key="a")
    second = Rule(key="b")
    third = Rule(key="c")
    table.register(Identity.of(CC, 49, 127), first)
    table.register(Identity.of(CC, 49, 127), second)
    table.register(Identity.of(CC, 49, 0), third)
    table.register(Identity.of(MidiStatus.NOTE_ON, 49, 127), Rule(key="d"))

    assert table.lookup(Identity.of(CC, 49, 127)) == (first, second)
    assert table.lookup(Identity.of(CC, 49, 0)) == (third,)
    assert len(table) == 4


def test_unknown_status_is_not_found():
    table = RuleTable()
    table.register(Identity.of(CC, 1, 127), Rule(key="a"))
    with pytest.raises(RuleNotFoundError) as excinfo:
        table.lookup(Identity.of(MidiStatus.NOTE_ON, 1, 127))
    assert excinfo.value.identity == Identity.of(MidiStatus.NOTE_ON, 1, 127)


def test_wildcard_data2():
    table = RuleTable()
    up = Rule(key="Up", match_data2=exact(127))
    down = Rule(key="Down", match_data2=exact(1))
    table.register(Identity.of(CC, 2), up)
    table.register(Identity.of(CC, 2), down)

    for value in (0, 1, 64, 127):
        assert table.lookup(Identity.of(CC, 2, value)) == (up, down)


def test_exact_data2_beats_wildcard_data2():
    table = RuleTable()
    specific = Rule(key="specific")
    general = Rule(key="general")
    table.register(Identity.of(CC, 2, 127), specific)
    table.register(Identity.of(CC, 2), general)

    assert table.lookup(Identity.of(CC, 2, 127)) == (specific,)
    assert table.lookup(Identity.of(CC, 2, 5)) == (general,)


def test_wildcard_data1_used_when_no_exact_data1():
    table = RuleTable()
    anything = Rule(key="anything")
    table.register(Identity.of(CC), anything)
    table.register(Identity.of(CC, 7, 100), Rule(key="seven"))

    assert table.lookup(Identity.of(CC, 8, 5)) == (anything,)
    assert table.lookup(Identity.of(CC, 99, 0)) == (anything,)


def test_exact_data1_shadows_wildcard_data1():
    table = RuleTable()
    table.register(Identity.of(CC), Rule(key="anything"))
    table.register(Identity.of(CC, 7, 100), Rule(key="seven"))

    # controller 7 has its own bucket, so the ANY bucket is never consulted for it
    with pytest.raises(RuleNotFoundError):
        table.lookup(Identity.of(CC, 7, 5))
    assert [rule.key for rule in table.lookup(Identity.of(CC, 7, 100))] == ["seven"]


def test_wildcard_data1_bucket_without_matching_data2():
    table = RuleTable()
    table.register(Identity(status=CC, data1=ANY, data2=64), Rule(key="half"))

    assert [rule.key for rule in table.lookup(Identity.of(CC, 3, 64))] == ["half"]
    with pytest.raises(RuleNotFoundError):
        table.lookup(Identity.of(CC, 3, 65))


def test_register_after_freeze():
    table = RuleTable()
    table.register(Identity.of(CC, 1), Rule(key="a"))
    table.freeze()
    with pytest.raises(RuleTableFrozenError):
        table.register(Identity.of(CC, 1), Rule(key="b"))
    assert len(table.lookup(Identity.of(CC, 1, 1))) == 1
