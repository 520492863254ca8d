# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing
from contextlib import aclosing
from typing import TYPE_CHECKING, AsyncGenerator

from ..commontypes import NO_PRIOR
from ..device.hwtypes import MidiEvent
from .history import HistoryStore
from .matching import MatchPolicy
from .rules import Rule, RuleNotFoundError, RuleTable

if TYPE_CHECKING:
    from ..device.keysender import ActionSink

logger = logging.getLogger(__name__)


def event_matches(current: MidiEvent, previous: typing.Optional[MidiEvent], rule: Rule) -> bool:
    if rule.match_data1 is not None:
        previous_data1 = NO_PRIOR if previous is None else previous.data1
        if not rule.match_data1.matches(current.data1, previous_data1):
            return False
    if rule.match_data2 is None:
        return True
    if previous is None:
        # the first time a controller is seen counts as an edge, whichever way the rule looks
        if rule.match_data2.policy is not MatchPolicy.EXACT:
            return True
        return rule.match_data2.matches(current.data2, NO_PRIOR)
    return rule.match_data2.matches(current.data2, previous.data2)


class Dispatcher:
    rules: RuleTable
    history: HistoryStore

    def __init__(self, rules: RuleTable, sink: ActionSink, history: typing.Optional[HistoryStore] = None):
        self.rules = rules
        self.sink = sink
        self.history = HistoryStore() if history is None else history

    def handle_event(self, event: MidiEvent) -> tuple[str, ...]:
        identity = event.identity
        fired = []
        try:
            rules = self.rules.lookup(identity)
        except RuleNotFoundError:
            rules = ()
        if rules:
            previous = self.history.lookup_previous(identity)
            for rule in rules:
                if event_matches(event, previous, rule):
                    self.sink.perform(rule.key)
                    fired.append(rule.key)
        if not fired:
            logger.debug("No handler for MIDI %s", event)
        self.history.record(identity, event)
        return tuple(fired)

    async def run(self, source: AsyncGenerator[MidiEvent, None]):
        self.rules.freeze()
        async with aclosing(source) as events:
            async for event in events:
                self.handle_event(event)
        logger.debug("MIDI event source finished")
