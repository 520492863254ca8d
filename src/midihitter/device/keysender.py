# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import contextlib
import logging
import typing

import Xlib.error
from Xlib import X, XK
from Xlib.display import Display
from Xlib.ext import xtest

from .hwtypes import InvalidActionError, KeyAction

logger = logging.getLogger(__name__)

MODIFIERS = {
    "Ctrl": "Control_L",
    "Shift": "Shift_L",
    "Alt": "Alt_L",
    "Super": "Super_L",
}


def parse_action(identifier: str) -> KeyAction:
    """Split an action such as "Ctrl+b" into its X11 keysym name and the modifier keysyms held around it."""
    *prefixes, key = identifier.split("+")
    if not key:
        raise InvalidActionError(f"No key in action {identifier!r}")
    modifiers = []
    for prefix in prefixes:
        if prefix not in MODIFIERS:
            raise InvalidActionError(f"Unknown modifier {prefix!r} in action {identifier!r}")
        modifiers.append(MODIFIERS[prefix])
    return KeyAction(key=key, modifiers=tuple(modifiers))


@typing.runtime_checkable
class ActionSink(typing.Protocol):
    def perform(self, action: str) -> None:
        ...


class LoggingKeySender:
    """Doesn't touch any display; just notes what would have been typed."""

    def __init__(self):
        self.performed = []

    def perform(self, action: str):
        try:
            keyaction = parse_action(action)
        except InvalidActionError as exc:
            logger.warning("not sending %r: %s", action, exc)
            return
        logger.info("would hit key %s with modifiers %r", keyaction.key, keyaction.modifiers)
        self.performed.append(action)


class XTestKeySender(contextlib.AbstractContextManager):
    def __init__(self, display_name: typing.Optional[str] = None):
        self.display_name = display_name
        self._display = None

    @property
    def available(self):
        return self._display is not None

    def open(self):
        try:
            self._display = Display(self.display_name)
        except Xlib.error.DisplayError as exc:
            logger.warning("no X11 display available: %s", exc)
            self._display = None
            return
        if not self._display.has_extension("XTEST"):
            logger.warning("X11 display %s has no XTEST extension", self._display.get_display_name())
            self.close()

    def close(self):
        if self._display is not None:
            self._display.close()
            self._display = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.close()
        return False

    def _keycode(self, name: str) -> int:
        keysym = XK.string_to_keysym(name)
        if keysym == X.NoSymbol:
            return 0
        return self._display.keysym_to_keycode(keysym)

    def perform(self, action: str):
        if self._display is None:
            logger.warning("no X11 display available, dropping %r", action)
            return
        try:
            keyaction = parse_action(action)
        except InvalidActionError as exc:
            logger.warning("not sending %r: %s", action, exc)
            return
        keycode = self._keycode(keyaction.key)
        modifier_codes = [self._keycode(modifier) for modifier in keyaction.modifiers]
        if not keycode or not all(modifier_codes):
            logger.warning("no keycode on this display for %r", action)
            return
        try:
            for code in modifier_codes:
                xtest.fake_input(self._display, X.KeyPress, code)
            xtest.fake_input(self._display, X.KeyPress, keycode)
            xtest.fake_input(self._display, X.KeyRelease, keycode)
            for code in reversed(modifier_codes):
                xtest.fake_input(self._display, X.KeyRelease, code)
            self._display.sync()
        except (Xlib.error.ConnectionClosedError, OSError) as exc:
            logger.warning("lost X11 display, no more keys will be sent: %s", exc)
            self._display = None
            return
        logger.debug("hit key %s (keycode %d, modifiers %r)", keyaction.key, keycode, modifier_codes)
