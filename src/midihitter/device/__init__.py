# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# MIDI event stages
# device level:
# stage 0: open a MIDI input port (or a recorded capture) and issue a stream of MidiEvents

# engine level:
# stage 1: look up the rules registered for the event's identity
# stage 2: compare the event against the previous one seen for that controller
# stage 3: hand matching rules' keys to the key sender, then remember the event
