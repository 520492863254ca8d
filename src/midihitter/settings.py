# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import pathlib
import typing

import cattrs
import cattrs.gen

from .commontypes import ANY
from .device.hwtypes import Identity, MidiStatus
from .device.keysender import parse_action
from .engine.matching import MatchPolicy, MatchSpec
from .engine.rules import Rule, RuleTable

# Media-centre navigation for a small controller: transport buttons, four relative knobs, two pads.
DEFAULT_MAPPINGS = [
    # fullscreen toggle
    {"status": "CONTROL", "data1": 49, "data2": 127, "key": "backslash"},
    # scrub left and right
    {"status": "CONTROL", "data1": 41, "data2": 127, "key": "Left"},
    {"status": "CONTROL", "data1": 42, "data2": 127, "key": "Right"},
    # play and stop
    {"status": "CONTROL", "data1": 39, "data2": 127, "key": "space"},
    {"status": "CONTROL", "data1": 40, "data2": 127, "key": "x"},
    # blue knob in relative mode is volume
    {"status": "CONTROL", "data1": 1, "data2": None, "match_data2": {"policy": "exact", "value": 127}, "key": "plus"},
    {"status": "CONTROL", "data1": 1, "data2": None, "match_data2": {"policy": "exact", "value": 1}, "key": "minus"},
    # green knob moves up and down
    {"status": "CONTROL", "data1": 2, "data2": None, "match_data2": {"policy": "exact", "value": 127}, "key": "Up"},
    {"status": "CONTROL", "data1": 2, "data2": None, "match_data2": {"policy": "exact", "value": 1}, "key": "Down"},
    # white knob moves left and right
    {"status": "CONTROL", "data1": 3, "data2": None, "match_data2": {"policy": "exact", "value": 127}, "key": "Left"},
    {"status": "CONTROL", "data1": 3, "data2": None, "match_data2": {"policy": "exact", "value": 1}, "key": "Right"},
    # orange knob rewinds and fast-forwards
    {"status": "CONTROL", "data1": 4, "data2": None, "match_data2": {"policy": "exact", "value": 127}, "key": "r"},
    {"status": "CONTROL", "data1": 4, "data2": None, "match_data2": {"policy": "exact", "value": 1}, "key": "f"},
    # knob clicks select
    {"status": "CONTROL", "data1": 64, "data2": 127, "key": "Return"},
    {"status": "CONTROL", "data1": 65, "data2": 127, "key": "Return"},
    # help button opens the menu
    {"status": "CONTROL", "data1": 5, "data2": 127, "key": "Tab"},
    # tempo button backs out of menus
    {"status": "CONTROL", "data1": 6, "data2": 127, "key": "BackSpace"},
    # mic button brings up the system menu
    {"status": "CONTROL", "data1": 48, "data2": 127, "key": "s"},
    # F1 and G1 pads skip back and forward
    {"status": "NOTE_ON", "data1": 53, "data2": None, "key": "Ctrl+b"},
    {"status": "NOTE_ON", "data1": 55, "data2": None, "key": "Ctrl+f"},
]


def structure_status(v: typing.Union[str, int], _typ=None) -> int:
    if isinstance(v, str):
        return int(MidiStatus[v])
    if not 0 <= v <= 0xFF:
        raise ValueError(f"Status byte out of range: {v}")
    return int(v)


def unstructure_status(status: int) -> typing.Union[str, int]:
    try:
        return MidiStatus(status).name
    except ValueError:
        return status


def structure_match_spec(d: dict, _typ: type[MatchSpec]) -> MatchSpec:
    return MatchSpec(policy=MatchPolicy(d["policy"]), value=d.get("value"), threshold=d.get("threshold"))


def unstructure_match_spec(spec: MatchSpec) -> dict:
    raw = {"policy": spec.policy.value}
    if spec.value is not None:
        raw["value"] = spec.value
    if spec.threshold is not None:
        raw["threshold"] = spec.threshold
    return raw


settings_converter = cattrs.Converter()
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(MatchSpec, structure_match_spec)
settings_converter.register_unstructure_hook(MatchSpec, unstructure_match_spec)


@dataclasses.dataclass(kw_only=True)
class Mapping:
    status: int
    data1: typing.Optional[int] = None
    data2: typing.Optional[int] = None
    key: str
    match_data1: typing.Optional[MatchSpec] = None
    match_data2: typing.Optional[MatchSpec] = None

    def __post_init__(self):
        # reject bad modifiers now rather than on the first button press
        parse_action(self.key)

    @property
    def identity(self) -> Identity:
        return Identity(
            status=self.status,
            data1=ANY if self.data1 is None else self.data1,
            data2=ANY if self.data2 is None else self.data2,
        )

    @property
    def rule(self) -> Rule:
        return Rule(key=self.key, match_data1=self.match_data1, match_data2=self.match_data2)


settings_converter.register_structure_hook(
    Mapping,
    cattrs.gen.make_dict_structure_fn(
        Mapping, settings_converter, status=cattrs.gen.override(struct_hook=structure_status)
    ),
)
settings_converter.register_unstructure_hook(
    Mapping,
    cattrs.gen.make_dict_unstructure_fn(
        Mapping, settings_converter, status=cattrs.gen.override(unstruct_hook=unstructure_status)
    ),
)


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: typing.Optional[pathlib.Path]
    port: typing.Optional[str] = None
    display: typing.Optional[str] = None
    mappings: list[Mapping]

    def build_rule_table(self) -> RuleTable:
        table = RuleTable()
        for mapping in self.mappings:
            table.register(mapping.identity, mapping.rule)
        return table

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        if dest is None:
            raise ValueError("These settings were not loaded from a file; pass a destination to save them to")
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as outfile:
            json.dump(raw, outfile, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as infile:
            raw = json.load(infile)
        raw["_path"] = src
        return settings_converter.structure(raw, cls)

    @classmethod
    def default(cls, path: typing.Optional[pathlib.Path] = None):
        return settings_converter.structure({"_path": path, "mappings": DEFAULT_MAPPINGS}, cls)


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
