#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from glob import glob
from os.path import basename
from os.path import splitext

from setuptools import find_packages
from setuptools import setup

setup(
    name="midihitter",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Hit keys on an X11 display when MIDI controller buttons and knobs are used",
    long_description="Watches a MIDI input port and turns button presses, knob turns and pad hits into keystrokes.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Multimedia :: Sound/Audio :: MIDI",
    ],
    keywords=["midi", "x11", "xtest", "keyboard"],
    python_requires=">=3.10",
    install_requires=[
        "cattrs>=23.1",
        "mido>=1.3",
        "msgspec>=0.18",
        "python-rtmidi>=1.5",
        "python-xlib>=0.33",
        "trio>=0.23",
    ],
    tests_require=["pytest>=8.0", "pytest-trio>=0.8"],
    extras_require={
        "test": ["pytest>=8.0", "pytest-trio>=0.8"],
    },
    entry_points={
        "console_scripts": [
            "midihitter=midihitter.app:main",
            "midihitter-events=midihitter.scripts:print_midi_events",
        ],
    },
)
