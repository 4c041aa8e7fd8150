"""Concrete recognizers for the scanr engine.

Each recognizer comes in two forms: a factory taking a Transition
policy (space, newline, ip, hostname, ...) and a ready-made state
function using the default policy (scan_space, scan_newline, ...),
which emits its item and returns to the scanner's home state.

Usage:
    >>> from scanr import Scanner
    >>> from scanr.states import Transition, hostname
    >>> scanner = Scanner(hostname(Transition.terminal()))
"""

from __future__ import annotations

from scanr.states.address import ip, scan_ip
from scanr.states.base import (
    DEFAULT_TRANSITION,
    Match,
    MatchFn,
    Transition,
    invalid,
    recognizer,
)
from scanr.states.dispatch import scan_tokens, scan_unknown
from scanr.states.hostname import domain_name, hostname, scan_domain_name, scan_hostname
from scanr.states.whitespace import (
    newline,
    scan_newline,
    scan_space,
    scan_whitespace,
    space,
    whitespace,
)

__all__ = [
    "DEFAULT_TRANSITION",
    "Match",
    "MatchFn",
    "Transition",
    "domain_name",
    "hostname",
    "invalid",
    "ip",
    "newline",
    "recognizer",
    "scan_domain_name",
    "scan_hostname",
    "scan_ip",
    "scan_newline",
    "scan_space",
    "scan_tokens",
    "scan_unknown",
    "scan_whitespace",
    "space",
    "whitespace",
]
