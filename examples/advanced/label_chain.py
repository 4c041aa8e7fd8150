"""Compose recognizers: read hostname labels until a space, then stop."""

from scanr import Scanner
from scanr.states import Transition, hostname, space

# Each label returns home (itself); the first rune that cannot start a
# label hands over to a space recognizer that stops the scanner.
stop_at_space = space(Transition.terminal())
label = hostname(Transition(on_reject=stop_at_space, on_error=None))

with Scanner(label).start("www.example.com. trailing text") as s:
    for item in s:
        print(item)
