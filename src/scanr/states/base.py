"""Recognizer building blocks: match results and transition policies.

A recognizer is split in two. A match function consumes runes and says
whether the span is a token of its class. The state function built by
recognizer() turns that answer into an emission and a transition chosen
by a Transition policy, so the same hostname logic can run standalone,
inside a larger grammar, or with its item suppressed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TypeAlias, Union

from scanr.items import ItemType
from scanr.scanner.core import HOME, HomeMarker, Scanner, StateFn
from scanr.scanner.cursor import EOF
from scanr.utils.logger import get_logger

logger = get_logger(__name__)

Target: TypeAlias = Union[StateFn, HomeMarker, None]


class Match(Enum):
    """Outcome of a match function.

    - ACCEPTED: the consumed span is a token of this class
    - REJECTED: input does not start a token of this class; nothing consumed
    - INVALID: the span started like this class but is malformed

    """

    ACCEPTED = auto()
    REJECTED = auto()
    INVALID = auto()


MatchFn = Callable[[Scanner], Match]


@dataclass(frozen=True, slots=True)
class Transition:
    """Where a recognizer goes next, and whether it emits.

    Each target is a state function, HOME (the scanner's home state), or
    None to stop the scanner.

    Attributes:
        on_success: Next state after an ACCEPTED match
        on_error: Next state after an INVALID match (an ERROR item is
            always emitted first)
        on_reject: Next state after a REJECTED match
        emit: Emit the accepted span; when False it is skipped instead
        item_type: Emit this type instead of the recognizer's own

    A recognizer whose on_error or on_reject leads back to itself loops
    forever on input it cannot consume; route such input elsewhere.

    """

    on_success: Target = HOME
    on_error: Target = HOME
    on_reject: Target = HOME
    emit: bool = True
    item_type: ItemType | None = None

    @classmethod
    def terminal(cls, *, emit: bool = True, item_type: ItemType | None = None) -> Transition:
        """Policy that stops the scanner after a single recognition."""
        return cls(
            on_success=None,
            on_error=None,
            on_reject=None,
            emit=emit,
            item_type=item_type,
        )


DEFAULT_TRANSITION = Transition()


def invalid(s: Scanner, reason: str) -> Match:
    """Log why the pending span is malformed and report INVALID."""
    logger.debug("invalid span at offset %d (%s): %r", s.start_pos, reason, s.pending)
    return Match.INVALID


def recognizer(
    match: MatchFn, item_type: ItemType, name: str
) -> Callable[..., StateFn]:
    """Build a state function factory from a match function.

    An INVALID match is authoritative: the span is emitted once as ERROR
    and never also as item_type.

    A state that consumed nothing at end of input stops the scanner
    instead of following its transition.

    Args:
        match: Consumes input and classifies it
        item_type: Type emitted on success
        name: __name__ given to the built state functions

    Returns:
        factory(transition=DEFAULT_TRANSITION) -> StateFn
    """

    def factory(transition: Transition = DEFAULT_TRANSITION) -> StateFn:
        emitted = transition.item_type or item_type

        def state(s: Scanner) -> StateFn | None:
            result = match(s)
            if result is Match.INVALID:
                s.emit(ItemType.ERROR)
                return s.resolve(transition.on_error)
            # Nothing consumed and nothing left: going home would loop.
            exhausted = s.pos == s.start_pos and s.peek() == EOF
            if result is Match.REJECTED:
                return None if exhausted else s.resolve(transition.on_reject)
            if transition.emit:
                s.emit(emitted)
            else:
                s.ignore()
            return None if exhausted else s.resolve(transition.on_success)

        state.__name__ = state.__qualname__ = name
        return state

    factory.__name__ = factory.__qualname__ = name.removeprefix("scan_")
    return factory
