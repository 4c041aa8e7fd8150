"""Tests for the state-machine driver and the consumer contract.

Covers emission spans, the one-item-in-flight backpressure, drain,
cancellation, and failure propagation from the producer thread.
"""

from __future__ import annotations

import threading
import time

import pytest

from scanr import (
    HOME,
    ChannelClosedError,
    Item,
    ItemType,
    ScanFailedError,
    Scanner,
    ScannerStateError,
    StateFn,
)
from scanr.states import scan_newline, scan_tokens


def one_item_per_rune(s: Scanner) -> StateFn | None:
    """Emit every rune as its own SPACE item."""
    if s.next() == "":
        return None
    s.emit(ItemType.SPACE)
    return one_item_per_rune


def forever(s: Scanner) -> StateFn | None:
    s.emit(ItemType.SPACE)
    return forever


def boom(s: Scanner) -> StateFn | None:
    s.next()
    raise ValueError("broken state function")


def wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestEmission:
    def test_item_spans_window(self) -> None:
        with Scanner(one_item_per_rune).start("a€b") as s:
            items = list(s)
        assert items == [
            Item(ItemType.SPACE, 0, "a"),
            Item(ItemType.SPACE, 1, "€"),
            Item(ItemType.SPACE, 4, "b"),
        ]
        assert items[1].end == 4

    def test_last_item_and_last_pos(self) -> None:
        s = Scanner(one_item_per_rune).start("xy")
        assert s.next_item().value == "x"
        assert s.next_item().value == "y"
        assert s.last_pos == 1
        s.close()
        assert s.last_item == Item(ItemType.SPACE, 1, "y")

    def test_home_resolves_to_start_by_default(self) -> None:
        s = Scanner(scan_tokens)
        assert s.resolve(HOME) is scan_tokens
        assert s.resolve(None) is None

    def test_explicit_home(self) -> None:
        s = Scanner(forever, home=scan_tokens)
        assert s.resolve(HOME) is scan_tokens


class TestLifecycle:
    def test_consume_before_start(self) -> None:
        with pytest.raises(ScannerStateError):
            Scanner(scan_tokens).next_item()

    def test_enter_before_start(self) -> None:
        with pytest.raises(ScannerStateError):
            with Scanner(scan_tokens):
                pass

    def test_single_use(self) -> None:
        s = Scanner(scan_tokens).start("a")
        with pytest.raises(ScannerStateError):
            s.start("b")
        s.close()

    def test_next_item_after_end(self) -> None:
        s = Scanner(scan_tokens).start("")
        assert s.next_item().type is ItemType.EOF
        with pytest.raises(ChannelClosedError):
            s.next_item()
        assert s.join()
        assert s.state is None

    def test_run_on_calling_thread(self) -> None:
        # No emission, so nothing blocks
        s = Scanner(lambda s: None)
        s.run("abc")
        assert s.state is None

    def test_run_raises_state_failure(self) -> None:
        with pytest.raises(ValueError, match="broken"):
            Scanner(boom).run("x")


class TestBackpressure:
    def test_at_most_one_item_in_flight(self) -> None:
        s = Scanner(one_item_per_rune).start("abcdef")
        s.next_item()
        s.next_item()
        # Producer reads the third rune, then blocks handing it over
        assert wait_for(lambda: s.pos == 3)
        time.sleep(0.05)
        assert s.pos == 3
        assert s.next_item().value == "c"
        s.close()

    def test_drain_releases_abandoned_producer(self) -> None:
        s = Scanner(one_item_per_rune).start("x" * 100)
        for _ in range(10):
            s.next_item()
        assert s.drain() == 90
        assert s.join(timeout=2.0)
        assert not s.running

    def test_drain_on_context_exit(self) -> None:
        with Scanner(scan_tokens).start("a b c d e f") as s:
            s.next_item()
        assert not s.running

    def test_iteration_stops_at_end(self) -> None:
        with Scanner(scan_tokens).start("1.2.3.4") as s:
            types = [item.type for item in s]
        assert types == [ItemType.IP, ItemType.EOF]


class TestCancellation:
    def test_cancel_stops_endless_producer(self) -> None:
        s = Scanner(forever).start("")
        for _ in range(3):
            s.next_item()
        s.cancel()
        assert s.join(timeout=2.0)
        assert s.state is None

    def test_cancel_stops_loop_that_never_emits(self) -> None:
        # scan_newline rejects "a" and returns home to itself without emitting
        s = Scanner(scan_newline).start("a")
        s.cancel()
        assert s.join(timeout=1.0)
        assert s.state is None
        with pytest.raises(ChannelClosedError):
            s.next_item()

    def test_scope_exit_stops_loop_that_never_emits(self) -> None:
        holder: list[Scanner] = []
        with pytest.raises(RuntimeError):
            with Scanner(scan_newline).start("a") as s:
                holder.append(s)
                raise RuntimeError("consumer gave up")
        assert wait_for(lambda: not holder[0].running)

    def test_exception_in_scope_cancels(self) -> None:
        holder: list[Scanner] = []
        with pytest.raises(RuntimeError):
            with Scanner(forever).start("") as s:
                holder.append(s)
                s.next_item()
                raise RuntimeError("consumer gave up")
        assert not holder[0].running

    def test_many_abandoned_scanners_leave_no_threads(self) -> None:
        before = threading.active_count()
        for _ in range(20):
            with pytest.raises(KeyError):
                with Scanner(forever).start(""):
                    raise KeyError("abandon")
        assert wait_for(lambda: threading.active_count() <= before)


class TestFailure:
    def test_next_item_reports_failure(self) -> None:
        s = Scanner(boom).start("x")
        with pytest.raises(ScanFailedError) as info:
            s.next_item()
        assert isinstance(info.value.__cause__, ValueError)

    def test_iteration_reports_failure(self) -> None:
        def emit_then_boom(s: Scanner) -> StateFn | None:
            s.next()
            s.emit(ItemType.SPACE)
            return boom

        received = []
        with pytest.raises(ScanFailedError):
            with Scanner(emit_then_boom).start("ab") as s:
                for item in s:
                    received.append(item)
        assert [item.value for item in received] == ["a"]

    def test_drain_reports_failure(self) -> None:
        s = Scanner(boom).start("x")
        with pytest.raises(ScanFailedError):
            s.drain()
