"""Tests for the unbuffered rendezvous channel."""

from __future__ import annotations

import threading

import pytest

from scanr import ChannelClosedError, Item, ItemType, ScanCancelled
from scanr.scanner import ItemChannel


def _item(pos: int) -> Item:
    return Item(ItemType.SPACE, pos, " ")


class TestRendezvous:
    def test_send_blocks_until_received(self) -> None:
        channel = ItemChannel()
        done = threading.Event()

        def producer() -> None:
            channel.send(_item(0))
            done.set()

        t = threading.Thread(target=producer)
        t.start()
        assert not done.wait(0.1), "send returned before anyone received"
        assert channel.receive(timeout=1.0) == _item(0)
        assert done.wait(1.0)
        t.join(1.0)
        assert channel.sent == 1
        assert channel.received == 1

    def test_fifo_order(self) -> None:
        channel = ItemChannel()

        def producer() -> None:
            for i in range(20):
                channel.send(_item(i))
            channel.close()

        t = threading.Thread(target=producer)
        t.start()
        received = []
        while (item := channel.receive(timeout=1.0)) is not None:
            received.append(item.pos)
        t.join(1.0)
        assert received == list(range(20))

    def test_receive_timeout(self) -> None:
        with pytest.raises(TimeoutError):
            ItemChannel().receive(timeout=0.05)


class TestClose:
    def test_receive_after_close_returns_none(self) -> None:
        channel = ItemChannel()
        channel.close()
        assert channel.closed
        assert channel.receive() is None

    def test_send_after_close_raises(self) -> None:
        channel = ItemChannel()
        channel.close()
        with pytest.raises(ChannelClosedError):
            channel.send(_item(0))

    def test_close_wakes_blocked_receiver(self) -> None:
        channel = ItemChannel()
        results: list[Item | None] = []
        t = threading.Thread(target=lambda: results.append(channel.receive()))
        t.start()
        channel.close()
        t.join(1.0)
        assert results == [None]


class TestCancel:
    def test_cancel_releases_blocked_sender(self) -> None:
        channel = ItemChannel()
        errors: list[BaseException] = []

        def producer() -> None:
            try:
                channel.send(_item(0))
            except ScanCancelled as exc:
                errors.append(exc)

        t = threading.Thread(target=producer)
        t.start()
        channel.cancel()
        t.join(1.0)
        assert not t.is_alive()
        assert len(errors) == 1
        assert channel.sent == 0

    def test_send_after_cancel_raises(self) -> None:
        channel = ItemChannel()
        channel.cancel()
        assert channel.cancelled
        with pytest.raises(ScanCancelled):
            channel.send(_item(0))
