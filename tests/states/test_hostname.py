"""Tests for the hostname label and domain name recognizers."""

from __future__ import annotations

import pytest

from scanr import Item, ItemType, scan
from scanr.states import Transition, domain_name, hostname

scan_one_label = hostname(Transition.terminal())
scan_one_name = domain_name(Transition.terminal())


class TestHostnameLabel:
    def test_label_with_dot(self) -> None:
        assert scan("www.", start=scan_one_label) == [Item(ItemType.HOSTNAME, 0, "www.")]

    def test_hyphen_inside(self) -> None:
        assert scan("my-host.", start=scan_one_label)[0].type is ItemType.HOSTNAME

    @pytest.mark.parametrize(
        "source",
        ["-bad.", "bad-.", "bad", "x-"],
    )
    def test_invalid_label(self, source: str) -> None:
        assert scan(source, start=scan_one_label) == [Item(ItemType.ERROR, 0, source)]

    def test_error_is_not_followed_by_hostname(self) -> None:
        items = scan("bad-.", start=scan_one_label)
        assert [item.type for item in items] == [ItemType.ERROR]

    def test_rejects_non_hostname_start(self) -> None:
        assert scan("%20", start=scan_one_label) == []

    def test_labels_chained_through_home(self) -> None:
        label = hostname(Transition(on_error=None, on_reject=None))
        items = scan("www.example.com.", start=label)
        assert [item.value for item in items] == ["www.", "example.", "com."]

    def test_suppressed_emission(self) -> None:
        quiet = hostname(Transition.terminal(emit=False))
        assert scan("www.", start=quiet) == []

    def test_item_type_override(self) -> None:
        relabel = hostname(Transition.terminal(item_type=ItemType.SPACE))
        assert scan("www.", start=relabel)[0].type is ItemType.SPACE


class TestDomainName:
    @pytest.mark.parametrize(
        "source",
        [
            "localhost",
            "www.example.com",
            "www.example.com.",
            "f49j0afj49jf40.com",
            "this.is.a.long.subdomain.path.but.should.still.work.com",
            "TECHNICALLY.THIS.WOULD.WORK.TOO.I.GUESS.com",
            "xn--bcher-kva.example",
        ],
    )
    def test_accepted(self, source: str) -> None:
        assert scan(source, start=scan_one_name) == [Item(ItemType.HOSTNAME, 0, source)]

    @pytest.mark.parametrize(
        "source",
        [
            "-invalid-but-valid.com",
            "bad-.com",
            "www..com",
            "www.-x.com",
            "a" * 64 + ".com",
        ],
    )
    def test_invalid(self, source: str) -> None:
        assert scan(source, start=scan_one_name) == [Item(ItemType.ERROR, 0, source)]

    def test_label_length_limit(self) -> None:
        source = "a" * 63 + ".com"
        assert scan(source, start=scan_one_name)[0].type is ItemType.HOSTNAME

    def test_name_length_limit(self) -> None:
        label = "a" * 63
        ok = ".".join([label] * 3 + ["b" * 61])  # 253 bytes
        too_long = ok + "b"
        assert scan(ok, start=scan_one_name)[0].type is ItemType.HOSTNAME
        assert scan(ok + ".", start=scan_one_name)[0].type is ItemType.HOSTNAME
        assert scan(too_long, start=scan_one_name)[0].type is ItemType.ERROR

    def test_stops_at_underscore(self) -> None:
        items = scan("_ha24jfgik_.com")
        assert items[0] == Item(ItemType.ERROR, 0, "_")
