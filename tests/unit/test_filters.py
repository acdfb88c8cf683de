"""Unit tests for file name filters."""

import pytest

from dailymirror.core.filters import accept_all, build_name_filter


@pytest.mark.core
@pytest.mark.tier(0)
class TestBuildNameFilter:
    """Tests for include/exclude predicates."""

    def test_no_lists_accepts_everything(self) -> None:
        assert build_name_filter() is accept_all
        assert build_name_filter([], []) is accept_all

    def test_include_requires_any_match(self) -> None:
        keep = build_name_filter(include=["BTC", "ETH"])

        assert keep("BTC-USDT.zip")
        assert keep("ETH-USDT.zip")
        assert not keep("SOL-USDT.zip")

    def test_exclude_wins_over_include(self) -> None:
        keep = build_name_filter(include=["BTC"], exclude=["SWAP"])

        assert keep("BTC-USDT.zip")
        assert not keep("BTC-USDT-SWAP.zip")

    def test_exclude_only(self) -> None:
        keep = build_name_filter(exclude=["-SWAP"])

        assert keep("BTC-USDT.zip")
        assert not keep("BTC-USDT-SWAP.zip")
