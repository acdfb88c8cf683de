"""Unit tests for domain exception hierarchy."""

from pathlib import Path

import pytest

from dailymirror.core.exceptions import (
    CatalogStateCorruptError,
    CatalogStateError,
    CatalogStateWriteError,
    ConfigurationError,
    DailyMirrorError,
    DatasetNotFoundError,
    ListingOrderError,
    ListingParseError,
    RemoteError,
    RemoteTransportError,
)


@pytest.mark.core
@pytest.mark.tier(0)
class TestHierarchy:
    """Every library error is catchable as DailyMirrorError."""

    @pytest.mark.parametrize(
        "cls",
        [
            DatasetNotFoundError,
            ConfigurationError,
            RemoteError,
            RemoteTransportError,
            ListingParseError,
            ListingOrderError,
            CatalogStateError,
            CatalogStateCorruptError,
            CatalogStateWriteError,
        ],
    )
    def test_inherits_base(self, cls: type) -> None:
        assert issubclass(cls, DailyMirrorError)

    def test_remote_errors_share_base(self) -> None:
        for cls in (RemoteTransportError, ListingParseError, ListingOrderError):
            assert issubclass(cls, RemoteError)

    def test_base_has_no_hint(self) -> None:
        assert DailyMirrorError("boom").recovery_hint is None


@pytest.mark.core
@pytest.mark.tier(0)
class TestErrorDetails:
    """Tests for stored context and recovery hints."""

    def test_dataset_not_found_without_alternatives(self) -> None:
        err = DatasetNotFoundError("candles")

        assert str(err) == "Dataset 'candles' not found"
        assert "dailymirror datasets" in err.recovery_hint

    def test_remote_error_keeps_url_and_cause(self) -> None:
        cause = OSError("reset")
        err = RemoteTransportError("failed", url="https://x", cause=cause)

        assert err.url == "https://x"
        assert err.cause is cause
        assert "re-run" in err.recovery_hint

    def test_listing_parse_hint_names_url(self) -> None:
        assert "https://x" in ListingParseError("bad", url="https://x").recovery_hint

    def test_listing_order_message(self) -> None:
        err = ListingOrderError("https://x", previous="20240102", current="20240103")

        assert "'20240103' follows '20240102'" in str(err)
        assert err.recovery_hint

    def test_corrupt_state_hint_names_file(self) -> None:
        err = CatalogStateCorruptError("bad", path=Path("/state/trades.json"))

        assert "trades.json" in err.recovery_hint
