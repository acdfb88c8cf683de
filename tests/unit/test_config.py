"""Unit tests for settings, dataset registry and project root discovery."""

from dataclasses import replace
from pathlib import Path

import pytest

from dailymirror.config import (
    DATASETS,
    DEFAULT_PAGE_SIZE,
    MirrorSettings,
    find_project_root,
    get_dataset,
)
from dailymirror.core.exceptions import ConfigurationError, DatasetNotFoundError
from dailymirror.core.scheduler import DEFAULT_CONCURRENCY


@pytest.mark.core
@pytest.mark.tier(0)
class TestMirrorSettings:
    """Tests for MirrorSettings."""

    def test_defaults(self) -> None:
        settings = MirrorSettings()

        assert settings.page_size == DEFAULT_PAGE_SIZE
        assert settings.concurrency == DEFAULT_CONCURRENCY
        assert settings.data_dir == Path("data")

    @pytest.mark.parametrize(
        "overrides",
        [{"page_size": 0}, {"concurrency": 0}, {"timeout": 0}],
    )
    def test_invalid_values_raise(self, overrides: dict) -> None:
        with pytest.raises(ConfigurationError):
            replace(MirrorSettings(), **overrides)

    def test_state_path_per_dataset(self, tmp_path: Path) -> None:
        settings = MirrorSettings(state_dir=tmp_path)
        assert settings.state_path("trades") == tmp_path / "trades.json"

    def test_relative_paths_resolve_against_root(self, tmp_path: Path) -> None:
        resolved = MirrorSettings().with_resolved_paths(tmp_path)

        assert resolved.data_dir == tmp_path / "data"
        assert resolved.state_dir == tmp_path

    def test_absolute_paths_are_kept(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere"
        resolved = MirrorSettings(data_dir=absolute).with_resolved_paths(Path("/root"))

        assert resolved.data_dir == absolute


@pytest.mark.core
@pytest.mark.tier(0)
class TestDatasetRegistry:
    """Tests for built-in datasets."""

    def test_known_datasets(self) -> None:
        assert set(DATASETS) == {"swaprate", "aggtrades", "trades"}

    def test_get_dataset(self) -> None:
        assert get_dataset("swaprate").name == "swaprate"

    def test_unknown_dataset_lists_alternatives(self) -> None:
        with pytest.raises(DatasetNotFoundError) as exc_info:
            get_dataset("candles")

        assert exc_info.value.available == ["aggtrades", "swaprate", "trades"]
        assert "swaprate" in exc_info.value.recovery_hint


@pytest.mark.core
@pytest.mark.tier(0)
class TestFindProjectRoot:
    """Tests for find_project_root()."""

    def test_finds_marker_in_ancestor(self, tmp_path: Path) -> None:
        (tmp_path / ".dailymirror").mkdir()
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_project_root(nested) == tmp_path.resolve()

    def test_prefers_nearest_marker(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / "pyproject.toml").write_text("")

        assert find_project_root(inner) == inner.resolve()
