"""Tests for configuration and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from genrescope import config as config_module
from genrescope.config import (
    AnalysisConfig,
    GenrescopeConfig,
    LoggingConfig,
    ModelConfig,
    load_config,
)
from genrescope.logger import setup_logging


class TestAnalysisConfig:
    """Test AnalysisConfig validation."""

    def test_default_values(self) -> None:
        config = AnalysisConfig()
        assert config.frame_size == 2048
        assert config.hop == 1024
        assert config.max_frames == 61
        assert config.spectrum_method == "fft"

    def test_frame_size_power_of_two(self) -> None:
        with pytest.raises(ValueError):
            AnalysisConfig(frame_size=1000)

    def test_hop_not_larger_than_frame(self) -> None:
        with pytest.raises(ValueError):
            AnalysisConfig(frame_size=256, hop=512)

    def test_max_frames_positive(self) -> None:
        with pytest.raises(ValueError):
            AnalysisConfig(max_frames=0)

    def test_unknown_spectrum_method(self) -> None:
        with pytest.raises(ValueError):
            AnalysisConfig(spectrum_method="wavelet")


class TestLoggingConfig:
    def test_default_values(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file is None

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            LoggingConfig(level="CHATTY")


class TestLoadConfig:
    """Test load_config()."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "analysis:\n"
            "  frame_size: 1024\n"
            "  hop: 512\n"
            "  spectrum_method: dft\n"
            "model:\n"
            "  handle: /models/genre.pkl\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = load_config(path)

        assert config.analysis.frame_size == 1024
        assert config.analysis.hop == 512
        assert config.analysis.max_frames == 61
        assert config.analysis.spectrum_method == "dft"
        assert config.model.handle == "/models/genre.pkl"
        assert config.logging.level == "DEBUG"

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == GenrescopeConfig()

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("analysis:\n  hop: 0\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_search_paths(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        found = tmp_path / "second.yaml"
        found.write_text("model:\n  handle: found.pkl\n")
        monkeypatch.setattr(
            config_module, "default_config_paths", lambda: [tmp_path / "first.yaml", found]
        )

        assert load_config().model == ModelConfig(handle="found.pkl")

    def test_defaults_when_nothing_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config_module, "default_config_paths", lambda: [tmp_path / "none.yaml"])
        assert load_config() == GenrescopeConfig()

    def test_example_config_is_valid(self) -> None:
        example = Path(__file__).parents[2] / "config" / "genrescope.example.yaml"
        assert load_config(example) == GenrescopeConfig()


class TestSetupLogging:
    """Test setup_logging()."""

    def test_level_and_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "genrescope.log"
        root = logging.getLogger()
        previous = (root.level, list(root.handlers))

        try:
            setup_logging(LoggingConfig(level="DEBUG", file=str(log_file)))
            logging.getLogger("genrescope.test").debug("hello")

            assert root.level == logging.DEBUG
            for handler in root.handlers:
                handler.flush()
            assert "hello" in log_file.read_text()
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            root.setLevel(previous[0])
            for handler in previous[1]:
                root.addHandler(handler)

    def test_applied_from_package_config(self, tmp_path: Path) -> None:
        """The package exports the loader and logging setup together."""
        import genrescope

        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: WARNING\n")
        root = logging.getLogger()
        previous = (root.level, list(root.handlers))

        try:
            config = genrescope.load_config(path)
            genrescope.setup_logging(config.logging)
            assert root.level == logging.WARNING
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            root.setLevel(previous[0])
            for handler in previous[1]:
                root.addHandler(handler)
