"""Configuration management using Pydantic and YAML."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import FRAME_SIZE, HOP_LENGTH, MAX_FRAMES


class AnalysisConfig(BaseModel):
    """Feature extraction configuration."""

    frame_size: int = Field(ge=2, default=FRAME_SIZE)
    hop: int = Field(ge=1, default=HOP_LENGTH)
    max_frames: int = Field(ge=1, default=MAX_FRAMES)
    spectrum_method: Literal["fft", "dft"] = "fft"

    @field_validator("frame_size")
    @classmethod
    def _power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError(f"frame_size must be a power of two, got {value}")
        return value

    @model_validator(mode="after")
    def _hop_within_frame(self) -> "AnalysisConfig":
        if self.hop > self.frame_size:
            raise ValueError(f"hop ({self.hop}) must not exceed frame_size ({self.frame_size})")
        return self


class ModelConfig(BaseModel):
    """External model configuration."""

    handle: str | None = None  # Path/URL understood by the model provider


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: str | None = None


class GenrescopeConfig(BaseModel):
    """Main configuration."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def default_config_paths() -> list[Path]:
    """Locations searched when no config path is given."""
    return [
        Path.cwd() / "config" / "genrescope.yaml",
        Path.home() / ".config" / "genrescope" / "config.yaml",
        Path.home() / ".genrescope" / "config.yaml",
    ]


def load_config(config_path: Path | str | None = None) -> GenrescopeConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, the default locations are
            searched and built-in defaults are used when none exists.

    Returns:
        GenrescopeConfig instance

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist
        ValueError: If config file is invalid
    """
    if config_path is None:
        for path in default_config_paths():
            if path.exists():
                config_path = path
                break
        else:
            return GenrescopeConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return GenrescopeConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return GenrescopeConfig(**data)
