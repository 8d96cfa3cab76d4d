"""Configuration models for FlightPath."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flightpath.core.config.presets import get_preset, get_static_labels
from flightpath.core.curves.arclength import DEFAULT_TABLE_RESOLUTION
from flightpath.core.curves.models import CurveModel, StaticLabel, Threshold
from flightpath.core.curves.sampler import DEFAULT_LOOKAHEAD
from flightpath.core.scroll.render import DEFAULT_LABEL_OPACITY, DEFAULT_MARKER_SIZE
from flightpath.core.scroll.tracker import DEFAULT_SPEED_MULTIPLIER
from flightpath.core.utils.logging import DEFAULT_FORMAT


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = DEFAULT_FORMAT
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file (stdout when unset)")


class TrackerConfig(BaseModel):
    """Scroll -> progress mapping."""

    model_config = ConfigDict(extra="forbid")

    speed_multiplier: float = Field(
        default=DEFAULT_SPEED_MULTIPLIER,
        gt=0.0,
        allow_inf_nan=False,
        description="Scale applied to clamped raw progress (observed tunings 1.5-2.25)",
    )


class SamplerConfig(BaseModel):
    """Curve sampling."""

    model_config = ConfigDict(extra="forbid")

    lookahead: float = Field(
        default=DEFAULT_LOOKAHEAD,
        gt=0.0,
        allow_inf_nan=False,
        description="Tangent lookahead distance in curve units",
    )
    table_resolution: int = Field(
        default=DEFAULT_TABLE_RESOLUTION,
        ge=8,
        description="Flattening steps per segment for the arc-length table",
    )


class RenderConfig(BaseModel):
    """Render attribute defaults."""

    model_config = ConfigDict(extra="forbid")

    label_opacity: float = Field(default=DEFAULT_LABEL_OPACITY, ge=0.0, le=1.0)
    marker_size: int = Field(default=DEFAULT_MARKER_SIZE, gt=0)


class EngineConfig(BaseModel):
    """Event handling."""

    model_config = ConfigDict(extra="forbid")

    coalesce_frames: bool = Field(
        default=False,
        description="Recompute at most once per frame instead of on every event",
    )


class JourneyConfig(BaseModel):
    """The path and its labels.

    Either ``preset`` or ``path`` selects the geometry. An explicit ``path``
    wins and keeps only explicitly given ``thresholds`` and ``static_labels``;
    a preset supplies its own labels unless they are overridden.

    Example:
        >>> JourneyConfig().build_curve().labels[0]
        'First Solo'
    """

    model_config = ConfigDict(extra="forbid")

    preset: str | None = Field(default="pilots_story", description="Built-in journey name")
    path: str | None = Field(default=None, description="SVG path data")
    thresholds: list[Threshold] | None = None
    static_labels: list[StaticLabel] | None = None

    @model_validator(mode="after")
    def _validate_source(self) -> JourneyConfig:
        if self.path is None and self.preset is None:
            raise ValueError("journey requires either a preset or a path")
        if self.path is None and self.preset is not None:
            try:
                get_preset(self.preset)
            except KeyError as e:
                raise ValueError(str(e.args[0])) from e
        return self

    def resolved(self) -> tuple[str, list[Threshold]]:
        """Path data and thresholds after applying preset defaults."""
        if self.path is not None:
            return self.path, list(self.thresholds or [])
        if self.preset is None:
            raise ValueError("journey requires either a preset or a path")

        path, preset_thresholds = get_preset(self.preset)
        if self.thresholds is not None:
            return path, list(self.thresholds)
        return path, list(preset_thresholds)

    def resolved_static_labels(self) -> list[StaticLabel]:
        """Always-visible labels after applying preset defaults."""
        if self.static_labels is not None:
            return list(self.static_labels)
        if self.path is not None or self.preset is None:
            return []
        return list(get_static_labels(self.preset))

    def build_curve(self, table_resolution: int = DEFAULT_TABLE_RESOLUTION) -> CurveModel:
        path, thresholds = self.resolved()
        return CurveModel.from_path_data(
            path,
            thresholds,
            table_resolution=table_resolution,
            static_labels=self.resolved_static_labels(),
        )


class ConfigBase(BaseModel):
    """Base class for FlightPath configurations.

    Provides common functionality for loading from files with defaults.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, falling back to defaults if the file is absent.

        Raises:
            ValueError: If the file exists but cannot be parsed
            ValidationError: If config is invalid
        """
        from flightpath.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        if not Path(path).exists():
            return cls()
        return cls.model_validate(load_config(path))


class AppConfig(ConfigBase):
    """Application configuration for the journey animation."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    sampler: SamplerConfig = Field(default_factory=SamplerConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    journey: JourneyConfig = Field(default_factory=JourneyConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("flightpath.yaml")

    def build_curve(self) -> CurveModel:
        return self.journey.build_curve(table_resolution=self.sampler.table_resolution)
