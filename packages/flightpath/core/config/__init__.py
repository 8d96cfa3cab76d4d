"""Configuration management for FlightPath."""

from flightpath.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from flightpath.core.config.models import (
    AppConfig,
    EngineConfig,
    JourneyConfig,
    LoggingConfig,
    RenderConfig,
    SamplerConfig,
    TrackerConfig,
)
from flightpath.core.config.presets import (
    PILOTS_STORY_PATH,
    PILOTS_STORY_STATIC_LABELS,
    PILOTS_STORY_THRESHOLDS,
    get_preset,
    get_static_labels,
)

__all__ = [
    # Loaders
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    # Models
    "AppConfig",
    "EngineConfig",
    "JourneyConfig",
    "LoggingConfig",
    "RenderConfig",
    "SamplerConfig",
    "TrackerConfig",
    # Presets
    "PILOTS_STORY_PATH",
    "PILOTS_STORY_STATIC_LABELS",
    "PILOTS_STORY_THRESHOLDS",
    "get_preset",
    "get_static_labels",
]
