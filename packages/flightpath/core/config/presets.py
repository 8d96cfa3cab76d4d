"""Built-in journey presets.

Each preset is a path in SVG user space plus its label thresholds and any
always-visible labels. Label offsets are fractions of the forward path
length.
"""

from __future__ import annotations

from flightpath.core.curves.models import StaticLabel, Threshold

PILOTS_STORY_PATH = (
    "M 150 50 C 450 50, 650 200, 650 400 "
    "C 650 600, 250 700, 150 800 "
    "C 50 900, 150 1100, 350 1200"
)

PILOTS_STORY_THRESHOLDS: tuple[Threshold, ...] = (
    Threshold(offset_percent=0.18, label="First Solo", reveal_progress=0.15),
    Threshold(offset_percent=0.26, label="Private Pilot License", reveal_progress=0.23),
    Threshold(offset_percent=0.78, label="Commercial License", reveal_progress=0.75),
    Threshold(offset_percent=0.84, label="IFR Rated", reveal_progress=0.82),
)

PILOTS_STORY_STATIC_LABELS: tuple[StaticLabel, ...] = (
    StaticLabel(offset_percent=0.08, label="Pathway to Mentor", opacity=0.8),
)

PRESETS: dict[str, tuple[str, tuple[Threshold, ...]]] = {
    "pilots_story": (PILOTS_STORY_PATH, PILOTS_STORY_THRESHOLDS),
}

STATIC_LABELS: dict[str, tuple[StaticLabel, ...]] = {
    "pilots_story": PILOTS_STORY_STATIC_LABELS,
}


def get_preset(name: str) -> tuple[str, tuple[Threshold, ...]]:
    """Return (path data, thresholds) for a named preset.

    Raises:
        KeyError: If the preset does not exist.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown journey preset {name!r}; available: {sorted(PRESETS)}") from None


def get_static_labels(name: str) -> tuple[StaticLabel, ...]:
    """Always-visible labels for a named preset (empty if it has none)."""
    get_preset(name)
    return STATIC_LABELS.get(name, ())
