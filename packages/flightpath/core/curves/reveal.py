"""Threshold reveal policy.

A label is visible exactly while progress is strictly greater than its
threshold's reveal_progress. The policy keeps no history: scrolling back
below a threshold hides the label again.
"""

from __future__ import annotations

from flightpath.core.curves.models import CurveModel, Threshold
from flightpath.core.errors import InvalidProgressError
from flightpath.core.utils.math import is_finite

RevealSet = frozenset[str]

EMPTY_REVEAL_SET: RevealSet = frozenset()


def is_revealed(threshold: Threshold, progress: float) -> bool:
    return progress > threshold.reveal_progress


class RevealPolicy:
    """Resolves which threshold labels are visible at a given progress.

    Example:
        >>> curve = CurveModel.from_path_data(
        ...     "M 0 0 L 10 0",
        ...     thresholds=[Threshold(offset_percent=0.5, label="mid", reveal_progress=0.4)],
        ... )
        >>> sorted(RevealPolicy().resolve(curve, 0.5))
        ['mid']
    """

    def resolve(self, curve: CurveModel, progress: float) -> RevealSet:
        """Return the set of visible labels.

        Raises:
            InvalidProgressError: If progress is not finite.
        """
        if not is_finite(progress):
            raise InvalidProgressError(progress)
        return frozenset(t.label for t in curve.thresholds if is_revealed(t, progress))

    def ordered(self, curve: CurveModel, progress: float) -> list[str]:
        """Visible labels in threshold order."""
        visible = self.resolve(curve, progress)
        return [label for label in curve.labels if label in visible]


def resolve_reveal_set(curve: CurveModel, progress: float) -> RevealSet:
    """Module-level shortcut for ``RevealPolicy().resolve``."""
    return RevealPolicy().resolve(curve, progress)
