"""SVG path data codec.

Parses the subset of SVG path syntax needed to describe one continuous
spline (moveto, cubic curveto, lineto, horizontal/vertical lineto and
closepath, absolute and relative) into CubicSegments, and formats
segments back into an absolute ``d`` string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

from flightpath.core.curves.models import CubicSegment, Point
from flightpath.core.errors import PathDataError

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    r"[\s,]*(?:(?P<cmd>[A-Za-z])|(?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?))"
)
_TRAILING_RE = re.compile(r"[\s,]*")

# Number of arguments consumed per command repetition
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "Z": 0}


def tokenize(path_data: str) -> list[str | float]:
    """Split path data into command letters and floats.

    Raises:
        PathDataError: On characters that are neither commands, numbers
            nor separators.

    Example:
        >>> tokenize("M10,20 c1 2 3 4 5 6")
        ['M', 10.0, 20.0, 'c', 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    """
    tokens: list[str | float] = []
    pos = 0
    while pos < len(path_data):
        match = _TOKEN_RE.match(path_data, pos)
        if match is None:
            tail = _TRAILING_RE.match(path_data, pos)
            if tail is not None and tail.end() == len(path_data):
                break
            raise PathDataError(f"unexpected character {path_data[pos]!r}", position=len(tokens))
        if match.group("cmd") is not None:
            tokens.append(match.group("cmd"))
        else:
            tokens.append(float(match.group("num")))
        pos = match.end()
    return tokens


def _commands(tokens: list[str | float]) -> Iterator[tuple[str, list[float], int]]:
    """Yield (command, args, token index) per command repetition."""
    i = 0
    command: str | None = None
    while i < len(tokens):
        token = tokens[i]
        if isinstance(token, str):
            command = token
            i += 1
        elif command is None:
            raise PathDataError("number without a preceding command", position=i)

        upper = command.upper()
        if upper not in _ARITY:
            raise PathDataError(f"unsupported path command {command!r}", position=i - 1)

        arity = _ARITY[upper]
        args = tokens[i : i + arity]
        if len(args) < arity or any(isinstance(a, str) for a in args):
            raise PathDataError(f"command {command!r} expects {arity} numbers", position=i)
        yield command, [float(a) for a in args], i
        i += arity

        if upper == "Z":
            command = None
        elif upper == "M":
            # Extra coordinate pairs after a moveto are implicit linetos
            command = "l" if command == "m" else "L"


def parse_path_data(path_data: str) -> list[CubicSegment]:
    """Parse an SVG path ``d`` string into contiguous cubic segments.

    Lines (L/H/V/Z) become straight cubic segments so the whole path can be
    sampled uniformly.

    Args:
        path_data: SVG path data describing one continuous subpath.

    Returns:
        List of CubicSegments (at least one).

    Raises:
        PathDataError: If the data is malformed, uses an unsupported
            command, opens a second disjoint subpath, or draws nothing.

    Example:
        >>> segs = parse_path_data("M 150 50 C 450 50, 650 200, 650 400")
        >>> segs[0].end
        Point(x=650.0, y=400.0)
    """
    tokens = tokenize(path_data)
    if not tokens:
        raise PathDataError("path data is empty")

    segments: list[CubicSegment] = []
    current: Point | None = None
    subpath_start: Point | None = None

    for command, args, index in _commands(tokens):
        relative = command.islower()
        upper = command.upper()
        ox, oy = (current.x, current.y) if (relative and current is not None) else (0.0, 0.0)

        if upper == "M":
            target = Point(x=ox + args[0], y=oy + args[1])
            if segments and current is not None and not target.is_close(current):
                raise PathDataError("path data must describe a single continuous subpath", index)
            current = target
            subpath_start = target
            continue

        if current is None or subpath_start is None:
            raise PathDataError("path data must start with a moveto command", position=index)

        if upper == "C":
            seg = CubicSegment(
                start=current,
                control1=Point(x=ox + args[0], y=oy + args[1]),
                control2=Point(x=ox + args[2], y=oy + args[3]),
                end=Point(x=ox + args[4], y=oy + args[5]),
            )
        elif upper == "L":
            seg = CubicSegment.line(current, Point(x=ox + args[0], y=oy + args[1]))
        elif upper == "H":
            seg = CubicSegment.line(current, Point(x=ox + args[0], y=current.y))
        elif upper == "V":
            seg = CubicSegment.line(current, Point(x=current.x, y=oy + args[0]))
        else:  # Z
            if current.is_close(subpath_start):
                continue
            seg = CubicSegment.line(current, subpath_start)

        segments.append(seg)
        current = seg.end

    if not segments:
        raise PathDataError("path data contains no drawable segments")

    logger.debug("Parsed path data into %d segments", len(segments))
    return segments


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def format_path_data(segments: Sequence[CubicSegment]) -> str:
    """Format segments as an absolute ``M ... C ...`` path string.

    Example:
        >>> segs = parse_path_data("m 0 0 c 1 0, 2 0, 3 0")
        >>> format_path_data(segs)
        'M 0 0 C 1 0, 2 0, 3 0'
    """
    if not segments:
        raise ValueError("segments cannot be empty")

    first = segments[0].start
    parts = [f"M {_fmt(first.x)} {_fmt(first.y)}"]
    for seg in segments:
        parts.append(
            f"C {_fmt(seg.control1.x)} {_fmt(seg.control1.y)}, "
            f"{_fmt(seg.control2.x)} {_fmt(seg.control2.y)}, "
            f"{_fmt(seg.end.x)} {_fmt(seg.end.y)}"
        )
    return " ".join(parts)
