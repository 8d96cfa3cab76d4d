"""Command-line interface for FlightPath.

Drives the animation engine against a simulated viewport so a journey
configuration can be inspected without a rendering surface.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flightpath.core.config.loader import configure_logging, load_app_config
from flightpath.core.config.models import AppConfig, TrackerConfig
from flightpath.core.curves.sampler import CurveSampler
from flightpath.core.errors import FlightPathError
from flightpath.core.scroll.models import AnimationState
from flightpath.core.scroll.simulated import ManualFrameScheduler, SimulatedViewport
from flightpath.core.session import FlightPathSession
from flightpath.core.utils.json import dumps

console = Console()
logger = logging.getLogger(__name__)


def _load_session(args: argparse.Namespace) -> FlightPathSession | None:
    """Load config, apply CLI overrides and build the curve.

    Returns:
        Session, or None after reporting the error.
    """
    config_path = Path(args.config).resolve() if args.config else None
    if config_path is not None and not config_path.exists():
        console.print(f"[red]ERROR: Config file not found: {escape(str(config_path))}[/red]")
        return None

    try:
        app_config = load_app_config(config_path)
        if getattr(args, "speed_multiplier", None) is not None:
            app_config = app_config.model_copy(
                update={"tracker": TrackerConfig(speed_multiplier=args.speed_multiplier)}
            )
        # stdout carries command output
        configure_logging(app_config, stream=sys.stderr)
        session = FlightPathSession(app_config=app_config)
        _ = session.curve
    except (ValidationError, FlightPathError, ValueError, KeyError) as e:
        console.print(f"[red]ERROR: Could not load journey: {escape(str(e))}[/red]")
        return None

    return session


def _state_record(session: FlightPathSession, scroll_y: float, state: AnimationState) -> dict:
    return {
        "scroll_y": scroll_y,
        "progress": state.progress,
        "x": state.point.x,
        "y": state.point.y,
        "angle": state.angle,
        "revealed": [label for label in session.curve.labels if label in state.reveal_set],
        "render": session.render(state).model_dump(),
    }


def run_simulate(args: argparse.Namespace) -> int:
    """Sweep the tracked container through the viewport and report each state."""
    session = _load_session(args)
    if session is None:
        return 1

    viewport = SimulatedViewport(
        viewport_height=args.viewport_height,
        container_top=args.container_top,
        container_height=args.container_height,
    )
    frames = ManualFrameScheduler() if session.app_config.engine.coalesce_frames else None
    engine = session.build_engine(viewport, viewport, frame_scheduler=frames)

    try:
        positions = viewport.sweep_positions(args.steps)
    except ValueError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1

    records: list[dict] = []
    engine.mount()
    try:
        for scroll_y in positions:
            viewport.scroll_to(scroll_y)
            if frames is not None:
                frames.run_frame()
            records.append(_state_record(session, scroll_y, engine.state))
    finally:
        engine.unmount()

    if args.json:
        for record in records:
            sys.stdout.write(dumps(record) + "\n")
        return 0

    table = Table(title="Journey simulation")
    table.add_column("scroll_y", justify="right")
    table.add_column("progress", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("angle", justify="right")
    table.add_column("revealed")
    for record in records:
        table.add_row(
            f"{record['scroll_y']:.1f}",
            f"{record['progress']:.3f}",
            f"{record['x']:.1f}",
            f"{record['y']:.1f}",
            f"{record['angle']:.1f}",
            ", ".join(record["revealed"]) or "-",
        )
    console.print(table)
    return 0


def run_describe(args: argparse.Namespace) -> int:
    """Print curve geometry and label placement."""
    session = _load_session(args)
    if session is None:
        return 1

    curve = session.curve
    sampler = CurveSampler(session.app_config.sampler.lookahead)
    try:
        anchors = sampler.label_anchors(curve)
        static_anchors = sampler.static_anchors(curve)
    except FlightPathError as e:
        console.print(f"[red]ERROR: Could not place labels: {escape(str(e))}[/red]")
        return 1

    if args.json:
        sys.stdout.write(
            dumps(
                {
                    "path": curve.to_path_data(),
                    "length": curve.length,
                    "segment_lengths": curve.table.segment_lengths,
                    "thresholds": [t.model_dump() for t in curve.thresholds],
                    "anchors": [a.model_dump() for a in anchors],
                    "static_labels": [s.model_dump() for s in curve.static_labels],
                    "static_anchors": [a.model_dump() for a in static_anchors],
                }
            )
            + "\n"
        )
        return 0

    console.print(f"[bold]Path:[/bold] {escape(curve.to_path_data())}")
    console.print(f"[bold]Segments:[/bold] {len(curve.segments)}")
    console.print(f"[bold]Length:[/bold] {curve.length:.2f}")

    if not anchors and not static_anchors:
        console.print("No labels configured.")
        return 0

    table = Table(title="Labels")
    table.add_column("label")
    table.add_column("offset", justify="right")
    table.add_column("reveal at", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("angle", justify="right")
    for threshold, anchor in zip(curve.thresholds, anchors, strict=True):
        table.add_row(
            escape(anchor.label),
            f"{threshold.offset_percent:.2f}",
            f"{threshold.reveal_progress:.2f}",
            f"{anchor.x:.1f}",
            f"{anchor.y:.1f}",
            f"{anchor.angle_degrees:.1f}" + (" (flipped)" if anchor.flipped else ""),
        )
    for static, anchor in zip(curve.static_labels, static_anchors, strict=True):
        table.add_row(
            escape(anchor.label),
            f"{static.offset_percent:.2f}",
            "always",
            f"{anchor.x:.1f}",
            f"{anchor.y:.1f}",
            f"{anchor.angle_degrees:.1f}" + (" (flipped)" if anchor.flipped else ""),
        )
    console.print(table)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="flightpath",
        description="FlightPath - scroll-synchronized path animation engine",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--config",
            default=None,
            help=f"Path to app config YAML/JSON (default: {AppConfig.default_path()} if present)",
        )
        parser.add_argument("--json", action="store_true", help="Emit JSON lines")

    simulate = sub.add_parser("simulate", help="Scroll a simulated viewport through the journey")
    add_common(simulate)
    simulate.add_argument("--steps", type=int, default=11, help="Scroll positions (default: 11)")
    simulate.add_argument(
        "--speed-multiplier",
        type=float,
        default=None,
        help="Override tracker.speed_multiplier",
    )
    simulate.add_argument("--viewport-height", type=float, default=900.0)
    simulate.add_argument("--container-top", type=float, default=1200.0)
    simulate.add_argument("--container-height", type=float, default=1400.0)

    describe = sub.add_parser("describe", help="Show curve geometry and label anchors")
    add_common(describe)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "simulate":
        return run_simulate(args)
    if args.cmd == "describe":
        return run_describe(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
