"""Command-line demo of the location toolkit: suggest, route, animate."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from locintel.config import settings
from locintel.exceptions import PolylineDecodeError
from locintel.logging_config import configure
from locintel.models import AnimationFrame, Coordinate
from locintel.services.animator import animate_along_route
from locintel.services.catalog import SAMPLE_LOCATIONS, PlaceSearch
from locintel.services.formatting import format_distance
from locintel.services.geometry import bounding_box, route_length_km
from locintel.services.polyline import normalize_geometry
from locintel.services.scheduler import AsyncioScheduler

LOG = logging.getLogger("locintel.cli")


def _load_route(encoded: str) -> Optional[List[Coordinate]]:
    try:
        return normalize_geometry(encoded)
    except PolylineDecodeError as exc:
        LOG.error("Route unavailable: %s", exc)
        return None


def _cmd_suggest(args: argparse.Namespace) -> int:
    search = PlaceSearch.from_records(SAMPLE_LOCATIONS, max_results=args.limit)
    suggestions = search.suggest(args.query)
    if not suggestions:
        LOG.info("No suggestions for %r", args.query)
    for record in suggestions:
        print(f"{record.name}\t{record.lat:.4f},{record.lng:.4f}\t{record.type.value}")
    return 0


def _cmd_route(args: argparse.Namespace) -> int:
    route = _load_route(args.encoded)
    if route is None:
        return 1

    bounds = bounding_box(route)
    print(f"Points: {len(route)}")
    if bounds is not None:
        print(f"Bounds: S {bounds.south:.5f} N {bounds.north:.5f} W {bounds.west:.5f} E {bounds.east:.5f}")
    print(f"Length: {format_distance(route_length_km(route))}")
    return 0


async def _play(route: Sequence[Coordinate], duration_ms: float) -> int:
    finished = asyncio.get_running_loop().create_future()

    def on_update(frame: AnimationFrame) -> None:
        LOG.info("%5.1f%%  %.5f,%.5f  bearing %5.1f",
                 frame.progress * 100, frame.lat, frame.lng, frame.bearing)
        if frame.progress >= 1 and not finished.done():
            finished.set_result(None)

    session = animate_along_route(route, on_update, duration_ms, AsyncioScheduler())
    if session.done:
        return session.frames_delivered
    try:
        await finished
    finally:
        session.cancel()
    return session.frames_delivered


def _cmd_animate(args: argparse.Namespace) -> int:
    route = _load_route(args.encoded)
    if route is None:
        return 1
    if not route:
        LOG.warning("Nothing to animate")
        return 0

    frames = asyncio.run(_play(route, args.duration))
    LOG.info("Delivered %d frames", frames)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="locintel", description="Location intelligence toolkit")
    parser.add_argument("--log-level", help="Override LOCINTEL_LOG_LEVEL")
    commands = parser.add_subparsers(dest="command", required=True)

    suggest = commands.add_parser("suggest", help="Autocomplete against the sample catalog")
    suggest.add_argument("query")
    suggest.add_argument("--limit", type=int, default=settings.AUTOCOMPLETE_MAX_RESULTS)
    suggest.set_defaults(handler=_cmd_suggest)

    route = commands.add_parser("route", help="Summarize an encoded polyline")
    route.add_argument("encoded")
    route.set_defaults(handler=_cmd_route)

    animate = commands.add_parser("animate", help="Play an encoded polyline in real time")
    animate.add_argument("encoded")
    animate.add_argument("--duration", type=float, default=settings.ANIMATION_DURATION_MS,
                         help="Playback duration in milliseconds")
    animate.set_defaults(handler=_cmd_animate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
