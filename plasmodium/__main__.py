"""Entry point for ``python -m plasmodium``.

Loads the default YAML config, builds a simulation engine and either
opens a Pygame window to watch the colony grow or, with
``--headless``, runs until the colony stalls and logs the outcome.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from plasmodium.simulation.config import SimulationConfig
from plasmodium.simulation.engine import SimulationEngine
from plasmodium.utils import setup_logging

logger = logging.getLogger("plasmodium")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="plasmodium",
        description="Plasmodium - Metropolis slime mold simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=8,
        help="Pixel size per grid cell (default: 8)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=6.0,
        help="Simulation steps per second (default: 6)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window until the colony stalls",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=10_000,
        help="Step limit for headless runs (default: 10000)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default=None,
        help="Override the config's log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, create engine, run headless or launch renderer."""
    args = build_parser().parse_args(argv)

    try:
        config = SimulationConfig.from_yaml(args.config)
    except (OSError, ValueError) as exc:
        setup_logging("ERROR")
        logger.error("Could not load config %s: %s", args.config, exc)
        return 1

    try:
        setup_logging(args.log_level or config.log_level)
    except ValueError as exc:
        setup_logging("ERROR")
        logger.error("Bad log_level in %s: %s", args.config, exc)
        return 1

    engine = SimulationEngine(config=config)

    if args.headless:
        ticks = engine.run(args.max_ticks)
        stats = engine.stats()
        logger.info(
            "Finished after %d steps: volume=%d, connected food=%d, "
            "active cells=%d, stalled=%s",
            ticks,
            stats.volume,
            stats.connected_food_sources,
            stats.active_cells,
            engine.is_stalled,
        )
        return 0

    from plasmodium.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size,
        ticks_per_second=args.speed,
    )
    renderer.run(fps=args.fps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
