"""Command-line utilities for trip_carbon."""

from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import sys

from .config_loader import load_config
from .errors import NotFoundError, TripCarbonError
from .logging_pipeline import (
    configure_plain_logging,
    configure_structured_logging,
    shutdown_listener,
)
from .schemas import TripEstimateRecord
from .settings import get_settings
from .trip import TripCalculator

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trip-carbon",
        description="Estimate trip CO2 emissions and carbon-credit offsets.",
    )
    parser.add_argument("--config", "-c", help="Path to a JSON or YAML config file.")
    parser.add_argument(
        "--log-level",
        help="Logging level (default: TRIP_CARBON_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs as JSON lines on stderr."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    estimate = sub.add_parser("estimate", help="Estimate emissions for one trip.")
    estimate.add_argument("--origin", "-o", required=True)
    estimate.add_argument("--destination", "-d", required=True)
    estimate.add_argument("--mode", "-m", default="car", help="Transport mode.")
    estimate.add_argument(
        "--distance",
        type=float,
        help="Distance in km. If omitted, looked up in the route catalog.",
    )

    compare = sub.add_parser("compare", help="Rank every mode for a distance.")
    compare.add_argument("--distance", type=float, required=True)

    sub.add_parser("locations", help="List every location in the route catalog.")
    return parser


def _setup_logging(
    args: argparse.Namespace, default_level: str
) -> logging.handlers.QueueListener | None:
    level_name = (args.log_level or default_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise TripCarbonError(f"Unknown log level: {level_name}")
    logger = logging.getLogger("trip_carbon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    if args.json_logs:
        return configure_structured_logging(logger, level=level)
    configure_plain_logging(logger, level=level)
    return None


def _emit(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _run(args: argparse.Namespace, calculator: TripCalculator, currency: str) -> int:
    if args.command == "locations":
        _emit(calculator.resolver.list_all_locations())
        return EXIT_OK

    if args.command == "compare":
        comparison = calculator.engine.calculate_all_modes(args.distance)
        _emit([entry.to_dict() for entry in comparison])
        return EXIT_OK

    try:
        estimate = calculator.calculate(
            args.origin, args.destination, args.mode, args.distance
        )
    except NotFoundError as exc:
        print(f"{exc}. Pass --distance to enter it manually.", file=sys.stderr)
        return EXIT_ERROR
    record = TripEstimateRecord.from_estimate(estimate, currency=currency)
    _emit(record.model_dump_json_ready())
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the trip-carbon command line."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else EXIT_USAGE
        return EXIT_OK if exit_code == 0 else EXIT_USAGE

    listener = None
    try:
        settings = get_settings()
        listener = _setup_logging(args, settings.log_level)
        config = load_config(args.config, settings=settings)
        calculator = TripCalculator.from_config(config)
        return _run(args, calculator, config.credits.currency)
    except TripCarbonError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_ERROR
    finally:
        shutdown_listener(listener)


if __name__ == "__main__":
    raise SystemExit(main())
