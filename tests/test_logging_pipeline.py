"""Tests for the structured logging helpers."""

import json
import logging

from trip_carbon.logging_pipeline import (
    JsonFormatter,
    configure_structured_logging,
    shutdown_listener,
)


def test_json_formatter_includes_context():
    """Extra attributes land under ``context``."""
    record = logging.LogRecord(
        "trip_carbon.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
    )
    record.route = "A-B"
    payload = json.loads(JsonFormatter(run_id="run-1").format(record))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["run_id"] == "run-1"
    assert payload["context"] == {"route": "A-B"}


def test_configure_structured_logging_emits_json(capsys):
    """Records flow through the queue listener to stderr as JSON."""
    logger = logging.getLogger("trip_carbon.tests.pipeline")
    logger.propagate = False
    listener = configure_structured_logging(logger, run_id="run-2", level=logging.DEBUG)
    try:
        logger.info("computed %d modes", 4, extra={"distance_km": 100})
    finally:
        shutdown_listener(listener)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)

    lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
    payload = json.loads(lines[-1])
    assert payload["message"] == "computed 4 modes"
    assert payload["run_id"] == "run-2"
    assert payload["context"]["distance_km"] == 100


def test_shutdown_listener_accepts_none():
    """No listener means nothing to stop."""
    shutdown_listener(None)
