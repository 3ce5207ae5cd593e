import json
import warnings

from freefall.core.exceptions import LowConfidenceWarning
from freefall.core.logging import add_run_log, configure_console, logger
from freefall.core.numerics import bisection_search


def test_configure_console_replaces_its_sink():
    first = configure_console()
    second = configure_console(verbose=True)
    assert first != second
    logger.remove(second)
    # Configuring again after the caller removed the sink is fine
    logger.remove(configure_console(level="warning"))


def test_low_confidence_search_is_logged():
    messages = []
    sink = logger.add(messages.append, level="DEBUG", format="{message}")
    logger.enable("freefall")
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", LowConfidenceWarning)
            bisection_search(2.0, 0.0, 2.0, 1e-12, 3, lambda x: x * x)
    finally:
        logger.remove(sink)
        logger.disable("freefall")
    assert any("without reaching tolerance" in m for m in messages)


def _low_confidence_search():
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", LowConfidenceWarning)
        bisection_search(2.0, 0.0, 2.0, 1e-12, 3, lambda x: x * x)


def test_run_log_keeps_only_freefall_records(tmp_path):
    path = tmp_path / "nested" / "run.log"
    sink = add_run_log(path)
    try:
        logger.info("from the test module")
        _low_confidence_search()
    finally:
        logger.remove(sink)
        logger.disable("freefall")
    text = path.read_text()
    assert "without reaching tolerance" in text
    assert "from the test module" not in text


def test_run_log_as_json(tmp_path):
    path = tmp_path / "run.jsonl"
    sink = add_run_log(path, json=True)
    try:
        _low_confidence_search()
    finally:
        logger.remove(sink)
        logger.disable("freefall")
    records = [json.loads(line)["record"] for line in path.read_text().splitlines()]
    assert all(r["name"].startswith("freefall") for r in records)
    assert any("without reaching tolerance" in r["message"] for r in records)
