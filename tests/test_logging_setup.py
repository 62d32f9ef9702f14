import json
import sys
from pathlib import Path

# Ensure the project root is on the path for imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

from taskdb.logging_setup import setup_logging


def _last_payload(log, capfd):
    log.handlers[0].flush()
    captured = capfd.readouterr()
    line = captured.out.strip().splitlines()[-1]
    return json.loads(line)


def test_extra_fields_are_logged(capfd):
    log = setup_logging()
    log.info("hello", extra={"stage": "bootstrap.indexes", "indexes": ["a_1"]})
    payload = _last_payload(log, capfd)
    assert payload["msg"] == "hello"
    assert payload["stage"] == "bootstrap.indexes"
    assert payload["indexes"] == ["a_1"]
    assert payload["lvl"] == "INFO"
    assert payload["logger"] == "taskdb"


def test_exc_info_is_included(capfd):
    log = setup_logging()
    try:
        raise ValueError("boom")
    except ValueError:
        log.error("oops", exc_info=True)

    payload = _last_payload(log, capfd)
    assert payload["msg"] == "oops"
    assert "ValueError: boom" in payload["exc_info"]


def test_child_loggers_use_json_handler(capfd):
    import logging

    log = setup_logging()
    logging.getLogger("taskdb.mongo_client").warning("child", extra={"collection": "tasks"})
    payload = _last_payload(log, capfd)
    assert payload["logger"] == "taskdb.mongo_client"
    assert payload["collection"] == "tasks"
    assert payload["ts"].endswith("+00:00")


def test_stream_can_be_redirected(capfd):
    log = setup_logging(stream=sys.stderr)
    log.info("to stderr", extra={"stage": "verify"})
    log.handlers[0].flush()
    captured = capfd.readouterr()
    assert captured.out == ""
    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert payload["msg"] == "to stderr"
