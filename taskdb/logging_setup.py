from __future__ import annotations
import logging, json, sys
from .utils.time import ms_to_utc_iso

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": ms_to_utc_iso(int(record.created * 1000)),
            "lvl": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and key not in payload:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    root = logging.getLogger("taskdb")
    root.handlers.clear()
    root.setLevel(level)
    h = logging.StreamHandler(stream or sys.stdout)
    h.setFormatter(JsonFormatter())
    root.addHandler(h)
    return root
