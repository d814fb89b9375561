import json
import os
from datetime import datetime, timezone

from api.config import EVENT_LOG_PATH


def _log_event(event_type: str, payload: dict) -> None:
    try:
        dir_path = os.path.dirname(EVENT_LOG_PATH)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        record = {
            "event_type": event_type,
            "ts": datetime.now(timezone.utc).isoformat(),
            **dict(payload or {}),
        }
        with open(EVENT_LOG_PATH, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=True) + "\n")
    except OSError:
        pass


def log_api_event(event_type: str, payload: dict) -> None:
    _log_event(event_type, payload)


def log_upstream_event(event_type: str, payload: dict) -> None:
    _log_event(event_type, payload)


def reset_event_log(reason: str) -> None:
    try:
        dir_path = os.path.dirname(EVENT_LOG_PATH)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        with open(EVENT_LOG_PATH, "w", encoding="utf-8"):
            pass
    except OSError:
        return
    _log_event("event_log_reset", {"reason": reason})
