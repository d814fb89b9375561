from pathlib import Path

import pytest

import api.events as events_mod

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _event_log_in_tmp(tmp_path, monkeypatch):
    log_path = tmp_path / "events.log"
    monkeypatch.setattr(events_mod, "EVENT_LOG_PATH", str(log_path))
    return log_path


@pytest.fixture
def john_3_html() -> str:
    return (FIXTURES / "jhn_3_kjv.html").read_text(encoding="utf-8")
