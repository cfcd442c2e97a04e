from __future__ import annotations

import threading
from unittest import mock

import requests

from stackdriver_logging import Settings
from traffic import TrafficGenerator


def make_session() -> mock.Mock:
    session = mock.Mock()
    session.headers = {}
    return session


def test_tick_calls_target_with_user_agent():
    session = make_session()
    settings = Settings(traffic_target_url="http://debugger/weatherforecast")
    generator = TrafficGenerator(settings, session=session)

    generator.tick()

    session.get.assert_called_once_with("http://debugger/weatherforecast", timeout=10)
    assert session.headers["User-Agent"] == "Ditto"
    assert generator.execution_count == 1


def test_tick_logs_request_failures(caplog):
    session = make_session()
    session.get.side_effect = requests.ConnectionError("connection refused")
    generator = TrafficGenerator(Settings(), session=session)

    generator.tick()

    failures = [r for r in caplog.records if r.msg == "Request to {url} failed"]
    assert len(failures) == 1
    assert failures[0].exc_info is not None


def test_start_and_stop_run_in_background():
    session = make_session()
    called = threading.Event()
    session.get.side_effect = lambda *args, **kwargs: called.set() or mock.Mock()
    generator = TrafficGenerator(Settings(traffic_interval_seconds=0.01), session=session)

    generator.start()
    try:
        assert called.wait(2)
    finally:
        generator.stop(timeout=2)

    assert generator.execution_count >= 1
