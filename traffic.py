"""Background traffic generator that calls the debugger app on a timer."""
from __future__ import annotations

import logging
import threading

import requests

from stackdriver_logging import Settings, get_settings
from stackdriver_logging.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)

USER_AGENT = "Ditto"


class TrafficGenerator:
    """Calls ``target_url`` every ``interval_seconds`` to produce request logs."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        self.execution_count = 0

    def tick(self) -> None:
        """Make one request; failures are logged and swallowed."""

        self.execution_count += 1
        LOGGER.info(
            "TrafficGenerator is working. Count: {executionCount}",
            extra={"executionCount": self.execution_count},
        )
        try:
            response = self._session.get(self._settings.traffic_target_url, timeout=10)
            response.raise_for_status()
        except requests.RequestException:
            LOGGER.exception(
                "Request to {url} failed", extra={"url": self._settings.traffic_target_url}
            )

    def _run(self) -> None:
        while not self._stopped.is_set():
            self.tick()
            self._stopped.wait(self._settings.traffic_interval_seconds)

    def start(self) -> None:
        if self._thread is not None:
            return
        LOGGER.info("TrafficGenerator running.")
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="traffic-generator", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        LOGGER.info("TrafficGenerator is stopping.")
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None


if __name__ == "__main__":
    configure_logging()
    generator = TrafficGenerator(get_settings())
    generator.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        generator.stop()
