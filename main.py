"""FastAPI application used to exercise the Stackdriver log formatter."""
from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from fastapi import FastAPI, Query

from stackdriver_logging import get_settings
from stackdriver_logging.logging_config import configure_logging
from stackdriver_logging.middleware import capture_http_request

configure_logging()
LOGGER = logging.getLogger(__name__)

settings = get_settings()

SUMMARIES = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)

app = FastAPI(title="Stackdriver Logging Debugger")
app.middleware("http")(capture_http_request)


@app.get("/weatherforecast")
def weather_forecast(days: int = Query(5, ge=1, le=14)) -> list[dict]:
    """Return random forecasts and log each one with structured properties."""

    today = date.today()
    forecasts = []
    for offset in range(1, days + 1):
        temperature_c = random.randint(-20, 55)
        forecast = {
            "date": (today + timedelta(days=offset)).isoformat(),
            "temperatureC": temperature_c,
            "temperatureF": 32 + int(temperature_c / 0.5556),
            "summary": random.choice(SUMMARIES),
        }
        LOGGER.debug("{summary} forecast for {date}", extra=forecast)
        forecasts.append(forecast)
    LOGGER.info("Generated {count} forecasts", extra={"count": len(forecasts)})
    return forecasts


@app.get("/oversized")
def oversized(characters: int = Query(60 * 1024, ge=1, le=1024 * 1024)) -> dict:
    """Write one entry big enough to trip the oversized entry notice."""

    LOGGER.warning("Oversized payload {payload}", extra={"payload": "*" * characters})
    return {
        "characters": characters,
        "limitBytes": settings.entry_limit_bytes,
    }


@app.get("/boom")
def boom() -> dict:
    """Fail so the unhandled exception path gets logged."""

    raise RuntimeError("Debugger endpoint failure")
