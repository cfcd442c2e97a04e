import io
from datetime import datetime, timedelta, timezone

from stackdriver_logging import CountingWriter, Level, severity_for
from stackdriver_logging.keys import HTTP_REQUEST_KEYS, is_reserved
from stackdriver_logging.utils import event_id_hash, fingerprint, format_round_trip


def test_fingerprint_known_values():
    assert fingerprint("") == "00000000"
    assert fingerprint("a") == "ca2e9442"
    assert event_id_hash("a") == 0xCA2E9442


def test_fingerprint_is_stable():
    assert fingerprint("{greeting}") == fingerprint("{greeting}")
    assert fingerprint("{greeting}") != fingerprint("{farewell}")


def test_fingerprint_handles_astral_characters():
    value = fingerprint("launch \U0001F680 {id}")

    assert len(value) == 8
    int(value, 16)


def test_round_trip_timestamp_is_utc():
    value = datetime(2024, 1, 1, 2, 30, tzinfo=timezone(timedelta(hours=2)))

    assert format_round_trip(value) == "2024-01-01T00:30:00.0000000Z"


def test_round_trip_timestamp_treats_naive_as_utc():
    assert format_round_trip(datetime(2024, 1, 1, 0, 0, 0, 5)) == "2024-01-01T00:00:00.0000050Z"


def test_round_trip_timestamp_pads_early_years():
    value = datetime(999, 1, 2, tzinfo=timezone.utc)

    assert format_round_trip(value) == "0999-01-02T00:00:00.0000000Z"


def test_severity_for_levels():
    assert severity_for(Level.TRACE) == "DEBUG"
    assert severity_for(Level.DEBUG) == "DEBUG"
    assert severity_for(Level.INFO) == "INFO"
    assert severity_for(Level.WARNING) == "WARNING"
    assert severity_for(Level.ERROR) == "ERROR"
    assert severity_for(Level.FATAL) == "CRITICAL"
    assert severity_for("VERBOSE") == "DEFAULT"
    assert severity_for(None) == "DEFAULT"


def test_level_from_logging():
    assert Level.from_logging(5) is Level.TRACE
    assert Level.from_logging(10) is Level.DEBUG
    assert Level.from_logging(25) is Level.INFO
    assert Level.from_logging(30) is Level.WARNING
    assert Level.from_logging(40) is Level.ERROR
    assert Level.from_logging(50) is Level.FATAL


def test_reserved_keys():
    assert HTTP_REQUEST_KEYS[:4] == ("remoteIp", "serverIp", "userAgent", "referer")
    assert is_reserved("remoteIp")
    assert is_reserved("status")
    assert not is_reserved("RemoteIp")
    assert not is_reserved("path")


def test_counting_writer_passes_writes_through():
    output = io.StringIO()
    writer = CountingWriter(output)

    writer.write("{")
    writer.writelines(["héllo", "}"])

    assert output.getvalue() == "{héllo}"
    assert writer.character_count == 7
    assert writer.count() == 7


def test_counting_writer_exposes_encoding():
    output = io.TextIOWrapper(io.BytesIO(), encoding="utf-16")

    assert CountingWriter(output).encoding == "utf-16"
