import logging

import pytest

from agentcore.brain.telemetry import LoggingTelemetryClient, NoOpTelemetryClient, TelemetryClient


class CaptureTelemetryClient(TelemetryClient):
    def __init__(self) -> None:
        self.spans: list[tuple[str, dict]] = []

    def emit_span(self, name: str, attributes: dict) -> None:
        self.spans.append((name, attributes))


def test_span_records_attributes_and_duration():
    telemetry = CaptureTelemetryClient()
    with telemetry.span("brain.test", source="unit") as span:
        span.set_attribute("entries", 3)

    [(name, attrs)] = telemetry.spans
    assert name == "brain.test"
    assert attrs["source"] == "unit"
    assert attrs["entries"] == 3
    assert attrs["success"] is True
    assert attrs["duration_ms"] >= 0


def test_span_marks_failure_and_reraises():
    telemetry = CaptureTelemetryClient()
    with pytest.raises(KeyError):
        with telemetry.span("brain.test"):
            raise KeyError("missing")

    assert telemetry.spans[0][1]["success"] is False


def test_noop_client_emits_nothing():
    with NoOpTelemetryClient().span("brain.test") as span:
        span.set_attribute("ignored", True)


def test_logging_client_writes_finished_span(caplog):
    telemetry = LoggingTelemetryClient(level=logging.INFO)
    with caplog.at_level(logging.INFO, logger="agentcore.brain.telemetry"):
        with telemetry.span("brain.summarize", entries=2):
            pass

    assert "brain.summarize took" in caplog.text
    assert "'entries': 2" in caplog.text
