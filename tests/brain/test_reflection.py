import threading
import time

from agentcore.brain.brain import Brain
from agentcore.brain.config import BrainConfig
from agentcore.brain.memory_store import VolatileMemoryStore
from agentcore.brain.reflection import ReflectionAnalyzer, ReflectionWorker, SelfReflectionAnalyzer
from agentcore.brain.security import PassThroughSecurity, SecurityPolicy
from agentcore.brain.telemetry import TelemetryClient


class BrokenAnalyzer:
    def __init__(self) -> None:
        self.calls = 0

    def analyze(self) -> None:
        self.calls += 1
        raise RuntimeError("analysis exploded")


class CaptureTelemetryClient(TelemetryClient):
    def __init__(self) -> None:
        self.spans: list[tuple[str, dict]] = []

    def emit_span(self, name: str, attributes: dict) -> None:
        self.spans.append((name, attributes))


def test_default_analyzer_records_runs():
    analyzer = SelfReflectionAnalyzer()
    assert isinstance(analyzer, ReflectionAnalyzer)
    assert analyzer.last_analysis is None

    with Brain(VolatileMemoryStore(), VolatileMemoryStore(), analyzer=analyzer) as brain:
        brain.log_event("inbound_message", "hi")
        brain.log_event("user_feedback", "great")
        assert brain.wait_for_reflections(timeout=5)

    assert analyzer.runs == 2
    assert analyzer.last_analysis is not None


def test_analyzer_failure_is_reported_not_raised():
    reports = []
    analyzer = BrokenAnalyzer()
    with Brain(VolatileMemoryStore(), VolatileMemoryStore(), analyzer=analyzer, report_sink=reports.append) as brain:
        brain.log_event("inbound_message", "hi")
        assert brain.wait_for_reflections(timeout=5)

    assert analyzer.calls == 1
    assert reports[0] == "[Brain] Reflection error: analysis exploded"
    assert "Self-reflection complete" in reports[1]


def test_failing_sink_does_not_stop_worker():
    def sink(message):
        raise ValueError("no listener")

    analyzer = SelfReflectionAnalyzer()
    with Brain(VolatileMemoryStore(), VolatileMemoryStore(), analyzer=analyzer, report_sink=sink) as brain:
        brain.log_event("inbound_message", "one")
        brain.log_event("inbound_message", "two")
        assert brain.wait_for_reflections(timeout=5)

    assert analyzer.runs == 2


def test_reflection_emits_span():
    telemetry = CaptureTelemetryClient()
    with Brain(VolatileMemoryStore(), VolatileMemoryStore(), telemetry=telemetry) as brain:
        brain.log_event("inbound_message", "hi")
        assert brain.wait_for_reflections(timeout=5)

    names = [name for name, _ in telemetry.spans]
    assert names == ["brain.reflect"]
    assert telemetry.spans[0][1]["analyzer_ok"] is True


def test_worker_coalesces_when_queue_full():
    started = threading.Event()
    gate = threading.Event()
    runs = []

    def run():
        runs.append(1)
        started.set()
        gate.wait(5)

    worker = ReflectionWorker(run, maxsize=1)
    try:
        assert worker.submit()
        assert started.wait(5)
        assert worker.submit()
        assert not worker.submit()
        assert worker.dropped == 1

        gate.set()
        assert worker.wait_idle(timeout=5)
        assert worker.completed == 2
        assert len(runs) == 2
    finally:
        gate.set()
        worker.close()

    assert worker.closed
    assert not worker.submit()


def test_brain_counts_coalesced_requests():
    gate = threading.Event()

    class SlowAnalyzer:
        def analyze(self) -> None:
            gate.wait(5)

    config = BrainConfig(reflection_frequency=1, reflection_queue_size=1)
    brain = Brain(VolatileMemoryStore(), VolatileMemoryStore(), config=config, analyzer=SlowAnalyzer())
    try:
        for i in range(10):
            brain.log_event("tick", i)
        assert brain.reflections_scheduled == 10
        assert brain.dropped_reflections >= 8
    finally:
        gate.set()
        assert brain.wait_for_reflections(timeout=5)
        brain.close()


def test_wait_idle_times_out_while_busy():
    gate = threading.Event()
    worker = ReflectionWorker(lambda: gate.wait(5), maxsize=2)
    try:
        worker.submit()
        assert not worker.wait_idle(timeout=0.05)
    finally:
        gate.set()
        worker.close()


def test_close_honors_timeout_with_full_queue():
    started = threading.Event()
    gate = threading.Event()

    def run():
        started.set()
        gate.wait(3)

    worker = ReflectionWorker(run, maxsize=1)
    try:
        assert worker.submit()
        assert started.wait(5)
        assert worker.submit()

        began = time.monotonic()
        worker.close(timeout=0.1)
        assert time.monotonic() - began < 1.0
        assert worker.closed
    finally:
        gate.set()

    # the running pass finishes; the queued one is discarded
    assert worker.wait_idle(timeout=5)
    assert worker.completed == 1


def test_pass_through_security():
    security = PassThroughSecurity()
    assert isinstance(security, SecurityPolicy)
    assert security.can_access("alice", "summary:20260101T000000")
    assert security.decrypt(security.encrypt(b"secret")) == b"secret"

    with Brain(VolatileMemoryStore(), VolatileMemoryStore()) as brain:
        assert isinstance(brain.security, PassThroughSecurity)
