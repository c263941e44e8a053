import logging
import threading

from reqecho_api import metrics_log


class FakeEvent:
    def __init__(self) -> None:
        self.calls = 0

    def wait(self, _interval: int) -> bool:
        self.calls += 1
        return self.calls > 1

    def set(self) -> None:  # pragma: no cover - no behaviour needed
        self.calls = 2


class FakeThread:
    def __init__(self, target: callable, daemon: bool) -> None:  # noqa: D401
        self._target = target

    def start(self) -> None:
        self._target()


def test_metrics_emit_interval(monkeypatch, caplog):
    monkeypatch.setattr(metrics_log.threading, "Event", FakeEvent)
    monkeypatch.setattr(metrics_log.threading, "Thread", FakeThread)
    with caplog.at_level(logging.INFO):
        metrics_log.inc_echo_request("get.headers")
        metrics_log.inc_api_5xx()
        stop = metrics_log.start(interval=1)
    metrics = {rec.metric: rec.value for rec in caplog.records}
    assert metrics["echo_requests_total{route=get.headers}"] == 1
    assert metrics["api_5xx_total"] == 1
    stop()


def test_emit_skips_unchanged(caplog):
    metrics_log.inc("x_total")
    with caplog.at_level(logging.INFO):
        metrics_log.emit_metrics()
        metrics_log.emit_metrics()
    assert len([r for r in caplog.records if getattr(r, "metric", None)]) == 1


def test_disabled_interval_returns_noop():
    stop = metrics_log.start(interval=0)
    assert stop() is None


def test_label_ordering():
    metrics_log.inc("hits", labels={"b": "2", "a": "1"}, value=3)
    assert metrics_log.get_counters() == {"hits{a=1,b=2}": 3}


def test_emit_while_new_labels_are_added():
    errors: list[BaseException] = []
    done = threading.Event()

    def emitter() -> None:
        try:
            while not done.is_set():
                metrics_log.emit_metrics()
        except BaseException as exc:  # noqa: BLE001 - surfaced by the assert
            errors.append(exc)

    thread = threading.Thread(target=emitter, daemon=True)
    thread.start()
    try:
        for i in range(20_000):
            metrics_log.inc_echo_request(f"r{i}")
    finally:
        done.set()
        thread.join(timeout=10)
    assert errors == []
    assert len(metrics_log.get_counters()) == 20_000
