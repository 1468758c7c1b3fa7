import logging
import sys
import types

from ttt_engine.tracking import log_metrics, log_params, maybe_mlflow_run


def test_disabled_tracking_is_a_noop():
    with maybe_mlflow_run(False, run_name="unit") as active:
        assert active is False
        log_params({"games": 1})
        log_metrics({"draw_rate": 1.0})


class _BrokenBackend(types.SimpleNamespace):
    def start_run(self, run_name=None):
        raise RuntimeError("tracking server unreachable")

    def set_tracking_uri(self, uri):
        self.uri = uri

    def active_run(self):
        return object()

    def log_params(self, params):
        raise RuntimeError("tracking server unreachable")

    def log_metrics(self, metrics):
        raise RuntimeError("tracking server unreachable")


def test_failing_backend_does_not_interrupt_the_run(monkeypatch, tmp_path, caplog):
    monkeypatch.setitem(sys.modules, "mlflow", _BrokenBackend())
    caplog.set_level(logging.WARNING)
    with maybe_mlflow_run(True, run_name="unit", log_dir=tmp_path) as active:
        assert active is False
        log_params({"games": 1})
        log_metrics({"draw_rate": 1.0})
    assert "could not start" in caplog.text
    assert "params not logged" in caplog.text
    assert "metrics not logged" in caplog.text
