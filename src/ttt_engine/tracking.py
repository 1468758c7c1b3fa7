"""
Run tracking helpers (optional MLflow backend).

MLflow is imported only when tracking is requested so it stays an optional
extra. A missing or failing backend never interrupts a run: setup and logging
errors are reported as warnings and the run continues untracked.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off or unavailable."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore
    except ImportError:
        logging.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    try:
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("mlflow run could not start (%s); continuing without tracking", e)
        yield False
        return
    with run:
        yield True


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_params(params)
    except ImportError:
        logging.debug("mlflow unavailable; params not logged")
    except Exception as e:
        logging.warning("mlflow params not logged: %s", e)


def log_metrics(metrics: Dict[str, float]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_metrics(metrics)
    except ImportError:
        logging.debug("mlflow unavailable; metrics not logged")
    except Exception as e:
        logging.warning("mlflow metrics not logged: %s", e)
