"""
Experiment tracking helpers (optional MLflow backend).

MLflow is imported lazily, only when a run is requested, so it stays an
optional extra. Every helper is best-effort and never fails a reduction.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

TRACKING_BACKENDS = ("none", "mlflow")


@contextmanager
def tracking_run(backend: str, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True while an MLflow run is active, False when tracking is off or unavailable."""
    if backend != "mlflow":
        yield False
        return
    try:
        import mlflow  # type: ignore

        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir / "mlruns").resolve().as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("MLflow tracking unavailable (%s); continuing without it", e)
        yield False
        return
    with run:
        yield True


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_params(params)
    except Exception:
        logging.debug("log_params skipped", exc_info=True)


def log_metrics(metrics: Dict[str, float]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_metrics(metrics)
    except Exception:
        logging.debug("log_metrics skipped", exc_info=True)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_artifact(str(path), artifact_path=artifact_path)
    except Exception:
        logging.debug("log_artifact skipped", exc_info=True)
