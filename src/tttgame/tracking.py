"""
Experiment tracking for arena runs (optional MLflow backend).

MLflow is only imported when tracking is requested so the game itself does
not depend on it. Tracking problems are logged and never interrupt a run.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off."""
    if not enabled:
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


def log_arena(params: Dict[str, object], metrics: Dict[str, float], artifacts: tuple = ()) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_params(params)
        mlflow.log_metrics(metrics)
        for path in artifacts:
            mlflow.log_artifact(str(path))
    except Exception as e:
        logging.debug("Skipping MLflow logging: %s", e)
