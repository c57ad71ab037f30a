"""Config-driven boundary update: build a patch, apply the kernel, report.

Used by main.py. The config layout is:

    problem:
      patch:  {_target_: meshing.create_patch, ...}
      params: {_target_: noh.NohParameters, ...}
      time: 0.1
    mlflow: {enabled, tracking_uri, project_prefix}
    output: {save_csv}
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import mlflow
import pandas as pd
from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

from .boundary import compute_external_noh_boundary
from .datastructures import BoundaryResult, NohParameters
from .sampling import boundary_dataframe

log = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    patch: object
    params: NohParameters
    result: BoundaryResult
    table: pd.DataFrame

    def summary(self) -> dict:
        """Scalar metrics for reporting and MLflow."""
        summary = dict(self.result.metrics.to_mlflow())
        if not self.table.empty:
            summary["min_density"] = float(self.table["density"].min())
            summary["max_density"] = float(self.table["density"].max())
            summary["max_radius"] = float(self.table["radius"].max())
        for name, count in self.table.groupby("region").size().items():
            summary[f"cells_{name}"] = int(count)
        return summary


def build_problem(cfg: DictConfig):
    """Instantiate (patch, params) from the `problem` node."""
    patch = instantiate(cfg.problem.patch, _convert_="all")
    params = instantiate(cfg.problem.params, _convert_="all")
    time = cfg.problem.get("time", None)
    if time is not None:
        patch.time = float(time)
    return patch, params


def run_boundary_update(cfg: DictConfig) -> RunOutcome:
    """Apply the analytic boundary once. Fatal errors are raised."""
    patch, params = build_problem(cfg)
    log.info(f"Patch: {patch!r}, t={patch.time}, full_box={params.full_box}")

    result = compute_external_noh_boundary(patch, params).raise_for_status()
    log.info(
        f"Status: {result.status.value}, regions={list(result.region_names)}, "
        f"cells={result.metrics.cells_updated}"
    )
    return RunOutcome(
        patch=patch,
        params=params,
        result=result,
        table=boundary_dataframe(patch, result),
    )


# ========================================================================
# MLflow Integration
# ========================================================================


def get_experiment_name(cfg: DictConfig) -> str:
    """Build full experiment name with optional prefix."""
    name = cfg.experiment_name
    prefix = cfg.mlflow.get("project_prefix", "")
    if prefix and not name.startswith("/"):
        return f"{prefix}/{name}"
    return name


def setup_mlflow(cfg: DictConfig) -> str:
    """Point MLflow at the configured tracking URI and return the experiment name."""
    tracking_uri = str(cfg.mlflow.get("tracking_uri", "./mlruns"))
    mlflow.set_tracking_uri(tracking_uri)

    experiment_name = get_experiment_name(cfg)
    mlflow.set_experiment(experiment_name)
    return experiment_name


def log_outcome(cfg: DictConfig, outcome: RunOutcome, run_name: Optional[str] = None) -> str:
    """Log params, metrics and the boundary table to a new MLflow run."""
    if run_name is None:
        mode = "fullbox" if outcome.params.full_box else "quadrant"
        run_name = f"noh{outcome.patch.rank}d_{mode}_t{outcome.patch.time:g}"

    with mlflow.start_run(run_name=run_name) as run:
        params = outcome.params.to_mlflow()
        params.update(
            rank=outcome.patch.rank,
            dimension=str(outcome.patch.dimension[: outcome.patch.rank]),
            time=outcome.patch.time,
        )
        mlflow.log_params(params)
        mlflow.log_dict(OmegaConf.to_container(cfg), "config.yaml")
        mlflow.log_metrics(outcome.summary())

        with tempfile.TemporaryDirectory() as tmpdir:
            csv_path = Path(tmpdir) / "boundary.csv"
            outcome.table.to_csv(csv_path, index=False)
            mlflow.log_artifact(str(csv_path))

        return run.info.run_id
