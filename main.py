"""
Noh external boundary - apply the analytic boundary to one patch and report.

Usage:
    uv run python main.py
    uv run python main.py problem=noh3d problem.time=0.6
    uv run python main.py problem=noh3d_fullbox mlflow.enabled=true
    uv run python main.py -m problem=noh2d,noh3d problem.time=0.0,0.3,0.6
"""

import logging
import sys
from pathlib import Path

import hydra
from dotenv import load_dotenv
from hydra.core.hydra_config import HydraConfig
from omegaconf import DictConfig

load_dotenv()
sys.path.insert(0, str(Path(__file__).parent / "src"))

from cli import console  # noqa: E402
from noh.errors import NohBoundaryError  # noqa: E402
from noh.runner import log_outcome, run_boundary_update, setup_mlflow  # noqa: E402

log = logging.getLogger(__name__)


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    console.header(f"Noh boundary: {cfg.problem.name}")
    try:
        outcome = run_boundary_update(cfg)
    except NohBoundaryError as exc:
        console.fail(str(exc))
        raise SystemExit(1) from exc

    console.ok(f"{outcome.result.metrics.cells_updated} boundary cells updated")
    console.dim(f"regions: {', '.join(outcome.result.region_names) or 'none'}")
    console.summary_table("Boundary summary", outcome.summary())

    output_dir = Path(HydraConfig.get().runtime.output_dir)
    if cfg.output.get("save_csv", False):
        csv_path = output_dir / "boundary.csv"
        outcome.table.to_csv(csv_path, index=False)
        log.info(f"Saved boundary table: {csv_path}")

    if cfg.mlflow.get("enabled", False):
        log.info(f"MLflow experiment: {setup_mlflow(cfg)}")
        run_id = log_outcome(cfg, outcome)
        log.info(f"Logged run {run_id[:8]}")


if __name__ == "__main__":
    main()
