"""Tests for the config-driven runner (no Hydra app, no MLflow)."""

import os

import mlflow
import numpy as np
import pytest
from omegaconf import OmegaConf

from meshing import create_patch
from noh import (
    TINY_NUMBER,
    BoundaryRegion,
    BoundaryResult,
    BoundaryStatus,
    HydroMethod,
    NohConfigurationError,
    SymmetryFrame,
    boundary_dataframe,
)
from noh.runner import (
    build_problem,
    get_experiment_name,
    run_boundary_update,
    setup_mlflow,
)


def make_cfg(rank=2, cells=8, full_box=False, hydro_method="ppm_direct_euler", time=0.1):
    return OmegaConf.create(
        {
            "experiment_name": "noh-boundary",
            "mlflow": {"enabled": False, "tracking_uri": "./mlruns", "project_prefix": ""},
            "output": {"save_csv": False},
            "problem": {
                "name": f"noh{rank}d",
                "time": time,
                "patch": {
                    "_target_": "meshing.create_patch",
                    "rank": rank,
                    "domain_cells": [cells] * rank,
                    "ghost_zones": 3,
                    "domain_left_edge": [0.0] * rank,
                    "domain_right_edge": [1.0] * rank,
                },
                "params": {
                    "_target_": "noh.NohParameters",
                    "gamma": 1.4,
                    "hydro_method": hydro_method,
                    "full_box": full_box,
                    "dual_energy_formalism": False,
                    "my_processor": 0,
                },
            },
        }
    )


class TestBuildProblem:
    def test_instantiates_patch_and_params(self):
        """Hydra targets build the patch and parameters."""
        patch, params = build_problem(make_cfg(hydro_method="zeus", time=0.3))
        assert patch.rank == 2
        assert patch.dimension == (14, 14, 1)
        assert patch.time == 0.3
        assert params.hydro_method is HydroMethod.ZEUS
        assert params.gamma == 1.4

    def test_unknown_hydro_method(self):
        """An unknown hydro method name is rejected."""
        with pytest.raises(Exception, match="Unknown hydro_method"):
            build_problem(make_cfg(hydro_method="godunov"))


class TestRunBoundaryUpdate:
    def test_quadrant_run(self):
        """A quadrant run writes one table row per cell."""
        outcome = run_boundary_update(make_cfg())
        assert outcome.result.status is BoundaryStatus.UPDATED
        assert len(outcome.table) == outcome.result.metrics.cells_updated == 66

    def test_table_matches_fields(self):
        """Table rows carry the written field values."""
        outcome = run_boundary_update(make_cfg(rank=3))
        table = outcome.table
        assert list(table.columns[-3:]) == ["vx", "vy", "vz"]
        row = table.iloc[-1]
        patch = outcome.patch
        assert row["density"] == patch.fields[0, row["k"], row["j"], row["i"]]
        assert row["radius"] == pytest.approx(
            (row["xx"] ** 2 + row["yy"] ** 2 + row["zz"] ** 2) ** 0.5
        )

    def test_summary(self):
        """Summary reports cell counts per region and density bounds."""
        summary = run_boundary_update(make_cfg()).summary()
        assert summary["cells_updated"] == 66
        assert summary["cells_high-j"] == 33
        assert summary["cells_high-i"] == 33
        assert summary["min_density"] > 1.0
        assert summary["max_density"] >= summary["min_density"]

    def test_fatal_config_raises(self):
        """Fatal configuration errors propagate from the runner."""
        with pytest.raises(NohConfigurationError):
            run_boundary_update(make_cfg(cells=9, full_box=True))


class TestBoundaryDataframe:
    def test_radius_floored_at_symmetry_center(self):
        """A cell sitting on the symmetry center reports the floored radius."""
        patch = create_patch(2, [8, 8], time=0.1)
        region = BoundaryRegion(
            name="high-j", axis=0, side="high",
            i_range=(3, 5), j_range=(3, 4), k_range=(0, 1),
        )
        frame = SymmetryFrame(
            offset_left=(0, 0, 0), offset_right=(0, 0, 0),
            shift=(3.5, 3.5, 0), start=(3, 3, 0),
        )
        result = BoundaryResult(
            status=BoundaryStatus.UPDATED, regions=[region], frame=frame
        )
        table = boundary_dataframe(patch, result)
        assert list(table["i"]) == [3, 4]
        assert table["radius"].iloc[0] == TINY_NUMBER
        assert table["radius"].iloc[1] == pytest.approx(1.0)

    def test_radius_positive_on_written_cells(self):
        """Radii in a real run match the kernel's floored distance."""
        outcome = run_boundary_update(make_cfg(full_box=True))
        table = outcome.table
        expected = np.maximum(
            TINY_NUMBER, np.sqrt(table["xx"] ** 2 + table["yy"] ** 2 + table["zz"] ** 2)
        )
        assert (table["radius"] >= TINY_NUMBER).all()
        assert np.allclose(table["radius"], expected)


class TestExperimentName:
    def test_prefix(self):
        """The project prefix is prepended to the experiment name."""
        cfg = make_cfg()
        assert get_experiment_name(cfg) == "noh-boundary"
        cfg.mlflow.project_prefix = "/Shared/noh"
        assert get_experiment_name(cfg) == "/Shared/noh/noh-boundary"

    def test_setup_leaves_environment_alone(self, monkeypatch, tmp_path):
        """The tracking URI goes to MLflow, not to the process environment."""
        calls = []
        monkeypatch.setattr(mlflow, "set_tracking_uri", lambda uri: calls.append(("uri", uri)))
        monkeypatch.setattr(mlflow, "set_experiment", lambda name: calls.append(("exp", name)))
        monkeypatch.setenv("MLFLOW_TRACKING_URI", "databricks")

        cfg = make_cfg()
        cfg.mlflow.tracking_uri = str(tmp_path / "mlruns")
        cfg.mlflow.project_prefix = "/Shared/noh"
        assert setup_mlflow(cfg) == "/Shared/noh/noh-boundary"
        assert calls == [
            ("uri", str(tmp_path / "mlruns")),
            ("exp", "/Shared/noh/noh-boundary"),
        ]
        assert os.environ["MLFLOW_TRACKING_URI"] == "databricks"
