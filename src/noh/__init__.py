"""Analytic external boundary for the Noh implosion problem.

Kernel Pipeline:
----------------
compute_external_noh_boundary(patch, params)
├── compute_grid_offsets        (patch faces vs. domain faces)
├── compute_symmetry_shifts     (index -> offset from symmetry center)
├── enumerate_boundary_regions  (six slabs, fixed sweep order)
└── fill_region                 (closed-form state per cell)
"""

from .analytic import (
    D0,
    P0,
    U0,
    TINY_NUMBER,
    analytic_solution,
    fill_region,
    noh_cell_state,
    specific_energy,
)
from .boundary import compute_external_noh_boundary, update_external_boundaries
from .datastructures import (
    BoundaryMetrics,
    BoundaryResult,
    BoundaryStatus,
    HydroMethod,
    NohParameters,
)
from .errors import NohBoundaryError, NohConfigurationError, UnsupportedFeatureError
from .geometry import (
    SymmetryFrame,
    compute_grid_offsets,
    compute_symmetry_shifts,
    nint,
)
from .regions import SLAB_TABLE, BoundaryRegion, enumerate_boundary_regions
from .sampling import boundary_dataframe

__all__ = [
    # Kernel
    "compute_external_noh_boundary",
    "update_external_boundaries",
    # Configuration / results
    "HydroMethod",
    "NohParameters",
    "BoundaryStatus",
    "BoundaryResult",
    "BoundaryMetrics",
    # Errors
    "NohBoundaryError",
    "NohConfigurationError",
    "UnsupportedFeatureError",
    # Geometry
    "nint",
    "SymmetryFrame",
    "compute_grid_offsets",
    "compute_symmetry_shifts",
    # Regions
    "SLAB_TABLE",
    "BoundaryRegion",
    "enumerate_boundary_regions",
    # Analytic solution
    "D0",
    "P0",
    "U0",
    "TINY_NUMBER",
    "specific_energy",
    "noh_cell_state",
    "fill_region",
    "analytic_solution",
    "boundary_dataframe",
]
