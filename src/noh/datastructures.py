"""Data structures for the Noh external boundary kernel.

Structure:
- HydroMethod: hydro scheme selector (decides total vs internal energy)
- NohParameters: immutable simulation context passed into the kernel
- BoundaryStatus / BoundaryResult: outcome of one kernel call
- BoundaryMetrics: counters for one kernel call (logged to MLflow by the runner)
"""

from dataclasses import dataclass, asdict, field
from enum import Enum, IntEnum
from typing import Optional, List, Tuple

import pandas as pd


# ========================================================
# Parameters (Input Configuration)
# ========================================================


class HydroMethod(IntEnum):
    """Hydro scheme codes. Only ZEUS stores internal specific energy."""

    PPM_DIRECT_EULER = 0
    PPM_LAGRANGE_REMAP = 1
    ZEUS = 2
    HD_RK = 3
    MHD_RK = 4
    NO_HYDRO = 5
    MHD_LI = 6

    @classmethod
    def parse(cls, value) -> "HydroMethod":
        """Accept a member, its integer code or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key.isdigit():
                return cls(int(key))
            try:
                return cls[key]
            except KeyError:
                names = ", ".join(m.name.lower() for m in cls)
                raise ValueError(f"Unknown hydro_method: {value}. Use one of {names}")
        return cls(int(value))


@dataclass(frozen=True)
class NohParameters:
    """Simulation-wide settings read by the boundary kernel."""

    gamma: float = 5.0 / 3.0
    hydro_method: HydroMethod = HydroMethod.PPM_DIRECT_EULER
    full_box: bool = False
    dual_energy_formalism: bool = False
    my_processor: int = 0

    def __post_init__(self):
        object.__setattr__(self, "hydro_method", HydroMethod.parse(self.hydro_method))
        object.__setattr__(self, "full_box", bool(self.full_box))
        object.__setattr__(
            self, "dual_energy_formalism", bool(self.dual_energy_formalism)
        )
        if self.gamma <= 1.0:
            raise ValueError(f"gamma must be greater than 1, got {self.gamma}")

    def to_mlflow(self) -> dict:
        params = asdict(self)
        params["hydro_method"] = self.hydro_method.name.lower()
        return params

    def to_dataframe(self):
        return pd.DataFrame([self.to_mlflow()])


# ========================================================
# Results
# ========================================================


class BoundaryStatus(Enum):
    UPDATED = "updated"
    NOT_OWNER = "not_owner"
    NO_FIELDS = "no_fields"
    FAILED = "failed"


@dataclass
class BoundaryMetrics:
    """Counters for one kernel call."""

    cells_updated: int = 0
    regions_updated: int = 0
    wall_time_seconds: float = 0.0

    def to_mlflow(self) -> dict:
        return asdict(self)

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])


@dataclass
class BoundaryResult:
    """Outcome of `compute_external_noh_boundary`.

    A FAILED result carries the fatal error; no field was written in that case.
    """

    status: BoundaryStatus
    metrics: BoundaryMetrics = field(default_factory=BoundaryMetrics)
    regions: List = field(default_factory=list)
    frame: Optional[object] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is not BoundaryStatus.FAILED

    @property
    def region_names(self) -> Tuple[str, ...]:
        return tuple(region.name for region in self.regions)

    def raise_for_status(self) -> "BoundaryResult":
        """Re-raise the fatal error of a FAILED result; return self otherwise."""
        if self.error is not None:
            raise self.error
        return self
