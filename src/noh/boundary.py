"""Analytic external boundary for the 2D/3D Noh problem.

The external ghost zones of a patch are overwritten with the exact solution
of the unshocked inflow, evaluated at the current time. Only faces lying on
the global domain boundary are touched; patches that do not reach the
domain boundary (refined subgrids) are left alone.

Call sequence per patch:
1. ownership / field-storage checks (no-ops)
2. fatal checks: dual energy formalism, field bank layout, full-box parity
3. grid offsets and symmetry frame
4. slab enumeration and fill, in sweep order
"""

import logging
import time as timer
from typing import Iterable, List, Optional

from .analytic import fill_region, specific_energy
from .datastructures import (
    BoundaryMetrics,
    BoundaryResult,
    BoundaryStatus,
    NohParameters,
)
from .errors import NohBoundaryError, NohConfigurationError, UnsupportedFeatureError
from .geometry import compute_grid_offsets, compute_symmetry_shifts
from .regions import enumerate_boundary_regions

log = logging.getLogger(__name__)


def _check_supported(patch, params: NohParameters):
    if params.dual_energy_formalism:
        raise UnsupportedFeatureError(
            "Noh analytic boundary does not support the dual energy formalism: "
            "the internal energy field cannot be seeded"
        )
    if patch.rank not in (2, 3):
        raise NohConfigurationError(
            f"Noh analytic boundary supports rank 2 and 3 only, got rank {patch.rank}"
        )
    if patch.n_fields < patch.rank + 2:
        raise NohConfigurationError(
            f"Noh analytic boundary needs {patch.rank + 2} fields "
            f"(density, energy, velocities), patch has {patch.n_fields}"
        )
    if patch.fields.ndim != 4 or tuple(patch.fields.shape[1:]) != tuple(patch.shape):
        raise NohConfigurationError(
            f"Field bank shape {patch.fields.shape} does not match the patch "
            f"layout (n_fields, nz, ny, nx) = (n, {', '.join(map(str, patch.shape))})"
        )


def compute_external_noh_boundary(
    patch, params: NohParameters, time: Optional[float] = None
) -> BoundaryResult:
    """Set the external boundary of `patch` to the analytic Noh solution.

    Parameters
    ----------
    patch : MeshPatch
        Patch to update in place.
    params : NohParameters
        Simulation context (gamma, hydro method, full-box mode, ownership).
    time : float, optional
        Evaluation time. Defaults to `patch.time`.

    Returns
    -------
    BoundaryResult
        UPDATED with the regions written, NOT_OWNER / NO_FIELDS for no-ops, or
        FAILED with the error when a fatal condition was found. A FAILED call
        leaves every field untouched.
    """
    if patch.processor_number != params.my_processor:
        log.debug(
            f"Skipping patch owned by processor {patch.processor_number} "
            f"(this is {params.my_processor})"
        )
        return BoundaryResult(status=BoundaryStatus.NOT_OWNER)

    if patch.n_fields == 0:
        log.debug("Skipping patch without fields")
        return BoundaryResult(status=BoundaryStatus.NO_FIELDS)

    t_start = timer.perf_counter()
    try:
        _check_supported(patch, params)
        offsets = compute_grid_offsets(patch)
        frame = compute_symmetry_shifts(patch, params.full_box, offsets)
    except NohBoundaryError as exc:
        log.error(f"Noh boundary failed on {patch!r}: {exc}")
        return BoundaryResult(status=BoundaryStatus.FAILED, error=exc)

    if time is None:
        time = patch.time
    energy = specific_energy(params.gamma, params.hydro_method)
    regions = enumerate_boundary_regions(patch, frame, params.full_box)

    cells_updated = 0
    for region in regions:
        written = fill_region(
            patch.fields,
            region.i_range[0], region.i_range[1],
            region.j_range[0], region.j_range[1],
            region.k_range[0], region.k_range[1],
            frame.shift[0], frame.shift[1], frame.shift[2],
            patch.rank,
            float(time),
            patch.cell_width[0],
            energy,
        )
        log.debug(f"{region.name}: {written} cells")
        cells_updated += written

    patch.debug_check("compute_external_noh_boundary (after)")

    metrics = BoundaryMetrics(
        cells_updated=cells_updated,
        regions_updated=sum(1 for region in regions if not region.is_empty),
        wall_time_seconds=timer.perf_counter() - t_start,
    )
    return BoundaryResult(
        status=BoundaryStatus.UPDATED, metrics=metrics, regions=regions, frame=frame
    )


def update_external_boundaries(
    patches: Iterable, params: NohParameters, time: Optional[float] = None,
    strict: bool = True,
) -> List[BoundaryResult]:
    """Apply the analytic boundary to every patch.

    With `strict`, the first fatal result is raised; otherwise failures are
    returned alongside the other results.
    """
    results = []
    for patch in patches:
        result = compute_external_noh_boundary(patch, params, time=time)
        if strict:
            result.raise_for_status()
        results.append(result)

    updated = sum(1 for r in results if r.status is BoundaryStatus.UPDATED)
    log.debug(f"Updated {updated}/{len(results)} patches")
    return results
