"""Index bookkeeping between a patch and the global domain.

Two steps, run once per kernel call:

1. Grid offsets: how many cells each patch face is inset from the matching
   domain face. Zero means the face lies on the domain boundary.
2. Symmetry frame: per-axis shifts such that `index + 0.5 - shift` is the
   signed distance (in cells) from the symmetry center, plus the sweep start
   indices that keep quadrant runs out of the reflecting low-side ghosts.

Symmetry center:
- quadrant mode (full_box off): the domain's lower corner
- full-box mode: the domain midpoint; every active axis of the patch must
  then have an even number of cells (ghosts included)
"""

import math
from dataclasses import dataclass
from typing import Tuple

from meshing.patch import MAX_DIMENSION
from .errors import NohConfigurationError


def nint(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(x + math.copysign(0.5, x))


def compute_grid_offsets(patch) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    """Return (offset_left, offset_right) in cells, per axis.

    Axes beyond the patch rank get zero.
    """
    offset_left = [0] * MAX_DIMENSION
    offset_right = [0] * MAX_DIMENSION
    for d in range(patch.rank):
        dx = patch.cell_width[d]
        offset_left[d] = nint((patch.left_edge[d] - patch.domain_left_edge[d]) / dx)
        offset_right[d] = nint((patch.right_edge[d] - patch.domain_right_edge[d]) / dx)
    return tuple(offset_left), tuple(offset_right)


@dataclass(frozen=True)
class SymmetryFrame:
    """Per-axis index tables for one kernel call."""

    offset_left: Tuple[int, ...]
    offset_right: Tuple[int, ...]
    shift: Tuple[int, ...]
    start: Tuple[int, ...]

    def offset(self, d: int, index: int) -> float:
        """Signed distance in cells from the symmetry center along axis d."""
        return index + 0.5 - self.shift[d]

    def touches_left(self, d: int) -> bool:
        return self.offset_left[d] == 0

    def touches_right(self, d: int) -> bool:
        return self.offset_right[d] == 0


def check_full_box_dimensions(patch):
    """Raise NohConfigurationError if any active axis has an odd cell count.

    Only meaningful for single-owner runs; a patch split across processes can
    legitimately have odd extents.
    """
    odd = [d for d in range(patch.rank) if patch.dimension[d] % 2 != 0]
    if odd:
        dims = ", ".join(f"axis {d}: {patch.dimension[d]}" for d in odd)
        raise NohConfigurationError(
            f"Full-box Noh boundary requires an even number of cells per axis "
            f"(reflective symmetry about the domain midpoint); got {dims}"
        )


def compute_symmetry_shifts(patch, full_box: bool, offsets=None) -> SymmetryFrame:
    """Build the SymmetryFrame for `patch`.

    Parameters
    ----------
    patch : MeshPatch
        Patch whose geometry is read.
    full_box : bool
        Whether the symmetry center sits at the domain midpoint.
    offsets : tuple, optional
        Precomputed (offset_left, offset_right); computed if omitted.

    Raises
    ------
    NohConfigurationError
        In full-box mode, when an active axis has an odd dimension.
    """
    if offsets is None:
        offsets = compute_grid_offsets(patch)
    offset_left, offset_right = offsets

    shift = list(patch.start_index)
    start = [0] * MAX_DIMENSION

    if full_box:
        check_full_box_dimensions(patch)
        for d in range(patch.rank):
            width = patch.domain_right_edge[d] - patch.domain_left_edge[d]
            shift[d] += nint(width / patch.cell_width[d]) // 2

    for d in range(patch.rank):
        if offset_left[d] == 0 and not full_box:
            start[d] = patch.start_index[d]
        else:
            shift[d] -= offset_left[d]

    return SymmetryFrame(
        offset_left=tuple(offset_left),
        offset_right=tuple(offset_right),
        shift=tuple(shift),
        start=tuple(start),
    )
