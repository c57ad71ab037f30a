"""Boundary slabs updated by the Noh kernel.

Six candidate slabs, one per domain face, visited in a fixed order: the low
set before the high set, and within each set the k-sweep, then the j-sweep,
then the i-sweep. A slab is named after the sweep direction, not the face:
"low-j" sweeps along j on the low x-face.

Index ranges (half-open, per axis):
- face-normal axis: [0, start_index) for a low slab, [end_index+1, dimension)
  for a high slab
- tangential axes: [start[d], dimension[d]), with `start` from the symmetry
  frame (the active start index on quadrant low faces, 0 otherwise)

Low slabs are only populated in full-box mode; in quadrant mode the low faces
are reflecting boundaries owned by the hydro solver.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

LOW = "low"
HIGH = "high"


@dataclass(frozen=True)
class SlabRule:
    """One row of the sweep table."""

    name: str
    axis: int
    side: str

    def is_eligible(self, patch, frame, full_box: bool) -> bool:
        if self.axis >= patch.rank:
            return False
        if self.side == LOW:
            return full_box and frame.touches_left(self.axis)
        return frame.touches_right(self.axis)

    def index_range(self, patch, frame, d: int) -> Tuple[int, int]:
        if d != self.axis:
            return frame.start[d], patch.dimension[d]
        if self.side == LOW:
            return 0, patch.start_index[d]
        return patch.end_index[d] + 1, patch.dimension[d]


SLAB_TABLE = (
    SlabRule("low-k", axis=2, side=LOW),
    SlabRule("low-j", axis=0, side=LOW),
    SlabRule("low-i", axis=1, side=LOW),
    SlabRule("high-k", axis=2, side=HIGH),
    SlabRule("high-j", axis=0, side=HIGH),
    SlabRule("high-i", axis=1, side=HIGH),
)


@dataclass(frozen=True)
class BoundaryRegion:
    """A box of cells [i0, i1) x [j0, j1) x [k0, k1) to overwrite."""

    name: str
    axis: int
    side: str
    i_range: Tuple[int, int]
    j_range: Tuple[int, int]
    k_range: Tuple[int, int]

    @property
    def n_cells(self) -> int:
        extents = [hi - lo for lo, hi in (self.i_range, self.j_range, self.k_range)]
        return int(np.prod([max(0, e) for e in extents]))

    @property
    def is_empty(self) -> bool:
        return self.n_cells == 0

    @property
    def slices(self):
        """(k, j, i) slices into a (nz, ny, nx) field."""
        return (
            slice(*self.k_range),
            slice(*self.j_range),
            slice(*self.i_range),
        )

    def cells(self):
        """Yield (i, j, k) in traversal order: k outer, j middle, i inner."""
        for k in range(*self.k_range):
            for j in range(*self.j_range):
                for i in range(*self.i_range):
                    yield i, j, k


def enumerate_boundary_regions(patch, frame, full_box: bool) -> List[BoundaryRegion]:
    """Return the eligible slabs of `patch`, in sweep order.

    Empty slabs (e.g. no ghost zones on that face) are kept so callers can see
    that the face was considered.
    """
    regions = []
    for rule in SLAB_TABLE:
        if not rule.is_eligible(patch, frame, full_box):
            continue
        i_range, j_range, k_range = (
            rule.index_range(patch, frame, d) for d in range(3)
        )
        regions.append(
            BoundaryRegion(
                name=rule.name,
                axis=rule.axis,
                side=rule.side,
                i_range=i_range,
                j_range=j_range,
                k_range=k_range,
            )
        )
    return regions
