"""
MeshPatch: one block of a block-structured mesh, with ghost layers.

Indexing Conventions:
- All geometry tuples have length MAX_DIMENSION (3). Axes beyond `rank` are
  collapsed: dimension 1, start/end index 0, zero cell width contribution.
- `dimension[d]` counts all cells on axis d, ghost zones included.
- `start_index[d]` / `end_index[d]` bound the active zone (end is inclusive).
- `left_edge` / `right_edge` are the physical extents of the active zone.

Field Storage:
- `fields` has shape (n_fields, nz, ny, nx), C-ordered, so `fields[n].ravel()`
  is laid out with the x-axis varying fastest (flat index i + nx*(j + ny*k)).
- Field 0 = density, field 1 = energy, fields 2..rank+1 = velocity components.
- Cells are addressed as fields[n, k, j, i].
"""

import logging

import numpy as np

log = logging.getLogger(__name__)

MAX_DIMENSION = 3

DENSITY = 0
ENERGY = 1
VELOCITY_X = 2
VELOCITY_Y = 3
VELOCITY_Z = 4


def _pad(name, values, fill, cast):
    """Cast `values` and pad collapsed axes up to MAX_DIMENSION."""
    values = [cast(v) for v in values]
    if len(values) > MAX_DIMENSION:
        raise ValueError(
            f"{name} has {len(values)} entries, at most {MAX_DIMENSION} allowed"
        )
    return tuple(values + [cast(fill)] * (MAX_DIMENSION - len(values)))


class MeshPatch:
    def __init__(
        self,
        rank,
        dimension,
        start_index,
        end_index,
        left_edge,
        right_edge,
        domain_left_edge,
        domain_right_edge,
        cell_width,
        fields=None,
        time=0.0,
        processor_number=0,
    ):
        # --- Topology ---
        self.rank = int(rank)
        self.dimension = _pad("dimension", dimension, 1, int)
        self.start_index = _pad("start_index", start_index, 0, int)
        self.end_index = _pad("end_index", end_index, 0, int)

        # --- Geometry ---
        self.left_edge = _pad("left_edge", left_edge, 0.0, float)
        self.right_edge = _pad("right_edge", right_edge, 0.0, float)
        self.domain_left_edge = _pad("domain_left_edge", domain_left_edge, 0.0, float)
        self.domain_right_edge = _pad("domain_right_edge", domain_right_edge, 0.0, float)
        self.cell_width = _pad("cell_width", cell_width, 1.0, float)

        # --- Fields ---
        if fields is None:
            fields = np.zeros((0,) + self.shape, dtype=np.float64)
        self.fields = fields

        # --- Ownership / time ---
        self.time = float(time)
        self.processor_number = int(processor_number)

    @property
    def shape(self):
        """Array shape of one field, (nz, ny, nx)."""
        return self.dimension[::-1]

    @property
    def n_fields(self) -> int:
        return self.fields.shape[0]

    @property
    def active_cells(self):
        return tuple(
            self.end_index[d] - self.start_index[d] + 1 for d in range(MAX_DIMENSION)
        )

    def field(self, n: int) -> np.ndarray:
        """Return field `n` as a (nz, ny, nx) view."""
        return self.fields[n]

    def cell_center(self, i: int, j: int, k: int = 0) -> np.ndarray:
        """Physical center of cell (i, j, k), ghost zones included."""
        center = np.zeros(MAX_DIMENSION)
        for d, index in enumerate((i, j, k)):
            if d < self.rank:
                center[d] = (
                    self.left_edge[d]
                    + (index - self.start_index[d] + 0.5) * self.cell_width[d]
                )
        return center

    def debug_check(self, message: str = "") -> bool:
        """Report non-finite field values. Returns True if all fields are finite."""
        if self.n_fields == 0:
            return True
        finite = np.isfinite(self.fields)
        if finite.all():
            log.debug(f"{message}: {self.n_fields} fields finite on {self.dimension}")
            return True
        bad = np.count_nonzero(~finite.reshape(self.n_fields, -1), axis=1)
        log.warning(f"{message}: non-finite values per field {bad.tolist()}")
        return False

    def __repr__(self):
        return (
            f"MeshPatch(rank={self.rank}, dimension={self.dimension}, "
            f"left_edge={self.left_edge[: self.rank]}, "
            f"right_edge={self.right_edge[: self.rank]}, "
            f"processor_number={self.processor_number})"
        )


def create_patch(
    rank,
    domain_cells,
    ghost_zones=3,
    domain_left_edge=(0.0, 0.0, 0.0),
    domain_right_edge=(1.0, 1.0, 1.0),
    patch_start=None,
    patch_cells=None,
    n_fields=None,
    time=0.0,
    processor_number=0,
):
    """Build a patch covering part (or all) of a uniform domain.

    Parameters
    ----------
    rank : int
        Number of spatial dimensions (2 or 3).
    domain_cells : sequence of int
        Active cells spanning the whole domain on each active axis.
    ghost_zones : int
        Ghost layers on each side of every active axis.
    domain_left_edge, domain_right_edge : sequence of float
        Physical extents of the domain. Only the first `rank` entries are used.
    patch_start : sequence of int, optional
        First domain cell covered by the patch on each axis (default: 0).
    patch_cells : sequence of int, optional
        Active cells in the patch on each axis (default: whole domain).
    n_fields : int, optional
        Fields to allocate. Defaults to rank + 2 (density, energy, velocities).
    time : float
        Patch time.
    processor_number : int
        Owning worker.

    Returns
    -------
    MeshPatch
    """
    if rank not in (2, 3):
        raise ValueError(f"Unsupported rank: {rank}. Use 2 or 3")
    if len(domain_cells) < rank:
        raise ValueError(f"domain_cells needs {rank} entries, got {len(domain_cells)}")

    patch_start = list(patch_start) if patch_start is not None else [0] * rank
    patch_cells = list(patch_cells) if patch_cells is not None else list(domain_cells)
    if any(n <= 0 for n in list(domain_cells[:rank]) + patch_cells[:rank]):
        raise ValueError("Cell counts must be positive")
    if ghost_zones < 0:
        raise ValueError(f"ghost_zones must be non-negative, got {ghost_zones}")

    dimension = [1] * MAX_DIMENSION
    start_index = [0] * MAX_DIMENSION
    end_index = [0] * MAX_DIMENSION
    left_edge = [0.0] * MAX_DIMENSION
    right_edge = [0.0] * MAX_DIMENSION
    domain_left = [0.0] * MAX_DIMENSION
    domain_right = [0.0] * MAX_DIMENSION
    cell_width = [1.0] * MAX_DIMENSION

    for d in range(rank):
        if patch_start[d] < 0 or patch_start[d] + patch_cells[d] > domain_cells[d]:
            raise ValueError(
                f"Patch on axis {d} ({patch_start[d]}+{patch_cells[d]}) "
                f"exceeds the domain ({domain_cells[d]} cells)"
            )
        domain_left[d] = float(domain_left_edge[d])
        domain_right[d] = float(domain_right_edge[d])
        cell_width[d] = (domain_right[d] - domain_left[d]) / domain_cells[d]

        dimension[d] = patch_cells[d] + 2 * ghost_zones
        start_index[d] = ghost_zones
        end_index[d] = ghost_zones + patch_cells[d] - 1
        left_edge[d] = domain_left[d] + patch_start[d] * cell_width[d]
        right_edge[d] = left_edge[d] + patch_cells[d] * cell_width[d]

    if n_fields is None:
        n_fields = rank + 2
    fields = np.zeros((n_fields,) + tuple(dimension[::-1]), dtype=np.float64)

    return MeshPatch(
        rank=rank,
        dimension=dimension,
        start_index=start_index,
        end_index=end_index,
        left_edge=left_edge,
        right_edge=right_edge,
        domain_left_edge=domain_left,
        domain_right_edge=domain_right,
        cell_width=cell_width,
        fields=fields,
        time=time,
        processor_number=processor_number,
    )
