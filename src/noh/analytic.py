"""Closed-form Noh solution in the unshocked region.

    density  = (d0 + t/r)       2D
    density  = (d0 + t/r)^2     3D
    pressure = p0
    velocity = u0 (radial, inward)

with r the physical distance from the symmetry center. Offsets handed to
these functions are in cells, so r = radius * cell_width.
"""

import math

import numpy as np
from numba import njit

from .datastructures import HydroMethod

D0 = 1.0
P0 = 1.0e-6
U0 = -1.0
TINY_NUMBER = 1.0e-20


def specific_energy(gamma: float, hydro_method) -> float:
    """Energy field value: internal for Zeus, total otherwise."""
    energy = P0 / (gamma - 1.0) / D0
    if HydroMethod.parse(hydro_method) != HydroMethod.ZEUS:
        energy += 0.5 * U0 * U0
    return energy


@njit(cache=True)
def noh_cell_state(xx, yy, zz, time, cell_width, energy, rank):
    """Return (density, energy, vx, vy, vz) at offset (xx, yy, zz) cells."""
    radius = max(TINY_NUMBER, math.sqrt(xx * xx + yy * yy + zz * zz))
    density = D0 + time / radius / cell_width
    if rank == 3:
        density *= density
    vx = U0 * xx / radius
    vy = U0 * yy / radius
    vz = 0.0
    if rank == 3:
        vz = U0 * zz / radius
    return density, energy, vx, vy, vz


@njit(cache=True)
def fill_region(
    fields, i0, i1, j0, j1, k0, k1, ishift, jshift, kshift, rank, time, cell_width, energy
):
    """Overwrite fields 0..rank+1 on the box [i0,i1) x [j0,j1) x [k0,k1).

    `fields` has shape (n_fields, nz, ny, nx). Returns the number of cells written.
    """
    count = 0
    zz = 0.0
    for k in range(k0, k1):
        if rank > 2:
            zz = k + 0.5 - kshift
        for j in range(j0, j1):
            yy = j + 0.5 - jshift
            for i in range(i0, i1):
                xx = i + 0.5 - ishift
                d, e, vx, vy, vz = noh_cell_state(
                    xx, yy, zz, time, cell_width, energy, rank
                )
                fields[0, k, j, i] = d
                fields[1, k, j, i] = e
                fields[2, k, j, i] = vx
                fields[3, k, j, i] = vy
                if rank == 3:
                    fields[4, k, j, i] = vz
                count += 1
    return count


def analytic_solution(xx, yy, zz=None, time=0.0, cell_width=1.0, gamma=5.0 / 3.0,
                      hydro_method=HydroMethod.PPM_DIRECT_EULER):
    """Vectorised closed-form state at arbitrary offsets (in cells).

    Parameters
    ----------
    xx, yy : array_like
        Offsets from the symmetry center along x and y.
    zz : array_like, optional
        Offset along z. Omit for the 2D solution.

    Returns
    -------
    dict
        Keys 'density', 'energy', 'radius' and one velocity entry per axis
        ('vx', 'vy' and, in 3D, 'vz').
    """
    xx = np.asarray(xx, dtype=np.float64)
    yy = np.asarray(yy, dtype=np.float64)
    rank = 2 if zz is None else 3
    zz = np.zeros_like(xx) if zz is None else np.asarray(zz, dtype=np.float64)

    radius = np.maximum(TINY_NUMBER, np.sqrt(xx**2 + yy**2 + zz**2))
    density = D0 + time / radius / cell_width
    if rank == 3:
        density = density**2

    solution = {
        "radius": radius,
        "density": density,
        "energy": np.full_like(radius, specific_energy(gamma, hydro_method)),
        "vx": U0 * xx / radius,
        "vy": U0 * yy / radius,
    }
    if rank == 3:
        solution["vz"] = U0 * zz / radius
    return solution
