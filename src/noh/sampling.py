"""Tabulate the cells written by a boundary update."""

import numpy as np
import pandas as pd

from meshing.patch import DENSITY, ENERGY, VELOCITY_X

from .analytic import TINY_NUMBER


def boundary_dataframe(patch, result) -> pd.DataFrame:
    """One row per cell in the regions of `result`, in traversal order.

    Columns: region, i, j, k, x, y, z (physical cell centers), xx, yy, zz
    (offsets in cells from the symmetry center), radius, density, energy,
    and vx, vy (and vz in 3D). Cells covered by two regions appear twice.
    """
    columns = ["region", "i", "j", "k", "x", "y", "z", "xx", "yy", "zz", "radius",
               "density", "energy"]
    velocity_names = ["vx", "vy", "vz"][: patch.rank]
    columns += velocity_names
    if result.frame is None or not result.regions:
        return pd.DataFrame(columns=columns)

    frame = result.frame
    blocks = []
    for region in result.regions:
        if region.is_empty:
            continue
        k, j, i = np.meshgrid(
            np.arange(*region.k_range),
            np.arange(*region.j_range),
            np.arange(*region.i_range),
            indexing="ij",
        )
        i, j, k = i.ravel(), j.ravel(), k.ravel()
        block = {"region": region.name, "i": i, "j": j, "k": k}

        for d, (name, index) in enumerate(zip("xyz", (i, j, k))):
            if d < patch.rank:
                block[name] = patch.left_edge[d] + (
                    index - patch.start_index[d] + 0.5
                ) * patch.cell_width[d]
                block[name * 2] = index + 0.5 - frame.shift[d]
            else:
                block[name] = np.zeros(i.size)
                block[name * 2] = np.zeros(i.size)
        block["radius"] = np.maximum(
            TINY_NUMBER, np.sqrt(block["xx"] ** 2 + block["yy"] ** 2 + block["zz"] ** 2)
        )

        block["density"] = patch.fields[DENSITY][k, j, i]
        block["energy"] = patch.fields[ENERGY][k, j, i]
        for n, name in enumerate(velocity_names):
            block[name] = patch.fields[VELOCITY_X + n][k, j, i]
        blocks.append(pd.DataFrame(block, columns=columns))

    if not blocks:
        return pd.DataFrame(columns=columns)
    return pd.concat(blocks, ignore_index=True)
