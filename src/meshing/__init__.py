"""Block-structured mesh patches."""

from .patch import (
    MAX_DIMENSION,
    DENSITY,
    ENERGY,
    VELOCITY_X,
    VELOCITY_Y,
    VELOCITY_Z,
    MeshPatch,
    create_patch,
)

__all__ = [
    "MAX_DIMENSION",
    "DENSITY",
    "ENERGY",
    "VELOCITY_X",
    "VELOCITY_Y",
    "VELOCITY_Z",
    "MeshPatch",
    "create_patch",
]
