"""Pytest configuration and fixtures for Noh boundary tests."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def quadrant_patch_2d():
    """8x8 active cells on [0, 1]^2, 3 ghost zones (14x14 cells), t=0.1."""
    from meshing import create_patch

    return create_patch(rank=2, domain_cells=[8, 8], ghost_zones=3, time=0.1)


@pytest.fixture
def fullbox_patch_2d():
    """8x8 active cells on [-1, 1]^2, 3 ghost zones (14x14 cells), t=0.1."""
    from meshing import create_patch

    return create_patch(
        rank=2,
        domain_cells=[8, 8],
        ghost_zones=3,
        domain_left_edge=[-1.0, -1.0],
        domain_right_edge=[1.0, 1.0],
        time=0.1,
    )


@pytest.fixture
def quadrant_patch_3d():
    """16^3 active cells on [0, 1]^3, 3 ghost zones (22^3 cells), t=0.1."""
    from meshing import create_patch

    return create_patch(rank=3, domain_cells=[16, 16, 16], ghost_zones=3, time=0.1)


@pytest.fixture
def fullbox_patch_3d():
    """16^3 active cells on [-1, 1]^3, 3 ghost zones (22^3 cells), t=0."""
    from meshing import create_patch

    return create_patch(
        rank=3,
        domain_cells=[16, 16, 16],
        ghost_zones=3,
        domain_left_edge=[-1.0, -1.0, -1.0],
        domain_right_edge=[1.0, 1.0, 1.0],
        time=0.0,
    )


@pytest.fixture
def quadrant_params():
    from noh import NohParameters

    return NohParameters(gamma=5.0 / 3.0, full_box=False)


@pytest.fixture
def fullbox_params():
    from noh import NohParameters

    return NohParameters(gamma=5.0 / 3.0, full_box=True)
