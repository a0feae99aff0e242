"""
Shared fixtures for the allocator tests.
"""

import pytest

from blocks import Block
from engine import AllocationManager


@pytest.fixture
def manager():
    """Manager with 100 KB of memory and no blocks."""
    mgr = AllocationManager()
    mgr.initialize_memory(100)
    return mgr


@pytest.fixture
def partitioned(manager):
    """Manager with 100 KB split into [20, 30, 50]."""
    manager.define_partition([20, 30, 50])
    return manager


@pytest.fixture
def make_blocks():
    """Factory for block lists; indices in `allocated` are occupied."""
    def _make(*sizes, allocated=()):
        blocks = [Block(i, s) for i, s in enumerate(sizes)]
        for i in allocated:
            blocks[i].allocated = True
            blocks[i].occupant_id = f"X{i}"
        return blocks
    return _make
