# blocks.py

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from errors import InvalidCapacity, InvalidPartition

logger = logging.getLogger(__name__)

UNSET_CURSOR = -1


def as_positive_int(value: Any) -> Optional[int]:
    """Return `value` as a positive int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        return None
    return value


@dataclass
class Block:
    """
    A fixed-size memory partition.

    Attributes:
        index (int): Position in the partition, stable for the block's lifetime
        size (int): Block size in KB, fixed at partition time
        allocated (bool): True while a process occupies the block
        occupant_id (Optional[str]): Id of the occupying process
        fragmentation (int): size - requested size while allocated, else 0
    """
    index: int
    size: int
    allocated: bool = False
    occupant_id: Optional[str] = None
    fragmentation: int = 0

    def __repr__(self):
        state = "A" if self.allocated else "F"
        return f"[{state}|{self.index}|{self.size}]"


@dataclass
class Process:
    process_id: str
    requested_size: int
    block_index: int
    strategy: Any  # strategies.Strategy


@dataclass
class MemoryState:
    """All mutable simulator state, owned by one AllocationManager."""
    capacity: int = 0
    blocks: List[Block] = field(default_factory=list)
    processes: Dict[str, Process] = field(default_factory=dict)
    cursor: int = UNSET_CURSOR


class BlockStore:
    """
    Ordered list of memory blocks over a shared MemoryState.

    `get`, `mark_allocated` and `mark_free` trust their caller: index
    bounds and block state are checked by the AllocationManager.
    """

    def __init__(self, state: MemoryState):
        self.state = state

    @property
    def blocks(self) -> List[Block]:
        return self.state.blocks

    def __len__(self):
        return len(self.state.blocks)

    # -----------------------------
    # Setup
    # -----------------------------
    def initialize(self, capacity: Any):
        size = as_positive_int(capacity)
        if size is None:
            raise InvalidCapacity(capacity)

        self.state.capacity = size
        self.clear()
        logger.info("Memory initialized with size %d KB", size)

    def partition(self, sizes: Sequence[Any]) -> List[Block]:
        valid = [s for s in (as_positive_int(v) for v in sizes) if s is not None]
        if not valid:
            raise InvalidPartition("Please enter valid block sizes")

        total = sum(valid)
        if total > self.state.capacity:
            raise InvalidPartition(
                f"Total block size ({total} KB) exceeds memory size ({self.state.capacity} KB)",
                total=total,
                capacity=self.state.capacity,
            )

        self.state.blocks = [Block(i, s) for i, s in enumerate(valid)]
        self.state.processes = {}
        self.state.cursor = UNSET_CURSOR
        logger.info("Created %d blocks totalling %d KB", len(valid), total)
        return self.state.blocks

    def clear(self):
        self.state.blocks = []
        self.state.processes = {}
        self.state.cursor = UNSET_CURSOR

    # -----------------------------
    # Mutators
    # -----------------------------
    def get(self, index: int) -> Block:
        return self.state.blocks[index]

    def mark_allocated(self, index: int, occupant_id: str, fragmentation: int):
        block = self.state.blocks[index]
        block.allocated = True
        block.occupant_id = occupant_id
        block.fragmentation = fragmentation

    def mark_free(self, index: int):
        block = self.state.blocks[index]
        block.allocated = False
        block.occupant_id = None
        block.fragmentation = 0

    # -----------------------------
    # Aggregates
    # -----------------------------
    @property
    def total_size(self) -> int:
        return sum(b.size for b in self.state.blocks)

    @property
    def free_size(self) -> int:
        return sum(b.size for b in self.state.blocks if not b.allocated)

    @property
    def unpartitioned_size(self) -> int:
        return max(0, self.state.capacity - self.total_size)
