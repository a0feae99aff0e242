# engine.py

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Sequence

from blocks import Block, BlockStore, MemoryState, Process, as_positive_int
from errors import (
    AllocationError,
    DuplicateProcessId,
    InvalidCapacity,
    InvalidPartition,
    InvalidProcessId,
    InvalidSize,
    NoBlocksDefined,
    NoSuitableBlock,
)
from strategies import Strategy, select_block

logger = logging.getLogger(__name__)

DEFAULT_EVENT_LOG_LIMIT = 500


@dataclass(frozen=True)
class AllocationResult:
    block_index: int
    fragmentation: int


class AllocationManager:
    """
    Fixed-partition allocator: validates requests, runs a placement
    strategy and commits the result to the block store.

    Every operation either applies all of its changes or raises before
    touching the state.
    """

    def __init__(self, state: Optional[MemoryState] = None,
                 event_log_limit: int = DEFAULT_EVENT_LOG_LIMIT):
        self.state = state if state is not None else MemoryState()
        self.store = BlockStore(self.state)
        # oldest events drop off once the limit is reached
        self.event_log: Deque[str] = deque(maxlen=event_log_limit)

    # -----------------------------
    # Views
    # -----------------------------
    @property
    def capacity(self) -> int:
        return self.state.capacity

    @property
    def blocks(self) -> List[Block]:
        return self.state.blocks

    @property
    def processes(self) -> Dict[str, Process]:
        return self.state.processes

    @property
    def cursor(self) -> int:
        return self.state.cursor

    # -----------------------------
    # Setup
    # -----------------------------
    def initialize_memory(self, capacity):
        try:
            self.store.initialize(capacity)
        except InvalidCapacity:
            logger.warning("Rejected memory size %r", capacity)
            raise
        self.event_log.append(f"Memory initialized with size {self.capacity} KB")

    def define_partition(self, sizes: Sequence[int]) -> List[Block]:
        try:
            blocks = self.store.partition(sizes)
        except InvalidPartition as e:
            logger.warning("Rejected block sizes %r: %s", sizes, e)
            raise
        self.event_log.append(
            "Blocks created: " + ", ".join(f"{b.size} KB" for b in blocks)
        )
        return blocks

    def reset(self):
        self.store.clear()
        self.event_log.append("All blocks and processes cleared")
        logger.info("Allocator reset")

    # -----------------------------
    # Allocate / Deallocate
    # -----------------------------
    def allocate(self, process_id: str, size, strategy) -> AllocationResult:
        """
        Place a process into a block chosen by `strategy`.

        Args:
            process_id (str): Unique process name
            size (int): Requested size in KB
            strategy: Strategy member, tag or label

        Returns:
            AllocationResult: Chosen block index and its internal fragmentation

        Raises:
            AllocationError: One of its subclasses; nothing is modified
        """
        try:
            if not isinstance(process_id, str) or not process_id.strip():
                raise InvalidProcessId(process_id)
            process_id = process_id.strip()
            if process_id in self.state.processes:
                raise DuplicateProcessId(process_id)

            req = as_positive_int(size)
            if req is None:
                raise InvalidSize(size)
            if not self.state.blocks:
                raise NoBlocksDefined()

            strategy = Strategy.parse(strategy)
            index = select_block(strategy, self.state.blocks, req, self.state.cursor)
            if index is None:
                raise NoSuitableBlock(process_id, req, strategy.label)
        except AllocationError as e:
            logger.warning("Allocation of %r rejected: %s", process_id, e)
            raise

        block = self.store.get(index)
        fragmentation = block.size - req
        self.store.mark_allocated(index, process_id, fragmentation)
        self.state.processes[process_id] = Process(process_id, req, index, strategy)
        if strategy is Strategy.NEXT_FIT:
            self.state.cursor = index

        self.event_log.append(
            f"Allocated: {process_id} ({req} KB) -> Block {index} "
            f"via {strategy.label}, fragmentation {fragmentation} KB"
        )
        logger.info("Allocated %s (%d KB) to block %d using %s",
                    process_id, req, index, strategy.label)
        return AllocationResult(index, fragmentation)

    def deallocate(self, process_id: str) -> Optional[int]:
        """
        Free the block held by `process_id`.

        The id is trimmed the same way `allocate` trims it. Unknown ids and
        non-string ids are ignored.
        """
        if not isinstance(process_id, str):
            return None
        process_id = process_id.strip()
        process = self.state.processes.pop(process_id, None)
        if process is None:
            return None

        self.store.mark_free(process.block_index)
        self.event_log.append(f"Deallocated: {process_id} from Block {process.block_index}")
        logger.info("Deallocated %s from block %d", process_id, process.block_index)
        return process.block_index

    # -----------------------------
    # Snapshots
    # -----------------------------
    def block_table(self) -> List[dict]:
        return [
            {
                "block": b.index,
                "size_kb": b.size,
                "status": "Allocated" if b.allocated else "Free",
                "process": b.occupant_id,
                "fragmentation_kb": b.fragmentation,
            }
            for b in self.state.blocks
        ]

    def process_table(self) -> List[dict]:
        return [
            {
                "process": p.process_id,
                "size_kb": p.requested_size,
                "block": p.block_index,
                "algorithm": p.strategy.label,
            }
            for p in self.state.processes.values()
        ]

    # --------------------------------------
    # Fragmentation Metrics
    # --------------------------------------
    def get_fragmentation_metrics(self) -> dict:
        free_blocks = [b.size for b in self.state.blocks if not b.allocated]
        total_free = sum(free_blocks)
        requested = sum(p.requested_size for p in self.state.processes.values())

        # External fragmentation: share of free memory outside the largest free block
        if total_free == 0:
            external_frag = 0
        else:
            external_frag = 1 - (max(free_blocks) / total_free)

        utilization = requested / self.capacity if self.capacity else 0

        return {
            "total_internal": sum(b.fragmentation for b in self.state.blocks),
            "free": total_free,
            "unpartitioned": self.store.unpartitioned_size,
            "external": round(external_frag, 4),
            "utilization": round(utilization, 4),
        }
