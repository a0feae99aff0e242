"""
Allocation Errors

Every failure the simulator reports back to its caller. None of them are
fatal: the engine state is left untouched and the caller may correct the
input and try again.
"""

from typing import Any, Dict, Optional


class SimulatorError(Exception):
    """
    Base class for all simulator errors.

    Attributes:
        message (str): Human-readable error description
        context (dict): Extra values for programmatic handling
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class InvalidCapacity(SimulatorError, ValueError):
    """Memory size is non-numeric or not positive."""

    def __init__(self, capacity: Any) -> None:
        super().__init__(
            "Please enter a valid memory size",
            context={"capacity": capacity},
        )
        self.capacity = capacity


class InvalidPartition(SimulatorError, ValueError):
    """
    Block sizes cannot form a partition.

    Raised when no positive sizes remain after filtering, or when the
    block sizes add up to more than the memory capacity.
    """

    def __init__(self, message: str, total: int = 0, capacity: int = 0) -> None:
        super().__init__(message, context={"total": total, "capacity": capacity})
        self.total = total
        self.capacity = capacity


# -----------------------------
# Allocation
# -----------------------------

class AllocationError(SimulatorError):
    """Base class for everything `allocate` can reject."""


class InvalidProcessId(AllocationError, ValueError):
    def __init__(self, process_id: Any) -> None:
        super().__init__("Please enter a process ID", context={"process_id": process_id})
        self.process_id = process_id


class InvalidSize(AllocationError, ValueError):
    def __init__(self, size: Any) -> None:
        super().__init__("Please enter a valid process size", context={"size": size})
        self.size = size


class DuplicateProcessId(AllocationError):
    def __init__(self, process_id: str) -> None:
        super().__init__(
            f"Process with ID {process_id} already exists",
            context={"process_id": process_id},
        )
        self.process_id = process_id


class NoBlocksDefined(AllocationError):
    def __init__(self) -> None:
        super().__init__("Please create memory blocks first")


class UnknownStrategy(AllocationError, ValueError):
    def __init__(self, strategy: Any) -> None:
        super().__init__(
            f"Unknown placement strategy: {strategy!r}",
            context={"strategy": strategy},
        )
        self.strategy = strategy


class NoSuitableBlock(AllocationError):
    """
    The chosen strategy found no free block large enough.

    Example:
        >>> raise NoSuitableBlock("P1", 200, "First Fit")
    """

    def __init__(self, process_id: str, size: int, strategy: str) -> None:
        super().__init__(
            f"Cannot allocate process {process_id} ({size} KB) using {strategy}",
            context={"process_id": process_id, "size": size, "strategy": strategy},
        )
        self.process_id = process_id
        self.size = size
        self.strategy = strategy
