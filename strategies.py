# strategies.py

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from blocks import UNSET_CURSOR, Block
from errors import UnknownStrategy

logger = logging.getLogger(__name__)


class Strategy(Enum):
    """
    Placement strategies. Values are the tags used by callers and config.
    """
    FIRST_FIT = "first-fit"
    BEST_FIT = "best-fit"
    WORST_FIT = "worst-fit"
    NEXT_FIT = "next-fit"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()

    @classmethod
    def parse(cls, value) -> "Strategy":
        """
        Accept a Strategy, a tag ("best-fit") or a label ("Best Fit").

        Raises:
            UnknownStrategy: If `value` names no strategy
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = value.strip().lower().replace(" ", "-").replace("_", "-")
            for strategy in cls:
                if strategy.value == tag:
                    return strategy
        raise UnknownStrategy(value)


# -----------------------------
# Algorithms
# -----------------------------
def _fits(block: Block, size: int) -> bool:
    return not block.allocated and block.size >= size


def first_fit(blocks: Sequence[Block], size: int) -> Optional[int]:
    for i, block in enumerate(blocks):
        if _fits(block, size):
            return i
    return None


def best_fit(blocks: Sequence[Block], size: int) -> Optional[int]:
    best_index = None
    best_size = float('inf')

    # strict < keeps the lowest index on equal sizes
    for i, block in enumerate(blocks):
        if _fits(block, size) and block.size < best_size:
            best_size = block.size
            best_index = i

    return best_index


def worst_fit(blocks: Sequence[Block], size: int) -> Optional[int]:
    worst_index = None
    worst_size = -1

    for i, block in enumerate(blocks):
        if _fits(block, size) and block.size > worst_size:
            worst_size = block.size
            worst_index = i

    return worst_index


def next_fit(blocks: Sequence[Block], size: int, cursor: int = UNSET_CURSOR) -> Optional[int]:
    """
    First Fit resumed just after `cursor`, wrapping once around the list.

    With the cursor unset this is exactly First Fit. The caller owns the
    cursor and is expected to move it to the returned index.
    """
    n = len(blocks)
    if n == 0:
        return None
    if cursor == UNSET_CURSOR:
        return first_fit(blocks, size)

    start = (cursor + 1) % n
    for offset in range(n):
        i = (start + offset) % n
        if _fits(blocks[i], size):
            return i
    return None


_SELECTORS: Dict[Strategy, Callable[..., Optional[int]]] = {
    Strategy.FIRST_FIT: first_fit,
    Strategy.BEST_FIT: best_fit,
    Strategy.WORST_FIT: worst_fit,
}


def select_block(strategy, blocks: Sequence[Block], size: int,
                 cursor: int = UNSET_CURSOR) -> Optional[int]:
    """
    Pick a block index for `size` using `strategy`, or None if nothing fits.

    Args:
        strategy: A Strategy or anything Strategy.parse accepts
        blocks: Current block list, not modified
        size: Requested size in KB
        cursor: Next Fit cursor, ignored by the other strategies
    """
    strategy = Strategy.parse(strategy)
    if not blocks:
        index = None
    elif strategy is Strategy.NEXT_FIT:
        index = next_fit(blocks, size, cursor)
    else:
        index = _SELECTORS[strategy](blocks, size)

    logger.debug("%s for %d KB -> %s", strategy.label, size, index)
    return index
