# utils.py

import random
import re
from typing import List, Optional

from strategies import Strategy

FREE_COLOR = "#d3d3d3"
UNPARTITIONED_COLOR = "#f5f5f5"

_LEADING_INT = re.compile(r"^[+-]?\d+")


def get_color(allocated, process_id=None):
    """Return a color for allocated/free blocks."""
    if not allocated:
        return FREE_COLOR
    # pastel color, stable per process across reruns
    rng = random.Random(process_id)
    return f"hsl({rng.randint(0, 360)}, 70%, 75%)"


def parse_int(text) -> Optional[int]:
    """Leading integer of `text` (like JS parseInt), or None."""
    if text is None:
        return None
    match = _LEADING_INT.match(str(text).strip())
    if match is None:
        return None
    return int(match.group())


def parse_sizes(text) -> List[int]:
    """Comma separated sizes, keeping only positive integers."""
    sizes = (parse_int(part) for part in str(text or "").split(","))
    return [s for s in sizes if s is not None and s > 0]


ALGORITHM_INFO = {
    Strategy.FIRST_FIT: {
        "title": "First Fit Algorithm",
        "summary": "Allocates the first memory block that is large enough to accommodate the process.",
        "points": [
            "Searches from the beginning of memory",
            "Selects the first block that is large enough",
            "Fast allocation time",
            "May leave small fragments near the beginning of memory",
        ],
        "complexity": "O(n) where n is the number of memory blocks",
    },
    Strategy.BEST_FIT: {
        "title": "Best Fit Algorithm",
        "summary": "Allocates the smallest memory block that is large enough to accommodate the process.",
        "points": [
            "Searches through all memory blocks",
            "Selects the block with the least amount of wasted space",
            "Minimizes memory fragmentation",
            "But leaves small unusable fragments scattered throughout memory",
        ],
        "complexity": "O(n) where n is the number of memory blocks",
    },
    Strategy.WORST_FIT: {
        "title": "Worst Fit Algorithm",
        "summary": "Allocates the largest memory block available for the process.",
        "points": [
            "Searches through all memory blocks",
            "Selects the largest available block",
            "Leaves larger fragments that may be usable for future processes",
            "May lead to inefficient memory usage over time",
        ],
        "complexity": "O(n) where n is the number of memory blocks",
    },
    Strategy.NEXT_FIT: {
        "title": "Next Fit Algorithm",
        "summary": "Similar to First Fit, but starts searching from the location of the last allocation.",
        "points": [
            "Continues search from where the last search ended",
            "More evenly distributes allocations throughout memory",
            "Better performance than First Fit in some cases",
            "May still lead to fragmentation",
        ],
        "complexity": "O(n) where n is the number of memory blocks",
    },
}


def explain(strategy) -> str:
    """Markdown explanation of a strategy."""
    info = ALGORITHM_INFO[Strategy.parse(strategy)]
    bullets = "\n".join(f"- {p}" for p in info["points"])
    return (
        f"### {info['title']}\n"
        f"{info['summary']}\n\n"
        f"{bullets}\n\n"
        f"**Time Complexity:** {info['complexity']}"
    )
