"""
Tile-to-Image Assignment
========================
Distributes a small pool of images over a larger grid so that every image is
used a balanced number of times and no two orthogonally adjacent cells show the
same image.

The search is an exhaustive depth-first backtracking over the cells in
row-major order (explicit stack, mutate-and-undo). Only the up and left
neighbours are checked, the others are not placed yet. Candidates with the most
remaining quota are tried first, which keeps the search shallow for the usual
wall sizes (up to ~8x10). The worst case is still exponential; pass
`max_steps` to bound it.

When no adjacency-free assignment exists (e.g. a single image), the grid is
filled round-robin without the adjacency check so that a renderable,
count-respecting grid is always returned.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

logger = logging.getLogger(__name__)

AssignmentGrid = list[list[int]]

UNASSIGNED = -1


def quotas(total: int, image_count: int) -> list[int]:
    """
    Target number of occurrences for every image index.

    The first `total % image_count` indices receive one extra slot.
    """
    base_count, remainder = divmod(total, image_count)
    remaining = [base_count] * image_count
    for i in range(remainder):
        remaining[i] += 1
    return remaining


def has_adjacent_repeat(grid: AssignmentGrid) -> bool:
    """True if any two horizontally or vertically adjacent cells share an index."""
    for r, row in enumerate(grid):
        for c, idx in enumerate(row):
            if c > 0 and row[c - 1] == idx:
                return True
            if r > 0 and grid[r - 1][c] == idx:
                return True
    return False


@dataclass
class _Frame:
    """One cell of the depth-first search."""
    pos: int
    candidates: list[int]
    next_candidate: int = 0
    placed: Optional[int] = None


@dataclass
class _Search:
    rows: int
    columns: int
    remaining: list[int]
    max_steps: Optional[int] = None
    grid: AssignmentGrid = field(init=False)
    steps: int = 0

    def __post_init__(self) -> None:
        self.grid = [[UNASSIGNED] * self.columns for _ in range(self.rows)]

    def _neighbors_ok(self, r: int, c: int, idx: int) -> bool:
        if r > 0 and self.grid[r - 1][c] == idx:
            return False
        if c > 0 and self.grid[r][c - 1] == idx:
            return False
        return True

    def _candidates(self, pos: int) -> list[int]:
        r, c = divmod(pos, self.columns)
        candidates = [
            i for i, left in enumerate(self.remaining)
            if left > 0 and self._neighbors_ok(r, c, i)
        ]
        # Stable sort: equal quotas keep ascending index order
        return sorted(candidates, key=lambda i: self.remaining[i], reverse=True)

    def run(self) -> Optional[bool]:
        """
        Returns:
            True when a complete assignment was found, False when the search space
            is exhausted, None when the step budget ran out.
        """
        total = self.rows * self.columns
        stack = [_Frame(0, self._candidates(0))]

        while stack:
            frame = stack[-1]
            r, c = divmod(frame.pos, self.columns)

            # Coming back to this cell: undo the previous attempt
            if frame.placed is not None:
                self.remaining[frame.placed] += 1
                self.grid[r][c] = UNASSIGNED
                frame.placed = None

            if frame.next_candidate >= len(frame.candidates):
                stack.pop()
                continue

            idx = frame.candidates[frame.next_candidate]
            frame.next_candidate += 1
            self.grid[r][c] = idx
            self.remaining[idx] -= 1
            frame.placed = idx

            self.steps += 1
            if self.max_steps is not None and self.steps > self.max_steps:
                return None

            if frame.pos + 1 == total:
                return True
            stack.append(_Frame(frame.pos + 1, self._candidates(frame.pos + 1)))

        return False


def _round_robin_fill(rows: int, columns: int, remaining: list[int]) -> AssignmentGrid:
    """Fill cells cyclically, skipping exhausted quotas. Adjacency is not checked."""
    image_count = len(remaining)
    grid = [[UNASSIGNED] * columns for _ in range(rows)]
    pointer = 0
    for r in range(rows):
        for c in range(columns):
            while remaining[pointer] == 0:
                pointer = (pointer + 1) % image_count
            grid[r][c] = pointer
            remaining[pointer] -= 1
            pointer = (pointer + 1) % image_count
    return grid


def assign(rows: int, columns: int, image_count: int, *, max_steps: Optional[int] = None) -> AssignmentGrid:
    """
    Assign an image index to every cell of a rows x columns grid.

    Args:
        rows: Number of grid rows (>= 1).
        columns: Number of grid columns (>= 1).
        image_count: Size of the image pool. With no images every cell gets 0.
        max_steps: Optional limit on the number of placements the backtracking
            may try before giving up and using the fallback fill.

    Raises:
        ValueError: If the grid has no cells.

    Returns:
        A rows x columns list of image indices in [0, image_count).
    """
    if rows < 1 or columns < 1:
        raise ValueError(f"Grid must have at least one row and one column, got {rows}x{columns}.")

    if image_count <= 0:
        return [[0] * columns for _ in range(rows)]

    total = rows * columns
    search = _Search(rows, columns, quotas(total, image_count), max_steps=max_steps)
    found = search.run()
    if found:
        logger.debug(f"Assigned {image_count} images to {rows}x{columns} grid in {search.steps} steps.")
        return search.grid

    if found is None:
        logger.warning(f"Assignment search stopped after {search.steps} steps; using fallback fill.")
    else:
        logger.warning(
            f"No adjacency-free assignment of {image_count} images on a {rows}x{columns} grid; using fallback fill."
        )
    return _round_robin_fill(rows, columns, quotas(total, image_count))
