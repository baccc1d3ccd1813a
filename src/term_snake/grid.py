"""Playing field: occupancy mesh, boundaries and target placement."""

from __future__ import annotations

import logging

import numpy as np

from term_snake.snake import Point

logger = logging.getLogger(__name__)

_DEFAULT_SPAWN_ATTEMPTS = 64


class BoardSaturatedError(RuntimeError):
    """Raised when a target is requested but every cell is occupied."""


class Grid:
    """NumPy-backed occupancy mesh with a single consumable target.

    ``map_width`` and ``map_height`` are the largest valid x and y, so
    the mesh holds ``(map_width + 1) * (map_height + 1)`` cells. Cells
    are indexed ``[y, x]`` to match NumPy's row-major layout. The target
    is never marked in the mesh.
    """

    def __init__(
        self,
        map_width: int,
        map_height: int,
        rng: np.random.Generator | None = None,
        max_spawn_attempts: int = _DEFAULT_SPAWN_ATTEMPTS,
    ) -> None:
        if map_width < 3 or map_height < 3:
            raise ValueError("Grid dimensions must be at least 4×4.")
        if max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")
        self.map_width = map_width
        self.map_height = map_height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_spawn_attempts = max_spawn_attempts
        self.cells = np.zeros((map_height + 1, map_width + 1), dtype=bool)
        self.target: Point | None = None

    @property
    def total_cells(self) -> int:
        """Number of playable cells."""
        return int(self.cells.size)

    @property
    def center(self) -> Point:
        return Point(self.map_width // 2, self.map_height // 2)

    def inside_boundaries(self, point: Point) -> bool:
        """Check whether *point* lies on the field, edges included."""
        x, y = point
        return 0 <= x <= self.map_width and 0 <= y <= self.map_height

    def mark_occupied(self, point: Point) -> None:
        self.cells[point.y, point.x] = True

    def mark_free(self, point: Point) -> None:
        self.cells[point.y, point.x] = False

    def is_occupied(self, point: Point) -> bool:
        return bool(self.cells[point.y, point.x])

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def free_cells(self) -> list[Point]:
        """Return every unoccupied cell in row-major order."""
        ys, xs = np.nonzero(~self.cells)
        return [Point(x, y) for x, y in zip(xs.tolist(), ys.tolist(), strict=True)]

    def spawn_target(self) -> Point:
        """Place the target on a uniformly chosen free cell.

        Rejection sampling is tried first. Once the board is crowded
        enough for every attempt to miss, the target is picked directly
        from the list of free cells. Both paths are uniform over free
        cells.
        """
        for _ in range(self.max_spawn_attempts):
            x = int(self.rng.integers(self.map_width + 1))
            y = int(self.rng.integers(self.map_height + 1))
            if not self.cells[y, x]:
                self.target = Point(x, y)
                logger.debug("Target spawned at (%d, %d).", x, y)
                return self.target

        free = self.free_cells()
        if not free:
            raise BoardSaturatedError("No free cell left for the target.")
        logger.warning(
            "Rejection sampling missed %d times; picking from %d free cells.",
            self.max_spawn_attempts, len(free),
        )
        self.target = free[int(self.rng.integers(len(free)))]
        return self.target
