"""Snake representation: segment chain, movement, growth and collisions."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator
from typing import NamedTuple

import numpy as np


class Point(NamedTuple):
    """Grid-relative integer coordinate."""

    x: int
    y: int

    def __add__(self, other: tuple[int, int]) -> Point:  # type: ignore[override]
        dx, dy = other
        return Point(self.x + dx, self.y + dy)


class Direction(enum.IntEnum):
    """Cardinal directions in clockwise order.

    The clockwise ordering makes the reverse of ``d`` equal to
    ``(d + 2) % 4``.
    """

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def vector(self) -> tuple[int, int]:
        """Return the (dx, dy) unit step. North decreases y."""
        return _VECTORS[self]

    @property
    def reverse(self) -> Direction:
        return Direction((self + 2) % 4)


_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class Segment:
    """One body cell of a snake.

    A segment is linked while it sits in a snake's chain. The segment
    returned by :meth:`Snake.advance` is detached and belongs to the
    caller until it is dropped or handed back to :meth:`Snake.grow`.
    """

    __slots__ = ("pos", "linked")

    def __init__(self, pos: Point) -> None:
        self.pos = pos
        self.linked = False

    def __repr__(self) -> str:
        state = "linked" if self.linked else "detached"
        return f"Segment({self.pos.x}, {self.pos.y}, {state})"


class Snake:
    """A snake held as a deque of segments, tail first and head last.

    Pushing the new head and popping the tail are both O(1), so
    :meth:`advance` never copies the body.
    """

    def __init__(
        self,
        center: Point,
        rng: np.random.Generator | None = None,
        direction: Direction | None = None,
    ) -> None:
        self._chain: deque[Segment] = deque()
        self._link(Segment(Point(*center)), head=True)
        if direction is None:
            rng = rng if rng is not None else np.random.default_rng()
            direction = Direction(int(rng.integers(len(Direction))))
        self.direction = direction
        self.length = 1
        self._detached: Segment | None = None

    @classmethod
    def from_points(
        cls,
        points: list[tuple[int, int]],
        direction: Direction,
    ) -> Snake:
        """Build a snake from tail-to-head points facing *direction*."""
        if not points:
            raise ValueError("A snake needs at least 1 segment.")
        snake = cls(Point(*points[0]), direction=direction)
        for x, y in points[1:]:
            snake._link(Segment(Point(x, y)), head=True)
        snake.length = len(points)
        return snake

    @property
    def head(self) -> Segment:
        return self._chain[-1]

    @property
    def tail(self) -> Segment:
        return self._chain[0]

    def __len__(self) -> int:
        return len(self._chain)

    def __iter__(self) -> Iterator[Segment]:
        """Iterate segments from tail to head."""
        return iter(self._chain)

    def positions(self) -> list[Point]:
        """Return segment positions from tail to head."""
        return [seg.pos for seg in self._chain]

    def neck(self) -> Segment | None:
        """Return the segment right behind the head, if any."""
        if len(self._chain) < 2:
            return None
        return self._chain[-2]

    def change_direction(self, direction: Direction) -> None:
        """Turn towards *direction*.

        Repeating the current direction does nothing. Doubling back is
        ignored unless the snake is a single segment long.
        """
        if direction == self.direction:
            return
        if self.length > 1 and direction == self.direction.reverse:
            return
        self.direction = direction

    def advance(self) -> Segment:
        """Push a new head one step ahead and detach the tail.

        Returns the detached tail segment.
        """
        new_head = Segment(self.head.pos + self.direction.vector)
        self._link(new_head, head=True)
        old_tail = self._chain.popleft()
        old_tail.linked = False
        self._detached = old_tail
        return old_tail

    def grow(self, segment: Segment) -> None:
        """Reattach the tail detached by the preceding :meth:`advance`."""
        if segment is not self._detached or segment.linked:
            raise ValueError(
                "grow() only accepts the segment returned by the last advance().",
            )
        self._link(segment, head=False)
        self._detached = None
        self.length += 1

    def self_collision(self) -> Point | None:
        """Return the first point where two segments coincide, or ``None``.

        Segments are scanned from head to tail and each is compared with
        the segments behind it. The winner is the head-most segment that
        has a duplicate further back. A single tail-to-head pass with a
        seen-set finds the same segment: the last repeat it meets.
        """
        seen: set[Point] = set()
        collision: Point | None = None
        for seg in self._chain:
            if seg.pos in seen:
                collision = seg.pos
            else:
                seen.add(seg.pos)
        return collision

    def _link(self, segment: Segment, *, head: bool) -> None:
        if segment.linked:
            raise ValueError("Segment already belongs to a chain.")
        segment.linked = True
        if head:
            self._chain.append(segment)
        else:
            self._chain.appendleft(segment)
