import math
from bisect import bisect_right
from typing import Dict, List, NamedTuple

from polymaze.core.board import Board, NotNeighboursError


class CircularSize(NamedTuple):
    radius: int
    inner_radius: int


class PolarPosition(NamedTuple):
    r: int  # ring, counted from the centre
    t: int  # slot inside the ring


def ring_node_counts(radius: int) -> List[int]:
    """
    Cell count of every ring 0 .. radius - 1.

    A ring inherits the count of the ring inside it and doubles it once the
    arc length per cell grows past 2, which keeps cells roughly square.
    Only ever doubling keeps every cell attached to exactly one inner cell.
    """
    counts = [1]
    for i in range(1, radius):
        count = counts[i - 1]
        if 2 * math.pi * i / count > 2:
            count *= 2
        counts.append(count)
    return counts[:max(radius, 0)]


class CircularBoard(Board):
    """
    Concentric rings from inner_radius (inclusive) to radius (exclusive).
    Rings inside inner_radius are not stored at all.

    TOP_CW / TOP_CCW point outward. When the next ring doubles, a cell touches
    two outer cells: the one with the even slot is reached through TOP_CW,
    the odd one through TOP_CCW. BOTTOM points to the single inner cell.
    """
    # Bitmask Constants
    TOP_CW  = 0b00001
    TOP_CCW = 0b00010
    RIGHT   = 0b00100
    BOTTOM  = 0b01000
    LEFT    = 0b10000

    DIRECTIONS = (TOP_CW, TOP_CCW, RIGHT, BOTTOM, LEFT)
    ALL_WALLS = TOP_CW | TOP_CCW | RIGHT | BOTTOM | LEFT

    # BOTTOM has two opposites; it maps to the mask of both
    OPPOSITE = {
        TOP_CW: BOTTOM,
        TOP_CCW: BOTTOM,
        RIGHT: LEFT,
        LEFT: RIGHT,
        BOTTOM: TOP_CW | TOP_CCW,
    }

    __slots__ = ('radius', 'inner_radius', 'ring_counts', 'ring_offsets')

    def __init__(self, radius: int, inner_radius: int = 3):
        if not 0 <= inner_radius < radius:
            raise ValueError(
                f"Inner radius ({inner_radius}) must be non-negative and smaller than radius ({radius})"
            )
        self.radius = radius
        self.inner_radius = inner_radius
        self.ring_counts = ring_node_counts(radius)

        # ring_offsets[r] = index of the first cell of ring r, ring_offsets[radius] = total
        self.ring_offsets = [0] * (radius + 1)
        for r in range(inner_radius, radius):
            self.ring_offsets[r + 1] = self.ring_offsets[r] + self.ring_counts[r]

        super().__init__(self.ring_offsets[radius])

    @property
    def size(self) -> CircularSize:
        return CircularSize(self.radius, self.inner_radius)

    def ring_range(self) -> range:
        """Absolute numbers of the stored rings, innermost first."""
        return range(self.inner_radius, self.radius)

    def fan_out(self, r: int) -> int:
        """How many ring r + 1 cells touch one ring r cell (1 or 2)."""
        return self.ring_counts[r + 1] // self.ring_counts[r]

    def _on_grid(self, position) -> bool:
        r, t = position
        return 0 <= r < self.radius and 0 <= t < self.ring_counts[r]

    def contains(self, position) -> bool:
        return self._on_grid(position) and position[0] >= self.inner_radius

    def to_index(self, position) -> int:
        if not self.contains(position):
            raise IndexError(f"Position {tuple(position)} out of bounds")
        r, t = position
        return self.ring_offsets[r] + t

    def to_position(self, index: int) -> PolarPosition:
        if not 0 <= index < len(self.cells):
            raise IndexError(f"Index {index} out of bounds")
        r = bisect_right(self.ring_offsets, index, self.inner_radius, self.radius + 1) - 1
        return PolarPosition(r, index - self.ring_offsets[r])

    @classmethod
    def opposing_direction(cls, direction: int) -> int:
        return cls.OPPOSITE[direction]

    def relative_direction(self, pos1, pos2) -> int:
        if not (self._on_grid(pos1) and self._on_grid(pos2)):
            raise NotNeighboursError(pos1, pos2)

        r1, t1 = pos1
        r2, t2 = pos2

        if r1 == r2:
            n = self.ring_counts[r1]
            # Rings of one or two cells do not wrap around
            if t2 == t1 + 1 or (n > 2 and t1 == n - 1 and t2 == 0):
                return self.RIGHT
            if t2 == t1 - 1 or (n > 2 and t1 == 0 and t2 == n - 1):
                return self.LEFT
        elif r2 == r1 + 1:
            fan_out = self.fan_out(r1)
            if t2 // fan_out == t1:
                if fan_out == 2 and t2 % 2 == 1:
                    return self.TOP_CCW
                return self.TOP_CW
        elif r2 == r1 - 1:
            if t1 // self.fan_out(r2) == t2:
                return self.BOTTOM

        raise NotNeighboursError(pos1, pos2)

    def _adjacent_positions(self, position) -> Dict[int, PolarPosition]:
        self.to_index(position)  # bounds check
        r, t = position
        n = self.ring_counts[r]
        adjacent = {}

        if t + 1 < n or n > 2:
            adjacent[self.RIGHT] = PolarPosition(r, (t + 1) % n)
        if t > 0 or n > 2:
            adjacent[self.LEFT] = PolarPosition(r, (t - 1) % n)

        if r > 0:
            adjacent[self.BOTTOM] = PolarPosition(r - 1, t // self.fan_out(r - 1))

        if r + 1 < self.radius:
            if self.fan_out(r) == 2:
                adjacent[self.TOP_CW] = PolarPosition(r + 1, 2 * t)
                adjacent[self.TOP_CCW] = PolarPosition(r + 1, 2 * t + 1)
            else:
                adjacent[self.TOP_CW] = PolarPosition(r + 1, t)

        return adjacent

    def get_rows(self) -> List[List[int]]:
        return [
            list(range(self.ring_offsets[r], self.ring_offsets[r + 1]))
            for r in self.ring_range()
        ]

    def get_next_row_neighbours(self, index: int) -> List[int]:
        r, t = self.to_position(index)
        if r + 1 >= self.radius:
            return []

        if self.fan_out(r) == 2:
            first = self.to_index((r + 1, 2 * t))
            return [first, first + 1]
        return [self.to_index((r + 1, t))]
