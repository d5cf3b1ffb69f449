from typing import Dict, List, NamedTuple

from polymaze.core.board import Board, NotNeighboursError


class Size(NamedTuple):
    width: int
    height: int


class Position(NamedTuple):
    x: int
    y: int


class RectangularBoard(Board):
    # Bitmask Constants
    TOP    = 0b0001
    RIGHT  = 0b0010
    BOTTOM = 0b0100
    LEFT   = 0b1000

    DIRECTIONS = (TOP, RIGHT, BOTTOM, LEFT)

    # All walls present by default (T|R|B|L) = 15
    ALL_WALLS = TOP | RIGHT | BOTTOM | LEFT

    # Direction Helpers
    DX = {TOP: 0, BOTTOM: 0, RIGHT: 1, LEFT: -1}
    DY = {TOP: -1, BOTTOM: 1, RIGHT: 0, LEFT: 0}

    __slots__ = ('width', 'height')

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Board size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        super().__init__(width * height)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def contains(self, position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def to_index(self, position) -> int:
        x, y = position
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def to_position(self, index: int) -> Position:
        if not 0 <= index < len(self.cells):
            raise IndexError(f"Index {index} out of bounds")
        return Position(index % self.width, index // self.width)

    @classmethod
    def opposing_direction(cls, direction: int) -> int:
        """
        Rotates the direction by two bits inside the 4-bit field.
        opposing_direction(LEFT) -> RIGHT
        """
        return ((direction << 2) | (direction >> 2)) & cls.ALL_WALLS

    def relative_direction(self, pos1, pos2) -> int:
        dx = pos2[0] - pos1[0]
        dy = pos2[1] - pos1[1]
        for direction in self.DIRECTIONS:
            if self.DX[direction] == dx and self.DY[direction] == dy:
                return direction
        raise NotNeighboursError(pos1, pos2)

    def _adjacent_positions(self, position) -> Dict[int, Position]:
        # Boundaries come from index arithmetic, which must agree with to_index
        index = self.to_index(position)
        width = self.width
        adjacent = {}

        if index >= width:
            adjacent[self.TOP] = self.to_position(index - width)
        if (index + 1) % width != 0:
            adjacent[self.RIGHT] = self.to_position(index + 1)
        if index < len(self.cells) - width:
            adjacent[self.BOTTOM] = self.to_position(index + width)
        if index % width != 0:
            adjacent[self.LEFT] = self.to_position(index - 1)

        return adjacent

    def get_rows(self) -> List[List[int]]:
        return [list(range(y * self.width, (y + 1) * self.width)) for y in range(self.height)]

    def get_next_row_neighbours(self, index: int) -> List[int]:
        below = index + self.width
        if below < len(self.cells):
            return [below]
        return []
