from abc import ABC, abstractmethod
from array import array
from typing import Callable, Dict, List, Tuple


class NotNeighboursError(ValueError):
    """Raised when a wall/direction query is made across two non-adjacent cells."""

    def __init__(self, pos1, pos2):
        super().__init__(f"{tuple(pos1)} and {tuple(pos2)} are not neighbours")
        self.pos1 = pos1
        self.pos2 = pos2


class RowTopology(ABC):
    """
    The only view of a board the row-sweep generator gets.
    Any grid shape that can hand out rows and next-row neighbours plugs in here.
    """

    __slots__ = ()

    @abstractmethod
    def get_rows(self) -> List[List[int]]:
        """Cell indexes grouped by row, in sweep order."""

    @abstractmethod
    def remove_wall_between(self, index1: int, index2: int):
        """Opens the passage between two neighbouring cell indexes."""

    @abstractmethod
    def get_next_row_neighbours(self, index: int) -> List[int]:
        """Indexes of the cells in the following row that touch `index`."""


class Board(RowTopology):
    """
    Flat byte-per-cell storage shared by every topology.

    Low bits of a cell are wall flags, one per direction of the topology.
    A set bit means the wall on that side is standing.
    The high bit marks a cell as structurally absent.
    """

    # Flags
    DISABLED = 0b10000000

    # Overridden per topology
    DIRECTIONS: Tuple[int, ...] = ()
    ALL_WALLS = 0

    __slots__ = ('cells',)

    def __init__(self, node_count: int):
        # Boards start fully walled; generation only ever removes walls
        self.cells = array('B', [self.ALL_WALLS] * node_count)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    @abstractmethod
    def size(self):
        """Topology specific size metadata."""

    @abstractmethod
    def contains(self, position) -> bool:
        """True if the position maps onto a slot of the cell array."""

    @abstractmethod
    def to_index(self, position) -> int:
        pass

    @abstractmethod
    def to_position(self, index: int):
        pass

    @classmethod
    @abstractmethod
    def opposing_direction(cls, direction: int) -> int:
        pass

    @abstractmethod
    def relative_direction(self, pos1, pos2) -> int:
        """
        Direction pointing from pos1 towards pos2.
        Raises NotNeighboursError if the two positions are not adjacent.
        """

    @abstractmethod
    def _adjacent_positions(self, position) -> Dict[int, object]:
        """Geometrically adjacent in-domain positions keyed by direction."""

    @staticmethod
    def has_cell_wall(cell: int, direction: int) -> bool:
        return (cell & direction) != 0

    @staticmethod
    def set_cell_wall(cell: int, direction: int) -> int:
        return cell | direction

    @staticmethod
    def remove_cell_wall(cell: int, direction: int) -> int:
        return cell & ~direction

    @classmethod
    def is_enabled(cls, cell: int) -> bool:
        return (cell & cls.DISABLED) == 0

    def get_cell(self, position) -> int:
        return self.cells[self.to_index(position)]

    def is_active(self, position) -> bool:
        return self.contains(position) and self.is_enabled(self.get_cell(position))

    def disable_cell(self, position):
        self.cells[self.to_index(position)] |= self.DISABLED

    def active_count(self) -> int:
        return sum(1 for cell in self.cells if self.is_enabled(cell))

    def has_wall(self, position, direction: int) -> bool:
        return self.has_cell_wall(self.get_cell(position), direction)

    def set_wall(self, position, direction: int):
        idx = self.to_index(position)
        self.cells[idx] = self.set_cell_wall(self.cells[idx], direction)

    def remove_wall(self, position, direction: int):
        idx = self.to_index(position)
        self.cells[idx] = self.remove_cell_wall(self.cells[idx], direction)

    def inter_wall_directions(self, pos1, pos2) -> Tuple[int, int]:
        """
        The (pos1 side, pos2 side) direction pair naming the wall between two cells.
        Each side is resolved on its own, which matters for topologies where
        a direction has more than one opposite.
        """
        return self.relative_direction(pos1, pos2), self.relative_direction(pos2, pos1)

    def _apply_inter_wall(self, pos1, pos2, fn: Callable[[int, int], int]):
        dir1, dir2 = self.inter_wall_directions(pos1, pos2)
        for position, direction in ((pos1, dir1), (pos2, dir2)):
            # Inactive sides are skipped
            if self.is_active(position):
                idx = self.to_index(position)
                self.cells[idx] = fn(self.cells[idx], direction)

    def remove_inter_wall(self, pos1, pos2):
        self._apply_inter_wall(pos1, pos2, self.remove_cell_wall)

    def set_inter_wall(self, pos1, pos2):
        self._apply_inter_wall(pos1, pos2, self.set_cell_wall)

    def has_inter_wall(self, pos1, pos2) -> bool:
        dir1, dir2 = self.inter_wall_directions(pos1, pos2)
        # Inactive sides are left out of the check
        return all(
            self.has_wall(position, direction)
            for position, direction in ((pos1, dir1), (pos2, dir2))
            if self.is_active(position)
        )

    def neighbour_positions(self, position, visitable_only: bool = False) -> Dict[int, object]:
        """
        Active neighbours of `position` keyed by the direction leading to them.
        With visitable_only, only neighbours with no wall in between are kept.
        """
        neighbours = {
            direction: neighbour
            for direction, neighbour in self._adjacent_positions(position).items()
            if self.is_active(neighbour)
        }
        if visitable_only:
            neighbours = {
                direction: neighbour
                for direction, neighbour in neighbours.items()
                if not self.has_inter_wall(neighbour, position)
            }
        return neighbours

    def neighbour_cells(self, position, visitable_only: bool = False) -> Dict[int, int]:
        """Same as neighbour_positions but maps each direction to the neighbour's cell value."""
        return {
            direction: self.get_cell(neighbour)
            for direction, neighbour in self.neighbour_positions(position, visitable_only).items()
        }

    def remove_wall_between(self, index1: int, index2: int):
        self.remove_inter_wall(self.to_position(index1), self.to_position(index2))
