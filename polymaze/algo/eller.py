import logging
import random
from typing import Iterator, List, Optional

from polymaze.algo.base import Generator
from polymaze.algo.path_set import PathSets
from polymaze.core.board import Board, RowTopology

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    pass


class EllerGenerator(Generator):
    """
    Eller's algorithm, swept row by row over any RowTopology.

    Ref: https://weblog.jamisbuck.org/2010/12/29/maze-generation-eller-s-algorithm

    The topology defaults to the board itself. Only get_rows,
    remove_wall_between and get_next_row_neighbours are ever called on it.
    """

    def __init__(
        self,
        board: Board,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        topology: Optional[RowTopology] = None,
        merge_probability: float = 0.5,
    ):
        super().__init__(board, seed=seed, rng=rng)
        if not 0.0 <= merge_probability <= 1.0:
            raise ValueError(f"merge_probability must be within [0, 1], got {merge_probability}")
        self.topology = topology if topology is not None else board
        self.merge_probability = merge_probability
        self.path_sets = PathSets()

    def run(self) -> Iterator[str]:
        if self.board.active_count() != len(self.board):
            raise GenerationError("Board has disabled cells; every cell must take part in generation")

        rows = self.topology.get_rows()
        if not rows:
            yield "Done"
            return

        # Every cell of the first row starts in its own set
        self.path_sets = PathSets([{index} for index in rows[0]])

        for number, row in enumerate(rows[:-1], start=1):
            self.visit_row(row, merge_all=False)
            self.visit_next_row(row)
            self.path_sets.retain(rows[number])
            self.step_count += 1
            yield f"Row {number}/{len(rows)}"

        # Close the maze: whatever sets reached the last row become one
        self.visit_row(rows[-1], merge_all=True)
        self.step_count += 1
        logger.debug("Generated %d rows, %d cells", len(rows), len(self.board))
        yield "Done"

    def visit_row(self, row: List[int], merge_all: bool):
        """Randomly opens walls between neighbours of one row that are not yet connected."""
        for prev, cell in zip(row, row[1:]):
            if self.path_sets.same_set(prev, cell):
                continue  # would close a loop

            if merge_all or self.rng.random() < self.merge_probability:
                self.topology.remove_wall_between(prev, cell)
                self.path_sets.join(prev, cell)
            else:
                self.path_sets.track(prev)
                self.path_sets.track(cell)

        if len(row) == 1:
            self.path_sets.track(row[0])

    def visit_next_row(self, row: List[int]):
        """
        Carries every set into the next row through at least one passage.
        A set left behind here could never be reached again.
        """
        in_row = set(row)
        # Snapshot first, joins below may fold sets together
        carried = [sorted(index for index in item_set if index in in_row) for item_set in self.path_sets]

        for members in carried:
            if not members:
                continue

            self.rng.shuffle(members)
            count = self.rng.randint(1, len(members))

            for cell in members[:count]:
                candidates = self.topology.get_next_row_neighbours(cell)
                if not candidates:
                    raise GenerationError(f"Cell {cell} has no neighbour in the next row")

                next_cell = self.rng.choice(candidates)
                if self.path_sets.same_set(cell, next_cell):
                    continue

                self.topology.remove_wall_between(cell, next_cell)
                self.path_sets.join(cell, next_cell)


def generate(
    board: Board,
    topology: Optional[RowTopology] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    merge_probability: float = 0.5,
) -> Board:
    """Runs Eller's algorithm to completion. The board is modified in place and returned."""
    EllerGenerator(
        board, seed=seed, rng=rng, topology=topology, merge_probability=merge_probability
    ).run_all()
    return board
