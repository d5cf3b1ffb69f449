import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional
from polymaze.core.board import Board

class Generator(ABC):
    def __init__(self, board: Board, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.board = board
        self.seed = seed
        # An injected rng wins over the seed (scripted runs in tests)
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual wall modifications happen in-place on self.board.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
