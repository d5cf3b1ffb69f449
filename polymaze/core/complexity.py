from collections import deque
from typing import Dict, Set
from polymaze.core.board import Board

class MazeAnalysis:
    @staticmethod
    def open_neighbour_indexes(board: Board, index: int):
        position = board.to_position(index)
        return [board.to_index(n) for n in board.neighbour_positions(position, visitable_only=True).values()]

    @staticmethod
    def count_passages(board: Board) -> int:
        """Number of open inter-cell walls (each counted once)."""
        passages = 0
        for index in range(len(board)):
            if not board.is_enabled(board.cells[index]):
                continue
            for neighbour in MazeAnalysis.open_neighbour_indexes(board, index):
                if neighbour > index:
                    passages += 1
        return passages

    @staticmethod
    def reachable_from(board: Board, index: int = 0) -> Set[int]:
        seen = {index}
        queue = deque([index])
        while queue:
            current = queue.popleft()
            for neighbour in MazeAnalysis.open_neighbour_indexes(board, current):
                if neighbour not in seen:
                    seen.add(neighbour)
                    queue.append(neighbour)
        return seen

    @staticmethod
    def is_perfect(board: Board) -> bool:
        """
        A perfect maze is a spanning tree over the active cells:
        everything reachable and exactly (cells - 1) passages.
        """
        active = [i for i in range(len(board)) if board.is_enabled(board.cells[i])]
        if not active:
            return True
        if MazeAnalysis.count_passages(board) != len(active) - 1:
            return False
        return len(MazeAnalysis.reachable_from(board, active[0])) == len(active)

    @staticmethod
    def calculate_stats(board: Board) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0 # 2 exits
        junctions = 0 # 3+ exits
        active = 0

        for index in range(len(board)):
            if not board.is_enabled(board.cells[index]):
                continue
            active += 1
            exits = len(MazeAnalysis.open_neighbour_indexes(board, index))
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: junctions += 1

        return {
            "cells": active,
            "passages": MazeAnalysis.count_passages(board),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / active) * 100 if active > 0 else 0
        }
