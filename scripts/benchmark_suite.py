import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polymaze.core.rectangular import RectangularBoard
from polymaze.core.circular import CircularBoard
from polymaze.algo.eller import EllerGenerator
from polymaze.core.complexity import MazeAnalysis

def benchmark_board(name, board):
    print(f"\n--- Benchmarking {name} ({len(board):,} cells) ---")

    # Cells are one byte each
    mem_kb = len(board) / 1024
    print(f"Memory (Board Data): ~{mem_kb:.2f} KB")

    print("Generating...")
    gen_start = time.time()
    EllerGenerator(board, seed=42).run_all()
    gen_time = time.time() - gen_start
    print(f"Generation Time: {gen_time:.4f}s")
    print(f"Speed: {len(board) / gen_time:,.0f} cells/sec")

    check_start = time.time()
    perfect = MazeAnalysis.is_perfect(board)
    print(f"Perfect maze check: {perfect} ({time.time() - check_start:.4f}s)")

def run_suite():
    benchmark_board("Rect 50x50", RectangularBoard(50, 50))
    benchmark_board("Rect 200x200", RectangularBoard(200, 200))
    benchmark_board("Circular r=20", CircularBoard(20, inner_radius=3))
    benchmark_board("Circular r=60", CircularBoard(60, inner_radius=3))

if __name__ == "__main__":
    run_suite()
