import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'polymaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_board(args):
    if args.shape == "rect":
        from polymaze.core.rectangular import RectangularBoard
        return RectangularBoard(args.width, args.height)
    from polymaze.core.circular import CircularBoard
    return CircularBoard(args.radius, inner_radius=args.inner_radius)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Polymaze: perfect maze generator for rectangular and circular grids")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--shape", type=str, default="rect", choices=["rect", "circular"], help="Board topology")
    gen_parser.add_argument("--width", type=int, default=20, help="Maze Width (rect)")
    gen_parser.add_argument("--height", type=int, default=20, help="Maze Height (rect)")
    gen_parser.add_argument("--radius", type=int, default=12, help="Number of rings (circular)")
    gen_parser.add_argument("--inner-radius", type=int, default=3, help="Rings left out at the centre (circular)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--merge-probability", type=float, default=0.5, help="Chance of joining two cells of a row (0.0 - 1.0)")
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")
    gen_parser.add_argument("--screenshot", type=str, help="Save an image of the finished maze")
    gen_parser.add_argument("--stats", action="store_true", help="Log maze statistics")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Run performance suite")
    bench_parser.add_argument("--size", type=int, default=200, help="Benchmark size")

    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("polymaze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        try:
            board = build_board(args)
        except ValueError as e:
            logger.error(f"Invalid board size: {e}")
            return 2

        logger.info(f"Generating {args.shape} maze {tuple(board.size)} ({len(board)} cells)...")

        from polymaze.algo.eller import EllerGenerator
        generator = EllerGenerator(board, seed=args.seed, merge_probability=args.merge_probability)

        if args.visual or args.record:
            logger.info("Visual mode enabled - Opening window...")
            from polymaze.viz.renderer import Renderer
            renderer = Renderer(board, generator=generator, record=args.record)

            if args.record:
                logger.info(f"Recording video to {renderer.recorder.output_file}")

            renderer.init_window()
            renderer.run_loop()
        else:
            logger.info("Headless generation...")
            generator.run_all()

        if args.stats:
            from polymaze.core.complexity import MazeAnalysis
            stats = MazeAnalysis.calculate_stats(board)
            logger.info(f"Stats: {stats}")
            logger.info(f"Perfect: {MazeAnalysis.is_perfect(board)}")

        if args.screenshot:
            from polymaze.viz.renderer import Renderer
            Renderer(board).save(args.screenshot)

    elif args.command == "benchmark":
        from polymaze.core.rectangular import RectangularBoard
        from polymaze.core.circular import CircularBoard
        from polymaze.algo.eller import EllerGenerator
        import time

        logger.info(f"Running Generation Benchmark (Size: {args.size})...")

        boards = [
            (f"Rect {args.size}x{args.size}", RectangularBoard(args.size, args.size)),
            (f"Circular r={args.size}", CircularBoard(args.size, inner_radius=min(3, args.size - 1))),
        ]

        print(f"\n{'BOARD':<20} | {'CELLS':<10} | {'TIME (s)':<10}")
        print("-" * 46)

        for name, board in boards:
            t_start = time.time()
            EllerGenerator(board, seed=123).run_all()
            duration = time.time() - t_start
            print(f"{name:<20} | {len(board):<10} | {duration:<10.4f}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
