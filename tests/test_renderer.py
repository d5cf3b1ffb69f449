import unittest
import sys
import os
import shutil

# Headless: no window is ever opened by these tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pygame

from polymaze.core.rectangular import RectangularBoard
from polymaze.core.circular import CircularBoard
from polymaze.algo.eller import EllerGenerator
from polymaze.viz.renderer import Renderer
from polymaze.viz.recorder import VideoRecorder, recording_name

def wall_pixels(arr):
    return int(np.all(arr == Renderer.COLOR_WALL, axis=-1).sum())

class TestRenderer(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_rectangular_render(self):
        walled = RectangularBoard(10, 8)
        board = RectangularBoard(10, 8)
        EllerGenerator(board, seed=1).run_all()

        arr = Renderer(board, width=240, height=200).to_array()
        self.assertEqual(arr.shape, (200, 240, 3), "Output buffer has wrong shape")

        drawn = wall_pixels(arr)
        self.assertGreater(drawn, 0)
        # Carving removes wall segments
        self.assertLess(drawn, wall_pixels(Renderer(walled, width=240, height=200).to_array()))

    def test_circular_render(self):
        walled = CircularBoard(6, inner_radius=1)
        board = CircularBoard(6, inner_radius=1)
        EllerGenerator(board, seed=1).run_all()

        arr = Renderer(board, width=300, height=300).to_array()
        self.assertEqual(arr.shape, (300, 300, 3))
        self.assertGreater(wall_pixels(arr), 0)
        self.assertLess(wall_pixels(arr), wall_pixels(Renderer(walled, width=300, height=300).to_array()))

    def test_save(self):
        board = RectangularBoard(5, 5)
        EllerGenerator(board, seed=3).run_all()
        path = "test_out/maze.png"
        Renderer(board, width=100, height=100).save(path)
        self.assertTrue(os.path.exists(path))
        self.assertGreater(os.path.getsize(path), 0)

    def test_unknown_board(self):
        with self.assertRaises(TypeError):
            Renderer(object(), width=50, height=50).render()

    def test_inactive_recorder(self):
        recorder = VideoRecorder(active=False)
        recorder.capture_frame(pygame.Surface((32, 32)))
        recorder.stop()
        self.assertEqual(recorder.frame_count, 0)
        self.assertIsNone(recorder.output_file)

    def test_recording_name(self):
        self.assertEqual(recording_name(RectangularBoard(20, 10), stamp="1"), "eller_rect_20x10_1.mp4")
        self.assertEqual(recording_name(CircularBoard(6, inner_radius=2), stamp="1"), "eller_circular_6x2_1.mp4")

    def test_recorder_for_board(self):
        board = RectangularBoard(4, 3)
        recorder = VideoRecorder.for_board(board, active=True, directory="test_out")
        self.assertTrue(recorder.output_file.startswith(os.path.join("test_out", "eller_rect_4x3_")))
        self.assertTrue(recorder.output_file.endswith(".mp4"))
        # Nothing is opened before the first frame
        self.assertIsNone(recorder.writer)

        self.assertIsNone(VideoRecorder.for_board(board, active=False).output_file)

    def test_recorder_frames(self):
        recorder = VideoRecorder.for_board(RectangularBoard(4, 3), active=True, directory="test_out")
        surface = Renderer(RectangularBoard(4, 3), width=64, height=48).render()
        recorder.capture_frame(surface)
        recorder.capture_frame(surface)
        self.assertEqual(recorder.frame_count, 2)

        with self.assertRaises(ValueError):
            recorder.capture_frame(pygame.Surface((32, 32)))

        recorder.stop()
        self.assertIsNone(recorder.writer)

if __name__ == '__main__':
    unittest.main()
