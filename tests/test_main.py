import unittest
import sys
import os
import shutil

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polymaze.main import main, build_parser

class TestMain(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_defaults(self):
        args = build_parser().parse_args(["generate"])
        self.assertEqual(args.shape, "rect")
        self.assertEqual(args.inner_radius, 3)
        self.assertEqual(args.merge_probability, 0.5)

    def test_generate_rect(self):
        with self.assertLogs("polymaze", level="INFO") as logs:
            code = main(["generate", "--width", "6", "--height", "4", "--seed", "1", "--stats"])
        self.assertEqual(code, 0)
        self.assertTrue(any("Perfect: True" in line for line in logs.output))

    def test_generate_circular_screenshot(self):
        path = "test_out/circle.png"
        code = main(["generate", "--shape", "circular", "--radius", "6", "--inner-radius", "2",
                     "--seed", "5", "--screenshot", path])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(path))

    def test_invalid_board(self):
        code = main(["generate", "--shape", "circular", "--radius", "3", "--inner-radius", "3"])
        self.assertEqual(code, 2)

    def test_no_command(self):
        self.assertEqual(main([]), 0)

if __name__ == '__main__':
    unittest.main()
