import math
import logging
import pygame
import numpy as np
from polymaze.core.board import Board
from polymaze.core.circular import CircularBoard
from polymaze.core.rectangular import RectangularBoard
from polymaze.viz.recorder import VideoRecorder, surface_to_rgb

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)

    def __init__(self, board: Board, generator=None, width=800, height=800, record=False):
        self.board = board
        self.generator = generator
        self.screen_width = width
        self.screen_height = height
        self.padding = 20

        self.recorder = VideoRecorder.for_board(board, active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_finished = generator is None

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Polymaze - {type(self.board).__name__} ({len(self.board):,} cells)")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

    def draw_board(self):
        self.surface.fill(self.COLOR_BG)
        if isinstance(self.board, RectangularBoard):
            self.draw_rectangular(self.board)
        elif isinstance(self.board, CircularBoard):
            self.draw_circular(self.board)
        else:
            raise TypeError(f"No drawing routine for {type(self.board).__name__}")

    def draw_rectangular(self, board: RectangularBoard):
        available_w = self.screen_width - (self.padding * 2)
        available_h = self.screen_height - (self.padding * 2)
        size = min(available_w / board.width, available_h / board.height)

        # Center
        offset_x = (self.screen_width - board.width * size) / 2
        offset_y = (self.screen_height - board.height * size) / 2

        for index, cell in enumerate(board.cells):
            if not board.is_enabled(cell):
                continue
            x, y = board.to_position(index)
            left = offset_x + x * size
            top = offset_y + y * size
            right = left + size
            bottom = top + size

            # Inner walls are stored on both sides, draw each once
            if cell & RectangularBoard.BOTTOM:
                pygame.draw.line(self.surface, self.COLOR_WALL, (left, bottom), (right, bottom), 1)
            if cell & RectangularBoard.RIGHT:
                pygame.draw.line(self.surface, self.COLOR_WALL, (right, top), (right, bottom), 1)
            if y == 0 and (cell & RectangularBoard.TOP):
                pygame.draw.line(self.surface, self.COLOR_WALL, (left, top), (right, top), 1)
            if x == 0 and (cell & RectangularBoard.LEFT):
                pygame.draw.line(self.surface, self.COLOR_WALL, (left, top), (left, bottom), 1)

    def draw_circular(self, board: CircularBoard):
        cx = self.screen_width / 2
        cy = self.screen_height / 2
        ring_width = (min(self.screen_width, self.screen_height) / 2 - self.padding) / board.radius

        for index, cell in enumerate(board.cells):
            if not board.is_enabled(cell):
                continue
            r, t = board.to_position(index)
            n = board.ring_counts[r]
            step = 2 * math.pi / n
            theta = t * step
            inner = r * ring_width
            outer = inner + ring_width

            if r > 0 and (cell & CircularBoard.BOTTOM):
                self._draw_arc(cx, cy, inner, theta, theta + step)
            if n > 1 and (cell & CircularBoard.LEFT):
                start = self._polar_to_screen(cx, cy, inner, theta)
                end = self._polar_to_screen(cx, cy, outer, theta)
                pygame.draw.line(self.surface, self.COLOR_WALL, start, end, 1)
            # Rim of the outermost ring
            if r == board.radius - 1 and (cell & CircularBoard.TOP_CW):
                self._draw_arc(cx, cy, outer, theta, theta + step)

    @staticmethod
    def _polar_to_screen(cx, cy, radius, theta):
        # Screen y grows downwards, so angles run counter-clockwise on screen
        return cx + radius * math.cos(theta), cy - radius * math.sin(theta)

    def _draw_arc(self, cx, cy, radius, theta_start, theta_end):
        segments = max(2, int((theta_end - theta_start) * radius / 4))
        points = [
            self._polar_to_screen(cx, cy, radius, theta_start + (theta_end - theta_start) * i / segments)
            for i in range(segments + 1)
        ]
        pygame.draw.lines(self.surface, self.COLOR_WALL, False, points, 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        rec_status = "REC" if self.recorder.active else ""
        status = "Done" if self.gen_finished else "Running"
        info = [
            f"FPS: {fps}",
            f"Size: {tuple(self.board.size)} ({len(self.board):,} cells)",
            f"Status: {status}",
            rec_status
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def render(self) -> pygame.Surface:
        """Draws the board onto an off-screen surface (no window needed)."""
        if self.surface is None or self.surface.get_size() != (self.screen_width, self.screen_height):
            self.surface = pygame.Surface((self.screen_width, self.screen_height))
        self.draw_board()
        return self.surface

    def save(self, path: str):
        pygame.image.save(self.render(), path)
        logger.info(f"Saved maze image to {path}")

    def to_array(self) -> np.ndarray:
        """The rendered board as a (height, width, 3) RGB array."""
        return surface_to_rgb(self.render())

    def run_loop(self):
        gen_iter = None
        if self.generator:
            gen_iter = self.generator.run()

        while self.running:
            self.handle_input()

            # One row per frame so the sweep is visible
            if gen_iter and not self.gen_finished:
                try:
                    next(gen_iter)
                except StopIteration:
                    self.gen_finished = True

            self.draw_board()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(30)

        self.recorder.stop()
        pygame.quit()
