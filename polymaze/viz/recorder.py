import os
import logging
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

SHAPE_NAMES = {
    "RectangularBoard": "rect",
    "CircularBoard": "circular",
}


def recording_name(board, stamp=None) -> str:
    """
    File name for a generation video of `board`.
    recording_name(RectangularBoard(20, 10)) -> 'eller_rect_20x10_20260101_120000.mp4'
    """
    shape = SHAPE_NAMES.get(type(board).__name__, type(board).__name__.lower())
    dims = "x".join(map(str, board.size))
    stamp = stamp or datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"eller_{shape}_{dims}_{stamp}.mp4"


def surface_to_rgb(surface: pygame.Surface) -> np.ndarray:
    """(height, width, 3) RGB copy of a surface; surfarray itself is column major."""
    return np.ascontiguousarray(np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2)))


class VideoRecorder:
    """Writes renderer frames to an mp4 file, one frame per generated row."""

    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

    @classmethod
    def for_board(cls, board, active=True, directory="recordings", fps=30):
        output_file = None
        if active:
            os.makedirs(directory, exist_ok=True)
            output_file = os.path.join(directory, recording_name(board))
        return cls(active=active, output_file=output_file, fps=fps)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        if self.writer is None:
            self.frame_size = surface.get_size()
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info("Recording started: %s", self.output_file)
        elif surface.get_size() != self.frame_size:
            raise ValueError(f"Frame size changed from {self.frame_size} to {surface.get_size()}")

        self.writer.write(cv2.cvtColor(surface_to_rgb(surface), cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def stop(self):
        if self.writer is not None:
            self.writer.release()
            self.writer = None
            logger.info("Video saved: %s (%d frames)", self.output_file, self.frame_count)
