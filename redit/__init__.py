"""Redit - a modal terminal text editor."""

from .model import Buffer, CursorPosition
from .view import Viewport, FrameSnapshot

__all__ = [
    'Buffer',
    'CursorPosition',
    'Viewport',
    'FrameSnapshot',
]
