"""Sequence canvas state."""

from .state import SequenceCanvas, new_canvas_id

__all__ = ["SequenceCanvas", "new_canvas_id"]
