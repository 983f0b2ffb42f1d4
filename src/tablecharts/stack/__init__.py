"""Image stack operations."""

from tablecharts.stack.clear_threshold import ClearResult, clear_thresholded, rect_mask

__all__ = [
    "ClearResult",
    "clear_thresholded",
    "rect_mask",
]
