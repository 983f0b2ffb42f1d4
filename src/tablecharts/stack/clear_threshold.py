"""Clear thresholded pixels inside an ROI across an image stack.

Pixels inside the ROI whose value lies within [lower, upper] are set to a
background value on every selected slice. Thresholds are given explicitly;
choosing them (auto-threshold methods) is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from tablecharts.utils.logging import get_logger

logger = get_logger(__name__)

Rect = tuple[int, int, int, int]  # (x, y, width, height)


@dataclass(frozen=True)
class ClearResult:
    """Cleared copy of the stack and the number of pixels changed."""
    stack: np.ndarray
    n_cleared: int


def rect_mask(shape: tuple[int, int], rect: Rect) -> np.ndarray:
    """Boolean (y, x) mask for a rectangle clipped to the image.

    Args:
        shape: (height, width) of the image.
        rect: (x, y, width, height) in pixels.
    """
    h, w = shape
    x, y, rw, rh = (int(v) for v in rect)
    if rw <= 0 or rh <= 0:
        raise ValueError(f"rect width and height must be positive, got {rect}")
    mask = np.zeros((h, w), dtype=bool)
    mask[max(y, 0):min(y + rh, h), max(x, 0):min(x + rw, w)] = True
    return mask


def clear_thresholded(
    stack: np.ndarray,
    roi: Union[np.ndarray, Rect, None],
    lower: float,
    upper: float,
    *,
    background: float = 0,
    first_slice: int = 1,
    last_slice: Optional[int] = None,
) -> ClearResult:
    """Set ROI pixels within [lower, upper] to background on a slice range.

    Args:
        stack: Array shaped (z, y, x), or a single (y, x) image.
        roi: Boolean (y, x) mask, an (x, y, width, height) rectangle, or None
            for the whole image.
        lower: Lower threshold (inclusive).
        upper: Upper threshold (inclusive).
        background: Value written to cleared pixels.
        first_slice: First slice to process, 1-based.
        last_slice: Last slice to process, 1-based inclusive; None means the last one.

    Returns:
        ClearResult with a new array (the input is not modified).

    Raises:
        ValueError: On bad dimensions, ROI shape, thresholds or slice range.
    """
    arr = np.asarray(stack)
    single = arr.ndim == 2
    if single:
        arr = arr[np.newaxis, ...]
    if arr.ndim != 3:
        raise ValueError(f"stack must be 2-D or 3-D, got shape {np.shape(stack)}")
    if lower > upper:
        raise ValueError(f"lower threshold {lower} is above upper threshold {upper}")

    n_slices, h, w = arr.shape
    if last_slice is None:
        last_slice = n_slices
    if not 1 <= first_slice <= last_slice <= n_slices:
        raise ValueError(
            f"slice range {first_slice}-{last_slice} outside 1-{n_slices}"
        )

    if roi is None:
        mask = np.ones((h, w), dtype=bool)
    elif isinstance(roi, np.ndarray):
        if roi.shape != (h, w):
            raise ValueError(f"roi mask shape {roi.shape} does not match image shape {(h, w)}")
        mask = roi.astype(bool)
    else:
        mask = rect_mask((h, w), roi)

    out = arr.copy()
    sub = out[first_slice - 1:last_slice]
    hit = (sub >= lower) & (sub <= upper) & mask[np.newaxis, ...]
    sub[hit] = background
    n_cleared = int(hit.sum())

    logger.info(
        f"cleared {n_cleared} pixels in [{lower}, {upper}] on slices {first_slice}-{last_slice}"
    )
    return ClearResult(stack=out[0] if single else out, n_cleared=n_cleared)
