"""Helpers for turning a rough ball region into circle-fitting samples."""

from __future__ import annotations

from typing import Sequence

import numpy as np

Point = tuple[int, int]
Rect = tuple[int, int, int, int]

SQUARE_RATIO = 0.55
SQUARE_RECIPROCAL_LIMIT = 1.45
MIN_SPLIT_RATIO = 0.2
HORIZON_RATIO = 0.75
_MARK = 255


def _as_mask(mask: np.ndarray) -> np.ndarray:
    array = np.asarray(mask)
    if array.ndim != 2:
        raise ValueError("expected a single-channel mask")
    return array


def roi_ratio(width: int, height: int) -> float:
    """Shorter side divided by longer side of a rectangle (1 for a square)."""
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    if width < height:
        return width / height
    return height / width


def split_roi(mask: np.ndarray) -> tuple[list[np.ndarray], int]:
    """Split a region mask into the sub-frames that are scanned for edges.

    A near-square region is cut into four quadrants (sub mode 0). A longer
    region is halved across its long side: left/right for a wide region
    (sub mode 1), top/bottom for a tall one (sub mode 2). A region thinner
    than the minimal ratio is not split and yields no sub-frames.
    """
    array = _as_mask(mask)
    height, width = array.shape
    ratio = roi_ratio(width, height)
    half_w, half_h = width >> 1, height >> 1

    if ratio >= SQUARE_RATIO and 1.0 / ratio <= SQUARE_RECIPROCAL_LIMIT:
        quadrants = [
            array[0:half_h, 0:half_w],
            array[0:half_h, half_w:half_w + half_w],
            array[half_h:half_h + half_h, 0:half_w],
            array[half_h:half_h + half_h, half_w:half_w + half_w],
        ]
        return quadrants, 0
    if ratio > MIN_SPLIT_RATIO:
        if width > height:
            return [array[:, 0:half_w], array[:, half_w:half_w + half_w]], 1
        return [array[0:half_h, :], array[half_h:half_h + half_h, :]], 2
    return [], 0


def _scan_modes(count: int, sub_mode: int, horizon: bool) -> list[int]:
    modes = []
    for index in range(count):
        if index == 0:
            mode = 0 if sub_mode == 1 else 2 if sub_mode == 2 else (0 if horizon else 2)
        elif index == 1:
            mode = 1 if sub_mode == 1 else 3 if sub_mode == 2 else (1 if horizon else 2)
        elif index == 2:
            mode = 0 if horizon else 3
        else:
            mode = 1 if horizon else 3
        modes.append(mode)
    return modes


def _first_hits(hits: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Indices of lines (rows of `hits`) that have a hit, and the first hit in each."""
    found = hits.any(axis=1)
    first = hits.argmax(axis=1)
    lines = np.nonzero(found)[0]
    return lines, first[lines]


def scan_edges(
    rois: Sequence[np.ndarray], top_left: Sequence[int], sub_mode: int = 0
) -> tuple[list[list[Point]], list[np.ndarray]]:
    """Collect the outermost ball pixels of each sub-frame.

    Each sub-frame is scanned line by line from the side facing away from the
    region centre; the first marked pixel of a line, not counting the border
    pixel the scan starts on, is taken. Points are in full-image coordinates.
    Returns the points per sub-frame and a mask of the chosen pixels for each.
    """
    if sub_mode not in (0, 1, 2):
        raise ValueError("sub mode must be 0, 1 or 2")
    frames = [_as_mask(roi) for roi in rois]
    if not 1 <= len(frames) <= 4:
        raise ValueError("between one and four sub-frames are required")
    rows, cols = frames[0].shape
    if any(frame.shape != (rows, cols) for frame in frames):
        raise ValueError("all sub-frames must have the same shape")

    origin_x, origin_y = int(top_left[0]), int(top_left[1])
    horizon = cols > 0 and rows / cols < HORIZON_RATIO
    origins = [
        (origin_x, origin_y),
        (origin_x, origin_y + rows) if sub_mode == 2 else (origin_x + cols, origin_y),
        (origin_x, origin_y + rows),
        (origin_x + cols, origin_y + rows),
    ]

    selected: list[list[Point]] = []
    debug: list[np.ndarray] = []
    for frame, mode, (base_x, base_y) in zip(
        frames, _scan_modes(len(frames), sub_mode, horizon), origins
    ):
        marks = np.zeros((rows, cols), dtype=np.uint8)
        hits = frame == _MARK
        points: list[Point] = []
        if rows and cols:
            if mode == 0:
                lines = hits.copy()
                lines[:, 0] = False
                line_idx, pos = _first_hits(lines)
                pairs = [(int(j), int(i)) for i, j in zip(line_idx, pos)]
            elif mode == 1:
                lines = hits[:, ::-1].copy()
                lines[:, 0] = False
                line_idx, pos = _first_hits(lines)
                pairs = [(cols - 1 - int(j), int(i)) for i, j in zip(line_idx, pos)]
            elif mode == 2:
                lines = hits.T.copy()
                lines[:, 0] = False
                line_idx, pos = _first_hits(lines)
                pairs = [(int(i), int(j)) for i, j in zip(line_idx, pos)]
            else:
                lines = hits[::-1, :].T.copy()
                lines[:, 0] = False
                line_idx, pos = _first_hits(lines)
                pairs = [(int(i), rows - 1 - int(j)) for i, j in zip(line_idx, pos)]
            for col, row in pairs:
                points.append((base_x + col, base_y + row))
                marks[row, col] = _MARK
        selected.append(points)
        debug.append(marks)
    return selected, debug


def ball_roi(circle: Sequence[float], width: int, height: int) -> Rect:
    """Bounding box (x, y, w, h) of a circle clamped to an image of the given size."""
    if width <= 0 or height <= 0:
        raise ValueError("image width and height must be positive")
    center_x, center_y, radius = float(circle[0]), float(circle[1]), float(circle[2])

    def clamp(value: float, limit: int) -> int:
        return min(max(0, int(value)), limit - 1)

    left = clamp(center_x - radius, width)
    top = clamp(center_y - radius, height)
    right = clamp(center_x + radius, width)
    bottom = clamp(center_y + radius, height)
    return left, top, right - left, bottom - top


def fill_ratio(mask: np.ndarray) -> float:
    """Fraction of non-zero pixels in a mask."""
    array = _as_mask(mask)
    if array.size == 0:
        raise ValueError("mask is empty")
    return float(np.count_nonzero(array)) / array.size