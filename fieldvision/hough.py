"""Gaussian smoothing and gradient-based Hough circle detection."""

from __future__ import annotations

import math

import numpy as np
from scipy import ndimage

_EPSILON = 1.1920929e-07


def _gaussian_kernel(size: int, sigma: float) -> np.ndarray:
    if sigma <= 0:
        sigma = 0.3 * ((size - 1) * 0.5 - 1) + 0.8
    offsets = np.arange(size, dtype=np.float64) - (size - 1) / 2.0
    kernel = np.exp(-(offsets * offsets) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def gaussian_blur(image: np.ndarray, size: int, sigma: float) -> np.ndarray:
    """Blur with a separable size x size Gaussian; borders are mirrored.

    A non-positive sigma is derived from the kernel size.
    """
    if size < 1 or size % 2 == 0:
        raise ValueError("kernel size must be a positive odd number")
    array = np.asarray(image)
    if array.ndim not in (2, 3):
        raise ValueError("expected a 2-D image, optionally with channels")
    kernel = _gaussian_kernel(size, sigma)
    data = array.astype(np.float64)
    for axis in (0, 1):
        data = ndimage.convolve1d(data, kernel, axis=axis, mode="mirror")
    if np.issubdtype(array.dtype, np.integer):
        info = np.iinfo(array.dtype)
        return np.clip(np.rint(data), info.min, info.max).astype(array.dtype)
    return data.astype(array.dtype)


def _shifted(padded: np.ndarray, dy: int, dx: int, shape: tuple[int, int]) -> np.ndarray:
    height, width = shape
    return padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]


def _canny(
    grad_x: np.ndarray, grad_y: np.ndarray, low: float, high: float
) -> np.ndarray:
    magnitude = np.abs(grad_x) + np.abs(grad_y)
    shape = magnitude.shape
    padded = np.pad(magnitude, 1, constant_values=0.0)
    angle = np.degrees(np.arctan2(grad_y, grad_x)) % 180.0

    horizontal = (angle < 22.5) | (angle >= 157.5)
    diagonal_down = (angle >= 22.5) & (angle < 67.5)
    vertical = (angle >= 67.5) & (angle < 112.5)
    diagonal_up = (angle >= 112.5) & (angle < 157.5)

    keep = np.zeros(shape, dtype=bool)
    for region, (dy, dx) in (
        (horizontal, (0, 1)),
        (diagonal_down, (1, 1)),
        (vertical, (1, 0)),
        (diagonal_up, (1, -1)),
    ):
        before = _shifted(padded, -dy, -dx, shape)
        after = _shifted(padded, dy, dx, shape)
        keep |= region & (magnitude > before) & (magnitude >= after)

    weak = keep & (magnitude > low)
    strong = keep & (magnitude > high)
    if not strong.any():
        return np.zeros(shape, dtype=bool)
    labels, _ = ndimage.label(weak, structure=np.ones((3, 3), dtype=int))
    accepted = np.unique(labels[strong])
    accepted = accepted[accepted != 0]
    return np.isin(labels, accepted)


def _best_radius(distances: np.ndarray, step: float) -> tuple[float, int]:
    best_radius = 0.0
    best_count = 0
    start = 0
    total = len(distances)
    for end in range(1, total + 1):
        if end == total or distances[end] - distances[start] > step:
            count = end - start
            radius = float(distances[(start + end - 1) // 2])
            if count * best_radius >= best_count * radius or (
                best_radius < _EPSILON and count >= best_count
            ):
                best_radius, best_count = radius, count
            start = end
    return best_radius, best_count


def hough_circles(
    image: np.ndarray,
    dp: float,
    min_dist: float,
    canny_threshold: float,
    accumulator_threshold: float,
    min_radius: int,
    max_radius: int,
) -> list[tuple[float, float, float]]:
    """Detect circles in a single-channel image.

    Edge pixels vote along their gradient into an accumulator whose resolution
    is 1/dp of the image. Local maxima above the threshold become candidate
    centres, strongest first; each accepted centre gets the radius best
    supported by edge pixels. Returns (x, y, radius) tuples.
    """
    array = np.asarray(image)
    if array.ndim != 2:
        raise ValueError("expected a single-channel image")
    if dp <= 0 or min_dist <= 0 or canny_threshold <= 0 or accumulator_threshold <= 0:
        raise ValueError("dp, min_dist and both thresholds must be positive")

    height, width = array.shape
    min_radius = max(int(min_radius), 0)
    max_radius = int(max_radius)
    if max_radius <= 0:
        max_radius = max(height, width)
    if max_radius < min_radius or height == 0 or width == 0:
        return []

    data = array.astype(np.float64)
    grad_x = ndimage.sobel(data, axis=1, mode="mirror")
    grad_y = ndimage.sobel(data, axis=0, mode="mirror")
    edges = _canny(grad_x, grad_y, canny_threshold / 2.0, canny_threshold)

    edge_y, edge_x = np.nonzero(edges)
    if edge_x.size == 0:
        return []
    gx = grad_x[edge_y, edge_x]
    gy = grad_y[edge_y, edge_x]
    norm = np.hypot(gx, gy)
    moving = norm > 0
    unit_x = gx[moving] / norm[moving]
    unit_y = gy[moving] / norm[moving]
    origin_x = edge_x[moving].astype(np.float64)
    origin_y = edge_y[moving].astype(np.float64)

    acc_rows = math.ceil(height / dp)
    acc_cols = math.ceil(width / dp)
    accumulator = np.zeros((acc_rows, acc_cols), dtype=np.int64)
    steps = int((max_radius - min_radius) / dp) + 1
    radii = min_radius + dp * np.arange(steps, dtype=np.float64)

    for sign in (1.0, -1.0):
        px = origin_x[:, None] + sign * unit_x[:, None] * radii[None, :]
        py = origin_y[:, None] + sign * unit_y[:, None] * radii[None, :]
        cells_x = np.floor(px / dp).astype(np.int64)
        cells_y = np.floor(py / dp).astype(np.int64)
        inside = (cells_x >= 0) & (cells_x < acc_cols) & (cells_y >= 0) & (cells_y < acc_rows)
        np.add.at(accumulator, (cells_y[inside], cells_x[inside]), 1)

    padded = np.pad(accumulator, 1, constant_values=0)
    shape = accumulator.shape
    peaks = (
        (accumulator > accumulator_threshold)
        & (accumulator > _shifted(padded, 0, -1, shape))
        & (accumulator >= _shifted(padded, 0, 1, shape))
        & (accumulator > _shifted(padded, -1, 0, shape))
        & (accumulator >= _shifted(padded, 1, 0, shape))
    )
    peak_rows, peak_cols = np.nonzero(peaks)
    if peak_rows.size == 0:
        return []
    order = np.argsort(-accumulator[peak_rows, peak_cols], kind="stable")

    all_x = edge_x.astype(np.float64)
    all_y = edge_y.astype(np.float64)
    min_dist_sq = min_dist * min_dist
    circles: list[tuple[float, float, float]] = []
    for index in order:
        center_x = (peak_cols[index] + 0.5) * dp
        center_y = (peak_rows[index] + 0.5) * dp
        if any(
            (cx - center_x) ** 2 + (cy - center_y) ** 2 < min_dist_sq for cx, cy, _ in circles
        ):
            continue
        distances = np.hypot(all_x - center_x, all_y - center_y)
        distances = np.sort(distances[(distances >= min_radius) & (distances <= max_radius)])
        if distances.size == 0:
            continue
        radius, support = _best_radius(distances, dp)
        if support > accumulator_threshold:
            circles.append((float(center_x), float(center_y), radius))
    return circles