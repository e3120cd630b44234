"""Ball appearance check by comparing 2-D colour histograms in YUV space."""

from __future__ import annotations

import math

import numpy as np

HIST_BINS = 32
HIST_RANGE = (0.0, 255.0)
_DBL_EPSILON = 2.220446049250313e-16
_KL_FLOOR = 1e-10


def _as_color_image(image: np.ndarray) -> np.ndarray:
    array = np.asarray(image)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError("expected an H x W x 3 image")
    return array


def bgr_to_yuv(image: np.ndarray) -> np.ndarray:
    """Convert an 8-bit BGR image to 8-bit YUV (U and V offset by 128)."""
    array = _as_color_image(image).astype(np.float64)
    blue, green, red = array[..., 0], array[..., 1], array[..., 2]
    luma = 0.299 * red + 0.587 * green + 0.114 * blue
    u = 0.492 * (blue - luma) + 128.0
    v = 0.877 * (red - luma) + 128.0
    stacked = np.stack([luma, u, v], axis=-1)
    return np.clip(np.rint(stacked), 0, 255).astype(np.uint8)


def histogram_2d(image: np.ndarray) -> np.ndarray:
    """Min-max normalized 32 x 32 histogram of the first two channels.

    Both channels are binned uniformly over [0, 255); the value 255 falls
    outside and is not counted. A flat histogram normalizes to all zeros.
    """
    array = _as_color_image(image)
    low, high = HIST_RANGE
    scale = HIST_BINS / (high - low)
    first = np.floor((array[..., 0].astype(np.float64) - low) * scale).astype(np.int64).ravel()
    second = np.floor((array[..., 1].astype(np.float64) - low) * scale).astype(np.int64).ravel()
    keep = (first >= 0) & (first < HIST_BINS) & (second >= 0) & (second < HIST_BINS)
    counts = np.zeros((HIST_BINS, HIST_BINS), dtype=np.float64)
    np.add.at(counts, (first[keep], second[keep]), 1.0)

    smallest, largest = counts.min(), counts.max()
    if largest - smallest <= _DBL_EPSILON:
        return np.zeros_like(counts, dtype=np.float32)
    return ((counts - smallest) / (largest - smallest)).astype(np.float32)


def kl_divergence(reference: np.ndarray, target: np.ndarray) -> float:
    """Kullback-Leibler divergence of target from reference.

    Empty reference bins are skipped; empty target bins count as 1e-10.
    """
    p = np.asarray(reference, dtype=np.float64).ravel()
    q = np.asarray(target, dtype=np.float64).ravel()
    if p.shape != q.shape:
        raise ValueError("histograms must have the same shape")
    used = np.abs(p) > _DBL_EPSILON
    p = p[used]
    q = np.where(np.abs(q[used]) <= _DBL_EPSILON, _KL_FLOOR, q[used])
    return float(math.fsum(p * np.log(p / q)))


class BallReference:
    """Histogram of a reference ball image, used to score candidate regions."""

    def __init__(self, image: np.ndarray) -> None:
        array = np.asarray(image)
        if array.size == 0:
            raise ValueError("ball reference image is empty")
        self.histogram = histogram_2d(bgr_to_yuv(array))

    def score(self, roi: np.ndarray) -> float:
        """Divergence of the region's histogram from the reference (0 = identical)."""
        return kl_divergence(self.histogram, histogram_2d(bgr_to_yuv(roi)))