"""Monocular ball range estimation from the apparent ball size."""

from __future__ import annotations

import math

BALL_DIAMETER_CM = 13.0
DEFAULT_FOCAL_LENGTH = 649.6393

# (lower bound exclusive, upper bound inclusive, focal length in pixels),
# checked in order; the first matching band wins.
_FOCAL_BANDS: tuple[tuple[float, float, float], ...] = (
    (82.81, 83.0, 644.7761),
    (82.61, 82.81, 652.9851),
    (82.26, 82.61, 634.3284),
    (82.1, 82.26, 640.2985),
    (81.826, 82.1, 620.8955),
    (81.7, 81.826, 624.6269),
    (81.267, 81.7, 626.8657),
    (81.0, 81.267, 627.6119),
    (80.656, 81.0, 626.8656716),
    (80.331, 81.0, 624.6268657),
    (79.978, 80.331, 620.8955224),
    (79.76, 79.978, 634.3283582),
    (79.164, 79.76, 626.8656716),
    (78.6, 79.164, 617.9104478),
    (78.074, 78.6, 623.880597),
    (77.694, 78.074, 626.8656716),
    (77.051, 77.694, 626.8656716),
    (76.347, 77.051, 626.8656716),
    (75.435, 76.347, 617.9104478),
    (74.645, 75.435, 621.641791),
    (74.1, 74.645, 620.8955224),
    (72.9, 74.1, 604.4776119),
    (71.513, 72.9, 626.8656716),
    (69.85, 71.513, 611.1940299),
    (68.429, 69.85, 617.9104478),
    (67.8, 68.429, 615.6716418),
    (65.5, 67.8, 634.3283582),
    (62.62, 65.5, 597.761194),
    (59.2, 62.62, 549.2537313),
    (57.1, 59.2, 538.0597015),
    (55.1, 57.1, 519.0298507),
    (52.5, 55.1, 537.3134328),
    (49.5, 52.5, 496.641791),
    (46.7, 49.5, 492.5373134),
    (43.4, 46.7, 466.7910448),
    (38.4, 43.4, 447.761194),
    (35.3, 38.4, 420.5223881),
    (28.6, 35.3, 380.5970149),
    (22.5, 28.6, 356.3432836),
    (15.9, 22.5, 298.5074627),
    (8.1, 15.9, 242.9104478),
    (0.7, 8.1, 167.9104478),
)
_LOWEST_BAND_TOP = 0.7
_LOWEST_BAND_FOCAL = 87.31343284


def focal_length(head_angle: float) -> float:
    """Calibrated focal length in pixels for a head tilt angle in degrees.

    Angles outside the calibrated range 0..83 use the default focal length.
    """
    for low, high, focal in _FOCAL_BANDS:
        if low < head_angle <= high:
            return focal
    if 0.0 <= head_angle <= _LOWEST_BAND_TOP:
        return _LOWEST_BAND_FOCAL
    return DEFAULT_FOCAL_LENGTH


def ball_distance(radius: float, head_angle: float) -> float:
    """Forward distance to the ball in centimetres, truncated to whole units.

    Uses the pinhole relation distance = real diameter * focal / pixel diameter.
    """
    if not radius > 0 or math.isinf(radius):
        raise ValueError("radius must be a positive finite number")
    distance = BALL_DIAMETER_CM * focal_length(head_angle) / (2.0 * radius)
    return float(math.trunc(distance))