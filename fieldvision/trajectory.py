"""Quadratic ball trajectory fitting and short-term position prediction."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

Trajectory = tuple[tuple[float, float], tuple[float, float], tuple[float, float]]
Position = tuple[float, float, float]

_FLT_MAX = 3.4028234663852886e38
_NO_CANDIDATE: Position = (-1.0, -1.0, _FLT_MAX)
_ZERO_TRAJECTORY: Trajectory = ((0.0, 0.0), (0.0, 0.0), (0.0, 0.0))

_SAMPLES_PER_FIT = 10
_FIRST_PREDICTION_INDEX = 11
_PREDICTION_LIMIT = 16


def fit_trajectory(points: Iterable[Sequence[float]]) -> Trajectory:
    """Least-squares fit of x(t) and y(t) as quadratics in the sample index t.

    Returns the (t^2, t, 1) coefficient pairs, each as (x, y). When the system
    is singular (fewer than three samples) every coefficient is zero.
    """
    samples = [(int(p[0]), int(p[1])) for p in points]
    count = len(samples)
    t = np.arange(count, dtype=np.float64)
    xs = np.array([p[0] for p in samples], dtype=np.float64)
    ys = np.array([p[1] for p in samples], dtype=np.float64)

    s1, s2, s3, s4 = (float((t**k).sum()) for k in (1, 2, 3, 4))
    matrix = np.array([[s4, s3, s2], [s3, s2, s1], [s2, s1, float(count)]])
    rhs = np.array(
        [
            [float((t * t * xs).sum()), float((t * t * ys).sum())],
            [float((t * xs).sum()), float((t * ys).sum())],
            [float(xs.sum()), float(ys.sum())],
        ]
    )
    if count < 3:
        return _ZERO_TRAJECTORY
    try:
        solution = np.linalg.solve(matrix, rhs)
    except np.linalg.LinAlgError:
        return _ZERO_TRAJECTORY
    first, second, third = (
        (float(row[0]), float(row[1])) for row in solution
    )
    return first, second, third


def predict_position(trajectory: Trajectory, index: float) -> tuple[float, float]:
    """Evaluate the fitted trajectory at a sample index."""
    (ax, ay), (bx, by), (cx, cy) = trajectory
    square = index * index
    return square * ax + index * bx + cx, square * ay + index * by + cy


class TrajectoryTracker:
    """Keeps recent ball detections and bridges short gaps by prediction."""

    def __init__(self) -> None:
        self.regression_data: list[tuple[int, int]] = []
        self.trajectory: Optional[Trajectory] = None
        self.last_position: Position = (0.0, 0.0, 0.0)
        self.next_index = _FIRST_PREDICTION_INDEX
        self.sample_count = 0

    def update(
        self, candidate: Optional[Sequence[float]], prediction_enabled: bool
    ) -> Position:
        """Feed the best candidate of a frame (x, y, radius, ...) or None.

        Returns the ball position to report: the candidate itself, a predicted
        or held position during a short gap, or the empty candidate otherwise.
        """
        if candidate is None:
            position = _NO_CANDIDATE
        else:
            position = (float(candidate[0]), float(candidate[1]), float(candidate[2]))

        if position[0] > 0:
            self.next_index = _FIRST_PREDICTION_INDEX
            self.regression_data.append((round(position[0]), round(position[1])))
            self.sample_count += 1
            if self.sample_count >= _SAMPLES_PER_FIT:
                self.sample_count = 0
                self.trajectory = fit_trajectory(self.regression_data)
                self.regression_data.clear()
        elif self.next_index < _PREDICTION_LIMIT and self.trajectory is not None:
            if prediction_enabled:
                x, y = predict_position(self.trajectory, self.next_index)
                position = (x, y, position[2])
            else:
                position = self.last_position
            self.next_index += 1
        else:
            self.regression_data.clear()

        self.last_position = position
        return position