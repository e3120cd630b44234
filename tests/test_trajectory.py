import pytest

from fieldvision.trajectory import TrajectoryTracker, fit_trajectory, predict_position


def _quadratic_points(count):
    return [(2 * i * i + 3 * i + 1, i + 5) for i in range(count)]


def test_fit_recovers_exact_quadratic():
    first, second, third = fit_trajectory(_quadratic_points(10))
    assert first == pytest.approx((2.0, 0.0), abs=1e-6)
    assert second == pytest.approx((3.0, 1.0), abs=1e-6)
    assert third == pytest.approx((1.0, 5.0), abs=1e-6)


def test_prediction_matches_samples():
    points = _quadratic_points(10)
    trajectory = fit_trajectory(points)
    for index, (x, y) in enumerate(points):
        assert predict_position(trajectory, index) == pytest.approx((x, y), abs=1e-6)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_fit_with_too_few_points_is_zero(count):
    trajectory = fit_trajectory(_quadratic_points(count))
    assert trajectory == ((0.0, 0.0), (0.0, 0.0), (0.0, 0.0))


def _feed_ten(tracker):
    for x, y in _quadratic_points(10):
        tracker.update((x, y, 8.0, 0.5), True)


def test_tracker_fits_after_ten_samples():
    tracker = TrajectoryTracker()
    _feed_ten(tracker)
    assert tracker.trajectory is not None
    assert tracker.regression_data == []
    assert tracker.trajectory[0] == pytest.approx((2.0, 0.0), abs=1e-6)


def test_tracker_returns_candidate_when_present():
    tracker = TrajectoryTracker()
    assert tracker.update((40.0, 30.0, 9.0, 1.0), True) == (40.0, 30.0, 9.0)
    assert tracker.regression_data == [(40, 30)]


def test_tracker_predicts_during_gap():
    tracker = TrajectoryTracker()
    _feed_ten(tracker)
    expected = predict_position(tracker.trajectory, 11)
    x, y, _ = tracker.update(None, True)
    assert (x, y) == pytest.approx(expected)
    second = tracker.update(None, True)
    assert second[:2] == pytest.approx(predict_position(tracker.trajectory, 12))


def test_tracker_holds_last_position_without_prediction():
    tracker = TrajectoryTracker()
    _feed_ten(tracker)
    last = tracker.last_position
    assert tracker.update(None, False) == last
    assert tracker.update((-1.0, -1.0, 5.0, 5.0), False) == last


def test_tracker_gives_up_after_five_missed_frames():
    tracker = TrajectoryTracker()
    _feed_ten(tracker)
    for _ in range(5):
        tracker.update(None, False)
    result = tracker.update(None, False)
    assert result[0] == -1.0 and result[1] == -1.0


def test_tracker_without_trajectory_reports_missing_ball():
    tracker = TrajectoryTracker()
    tracker.update((10.0, 10.0, 4.0, 1.0), True)
    result = tracker.update(None, True)
    assert result[:2] == (-1.0, -1.0)
    assert tracker.regression_data == []