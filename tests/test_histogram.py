import numpy as np
import pytest

from fieldvision.histogram import (
    HIST_BINS,
    BallReference,
    bgr_to_yuv,
    histogram_2d,
    kl_divergence,
)


def _random_image(seed, shape=(20, 30)):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 255, size=shape + (3,), dtype=np.uint8)


def test_bgr_to_yuv_gray_has_neutral_chroma():
    image = np.full((2, 2, 3), 100, dtype=np.uint8)
    assert tuple(bgr_to_yuv(image)[0, 0]) == (100, 128, 128)
    assert tuple(bgr_to_yuv(np.zeros((1, 1, 3), dtype=np.uint8))[0, 0]) == (0, 128, 128)


def test_bgr_to_yuv_blue_raises_u():
    image = np.array([[[255, 0, 0]]], dtype=np.uint8)
    yuv = bgr_to_yuv(image)
    assert yuv[0, 0, 1] > 128
    assert yuv[0, 0, 2] < 128


def test_bgr_to_yuv_rejects_mask():
    with pytest.raises(ValueError):
        bgr_to_yuv(np.zeros((3, 3), dtype=np.uint8))


def test_histogram_shape_and_range():
    hist = histogram_2d(_random_image(1))
    assert hist.shape == (HIST_BINS, HIST_BINS)
    assert hist.max() == pytest.approx(1.0)
    assert hist.min() == pytest.approx(0.0)


def test_histogram_single_colour_has_one_bin():
    image = np.zeros((5, 5, 3), dtype=np.uint8)
    image[..., 0] = 8
    image[..., 1] = 16
    hist = histogram_2d(image)
    assert np.count_nonzero(hist) == 1
    assert hist.sum() == pytest.approx(1.0)


def test_histogram_ignores_top_value():
    image = np.full((4, 4, 3), 255, dtype=np.uint8)
    assert not histogram_2d(image).any()


def test_kl_divergence_of_identical_is_zero():
    hist = histogram_2d(_random_image(2))
    assert kl_divergence(hist, hist) == pytest.approx(0.0)


def test_kl_divergence_positive_for_missing_target_bins():
    reference = np.zeros((HIST_BINS, HIST_BINS))
    reference[0, 0] = 1.0
    target = np.zeros((HIST_BINS, HIST_BINS))
    target[1, 1] = 1.0
    assert kl_divergence(reference, target) > 0


def test_kl_divergence_skips_empty_reference():
    reference = np.zeros((HIST_BINS, HIST_BINS))
    assert kl_divergence(reference, histogram_2d(_random_image(3))) == 0.0


def test_kl_divergence_shape_mismatch():
    with pytest.raises(ValueError):
        kl_divergence(np.ones((4, 4)), np.ones((3, 3)))


def test_ball_reference_scores_itself_zero():
    image = _random_image(4)
    reference = BallReference(image)
    assert reference.score(image) == pytest.approx(0.0)
    other = np.zeros((10, 10, 3), dtype=np.uint8)
    other[..., 2] = 250
    assert reference.score(other) > 0


def test_ball_reference_rejects_empty():
    with pytest.raises(ValueError):
        BallReference(np.zeros((0, 0, 3), dtype=np.uint8))