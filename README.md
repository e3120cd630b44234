# fieldvision

Vision building blocks for a soccer-playing robot: detecting circles in
camera frames, scoring candidate ball regions against a reference image,
estimating the distance to the ball, predicting where the ball moves next,
and keeping the parameters of a particle-filter localizer.

Images are NumPy arrays: `height x width x 3` `uint8` colour images or
single-channel masks.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Modules

- `fieldvision.config`: `DetectorConfig` and `HsvFilter` hold the parameters
  of an HSV-filter plus Hough-circle detector; `ImageEncoding` names the
  supported pixel encodings. `DetectorConfig.normalized()` makes the Gaussian
  blur size odd and at least 1, `to_dict` / `from_dict` convert to and from the
  flat YAML key layout, and `describe()` gives a printable listing.
  `load_config(path)` and `save_config(config, path)` read and write YAML files.
- `fieldvision.hough`: `gaussian_blur(image, size, sigma)` and
  `hough_circles(image, dp, min_dist, canny_threshold, accumulator_threshold,
  min_radius, max_radius)`, which returns `(x, y, radius)` tuples.
- `fieldvision.histogram`: `bgr_to_yuv`, `histogram_2d` (a min-max normalised
  32 x 32 histogram of the first two channels), `kl_divergence`, and
  `BallReference`, whose `score(roi)` is the divergence of a region from a
  reference ball image.
- `fieldvision.candidates`: `roi_ratio`, `split_roi` (quadrants or halves of a
  region mask), `scan_edges` (outermost marked pixels of each sub-frame, in
  image coordinates), `ball_roi` (clamped bounding box of a circle) and
  `fill_ratio`.
- `fieldvision.detector_params`: `DetectorParams` (`score`, `cost`) with
  `load`, `save` and `score_threshold()`, and the `FrameMode` enum.
- `fieldvision.ranging`: `focal_length(head_angle)` from a calibrated table of
  head tilt angles, and `ball_distance(radius, head_angle)` in centimetres for
  a 13 cm ball.
- `fieldvision.trajectory`: `fit_trajectory` (quadratic least-squares fit of
  x and y against sample index), `predict_position`, and `TrajectoryTracker`,
  which refits every ten detections and bridges short gaps by prediction or by
  holding the last position.
- `fieldvision.amcl`: `prob_density`, `exp_weight` and `RandomSampler` with
  seedable uniform, normal and approximate-normal draws.
- `fieldvision.localization_params`: `LocalizationParams` with `load` / `save`,
  `load_servo_offsets`, `orientation_degrees` and `sign_against`.

## Examples

Detecting a bright disc:

```python
import numpy as np
from fieldvision.hough import gaussian_blur, hough_circles

image = np.zeros((200, 200), dtype=np.uint8)
yy, xx = np.mgrid[:200, :200]
image[(xx - 100) ** 2 + (yy - 100) ** 2 <= 40 ** 2] = 255

blurred = gaussian_blur(image, 7, 2.0)
print(hough_circles(blurred, 2.0, 30.0, 130.0, 30.0, 20, 80))
```

Distance to a ball whose image radius is 40 pixels, with the head at 70 degrees:

```python
from fieldvision.ranging import ball_distance

print(ball_distance(40.0, 70.0))  # 99.0
```

Tracking a ball across frames:

```python
from fieldvision.trajectory import TrajectoryTracker

tracker = TrajectoryTracker()
for step in range(10):
    tracker.update((100 + 5 * step, 200, 12), prediction_enabled=True)
print(tracker.update(None, prediction_enabled=True))  # predicted position
```

Reading and writing detector configuration:

```python
from fieldvision.config import DetectorConfig, load_config, save_config

config = DetectorConfig(gaussian_blur_size=8).normalized()
save_config(config, "detector.yaml")
print(load_config("detector.yaml").describe())
```

## What this package does not do

There is no complete detector that takes a camera frame and returns the ball:
the package has no HSV range filtering or morphological clean-up of colour
masks, no colour lookup-table segmentation of field, lines and ball, and no
field-boundary extraction. The pieces above (circle detection, histogram
scoring, region splitting, ranging, trajectory prediction) have to be
combined by the caller. There is also no camera input, no message publishing
and no command-line program.