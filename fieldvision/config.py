"""Detector configuration: HSV filter bounds, Hough parameters and their YAML form."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

import yaml

GAUSSIAN_BLUR_SIZE_DEFAULT = 7
GAUSSIAN_BLUR_SIGMA_DEFAULT = 2.0
CANNY_EDGE_TH_DEFAULT = 130.0
HOUGH_ACCUM_RESOLUTION_DEFAULT = 2.0
MIN_CIRCLE_DIST_DEFAULT = 30.0
HOUGH_ACCUM_TH_DEFAULT = 120.0
MIN_RADIUS_DEFAULT = 30
MAX_RADIUS_DEFAULT = 400
FILTER_H_MIN_DEFAULT = 0
FILTER_H_MAX_DEFAULT = 30
FILTER_S_MIN_DEFAULT = 0
FILTER_S_MAX_DEFAULT = 255
FILTER_V_MIN_DEFAULT = 0
FILTER_V_MAX_DEFAULT = 255
ELLIPSE_SIZE_DEFAULT = 5


class ImageEncoding(enum.IntEnum):
    """Pixel encodings the detector understands."""

    MONO = 0
    RGB8 = 1


@dataclass
class HsvFilter:
    """Inclusive HSV bounds; hue is in degrees (0-360), S and V in 0-255."""

    h_min: int = FILTER_H_MIN_DEFAULT
    h_max: int = FILTER_H_MAX_DEFAULT
    s_min: int = FILTER_S_MIN_DEFAULT
    s_max: int = FILTER_S_MAX_DEFAULT
    v_min: int = FILTER_V_MIN_DEFAULT
    v_max: int = FILTER_V_MAX_DEFAULT


def _fetch(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing configuration key: {key!r}") from None


def _as_int(data: Mapping[str, Any], key: str) -> int:
    value = _fetch(data, key)
    if isinstance(value, bool):
        raise ValueError(f"{key!r} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{key!r} must be an integer, got {value!r}")


def _as_float(data: Mapping[str, Any], key: str) -> float:
    value = _fetch(data, key)
    if isinstance(value, bool):
        raise ValueError(f"{key!r} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{key!r} must be a number, got {value!r}")


_TRUE_WORDS = {"true", "yes", "on", "y"}
_FALSE_WORDS = {"false", "no", "off", "n"}


def _as_bool(data: Mapping[str, Any], key: str) -> bool:
    value = _fetch(data, key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{key!r} must be a boolean, got {value!r}")


def _format_number(value: float) -> str:
    return f"{value:g}"


@dataclass
class DetectorConfig:
    """All tunable parameters of the circle detector."""

    gaussian_blur_size: int = GAUSSIAN_BLUR_SIZE_DEFAULT
    gaussian_blur_sigma: float = GAUSSIAN_BLUR_SIGMA_DEFAULT
    canny_edge_th: float = CANNY_EDGE_TH_DEFAULT
    hough_accum_resolution: float = HOUGH_ACCUM_RESOLUTION_DEFAULT
    min_circle_dist: float = MIN_CIRCLE_DIST_DEFAULT
    hough_accum_th: float = HOUGH_ACCUM_TH_DEFAULT
    min_radius: int = MIN_RADIUS_DEFAULT
    max_radius: int = MAX_RADIUS_DEFAULT
    filter_threshold: HsvFilter = field(default_factory=HsvFilter)
    use_second_filter: bool = False
    filter2_threshold: HsvFilter = field(default_factory=HsvFilter)
    ellipse_size: int = ELLIPSE_SIZE_DEFAULT
    debug: bool = False

    def normalized(self) -> DetectorConfig:
        """Return a copy whose Gaussian blur size is odd and at least 1."""
        size = self.gaussian_blur_size
        if size % 2 == 0:
            size -= 1
        if size <= 0:
            size = 1
        return replace(
            self,
            gaussian_blur_size=size,
            filter_threshold=replace(self.filter_threshold),
            filter2_threshold=replace(self.filter2_threshold),
        )

    def to_dict(self) -> dict[str, Any]:
        """Flat mapping with the keys used in the YAML parameter file."""
        first = self.filter_threshold
        second = self.filter2_threshold
        return {
            "gaussian_blur_size": self.gaussian_blur_size,
            "gaussian_blur_sigma": self.gaussian_blur_sigma,
            "canny_edge_th": self.canny_edge_th,
            "hough_accum_resolution": self.hough_accum_resolution,
            "min_circle_dist": self.min_circle_dist,
            "hough_accum_th": self.hough_accum_th,
            "min_radius": self.min_radius,
            "max_radius": self.max_radius,
            "filter_h_min": first.h_min,
            "filter_h_max": first.h_max,
            "filter_s_min": first.s_min,
            "filter_s_max": first.s_max,
            "filter_v_min": first.v_min,
            "filter_v_max": first.v_max,
            "use_second_filter": self.use_second_filter,
            "filter2_h_min": second.h_min,
            "filter2_h_max": second.h_max,
            "filter2_s_min": second.s_min,
            "filter2_s_max": second.s_max,
            "filter2_v_min": second.v_min,
            "filter2_v_max": second.v_max,
            "ellipse_size": self.ellipse_size,
            "filter_debug": self.debug,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DetectorConfig:
        """Build a configuration from a flat mapping; every key is required."""
        if not isinstance(data, Mapping):
            raise ValueError("configuration must be a mapping")

        def hsv(prefix: str) -> HsvFilter:
            return HsvFilter(
                h_min=_as_int(data, f"{prefix}_h_min"),
                h_max=_as_int(data, f"{prefix}_h_max"),
                s_min=_as_int(data, f"{prefix}_s_min"),
                s_max=_as_int(data, f"{prefix}_s_max"),
                v_min=_as_int(data, f"{prefix}_v_min"),
                v_max=_as_int(data, f"{prefix}_v_max"),
            )

        return cls(
            gaussian_blur_size=_as_int(data, "gaussian_blur_size"),
            gaussian_blur_sigma=_as_float(data, "gaussian_blur_sigma"),
            canny_edge_th=_as_float(data, "canny_edge_th"),
            hough_accum_resolution=_as_float(data, "hough_accum_resolution"),
            min_circle_dist=_as_float(data, "min_circle_dist"),
            hough_accum_th=_as_float(data, "hough_accum_th"),
            min_radius=_as_int(data, "min_radius"),
            max_radius=_as_int(data, "max_radius"),
            filter_threshold=hsv("filter"),
            use_second_filter=_as_bool(data, "use_second_filter"),
            filter2_threshold=hsv("filter2"),
            ellipse_size=_as_int(data, "ellipse_size"),
            debug=_as_bool(data, "filter_debug"),
        )

    def describe(self) -> str:
        """Human-readable listing of the configuration."""
        first = self.filter_threshold
        second = self.filter2_threshold
        entries = [
            ("gaussian_blur_size", str(self.gaussian_blur_size)),
            ("gaussian_blur_sigma", _format_number(self.gaussian_blur_sigma)),
            ("canny_edge_th", _format_number(self.canny_edge_th)),
            ("hough_accum_resolution", _format_number(self.hough_accum_resolution)),
            ("min_circle_dist", _format_number(self.min_circle_dist)),
            ("hough_accum_th", _format_number(self.hough_accum_th)),
            ("min_radius", str(self.min_radius)),
            ("max_radius", str(self.max_radius)),
            ("filter_h_min", str(first.h_min)),
            ("filter_h_max", str(first.h_max)),
            ("filter_s_min", str(first.s_min)),
            ("filter_s_max", str(first.s_max)),
            ("filter_v_min", str(first.v_min)),
            ("filter_v_max", str(first.v_max)),
            ("use_second_filter", str(int(self.use_second_filter))),
            ("filter2_h_min", str(second.h_min)),
            ("filter2_h_max", str(second.h_max)),
            ("filter2_s_min", str(second.s_min)),
            ("filter2_s_max", str(second.s_max)),
            ("filter2_v_min", str(second.v_min)),
            ("filter2_v_max", str(second.v_max)),
            ("ellipse_size", str(self.ellipse_size)),
            ("filter_image_to_debug", str(int(self.debug))),
        ]
        lines = ["Detetctor Configuration:"]
        lines.extend(f"    {name}: {value}" for name, value in entries)
        return "\n".join(lines) + "\n\n"


def load_config(path: str | os.PathLike[str]) -> DetectorConfig:
    """Read a YAML parameter file; the blur size is made odd and positive."""
    with open(path, encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML in {os.fspath(path)}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError(f"{os.fspath(path)} does not hold a mapping")
    return DetectorConfig.from_dict(data).normalized()


def save_config(config: DetectorConfig, path: str | os.PathLike[str]) -> None:
    """Write the configuration as a YAML mapping in canonical key order."""
    with open(path, "w", encoding="utf-8") as handle:
        yaml.safe_dump(config.to_dict(), handle, sort_keys=False, default_flow_style=False)