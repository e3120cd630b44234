"""Tunable parameters and view modes of the segmentation ball detector."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any

import yaml


class FrameMode(enum.IntEnum):
    """What the detector shows in its output image."""

    RAW = 0
    HSV = 1
    SEGMENTED = 2
    ANNOTATED = 3


def _int_value(data: Any, key: str) -> int:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"missing key: {key!r}")
    value = data[key]
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"{key!r} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{key!r} must be an integer, got {value!r}")


@dataclass
class DetectorParams:
    """Histogram score and circle-fit cost limits for ball candidates."""

    score: int
    cost: int

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> DetectorParams:
        """Read 'score' and 'cost' from a YAML file."""
        with open(path, encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ValueError(f"invalid YAML in {os.fspath(path)}: {exc}") from exc
        return cls(score=_int_value(data, "score"), cost=_int_value(data, "cost"))

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the parameters as a YAML mapping."""
        with open(path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(
                {"score": self.score, "cost": self.cost},
                handle,
                sort_keys=False,
                default_flow_style=False,
            )

    def score_threshold(self) -> float:
        """Lowest histogram score a candidate needs to be kept."""
        return self.score / 10.0