"""Localization filter parameters, servo offsets and orientation helpers."""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

import yaml


def _read_yaml(path: str | os.PathLike[str]) -> Any:
    with open(path, encoding="utf-8") as handle:
        try:
            return yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML in {os.fspath(path)}: {exc}") from exc


def _get(data: Any, key: str) -> Any:
    if not isinstance(data, Mapping) or key not in data:
        raise ValueError(f"missing key: {key!r}")
    return data[key]


def _number(data: Any, key: str, kind: type) -> Any:
    value = _get(data, key)
    if isinstance(value, bool):
        raise ValueError(f"{key!r} must be numeric, got {value!r}")
    try:
        if kind is int and isinstance(value, float):
            raise ValueError
        return kind(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValueError(f"{key!r} must be {kind.__name__}, got {value!r}") from None


@dataclass
class LocalizationParams:
    """Tunable parameters of the particle filter."""

    num_particles: int
    range_var: float
    beam_var: float
    gy_var: float
    alpha1: float
    alpha2: float
    alpha3: float
    alpha4: float
    short_term_rate: float
    long_term_rate: float

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> LocalizationParams:
        """Read the parameters from a YAML file; every key is required."""
        data = _read_yaml(path)
        values = {
            f.name: _number(data, f.name, int if f.name == "num_particles" else float)
            for f in fields(cls)
        }
        return cls(**values)

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the parameters as a YAML mapping."""
        with open(path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(asdict(self), handle, sort_keys=False, default_flow_style=False)


def load_servo_offsets(path: str | os.PathLike[str]) -> tuple[float, float]:
    """Read (head_pan, head_tilt) from the 'offset' section of a YAML file."""
    offsets = _get(_read_yaml(path), "offset")
    return _number(offsets, "head_pan", float), _number(offsets, "head_tilt", float)


def orientation_degrees(roll: float, pitch: float, yaw: float) -> tuple[float, float, float]:
    """Convert radians to degrees; yaw is mapped into (-180, 180] with its sign flipped."""
    roll_deg = roll * 180.0 / math.pi
    pitch_deg = pitch * 180.0 / math.pi
    yaw_deg = yaw * 180.0 / math.pi
    current = yaw_deg if yaw_deg > 0 else 360.0 + yaw_deg
    if current >= 360.0:
        current -= 360.0
    elif current < 0.0:
        current += 360.0
    heading = -current if current <= 180.0 else 360.0 - current
    return roll_deg, pitch_deg, heading


def sign_against(value: float, limit: float) -> int:
    """-1 when value lies below limit, otherwise 1."""
    return -1 if value < limit else 1