"""Circle detection, histogram scoring, ball ranging, trajectory prediction and localization helpers for robot soccer vision."""

__version__ = "0.1.0"