"""Full-series recomputation."""

from .series import DerivedSeries, GameInputs, PointAnalysis, analyze_point, compute_series
