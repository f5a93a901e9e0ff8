"""Velocity estimation and final-score projection."""

from .projection import Projection, predict_series, project_final_score
from .velocity import VelocityEstimate, estimate_velocity
