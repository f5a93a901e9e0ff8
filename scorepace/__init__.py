"""Live final-score prediction from basketball play-by-play timelines."""

__version__ = "0.1.0"
