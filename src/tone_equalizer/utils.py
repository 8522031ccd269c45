# src/tone_equalizer/utils.py

"""
Utility functions for converting tone-control levels into gains.
"""

import numpy as np
from . import config


def _finite_int(value, default):
    """int(value), or `default` when value is NaN, infinite or not a number."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    if not np.isfinite(value):
        return default
    return int(value)


def clamp_level(level):
    """
    Clamp a tone-control level into the valid [MIN_LEVEL, MAX_LEVEL] range.
    Returns an int; unusable values fall back to DEFAULT_LEVEL.
    """
    level = _finite_int(level, config.DEFAULT_LEVEL)
    return min(max(level, config.MIN_LEVEL), config.MAX_LEVEL)


def clamp_filter_type(filter_type):
    """Clamp the filter type selector into its valid range."""
    filter_type = _finite_int(filter_type, config.MIN_FILTER_TYPE)
    return min(max(filter_type, config.MIN_FILTER_TYPE), config.MAX_FILTER_TYPE)


def level_to_gain(level):
    """
    Convert a 0-100 level into a dB gain between MIN_GAIN_DB and MAX_GAIN_DB.

    Level 50 maps to 0 dB (flat). Out-of-range levels are clamped first.
    """
    level = clamp_level(level)
    normalized_level = (level - 50.0) / 50.0  # -1.0 to 1.0
    return normalized_level * config.MAX_GAIN_DB


def db_to_linear(db):
    return 10.0 ** (db / 20.0)


def linear_to_db(linear):
    """Convert a linear amplitude to dB, flooring at 1e-6 (-120 dB)."""
    return 20.0 * np.log10(np.maximum(linear, 1e-6))


def log_frequencies(start_freq=config.RESPONSE_START_FREQ,
                    end_freq=config.RESPONSE_END_FREQ,
                    num_points=config.RESPONSE_POINTS):
    """Logarithmically spaced frequency grid for response analysis."""
    return np.logspace(np.log10(start_freq), np.log10(end_freq), num_points)
