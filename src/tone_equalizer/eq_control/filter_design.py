# src/tone_equalizer/eq_control/filter_design.py

"""
Shelf and peak biquad design.

Each design function takes (frequency, gain_db, q, sample_rate) and returns a
BiquadCoefficients normalized so that a0 == 1. At 0 dB gain every design
reduces to a unity (flat) response.

Filter codes follow Equalizer APO naming:
    LSC - low shelf (bass)
    PK  - peak / bell (mid)
    HSC - high shelf (treble)
"""

import numpy as np

from ..core.biquad import BiquadCoefficients
from .. import config
from .. import utils


def _normalize(b0, b1, b2, a0, a1, a2):
    return BiquadCoefficients(
        b0=float(b0 / a0),
        b1=float(b1 / a0),
        b2=float(b2 / a0),
        a1=float(a1 / a0),
        a2=float(a2 / a0),
    )


def _shelf_terms(frequency, gain_db, sample_rate, slope=config.SHELF_SLOPE):
    """Common terms of both shelf designs: (A, cos w, 2*sqrt(A)*alpha)."""
    w = 2.0 * np.pi * frequency / sample_rate
    cosw = np.cos(w)
    sinw = np.sin(w)
    A = utils.db_to_linear(gain_db)
    alpha = sinw / 2.0 * np.sqrt((A + 1.0 / A) * (1.0 / slope - 1.0) + 2.0)
    return A, cosw, 2.0 * np.sqrt(A) * alpha


def design_low_shelf(frequency, gain_db, q, sample_rate):
    """
    Low shelf: boost/cut everything below `frequency`.

    `q` is accepted for a uniform signature; the shelf shape is fixed by the
    slope S = 1.
    """
    A, cosw, k = _shelf_terms(frequency, gain_db, sample_rate)

    b0 = A * ((A + 1.0) - (A - 1.0) * cosw + k)
    b1 = 2.0 * A * ((A - 1.0) - (A + 1.0) * cosw)
    b2 = A * ((A + 1.0) - (A - 1.0) * cosw - k)
    a0 = (A + 1.0) + (A - 1.0) * cosw + k
    a1 = -2.0 * ((A - 1.0) + (A + 1.0) * cosw)
    a2 = (A + 1.0) + (A - 1.0) * cosw - k
    return _normalize(b0, b1, b2, a0, a1, a2)


def design_peak(frequency, gain_db, q, sample_rate):
    """Peak / bell: boost/cut a band centered on `frequency`, width set by `q`."""
    w = 2.0 * np.pi * frequency / sample_rate
    cosw = np.cos(w)
    sinw = np.sin(w)
    A = utils.db_to_linear(gain_db)
    alpha = sinw / (2.0 * q)

    b0 = 1.0 + alpha * A
    b1 = -2.0 * cosw
    b2 = 1.0 - alpha * A
    a0 = 1.0 + alpha / A
    a1 = -2.0 * cosw
    a2 = 1.0 - alpha / A
    return _normalize(b0, b1, b2, a0, a1, a2)


def design_high_shelf(frequency, gain_db, q, sample_rate):
    """High shelf: mirror of the low shelf, boost/cut everything above `frequency`."""
    A, cosw, k = _shelf_terms(frequency, gain_db, sample_rate)

    b0 = A * ((A + 1.0) + (A - 1.0) * cosw + k)
    b1 = -2.0 * A * ((A - 1.0) + (A + 1.0) * cosw)
    b2 = A * ((A + 1.0) + (A - 1.0) * cosw - k)
    a0 = (A + 1.0) - (A - 1.0) * cosw + k
    a1 = 2.0 * ((A - 1.0) - (A + 1.0) * cosw)
    a2 = (A + 1.0) - (A - 1.0) * cosw - k
    return _normalize(b0, b1, b2, a0, a1, a2)


FILTER_DESIGNERS = {
    "LSC": design_low_shelf,
    "PK": design_peak,
    "HSC": design_high_shelf,
}


def clamp_design_frequency(frequency, sample_rate):
    """
    Keep a band frequency below Nyquist. At or above fs/2 sin(w) turns
    negative and the shelf designs place their poles outside the unit circle.
    """
    return min(frequency, config.MAX_DESIGN_FREQUENCY_RATIO * sample_rate)


def design_filter(filter_code, frequency, gain_db, q, sample_rate):
    """
    Design a biquad by filter code ('LSC', 'PK' or 'HSC').

    The frequency is clamped below Nyquist first, so low sample rates
    (e.g. 11025 Hz with the 8 kHz treble corner) still give a stable filter.

    :raises ValueError: if the filter code is unknown.
    """
    try:
        designer = FILTER_DESIGNERS[filter_code.upper()]
    except KeyError:
        raise ValueError(f"Unknown filter code: {filter_code!r}")
    return designer(clamp_design_frequency(frequency, sample_rate), gain_db, q, sample_rate)
