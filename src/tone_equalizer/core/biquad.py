# src/tone_equalizer/core/biquad.py

"""
Second-order IIR sections: coefficients, history and direct-form-I evaluation.
"""

from dataclasses import dataclass

import numpy as np
from scipy import signal


@dataclass(frozen=True)
class BiquadCoefficients:
    """
    Normalized biquad coefficients (a0 == 1).

    Instances are immutable so one set of coefficients can be referenced by
    several filters (one per audio channel) while each keeps its own history.
    """
    b0: float = 1.0
    b1: float = 0.0
    b2: float = 0.0
    a1: float = 0.0
    a2: float = 0.0

    @classmethod
    def identity(cls):
        """Unity-gain, zero-delay pass-through."""
        return cls()

    @property
    def b(self):
        return np.array([self.b0, self.b1, self.b2])

    @property
    def a(self):
        return np.array([1.0, self.a1, self.a2])

    def is_identity(self):
        return self == BiquadCoefficients.identity()


class FilterHistory:
    """Last two inputs (x1, x2) and outputs (y1, y2) of one biquad."""

    __slots__ = ("x1", "x2", "y1", "y2")

    def __init__(self):
        self.reset()

    def reset(self):
        self.x1 = self.x2 = 0.0
        self.y1 = self.y2 = 0.0

    def is_clear(self):
        return self.x1 == self.x2 == self.y1 == self.y2 == 0.0

    def __repr__(self):
        return (f"FilterHistory(x1={self.x1!r}, x2={self.x2!r}, "
                f"y1={self.y1!r}, y2={self.y2!r})")


class BiquadFilter:
    """
    A single biquad stage.

    Attributes:
        coefficients (BiquadCoefficients): Current (shared) coefficients.
        history (FilterHistory): Per-instance input/output history.

    Methods:
        process_sample(x): Evaluate one sample, updating history.
        process_block(samples): Evaluate a whole block, updating history.
        set_coefficients(coefficients): Swap coefficients, keeping history.
        reset(): Identity coefficients and zero history.
        clear(): Zero history only.
    """

    def __init__(self, coefficients=None):
        self.coefficients = coefficients if coefficients is not None else BiquadCoefficients.identity()
        self.history = FilterHistory()

    def set_coefficients(self, coefficients):
        self.coefficients = coefficients

    def reset(self):
        self.coefficients = BiquadCoefficients.identity()
        self.history.reset()

    def clear(self):
        self.history.reset()

    def process_sample(self, x):
        """Direct-form-I evaluation of one input sample."""
        c = self.coefficients
        h = self.history
        y = c.b0 * x + c.b1 * h.x1 + c.b2 * h.x2 - c.a1 * h.y1 - c.a2 * h.y2

        # Update history
        h.x2 = h.x1
        h.x1 = x
        h.y2 = h.y1
        h.y1 = y
        return y

    def process_block(self, samples):
        """
        Filter a 1-D block and return the output as float64.

        Gives the same result as calling process_sample on every element, but
        runs through scipy.signal.lfilter. The DF-I history seeds the lfilter
        state and is updated from the block's last two inputs and outputs, so
        consecutive blocks join without discontinuity.
        """
        x = np.asarray(samples, dtype=np.float64)
        n = len(x)
        if n == 0:
            return x.copy()

        c = self.coefficients
        h = self.history
        zi = signal.lfiltic(c.b, c.a, y=[h.y1, h.y2], x=[h.x1, h.x2])
        y, _ = signal.lfilter(c.b, c.a, x, zi=zi)

        if n >= 2:
            h.x1, h.x2 = float(x[-1]), float(x[-2])
            h.y1, h.y2 = float(y[-1]), float(y[-2])
        else:
            h.x2, h.x1 = h.x1, float(x[-1])
            h.y2, h.y1 = h.y1, float(y[-1])
        return y


def cascade_block(filters, samples):
    """Run a block through a sequence of filters, each feeding the next."""
    out = np.asarray(samples, dtype=np.float64)
    for biquad in filters:
        out = biquad.process_block(out)
    return out
