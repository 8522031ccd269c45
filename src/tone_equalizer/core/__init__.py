from .biquad import BiquadCoefficients, BiquadFilter, FilterHistory

__all__ = ["BiquadCoefficients", "BiquadFilter", "FilterHistory"]
