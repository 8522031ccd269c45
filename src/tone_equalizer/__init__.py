"""
Tone Equalizer: a real-time three-band (bass/mid/treble) biquad equalizer.
"""

from .core.equalizer import ToneEqualizer

__all__ = ["ToneEqualizer"]
