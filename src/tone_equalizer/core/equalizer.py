# src/tone_equalizer/core/equalizer.py

import logging

import numpy as np

from ..eq_control.filter_design import design_filter
from ..analysis.response import cascade_response_db
from .biquad import BiquadFilter, cascade_block
from .. import config
from .. import utils

logger = logging.getLogger(__name__)

LEFT = 0
RIGHT = 1
NUM_CHANNELS = 2


def _as_float_buffer(samples):
    """
    Return `samples` as a writable floating point array, without copying when
    it already is one, so processed results land in the caller's buffer.
    """
    buf = np.asarray(samples)
    if not np.issubdtype(buf.dtype, np.floating):
        buf = buf.astype(np.float64)
    elif not buf.flags.writeable:
        buf = buf.copy()
    return buf


class ToneEqualizer:
    """
    Three-band tone equalizer: bass (low shelf), mid (peak), treble (high shelf).

    Tone levels (0-100, 50 = flat) are mapped to +/-12 dB and turned into biquad
    coefficients. Audio is run through the cascade bass -> mid -> treble and
    hard clamped to [-1.0, 1.0].

    The engine keeps one filter chain per channel. Both chains reference the same
    coefficient objects, designed once per change, but each chain has its own
    history, so left and right never bleed into each other. Mono processing
    uses the left chain.

    Invalid input never raises: levels and filter types are clamped, empty or
    missing buffers are ignored.

    Not thread safe; callers serialize configuration against processing.
    """

    def __init__(self, sample_rate=config.DEFAULT_SAMPLE_RATE):
        self._enabled = False
        self._band_index = {}
        self._levels = {}
        for i, (name, _code, _freq) in enumerate(config.BAND_FILTERS):
            self._band_index[name] = i
            self._levels[name] = config.DEFAULT_LEVEL
        self._sample_rate = int(sample_rate) if sample_rate and sample_rate > 0 else config.DEFAULT_SAMPLE_RATE
        self._filter_type = config.MIN_FILTER_TYPE

        self._channels = [
            [BiquadFilter() for _ in config.BAND_FILTERS] for _ in range(NUM_CHANNELS)
        ]
        self.reset_filters()

    def __repr__(self):
        return (f"ToneEqualizer(enabled={self._enabled}, bass={self.get_bass_level()}, "
                f"mid={self.get_mid_level()}, treble={self.get_treble_level()}, "
                f"sample_rate={self._sample_rate})")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_enabled(self, enabled):
        """
        Turn the equalizer on or off.

        Disabling resets every filter to unity with zero history so that a later
        re-enable starts without stale transients. Enabling does not redesign;
        coefficients follow the next level, sample rate or filter type change.
        """
        self._enabled = bool(enabled)
        if not self._enabled:
            self.reset_filters()
        logger.info("Equalizer %s", "enabled" if self._enabled else "disabled")

    def is_enabled(self):
        return self._enabled

    def set_bass_level(self, level):
        self._set_level("bass", level)

    def set_mid_level(self, level):
        self._set_level("mid", level)

    def set_treble_level(self, level):
        self._set_level("treble", level)

    def get_bass_level(self):
        return self._levels["bass"]

    def get_mid_level(self):
        return self._levels["mid"]

    def get_treble_level(self):
        return self._levels["treble"]

    def set_sample_rate(self, sample_rate):
        """Change the sample rate; non-positive or unchanged rates are ignored."""
        if sample_rate is None or sample_rate <= 0 or sample_rate == self._sample_rate:
            return
        self._sample_rate = int(sample_rate)
        logger.debug("Sample rate set to %d Hz", self._sample_rate)
        if self._enabled:
            self._redesign_all()

    def get_sample_rate(self):
        return self._sample_rate

    def set_filter_type(self, filter_type):
        """
        Store the filter type selector (clamped to 0..2) and redesign when enabled.

        The selector does not change which filter family each band uses; bass is
        always a low shelf, mid a peak and treble a high shelf.
        """
        self._filter_type = utils.clamp_filter_type(filter_type)
        logger.debug("Filter type set to %d", self._filter_type)
        if self._enabled:
            self._redesign_all()

    def get_filter_type(self):
        return self._filter_type

    def get_gain_db(self, band):
        """Current gain of a band in dB."""
        return utils.level_to_gain(self._levels[self._check_band(band)])

    def get_coefficients(self, band, channel=LEFT):
        """Coefficients currently applied by a band's filter."""
        return self._channels[channel][self._band_index[self._check_band(band)]].coefficients

    @property
    def bands(self):
        return tuple(name for name, _code, _freq in config.BAND_FILTERS)

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------
    def process_buffer(self, input_buffer, output_buffer, num_samples, sample_rate, channel=LEFT):
        """
        Equalize `num_samples` samples of `input_buffer` into `output_buffer`.

        Buffers may be the same object. Missing buffers or a non-positive sample
        count are ignored. A new sample rate redesigns the filters first. When
        disabled the input is copied through untouched and no filter state changes.
        """
        if input_buffer is None or output_buffer is None or num_samples <= 0:
            return
        n = min(int(num_samples), len(input_buffer), len(output_buffer))
        if n <= 0:
            return

        if sample_rate != self._sample_rate:
            self.set_sample_rate(sample_rate)

        if not self._enabled:
            output_buffer[:n] = input_buffer[:n]
            return

        out = cascade_block(self._channels[channel], np.asarray(input_buffer[:n], dtype=np.float64))
        np.clip(out, -config.OUTPUT_CLAMP, config.OUTPUT_CLAMP, out=out)
        output_buffer[:n] = out

    def process_mono(self, samples, sample_rate):
        """
        Equalize a mono signal and return a new array of the same length.

        Floating point input keeps its dtype; anything else comes back as float64.
        """
        if samples is None:
            return None
        x = np.asarray(samples)
        if not np.issubdtype(x.dtype, np.floating):
            x = x.astype(np.float64)
        out = np.empty_like(x)
        if len(x) == 0:
            return out
        self.process_buffer(x, out, len(x), sample_rate, channel=LEFT)
        return out

    def process_stereo(self, left, right, sample_rate):
        """
        Equalize a stereo pair in place and return (left, right).

        Writable float arrays are modified in place; other sequences are
        converted and the processed arrays are returned. Each channel runs
        through its own filter history.
        """
        if left is None or right is None:
            return left, right
        left = _as_float_buffer(left)
        right = _as_float_buffer(right)
        self.process_buffer(left, left, len(left), sample_rate, channel=LEFT)
        self.process_buffer(right, right, len(right), sample_rate, channel=RIGHT)
        return left, right

    def frequency_response(self, freqs=None):
        """
        Magnitude response (dB) of the cascade as currently configured.
        Returns (freqs, response_db); all zeros when disabled.
        """
        if freqs is None:
            freqs = utils.log_frequencies(end_freq=min(config.RESPONSE_END_FREQ, self._sample_rate / 2.0 * 0.99))
        freqs = np.asarray(freqs, dtype=np.float64)
        if not self._enabled:
            return freqs, np.zeros_like(freqs)
        coefficient_list = [biquad.coefficients for biquad in self._channels[LEFT]]
        return freqs, cascade_response_db(coefficient_list, freqs, self._sample_rate)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def reset_filters(self):
        """Unity coefficients and zero history on every band of every channel."""
        for chain in self._channels:
            for biquad in chain:
                biquad.reset()
        logger.info("Filters reset")

    def clear_buffers(self):
        """Zero the filter history, keeping the coefficients."""
        for chain in self._channels:
            for biquad in chain:
                biquad.clear()
        logger.debug("Filter buffers cleared")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _check_band(self, band):
        if band not in self._band_index:
            raise ValueError(f"Unknown band {band!r}. Available: {', '.join(self.bands)}")
        return band

    def _set_level(self, band, level):
        self._levels[band] = utils.clamp_level(level)
        logger.info("%s level set to %d", band.capitalize(), self._levels[band])
        if self._enabled:
            self._design_band(band)

    def _design_band(self, band):
        index = self._band_index[band]
        _name, code, frequency = config.BAND_FILTERS[index]
        gain = utils.level_to_gain(self._levels[band])
        coefficients = design_filter(code, frequency, gain, config.FILTER_Q, self._sample_rate)
        for chain in self._channels:
            chain[index].set_coefficients(coefficients)
        logger.debug("Designed %s %s filter: fc=%.1f Hz, gain=%.1f dB, fs=%d Hz",
                     band, code, frequency, gain, self._sample_rate)

    def _redesign_all(self):
        for name in self.bands:
            self._design_band(name)
