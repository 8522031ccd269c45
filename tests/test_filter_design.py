# tests/test_filter_design.py

import pytest
import numpy as np

from tone_equalizer.core.biquad import BiquadCoefficients
from tone_equalizer.eq_control.filter_design import (
    clamp_design_frequency,
    design_filter,
    design_low_shelf,
    design_peak,
    design_high_shelf,
)
from tone_equalizer.analysis.response import biquad_response_db
from tone_equalizer import config
from tone_equalizer import utils

FS = 44100


def dc_gain(c):
    """Linear gain at 0 Hz (z = 1)."""
    return np.sum(c.b) / np.sum(c.a)


def nyquist_gain(c):
    """Linear gain at fs/2 (z = -1)."""
    signs = np.array([1.0, -1.0, 1.0])
    return np.sum(c.b * signs) / np.sum(c.a * signs)


class TestLevelToGain:
    """Level (0-100) to dB mapping."""

    @pytest.mark.parametrize("level, expected", [
        (0, -12.0),
        (25, -6.0),
        (50, 0.0),
        (75, 6.0),
        (100, 12.0),
    ])
    def test_mapping(self, level, expected):
        assert utils.level_to_gain(level) == pytest.approx(expected)

    def test_out_of_range_levels_are_clamped(self):
        assert utils.level_to_gain(-5) == utils.level_to_gain(0)
        assert utils.level_to_gain(150) == utils.level_to_gain(100)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), None, "loud"])
    def test_unusable_levels_fall_back_to_flat(self, bad):
        assert utils.clamp_level(bad) == config.DEFAULT_LEVEL
        assert utils.level_to_gain(bad) == 0.0
        assert utils.clamp_filter_type(bad) == config.MIN_FILTER_TYPE

    def test_float_levels_are_truncated(self):
        assert utils.clamp_level(63.9) == 63
        assert utils.clamp_level(-0.5) == 0

    def test_db_conversions(self):
        assert utils.db_to_linear(20.0) == pytest.approx(10.0)
        assert utils.db_to_linear(0.0) == pytest.approx(1.0)
        assert utils.linear_to_db(10.0) == pytest.approx(20.0)
        # Floor at 1e-6 keeps silence finite
        assert utils.linear_to_db(0.0) == pytest.approx(-120.0)


class TestFilterDesign:
    """Shelf and peak coefficient design."""

    @pytest.mark.parametrize("designer, freq", [
        (design_low_shelf, config.BASS_FREQUENCY),
        (design_peak, config.MID_FREQUENCY),
        (design_high_shelf, config.TREBLE_FREQUENCY),
    ])
    def test_zero_gain_is_flat(self, designer, freq):
        """At 0 dB the numerator equals the denominator: unity everywhere."""
        c = designer(freq, 0.0, config.FILTER_Q, FS)
        np.testing.assert_allclose(c.b, c.a, atol=1e-12)

        freqs = utils.log_frequencies()
        np.testing.assert_allclose(biquad_response_db(c, freqs, FS), 0.0, atol=1e-9)

    def test_low_shelf_boosts_lows_only(self):
        gain = 6.0
        c = design_low_shelf(config.BASS_FREQUENCY, gain, config.FILTER_Q, FS)
        # DC gain is A**2 with A = 10**(gain/20)
        assert dc_gain(c) == pytest.approx(utils.db_to_linear(2 * gain))
        assert nyquist_gain(c) == pytest.approx(1.0)

    def test_high_shelf_boosts_highs_only(self):
        gain = -9.0
        c = design_high_shelf(config.TREBLE_FREQUENCY, gain, config.FILTER_Q, FS)
        assert dc_gain(c) == pytest.approx(1.0)
        assert nyquist_gain(c) == pytest.approx(utils.db_to_linear(2 * gain))

    def test_peak_gain_at_center(self):
        gain = 4.8
        c = design_peak(config.MID_FREQUENCY, gain, config.FILTER_Q, FS)
        response = biquad_response_db(c, [config.MID_FREQUENCY], FS)
        assert response[0] == pytest.approx(2 * gain, abs=1e-6)
        # Far from the center the bell is flat
        assert dc_gain(c) == pytest.approx(1.0)
        assert nyquist_gain(c) == pytest.approx(1.0)

    def test_peak_coefficients(self):
        """Spot check the normalized peak coefficients against the formulas."""
        gain = 12.0
        c = design_peak(1000.0, gain, 0.707, FS)
        w = 2 * np.pi * 1000.0 / FS
        A = 10 ** (gain / 20)
        alpha = np.sin(w) / (2 * 0.707)
        a0 = 1 + alpha / A
        assert c.b0 == pytest.approx((1 + alpha * A) / a0)
        assert c.b1 == pytest.approx(-2 * np.cos(w) / a0)
        assert c.b2 == pytest.approx((1 - alpha * A) / a0)
        assert c.a1 == pytest.approx(-2 * np.cos(w) / a0)
        assert c.a2 == pytest.approx((1 - alpha / A) / a0)

    @pytest.mark.parametrize("code, freq", [
        ("LSC", config.BASS_FREQUENCY),
        ("PK", config.MID_FREQUENCY),
        ("HSC", config.TREBLE_FREQUENCY),
    ])
    @pytest.mark.parametrize("gain", [config.MIN_GAIN_DB, config.MAX_GAIN_DB])
    @pytest.mark.parametrize("sample_rate", [8000, 11025, 16000, 22050, 44100, 96000])
    def test_designs_are_stable(self, code, freq, gain, sample_rate):
        """Poles stay inside the unit circle across the full gain range and common rates."""
        c = design_filter(code, freq, gain, config.FILTER_Q, sample_rate)
        poles = np.roots(c.a)
        assert np.all(np.abs(poles) < 1.0)

    def test_band_above_nyquist_is_designed_below_it(self):
        """The 8 kHz treble corner at 11025 Hz is moved below fs/2."""
        assert clamp_design_frequency(8000.0, 11025) == pytest.approx(0.45 * 11025)
        assert clamp_design_frequency(8000.0, 44100) == 8000.0
        assert design_filter("HSC", 8000.0, 4.8, 0.707, 11025) == \
            design_high_shelf(0.45 * 11025, 4.8, 0.707, 11025)

    def test_sample_rate_changes_coefficients(self):
        c44 = design_low_shelf(config.BASS_FREQUENCY, 6.0, config.FILTER_Q, 44100)
        c48 = design_low_shelf(config.BASS_FREQUENCY, 6.0, config.FILTER_Q, 48000)
        assert c44 != c48

    def test_design_filter_dispatch(self):
        assert design_filter("PK", 1000.0, 3.0, 0.707, FS) == design_peak(1000.0, 3.0, 0.707, FS)
        assert design_filter("lsc", 100.0, 3.0, 0.707, FS) == design_low_shelf(100.0, 3.0, 0.707, FS)
        assert isinstance(design_filter("HSC", 8000.0, 3.0, 0.707, FS), BiquadCoefficients)

    def test_design_filter_unknown_code(self):
        with pytest.raises(ValueError):
            design_filter("BP", 1000.0, 3.0, 0.707, FS)
