# src/tone_equalizer/analysis/response.py

"""
Magnitude response of biquads and of the equalizer cascade.
"""

import numpy as np
import matplotlib.pyplot as plt
from scipy import signal

from .. import config
from .. import utils


def biquad_response_db(coefficients, freqs, sample_rate):
    """
    Evaluate one biquad's magnitude response (in dB) at the given frequencies.
    """
    freqs = np.asarray(freqs, dtype=np.float64)
    _, h = signal.freqz(coefficients.b, coefficients.a, worN=freqs, fs=sample_rate)
    return utils.linear_to_db(np.abs(h))


def cascade_response_db(coefficient_list, freqs, sample_rate):
    """
    Sum the contributions of all cascaded biquads to obtain the total response (in dB).
    """
    freqs = np.asarray(freqs, dtype=np.float64)
    total = np.zeros_like(freqs)
    for coefficients in coefficient_list:
        total += biquad_response_db(coefficients, freqs, sample_rate)
    return total


def plot_response(freqs, response_db, filename='eq_response.png', title='Tone Equalizer Response', show=False):
    """
    Plot a response curve on a log-frequency axis and save it as a PNG.
    """
    freqs = np.asarray(freqs)
    response_db = np.asarray(response_db)
    if len(freqs) < 2:
        print("Not enough data points to create a meaningful plot.")
        return None

    fig = plt.figure(figsize=(12, 6))
    plt.semilogx(freqs, response_db, label='Cascade Response')
    plt.title(title)
    plt.xlabel('Frequency (Hz)')
    plt.ylabel('Gain (dB)')
    plt.grid(True, which="both", ls="-", alpha=0.4)
    plt.xlim(freqs[0], freqs[-1])
    y_min = min(float(np.min(response_db)), config.MIN_GAIN_DB) - 3
    y_max = max(float(np.max(response_db)), config.MAX_GAIN_DB) + 3
    plt.ylim(y_min, y_max)

    # Mark the band frequencies
    for name, _code, f in config.BAND_FILTERS:
        if freqs[0] <= f <= freqs[-1]:
            plt.axvline(x=f, color='r', linestyle='--', alpha=0.3)
            plt.text(f, y_min + 1, name, ha='center', fontsize=8)

    plt.axhline(y=0, color='k', linestyle='-', linewidth=0.8)
    plt.legend()
    plt.tight_layout()
    plt.savefig(filename, dpi=150)
    print(f"Response plot saved to '{filename}'")
    if show:
        plt.show()
    plt.close(fig)
    return filename
