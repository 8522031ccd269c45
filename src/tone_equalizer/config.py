# src/tone_equalizer/config.py

"""
Central configuration settings for the Tone Equalizer.
"""

# =============================================================================
# BAND SETTINGS
# =============================================================================
BASS_FREQUENCY = 100.0  # Hz, low-shelf corner
MID_FREQUENCY = 1000.0  # Hz, peak center
TREBLE_FREQUENCY = 8000.0  # Hz, high-shelf corner
FILTER_Q = 0.707  # Butterworth Q
SHELF_SLOPE = 1.0  # S = 1 gives the standard shelf slope
MAX_DESIGN_FREQUENCY_RATIO = 0.45  # band frequencies are designed at no more than 0.45 * fs

# Filter codes per band, in cascade order (Equalizer APO naming)
BAND_FILTERS = (
    ("bass", "LSC", BASS_FREQUENCY),
    ("mid", "PK", MID_FREQUENCY),
    ("treble", "HSC", TREBLE_FREQUENCY),
)

# =============================================================================
# LEVEL / GAIN SETTINGS
# =============================================================================
MIN_LEVEL = 0
MAX_LEVEL = 100
DEFAULT_LEVEL = 50  # flat, 0 dB
MAX_GAIN_DB = 12.0  # dB at level 100
MIN_GAIN_DB = -12.0  # dB at level 0

# Filter type selector range (0=LowShelf, 1=Peak, 2=HighShelf)
MIN_FILTER_TYPE = 0
MAX_FILTER_TYPE = 2

# =============================================================================
# PROCESSING SETTINGS
# =============================================================================
DEFAULT_SAMPLE_RATE = 44100  # Hz
OUTPUT_CLAMP = 1.0  # output samples are hard clamped to [-OUTPUT_CLAMP, OUTPUT_CLAMP]
DEFAULT_BLOCK_SIZE = 1024  # samples per block when streaming a file

# =============================================================================
# ANALYSIS / PLOT SETTINGS
# =============================================================================
RESPONSE_START_FREQ = 20  # Hz
RESPONSE_END_FREQ = 20000  # Hz
RESPONSE_POINTS = 512

# =============================================================================
# DEBUG
# =============================================================================
DEBUG = False  # switch to True to log every parameter change
