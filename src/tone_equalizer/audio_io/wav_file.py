# src/tone_equalizer/audio_io/wav_file.py

"""
WAV file helpers for running the equalizer over recorded audio.

Files are fed to the engine block by block, the way a real-time host would
deliver buffers, so filter history is carried across block boundaries.
"""

import numpy as np
from scipy.io import wavfile

from .. import config

# Full-scale values for integer PCM formats
_PCM_SCALE = {
    np.dtype(np.int16): 32768.0,
    np.dtype(np.int32): 2147483648.0,
}


def to_float(audio_data):
    """Convert PCM samples to float64 in [-1, 1]."""
    audio_data = np.asarray(audio_data)
    if np.issubdtype(audio_data.dtype, np.floating):
        return audio_data.astype(np.float64)
    if audio_data.dtype == np.uint8:
        return (audio_data.astype(np.float64) - 128.0) / 128.0
    try:
        scale = _PCM_SCALE[audio_data.dtype]
    except KeyError:
        raise ValueError(f"Unsupported sample format: {audio_data.dtype}")
    return audio_data.astype(np.float64) / scale


def read_wav(path):
    """
    Read a WAV file.

    Returns (sample_rate, samples) with samples as float64 in [-1, 1],
    shaped (N,) for mono or (N, C) for multichannel files.
    """
    try:
        sample_rate, audio_data = wavfile.read(path)
    except Exception as e:
        print(f"Error reading WAV file {path}: {e}")
        raise
    return int(sample_rate), to_float(audio_data)


def write_wav(path, sample_rate, samples):
    """Write float samples to a 32-bit float WAV file."""
    try:
        wavfile.write(path, int(sample_rate), np.asarray(samples, dtype=np.float32))
    except Exception as e:
        print(f"Failed to write WAV file {path}: {e}")
        raise
    print(f"Processed audio written to {path}")


def iter_blocks(samples, block_size=config.DEFAULT_BLOCK_SIZE):
    """Yield successive blocks (views) of at most `block_size` frames."""
    if block_size <= 0:
        raise ValueError("block_size must be positive.")
    for start in range(0, len(samples), block_size):
        yield samples[start:start + block_size]


def process_wav(equalizer, samples, sample_rate, block_size=config.DEFAULT_BLOCK_SIZE):
    """
    Run mono (N,) / (N, 1) or stereo (N, 2) samples through `equalizer` in blocks.

    Returns a new float64 array with the same shape as `samples`.
    """
    output = np.array(samples, dtype=np.float64)
    mono = output if output.ndim == 1 else None
    if output.ndim == 2 and output.shape[1] == 1:
        mono = output[:, 0]

    if mono is not None:
        for block in iter_blocks(mono, block_size):
            equalizer.process_buffer(block, block, len(block), sample_rate)
        return output

    if output.ndim == 2 and output.shape[1] == 2:
        # Column views are processed in place
        for block in iter_blocks(output, block_size):
            equalizer.process_stereo(block[:, 0], block[:, 1], sample_rate)
        return output

    raise ValueError(f"Unsupported channel layout: {output.shape}")
