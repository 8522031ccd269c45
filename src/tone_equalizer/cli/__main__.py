# src/tone_equalizer/cli/__main__.py

"""
Command line entry point: equalize a WAV file with bass/mid/treble controls.
"""

import argparse
import logging
import sys

from tone_equalizer import config
from tone_equalizer.core.equalizer import ToneEqualizer
from tone_equalizer.audio_io.wav_file import read_wav, write_wav, process_wav
from tone_equalizer.analysis.response import plot_response


def build_parser():
    p = argparse.ArgumentParser(prog="tone-eq", description="Three-band tone equalizer for WAV files")
    p.add_argument("input", help="Input WAV path")
    p.add_argument("output", help="Output WAV path (32-bit float)")
    p.add_argument("--bass", type=int, default=config.DEFAULT_LEVEL, help="Bass level 0-100 (50 = flat)")
    p.add_argument("--mid", type=int, default=config.DEFAULT_LEVEL, help="Mid level 0-100 (50 = flat)")
    p.add_argument("--treble", type=int, default=config.DEFAULT_LEVEL, help="Treble level 0-100 (50 = flat)")
    p.add_argument("--block-size", dest="block_size", type=int, default=config.DEFAULT_BLOCK_SIZE,
                   help="Samples per processing block")
    p.add_argument("--disable", action="store_true", help="Bypass the equalizer (copy input to output)")
    p.add_argument("--plot", help="Save the equalizer response curve to this PNG path")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p


def configure_logging(verbose=0):
    level = logging.DEBUG if (config.DEBUG or verbose > 1) else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def main(argv=None):
    """Run the equalizer over a WAV file. Returns a process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.block_size <= 0:
        print("Block size must be positive.", file=sys.stderr)
        return 2

    print("Launching Tone Equalizer...")
    try:
        sample_rate, samples = read_wav(args.input)
    except (OSError, ValueError):
        return 1

    eq = ToneEqualizer(sample_rate=sample_rate)
    # Enable first: level changes only design filters while enabled
    eq.set_enabled(not args.disable)
    eq.set_bass_level(args.bass)
    eq.set_mid_level(args.mid)
    eq.set_treble_level(args.treble)
    print(f"Bass {eq.get_bass_level()} ({eq.get_gain_db('bass'):+.1f} dB), "
          f"Mid {eq.get_mid_level()} ({eq.get_gain_db('mid'):+.1f} dB), "
          f"Treble {eq.get_treble_level()} ({eq.get_gain_db('treble'):+.1f} dB)")

    try:
        processed = process_wav(eq, samples, sample_rate, block_size=args.block_size)
    except ValueError as e:
        print(f"Cannot process {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        write_wav(args.output, sample_rate, processed)
    except (OSError, ValueError):
        return 1

    if args.plot:
        freqs, response_db = eq.frequency_response()
        plot_response(freqs, response_db, filename=args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
