from .wav_file import read_wav, write_wav, iter_blocks, process_wav

__all__ = ["read_wav", "write_wav", "iter_blocks", "process_wav"]
