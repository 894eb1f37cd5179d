import struct
from typing import Union

SAMPLE_RATE = 24000
CHANNELS = 1
BITS_PER_SAMPLE = 16
HEADER_SIZE = 44


def encode_wav(
    pcm: Union[bytes, bytearray, memoryview],
    sample_rate: int = SAMPLE_RATE,
    channels: int = CHANNELS,
    bits_per_sample: int = BITS_PER_SAMPLE,
) -> bytes:
    """
    Wrap raw little-endian PCM samples in a minimal RIFF/WAVE container.

    The speech model emits 16-bit mono at 24 kHz, so the defaults describe
    exactly that stream. Any length is accepted, including zero, which yields
    a header-only file.
    """
    data = bytes(pcm)
    data_size = len(data)
    block_align = channels * (bits_per_sample // 8)
    byte_rate = sample_rate * block_align

    header = b"".join(
        [
            b"RIFF",
            struct.pack("<I", 36 + data_size),
            b"WAVE",
            b"fmt ",
            struct.pack(
                "<IHHIIHH",
                16,
                1,
                channels,
                sample_rate,
                byte_rate,
                block_align,
                bits_per_sample,
            ),
            b"data",
            struct.pack("<I", data_size),
        ]
    )
    return header + data
