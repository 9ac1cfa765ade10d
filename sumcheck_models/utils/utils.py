# (C) 2024 Irreducible Inc.

from typing import Literal

U64_BYTES = 8


def is_power_of_two(x: int) -> bool:
    return x > 0 and x & (x - 1) == 0


def log2_exact(x: int) -> int:
    """Returns log₂(x) for a power of two x; raises ValueError for anything else."""
    if not is_power_of_two(x):
        raise ValueError(f"{x} is not a power of two")
    return x.bit_length() - 1


def int_to_bits(x: int, n_bits: int, byteorder: Literal["little", "big"] = "little") -> list[int]:
    """Returns the lowest n_bits bits of x.

    With byteorder="big" the most-significant bit comes first, which is the order in which hypercube points index
    evaluation tables (bit 0 of the point is variable 0).
    """
    bits = [(x >> i) & 1 for i in range(n_bits)]
    return bits[::-1] if byteorder == "big" else bits


def bits_to_int(bits: list[int]) -> int:
    # inverse of int_to_bits(..., byteorder="big").
    result = 0
    for bit in bits:
        result = result << 1 | bit
    return result


def encode_u64(x: int) -> bytes:
    return x.to_bytes(U64_BYTES, byteorder="big")


def decode_u64(data: bytes, offset: int) -> tuple[int, int]:
    """Reads a big-endian u64 at `offset`; returns it along with the offset just past it."""
    end = offset + U64_BYTES
    if end > len(data):
        raise ValueError("unexpected end of data while reading a length prefix")
    return int.from_bytes(data[offset:end], byteorder="big"), end
