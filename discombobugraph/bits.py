"""Helpers for turning raw byte buffers into bit sequences."""

from __future__ import annotations

import numbers
from typing import Iterable, Union

import numpy as np

from .errors import InvalidInputError

BufferLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def as_buffer(data: BufferLike) -> bytes:
    """Return ``data`` as an immutable :class:`bytes` object."""

    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        raise InvalidInputError("Text input must be encoded to bytes before analysis.")
    if isinstance(data, numbers.Integral):
        raise InvalidInputError(f"Expected a byte sequence, got the integer {data!r}.")
    try:
        return bytes(data)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Input is not a valid byte sequence: {exc}") from exc


def expand_bits(data: BufferLike) -> np.ndarray:
    """Expand ``data`` into a read-only array of bits, most significant bit first.

    Bit ``8 * i + k`` of the result is bit ``k`` of byte ``i`` counting from the
    most significant bit, so ``0b10110010`` expands to ``[1, 0, 1, 1, 0, 0, 1, 0]``.
    """

    raw = np.frombuffer(as_buffer(data), dtype=np.uint8)
    bits = np.unpackbits(raw, bitorder="big")
    bits.flags.writeable = False
    return bits


__all__ = ["BufferLike", "as_buffer", "expand_bits"]
