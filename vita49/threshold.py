"""The threshold context field (ANSI/VITA-49.2-2017 section 9.5.13)."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from vita49.errors import OutOfRangeError, ParseError

_WORD = struct.Struct(">i")
_FRAC_BITS = 7
_I16_MIN = -(1 << 15)
_I16_MAX = (1 << 15) - 1


def _to_fixed(value: float) -> int:
    """Encode ``value`` as a signed 16-bit fixed-point number with 7 fraction bits."""
    bits = round(float(value) * (1 << _FRAC_BITS))
    if not _I16_MIN <= bits <= _I16_MAX:
        raise OutOfRangeError(f"threshold {value} dB does not fit the field")
    return bits & 0xFFFF


def _from_fixed(bits: int) -> float:
    bits &= 0xFFFF
    if bits & 0x8000:
        bits -= 1 << 16
    return bits / (1 << _FRAC_BITS)


def _to_i32(value: int) -> int:
    value &= 0xFFFF_FFFF
    return value - (1 << 32) if value & 0x8000_0000 else value


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass
class Threshold:
    """Two threshold stages packed into one signed 32-bit word.

    Stage 1 lives in the lower 16 bits and stage 2 in the upper 16 bits.
    """

    value: int = 0

    @classmethod
    def from_db(cls, stage_1_threshold_db: float, stage_2_threshold_db: float) -> Threshold:
        """Build a threshold from both stages given in dB."""
        s1 = _to_fixed(stage_1_threshold_db)
        s2 = _to_fixed(stage_2_threshold_db)
        return cls(_to_i32((s2 << 16) | s1))

    def size_words(self) -> int:
        """Size of the field in 32-bit words."""
        return 1

    def stage_1_threshold_db(self) -> float:
        return _from_fixed(self.value)

    def set_stage_1_threshold_db(self, stage_1_threshold_db: float) -> None:
        s1 = _to_fixed(stage_1_threshold_db)
        self.value = _to_i32((self.value & 0xFFFF_0000) | s1)

    def stage_2_threshold_db(self) -> float:
        return _from_fixed(self.value >> 16)

    def set_stage_2_threshold_db(self, stage_2_threshold_db: float) -> None:
        s2 = _to_fixed(stage_2_threshold_db)
        self.value = _to_i32((self.value & 0x0000_FFFF) | (s2 << 16))

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the threshold word."""
        return _WORD.pack(_to_i32(self.value))

    @classmethod
    def from_bytes(cls, data: bytes) -> Threshold:
        """Decode a threshold from the first four bytes of ``data``."""
        if len(data) < _WORD.size:
            raise ParseError(f"need {_WORD.size} bytes for a threshold, got {len(data)}")
        (value,) = _WORD.unpack_from(data)
        return cls(value)

    def __str__(self) -> str:
        return (
            f"Stage 1: {_format_number(self.stage_1_threshold_db())} dB, "
            f"Stage 2: {_format_number(self.stage_2_threshold_db())} dB"
        )