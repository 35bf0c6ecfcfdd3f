"""The signal data trailer word (ANSI/VITA-49.2-2017 section 5.1.6)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from vita49.errors import ParseError

_WORD = struct.Struct(">I")


class SampleFrameIndicator(IntEnum):
    """Position of a data packet within a sample frame."""

    NOT_APPLICABLE = 0x0
    FIRST_DATA_PACKET = 0x1
    MIDDLE_DATA_PACKET = 0x2
    FINAL_DATA_PACKET = 0x3


@dataclass(frozen=True)
class Trailer:
    """The 32-bit trailer that may close a signal data packet.

    Each indicator has an enable bit; an indicator whose enable bit is clear
    reads as ``None``.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF_FFFF:
            raise ValueError(f"trailer value {self.value:#x} does not fit in 32 bits")

    def _bit(self, n: int) -> bool:
        return bool(self.value & (1 << n))

    def _flag(self, enable_bit: int, indicator_bit: int) -> Optional[bool]:
        if self._bit(enable_bit):
            return self._bit(indicator_bit)
        return None

    def cal_time_indicator(self) -> Optional[bool]:
        """Calibration time indicator, if enabled."""
        return self._flag(31, 19)

    def valid_data_indicator(self) -> Optional[bool]:
        """Valid data indicator, if enabled."""
        return self._flag(30, 18)

    def reference_lock_indicator(self) -> Optional[bool]:
        """Reference lock indicator, if enabled."""
        return self._flag(29, 17)

    def agc_indicator(self) -> Optional[bool]:
        """Automatic gain control indicator, if enabled."""
        return self._flag(28, 16)

    def detected_signal_indicator(self) -> Optional[bool]:
        """Detected signal indicator, if enabled."""
        return self._flag(27, 15)

    def spectral_inversion_indicator(self) -> Optional[bool]:
        """Spectral inversion indicator, if enabled."""
        return self._flag(26, 14)

    def over_range_indicator(self) -> Optional[bool]:
        """Over range indicator, if enabled."""
        return self._flag(25, 13)

    def sample_loss_indicator(self) -> Optional[bool]:
        """Sample loss indicator, if enabled."""
        return self._flag(24, 12)

    def sample_frame_indicator(self) -> Optional[SampleFrameIndicator]:
        """Sample frame indicator, if both of its enable bits are set."""
        if self._bit(23) and self._bit(22):
            return SampleFrameIndicator((self.value >> 10) & 0b11)
        return None

    def user_defined_indicator(self) -> Optional[int]:
        """User-defined indicator bits, if both of their enable bits are set."""
        if self._bit(21) and self._bit(20):
            return (self.value >> 8) & 0b11
        return None

    def associated_context_packet_count(self) -> Optional[int]:
        """Associated context packet count, if enabled."""
        if self._bit(7):
            return self.value & 0x7F
        return None

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the trailer word."""
        return _WORD.pack(self.value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Trailer:
        """Decode a trailer from the first four bytes of ``data``."""
        if len(data) < _WORD.size:
            raise ParseError(f"need {_WORD.size} bytes for a trailer, got {len(data)}")
        (value,) = _WORD.unpack_from(data)
        return cls(value)