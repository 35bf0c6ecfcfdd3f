"""The VRT packet header word (ANSI/VITA-49.2-2017 section 5.1.1)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from vita49.errors import CommandOnlyError, ParseError

_HEADER = struct.Struct(">HH")


class PacketType(IntEnum):
    """The type of VRT packet, stored in the top four header bits."""

    SIGNAL_DATA_WITHOUT_STREAM_ID = 0x0
    SIGNAL_DATA = 0x1
    EXTENSION_DATA_WITHOUT_STREAM_ID = 0x2
    EXTENSION_DATA = 0x3
    CONTEXT = 0x4
    EXTENSION_CONTEXT = 0x5
    COMMAND = 0x6
    EXTENSION_COMMAND = 0x7

    @property
    def _is_signal_data(self) -> bool:
        return self in _SIGNAL_DATA_TYPES

    def has_signal_data_payload(self) -> bool:
        """True when the type is not one of the signal data types."""
        return not self._is_signal_data

    def has_context_payload(self) -> bool:
        """True when the type is not one of the context types."""
        return self not in (PacketType.CONTEXT, PacketType.EXTENSION_CONTEXT)

    def has_command_payload(self) -> bool:
        """True when the type is not one of the command types."""
        return self not in (PacketType.COMMAND, PacketType.EXTENSION_COMMAND)


_SIGNAL_DATA_TYPES = frozenset(
    {
        PacketType.SIGNAL_DATA,
        PacketType.EXTENSION_DATA,
        PacketType.SIGNAL_DATA_WITHOUT_STREAM_ID,
        PacketType.EXTENSION_DATA_WITHOUT_STREAM_ID,
    }
)


class TimestampMode(IntEnum):
    """Context timestamp mode."""

    PRECISE_TIMING = 0x0
    GENERAL_TIMING = 0x1

    @classmethod
    def from_bool(cls, value: bool) -> TimestampMode:
        return cls.GENERAL_TIMING if value else cls.PRECISE_TIMING


class Tsi(IntEnum):
    """TimeStamp-Integer field."""

    NULL = 0x0
    UTC = 0x1
    GPS = 0x2
    OTHER = 0x3


class Tsf(IntEnum):
    """TimeStamp-Fractional field."""

    NULL = 0x0
    SAMPLE_COUNT = 0x1
    REAL_TIME_PS = 0x2
    FREE_RUNNING_COUNT = 0x3


@dataclass(frozen=True)
class SignalDataIndicators:
    """Indicator bits of a signal data packet."""

    trailer_included: bool = False
    not_a_vita490_packet: bool = False
    signal_spectral_data: bool = False


@dataclass(frozen=True)
class ContextIndicators:
    """Indicator bits of a context packet."""

    not_a_vita490_packet: bool = False
    timestamp_mode: TimestampMode = TimestampMode.PRECISE_TIMING


@dataclass(frozen=True)
class CommandIndicators:
    """Indicator bits of a command packet."""

    ack_packet: bool = False
    cancellation_packet: bool = False


Indicators = Union[SignalDataIndicators, ContextIndicators, CommandIndicators]


@dataclass
class PacketHeader:
    """The first 32-bit word of every VRT packet.

    ``hword_1`` holds the upper 16 bits (type, flags, timestamp modes and
    packet count); ``packet_size`` holds the packet length in 32-bit words.
    """

    hword_1: int = 0
    packet_size: int = 0

    def as_u32(self) -> int:
        """The raw 32-bit header value."""
        return ((self.hword_1 & 0xFFFF) << 16) | (self.packet_size & 0xFFFF)

    def packet_type(self) -> PacketType:
        raw = (self.hword_1 >> 12) & 0b1111
        try:
            return PacketType(raw)
        except ValueError:
            raise ParseError(f"reserved packet type {raw:#x}") from None

    def set_packet_type(self, packet_type: PacketType) -> None:
        self.hword_1 &= ~(0b1111 << 12) & 0xFFFF
        self.hword_1 |= int(packet_type) << 12

    def class_id_included(self) -> bool:
        return bool(self.hword_1 & (1 << 11))

    def set_class_id_included(self, included: bool) -> None:
        if included:
            self.hword_1 |= 1 << 11
        else:
            self.hword_1 &= ~(1 << 11) & 0xFFFF

    def indicators(self) -> Indicators:
        """The indicator bits, interpreted for this packet's type."""
        i1 = bool(self.hword_1 & (1 << 10))
        i2 = bool(self.hword_1 & (1 << 9))
        i3 = bool(self.hword_1 & (1 << 8))
        packet_type = self.packet_type()
        if packet_type in _SIGNAL_DATA_TYPES:
            return SignalDataIndicators(
                trailer_included=i1,
                not_a_vita490_packet=i2,
                signal_spectral_data=i3,
            )
        if packet_type in (PacketType.CONTEXT, PacketType.EXTENSION_CONTEXT):
            return ContextIndicators(
                not_a_vita490_packet=i2,
                timestamp_mode=TimestampMode.from_bool(i3),
            )
        return CommandIndicators(ack_packet=i1, cancellation_packet=i3)

    def set_indicators(self, indicators: Indicators) -> None:
        """Set the indicator bits that are true in ``indicators``.

        Bits are only ever set, never cleared.
        """
        if isinstance(indicators, SignalDataIndicators):
            self.hword_1 |= int(indicators.trailer_included) << 10
            self.hword_1 |= int(indicators.not_a_vita490_packet) << 9
            self.hword_1 |= int(indicators.signal_spectral_data) << 8
        elif isinstance(indicators, ContextIndicators):
            self.hword_1 |= int(indicators.not_a_vita490_packet) << 9
            self.hword_1 |= int(indicators.timestamp_mode) << 8
        elif isinstance(indicators, CommandIndicators):
            self.hword_1 |= int(indicators.ack_packet) << 10
            self.hword_1 |= int(indicators.cancellation_packet) << 8
        else:
            raise TypeError(f"unsupported indicators: {indicators!r}")

    def is_ack_packet(self) -> bool:
        """Whether a command packet is an ACK; raises for other packet types."""
        indicators = self.indicators()
        if not isinstance(indicators, CommandIndicators):
            raise CommandOnlyError()
        return indicators.ack_packet

    def is_cancellation_packet(self) -> bool:
        """Whether a command packet is a cancellation; raises for other types."""
        indicators = self.indicators()
        if not isinstance(indicators, CommandIndicators):
            raise CommandOnlyError()
        return indicators.cancellation_packet

    def tsi(self) -> Tsi:
        return Tsi((self.hword_1 >> 6) & 0b11)

    def set_tsi(self, tsi: Tsi) -> None:
        self.hword_1 = (self.hword_1 & ~(0b11 << 6) & 0xFFFF) | (int(tsi) << 6)

    def tsf(self) -> Tsf:
        return Tsf((self.hword_1 >> 4) & 0b11)

    def set_tsf(self, tsf: Tsf) -> None:
        self.hword_1 = (self.hword_1 & ~(0b11 << 4) & 0xFFFF) | (int(tsf) << 4)

    def packet_count(self) -> int:
        """The modulo-16 packet counter."""
        return self.hword_1 & 0b1111

    def set_packet_count(self, count: int) -> None:
        self.hword_1 = (self.hword_1 & ~0b1111 & 0xFFFF) | (count & 0b1111)

    def inc_packet_count(self) -> None:
        """Increment the packet counter, wrapping at 16."""
        self.set_packet_count((self.packet_count() + 1) % 16)

    def stream_id_included(self) -> bool:
        return self.packet_type() not in (
            PacketType.SIGNAL_DATA_WITHOUT_STREAM_ID,
            PacketType.EXTENSION_DATA_WITHOUT_STREAM_ID,
        )

    def integer_timestamp_included(self) -> bool:
        return self.tsi() != Tsi.NULL

    def fractional_timestamp_included(self) -> bool:
        return self.tsf() != Tsf.NULL

    def trailer_included(self) -> bool:
        indicators = self.indicators()
        return isinstance(indicators, SignalDataIndicators) and indicators.trailer_included

    def payload_size_words(self) -> int:
        """The payload size in 32-bit words implied by the header."""
        words = self.packet_size - 1
        if self.stream_id_included():
            words -= 1
        if self.class_id_included():
            words -= 2
        if self.integer_timestamp_included():
            words -= 1
        if self.fractional_timestamp_included():
            words -= 2
        if self.trailer_included():
            words -= 1
        if words < 0:
            raise ParseError(
                f"packet size of {self.packet_size} words is too small for its header fields"
            )
        return words

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the header word."""
        return _HEADER.pack(self.hword_1 & 0xFFFF, self.packet_size & 0xFFFF)

    @classmethod
    def from_bytes(cls, data: bytes) -> PacketHeader:
        """Decode a header from the first four bytes of ``data``."""
        if len(data) < _HEADER.size:
            raise ParseError(
                f"need {_HEADER.size} bytes for a packet header, got {len(data)}"
            )
        hword_1, packet_size = _HEADER.unpack_from(data)
        header = cls(hword_1=hword_1, packet_size=packet_size)
        header.packet_type()
        return header

    @classmethod
    def _with(cls, packet_type: PacketType, indicators: Indicators) -> PacketHeader:
        header = cls()
        header.set_packet_type(packet_type)
        header.set_indicators(indicators)
        return header

    @classmethod
    def new_signal_data_header(cls) -> PacketHeader:
        return cls._with(PacketType.SIGNAL_DATA, SignalDataIndicators())

    @classmethod
    def new_context_header(cls) -> PacketHeader:
        return cls._with(
            PacketType.CONTEXT,
            ContextIndicators(timestamp_mode=TimestampMode.GENERAL_TIMING),
        )

    @classmethod
    def new_control_header(cls) -> PacketHeader:
        return cls._with(PacketType.COMMAND, CommandIndicators())

    @classmethod
    def new_cancellation_header(cls) -> PacketHeader:
        return cls._with(PacketType.COMMAND, CommandIndicators(cancellation_packet=True))

    @classmethod
    def new_ack_header(cls) -> PacketHeader:
        return cls._with(PacketType.COMMAND, CommandIndicators(ack_packet=True))