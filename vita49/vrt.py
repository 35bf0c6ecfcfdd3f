"""Whole VRT packets: building, inspecting, encoding and decoding them."""

from __future__ import annotations

import struct
from typing import Optional

from vita49.errors import (
    OutOfRangeError,
    ParseError,
    SignalDataOnlyError,
    TimestampModeMismatchError,
    VitaError,
)
from vita49.packet_header import PacketHeader, PacketType, Tsf, Tsi
from vita49.payload import Payload
from vita49.signal_data import SignalData
from vita49.trailer import Trailer

_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_TRAILER_BIT = 1 << 10

_WITH_STREAM_ID = {
    PacketType.SIGNAL_DATA_WITHOUT_STREAM_ID: PacketType.SIGNAL_DATA,
    PacketType.EXTENSION_DATA_WITHOUT_STREAM_ID: PacketType.EXTENSION_DATA,
}
_WITHOUT_STREAM_ID = {value: key for key, value in _WITH_STREAM_ID.items()}
_SIGNAL_DATA_TYPES = frozenset(_WITH_STREAM_ID) | frozenset(_WITHOUT_STREAM_ID)


def _check_unsigned(value: Optional[int], bits: int, what: str) -> Optional[int]:
    if value is not None and not 0 <= value < (1 << bits):
        raise OutOfRangeError(f"{what} {value} does not fit in {bits} bits")
    return value


class _Reader:
    """Sequential big-endian reader over a byte buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = memoryview(data)
        self.offset = 0

    def unpack(self, layout: struct.Struct, what: str) -> int:
        if len(self.data) - self.offset < layout.size:
            raise ParseError(f"packet is truncated before the {what}")
        (value,) = layout.unpack_from(self.data, self.offset)
        self.offset += layout.size
        return value

    def rest(self) -> bytes:
        return bytes(self.data[self.offset:])

    def skip(self, n_bytes: int) -> None:
        self.offset += n_bytes


class Vrt:
    """A VRT packet: header, optional prologue fields, payload and trailer."""

    def __init__(
        self,
        header: PacketHeader,
        payload: Payload,
        stream_id: Optional[int] = None,
        class_id: Optional[int] = None,
        integer_timestamp: Optional[int] = None,
        fractional_timestamp: Optional[int] = None,
        trailer: Optional[Trailer] = None,
    ) -> None:
        self._header = header
        self._payload = payload
        self._stream_id = _check_unsigned(stream_id, 32, "stream ID")
        self._class_id = _check_unsigned(class_id, 64, "class ID")
        self._integer_timestamp = _check_unsigned(integer_timestamp, 32, "integer timestamp")
        self._fractional_timestamp = _check_unsigned(
            fractional_timestamp, 64, "fractional timestamp"
        )
        self._trailer = trailer

    def _fields(self) -> tuple:
        return (
            self._header,
            self._stream_id,
            self._class_id,
            self._integer_timestamp,
            self._fractional_timestamp,
            self._payload,
            self._trailer,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vrt):
            return NotImplemented
        return self._fields() == other._fields()

    def __repr__(self) -> str:
        return (
            f"Vrt(header={self._header!r}, stream_id={self._stream_id!r}, "
            f"class_id={self._class_id!r}, integer_timestamp={self._integer_timestamp!r}, "
            f"fractional_timestamp={self._fractional_timestamp!r}, "
            f"payload={self._payload!r}, trailer={self._trailer!r})"
        )

    @classmethod
    def new_signal_data_packet(cls) -> Vrt:
        """A signal data packet with stream ID 0 and an empty payload."""
        packet = cls(
            header=PacketHeader.new_signal_data_header(),
            payload=Payload(SignalData()),
            stream_id=0,
        )
        packet.update_packet_size()
        return packet

    def header(self) -> PacketHeader:
        return self._header

    def payload(self) -> Payload:
        return self._payload

    def stream_id(self) -> Optional[int]:
        return self._stream_id

    def set_stream_id(self, stream_id: Optional[int]) -> None:
        """Set or clear the stream ID, switching the data packet type to match."""
        self._stream_id = _check_unsigned(stream_id, 32, "stream ID")
        packet_type = self._header.packet_type()
        switch = _WITH_STREAM_ID if stream_id is not None else _WITHOUT_STREAM_ID
        if packet_type in switch:
            self._header.set_packet_type(switch[packet_type])

    def class_id(self) -> Optional[int]:
        """The 64-bit class identifier, if present."""
        return self._class_id

    def set_class_id(self, class_id: Optional[int]) -> None:
        """Set or clear the 64-bit class identifier and its header flag."""
        self._class_id = _check_unsigned(class_id, 64, "class ID")
        self._header.set_class_id_included(class_id is not None)

    def integer_timestamp(self) -> Optional[int]:
        return self._integer_timestamp

    def set_integer_timestamp(self, timestamp: Optional[int], tsi: Tsi) -> None:
        """Set the integer timestamp and its mode; they must agree on presence."""
        if (timestamp is None) != (tsi == Tsi.NULL):
            raise TimestampModeMismatchError()
        self._integer_timestamp = _check_unsigned(timestamp, 32, "integer timestamp")
        self._header.set_tsi(tsi)

    def fractional_timestamp(self) -> Optional[int]:
        return self._fractional_timestamp

    def set_fractional_timestamp(self, timestamp: Optional[int], tsf: Tsf) -> None:
        """Set the fractional timestamp and its mode; they must agree on presence."""
        if (timestamp is None) != (tsf == Tsf.NULL):
            raise TimestampModeMismatchError()
        self._fractional_timestamp = _check_unsigned(timestamp, 64, "fractional timestamp")
        self._header.set_tsf(tsf)

    def trailer(self) -> Optional[Trailer]:
        return self._trailer

    def set_trailer(self, trailer: Optional[Trailer]) -> None:
        """Set or clear the trailer of a signal data packet."""
        if self._header.packet_type() not in _SIGNAL_DATA_TYPES:
            raise SignalDataOnlyError()
        self._trailer = trailer
        if trailer is None:
            self._header.hword_1 &= ~_TRAILER_BIT & 0xFFFF
        else:
            self._header.hword_1 |= _TRAILER_BIT

    def signal_payload(self) -> bytes:
        """The signal data payload as raw bytes."""
        return self._payload.signal_data().payload()

    def set_signal_payload(self, data: bytes) -> None:
        """Replace the signal data payload and update the packet size."""
        self._payload.signal_data().set_payload(data)
        self.update_packet_size()

    def update_packet_size(self) -> None:
        """Recompute the header's packet size from the current contents."""
        header = self._header
        words = 1
        if header.stream_id_included():
            words += 1
        if header.class_id_included():
            words += 2
        if header.integer_timestamp_included():
            words += 1
        if header.fractional_timestamp_included():
            words += 2
        if header.trailer_included():
            words += 1
        words += self._payload.size_words()
        if words > 0xFFFF:
            raise OutOfRangeError(f"packet of {words} words is too large")
        header.packet_size = words

    def to_bytes(self) -> bytes:
        """Big-endian wire encoding of the packet."""
        header = self._header
        parts = [header.to_bytes()]

        def add(included: bool, value: Optional[int], layout: struct.Struct, what: str) -> None:
            if not included:
                return
            if value is None:
                raise VitaError(f"header announces a {what} but none is set")
            parts.append(layout.pack(value))

        add(header.stream_id_included(), self._stream_id, _U32, "stream ID")
        add(header.class_id_included(), self._class_id, _U64, "class ID")
        add(
            header.integer_timestamp_included(),
            self._integer_timestamp,
            _U32,
            "integer timestamp",
        )
        add(
            header.fractional_timestamp_included(),
            self._fractional_timestamp,
            _U64,
            "fractional timestamp",
        )
        parts.append(self._payload.to_bytes())
        if header.trailer_included():
            if self._trailer is None:
                raise VitaError("header announces a trailer but none is set")
            parts.append(self._trailer.to_bytes())
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> Vrt:
        """Decode a packet from the start of ``data``."""
        header = PacketHeader.from_bytes(data)
        reader = _Reader(bytes(data))
        reader.skip(4)
        stream_id = (
            reader.unpack(_U32, "stream ID") if header.stream_id_included() else None
        )
        class_id = reader.unpack(_U64, "class ID") if header.class_id_included() else None
        integer_timestamp = (
            reader.unpack(_U32, "integer timestamp")
            if header.integer_timestamp_included()
            else None
        )
        fractional_timestamp = (
            reader.unpack(_U64, "fractional timestamp")
            if header.fractional_timestamp_included()
            else None
        )
        payload = Payload.from_bytes(reader.rest(), header)
        reader.skip(payload.size_words() * 4)
        trailer = None
        if header.trailer_included():
            trailer = Trailer.from_bytes(reader.rest())
        return cls(
            header=header,
            payload=payload,
            stream_id=stream_id,
            class_id=class_id,
            integer_timestamp=integer_timestamp,
            fractional_timestamp=fractional_timestamp,
            trailer=trailer,
        )