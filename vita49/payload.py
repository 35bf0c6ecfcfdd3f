"""The packet payload, whose format depends on the packet type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from vita49.errors import ParseError, SignalDataOnlyError
from vita49.packet_header import PacketHeader, PacketType
from vita49.signal_data import SignalData

_CONTEXT_TYPES = (PacketType.CONTEXT, PacketType.EXTENSION_CONTEXT)
_COMMAND_TYPES = (PacketType.COMMAND, PacketType.EXTENSION_COMMAND)


class _PayloadBody(Protocol):
    def size_words(self) -> int: ...

    def to_bytes(self) -> bytes: ...


@dataclass
class Payload:
    """A packet payload wrapping the body that matches the packet type."""

    content: _PayloadBody

    def signal_data(self) -> SignalData:
        """The signal data body; raises if the payload holds something else."""
        if not isinstance(self.content, SignalData):
            raise SignalDataOnlyError()
        return self.content

    def size_words(self) -> int:
        """Payload size in 32-bit words."""
        return self.content.size_words()

    def to_bytes(self) -> bytes:
        """Wire encoding of the payload body."""
        return self.content.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes, header: PacketHeader) -> Payload:
        """Decode the payload that starts at ``data``, sized by ``header``."""
        packet_type = header.packet_type()
        if packet_type in _CONTEXT_TYPES or packet_type in _COMMAND_TYPES:
            raise ParseError(f"decoding {packet_type.name.lower()} payloads is not supported")
        n_bytes = header.payload_size_words() * 4
        if len(data) < n_bytes:
            raise ParseError(f"need {n_bytes} bytes of payload, got {len(data)}")
        return cls(SignalData.from_bytes(bytes(data[:n_bytes])))