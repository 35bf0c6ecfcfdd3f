"""Signal data payloads: raw sample bytes stored as 32-bit words."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List

from vita49.errors import PayloadUneven32BitWordsError


@dataclass
class SignalData:
    """A signal data payload, held as big-endian 32-bit words."""

    words: List[int] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> SignalData:
        """Build a payload from raw bytes whose length is a multiple of four."""
        signal_data = cls()
        signal_data.set_payload(data)
        return signal_data

    def payload(self) -> bytes:
        """The payload as raw bytes."""
        return struct.pack(f">{len(self.words)}I", *self.words)

    def set_payload(self, data: bytes) -> None:
        """Replace the payload with ``data``; its length must divide by four."""
        if len(data) % 4:
            raise PayloadUneven32BitWordsError()
        self.words = list(struct.unpack(f">{len(data) // 4}I", bytes(data)))

    def size_words(self) -> int:
        """Payload size in 32-bit words."""
        return len(self.words)

    def payload_size_bytes(self) -> int:
        """Payload size in bytes."""
        return len(self.words) * 4

    def to_bytes(self) -> bytes:
        """Wire encoding of the payload."""
        return self.payload()