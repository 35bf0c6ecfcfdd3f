# vita49

A pure-Python library for working with ANSI/VITA-49.2-2017 (VRT) packets as
used by software-defined radios. It has no dependencies outside the standard
library.

It covers:

- the packet header word (`vita49.packet_header`): packet type, indicator
  bits, TSI/TSF timestamp modes, the modulo-16 packet counter and the
  packet size;
- whole signal data packets (`vita49.vrt.Vrt`): stream ID, 64-bit class ID,
  integer and fractional timestamps, payload and trailer, encoded to and
  decoded from big-endian bytes;
- the trailer word (`vita49.trailer.Trailer`) and its indicators;
- the spectrum context field (`vita49.spectrum.Spectrum`, with its enums and
  the window time-delta word in `vita49.spectrum_types`);
- the threshold context field (`vita49.threshold.Threshold`).

## Installation

```
pip install vita49
```

## Building a signal data packet

```python
from vita49.vrt import Vrt
from vita49.packet_header import Tsi, Tsf

packet = Vrt.new_signal_data_packet()
packet.set_stream_id(0xDEADBEEF)
packet.set_signal_payload(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
packet.set_integer_timestamp(12345, Tsi.UTC)
packet.set_fractional_timestamp(67890, Tsf.REAL_TIME_PS)
packet.update_packet_size()

wire = packet.to_bytes()
```

`set_signal_payload()` updates the packet size itself; after other changes
(timestamps, class ID, trailer) call `update_packet_size()` so the size field
in the header matches the contents before you encode the packet.

Clearing the stream ID with `set_stream_id(None)` switches the packet type to
its "without stream ID" form, and setting one switches it back.
`set_class_id()` takes a 64-bit integer (or `None`) and sets the header's
class ID flag to match. `set_trailer()` takes a `Trailer` (or `None`) and sets
the header's trailer indicator:

```python
from vita49.trailer import Trailer

packet.set_trailer(Trailer(0x8008_0000))
packet.update_packet_size()
packet.trailer().cal_time_indicator()   # True
packet.trailer().agc_indicator()        # None: not enabled
```

## Parsing a packet

```python
from vita49.vrt import Vrt

packet = Vrt.from_bytes(wire)
print(packet.header().packet_type())
print(packet.stream_id())
print(packet.signal_payload())
```

## The packet header

`PacketHeader` can also be used on its own. Ready-made headers come from
`new_signal_data_header()`, `new_context_header()`, `new_control_header()`,
`new_cancellation_header()` and `new_ack_header()`. `indicators()` returns a
`SignalDataIndicators`, `ContextIndicators` or `CommandIndicators` depending on
the packet type; `is_ack_packet()` and `is_cancellation_packet()` raise
`CommandOnlyError` for non-command headers.

## Spectrum and threshold fields

```python
from vita49.spectrum import Spectrum
from vita49.spectrum_types import WindowType, WindowTimeDeltaInterpretation
from vita49.threshold import Threshold

spectrum = Spectrum()
spectrum.set_resolution_hz(6.25e3)
spectrum.set_span_hz(8e6)
spectrum.set_window_type(WindowType.HAMMING)
spectrum.set_window_time_delta_interpretation(WindowTimeDeltaInterpretation.SAMPLES)
print(spectrum)

threshold = Threshold.from_db(25.2, 0.23)
print(threshold)
```

Both fields have `to_bytes()` / `from_bytes()` and `size_words()`.

## Errors

All errors derive from `vita49.errors.VitaError`. Among them:

- `PayloadUneven32BitWordsError` — a payload whose length is not a multiple
  of four bytes;
- `TimestampModeMismatchError` — a timestamp given with a mismatched TSI/TSF
  mode (a value with `NULL`, or `None` with a non-`NULL` mode);
- `ReservedFieldError` / `OutOfRangeError` — reserved or out-of-range values
  for a field;
- `SignalDataOnlyError`, `CommandOnlyError` — an operation used on the wrong
  kind of packet;
- `ParseError` — bytes that cannot be decoded.

## What this package does not do

- Only signal data packets can be built as whole packets and decoded.
  There are no context or command payloads: `Vrt.from_bytes()` raises
  `ParseError` for context and command packets, and there is no way to
  create them as `Vrt` objects.
- `Spectrum` and `Threshold` are standalone field encoders; they are not
  attached to any packet.
- The class ID is handled as a raw 64-bit integer, not split into its parts.
- There is no command-line tool and no network I/O; the package only turns
  packets into bytes and back.

## Running the tests

```
pip install -e ".[test]"
pytest
```