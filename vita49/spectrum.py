"""The spectrum context field (ANSI/VITA-49.2-2017 section 9.6.1)."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from decimal import Decimal

from vita49.errors import OutOfRangeError, ParseError, ReservedFieldError
from vita49.spectrum_types import (
    AveragingType,
    SpectrumType,
    WindowTimeDelta,
    WindowTimeDeltaInterpretation,
    WindowType,
)

_LAYOUT = struct.Struct(">IIIIqqIiiiI")
_RADIX_FRAC_BITS = 20
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1
_FIRST_USER_SPECTRUM_TYPE = 128


def _to_fixed64(value: float) -> int:
    """Encode ``value`` as signed 64-bit fixed point with 20 fraction bits."""
    value = float(value)
    if not math.isfinite(value):
        raise OutOfRangeError(f"{value} is not finite")
    bits = round(value * (1 << _RADIX_FRAC_BITS))
    if not _I64_MIN <= bits <= _I64_MAX:
        raise OutOfRangeError(f"{value} does not fit the field")
    return bits


def _from_fixed64(bits: int) -> float:
    return bits / (1 << _RADIX_FRAC_BITS)


def _f32(value: float) -> float:
    return struct.unpack(">f", struct.pack(">f", value))[0]


def _plain(text: str) -> str:
    return format(Decimal(text), "f") if "e" in text.lower() else text


def _format_f64(value: float) -> str:
    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("inf" if value > 0 else "-inf")
    if value.is_integer():
        return str(int(value))
    return _plain(repr(value))


def _format_f32(value: float) -> str:
    if not math.isfinite(value):
        return "NaN" if math.isnan(value) else ("inf" if value > 0 else "-inf")
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    for precision in range(1, 10):
        candidate = f"{value:.{precision}g}"
        if _f32(float(candidate)) == value:
            text = candidate
            break
    return _plain(text)


@dataclass
class Spectrum:
    """Spectral metadata describing how spectral data was produced.

    ``spectrum_type_word`` packs the spectrum type (bits 0-7), averaging type
    (bits 8-15) and window time-delta interpretation (bits 16-19).
    ``resolution`` and ``span`` hold raw fixed-point bits; use the ``*_hz``
    methods to work in hertz.
    """

    spectrum_type_word: int = 0
    window_type_word: int = 0
    num_transform_points: int = 0
    num_window_points: int = 0
    resolution: int = 0
    span: int = 0
    num_averages: int = 0
    weighting_factor: int = 0
    f1_index: int = 0
    f2_index: int = 0
    window_time_delta: WindowTimeDelta = field(default_factory=WindowTimeDelta)

    def spectrum_type(self) -> SpectrumType:
        return SpectrumType.from_int(self.spectrum_type_word & 0xFF)

    def set_spectrum_type(self, spectrum_type: SpectrumType) -> None:
        """Set the spectrum type.

        User-defined codes must be at least 128, and the reserved variant
        may not be set.
        """
        if spectrum_type.is_reserved:
            raise ReservedFieldError()
        code = spectrum_type.to_int()
        if spectrum_type.user_defined and code < _FIRST_USER_SPECTRUM_TYPE:
            raise OutOfRangeError(
                f"user-defined spectrum type {code} must be at least {_FIRST_USER_SPECTRUM_TYPE}"
            )
        self.spectrum_type_word = (self.spectrum_type_word & ~0xFF & 0xFFFF_FFFF) | code

    def averaging_type(self) -> AveragingType:
        return AveragingType.from_int((self.spectrum_type_word >> 8) & 0xFF)

    def set_averaging_type(self, averaging_type: AveragingType) -> None:
        """Set the averaging type; the reserved variant may not be set."""
        if averaging_type is AveragingType.RESERVED:
            raise ReservedFieldError()
        code = averaging_type.to_int()
        self.spectrum_type_word = (
            self.spectrum_type_word & ~(0xFF << 8) & 0xFFFF_FFFF
        ) | (code << 8)

    def window_time_delta_interpretation(self) -> WindowTimeDeltaInterpretation:
        return WindowTimeDeltaInterpretation.from_int((self.spectrum_type_word >> 16) & 0b1111)

    def set_window_time_delta_interpretation(
        self, interpretation: WindowTimeDeltaInterpretation
    ) -> None:
        """Set the interpretation; the reserved variant may not be set."""
        if interpretation is WindowTimeDeltaInterpretation.RESERVED:
            raise ReservedFieldError()
        code = interpretation.to_int()
        self.spectrum_type_word = (
            self.spectrum_type_word & ~(0b1111 << 16) & 0xFFFF_FFFF
        ) | (code << 16)

    def spectrum_type_as_u32(self) -> int:
        """The raw spectrum type word."""
        return self.spectrum_type_word

    def window_type(self) -> WindowType:
        return WindowType.from_int(self.window_type_word & 0xFF)

    def set_window_type(self, window_type: WindowType) -> None:
        """Set the window type; the reserved variant may not be set."""
        if window_type.is_reserved:
            raise ReservedFieldError()
        self.window_type_word = window_type.to_int()

    def resolution_hz(self) -> float:
        return _from_fixed64(self.resolution)

    def set_resolution_hz(self, resolution_hz: float) -> None:
        self.resolution = _to_fixed64(resolution_hz)

    def span_hz(self) -> float:
        return _from_fixed64(self.span)

    def set_span_hz(self, span_hz: float) -> None:
        self.span = _to_fixed64(span_hz)

    def size_words(self) -> int:
        """Size of the field in 32-bit words."""
        return _LAYOUT.size // 4

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the whole field."""
        try:
            return _LAYOUT.pack(
                self.spectrum_type_word,
                self.window_type_word,
                self.num_transform_points,
                self.num_window_points,
                self.resolution,
                self.span,
                self.num_averages,
                self.weighting_factor,
                self.f1_index,
                self.f2_index,
                self.window_time_delta.value,
            )
        except struct.error as exc:
            raise OutOfRangeError(f"spectrum field out of range: {exc}") from None

    @classmethod
    def from_bytes(cls, data: bytes) -> Spectrum:
        """Decode a spectrum field from the start of ``data``."""
        if len(data) < _LAYOUT.size:
            raise ParseError(
                f"need {_LAYOUT.size} bytes for a spectrum field, got {len(data)}"
            )
        (
            spectrum_type_word,
            window_type_word,
            num_transform_points,
            num_window_points,
            resolution,
            span,
            num_averages,
            weighting_factor,
            f1_index,
            f2_index,
            window_time_delta,
        ) = _LAYOUT.unpack_from(data)
        return cls(
            spectrum_type_word=spectrum_type_word,
            window_type_word=window_type_word,
            num_transform_points=num_transform_points,
            num_window_points=num_window_points,
            resolution=resolution,
            span=span,
            num_averages=num_averages,
            weighting_factor=weighting_factor,
            f1_index=f1_index,
            f2_index=f2_index,
            window_time_delta=WindowTimeDelta(window_time_delta),
        )

    def _window_time_delta_text(self) -> str:
        interpretation = self.window_time_delta_interpretation()
        delta = self.window_time_delta
        if interpretation is WindowTimeDeltaInterpretation.PERCENT_OVERLAP:
            return f"{_format_f32(delta.as_percent_overlap())}%"
        if interpretation is WindowTimeDeltaInterpretation.SAMPLES:
            return f"{delta.as_samples()} samples"
        if interpretation is WindowTimeDeltaInterpretation.TIME:
            return f"{delta.as_time_ns()} ns"
        return str(delta.value)

    def __str__(self) -> str:
        lines = [
            "Spectrum:",
            f"  Spectrum type: {self.spectrum_type_word:x}",
            f"  Window type: {self.window_type_word:x}",
            f"  Num transform points: {self.num_transform_points}",
            f"  Num window points: {self.num_window_points}",
            f"  Resolution: {_format_f64(self.resolution_hz())} Hz",
            f"  Span: {_format_f64(self.span_hz())} Hz",
            f"  Num averages: {self.num_averages}",
            f"  Weighting factor: {self.weighting_factor}",
            f"  F1 index: {self.f1_index}",
            f"  F2 index: {self.f2_index}",
            f"  Window time-delta: {self._window_time_delta_text()}",
        ]
        return "\n".join(lines) + "\n"