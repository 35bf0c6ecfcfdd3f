"""Enumerations and the window time-delta word used by the spectrum field.

See ANSI/VITA-49.2-2017 section 9.6.1.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from vita49.errors import OutOfRangeError, ReservedFieldError

_U8_MAX = 0xFF
_U32_MAX = 0xFFFF_FFFF
_PERCENT_FRAC_BITS = 12
_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def _check_u8(value: int) -> int:
    if not 0 <= value <= _U8_MAX:
        raise OutOfRangeError(f"{value} does not fit in 8 bits")
    return value


def _check_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise OutOfRangeError(f"{value} does not fit in 32 bits")
    return value


def _to_f32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    return struct.unpack(">f", struct.pack(">f", value))[0]


@dataclass(frozen=True)
class SpectrumType:
    """Type of spectral data being presented.

    Codes 0 to 4 are the named types, 128 to 255 are user-defined, and the
    codes in between are reserved (``code`` is ``None``).
    """

    code: Optional[int]
    user_defined: bool = False

    def __post_init__(self) -> None:
        if self.code is None:
            if self.user_defined:
                raise ValueError("a user-defined spectrum type needs a code")
            return
        _check_u8(self.code)
        if not self.user_defined and self.code not in _SPECTRUM_TYPE_NAMES:
            raise OutOfRangeError(f"{self.code} is not a named spectrum type")

    @classmethod
    def user(cls, value: int) -> SpectrumType:
        """A user-defined spectrum type with the given code."""
        return cls(value, user_defined=True)

    @property
    def is_reserved(self) -> bool:
        return self.code is None

    @classmethod
    def from_int(cls, value: int) -> SpectrumType:
        """Decode an 8-bit spectrum type code."""
        _check_u8(value)
        if value in _SPECTRUM_TYPE_NAMES:
            return cls(value)
        if value < 128:
            return cls(None)
        return cls(value, user_defined=True)

    def to_int(self) -> int:
        """Encode as an 8-bit code; the reserved variant cannot be encoded."""
        if self.code is None:
            raise ReservedFieldError("can't convert reserved variant")
        return self.code

    def __repr__(self) -> str:
        if self.code is None:
            return "SpectrumType.RESERVED"
        if self.user_defined:
            return f"SpectrumType.user({self.code})"
        return f"SpectrumType.{_SPECTRUM_TYPE_NAMES[self.code]}"


_SPECTRUM_TYPE_NAMES = {
    0: "DEFAULT",
    1: "LOG_POWER_DB",
    2: "CARTESIAN",
    3: "POLAR",
    4: "MAGNITUDE",
}

SpectrumType.DEFAULT = SpectrumType(0)
SpectrumType.LOG_POWER_DB = SpectrumType(1)
SpectrumType.CARTESIAN = SpectrumType(2)
SpectrumType.POLAR = SpectrumType(3)
SpectrumType.MAGNITUDE = SpectrumType(4)
SpectrumType.RESERVED = SpectrumType(None)


class AveragingType(Enum):
    """Type of averaging performed; values are the wire codes."""

    NONE = 0
    LINEAR = 1
    PEAK_HOLD = 2
    MIN_HOLD = 4
    EXPONENTIAL = 8
    MEDIAN = 16
    SMOOTHING = 32
    RESERVED = None

    @classmethod
    def from_int(cls, value: int) -> AveragingType:
        """Decode an 8-bit averaging code; unknown codes are reserved."""
        _check_u8(value)
        try:
            return cls(value)
        except ValueError:
            return cls.RESERVED

    def to_int(self) -> int:
        """Encode as an 8-bit code; the reserved variant cannot be encoded."""
        if self is AveragingType.RESERVED:
            raise ReservedFieldError("can't convert reserved variant")
        return self.value


class WindowTimeDeltaInterpretation(Enum):
    """How the window time-delta word is to be read."""

    OVERLAP_NOT_CONTROLLED = 0
    PERCENT_OVERLAP = 1
    SAMPLES = 2
    TIME = 3
    RESERVED = None

    @classmethod
    def from_int(cls, value: int) -> WindowTimeDeltaInterpretation:
        """Decode an interpretation code; unknown codes are reserved."""
        _check_u8(value)
        try:
            return cls(value)
        except ValueError:
            return cls.RESERVED

    def to_int(self) -> int:
        """Encode as a code; the reserved variant cannot be encoded."""
        if self is WindowTimeDeltaInterpretation.RESERVED:
            raise ReservedFieldError("can't convert reserved variant")
        return self.value


_WINDOW_TYPE_NAMES = (
    "RECTANGLE",
    "TRIANGLE",
    "HANNING_100",
    "HANNING_200",
    "HANNING_300",
    "HANNING_400",
    "HAMMING",
    "RIESZ",
    "RIEMANN",
    "DE_LA_VALLEPOUSSIN",
    "TUKEY_025",
    "TUKEY_050",
    "TUKEY_075",
    "BOHMAN",
    "POISSON_200",
    "POISSON_300",
    "POISSON_400",
    "HANNING_POISSON_050",
    "HANNING_POISSON_100",
    "HANNING_POISSON_200",
    "CAUCHY_300",
    "CAUCHY_400",
    "CAUCHY_500",
    "GAUSSIAN_250",
    "GAUSSIAN_300",
    "GAUSSIAN_350",
    "DOLPH_CHEBYSHIEV_250",
    "DOLPH_CHEBYSHIEV_300",
    "DOLPH_CHEBYSHIEV_350",
    "DOLPH_CHEBYSHIEV_400",
    "KAISER_BESSEL_200",
    "KAISER_BESSEL_250",
    "KAISER_BESSEL_300",
    "KAISER_BESSEL_350",
    "BARCILON_TEMES_300",
    "BARCILON_TEMES_350",
    "BARCILON_TEMES_400",
    "EXACT_BLACKMAN",
    "BLACKMAN",
    "BLACKMAN_HARRIS_MIN_3_SAMPLE",
    "BLACKMAN_HARRIS_MIN_4_SAMPLE",
    "BLACKMAN_HARRIS_61_DB_3_SAMPLE",
    "BLACKMAN_HARRIS_74_DB_4_SAMPLE",
    "KAISER_BESSEL_4_SAMPLE_300",
)

_FIRST_OTHER_WINDOW = 100


@dataclass(frozen=True)
class WindowType:
    """Window applied before the spectral transform.

    Codes 0 to 43 are the named windows, 100 to 255 are user-defined
    ("other"), and the codes in between are reserved (``code`` is ``None``).
    Numeric suffixes in the names give the alpha coefficient, e.g.
    ``HANNING_100`` is a Hanning window with alpha 1.00.
    """

    code: Optional[int]
    other: bool = False

    def __post_init__(self) -> None:
        if self.code is None:
            if self.other:
                raise ValueError("a user-defined window type needs a code")
            return
        _check_u8(self.code)
        if not self.other and self.code >= len(_WINDOW_TYPE_NAMES):
            raise OutOfRangeError(f"{self.code} is not a named window type")

    @classmethod
    def user(cls, value: int) -> WindowType:
        """A user-defined window type with the given code."""
        return cls(value, other=True)

    @property
    def is_reserved(self) -> bool:
        return self.code is None

    @classmethod
    def from_int(cls, value: int) -> WindowType:
        """Decode an 8-bit window type code."""
        _check_u8(value)
        if value < len(_WINDOW_TYPE_NAMES):
            return cls(value)
        if value < _FIRST_OTHER_WINDOW:
            return cls(None)
        return cls(value, other=True)

    def to_int(self) -> int:
        """Encode as an 8-bit code; the reserved variant cannot be encoded."""
        if self.code is None:
            raise ReservedFieldError("can't convert reserved variant")
        return self.code

    def __repr__(self) -> str:
        if self.code is None:
            return "WindowType.RESERVED"
        if self.other:
            return f"WindowType.user({self.code})"
        return f"WindowType.{_WINDOW_TYPE_NAMES[self.code]}"


for _code, _name in enumerate(_WINDOW_TYPE_NAMES):
    setattr(WindowType, _name, WindowType(_code))
WindowType.RESERVED = WindowType(None)
del _code, _name


@dataclass
class WindowTimeDelta:
    """The 32-bit window time-delta word.

    It holds nanoseconds, a sample count, or a percent overlap in signed
    fixed point with 12 fraction bits, depending on the interpretation set
    in the spectrum type field.
    """

    value: int = 0

    def __post_init__(self) -> None:
        _check_u32(self.value)

    @classmethod
    def from_time_ns(cls, time_ns: int) -> WindowTimeDelta:
        return cls(_check_u32(time_ns))

    @classmethod
    def from_samples(cls, samples: int) -> WindowTimeDelta:
        return cls(_check_u32(samples))

    @classmethod
    def from_percent_overlap(cls, percent_overlap: float) -> WindowTimeDelta:
        delta = cls()
        delta.set_percent_overlap(percent_overlap)
        return delta

    def as_time_ns(self) -> int:
        return self.value

    def set_time_ns(self, time_ns: int) -> None:
        self.value = _check_u32(time_ns)

    def as_samples(self) -> int:
        return self.value

    def set_samples(self, samples: int) -> None:
        self.value = _check_u32(samples)

    def as_percent_overlap(self) -> float:
        bits = self.value
        if bits & 0x8000_0000:
            bits -= 1 << 32
        return _to_f32(bits / (1 << _PERCENT_FRAC_BITS))

    def set_percent_overlap(self, percent_overlap: float) -> None:
        value = _to_f32(float(percent_overlap))
        if not math.isfinite(value):
            raise OutOfRangeError(f"percent overlap {percent_overlap} is not finite")
        bits = round(value * (1 << _PERCENT_FRAC_BITS))
        if not _I32_MIN <= bits <= _I32_MAX:
            raise OutOfRangeError(f"percent overlap {percent_overlap} does not fit the field")
        self.value = bits & _U32_MAX