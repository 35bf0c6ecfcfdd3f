import pytest
from hypothesis import given
from hypothesis import strategies as st

from vita49.errors import OutOfRangeError, ReservedFieldError
from vita49.spectrum_types import (
    AveragingType,
    SpectrumType,
    WindowTimeDelta,
    WindowTimeDeltaInterpretation,
    WindowType,
)


def test_spectrum_type_named_codes():
    assert SpectrumType.from_int(0) == SpectrumType.DEFAULT
    assert SpectrumType.from_int(1) == SpectrumType.LOG_POWER_DB
    assert SpectrumType.from_int(4) == SpectrumType.MAGNITUDE
    assert SpectrumType.CARTESIAN.to_int() == 2


def test_spectrum_type_reserved_and_user_defined():
    assert SpectrumType.from_int(5) == SpectrumType.RESERVED
    assert SpectrumType.from_int(127).is_reserved
    user = SpectrumType.from_int(128)
    assert user == SpectrumType.user(128)
    assert user.to_int() == 128
    with pytest.raises(ReservedFieldError):
        SpectrumType.RESERVED.to_int()


def test_spectrum_type_rejects_non_u8():
    with pytest.raises(OutOfRangeError):
        SpectrumType.from_int(256)
    with pytest.raises(OutOfRangeError):
        SpectrumType.from_int(-1)


@given(st.integers(min_value=0, max_value=255))
def test_spectrum_type_round_trip(value):
    decoded = SpectrumType.from_int(value)
    if decoded.is_reserved:
        assert 5 <= value <= 127
    else:
        assert decoded.to_int() == value


def test_averaging_type_codes():
    assert AveragingType.from_int(4) == AveragingType.MIN_HOLD
    assert AveragingType.from_int(8) == AveragingType.EXPONENTIAL
    assert AveragingType.from_int(32) == AveragingType.SMOOTHING
    assert AveragingType.MEDIAN.to_int() == 16
    assert AveragingType.from_int(3) == AveragingType.RESERVED
    with pytest.raises(ReservedFieldError):
        AveragingType.RESERVED.to_int()


@pytest.mark.parametrize("member", [m for m in AveragingType if m is not AveragingType.RESERVED])
def test_averaging_type_round_trip(member):
    assert AveragingType.from_int(member.to_int()) is member


def test_window_time_delta_interpretation_codes():
    assert WindowTimeDeltaInterpretation.from_int(1) == WindowTimeDeltaInterpretation.PERCENT_OVERLAP
    assert WindowTimeDeltaInterpretation.from_int(3) == WindowTimeDeltaInterpretation.TIME
    assert WindowTimeDeltaInterpretation.from_int(4) == WindowTimeDeltaInterpretation.RESERVED
    assert WindowTimeDeltaInterpretation.SAMPLES.to_int() == 2
    with pytest.raises(ReservedFieldError):
        WindowTimeDeltaInterpretation.RESERVED.to_int()


def test_window_type_named_codes():
    assert WindowType.from_int(0) == WindowType.RECTANGLE
    assert WindowType.from_int(2) == WindowType.HANNING_100
    assert WindowType.HAMMING.to_int() == 6
    assert WindowType.from_int(43) == WindowType.KAISER_BESSEL_4_SAMPLE_300


def test_window_type_reserved_and_other():
    assert WindowType.from_int(44) == WindowType.RESERVED
    assert WindowType.from_int(99).is_reserved
    other = WindowType.from_int(100)
    assert other == WindowType.user(100)
    assert other.to_int() == 100
    with pytest.raises(ReservedFieldError):
        WindowType.RESERVED.to_int()


@given(st.integers(min_value=0, max_value=255))
def test_window_type_round_trip(value):
    decoded = WindowType.from_int(value)
    if decoded.is_reserved:
        assert 44 <= value <= 99
    else:
        assert decoded.to_int() == value


def test_window_time_delta_time_and_samples():
    delta = WindowTimeDelta.from_time_ns(1000)
    assert delta.as_time_ns() == 1000
    delta.set_samples(77)
    assert delta.as_samples() == 77
    assert WindowTimeDelta.from_samples(5).as_samples() == 5
    with pytest.raises(OutOfRangeError):
        WindowTimeDelta.from_time_ns(1 << 32)
    with pytest.raises(OutOfRangeError):
        delta.set_samples(-1)


def test_window_time_delta_percent_overlap_round_trip():
    assert WindowTimeDelta.from_percent_overlap(50.0).as_percent_overlap() == 50.0
    negative = WindowTimeDelta.from_percent_overlap(-1.5)
    assert negative.as_percent_overlap() == -1.5
    assert 0 <= negative.value <= 0xFFFF_FFFF


@given(st.integers(min_value=-(1 << 20), max_value=1 << 20))
def test_window_time_delta_percent_exact_steps(steps):
    percent = steps / 4096
    delta = WindowTimeDelta()
    delta.set_percent_overlap(percent)
    assert delta.as_percent_overlap() == percent


def test_window_time_delta_percent_out_of_range():
    with pytest.raises(OutOfRangeError):
        WindowTimeDelta.from_percent_overlap(1e9)
    with pytest.raises(OutOfRangeError):
        WindowTimeDelta.from_percent_overlap(float("nan"))