import pytest
from hypothesis import given
from hypothesis import strategies as st

from vita49.errors import ParseError
from vita49.trailer import SampleFrameIndicator, Trailer

FLAG_BITS = [
    ("cal_time_indicator", 31, 19),
    ("valid_data_indicator", 30, 18),
    ("reference_lock_indicator", 29, 17),
    ("agc_indicator", 28, 16),
    ("detected_signal_indicator", 27, 15),
    ("spectral_inversion_indicator", 26, 14),
    ("over_range_indicator", 25, 13),
    ("sample_loss_indicator", 24, 12),
]


def test_empty_trailer_has_no_indicators():
    trailer = Trailer()
    results = [getattr(trailer, name)() for name, _, _ in FLAG_BITS]
    results.append(trailer.sample_frame_indicator())
    results.append(trailer.user_defined_indicator())
    results.append(trailer.associated_context_packet_count())
    assert all(r is None for r in results)


@pytest.mark.parametrize("name,enable,indicator", FLAG_BITS)
def test_flag_enabled_and_set(name, enable, indicator):
    trailer = Trailer((1 << enable) | (1 << indicator))
    assert getattr(trailer, name)() is True


@pytest.mark.parametrize("name,enable,indicator", FLAG_BITS)
def test_flag_enabled_and_clear(name, enable, indicator):
    trailer = Trailer(1 << enable)
    assert getattr(trailer, name)() is False


@pytest.mark.parametrize("name,enable,indicator", FLAG_BITS)
def test_flag_without_enable_is_none(name, enable, indicator):
    trailer = Trailer(1 << indicator)
    assert getattr(trailer, name)() is None


@pytest.mark.parametrize("frame", list(SampleFrameIndicator))
def test_sample_frame_indicator(frame):
    trailer = Trailer((1 << 23) | (1 << 22) | (int(frame) << 10))
    assert trailer.sample_frame_indicator() is frame


def test_sample_frame_needs_both_enable_bits():
    trailer = Trailer((1 << 23) | (0b11 << 10))
    assert trailer.sample_frame_indicator() is None


@pytest.mark.parametrize("bits", [0, 1, 2, 3])
def test_user_defined_indicator(bits):
    trailer = Trailer((1 << 21) | (1 << 20) | (bits << 8))
    assert trailer.user_defined_indicator() == bits


def test_user_defined_needs_both_enable_bits():
    assert Trailer((1 << 20) | (0b11 << 8)).user_defined_indicator() is None


@pytest.mark.parametrize("count", [0, 5, 0x7F])
def test_associated_context_packet_count(count):
    assert Trailer((1 << 7) | count).associated_context_packet_count() == count


def test_to_bytes_is_big_endian():
    assert Trailer(0x80000000).to_bytes() == b"\x80\x00\x00\x00"


@given(st.integers(min_value=0, max_value=0xFFFF_FFFF))
def test_bytes_round_trip(value):
    trailer = Trailer(value)
    assert Trailer.from_bytes(trailer.to_bytes()) == trailer


def test_from_bytes_too_short():
    with pytest.raises(ParseError):
        Trailer.from_bytes(b"\x00\x01")


def test_value_out_of_range():
    with pytest.raises(ValueError):
        Trailer(1 << 32)