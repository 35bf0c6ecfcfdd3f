import pytest
from hypothesis import given
from hypothesis import strategies as st

from vita49.errors import OutOfRangeError, ParseError
from vita49.threshold import Threshold


def test_manipulate_threshold():
    s1, s2 = 25.2, 0.23
    t = Threshold.from_db(s1, s2)
    assert t.stage_1_threshold_db() == pytest.approx(s1, rel=0.1)
    assert t.stage_2_threshold_db() == pytest.approx(s2, rel=0.1)
    s1, s2 = -20.5, -11.1
    t.set_stage_1_threshold_db(s1)
    t.set_stage_2_threshold_db(s2)
    assert t.stage_1_threshold_db() == pytest.approx(s1, rel=0.1)
    assert t.stage_2_threshold_db() == pytest.approx(s2, rel=0.1)


def test_negative_stage_1_keeps_stage_2():
    t = Threshold.from_db(-20.5, 3.0)
    assert t.stage_1_threshold_db() == -20.5
    assert t.stage_2_threshold_db() == 3.0


def test_setters_are_independent():
    t = Threshold.from_db(1.5, 2.5)
    t.set_stage_1_threshold_db(-7.25)
    assert t.stage_2_threshold_db() == 2.5
    t.set_stage_2_threshold_db(-100.0)
    assert t.stage_1_threshold_db() == -7.25


def test_size_words():
    assert Threshold().size_words() == 1


def test_display():
    assert str(Threshold.from_db(25.5, -3.0)) == "Stage 1: 25.5 dB, Stage 2: -3 dB"


def test_to_bytes():
    assert Threshold.from_db(1.0, 2.0).to_bytes() == b"\x01\x00\x00\x80"


@pytest.mark.parametrize("value", [300.0, -300.0])
def test_out_of_range(value):
    with pytest.raises(OutOfRangeError):
        Threshold.from_db(value, 0.0)


@given(
    st.integers(min_value=-(1 << 15), max_value=(1 << 15) - 1),
    st.integers(min_value=-(1 << 15), max_value=(1 << 15) - 1),
)
def test_exact_values_round_trip(a, b):
    s1, s2 = a / 128, b / 128
    t = Threshold.from_db(s1, s2)
    decoded = Threshold.from_bytes(t.to_bytes())
    assert decoded == t
    assert decoded.stage_1_threshold_db() == s1
    assert decoded.stage_2_threshold_db() == s2


def test_from_bytes_too_short():
    with pytest.raises(ParseError):
        Threshold.from_bytes(b"\x00")