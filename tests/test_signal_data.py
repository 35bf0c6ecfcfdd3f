import pytest
from hypothesis import given
from hypothesis import strategies as st

from vita49.errors import PayloadUneven32BitWordsError
from vita49.signal_data import SignalData


def test_new_is_empty():
    data = SignalData()
    assert data.payload_size_bytes() == 0
    assert data.size_words() == 0
    assert data.payload() == b""


def test_from_bytes_round_trip():
    data = SignalData.from_bytes(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    assert data.payload() == bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert data.size_words() == 2


def test_set_payload_size():
    data = SignalData()
    data.set_payload(bytes([1, 2, 3, 4]))
    assert data.payload_size_bytes() == 4


def test_words_are_big_endian():
    data = SignalData.from_bytes(b"\x01\x02\x03\x04")
    assert data.words == [0x01020304]


def test_uneven_payload_rejected():
    with pytest.raises(PayloadUneven32BitWordsError):
        SignalData.from_bytes(bytes([1, 2, 3, 4, 5, 6, 7]))


def test_failed_set_keeps_old_payload():
    data = SignalData.from_bytes(bytes([9, 9, 9, 9]))
    with pytest.raises(PayloadUneven32BitWordsError):
        data.set_payload(b"\x00")
    assert data.payload() == bytes([9, 9, 9, 9])


@given(st.binary(max_size=64).map(lambda b: b[: len(b) - len(b) % 4]))
def test_round_trip(raw):
    data = SignalData.from_bytes(raw)
    assert data.to_bytes() == raw
    assert data.payload_size_bytes() == len(raw)
    assert data.size_words() * 4 == len(raw)