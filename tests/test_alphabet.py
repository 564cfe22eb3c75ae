import pytest

from alphabet import Alphabet
from errors import InvalidAlphabetError, OutOfRangeError, UnknownSymbolError


def test_default_alphabet():
    a = Alphabet()
    assert a.size == 26
    assert len(a) == 26
    assert a.to_char(0) == "A"
    assert a.to_index("Z") == 25


def test_contains():
    a = Alphabet("ABC123")
    assert a.contains("1")
    assert "C" in a
    assert not a.contains("D")
    assert "a" not in a


def test_index_round_trip():
    a = Alphabet("QWERTYUIOPasdfghjkl0123456789")
    for i in range(a.size):
        assert a.to_index(a.to_char(i)) == i


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_to_char_out_of_range(index):
    with pytest.raises(OutOfRangeError):
        Alphabet("ABC").to_char(index)


def test_to_index_unknown_symbol():
    with pytest.raises(UnknownSymbolError):
        Alphabet("ABC").to_index("D")


@pytest.mark.parametrize("bad", [" ", "*", ",", "/", "(", ")"])
def test_reserved_symbols_rejected(bad):
    with pytest.raises(InvalidAlphabetError):
        Alphabet("AB" + bad + "C")


def test_duplicate_symbol_rejected():
    with pytest.raises(InvalidAlphabetError):
        Alphabet("ABCA")


def test_empty_alphabet_rejected():
    with pytest.raises(InvalidAlphabetError):
        Alphabet("")


def test_equality_by_symbols():
    assert Alphabet("ABC") == Alphabet("ABC")
    assert Alphabet("ABC") != Alphabet("ACB")
