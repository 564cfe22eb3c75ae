import pytest

from alphabet import Alphabet
from errors import InvalidConfigurationError, SymbolNotInAlphabetError
from permutation import Permutation, cycles_from_wiring

UPPER = Alphabet()
ROTOR_I = "(AELTPHQXRU)(BKNW)(CMOY)(DFG)(IV)(JZ)(S)"


def test_symbol_mapping():
    p = Permutation(ROTOR_I, UPPER)
    assert p.permute("A") == "E"
    assert p.permute("E") == "L"
    assert p.permute("U") == "A"
    assert p.invert("E") == "A"
    assert p.invert("A") == "U"
    assert p.permute("S") == "S"


def test_index_mapping_wraps():
    p = Permutation(ROTOR_I, UPPER)
    assert p.permute(0) == 4
    assert p.permute(26) == 4
    assert p.permute(-26) == 4
    assert p.invert(4) == 0
    assert p.invert(-22) == 0


@pytest.mark.parametrize("cycles", [ROTOR_I, "", "(AB) (CD)", "(ZYXWVUTSRQPONMLKJIHGFEDCBA)"])
def test_round_trip(cycles):
    p = Permutation(cycles, UPPER)
    for x in range(p.size):
        assert p.invert(p.permute(x)) == x
        assert p.permute(p.invert(x)) == x


def test_whitespace_ignored():
    spaced = Permutation("( A E L )  (B K)", UPPER)
    tight = Permutation("(AEL)(BK)", UPPER)
    assert spaced == tight
    assert spaced.cycles() == "(AEL)(BK)"


def test_unmapped_symbols_are_identity():
    p = Permutation("(AB)", Alphabet("ABCD"))
    assert p.permute("C") == "C"
    assert p.invert(3) == 3


def test_symbol_outside_alphabet_in_cycles():
    with pytest.raises(SymbolNotInAlphabetError):
        Permutation("(A1)", UPPER)


def test_symbol_outside_alphabet_on_lookup():
    p = Permutation(ROTOR_I, UPPER)
    with pytest.raises(SymbolNotInAlphabetError):
        p.permute("a")
    with pytest.raises(SymbolNotInAlphabetError):
        p.invert("1")


@pytest.mark.parametrize("cycles", ["(AB", "AB(CD)", "(AB))"])
def test_malformed_cycles(cycles):
    with pytest.raises(InvalidConfigurationError):
        Permutation(cycles, UPPER)


def test_symbol_used_twice():
    with pytest.raises(InvalidConfigurationError):
        Permutation("(AB)(BC)", UPPER)


def test_derangement_flags_any_fixed_point():
    # literal sense: True as soon as one symbol maps to itself
    assert Permutation(ROTOR_I, UPPER).derangement()
    assert Permutation("", UPPER).derangement()
    assert Permutation("(ABC)", Alphabet("ABCD")).derangement()
    assert not Permutation("(AB)", Alphabet("AB")).derangement()
    assert not Permutation("(ABC)(DE)", Alphabet("ABCDE")).derangement()


def test_wrap():
    p = Permutation("", Alphabet("ABCDE"))
    assert p.wrap(7) == 2
    assert p.wrap(-1) == 4
    assert p.wrap(-10) == 0
    assert p.size == 5


def test_cycles_from_wiring():
    assert cycles_from_wiring("EKMFLGDQVZNTOWYHXUSPAIBRCJ", UPPER) == (
        "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"
    )


def test_cycles_from_wiring_agrees_with_table():
    wiring = "BDFHJLCPRTXVZNYEIWGAKMUSQO"
    p = Permutation(cycles_from_wiring(wiring, UPPER), UPPER)
    assert "".join(p.permute(ch) for ch in UPPER.symbols) == wiring


def test_cycles_from_wiring_rejects_non_permutation():
    with pytest.raises(InvalidConfigurationError):
        cycles_from_wiring("AACDEFGHIJKLMNOPQRSTUVWXYZ", UPPER)
