import pytest

from alphabet import Alphabet
from errors import (
    InvalidConfigurationError,
    InvalidPositionError,
    SymbolNotInAlphabetError,
    UnsupportedOperationError,
)
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorKind

UPPER = Alphabet()
ROTOR_I = "(AELTPHQXRU)(BKNW)(CMOY)(DFG)(IV)(JZ)(S)"
REFL_B = "(AE)(BN)(CK)(DQ)(FU)(GY)(HW)(IJ)(LO)(MP)(RX)(SZ)(TV)"


@pytest.fixture
def rotor_i():
    return Rotor.moving("I", Permutation(ROTOR_I, UPPER), "Q")


@pytest.fixture
def reflector_b():
    return Rotor.reflector("B", Permutation(REFL_B, UPPER))


def test_capabilities(rotor_i, reflector_b):
    fixed = Rotor.fixed("Beta", Permutation("", UPPER))
    assert rotor_i.rotates() and not rotor_i.reflects()
    assert reflector_b.reflects() and not reflector_b.rotates()
    assert not fixed.rotates() and not fixed.reflects()
    assert not fixed.at_notch()
    assert not reflector_b.at_notch()


def test_forward_at_rest(rotor_i):
    assert rotor_i.convert_forward(0) == 4      # A -> E


def test_forward_after_turning(rotor_i):
    rotor_i.set("B")
    assert rotor_i.convert_forward(0) == 9      # A -> J


def test_ring_setting_shifts_wiring(rotor_i):
    rotor_i.set_ring("B")
    assert rotor_i.ring_setting == 1
    assert rotor_i.convert_forward(0) == 10     # A -> K


@pytest.mark.parametrize("setting, ring", [(0, 0), (5, 0), (0, 7), (13, 20), (25, 25)])
def test_backward_undoes_forward(rotor_i, setting, ring):
    rotor_i.set(setting)
    rotor_i.set_ring(ring)
    for x in range(26):
        assert rotor_i.convert_backward(rotor_i.convert_forward(x)) == x


def test_set_wraps_and_accepts_symbols(rotor_i):
    rotor_i.set(27)
    assert rotor_i.setting == 1
    rotor_i.set(-1)
    assert rotor_i.window() == "Z"
    rotor_i.set("Q")
    assert rotor_i.setting == 16


def test_notch(rotor_i):
    rotor_i.set("Q")
    assert rotor_i.at_notch()
    rotor_i.advance()
    assert rotor_i.window() == "R"
    assert not rotor_i.at_notch()


def test_advance_wraps(rotor_i):
    rotor_i.set("Z")
    rotor_i.advance()
    assert rotor_i.setting == 0


def test_fixed_rotor_does_not_advance():
    fixed = Rotor.fixed("Beta", Permutation("(AB)", UPPER))
    fixed.set("C")
    fixed.advance()
    assert fixed.window() == "C"


def test_fixed_rotor_applies_offset():
    fixed = Rotor.fixed("Beta", Permutation("(AB)", UPPER))
    fixed.set(1)
    # shifted by one, the A<->B wire now joins Z and A
    assert fixed.convert_forward(25) == 0
    assert fixed.convert_backward(0) == 25


def test_reflector_single_position(reflector_b):
    reflector_b.set(0)
    reflector_b.set("A")
    assert reflector_b.setting == 0
    with pytest.raises(InvalidPositionError):
        reflector_b.set(1)
    with pytest.raises(InvalidPositionError):
        reflector_b.set("C")


def test_reflector_forward_only(reflector_b):
    assert reflector_b.convert_forward(0) == 4
    assert reflector_b.convert_forward(4) == 0
    with pytest.raises(UnsupportedOperationError):
        reflector_b.convert_backward(0)


def test_installed_copy_is_independent(rotor_i):
    rotor_i.set("D")
    twin = rotor_i.installed()
    assert twin.setting == 0
    assert twin.permutation is rotor_i.permutation
    twin.advance()
    assert rotor_i.window() == "D"
    assert twin.window() == "B"


def test_notches_only_on_moving_rotors():
    with pytest.raises(InvalidConfigurationError):
        Rotor("Beta", Permutation("", UPPER), RotorKind.FIXED, "A")


def test_notch_symbol_must_be_in_alphabet():
    with pytest.raises(SymbolNotInAlphabetError):
        Rotor.moving("I", Permutation(ROTOR_I, UPPER), "q")


def test_kind_codes():
    assert RotorKind.from_code("M") is RotorKind.MOVING
    assert RotorKind.from_code("N") is RotorKind.FIXED
    assert RotorKind.from_code("R") is RotorKind.REFLECTOR
    with pytest.raises(InvalidConfigurationError):
        RotorKind.from_code("X")
