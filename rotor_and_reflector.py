# rotor_and_reflector.py
from __future__ import annotations

from copy import copy
from enum import Enum

from alphabet import Alphabet
from debug import Debug
from errors import (
    InvalidConfigurationError,
    InvalidPositionError,
    SymbolNotInAlphabetError,
    UnsupportedOperationError,
)
from permutation import Permutation

debug = Debug()


class RotorKind(Enum):
    FIXED = "N"
    MOVING = "M"
    REFLECTOR = "R"

    @classmethod
    def from_code(cls, code: str) -> "RotorKind":
        """Map a configuration kind letter (M, N or R) to a kind."""
        for kind in cls:
            if kind.value == code:
                return kind
        raise InvalidConfigurationError(f"Unknown rotor kind {code!r}")


class Rotor:
    """A wheel of the machine.

    Every wheel carries a permutation, a *setting* (how far it has been
    turned) and a *ring setting* (how far the wiring core is displaced from
    the lettered ring). What a wheel can do depends on its kind:

    * ``FIXED``     never rotates, never reflects, has no notch
    * ``MOVING``    advances under a pawl and may carry notches
    * ``REFLECTOR`` sits in slot 0, has one position and no return path
    """

    __slots__ = ("name", "kind", "_permutation", "_notches", "_setting", "_ring")

    def __init__(
        self,
        name: str,
        permutation: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        if notches and kind is not RotorKind.MOVING:
            raise InvalidConfigurationError(
                f"Only moving rotors carry notches, {name} is {kind.name}"
            )
        bad = set(notches) - set(permutation.alphabet.symbols)
        if bad:
            raise SymbolNotInAlphabetError(
                f"Notch characters {''.join(sorted(bad))!r} of {name} must be in the alphabet"
            )

        self.name = name
        self.kind = kind
        self._permutation = permutation
        self._notches: frozenset[str] = frozenset(notches)
        self._setting = 0
        self._ring = 0

    # ── constructors ─────────────────────────────────────────────
    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, permutation, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.REFLECTOR)

    def installed(self) -> "Rotor":
        """Return a fresh copy for one machine slot.

        The permutation is shared; setting and ring start at 0 and belong
        to the copy alone.
        """
        twin = copy(self)
        twin._setting = 0
        twin._ring = 0
        return twin

    # ── accessors ────────────────────────────────────────────────
    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    @property
    def notches(self) -> frozenset[str]:
        return self._notches

    @property
    def setting(self) -> int:
        return self._setting

    @property
    def ring_setting(self) -> int:
        return self._ring

    def window(self) -> str:
        """The symbol currently showing through the machine's window."""
        return self.alphabet.to_char(self._setting)

    # ── capabilities ─────────────────────────────────────────────
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflects(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    def at_notch(self) -> bool:
        """True iff I am positioned to let the rotor on my left advance."""
        match self.kind:
            case RotorKind.MOVING:
                return self.window() in self._notches
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                return False

    # ── stepping --------------------------------------------------
    def advance(self) -> None:
        match self.kind:
            case RotorKind.MOVING:
                self.set(self._setting + 1)
                debug.log("rotor", f"{self.name} advanced to {self.window()}")
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                pass

    def set(self, posn: int | str) -> None:
        """Turn me to POSN, an index (wrapped) or a symbol of my alphabet."""
        match self.kind:
            case RotorKind.REFLECTOR:
                index = self._as_index(posn)
                if index != 0:
                    raise InvalidPositionError(
                        f"reflector {self.name} has only one position"
                    )
                self._setting = 0
            case RotorKind.FIXED | RotorKind.MOVING:
                self._setting = self._permutation.wrap(self._as_index(posn))

    def set_ring(self, posn: int | str) -> None:
        self._ring = self._permutation.wrap(self._as_index(posn))

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        match self.kind:
            case RotorKind.REFLECTOR:
                out = self._permutation.permute(p)
                debug.log("reflector", f"{self.name}: {p}->{out}")
                return out
            case RotorKind.FIXED | RotorKind.MOVING:
                offset = self._offset()
                mapped = self._permutation.permute(p + offset)
                return self._permutation.wrap(mapped - offset)

    def convert_backward(self, e: int) -> int:
        match self.kind:
            case RotorKind.REFLECTOR:
                raise UnsupportedOperationError(
                    f"reflector {self.name} has no backward path"
                )
            case RotorKind.FIXED | RotorKind.MOVING:
                offset = self._offset()
                mapped = self._permutation.invert(e + offset)
                return self._permutation.wrap(mapped - offset)

    # ── helpers ──────────────────────────────────────────────────
    def _offset(self) -> int:
        return self._permutation.wrap(self._setting - self._ring)

    def _as_index(self, posn: int | str) -> int:
        if isinstance(posn, str):
            return self.alphabet.to_index(posn)
        return posn

    def __repr__(self) -> str:
        return f"<Rotor {self.name} {self.kind.name} pos={self._setting} ring={self._ring}>"
