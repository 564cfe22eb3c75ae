# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import (
    BadSettingLengthError,
    InvalidConfigurationError,
    MissingRotorError,
    NoRotorsInsertedError,
    SymbolNotInAlphabetError,
    TooManyRotorsError,
    UnknownSymbolError,
    WrongRotorCountError,
)
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()


def step_schedule(rotors: Sequence[Rotor], num_pawls: int) -> list[bool]:
    """Decide which slots advance on the next key press.

    Only the rightmost *num_pawls* slots sit under a pawl. The rightmost
    one always advances. Any other pawl slot advances when its rotor can
    rotate and its right neighbour is at a notch; that neighbour is then
    pushed along as well, which is what makes a middle rotor step twice in
    a row. The answer depends on the current settings only and nothing is
    moved here.
    """
    n = len(rotors)
    advance = [False] * n
    if num_pawls <= 0 or n == 0:
        return advance

    first = max(n - num_pawls, 0)
    advance[n - 1] = True
    for i in range(first, n - 1):
        if rotors[i].rotates() and rotors[i + 1].at_notch():
            advance[i] = True
            advance[i + 1] = True
    return advance


class Machine:
    """A complete rotor machine.

    ``num_rotors`` slots (slot 0 holds the reflector), ``num_pawls`` of
    which (counting from the right) are driven by pawls. ``all_rotors`` is
    the catalog the slots are filled from; it is never modified, each
    ``insert_rotors`` call installs fresh copies.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors <= 1:
            raise InvalidConfigurationError(f"{num_rotors} rotor slots, need more than 1")
        if not (0 <= num_pawls < num_rotors):
            raise InvalidConfigurationError(
                f"Invalid pawl count {num_pawls}, must be between 0 and {num_rotors - 1}"
            )

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = num_pawls
        self._all_rotors: tuple[Rotor, ...] = tuple(all_rotors)
        self._rotors: list[Rotor] = []
        self._plugboard = Permutation("", alphabet)

    # ── accessors ───────────────────────────────────────────────
    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def all_rotors(self) -> tuple[Rotor, ...]:
        return self._all_rotors

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        """The installed rotors, slot 0 first."""
        return tuple(self._rotors)

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def window(self) -> str:
        """Settings of slots 1.. as symbols, leftmost first."""
        return "".join(r.window() for r in self._rotors[1:])

    # ── rotor selection ─────────────────────────────────────────
    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill my slots with the rotors named NAMES (NAMES[0] names the
        reflector). Every installed rotor starts at setting 0."""
        self._rotors = [r.installed() for r in self.select_rotors(names)]
        debug.log("config", f"inserted {list(names)}")

    def select_rotors(self, names: Sequence[str]) -> list[Rotor]:
        """Catalog rotors named NAMES, in order. Nothing is installed."""
        if len(names) > len(self._all_rotors) + 1:
            raise TooManyRotorsError(
                f"{len(names)} rotors requested but only {len(self._all_rotors)} available"
            )
        if len(names) != self._num_rotors:
            raise WrongRotorCountError(
                f"Need exactly {self._num_rotors} rotors, got {len(names)}"
            )

        chosen: list[Rotor] = []
        for name in names:
            found = next((r for r in self._all_rotors if r.name == name), None)
            if found is None:
                raise MissingRotorError(f"No rotor named {name!r}")
            chosen.append(found)
        return chosen

    # ── key & ring helpers ──────────────────────────────────────
    def set_rotors(self, setting: str) -> None:
        """Turn slots 1.. to the symbols of SETTING, leftmost first."""
        self._require_rotors()
        for rotor, ch in zip(self._rotors[1:], self.check_setting(setting, "setting")):
            rotor.set(ch)
        debug.log("config", f"rotors set to {self.window()}")

    def set_rings(self, ring_setting: str) -> None:
        """Apply ring offsets to slots 1.., leftmost first."""
        self._require_rotors()
        for rotor, ch in zip(self._rotors[1:], self.check_setting(ring_setting, "ring setting")):
            rotor.set_ring(ch)
        debug.log("config", f"rings set to {ring_setting}")

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self.alphabet:
            raise InvalidConfigurationError("plugboard alphabet differs from machine alphabet")
        self._plugboard = plugboard
        debug.log("plugboard", f"plugboard {plugboard.cycles() or '(none)'}")

    def _require_rotors(self) -> None:
        if not self._rotors:
            raise NoRotorsInsertedError("insert rotors before setting them")

    def check_setting(self, setting: str, what: str = "setting") -> str:
        """Return SETTING if it fits slots 1.., else raise."""
        if len(setting) != self._num_rotors - 1:
            raise BadSettingLengthError(
                f"{what} {setting!r} must have {self._num_rotors - 1} symbols"
            )
        for ch in setting:
            if ch not in self.alphabet:
                raise UnknownSymbolError(
                    f"{what} symbol {ch!r} is not in the alphabet"
                )
        return setting

    # ── stepping logic  ─────────────────────────────────────────
    def _step_rotors(self) -> None:
        """Advance rotors one key press: decide first, then move."""
        schedule = step_schedule(self._rotors, self._num_pawls)
        for rotor, move in zip(self._rotors, schedule):
            if move:
                rotor.advance()
        debug.log("stepping", f"Rotor pos {self.window()}")

    # ── encipher one symbol  ────────────────────────────────────
    def convert(self, c: int) -> int:
        """Advance the machine, then return the image of index C."""
        if not self._rotors:
            raise NoRotorsInsertedError("no rotors inserted")
        self._step_rotors()

        signal = self._plugboard.permute(c)

        for rotor in reversed(self._rotors):
            signal = rotor.convert_forward(signal)

        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)

        out = self._plugboard.permute(signal)
        debug.log("encipher", f"{c}->{out}")
        return out

    def convert_message(self, msg: str) -> str:
        """Encode or decode MSG, updating rotor state as it goes."""
        out = []
        for ch in msg:
            if ch not in self.alphabet:
                raise SymbolNotInAlphabetError(f"{ch!r} is not in the alphabet")
            out.append(self.alphabet.to_char(self.convert(self.alphabet.to_index(ch))))
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors) or "empty"
        return f"<Machine {names} window={self.window()!r} pawls={self._num_pawls}>"
