# permutation.py
from __future__ import annotations

import re
from typing import overload

from alphabet import Alphabet
from debug import Debug
from errors import InvalidConfigurationError, SymbolNotInAlphabetError

debug = Debug()

_cycle_re = re.compile(r"\(([^()]*)\)")


class Permutation:
    """A permutation of the indices of an alphabet, given in cycle notation.

    ``cycles`` is a string of the form ``"(cccc) (cc) ..."`` where each c is
    a symbol of *alphabet*. Symbols that appear in no cycle map to themselves
    and whitespace is ignored, so ``"(AB)(CD)"`` and ``"( A B ) (C D)"`` are
    the same permutation.
    """

    __slots__ = ("_alphabet", "_fwd", "_rev", "_cycles")

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        n = alphabet.size

        # integer lookup tables
        self._fwd: list[int] = list(range(n))
        self._rev: list[int] = list(range(n))
        self._cycles: list[str] = []

        seen: set[str] = set()
        for cycle in _parse_cycles(cycles):
            for ch in cycle:
                if ch not in alphabet:
                    raise SymbolNotInAlphabetError(
                        f"{ch!r} is not in the alphabet."
                    )
                if ch in seen:
                    raise InvalidConfigurationError(
                        f"{ch!r} appears in more than one place in {cycles!r}"
                    )
                seen.add(ch)
            self._add_cycle(cycle)

        debug.log("permutation", f"{cycles!r} -> {self.cycles()}")

    def _add_cycle(self, cycle: str) -> None:
        """Chain c0 -> c1 -> ... -> cm -> c0."""
        idx = [self._alphabet.to_index(ch) for ch in cycle]
        for a, b in zip(idx, idx[1:] + idx[:1]):
            self._fwd[a] = b
            self._rev[b] = a
        if len(cycle) > 1:
            self._cycles.append(cycle)

    # ── accessors ────────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def size(self) -> int:
        return self._alphabet.size

    def wrap(self, p: int) -> int:
        """Return P modulo the size of this permutation, never negative."""
        return p % self.size

    # ── mapping ──────────────────────────────────────────────────
    @overload
    def permute(self, p: int) -> int: ...
    @overload
    def permute(self, p: str) -> str: ...

    def permute(self, p):
        """Apply the permutation to an index (wrapped) or to a symbol."""
        if isinstance(p, str):
            return self._alphabet.to_char(self._fwd[self._symbol_index(p)])
        return self._checked(self._fwd[self.wrap(p)])

    @overload
    def invert(self, c: int) -> int: ...
    @overload
    def invert(self, c: str) -> str: ...

    def invert(self, c):
        """Apply the inverse permutation to an index (wrapped) or a symbol."""
        if isinstance(c, str):
            return self._alphabet.to_char(self._rev[self._symbol_index(c)])
        return self._checked(self._rev[self.wrap(c)])

    def derangement(self) -> bool:
        """Return True iff some symbol maps to itself.

        Note the sense: despite the name this flags a permutation that is
        *not* a derangement. Callers rely on the literal behaviour.
        """
        return any(i == j for i, j in enumerate(self._fwd))

    def cycles(self) -> str:
        """Canonical cycle notation, fixed points omitted."""
        return "".join(f"({c})" for c in self._cycles)

    # ── helpers ──────────────────────────────────────────────────
    def _symbol_index(self, ch: str) -> int:
        if ch not in self._alphabet:
            raise SymbolNotInAlphabetError(f"{ch!r} is not in the alphabet.")
        return self._alphabet.to_index(ch)

    def _checked(self, index: int) -> int:
        # the tables are built from alphabet indices, so this cannot fire
        # unless they were corrupted after construction
        if not (0 <= index < self.size):
            raise SymbolNotInAlphabetError(f"index {index} is not in the alphabet.")
        return index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._alphabet == other._alphabet and self._fwd == other._fwd

    def __hash__(self) -> int:
        return hash((self._alphabet, tuple(self._fwd)))

    def __repr__(self) -> str:
        return f"<Permutation {self.cycles() or '()'}>"


def _parse_cycles(cycles: str) -> list[str]:
    """Split ``"(AB) (CDE)"`` into ``["AB", "CDE"]``, dropping whitespace."""
    leftover = _cycle_re.sub("", cycles)
    if leftover.strip():
        raise InvalidConfigurationError(
            f"Malformed cycle notation {cycles!r}: stray {leftover.strip()!r}"
        )
    out = []
    for body in _cycle_re.findall(cycles):
        body = "".join(body.split())
        if body:
            out.append(body)
    return out


def cycles_from_wiring(wiring: str, alphabet: Alphabet) -> str:
    """Convert a classic wiring string into cycle notation.

    ``wiring[k]`` is the image of the k-th alphabet symbol, as rotor tables
    are usually printed (``"EKMFLGDQVZNTOWYHXUSPAIBRCJ"`` for rotor I).
    """
    if sorted(wiring) != sorted(alphabet.symbols):
        raise InvalidConfigurationError("wiring must be a permutation of alphabet")

    seen: set[str] = set()
    groups: list[str] = []
    for start in alphabet.symbols:
        if start in seen:
            continue
        group = []
        ch = start
        while ch not in seen:
            seen.add(ch)
            group.append(ch)
            ch = wiring[alphabet.to_index(ch)]
        groups.append("".join(group))
    return " ".join(f"({g})" for g in groups)
