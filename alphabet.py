# alphabet.py
from __future__ import annotations

from debug import Debug
from errors import InvalidAlphabetError, OutOfRangeError, UnknownSymbolError

debug = Debug()

DEFAULT_SYMBOLS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# used as delimiters by the configuration grammar
RESERVED = frozenset(" *,/()")


class Alphabet:
    """An ordered set of encodable symbols.

    The K-th symbol has index K (numbering from 0). Symbols may not repeat
    and may not be one of the reserved delimiters blank, ``*``, ``,``,
    ``/``, ``(`` or ``)``.
    """

    __slots__ = ("_symbols", "_index")

    def __init__(self, symbols: str = DEFAULT_SYMBOLS) -> None:
        if not symbols:
            raise InvalidAlphabetError("alphabet must contain at least one symbol")

        index: dict[str, int] = {}
        for i, ch in enumerate(symbols):
            if ch in RESERVED or ch.isspace():
                raise InvalidAlphabetError(
                    f"Invalid character {ch!r} in the provided alphabet."
                )
            if ch in index:
                raise InvalidAlphabetError(
                    f"Duplicated character {ch!r} in the provided alphabet."
                )
            index[ch] = i

        self._symbols: str = symbols
        self._index: dict[str, int] = index
        debug.log("alphabet", f"built {len(symbols)}-symbol alphabet {symbols!r}")

    @property
    def symbols(self) -> str:
        return self._symbols

    @property
    def size(self) -> int:
        return len(self._symbols)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    # symbol → integer signal
    def to_index(self, ch: str) -> int:
        try:
            return self._index[ch]
        except KeyError:
            raise UnknownSymbolError(
                f"Invalid character {ch!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self._symbols)):
            hi = len(self._symbols) - 1
            raise OutOfRangeError(f"Signal {index} out of range 0–{hi}")
        return self._symbols[index]

    # ── niceties --------------------------------------------------
    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self._symbols!r}>"
