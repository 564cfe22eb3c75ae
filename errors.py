# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every configuration or logic error the machine raises."""


# ── alphabet & symbol lookups ─────────────────────────────────────
class InvalidAlphabetError(EnigmaError):
    pass


class SymbolNotInAlphabetError(EnigmaError):
    pass


class UnknownSymbolError(SymbolNotInAlphabetError):
    pass


class OutOfRangeError(EnigmaError):
    pass


# ── machine configuration ─────────────────────────────────────────
class InvalidConfigurationError(EnigmaError):
    pass


class TooManyRotorsError(InvalidConfigurationError):
    pass


class WrongRotorCountError(InvalidConfigurationError):
    pass


class MissingRotorError(InvalidConfigurationError):
    pass


class BadSettingLengthError(InvalidConfigurationError):
    pass


class NoRotorsInsertedError(InvalidConfigurationError):
    pass


# ── rotor operations ──────────────────────────────────────────────
class InvalidPositionError(EnigmaError):
    pass


class UnsupportedOperationError(EnigmaError):
    pass
