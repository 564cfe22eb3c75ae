# suites.py
from __future__ import annotations

from typing import Dict, List, Tuple

from alphabet import Alphabet
from errors import InvalidConfigurationError
from permutation import cycles_from_wiring

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ── wheel database ────────────────────────────────────────────────
# (name, kind code + notches, wiring as printed in the rotor tables)
LEGACY_WHEELS: List[Tuple[str, str, str]] = [
    ("I",     "MQ",  "EKMFLGDQVZNTOWYHXUSPAIBRCJ"),
    ("II",    "ME",  "AJDKSIRUXBLHWTMCQGZNPYFVOE"),
    ("III",   "MV",  "BDFHJLCPRTXVZNYEIWGAKMUSQO"),
    ("IV",    "MJ",  "ESOVPZJAYQUIRHXLNFTGKDCMWB"),
    ("V",     "MZ",  "VZBRGITYUPSDNHLXAWMJQOFECK"),
    ("VI",    "MZM", "JPGVOUMFYQBENHZRDKASXLICTW"),
    ("VII",   "MZM", "NZJHGRCXMYSWBOUFAIVLPEKQDT"),
    ("VIII",  "MZM", "FKQHTLXOCBJSPDZRAMEWNIUYGV"),
    ("Beta",  "N",   "LEYJVCNIXWPBQMDRTAKZGFUHOS"),
    ("Gamma", "N",   "FSOKANUERHMBTIQJCZDXVLWGYP"),
    ("B",     "R",   "ENKQAUYWJICOPBLMDXZVFTHRGS"),
    ("C",     "R",   "RDOBJNTKVEHMLFCWZAXGYIPSUQ"),
]


def config_text(alphabet: str, num_rotors: int, num_pawls: int,
                wheels: List[Tuple[str, str, str]]) -> str:
    """Render a wheel table in the configuration-file grammar."""
    alpha = Alphabet(alphabet)
    lines = [alphabet, f" {num_rotors} {num_pawls}"]
    for name, code, wiring in wheels:
        lines.append(f" {name} {code} {cycles_from_wiring(wiring, alpha)}")
    return "\n".join(lines) + "\n"


# Four-rotor naval machine: thin reflector, Greek wheel, three moving rotors.
LEGACY_CONFIG: str = config_text(Alpha26, 5, 3, LEGACY_WHEELS)

SUITES: Dict[str, Dict[str, str]] = {
    "legacy": {"name": "Legacy", "alphabet": Alpha26, "config": LEGACY_CONFIG},
}


def suite_config(name: str) -> str:
    try:
        return SUITES[name.lower()]["config"]
    except KeyError:
        raise InvalidConfigurationError(f"Unknown suite '{name}'. Expected one of {list(SUITES)}") from None


def legacy_wheel(name: str) -> Tuple[str, str, str]:
    """The (name, code, wiring) row of a legacy wheel, for building variants."""
    for row in LEGACY_WHEELS:
        if row[0] == name:
            return row
    raise InvalidConfigurationError(f"No legacy wheel named {name!r}")
