# config_reader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Tuple

from alphabet import Alphabet
from debug import Debug
from errors import InvalidConfigurationError
from machine import Machine
from permutation import Permutation, cycles_from_wiring
from rotor_and_reflector import Rotor, RotorKind

debug = Debug()

JSON_KINDS = {
    "moving": RotorKind.MOVING,
    "fixed": RotorKind.FIXED,
    "reflector": RotorKind.REFLECTOR,
}


# ────────────────────────────────────────────────────────────────────────
#  1. Text grammar
# ────────────────────────────────────────────────────────────────────────


def read_config(text: str) -> Machine:
    """Build a Machine from configuration text.

    The first three whitespace-separated tokens are the alphabet, the number
    of rotor slots and the number of pawls. Each following line describes
    one rotor as ``name kind cycles`` where *kind* is ``M`` followed by the
    notch symbols, ``N`` for a fixed rotor or ``R`` for a reflector. A line
    starting with ``(`` carries on the cycles of the rotor above it.
    """
    header = text.split(None, 3)
    if len(header) < 3:
        raise InvalidConfigurationError("configuration file truncated")

    alphabet = Alphabet(header[0])
    num_rotors = _as_int(header[1], "rotor count")
    num_pawls = _as_int(header[2], "pawl count")
    body = header[3] if len(header) > 3 else ""

    rotors = [
        read_rotor(name, code, cycles, alphabet)
        for name, code, cycles in _rotor_lines(body)
    ]
    _require_unique([r.name for r in rotors])

    debug.log("config", f"{len(rotors)} rotors, {num_rotors} slots, {num_pawls} pawls")
    return Machine(alphabet, num_rotors, num_pawls, rotors)


def _rotor_lines(body: str) -> List[Tuple[str, str, str]]:
    entries: List[List[str]] = []
    for raw in body.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("("):
            if not entries:
                raise InvalidConfigurationError(f"cycles {line!r} belong to no rotor")
            entries[-1][2] += " " + line
            continue

        parts = line.split(None, 2)
        if len(parts) < 2:
            raise InvalidConfigurationError(f"bad rotor description {line!r}")
        entries.append([parts[0], parts[1], parts[2] if len(parts) == 3 else ""])
    return [(name, code, cycles) for name, code, cycles in entries]


def read_rotor(name: str, code: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Return the rotor described by NAME, kind CODE and CYCLES."""
    kind = RotorKind.from_code(code[:1])
    notches = code[1:]
    perm = Permutation(cycles, alphabet)

    match kind:
        case RotorKind.MOVING:
            return Rotor.moving(name, perm, notches)
        case RotorKind.FIXED | RotorKind.REFLECTOR:
            if notches:
                raise InvalidConfigurationError(
                    f"rotor {name}: only moving rotors take notches, got {code!r}"
                )
            return Rotor(name, perm, kind)


def _as_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidConfigurationError(f"Config file error, couldn't read the {what} from {token!r}") from None


def _require_unique(names: List[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise InvalidConfigurationError(f"Rotor {name!r} described twice")
        seen.add(name)


# ────────────────────────────────────────────────────────────────────────
#  2. JSON machine description
# ────────────────────────────────────────────────────────────────────────


def load_json_config(path: str | Path) -> dict:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigurationError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"{path}: expected a JSON object")
    required = {"alphabet", "rotors", "pawls", "wheels"}
    missing = required - data.keys()
    if missing:
        raise InvalidConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")
    return data


def build_from_json(cfg: Dict) -> Machine:
    """Build a Machine from a dict as returned by `load_json_config`.

    Each wheel gives its permutation either as ``cycles`` or as a classic
    ``wiring`` string.
    """
    alphabet = Alphabet(_json_str(cfg, "alphabet", "config"))
    wheels = cfg["wheels"]
    if not isinstance(wheels, list):
        raise InvalidConfigurationError(f"'wheels' must be a list, got {type(wheels).__name__}")

    rotors: List[Rotor] = []
    for wheel in wheels:
        if not isinstance(wheel, dict):
            raise InvalidConfigurationError(f"bad wheel entry {wheel!r}: expected an object")
        try:
            name = _json_str(wheel, "name", "wheel")
            kind = JSON_KINDS[_json_str(wheel, "kind", name).lower()]
        except KeyError as exc:
            raise InvalidConfigurationError(f"bad wheel entry {wheel!r}: {exc}") from None

        if "wiring" in wheel:
            cycles = cycles_from_wiring(_json_str(wheel, "wiring", name), alphabet)
        else:
            cycles = _json_str(wheel, "cycles", name, "")
        notches = _json_str(wheel, "notches", name, "")
        rotors.append(Rotor(name, Permutation(cycles, alphabet), kind, notches))

    _require_unique([r.name for r in rotors])
    return Machine(
        alphabet,
        _as_int(str(cfg["rotors"]), "rotor count"),
        _as_int(str(cfg["pawls"]), "pawl count"),
        rotors,
    )


def _json_str(entry: Dict, key: str, owner: str, default: str | None = None) -> str:
    """ENTRY[KEY], which must be a string. Missing keys raise KeyError
    unless DEFAULT is given."""
    value = entry[key] if default is None else entry.get(key, default)
    if not isinstance(value, str):
        raise InvalidConfigurationError(
            f"{owner}: {key!r} must be a string, got {type(value).__name__}"
        )
    return value


def load_config(path: str | Path) -> Machine:
    """Read a machine description from PATH; ``.json`` files use the JSON form."""
    path = Path(path)
    try:
        if path.suffix.lower() == ".json":
            return build_from_json(load_json_config(path))
        return read_config(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InvalidConfigurationError(f"could not open {path}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidConfigurationError(f"{path} is not UTF-8 text") from exc


# ────────────────────────────────────────────────────────────────────────
#  3. Setting lines
# ────────────────────────────────────────────────────────────────────────


def apply_settings(machine: Machine, line: str) -> None:
    """Configure MACHINE from a setting line.

    ``* B Beta III IV I AXLE (YF) (ZH)`` names the rotors left to right
    (reflector first), then the initial setting, then optionally a ring
    setting and the plugboard cycles.
    """
    text = line.strip()
    if not text.startswith("*"):
        raise InvalidConfigurationError(f"Setting line should start with '*': {line!r}")

    tokens = text[1:].split()
    n = machine.num_rotors
    if len(tokens) < n + 1:
        raise InvalidConfigurationError(
            f"Setting line needs {n} rotor names and a setting: {line!r}"
        )

    names, setting, rest = tokens[:n], tokens[n], tokens[n + 1:]
    ring = None
    if rest and not rest[0].startswith("("):
        ring, rest = rest[0], rest[1:]
    plugboard = " ".join(rest)

    if len(set(names)) != len(names):
        raise InvalidConfigurationError(f"Duplicate rotors in {names}")

    # the machine is left untouched unless the whole line is valid
    _check_arrangement(machine, machine.select_rotors(names))
    machine.check_setting(setting, "setting")
    if ring:
        machine.check_setting(ring, "ring setting")
    board = Permutation(plugboard, machine.alphabet)

    machine.insert_rotors(names)
    machine.set_rotors(setting)
    if ring:
        machine.set_rings(ring)
    machine.set_plugboard(board)
    debug.log("config", f"settings applied: {machine!r}")


def _check_arrangement(machine: Machine, rotors: List[Rotor]) -> None:
    if not rotors[0].reflects():
        raise InvalidConfigurationError("First rotor should be the reflector.")
    fixed_slots = machine.num_rotors - machine.num_pawls
    for i, rotor in enumerate(rotors[1:], start=1):
        if rotor.reflects():
            raise InvalidConfigurationError(f"Reflector {rotor.name} can only go in slot 0")
        if i < fixed_slots and rotor.rotates():
            raise InvalidConfigurationError(
                f"Moving rotor {rotor.name} in slot {i}, which has no pawl"
            )
