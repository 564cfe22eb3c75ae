# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import List, TextIO

from config_reader import apply_settings, load_config, read_config
from debug import Debug
from errors import EnigmaError, InvalidConfigurationError
from machine import Machine
from suites import suite_config
from utilities import group_message, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches that influence message processing."""

    block: int = 5                  # output group size, 0 = no grouping
    strip_spaces: bool = True       # drop whitespace before converting
    debug: List[str] = field(default_factory=list)   # components to log
    log_to: str | None = None       # also write log lines to this file


# ────────────────────────────────────────────────────────────────────────
#  1. Message stream
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Apply every line of LINES to MACHINE.

    Lines starting with ``*`` reconfigure the machine; every other line is a
    message, converted and written to OUT in groups of ``cfg.block``.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.lstrip().startswith("*"):
            apply_settings(machine, line)
            configured = True
            continue

        if not configured:
            raise InvalidConfigurationError("message given before any setting line")

        msg = preprocess_message(line) if cfg.strip_spaces else line
        out.write(group_message(machine.convert_message(msg), cfg.block) + "\n")


def build_machine(config: str | None) -> Machine:
    """Machine from a file path, or the built-in Legacy suite when None."""
    if config is None:
        return read_config(suite_config("legacy"))
    return load_config(config)


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt messages with a rotor machine")
    p.add_argument("input", nargs="?", help="File of setting lines and messages. Default: stdin")
    p.add_argument("output", nargs="?", help="File for converted messages. Default: stdout")
    p.add_argument("-c", "--config", metavar="FILE", help="Machine description (text grammar, or .json). Default: built-in Legacy suite")
    p.add_argument("--group", type=int, default=5, help="Output group size, 0 for none. Default: 5")
    p.add_argument("--keep-spaces", action="store_true", help="Do not strip whitespace from messages.")
    p.add_argument("--debug", metavar="COMPONENT", action="append", default=[], help="Log a component (stepping, rotor, reflector, plugboard, encipher, config, ...). Repeatable.")
    p.add_argument("--log-to", metavar="FILE", help="Also write log lines to FILE.")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def run(args: argparse.Namespace) -> None:
    cfg = Config(
        block=args.group,
        strip_spaces=not args.keep_spaces,
        debug=list(args.debug),
        log_to=args.log_to,
    )
    if cfg.log_to:
        try:
            debug.add_file(cfg.log_to)
        except OSError as exc:
            raise InvalidConfigurationError(f"could not open {cfg.log_to}") from exc
    if cfg.debug:
        try:
            debug.enable(*cfg.debug)
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc)) from exc

    machine = build_machine(args.config)

    try:
        src = open(args.input, encoding="utf-8") if args.input else sys.stdin
    except OSError as exc:
        raise InvalidConfigurationError(f"could not open {args.input}") from exc
    try:
        try:
            dst = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
        except OSError as exc:
            raise InvalidConfigurationError(f"could not open {args.output}") from exc
        try:
            process(machine, src, dst, cfg)
        except UnicodeDecodeError as exc:
            raise InvalidConfigurationError(f"{args.input or 'stdin'} is not UTF-8 text") from exc
        finally:
            if dst is not sys.stdout:
                dst.close()
    finally:
        if src is not sys.stdin:
            src.close()


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        run(args)
    except EnigmaError as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
