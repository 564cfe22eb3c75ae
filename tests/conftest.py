import pytest

from config_reader import apply_settings, read_config
from suites import Alpha26, LEGACY_CONFIG, config_text, legacy_wheel

WIDE_B = ("B", "R", "YRUHQSLDPXNGOKMIEBFZCWVJAT")


@pytest.fixture
def legacy():
    """Naval four-rotor machine: 5 slots, 3 pawls."""
    return read_config(LEGACY_CONFIG)


@pytest.fixture
def army():
    """Three-rotor machine, wide reflector B, rotors I II III."""
    wheels = [WIDE_B] + [legacy_wheel(n) for n in ("I", "II", "III")]
    return read_config(config_text(Alpha26, 4, 3, wheels))


@pytest.fixture
def configured(legacy):
    def _configure(line):
        apply_settings(legacy, line)
        return legacy
    return _configure
