"""
Device Globals - Device-wide facts derived from the seed.

Generated once per session, never mutated. Modules read them during
generation and validation (wire tables, button rules, maze family, ...).
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .rng import DeterministicRNG

SERIAL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
SERIAL_LENGTH = 6
VOWELS = frozenset("AEIOU")

INDICATOR_LABELS = ["SND", "CLR", "CAR", "FRK", "IND", "MSA", "NSA", "SIG", "TRN"]
PORT_TYPES = ["USB", "HDMI", "Serial", "Parallel", "PS2", "RCA"]

MAX_BATTERIES = 4
MAX_INDICATORS = 3
MAX_PORTS = 3


@dataclass(frozen=True)
class Indicator:
    """A labelled indicator light on the device casing."""
    label: str
    lit: bool


@dataclass(frozen=True)
class GameGlobals:
    """Read-only device context shared by every module."""
    serial: str
    last_digit_odd: bool
    has_vowel: bool
    batteries: int
    indicators: tuple[Indicator, ...] = field(default_factory=tuple)
    ports: tuple[str, ...] = field(default_factory=tuple)

    def has_lit_indicator(self, label: str) -> bool:
        return any(i.label == label and i.lit for i in self.indicators)

    @property
    def any_lit_indicator(self) -> bool:
        return any(i.lit for i in self.indicators)

    @classmethod
    def from_serial(
        cls,
        serial: str,
        batteries: int = 0,
        indicators: tuple[Indicator, ...] = (),
        ports: tuple[str, ...] = (),
    ) -> GameGlobals:
        """Build globals from a serial, deriving the serial flags."""
        return cls(
            serial=serial,
            last_digit_odd=_last_digit_odd(serial),
            has_vowel=any(c in VOWELS for c in serial),
            batteries=batteries,
            indicators=tuple(indicators),
            ports=tuple(ports),
        )


def _last_digit_odd(serial: str) -> bool:
    last = serial[-1:] if serial else ""
    return last.isdigit() and int(last) % 2 == 1


def generate_globals(rng: DeterministicRNG) -> GameGlobals:
    """
    Draw device globals from the session generator.

    Draw order is part of the replay contract:
    serial, batteries, indicator count, indicator shuffle, lit flags,
    port count, port shuffle.
    """
    serial = "".join(rng.choice(SERIAL_ALPHABET) for _ in range(SERIAL_LENGTH))

    batteries = rng.next_int(0, MAX_BATTERIES)

    num_indicators = rng.next_int(0, MAX_INDICATORS)
    labels = rng.shuffle(INDICATOR_LABELS)[:num_indicators]
    indicators = tuple(Indicator(label=label, lit=rng.next() > 0.5) for label in labels)

    num_ports = rng.next_int(0, MAX_PORTS)
    ports = tuple(rng.shuffle(PORT_TYPES)[:num_ports])

    return GameGlobals.from_serial(
        serial,
        batteries=batteries,
        indicators=indicators,
        ports=ports,
    )
