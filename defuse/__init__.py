"""
Defuse - Mission Engine for a defuse-the-device puzzle game.

A deterministic, seed-driven engine. Given (seed, mode, difficulty) it builds
a reproducible device and provides:
- Seeded generation of device-wide facts (serial, batteries, indicators, ports)
- Eleven puzzle module types, each with generator and validator
- Module selection by mode and difficulty
- The session state machine (timer, strikes, win/explode)
"""

__version__ = "0.1.0"
