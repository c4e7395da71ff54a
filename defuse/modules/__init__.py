"""
Modules - The eleven puzzle module types.

Each module has:
- A data class holding the puzzle and its hidden solution
- A PuzzleModule implementation (generate + validate)

The registry dispatches by ModuleType; selection decides which types a
mission gets.
"""

from .base import PuzzleModule
from .registry import (
    MODULE_REGISTRY,
    create_instances,
    describe_solution,
    generate_module,
    get_module,
    sub_seed,
    validate_module,
)
from .selection import select_module_types, weighted_pool
from .wires import WiresData, WiresModule
from .button import ButtonData, ButtonModule
from .symbols import SymbolsData, SymbolsModule
from .maze import MazeData, MazeModule
from .morse import MorseData, MorseModule
from .password import PasswordData, PasswordModule
from .sequence_wires import SequenceWiresData, SequenceWiresModule
from .capacitor import CapacitorData, CapacitorModule
from .memory import MemoryData, MemoryModule
from .simon import SimonData, SimonModule
from .word_panel import WordPanelData, WordPanelModule

__all__ = [
    "PuzzleModule",
    "MODULE_REGISTRY",
    "create_instances",
    "describe_solution",
    "generate_module",
    "get_module",
    "sub_seed",
    "validate_module",
    "select_module_types",
    "weighted_pool",
    "WiresData",
    "WiresModule",
    "ButtonData",
    "ButtonModule",
    "SymbolsData",
    "SymbolsModule",
    "MazeData",
    "MazeModule",
    "MorseData",
    "MorseModule",
    "PasswordData",
    "PasswordModule",
    "SequenceWiresData",
    "SequenceWiresModule",
    "CapacitorData",
    "CapacitorModule",
    "MemoryData",
    "MemoryModule",
    "SimonData",
    "SimonModule",
    "WordPanelData",
    "WordPanelModule",
]
