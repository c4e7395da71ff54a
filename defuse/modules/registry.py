"""
Module Registry - Single dispatch from module type to implementation.

The set of module types is closed: every ModuleType has exactly one
PuzzleModule here, and generate/validate always go through this table.
"""

from __future__ import annotations
from typing import Any

from ..config import ModuleType
from ..engine_core.action import ModuleAction, ValidationResult
from ..engine_core.globals import GameGlobals
from ..engine_core.state import ModuleInstance
from .base import PuzzleModule
from .button import ButtonModule
from .capacitor import CapacitorModule
from .maze import MazeModule
from .memory import MemoryModule
from .morse import MorseModule
from .password import PasswordModule
from .sequence_wires import SequenceWiresModule
from .simon import SimonModule
from .symbols import SymbolsModule
from .wires import WiresModule
from .word_panel import WordPanelModule

MODULE_REGISTRY: dict[ModuleType, PuzzleModule] = {
    module.module_type: module
    for module in (
        WiresModule(),
        ButtonModule(),
        SymbolsModule(),
        MazeModule(),
        MorseModule(),
        PasswordModule(),
        SequenceWiresModule(),
        CapacitorModule(),
        MemoryModule(),
        SimonModule(),
        WordPanelModule(),
    )
}


def get_module(module_type: ModuleType) -> PuzzleModule:
    """Implementation for a module type."""
    module = MODULE_REGISTRY.get(module_type)
    if module is None:
        raise ValueError(f"No implementation for module type: {module_type}")
    return module


def sub_seed(seed: str, module_type: ModuleType) -> str:
    """Per-type seed; decorrelates modules from each other and from globals."""
    return f"{seed}_{module_type.value}"


def generate_module(seed: str, module_type: ModuleType, globals: GameGlobals) -> Any:
    """Generate module data for a session seed."""
    return get_module(module_type).generate(sub_seed(seed, module_type), globals)


def create_instances(
    seed: str,
    module_types: list[ModuleType],
    globals: GameGlobals,
) -> list[ModuleInstance]:
    """Build module instances in selection order, ids "<type>_<ordinal>"."""
    return [
        ModuleInstance(
            id=f"{module_type.value}_{index}",
            type=module_type,
            data=generate_module(seed, module_type, globals),
        )
        for index, module_type in enumerate(module_types)
    ]


def validate_module(
    module: ModuleInstance,
    action: ModuleAction,
    globals: GameGlobals,
) -> ValidationResult:
    """Validate an action against a module instance."""
    if module.solved:
        return ValidationResult.invalid(module.data)
    return get_module(module.type).validate(action, module.data, globals)


def describe_solution(module: ModuleInstance, globals: GameGlobals) -> dict[str, Any]:
    """Answer key for a module instance."""
    return get_module(module.type).describe_solution(module.data, globals)
