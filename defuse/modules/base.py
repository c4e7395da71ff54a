"""
Module Contract - Interface every puzzle module implements.

A PuzzleModule:
- generate(seed, globals) -> data: deterministic, encodes puzzle + solution
- validate(action, state, globals) -> ValidationResult

Validators consult only their own data, the action, and globals.
Timer-dependent rules read timer_seconds from the action payload.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar

from ..engine_core.action import ActionType, ModuleAction, ValidationResult
from ..engine_core.rng import DeterministicRNG
from ..engine_core.state import to_plain

if TYPE_CHECKING:
    from ..config import ModuleType
    from ..engine_core.globals import GameGlobals

Handler = Callable[[ModuleAction, Any, "GameGlobals"], ValidationResult]


class PuzzleModule(ABC):
    """
    Abstract base class for puzzle modules.

    Subclasses set module_type, implement generate(), and map the
    action types they understand in handlers().
    """

    module_type: ClassVar[ModuleType]

    @abstractmethod
    def generate(self, seed: str, globals: GameGlobals) -> Any:
        """Build the module data for a sub-seed."""

    @abstractmethod
    def handlers(self) -> dict[ActionType, Handler]:
        """Action type -> handler for this module."""

    def validate(
        self,
        action: ModuleAction,
        state: Any,
        globals: GameGlobals,
    ) -> ValidationResult:
        """Dispatch to the handler for the action type."""
        handler = self.handlers().get(action.action_type)
        if handler is None:
            return self.unhandled(action, state, globals)
        return handler(action, state, globals)

    def unhandled(
        self,
        action: ModuleAction,
        state: Any,
        globals: GameGlobals,
    ) -> ValidationResult:
        """Action type this module does not understand: ignored."""
        return ValidationResult.invalid(state)

    def describe_solution(self, state: Any, globals: GameGlobals) -> dict[str, Any]:
        """
        Plain-data answer key, for tooling and replays.

        Defaults to the data class's HIDDEN_FIELDS; modules whose answer
        comes from rules rather than stored fields override this.
        """
        hidden = getattr(type(state), "HIDDEN_FIELDS", ())
        return {name: to_plain(getattr(state, name)) for name in hidden}

    @staticmethod
    def rng(seed: str) -> DeterministicRNG:
        """Module-local generator; never shared with globals."""
        return DeterministicRNG(seed)
