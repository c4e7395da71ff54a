"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages missions through the SessionManager
3. Builds module actions from request payloads
4. Formats responses (solutions are never exposed)

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateMissionRequest,
    ModuleActionRequest,
    ResetRequest,
    # Responses
    ActionResponse,
    ErrorResponse,
    MissionResponse,
    # Shared
    GlobalsInfo,
    IndicatorInfo,
    ModuleInfo,
    # Enums
    ErrorCode,
    MissionStatus,
)
from ..engine_core.action import ActionOutcome, ActionPayload, ActionType, Direction, ModuleAction
from ..engine_core.state import module_view
from ..session import Mission, SessionManager

logger = logging.getLogger(__name__)


def build_action(request: ModuleActionRequest) -> ModuleAction:
    """
    Convert an action request into a ModuleAction.

    Raises:
        ValueError: Unknown action type or direction
    """
    try:
        action_type = ActionType(request.action)
    except ValueError:
        raise ValueError(f"Unknown action: {request.action!r}") from None

    direction = None
    if request.direction is not None:
        try:
            direction = Direction(request.direction.lower())
        except ValueError:
            raise ValueError(f"Unknown direction: {request.direction!r}") from None

    return ModuleAction(
        action_type,
        ActionPayload(
            index=request.index,
            symbol_id=request.symbol_id,
            direction=direction,
            frequency=request.frequency,
            column=request.column,
            letter=request.letter,
            cut=request.cut,
            charge=request.charge,
            position=request.position,
            color=request.color,
        ),
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        mission = service.create_mission(CreateMissionRequest(seed="ABC123"))
        service.start_mission(mission.mission_id)
        result = service.act(mission.mission_id, "wires_0",
                             ModuleActionRequest(action="cut_wire", index=2))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_mission(self, request: CreateMissionRequest) -> MissionResponse | ErrorResponse:
        """Create a new mission; optionally start its countdown."""
        if request.seed is not None and not request.seed.strip():
            return self._validation_error("Seed must not be empty")
        try:
            mission = self.session_manager.create_mission(
                mode=request.mode,
                difficulty=request.difficulty,
                seed=request.seed,
            )
        except ValueError as e:
            return self._validation_error(str(e))

        if request.auto_start:
            self._start(mission)
        return self._mission_to_response(mission)

    def get_mission(self, mission_id: str) -> MissionResponse | ErrorResponse:
        mission = self.session_manager.get_mission(mission_id)
        if mission is None:
            return self._not_found(mission_id)
        return self._mission_to_response(mission)

    def start_mission(self, mission_id: str) -> ActionResponse | ErrorResponse:
        """intro -> active, and start the ticker if the manager runs one."""
        mission = self.session_manager.get_mission(mission_id)
        if mission is None:
            return self._not_found(mission_id)
        return self._outcome_to_response(mission, self._start(mission))

    def tick_mission(self, mission_id: str) -> ActionResponse | ErrorResponse:
        """Advance the countdown by one second (for clients driving time)."""
        mission = self.session_manager.get_mission(mission_id)
        if mission is None:
            return self._not_found(mission_id)
        return self._outcome_to_response(mission, mission.session.tick())

    def act(
        self,
        mission_id: str,
        module_id: str,
        request: ModuleActionRequest,
    ) -> ActionResponse | ErrorResponse:
        """Apply a player action to one module."""
        mission = self.session_manager.get_mission(mission_id)
        if mission is None:
            return self._not_found(mission_id)
        if mission.session.state.get_module(module_id) is None:
            return ErrorResponse(
                error=f"Module not found: {module_id}",
                error_code=ErrorCode.MODULE_NOT_FOUND,
                details={"mission_id": mission_id, "module_id": module_id},
            )

        try:
            action = build_action(request)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_ACTION)

        outcome = mission.session.module_action(module_id, action)
        return self._outcome_to_response(mission, outcome)

    def reset_mission(self, mission_id: str, request: ResetRequest) -> MissionResponse | ErrorResponse:
        """Stop the ticker and rebuild the mission with the same mode and difficulty."""
        mission = self.session_manager.get_mission(mission_id)
        if mission is None:
            return self._not_found(mission_id)
        if request.seed is not None and not request.seed.strip():
            return self._validation_error("Seed must not be empty")

        if mission.loop is not None:
            mission.loop.reset(request.seed)
        else:
            mission.session.reset(request.seed)
        logger.info("Mission %s reset with seed %s", mission_id, mission.session.seed)
        return self._mission_to_response(mission)

    def end_mission(self, mission_id: str) -> bool:
        return self.session_manager.end_mission(mission_id)

    def list_missions(self, active_only: bool = False) -> list[str]:
        return [m.mission_id for m in self.session_manager.list_missions(active_only)]

    # =========================================================================
    # Helpers
    # =========================================================================

    def _start(self, mission: Mission) -> ActionOutcome:
        if mission.loop is not None:
            return mission.loop.start()
        return mission.session.start_game()

    def _not_found(self, mission_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Mission not found: {mission_id}",
            error_code=ErrorCode.MISSION_NOT_FOUND,
            details={"mission_id": mission_id},
        )

    def _validation_error(self, message: str) -> ErrorResponse:
        logger.debug("Rejected request: %s", message)
        return ErrorResponse(error=message, error_code=ErrorCode.VALIDATION_ERROR)

    def _mission_to_response(self, mission: Mission) -> MissionResponse:
        state = mission.session.state
        g = state.globals
        return MissionResponse(
            mission_id=mission.mission_id,
            seed=state.seed,
            mode=state.mode.value,
            difficulty=state.difficulty.value,
            status=MissionStatus(state.status.value),
            timer_seconds=state.timer_seconds,
            strikes=state.strikes,
            max_strikes=state.max_strikes,
            globals=GlobalsInfo(
                serial=g.serial,
                last_digit_odd=g.last_digit_odd,
                has_vowel=g.has_vowel,
                batteries=g.batteries,
                indicators=[
                    IndicatorInfo(label=i.label, lit=i.lit) for i in g.indicators
                ],
                ports=list(g.ports),
            ),
            modules=[
                ModuleInfo(
                    module_id=m.id,
                    module_type=m.type.value,
                    solved=m.solved,
                    data=module_view(m.data),
                )
                for m in state.modules
            ],
            start_time=state.start_time,
            end_time=state.end_time,
        )

    def _outcome_to_response(self, mission: Mission, outcome: ActionOutcome) -> ActionResponse:
        return ActionResponse(
            mission_id=mission.mission_id,
            accepted=outcome.accepted,
            valid=outcome.valid,
            strike=outcome.strike,
            solved=outcome.solved,
            status=MissionStatus(outcome.status.value),
            module_id=outcome.module_id,
            reason=outcome.reason,
            mission=self._mission_to_response(mission),
        )
