"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a UI client and the engine.
Module data is passed through as plain JSON (see GameState.snapshot);
solutions are never included.

Error Codes:
- MISSION_NOT_FOUND: Mission does not exist or has been ended
- MODULE_NOT_FOUND: Module id is not part of the mission
- INVALID_ACTION: Action type or payload cannot be built
- VALIDATION_ERROR: Unknown mode, difficulty or malformed input
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class MissionStatus(str, Enum):
    """Mission status values."""
    INTRO = "intro"
    ACTIVE = "active"
    WON = "won"
    EXPLODED = "exploded"


class ErrorCode(str, Enum):
    """Structured error codes."""
    MISSION_NOT_FOUND = "MISSION_NOT_FOUND"
    MODULE_NOT_FOUND = "MODULE_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class IndicatorInfo(BaseModel):
    """A labelled indicator light on the device."""
    label: str
    lit: bool

    model_config = {"from_attributes": True}


class GlobalsInfo(BaseModel):
    """Device attributes shared by every module."""
    serial: str
    last_digit_odd: bool
    has_vowel: bool
    batteries: int = Field(ge=0)
    indicators: list[IndicatorInfo] = Field(default_factory=list)
    ports: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ModuleInfo(BaseModel):
    """Public view of one module."""
    module_id: str
    module_type: str = Field(description="wires, button, symbols, maze, ...")
    solved: bool = False
    data: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Request Models
# =============================================================================

class CreateMissionRequest(BaseModel):
    """Request to create a new mission."""
    mode: str = Field("quick", description="quick or full")
    difficulty: str = Field("novice", description="novice, pro or expert")
    seed: Optional[str] = Field(None, description="Seed for a reproducible mission")
    auto_start: bool = Field(False, description="Start the countdown immediately")


class ModuleActionRequest(BaseModel):
    """
    A player action on one module.

    Only the fields the action type needs are read. The countdown value
    for timer-dependent actions is supplied by the server.
    """
    action: str = Field(..., description="cut_wire, press, hold, release, move, ...")
    index: Optional[int] = Field(None, ge=0, description="Wire, word or button index")
    symbol_id: Optional[int] = Field(None, ge=0)
    direction: Optional[str] = Field(None, description="up, down, left, right")
    frequency: Optional[str] = None
    column: Optional[int] = Field(None, ge=0)
    letter: Optional[str] = Field(None, min_length=1, max_length=1)
    cut: Optional[bool] = None
    charge: Optional[float] = None
    position: Optional[int] = Field(None, ge=0)
    color: Optional[int] = Field(None, ge=0)


class ResetRequest(BaseModel):
    """Request to restart a mission with the same mode and difficulty."""
    seed: Optional[str] = Field(None, description="New seed; random when omitted")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class MissionResponse(BaseModel):
    """Complete public mission state."""
    mission_id: str
    seed: str
    mode: str
    difficulty: str
    status: MissionStatus
    timer_seconds: int
    strikes: int
    max_strikes: int
    globals: GlobalsInfo
    modules: list[ModuleInfo] = Field(default_factory=list)
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """What the session did with one action."""
    mission_id: str
    accepted: bool
    valid: bool = False
    strike: bool = False
    solved: bool = False
    status: MissionStatus
    module_id: Optional[str] = None
    reason: Optional[str] = None
    mission: Optional[MissionResponse] = None
    api_version: str = "v1"


class MissionListResponse(BaseModel):
    """Response listing missions."""
    missions: list[str]
    count: int


class EndMissionResponse(BaseModel):
    """Response after ending a mission."""
    success: bool
    mission_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
