"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Creates a mission (mode, difficulty, optional seed)
2. Starts the countdown
3. Sends player actions per module
4. Polls mission state until won or exploded

All state is in-memory and mission-scoped.
"""

from .schemas import (
    # Requests
    CreateMissionRequest,
    ModuleActionRequest,
    ResetRequest,
    # Responses
    ActionResponse,
    EndMissionResponse,
    ErrorResponse,
    HealthResponse,
    MissionListResponse,
    MissionResponse,
    # Shared
    GlobalsInfo,
    IndicatorInfo,
    ModuleInfo,
    # Enums
    ErrorCode,
    MissionStatus,
)
from .service import APIService, build_action
from .app import create_app

__all__ = [
    # Requests
    "CreateMissionRequest",
    "ModuleActionRequest",
    "ResetRequest",
    # Responses
    "ActionResponse",
    "EndMissionResponse",
    "ErrorResponse",
    "HealthResponse",
    "MissionListResponse",
    "MissionResponse",
    # Shared
    "GlobalsInfo",
    "IndicatorInfo",
    "ModuleInfo",
    # Enums
    "ErrorCode",
    "MissionStatus",
    # Service
    "APIService",
    "build_action",
    "create_app",
]
