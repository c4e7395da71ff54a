"""
FastAPI Application - REST API for mission clients.

Endpoints:
    POST   /api/v1/missions                          Create mission
    GET    /api/v1/missions                          List missions
    GET    /api/v1/missions/{id}                     Get mission state
    DELETE /api/v1/missions/{id}                     End mission
    POST   /api/v1/missions/{id}/start               Start countdown
    POST   /api/v1/missions/{id}/tick                Advance countdown one second
    POST   /api/v1/missions/{id}/reset               Restart with same mode/difficulty
    POST   /api/v1/missions/{id}/modules/{module_id}/actions  Player action

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union

from .. import config


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import APIService
    from .schemas import (
        # Request models
        CreateMissionRequest,
        ModuleActionRequest,
        ResetRequest,
        # Response models
        ActionResponse,
        EndMissionResponse,
        ErrorResponse,
        HealthResponse,
        MissionListResponse,
        MissionResponse,
        # Enums
        ErrorCode,
    )

    # Interactive docs are a development aid only
    docs_enabled = config.DEFUSE_ENV != "production"

    app = FastAPI(
        title="Defuse Engine API",
        description="""
Bomb-defusal mission engine.

## Flow

1. `POST /missions` with a mode, difficulty and optional seed
2. `POST /missions/{id}/start` starts the countdown
3. `POST /missions/{id}/modules/{module_id}/actions` for each player input
4. Poll `GET /missions/{id}` for timer, strikes and status

## Error Codes

| Code | Description |
|------|-------------|
| `MISSION_NOT_FOUND` | Mission does not exist |
| `MODULE_NOT_FOUND` | Module is not part of the mission |
| `INVALID_ACTION` | Unknown action type or direction |
| `VALIDATION_ERROR` | Unknown mode/difficulty or bad seed |
        """,
        version=__version__,
        docs_url="/api/docs" if docs_enabled else None,
        redoc_url="/api/redoc" if docs_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    status_codes = {
        ErrorCode.MISSION_NOT_FOUND: 404,
        ErrorCode.MODULE_NOT_FOUND: 404,
        ErrorCode.INVALID_ACTION: 400,
        ErrorCode.VALIDATION_ERROR: 400,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Turn a service ErrorResponse into an HTTP response."""
        return JSONResponse(
            status_code=status_codes.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(result):
        if isinstance(result, ErrorResponse):
            return make_error_response(result)
        return result

    # =========================================================================
    # Mission Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/missions",
        response_model=MissionResponse,
        responses={400: {"model": ErrorResponse, "description": "Bad mode, difficulty or seed"}},
        tags=["Missions"],
        summary="Create a new mission",
    )
    def create_mission(request: CreateMissionRequest) -> Union[MissionResponse, JSONResponse]:
        """
        Create a new mission.

        The same seed, mode and difficulty always produce the same device.
        """
        return respond(api_service.create_mission(request))

    @app.get(
        "/api/v1/missions",
        response_model=MissionListResponse,
        tags=["Missions"],
        summary="List missions",
    )
    def list_missions(
        active_only: Annotated[bool, Query(description="Hide won/exploded missions")] = False,
    ) -> MissionListResponse:
        missions = api_service.list_missions(active_only)
        return MissionListResponse(missions=missions, count=len(missions))

    @app.get(
        "/api/v1/missions/{mission_id}",
        response_model=MissionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Missions"],
        summary="Get mission state",
    )
    def get_mission(mission_id: str) -> Union[MissionResponse, JSONResponse]:
        return respond(api_service.get_mission(mission_id))

    @app.delete(
        "/api/v1/missions/{mission_id}",
        response_model=EndMissionResponse,
        tags=["Missions"],
        summary="End a mission",
    )
    def end_mission(mission_id: str) -> EndMissionResponse:
        """End a mission, stop its ticker and release it."""
        success = api_service.end_mission(mission_id)
        return EndMissionResponse(success=success, mission_id=mission_id)

    # =========================================================================
    # Session Control Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/missions/{mission_id}/start",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Session"],
        summary="Start the countdown",
    )
    def start_mission(mission_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.start_mission(mission_id))

    @app.post(
        "/api/v1/missions/{mission_id}/tick",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Session"],
        summary="Advance the countdown by one second",
    )
    def tick_mission(mission_id: str) -> Union[ActionResponse, JSONResponse]:
        """For clients that drive time themselves (server ticker disabled)."""
        return respond(api_service.tick_mission(mission_id))

    @app.post(
        "/api/v1/missions/{mission_id}/reset",
        response_model=MissionResponse,
        responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
        tags=["Session"],
        summary="Restart with the same mode and difficulty",
    )
    def reset_mission(
        mission_id: str,
        request: Optional[ResetRequest] = None,
    ) -> Union[MissionResponse, JSONResponse]:
        return respond(api_service.reset_mission(mission_id, request or ResetRequest()))

    @app.post(
        "/api/v1/missions/{mission_id}/modules/{module_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action"},
            404: {"model": ErrorResponse, "description": "Mission or module not found"},
        },
        tags=["Session"],
        summary="Apply a player action to a module",
    )
    def module_action(
        mission_id: str,
        module_id: str,
        request: ModuleActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Apply a player action.

        Gameplay results (invalid input, strikes, solves) are reported in
        the response body, never as HTTP errors.
        """
        return respond(api_service.act(mission_id, module_id, request))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="defuse-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    def root():
        """Root endpoint with API info."""
        return {
            "name": "Defuse Engine API",
            "version": __version__,
            "docs": "/api/docs" if docs_enabled else None,
            "health": "/health",
        }

    return app
