"""
Tests for API layer.

Tests:
- API service methods
- Action request translation
- Mission lifecycle via API
- Error handling
- HTTP routes through the FastAPI test client
"""

import pytest

from ..api.schemas import (
    CreateMissionRequest,
    ErrorCode,
    ModuleActionRequest,
    MissionStatus,
    ResetRequest,
)
from ..api.service import APIService, build_action
from ..engine_core.action import ActionType, Direction
from ..session import SessionManager


@pytest.fixture
def service():
    """API service without a background ticker."""
    service = APIService(session_manager=SessionManager(auto_tick=False))
    yield service
    service.session_manager.shutdown()


class TestBuildAction:
    """Tests for request -> ModuleAction translation."""

    def test_cut_wire(self):
        action = build_action(ModuleActionRequest(action="cut_wire", index=2))
        assert action.action_type == ActionType.CUT_WIRE
        assert action.payload.index == 2

    def test_direction_parsed(self):
        action = build_action(ModuleActionRequest(action="move", direction="UP"))
        assert action.payload.direction == Direction.UP

    def test_release_never_carries_client_timer(self):
        action = build_action(ModuleActionRequest(action="release"))
        assert action.needs_timer

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            build_action(ModuleActionRequest(action="explode"))

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            build_action(ModuleActionRequest(action="move", direction="sideways"))


class TestAPIService:
    """Tests for APIService."""

    def test_create_mission(self, service):
        response = service.create_mission(CreateMissionRequest(seed="ABC123"))

        assert response.mission_id
        assert response.seed == "ABC123"
        assert response.status == MissionStatus.INTRO
        assert response.timer_seconds == 300
        assert len(response.modules) == 3

    def test_create_is_reproducible(self, service):
        a = service.create_mission(CreateMissionRequest(seed="ABC123"))
        b = service.create_mission(CreateMissionRequest(seed="ABC123"))
        assert a.globals == b.globals
        assert a.modules == b.modules
        assert a.mission_id != b.mission_id

    def test_create_hides_solutions(self, service):
        response = service.create_mission(CreateMissionRequest(mode="full", difficulty="expert", seed="HIDE02"))
        for module in response.modules:
            for hidden in ("correct_wire", "order", "target_word", "correct_button", "walls"):
                assert hidden not in module.data

    def test_create_bad_difficulty(self, service):
        response = service.create_mission(CreateMissionRequest(difficulty="insane"))
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_create_empty_seed(self, service):
        response = service.create_mission(CreateMissionRequest(seed="   "))
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_auto_start(self, service):
        response = service.create_mission(CreateMissionRequest(seed="AUTO01", auto_start=True))
        assert response.status == MissionStatus.ACTIVE

    def test_get_nonexistent_mission(self, service):
        response = service.get_mission("nonexistent-id")
        assert hasattr(response, "error")
        assert response.error_code == ErrorCode.MISSION_NOT_FOUND

    def test_start_and_tick(self, service):
        mission = service.create_mission(CreateMissionRequest(seed="TICK01"))
        started = service.start_mission(mission.mission_id)
        assert started.accepted
        assert started.status == MissionStatus.ACTIVE

        ticked = service.tick_mission(mission.mission_id)
        assert ticked.mission.timer_seconds == 299

    def test_act_before_start_not_accepted(self, service):
        mission = service.create_mission(CreateMissionRequest(seed="EARLY1"))
        module_id = mission.modules[0].module_id
        response = service.act(mission.mission_id, module_id, ModuleActionRequest(action="press"))
        assert not response.accepted
        assert response.status == MissionStatus.INTRO

    def test_act_unknown_module(self, service):
        mission = service.create_mission(CreateMissionRequest(seed="MOD001"))
        response = service.act(mission.mission_id, "nope_7", ModuleActionRequest(action="press"))
        assert response.error_code == ErrorCode.MODULE_NOT_FOUND

    def test_act_unknown_action(self, service):
        mission = service.create_mission(CreateMissionRequest(seed="ACT001"))
        module_id = mission.modules[0].module_id
        response = service.act(mission.mission_id, module_id, ModuleActionRequest(action="explode"))
        assert response.error_code == ErrorCode.INVALID_ACTION

    def test_act_strike_reported(self, service):
        mission = service.create_mission(CreateMissionRequest(seed="STRIKE"))
        service.start_mission(mission.mission_id)

        session = service.session_manager.get_mission(mission.mission_id).session
        module = session.state.modules[0]
        wrong = _wrong_action_for(module)
        response = service.act(mission.mission_id, module.id, wrong)

        assert response.accepted
        assert response.strike
        assert response.mission.strikes == 1

    def test_reset(self, service):
        mission = service.create_mission(CreateMissionRequest(mode="full", difficulty="pro", seed="OLD123"))
        service.start_mission(mission.mission_id)

        response = service.reset_mission(mission.mission_id, ResetRequest(seed="NEW123"))
        assert response.mission_id == mission.mission_id
        assert response.seed == "NEW123"
        assert response.mode == "full"
        assert response.difficulty == "pro"
        assert response.status == MissionStatus.INTRO

    def test_end_mission(self, service):
        mission = service.create_mission(CreateMissionRequest())
        assert service.end_mission(mission.mission_id)
        assert service.get_mission(mission.mission_id).error_code == ErrorCode.MISSION_NOT_FOUND
        assert mission.mission_id not in service.list_missions()


def _wrong_action_for(module):
    """A well-formed action that the module's rules reject."""
    from ..config import ModuleType

    data = module.data
    if module.type == ModuleType.WIRES:
        index = (data.correct_wire + 1) % len(data.wires)
        return ModuleActionRequest(action="cut_wire", index=index)
    if module.type == ModuleType.BUTTON:
        # Tap when hold is needed, hold when tap is needed
        return ModuleActionRequest(action="press" if data.should_hold else "hold")
    if module.type == ModuleType.SYMBOLS:
        wrong = next(s for s in data.symbols if s != data.order[0])
        return ModuleActionRequest(action="press_symbol", symbol_id=wrong)
    raise AssertionError(f"first module is always a baseline type, got {module.type}")


class TestHTTP:
    """Route tests through the FastAPI test client."""

    @pytest.fixture
    def client(self, service):
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        return TestClient(create_app(service))

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_and_get(self, client):
        created = client.post("/api/v1/missions", json={"seed": "HTTP01"})
        assert created.status_code == 200
        mission_id = created.json()["mission_id"]

        fetched = client.get(f"/api/v1/missions/{mission_id}")
        assert fetched.status_code == 200
        assert fetched.json()["seed"] == "HTTP01"

    def test_missing_mission_404(self, client):
        response = client.get("/api/v1/missions/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "MISSION_NOT_FOUND"

    def test_bad_mode_400(self, client):
        response = client.post("/api/v1/missions", json={"mode": "marathon"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_action_flow(self, client):
        mission_id = client.post("/api/v1/missions", json={"seed": "HTTP02"}).json()["mission_id"]
        assert client.post(f"/api/v1/missions/{mission_id}/start").json()["status"] == "active"

        module_id = client.get(f"/api/v1/missions/{mission_id}").json()["modules"][0]["module_id"]
        response = client.post(
            f"/api/v1/missions/{mission_id}/modules/{module_id}/actions",
            json={"action": "select_frequency", "frequency": "0.000"},
        )
        assert response.status_code == 200
        assert response.json()["accepted"] is True

    def test_list_and_delete(self, client):
        mission_id = client.post("/api/v1/missions", json={}).json()["mission_id"]
        listed = client.get("/api/v1/missions").json()
        assert mission_id in listed["missions"]

        deleted = client.delete(f"/api/v1/missions/{mission_id}").json()
        assert deleted == {"success": True, "mission_id": mission_id}

    def test_reset_without_body(self, client):
        mission_id = client.post("/api/v1/missions", json={"seed": "HTTP03"}).json()["mission_id"]
        response = client.post(f"/api/v1/missions/{mission_id}/reset")
        assert response.status_code == 200
        assert response.json()["status"] == "intro"

    def test_handlers_run_in_threadpool(self, service):
        import inspect
        from ..api.app import create_app

        app = create_app(service)
        endpoints = [route.endpoint for route in app.routes if route.path.startswith("/api/v1")]
        assert endpoints
        assert not any(inspect.iscoroutinefunction(endpoint) for endpoint in endpoints)

    def test_docs_disabled_in_production(self, service, monkeypatch):
        from fastapi.testclient import TestClient
        from .. import config
        from ..api.app import create_app

        monkeypatch.setattr(config, "DEFUSE_ENV", "production")
        client = TestClient(create_app(service))
        assert client.get("/api/docs").status_code == 404
        assert client.get("/").json()["docs"] is None

    def test_docs_served_in_development(self, client):
        assert client.get("/api/docs").status_code == 200
