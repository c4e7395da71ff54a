"""
Tests for API Pydantic schemas.

Validates that:
- Request models apply defaults and constraints
- Response models serialize enums as values
- Error responses are properly structured
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_create_request_defaults(self):
        from defuse.api.schemas import CreateMissionRequest

        request = CreateMissionRequest()
        assert request.mode == "quick"
        assert request.difficulty == "novice"
        assert request.seed is None
        assert request.auto_start is False

    def test_action_request_letter_length(self):
        from defuse.api.schemas import ModuleActionRequest

        assert ModuleActionRequest(action="set_letter", column=0, letter="A").letter == "A"
        with pytest.raises(ValidationError):
            ModuleActionRequest(action="set_letter", column=0, letter="AB")

    def test_action_request_negative_index(self):
        from defuse.api.schemas import ModuleActionRequest

        with pytest.raises(ValidationError):
            ModuleActionRequest(action="cut_wire", index=-1)

    def test_action_request_requires_action(self):
        from defuse.api.schemas import ModuleActionRequest

        with pytest.raises(ValidationError):
            ModuleActionRequest(index=1)

    def test_mission_response_schema(self):
        from defuse.api.schemas import (
            GlobalsInfo,
            IndicatorInfo,
            MissionResponse,
            MissionStatus,
            ModuleInfo,
        )

        response = MissionResponse(
            mission_id="mission-123",
            seed="ABC123",
            mode="quick",
            difficulty="novice",
            status=MissionStatus.ACTIVE,
            timer_seconds=299,
            strikes=0,
            max_strikes=2,
            globals=GlobalsInfo(
                serial="ABC123",
                last_digit_odd=True,
                has_vowel=True,
                batteries=2,
                indicators=[IndicatorInfo(label="FRK", lit=True)],
                ports=["USB"],
            ),
            modules=[ModuleInfo(module_id="wires_0", module_type="wires", data={"wires": []})],
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "active"
        assert data["globals"]["indicators"][0] == {"label": "FRK", "lit": True}
        assert data["modules"][0]["solved"] is False
        assert data["api_version"] == "v1"

    def test_negative_batteries_rejected(self):
        from defuse.api.schemas import GlobalsInfo

        with pytest.raises(ValidationError):
            GlobalsInfo(serial="X", last_digit_odd=False, has_vowel=False, batteries=-1)

    def test_error_response_schema(self):
        from defuse.api.schemas import ErrorCode, ErrorResponse

        error = ErrorResponse(
            error="Mission not found: abc",
            error_code=ErrorCode.MISSION_NOT_FOUND,
            details={"mission_id": "abc"},
        )
        data = error.model_dump(mode="json")
        assert data["error_code"] == "MISSION_NOT_FOUND"
        assert data["details"]["mission_id"] == "abc"

    def test_error_codes_complete(self):
        from defuse.api.schemas import ErrorCode

        codes = {c.value for c in ErrorCode}
        assert codes == {"MISSION_NOT_FOUND", "MODULE_NOT_FOUND", "INVALID_ACTION", "VALIDATION_ERROR"}
