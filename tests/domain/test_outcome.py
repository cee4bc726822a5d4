"""
Tests for the Ok/Err outcome type.
"""

import pytest

from buildlens.models.variant import BuildVariant
from buildlens.shared.domain.exceptions import ModelFetchError, ModelNotFound
from buildlens.shared.domain.outcome import Err, Ok


class TestOk:
    """Test the success case"""

    def test_ok_carries_value_and_note(self):
        outcome = Ok(42, note="answer")

        assert outcome.is_ok is True
        assert outcome.value == 42
        assert outcome.note == "answer"

    def test_map_calls_success_branch(self):
        outcome = Ok("debug")

        result = outcome.map(lambda ok: ok.value.upper(), lambda err: "failed")

        assert result == "DEBUG"

    def test_to_json_serializes_domain_values(self):
        outcome = Ok(BuildVariant(name="proDebug", display_name="Pro Debug", is_default=True))

        assert outcome.to_json() == {
            "status": "ok",
            "value": {"name": "proDebug", "displayName": "Pro Debug", "isDefault": True},
            "note": None,
        }


class TestErr:
    """Test the failure case"""

    def test_err_never_raises_its_cause(self):
        cause = ModelFetchError("boom")
        outcome = Err(cause=cause, note="fetch failed")

        assert outcome.is_ok is False
        assert outcome.cause is cause

    def test_forward_preserves_cause_and_note(self):
        cause = ModelFetchError("boom")
        original = Err(cause=cause, note="There was an error while fetching BasicProjectModel model from: :app")

        forwarded = original.forward()

        assert isinstance(forwarded, Err)
        assert forwarded is not original
        assert forwarded.cause is cause
        assert forwarded.note == original.note

    @pytest.mark.parametrize("cause,expected", [
        (ModelNotFound("missing"), True),
        (ModelFetchError("broken"), False),
        (None, False),
    ])
    def test_is_not_found(self, cause, expected):
        assert Err(cause=cause).is_not_found is expected

    def test_map_calls_failure_branch(self):
        outcome = Err(note="nope")

        result = outcome.map(lambda ok: "resolved", lambda err: err.note)

        assert result == "nope"

    def test_to_json_renders_cause_as_text(self):
        outcome = Err(cause=ModelNotFound("No BasicProjectModel for :lib"), note="There is no model")

        assert outcome.to_json() == {
            "status": "error",
            "cause": "ModelNotFound: No BasicProjectModel for :lib",
            "note": "There is no model",
        }
