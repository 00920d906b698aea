"""Tests for bmad_viewer.lib.validate module."""

import pytest

from bmad_viewer.lib.validate import ValidationError, check, validate


class TestValidate:
    """Test schema validation of parsed YAML."""

    def test_valid_config(self):
        validate({"project_name": "Demo", "user_name": "Ada"}, "config")

    def test_wrong_type_reports_location(self):
        with pytest.raises(ValidationError) as exc_info:
            validate({"project_name": 42}, "config")
        assert exc_info.value.schema_name == "config"
        assert exc_info.value.location == "project_name"

    def test_non_mapping_document(self):
        with pytest.raises(ValidationError) as exc_info:
            validate(["a", "b"], "sprint-status")
        assert exc_info.value.location == "(root)"

    def test_unknown_schema(self):
        with pytest.raises(ValidationError, match="no schema file"):
            validate({}, "does-not-exist")


class TestCheck:
    """Test check function."""

    def test_valid_returns_none(self):
        assert check({"development_status": {"epic-1": "done"}}, "sprint-status") is None

    def test_invalid_returns_message(self):
        message = check({"development_status": ["a"]}, "sprint-status")
        assert message.startswith("[sprint-status] ")
        assert message.endswith(" at development_status")
