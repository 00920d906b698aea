"""Tests for bmad_viewer.lib.result module."""

from bmad_viewer.lib.result import (
    Err,
    Ok,
    ParseError,
    create_result,
    error_result,
    success_result,
)


class TestCreateResult:
    """Test create_result function."""

    def test_defaults_to_empty_ok(self):
        result = create_result()
        assert isinstance(result, Ok)
        assert result.data is None
        assert result.errors == []
        assert result.warnings == []
        assert result.ok is True

    def test_returns_err_when_errors_present(self):
        result = create_result({"a": 1}, [ValueError("bad")], [])
        assert isinstance(result, Err)
        assert result.ok is False
        assert result.data == {"a": 1}

    def test_wraps_single_values_in_lists(self):
        result = create_result(None, ValueError("bad"), "careful")
        assert len(result.errors) == 1
        assert result.warnings == ["careful"]

    def test_normalizes_string_errors(self):
        result = create_result(None, ["something broke"])
        assert isinstance(result.errors[0], ParseError)
        assert result.errors[0].message == "something broke"


class TestSuccessResult:
    """Test success_result function."""

    def test_keeps_data_alongside_warnings(self):
        result = success_result([1, 2], ["minor issue"])
        assert result.ok
        assert result.data == [1, 2]
        assert result.warnings == ["minor issue"]


class TestErrorResult:
    """Test error_result function."""

    def test_has_no_data(self):
        result = error_result(ValueError("nope"), ["context"])
        assert result.data is None
        assert str(result.errors[0]) == "nope"
        assert result.warnings == ["context"]

    def test_accepts_string_error(self):
        result = error_result("file missing")
        assert isinstance(result.errors[0], ParseError)
        assert str(result.errors[0]) == "file missing"
