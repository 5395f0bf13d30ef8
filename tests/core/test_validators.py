from pydantic import BaseModel

from core.utils.validators import sanitize_validation_errors, validate_request


class Sample(BaseModel):
    width: float
    name: str = "x"


class TestValidateRequest:
    def test_success(self) -> None:
        result = validate_request(Sample, {"width": "12.5"})

        assert result.success
        assert result.value.width == 12.5
        assert result.errors == []

    def test_failure_never_raises(self) -> None:
        result = validate_request(Sample, {"width": "abc"})

        assert not result.success
        assert result.value is None
        assert result.errors == [{"field": "width", "message": "Must be a number"}]

    def test_missing_field(self) -> None:
        result = validate_request(Sample, {})

        assert result.errors == [{"field": "width", "message": "This field is required"}]


def test_sanitize_strips_prefix_and_defaults_location() -> None:
    errors = [{"loc": (), "msg": "Value error, something odd", "input": "secret"}]

    assert sanitize_validation_errors(errors) == [{"field": "body", "message": "something odd"}]
