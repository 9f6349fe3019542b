"""Tests for the error hierarchy and RFC 7807 rendering."""

from packages.core.errors import (
    AppError,
    ConfigurationError,
    RuleValidationError,
    ValidationError,
)


class TestProblemDetails:

    def test_app_error_renders_problem_detail(self):
        body = AppError("boom").to_problem_detail()
        assert body == {"type": "about:blank", "title": "Error", "detail": "boom"}

    def test_rule_validation_error_lists_errors(self):
        exc = RuleValidationError(
            "Rule 'Small Food' is invalid",
            errors=["conditions[0]: value 'abc' is not a number"],
        )
        body = exc.to_problem_detail()
        assert body["title"] == "Invalid Rule"
        assert body["errors"] == ["conditions[0]: value 'abc' is not a number"]
        assert str(exc) == "Rule 'Small Food' is invalid"

    def test_hierarchy(self):
        assert issubclass(RuleValidationError, ValidationError)
        assert issubclass(ValidationError, AppError)
        assert issubclass(ConfigurationError, AppError)
        assert ConfigurationError().to_problem_detail()["title"] == "Configuration Error"
