"""Error hierarchy.

Extraction never raises: unparseable input is signalled by ``None``.
Only the hard boundaries (rule validation, configuration) raise, and every
error can render itself as an RFC 7807 Problem Details body so that a
persistence or UI collaborator can surface it unchanged:

    {
        "type": "about:blank",
        "title": "Invalid Rule",
        "detail": "Rule 'Small Food' is invalid",
        "errors": ["conditions[0]: value 'abc' is not a number"]
    }
"""

from typing import List, Optional


class AppError(Exception):
    """Base application error."""

    title = "Error"

    def __init__(self, detail: str, error_type: str = "about:blank"):
        self.detail = detail
        self.error_type = error_type
        super().__init__(detail)

    def to_problem_detail(self) -> dict:
        """Build RFC 7807 Problem Details body."""
        return _build_problem_detail(
            title=self.title,
            detail=self.detail,
            error_type=self.error_type,
        )


class ValidationError(AppError):
    """Input validation failed."""

    title = "Validation Failed"

    def __init__(self, detail: str = "Validation failed"):
        super().__init__(detail=detail)


class RuleValidationError(ValidationError):
    """A transaction rule was rejected before it could be saved."""

    title = "Invalid Rule"

    def __init__(self, detail: str = "Rule is invalid", errors: Optional[List[str]] = None):
        super().__init__(detail=detail)
        self.errors = list(errors or [])

    def to_problem_detail(self) -> dict:
        body = super().to_problem_detail()
        body["errors"] = self.errors
        return body


class ConfigurationError(AppError):
    """Settings reference something that does not exist."""

    title = "Configuration Error"

    def __init__(self, detail: str = "Invalid configuration"):
        super().__init__(detail=detail)


def _build_problem_detail(
    title: str,
    detail: str,
    error_type: str = "about:blank",
) -> dict:
    """Build RFC 7807 Problem Details body."""
    return {
        "type": error_type,
        "title": title,
        "detail": detail,
    }
