from typing import Optional


class LintError(RuntimeError):
    """Base for failures that map onto an HTTP error body."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error)

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class InvalidInput(LintError):
    status_code = 400
    error = "Invalid request"


class LinterOutputUnparseable(LintError):
    error = "Failed to parse Vale output"


class LinterExecutionFailed(LintError):
    error = "Vale execution failed"


class LinterTimeout(LinterExecutionFailed):
    ...


class InternalError(LintError):
    ...
