"""Errors raised by fixtures and the given/when phases."""

from dataclasses import dataclass, field


class FixtureError(Exception):
    """Error from a fixture service."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CommandError(FixtureError):
    """kubectl or the system CLI exited non-zero."""

    def __init__(self, command: list[str], returncode: int, stderr: str):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"`{' '.join(command)}` failed with exit code {returncode}: {stderr.strip()}"
        )


class CleanStateError(FixtureError):
    """The environment could not be reset to a clean baseline."""


@dataclass(frozen=True)
class ValidationIssue:
    """One invalid field of a test context."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class ValidationResult:
    """Every invalid field found in a test context."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def add(self, field_name: str, message: str) -> None:
        self.issues.append(ValidationIssue(field_name, message))

    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class InvalidContextError(FixtureError):
    """A test context was handed off with invalid fields."""

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(str(issue) for issue in result.issues)
        super().__init__(f"Invalid test context: {details}")
