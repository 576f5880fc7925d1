"""
Custom Exceptions.

Closed set of CLI error kinds. Every command propagates the first one it
hits; the command runner prints it to stderr and exits with status 1.
"""

from dataclasses import dataclass


class CliError(Exception):
    """Base exception for all CLI errors."""

    prefix = "Error"

    def __init__(self, message: str, code: str = "CLI_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class TransportError(CliError):
    """Raised when the HTTP call itself fails (DNS, refused, TLS, timeout)."""

    prefix = "HTTP error"

    def __init__(self, message: str = "Request could not be sent") -> None:
        super().__init__(message, code="HTTP_TRANSPORT_ERROR")


@dataclass(frozen=True)
class FieldError:
    """One field-level entry of an API validation failure."""

    field: str
    error: str


class ApiError(CliError):
    """Raised when the server answers with status >= 400."""

    prefix = "API error"

    def __init__(
        self,
        status: int,
        message: str = "Request failed",
        error: str | None = None,
        validation_errors: list[FieldError] | None = None,
    ) -> None:
        self.status = status
        self.error = error
        self.validation_errors = list(validation_errors or [])
        super().__init__(message, code="API_ERROR")

    def __str__(self) -> str:
        text = f"{self.prefix} ({self.status}): {self.message}"
        if self.error:
            text += f" [{self.error}]"
        for entry in self.validation_errors:
            text += f"\n  - {entry.field}: {entry.error}"
        return text


class ConfigError(CliError):
    """Raised when a required local setting is missing."""

    prefix = "Config error"

    def __init__(self, message: str = "Missing configuration") -> None:
        super().__init__(message, code="CONFIG_MISSING")


class InvalidInputError(CliError):
    """Raised when CLI-supplied data is malformed."""

    prefix = "Invalid input"

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message, code="INVALID_INPUT")


class FileAccessError(CliError):
    """Raised when a local filesystem operation fails."""

    prefix = "IO error"

    def __init__(self, message: str = "File access failed") -> None:
        super().__init__(message, code="IO_ERROR")


class JsonError(CliError):
    """Raised when JSON (de)serialization fails outside of an API error."""

    prefix = "JSON error"

    def __init__(self, message: str = "Malformed JSON") -> None:
        super().__init__(message, code="JSON_ERROR")
