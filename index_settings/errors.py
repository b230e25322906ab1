"""Error taxonomy for settings encoding, decoding and dispatch."""

from typing import Any


class IndexSettingsError(Exception):
    """Base class for every error raised by this package."""


class CodecError(IndexSettingsError):
    """A value could not be converted between its typed and wire forms."""

    direction = "convert"

    def __init__(self, target: str, errors: list[dict[str, Any]], cause: Exception | None = None):
        self.target = target
        self.errors = errors
        self.cause = cause
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        super().__init__(f"Cannot {self.direction} {target}: {location}: {first.get('msg', 'invalid value')}")


class DecodeError(CodecError):
    """Raised when a wire value cannot be converted to its target type."""

    direction = "decode"


class EncodeError(CodecError):
    """Raised when a caller-supplied value does not fit the group it is sent to."""

    direction = "encode"


class MissingDefaultFallback(IndexSettingsError, TypeError):
    """
    Raised when a tri-state field is declared without its NotSet default or its omit gate.
    A wiring defect in the model, detected when the class is defined.
    """

    def __init__(self, model: str, field: str, reason: str):
        self.model = model
        self.field = field
        super().__init__(f"{model}.{field}: {reason}")


class ServiceError(IndexSettingsError):
    """Non-success response (or transport failure) from the search service."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
        code: str | None = None,
        error_type: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.code = code
        self.error_type = error_type
        self.cause = cause


class DeferredValidationError(ServiceError):
    """The service rejected the settings content. Never raised before dispatch."""


class UnknownSettingsGroup(IndexSettingsError, ValueError):
    """Raised for a settings group name that the service does not expose."""


class UnsupportedOperation(IndexSettingsError):
    """Raised when an operation is not defined for a settings group (e.g. patch on a list group)."""
