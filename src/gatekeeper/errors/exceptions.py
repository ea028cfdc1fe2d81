"""Custom exception classes for merge gatekeeper."""


class GatekeeperError(Exception):
    """Base exception for merge gatekeeper."""

    def __init__(self, code: str, message: str, details=None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(GatekeeperError):
    """A required setting is missing or malformed."""

    def __init__(self, message: str, details=None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class InvalidResponseError(GatekeeperError):
    """GitHub returned a payload that violates the API contract."""


class InvalidCombinedStatusResponseError(InvalidResponseError):
    """A combined status entry is missing its context or state."""

    def __init__(self, context: str | None, state: str | None):
        super().__init__(
            "INVALID_COMBINED_STATUS_RESPONSE",
            f"github combined status response is invalid context: {context}, status: {state}",
            {"context": context, "state": state},
        )


class InvalidCheckRunResponseError(InvalidResponseError):
    """A check run is missing its name or status."""

    def __init__(self, name: str | None, status: str | None):
        super().__init__(
            "INVALID_CHECK_RUN_RESPONSE",
            f"github checkRun response is invalid name: {name}, status: {status}",
            {"name": name, "status": status},
        )


class ValidationTimeoutError(GatekeeperError):
    """Jobs did not all succeed before the deadline."""

    def __init__(self, timeout: float):
        super().__init__(
            "VALIDATION_TIMEOUT",
            f"validation timed out after {timeout:g}s",
            {"timeout": timeout},
        )
