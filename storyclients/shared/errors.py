"""StoryClients error handling."""

from typing import Any

from .types import ErrorCode


class StoryClientsError(Exception):
    """
    Base exception for StoryClients errors.

    ``code`` is the ErrorCode value, ``details`` holds structured context that
    is safe to log (never credential values), and ``recovery_hint`` tells the
    operator what to change.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def describe(self) -> str:
        """One-line summary with the recovery hint, for logs and terminal output."""
        if self.recovery_hint:
            return f"{self.message} ({self.recovery_hint})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "recoverable": self.recoverable,
                "recovery_hint": self.recovery_hint,
            }
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ClientUnavailableError(StoryClientsError):
    """Client has no credential configured."""

    def __init__(self, client: str, env_vars: tuple[str, ...] | list[str]) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.CLIENT_UNAVAILABLE,
            message=f"Client '{client}' is not available: credential missing",
            details={"client": client, "env_vars": list(env_vars)},
            recoverable=False,
            recovery_hint=f"Set one of: {', '.join(env_vars)} and restart the process",
        )


class ClientConstructionError(StoryClientsError):
    """SDK client could not be constructed."""

    def __init__(self, client: str, reason: str, details: dict[str, Any] | None = None) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.CONSTRUCTION_FAILED,
            message=f"Failed to construct client '{client}': {reason}",
            details={"client": client, **(details or {})},
            recoverable=True,
            recovery_hint="Check the credential format and that the SDK package is installed",
        )


class UnknownClientError(StoryClientsError):
    """Requested client is not registered."""

    def __init__(self, client: str, supported: list[str]) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.UNKNOWN_CLIENT,
            message=f"Unknown client '{client}'. Supported clients: {', '.join(supported)}",
            details={"client": client, "supported": supported},
            recoverable=False,
            recovery_hint="Run 'storyclients status' to list supported clients",
        )


class ConfigError(StoryClientsError):
    """Configuration error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=f"Configuration error: {message}",
            details=details,
            recoverable=True,
            recovery_hint="Check configuration file syntax and values",
        )
