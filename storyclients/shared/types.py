"""Shared type definitions for StoryClients."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error codes carried by StoryClients exceptions."""

    CLIENT_UNAVAILABLE = "CLIENT_UNAVAILABLE"
    CONSTRUCTION_FAILED = "CONSTRUCTION_FAILED"
    UNKNOWN_CLIENT = "UNKNOWN_CLIENT"
    CONFIG_ERROR = "CONFIG_ERROR"


class ProviderState(Enum):
    """Lifecycle state of a lazy client provider."""

    IDLE = "idle"
    MISSING = "missing"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ResolvedCredential:
    """A credential value and the environment variable it came from."""

    value: str
    source: str

    def __repr__(self) -> str:
        # Never echo the secret itself
        return f"ResolvedCredential(source={self.source!r})"


@dataclass
class ClientStatus:
    """Availability report for a registered client."""

    name: str
    state: ProviderState
    configured: bool
    source: str | None
    env_vars: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "state": self.state.value,
            "configured": self.configured,
            "source": self.source,
            "env_vars": list(self.env_vars),
        }
