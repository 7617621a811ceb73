"""Shared types and errors for StoryClients."""

from .errors import (
    ClientConstructionError,
    ClientUnavailableError,
    ConfigError,
    StoryClientsError,
    UnknownClientError,
)
from .types import ClientStatus, ErrorCode, ProviderState, ResolvedCredential

__all__ = [
    "ClientConstructionError",
    "ClientStatus",
    "ClientUnavailableError",
    "ConfigError",
    "ErrorCode",
    "ProviderState",
    "ResolvedCredential",
    "StoryClientsError",
    "UnknownClientError",
]
