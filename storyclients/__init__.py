"""
StoryClients: lazily constructed API clients for story generation.

Each external service client (Gemini, OpenAI, Anthropic) is built at most once
per process, on first use, from a credential found through an ordered chain of
environment variables. A missing credential degrades to a None handle instead
of an exception.

Usage:
    >>> from storyclients import acquire
    >>> client = await acquire("gemini")
    >>> if client is None:
    ...     ...  # feature unavailable

CLI Usage:
    $ storyclients status
    $ storyclients check gemini
"""

from .clients import acquire, get_provider, list_clients, reset_providers
from .credentials import resolve_credential
from .provider import LazyClientProvider, SharedClient
from .shared import (
    ClientConstructionError,
    ClientStatus,
    ClientUnavailableError,
    ConfigError,
    ProviderState,
    ResolvedCredential,
    StoryClientsError,
    UnknownClientError,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConstructionError",
    "ClientStatus",
    "ClientUnavailableError",
    "ConfigError",
    "LazyClientProvider",
    "ProviderState",
    "ResolvedCredential",
    "SharedClient",
    "StoryClientsError",
    "UnknownClientError",
    "acquire",
    "get_provider",
    "list_clients",
    "reset_providers",
    "resolve_credential",
]
