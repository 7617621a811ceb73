"""
Registry of story-generation service clients.

This module provides:
1. One process-wide LazyClientProvider per supported service
2. acquire() shortcut returning the shared client awaitable
3. list_clients() availability report that never constructs a client

Supported clients and their credential chains (first non-empty wins):
- gemini: GOOGLE_API_KEY_P, GOOGLE_API_KEY, GEMINI_API_KEY
- openai: OPENAI_API_KEY
- anthropic: ANTHROPIC_API_KEY

The variable names and their order are a deployment contract.
"""

import logging
from dataclasses import dataclass
from typing import Any

from .config import Config
from .credentials import resolve_credential
from .provider import ClientFactory, LazyClientProvider, SharedClient
from .shared.errors import ClientConstructionError, ConfigError, UnknownClientError
from .shared.types import ClientStatus, ProviderState

logger = logging.getLogger(__name__)


def _gemini_client(api_key: str) -> Any:
    try:
        from google import genai
    except ImportError as e:
        raise ClientConstructionError("gemini", "google-genai package not installed") from e
    return genai.Client(api_key=api_key)


def _openai_client(api_key: str) -> Any:
    try:
        import openai
    except ImportError as e:
        raise ClientConstructionError("openai", "openai package not installed") from e
    return openai.AsyncOpenAI(api_key=api_key)


def _anthropic_client(api_key: str) -> Any:
    try:
        import anthropic
    except ImportError as e:
        raise ClientConstructionError("anthropic", "anthropic package not installed") from e
    return anthropic.AsyncAnthropic(api_key=api_key)


@dataclass(frozen=True)
class ClientSpec:
    """How to build one registered client."""

    factory: ClientFactory
    env_vars: tuple[str, ...]
    description: str


CLIENT_SPECS: dict[str, ClientSpec] = {
    "gemini": ClientSpec(
        _gemini_client,
        ("GOOGLE_API_KEY_P", "GOOGLE_API_KEY", "GEMINI_API_KEY"),
        "Google Gemini (story text and illustrations)",
    ),
    "openai": ClientSpec(_openai_client, ("OPENAI_API_KEY",), "OpenAI"),
    "anthropic": ClientSpec(_anthropic_client, ("ANTHROPIC_API_KEY",), "Anthropic Claude"),
}

_providers: dict[str, LazyClientProvider] = {}


def _retry_failed_construction() -> bool:
    """Read the retry setting, falling back to the default when the file is unusable."""
    config = Config()
    try:
        config.load_config()
    except ConfigError as e:
        logger.warning("⚠️  %s; using default client settings", e.message)
        return False
    return config.retry_failed_construction


def get_provider(name: str) -> LazyClientProvider:
    """
    Get the process-wide provider for a client, creating it on first lookup.

    Creating the provider does not read credentials or construct anything.

    Raises:
        UnknownClientError: If the client name is not registered.
    """
    key = name.lower()
    provider = _providers.get(key)
    if provider is not None:
        return provider

    spec = CLIENT_SPECS.get(key)
    if spec is None:
        raise UnknownClientError(name, list(CLIENT_SPECS))

    provider = LazyClientProvider(
        key,
        spec.factory,
        spec.env_vars,
        retry_failed_construction=_retry_failed_construction(),
    )
    _providers[key] = provider
    return provider


def acquire(name: str) -> SharedClient:
    """Return the shared awaitable for the named client (resolves to None if unconfigured)."""
    return get_provider(name).acquire()


def list_clients() -> list[ClientStatus]:
    """
    Report every registered client and whether it is configured.

    Returns:
        list[ClientStatus]: One entry per client, in registry order.
    """
    statuses = []
    for name, spec in CLIENT_SPECS.items():
        provider = _providers.get(name)
        credential = resolve_credential(spec.env_vars)
        source = provider.credential_source if provider else None
        statuses.append(
            ClientStatus(
                name=name,
                state=provider.state if provider else ProviderState.IDLE,
                configured=credential is not None,
                source=source or (credential.source if credential else None),
                env_vars=spec.env_vars,
            )
        )
    return statuses


def reset_providers() -> None:
    """Reset and forget all registry providers."""
    for provider in _providers.values():
        provider.reset()
    _providers.clear()
