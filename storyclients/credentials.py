"""
Credential lookup through an ordered chain of environment variables.

Deployments set the same credential under different names depending on the
build convention (for example ``GOOGLE_API_KEY_P`` on production hosts and
``GOOGLE_API_KEY`` everywhere else). The first non-empty name wins.
"""

import os
from collections.abc import Iterable, Mapping

from .shared.types import ResolvedCredential


def resolve_credential(
    env_vars: Iterable[str], environ: Mapping[str, str] | None = None
) -> ResolvedCredential | None:
    """
    Return the first non-empty credential in the chain.

    Args:
        env_vars: Environment variable names in priority order.
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        ResolvedCredential | None: The stripped value and the variable that
        supplied it, or None if every variable is unset, empty or whitespace.

    Raises:
        ValueError: If the chain is empty.
    """
    names = tuple(env_vars)
    if not names:
        raise ValueError("Credential chain must name at least one environment variable")

    source = os.environ if environ is None else environ
    for name in names:
        value = (source.get(name) or "").strip()
        if value:
            return ResolvedCredential(value=value, source=name)
    return None
