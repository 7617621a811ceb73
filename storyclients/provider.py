"""
Lazy, memoized construction of external service clients.

A LazyClientProvider hands out a single shared awaitable per process. It is
stored before the first suspension point, so every caller that arrives while
construction is in flight awaits the same object instead of starting a second
construction. Each await is shielded: a caller that is cancelled or times out
stops waiting without cancelling the construction other callers depend on.
"""

import asyncio
import inspect
import logging
import re
from collections.abc import Callable, Generator, Iterable, Mapping
from typing import Any

from .credentials import resolve_credential
from .shared.errors import ClientConstructionError, ClientUnavailableError, StoryClientsError
from .shared.types import ProviderState, ResolvedCredential

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


class SharedClient:
    """
    Awaitable handed to every caller of ``LazyClientProvider.acquire()``.

    Awaiting it yields the client handle, None when no credential is
    configured, or raises the construction error.
    """

    __slots__ = ("_future",)

    def __init__(self, future: asyncio.Future) -> None:
        self._future = future

    def __await__(self) -> Generator[Any, None, Any]:
        return asyncio.shield(self._future).__await__()

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> Any:
        """Return the handle once construction has finished (see ``asyncio.Future.result``)."""
        return self._future.result()

    def __repr__(self) -> str:
        return f"SharedClient({self._future!r})"


class LazyClientProvider:
    """
    Builds a client handle on first use and shares it with every caller.

    A missing credential is not an error: it resolves to None, is logged once,
    and stays None for the life of the provider. Construction failures are
    delivered through the shared awaitable. They are memoized unless
    ``retry_failed_construction`` is set, in which case the next ``acquire()``
    tries again.
    """

    def __init__(
        self,
        name: str,
        factory: ClientFactory,
        env_vars: Iterable[str],
        *,
        environ: Mapping[str, str] | None = None,
        retry_failed_construction: bool = False,
        credential_pattern: str | None = None,
    ) -> None:
        """
        Args:
            name: Client name used in logs and errors.
            factory: Called with the credential; returns the handle or an awaitable of it.
            env_vars: Environment variable names, highest priority first.
            environ: Mapping to read credentials from. Defaults to ``os.environ``.
            retry_failed_construction: Clear the memoized result when construction fails.
            credential_pattern: Regex the whole credential must match before the factory runs.
        """
        self.name = name
        self.factory = factory
        self.env_vars = tuple(env_vars)
        if not self.env_vars:
            raise ValueError(f"Client '{name}' needs at least one credential environment variable")
        self.retry_failed_construction = retry_failed_construction
        self._environ = environ
        self._credential_pattern = re.compile(credential_pattern) if credential_pattern else None
        self._future: asyncio.Future | None = None
        self._shared: SharedClient | None = None
        self._source: str | None = None
        self._missing = False

    def acquire(self) -> SharedClient:
        """
        Return the shared awaitable for this client, creating it on first call.

        Must be called from a running event loop. Awaiting the result gives
        the client handle, or None when no credential is configured.
        """
        if self._shared is not None:
            return self._shared

        loop = asyncio.get_running_loop()
        credential = resolve_credential(self.env_vars, self._environ)

        if credential is None:
            logger.error("❌ %s credential missing: set one of %s", self.name, ", ".join(self.env_vars))
            future = loop.create_future()
            future.set_result(None)
            self._missing = True
            return self._memoize(future)

        self._source = credential.source
        task = loop.create_task(self._construct(credential), name=f"storyclients:{self.name}")
        task.add_done_callback(self._on_constructed)
        # Stored before returning so interleaved callers share this task
        return self._memoize(task)

    async def require(self) -> Any:
        """
        Await the client handle, raising instead of returning None.

        Raises:
            ClientUnavailableError: If no credential is configured.
            ClientConstructionError: If the client could not be built.
        """
        handle = await self.acquire()
        if handle is None:
            raise ClientUnavailableError(self.name, self.env_vars)
        return handle

    def configured(self) -> bool:
        """Check whether a credential is currently available, without acquiring."""
        return resolve_credential(self.env_vars, self._environ) is not None

    def reset(self) -> None:
        """Forget the memoized result. A construction still in flight is cancelled."""
        future = self._future
        self._clear()
        if future is not None and not future.done():
            future.cancel()

    @property
    def credential_source(self) -> str | None:
        """Environment variable that supplied the credential, once acquired."""
        return self._source

    @property
    def state(self) -> ProviderState:
        future = self._future
        if future is None:
            return ProviderState.IDLE
        if self._missing:
            return ProviderState.MISSING
        if not future.done():
            return ProviderState.PENDING
        if future.cancelled() or future.exception() is not None:
            return ProviderState.FAILED
        return ProviderState.READY

    def _memoize(self, future: asyncio.Future) -> SharedClient:
        self._future = future
        self._shared = SharedClient(future)
        return self._shared

    def _clear(self) -> None:
        self._future = None
        self._shared = None
        self._source = None
        self._missing = False

    async def _construct(self, credential: ResolvedCredential) -> Any:
        if self._credential_pattern is not None and not self._credential_pattern.fullmatch(credential.value):
            raise ClientConstructionError(
                self.name,
                f"credential from {credential.source} has an invalid format",
                {"source": credential.source},
            )

        logger.debug("Constructing %s client with credential from %s", self.name, credential.source)
        try:
            handle = self.factory(credential.value)
            if inspect.isawaitable(handle):
                handle = await handle
        except ClientConstructionError:
            raise
        except Exception as e:
            raise ClientConstructionError(
                self.name, str(e) or type(e).__name__, {"source": credential.source}
            ) from e

        logger.info("✅ %s client ready (credential from %s)", self.name, credential.source)
        return handle

    def _on_constructed(self, task: asyncio.Task) -> None:
        if task.cancelled():
            # reset() already cleared the slot; anything else must not stay memoized
            if self._future is task:
                logger.warning("%s client construction was cancelled; next acquire() retries", self.name)
                self._clear()
            return
        error = task.exception()
        if error is None:
            return
        logger.error("❌ %s", error.describe() if isinstance(error, StoryClientsError) else error)
        if self.retry_failed_construction and self._future is task:
            self._clear()

    def __repr__(self) -> str:
        return f"LazyClientProvider(name={self.name!r}, state={self.state.value!r})"
