"""Lifecycle of the backing instance behind a provider.

The handle moves through three states:

    UNINITIALIZED --bootstrap()--> READY --close()--> CLOSED

Operations that need the handle call ``require()`` synchronously at
call time, so misuse surfaces before any stream is returned.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from .core.errors import ProviderNotReadyError

logger = logging.getLogger(__name__)

InstanceT = TypeVar("InstanceT")

Acquire = Callable[[], Union[InstanceT, Awaitable[InstanceT]]]


class LifecycleState(Enum):
    """State of the backing instance handle."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class InstanceLifecycle(Generic[InstanceT]):
    """Owns the optional handle to a backing instance.

    Args:
        acquire: Callable returning the instance, or an awaitable of it
        auto_destroy: Tear the instance down on ``close()``. ``None`` and
                      ``True`` both mean yes; only ``False`` disables it.
        backing: Name of the backing system used in error messages
    """

    def __init__(
        self,
        acquire: Acquire[InstanceT],
        auto_destroy: bool | None = None,
        backing: str = "Backing",
    ):
        self._acquire = acquire
        self._auto_destroy = auto_destroy
        self._backing = backing
        self._instance: InstanceT | None = None
        self._state = LifecycleState.UNINITIALIZED

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def instance(self) -> InstanceT | None:
        """The handle, or None before a successful bootstrap."""
        return self._instance

    @property
    def should_auto_destroy(self) -> bool:
        # Same as `is not False`, spelled out for non-bool values
        return self._auto_destroy is None or self._auto_destroy is True

    async def bootstrap(self) -> InstanceT:
        """Acquire the backing instance and store its handle.

        Calling it again re-acquires and replaces the handle.

        Returns:
            The acquired instance

        Raises:
            Exception: Whatever the acquisition callable raises. The
                       previous state and handle are left untouched.
        """
        instance = await _resolve(self._acquire())
        self._instance = instance
        self._state = LifecycleState.READY
        logger.debug("%s instance acquired", self._backing)
        return instance

    async def close(self) -> None:
        """Tear down the backing instance when auto-destroy is enabled.

        Safe to call without a prior bootstrap. The handle is kept in
        memory after teardown but must not be used again.

        Raises:
            Exception: Whatever the instance's destroy operation raises
        """
        self._state = LifecycleState.CLOSED

        if not self.should_auto_destroy:
            logger.debug("Auto-destroy disabled, leaving %s instance running", self._backing)
            return

        if self._instance is None:
            return

        destroy = getattr(self._instance, "destroy", None)
        if destroy is None:
            logger.debug("%s instance has no destroy operation", self._backing)
            return

        await _resolve(destroy())
        logger.debug("%s instance destroyed", self._backing)

    def require(self, operation: str) -> InstanceT:
        """Return the handle or fail fast.

        Args:
            operation: What the caller is trying to do, e.g. 'stream links'

        Raises:
            ProviderNotReadyError: If no handle is present
        """
        if self._instance is None:
            raise ProviderNotReadyError(operation, self._backing)

        if self._state is LifecycleState.CLOSED:
            logger.warning(
                "Attempting to %s after close; the %s instance may be destroyed",
                operation,
                self._backing,
            )

        return self._instance
