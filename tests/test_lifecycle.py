"""Tests for the backing instance lifecycle."""

import logging
from unittest.mock import AsyncMock, Mock

import pytest

from cms_data_transfer.core.errors import ProviderNotReadyError
from cms_data_transfer.lifecycle import InstanceLifecycle, LifecycleState


def make_instance():
    instance = Mock()
    instance.destroy = AsyncMock()
    return instance


class TestBootstrap:
    """Tests for InstanceLifecycle.bootstrap()."""

    @pytest.mark.asyncio
    async def test_sync_acquire(self):
        """Test that a plain callable can provide the instance."""
        instance = make_instance()
        lifecycle = InstanceLifecycle(lambda: instance)

        assert lifecycle.state is LifecycleState.UNINITIALIZED
        assert lifecycle.instance is None

        await lifecycle.bootstrap()

        assert lifecycle.state is LifecycleState.READY
        assert lifecycle.instance is instance

    @pytest.mark.asyncio
    async def test_async_acquire(self):
        """Test that the acquisition callable may be a coroutine function."""
        instance = make_instance()

        async def acquire():
            return instance

        lifecycle = InstanceLifecycle(acquire)
        assert await lifecycle.bootstrap() is instance
        assert lifecycle.require("stream entities") is instance

    @pytest.mark.asyncio
    async def test_acquire_failure_propagates(self):
        """Test that acquisition errors reach the caller and leave no handle."""
        lifecycle = InstanceLifecycle(AsyncMock(side_effect=ConnectionError("db down")))

        with pytest.raises(ConnectionError, match="db down"):
            await lifecycle.bootstrap()

        assert lifecycle.state is LifecycleState.UNINITIALIZED
        with pytest.raises(ProviderNotReadyError):
            lifecycle.require("stream links")

    @pytest.mark.asyncio
    async def test_bootstrap_again_replaces_handle(self):
        """Test that a second bootstrap re-acquires the instance."""
        first, second = make_instance(), make_instance()
        lifecycle = InstanceLifecycle(Mock(side_effect=[first, second]))

        await lifecycle.bootstrap()
        await lifecycle.bootstrap()

        assert lifecycle.instance is second


class TestClose:
    """Tests for InstanceLifecycle.close()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("auto_destroy", [None, True])
    async def test_destroys_by_default(self, auto_destroy):
        """Test that unset or True auto_destroy tears the instance down once."""
        instance = make_instance()
        lifecycle = InstanceLifecycle(lambda: instance, auto_destroy=auto_destroy)

        await lifecycle.bootstrap()
        await lifecycle.close()

        instance.destroy.assert_awaited_once()
        assert lifecycle.state is LifecycleState.CLOSED

    @pytest.mark.asyncio
    async def test_auto_destroy_false_never_destroys(self):
        """Test that an explicit False keeps the instance alive."""
        instance = make_instance()
        lifecycle = InstanceLifecycle(lambda: instance, auto_destroy=False)

        await lifecycle.bootstrap()
        await lifecycle.close()

        instance.destroy.assert_not_called()
        assert lifecycle.state is LifecycleState.CLOSED

    @pytest.mark.asyncio
    async def test_close_without_bootstrap(self):
        """Test that close is a no-op for teardown when there is no handle."""
        acquire = Mock()
        lifecycle = InstanceLifecycle(acquire)

        await lifecycle.close()

        acquire.assert_not_called()
        assert lifecycle.state is LifecycleState.CLOSED

    @pytest.mark.asyncio
    async def test_sync_destroy(self):
        """Test that a synchronous destroy operation is supported."""
        instance = Mock()
        lifecycle = InstanceLifecycle(lambda: instance)

        await lifecycle.bootstrap()
        await lifecycle.close()

        instance.destroy.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_destroy_failure_propagates(self):
        """Test that teardown errors reach the caller of close()."""
        instance = make_instance()
        instance.destroy.side_effect = RuntimeError("cannot stop")
        lifecycle = InstanceLifecycle(lambda: instance)
        await lifecycle.bootstrap()

        with pytest.raises(RuntimeError, match="cannot stop"):
            await lifecycle.close()

    @pytest.mark.asyncio
    async def test_handle_kept_after_close(self, caplog):
        """Test that the handle survives close and its use is logged."""
        instance = make_instance()
        lifecycle = InstanceLifecycle(lambda: instance, backing="CMS")
        await lifecycle.bootstrap()
        await lifecycle.close()

        with caplog.at_level(logging.WARNING, logger="cms_data_transfer.lifecycle"):
            assert lifecycle.require("stream links") is instance

        assert "after close" in caplog.text


class TestRequire:
    """Tests for InstanceLifecycle.require()."""

    def test_message_names_operation(self):
        """Test that the usage error says what was attempted."""
        lifecycle = InstanceLifecycle(Mock(), backing="CMS")

        with pytest.raises(ProviderNotReadyError) as exc_info:
            lifecycle.require("stream entities")

        assert exc_info.value.operation == "stream entities"
        assert str(exc_info.value) == "Not able to stream entities. CMS instance not found"

    @pytest.mark.parametrize("auto_destroy,expected", [
        (None, True),
        (True, True),
        (False, False),
    ])
    def test_should_auto_destroy(self, auto_destroy, expected):
        """Test that only an explicit False disables teardown."""
        lifecycle = InstanceLifecycle(Mock(), auto_destroy=auto_destroy)

        assert lifecycle.should_auto_destroy is expected
