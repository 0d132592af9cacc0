"""
Cart Store Tests

Loading, local quantity edits, confirmed removal and the single write-back
on close.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from beanstore.application.interfaces import NotificationLevel
from beanstore.application.use_cases.cart_store_use_case import CartStore
from beanstore.infrastructure.utilities.exceptions import ApiError, NetworkError


def make_store(cart_repository, auth_context, navigator, notifier, dialogs, **kwargs):
    return CartStore(cart_repository, auth_context, navigator, notifier, dialogs, **kwargs)


class TestCartLoad:
    """Test loading the cart"""

    @pytest.mark.asyncio
    async def test_load_success(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        """Test snapshot and working copy are filled from the backend"""
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)

        response = await store.load()

        assert response.success is True
        assert response.cart_summary.total == 3900
        assert len(store.items) == 2
        assert len(store.snapshot) == 2
        assert store.error_message is None
        assert store.is_loading is False

    @pytest.mark.asyncio
    async def test_load_without_session_redirects(
        self, cart_repository, signed_out_context, navigator, notifier, dialogs
    ):
        """Test a signed-out user is sent to the login view"""
        store = make_store(cart_repository, signed_out_context, navigator, notifier, dialogs)

        response = await store.load()

        assert response.success is False
        assert navigator.current == "/login"
        cart_repository.get_cart_items.assert_not_called()

    @pytest.mark.asyncio
    async def test_load_failure_sets_error_message(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        """Test a failed fetch shows the cart fetch error"""
        cart_repository.get_cart_items = AsyncMock(side_effect=ApiError(500))
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)

        response = await store.load()

        assert response.success is False
        assert store.error_message == "カート情報の取得に失敗しました。"
        assert store.items == []

    @pytest.mark.asyncio
    async def test_empty_cart(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        cart_repository.get_cart_items = AsyncMock(return_value=[])
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)

        response = await store.load()

        assert response.success is True
        assert response.cart_summary.is_empty is True
        assert store.total == 0

    @pytest.mark.asyncio
    async def test_response_after_close_is_dropped(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs, cart_items
    ):
        """Test a load that finishes after the view closed does not touch state"""
        release = asyncio.Event()

        async def slow_fetch():
            await release.wait()
            return list(cart_items)

        cart_repository.get_cart_items = AsyncMock(side_effect=slow_fetch)
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)

        load_task = asyncio.create_task(store.load())
        await asyncio.sleep(0)
        store.close()
        release.set()
        response = await load_task

        assert response.success is False
        assert store.items == []


class TestCartQuantity:
    """Test local quantity edits"""

    @pytest.mark.asyncio
    async def test_set_quantity_is_local_only(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        assert store.set_quantity("line-1", 3) is True

        assert store.total == 1200 * 3 + 1500
        assert store.snapshot.get("line-1").quantity == 2
        cart_repository.update_quantity.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [0, -1, 100])
    async def test_out_of_range_quantity_ignored(
        self, quantity, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        assert store.set_quantity("line-1", quantity) is False
        assert store.total == 3900

    @pytest.mark.asyncio
    async def test_configured_maximum(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        store = make_store(
            cart_repository, signed_in_context, navigator, notifier, dialogs, max_quantity=5
        )
        await store.load()

        assert store.set_quantity("line-1", 5) is True
        assert store.set_quantity("line-1", 6) is False

    @pytest.mark.asyncio
    async def test_unknown_line_ignored(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        assert store.set_quantity("missing", 2) is False


class TestCartRemove:
    """Test confirmed removal"""

    @pytest.mark.asyncio
    async def test_confirm_remove_opens_dialog(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        """Test nothing is deleted until the dialog is confirmed"""
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        store.confirm_remove("line-1")

        assert dialogs.current.title == "削除の確認"
        assert "エチオピア イルガチェフェ" in dialogs.current.body
        cart_repository.remove_item.assert_not_called()

        await dialogs.confirm()

        cart_repository.remove_item.assert_awaited_once_with("line-1")
        assert [item.id for item in store.items] == ["line-2"]

    @pytest.mark.asyncio
    async def test_cancel_keeps_line(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        store.confirm_remove("line-1")
        await dialogs.cancel()

        cart_repository.remove_item.assert_not_called()
        assert len(store.items) == 2

    @pytest.mark.asyncio
    async def test_remove_updates_both_copies(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        response = await store.remove_item("line-1")

        assert response.success is True
        assert store.snapshot.get("line-1") is None
        assert store.total == 1500
        assert notifier.last.level is NotificationLevel.SUCCESS

    @pytest.mark.asyncio
    async def test_removed_line_is_not_written_back(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        """Test an edited then removed line is not PUT on close"""
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.set_quantity("line-1", 4)
        await store.remove_item("line-1")

        assert store.close() is None
        cart_repository.update_quantity.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_failure_keeps_line(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        cart_repository.remove_item = AsyncMock(side_effect=ApiError(500, "boom"))
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        response = await store.remove_item("line-1")

        assert response.success is False
        assert len(store.items) == 2
        assert notifier.last.level is NotificationLevel.ERROR
        assert notifier.last.message == "商品の削除に失敗しました。"


class TestCartClose:
    """Test the write-back on close"""

    @pytest.mark.asyncio
    async def test_close_writes_changed_lines_once(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.set_quantity("line-2", 3)

        task = store.close()
        assert task is not None
        await task

        cart_repository.update_quantity.assert_awaited_once_with("line-2", 3)
        assert store.close() is task
        assert cart_repository.update_quantity.await_count == 1

    @pytest.mark.asyncio
    async def test_close_without_changes(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()

        assert store.close() is None
        cart_repository.update_quantity.assert_not_called()

    @pytest.mark.asyncio
    async def test_repeated_edits_write_final_quantity(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.set_quantity("line-1", 3)
        store.set_quantity("line-1", 5)

        await store.close()

        cart_repository.update_quantity.assert_awaited_once_with("line-1", 5)

    @pytest.mark.asyncio
    async def test_edit_back_to_loaded_quantity(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        """Test a line returned to its fetched quantity is not written"""
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.set_quantity("line-1", 4)
        store.set_quantity("line-1", 2)

        assert store.close() is None
        cart_repository.update_quantity.assert_not_called()

    def test_close_without_event_loop_can_be_retried(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        """Test a close outside a running loop keeps the edits for a later close"""
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        asyncio.run(store.load())
        store.set_quantity("line-1", 4)

        with pytest.raises(RuntimeError):
            store.close()
        assert store.is_closed is False

        async def close_in_loop():
            return await store.close()

        assert asyncio.run(close_in_loop()) == 1
        cart_repository.update_quantity.assert_awaited_once_with("line-1", 4)

    @pytest.mark.asyncio
    async def test_close_after_sign_out_drops_edits(
        self, cart_repository, signed_in_context, session_manager, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.set_quantity("line-1", 5)
        session_manager.signed_out()

        assert store.close() is None
        cart_repository.update_quantity.assert_not_called()

    @pytest.mark.asyncio
    async def test_partial_sync_failure_notifies_once(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        """Test one failed PUT does not stop the others and shows one error"""
        cart_repository.update_quantity = AsyncMock(side_effect=[NetworkError("down"), None])
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.set_quantity("line-1", 3)
        store.set_quantity("line-2", 2)

        written = await store.close()

        assert written == 1
        assert cart_repository.update_quantity.await_count == 2
        errors = notifier.messages(NotificationLevel.ERROR)
        assert errors == ["カートの同期に失敗しました。"]

    @pytest.mark.asyncio
    async def test_edits_after_close_ignored(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        store = make_store(cart_repository, signed_in_context, navigator, notifier, dialogs)
        await store.load()
        store.close()

        assert store.set_quantity("line-1", 3) is False

    @pytest.mark.asyncio
    async def test_context_manager_flushes(
        self, cart_repository, signed_in_context, navigator, notifier, dialogs
    ):
        async with make_store(cart_repository, signed_in_context, navigator, notifier, dialogs) as store:
            store.set_quantity("line-1", 7)

        assert store.is_closed is True
        cart_repository.update_quantity.assert_awaited_once_with("line-1", 7)
