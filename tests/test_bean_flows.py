"""
Bean Catalog and Editor Tests
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from beanstore.application.dtos.cart_dtos import AddToCartRequest
from beanstore.application.interfaces import NotificationLevel
from beanstore.application.use_cases.bean_catalog_use_case import (
    BeanCatalogUseCase,
    fetch_error_message,
)
from beanstore.application.use_cases.bean_editor_use_case import BeanEditor
from beanstore.domain.entities.bean_entity import Bean, BeanForm, BeanSummary
from beanstore.infrastructure.http.api_client import BeanStoreApiClient
from beanstore.infrastructure.repositories import HttpBeanRepository
from beanstore.infrastructure.utilities.exceptions import ApiError, NetworkError


def make_bean(bean_id=1, name="コロンビア"):
    return Bean(
        id=bean_id,
        name=name,
        origin="Colombia",
        price=1500,
        process="washed",
        roast_profile="medium",
        user_id="user-1",
    )


def valid_form():
    return BeanForm(name="ケニア", origin="Kenya", price="1800", process="washed", roast_profile="city")


@pytest.fixture
def bean_repository():
    repo = MagicMock()
    repo.list_beans = AsyncMock(return_value=[BeanSummary(1, "コロンビア"), BeanSummary(2, "ケニア")])
    repo.get_bean = AsyncMock(return_value=make_bean())
    repo.list_my_beans = AsyncMock(return_value=[make_bean(1), make_bean(2, "ケニア")])
    repo.create_bean = AsyncMock(return_value=make_bean(3, "ケニア"))
    repo.update_bean = AsyncMock(return_value=make_bean(1, "ケニア"))
    repo.delete_bean = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def catalog(bean_repository, cart_repository, signed_in_context, navigator, notifier, dialogs):
    return BeanCatalogUseCase(
        bean_repository, cart_repository, signed_in_context, navigator, notifier, dialogs
    )


class TestFetchErrorMessage:
    def test_api_error_uses_status(self):
        assert fetch_error_message(ApiError(404, "not found")) == "データの取得に失敗しました: HTTP error! status: 404"

    def test_network_error(self):
        assert "通信エラー" in fetch_error_message(NetworkError("down"))


class TestCatalog:
    """Test browsing the catalog"""

    @pytest.mark.asyncio
    async def test_list_beans(self, catalog):
        response = await catalog.list_beans()

        assert response.success is True
        assert [bean.name for bean in response.beans] == ["コロンビア", "ケニア"]

    @pytest.mark.asyncio
    async def test_list_beans_failure(self, catalog, bean_repository):
        bean_repository.list_beans = AsyncMock(side_effect=ApiError(500))

        response = await catalog.list_beans()

        assert response.success is False
        assert response.error_message == "データの取得に失敗しました: HTTP error! status: 500"

    @pytest.mark.asyncio
    async def test_get_bean(self, catalog):
        response = await catalog.get_bean(1)

        assert response.success is True
        assert response.bean.price == 1500

    @pytest.mark.asyncio
    async def test_get_missing_bean(self, catalog, bean_repository):
        bean_repository.get_bean = AsyncMock(side_effect=ApiError(404))

        response = await catalog.get_bean(99)

        assert response.success is False
        assert "404" in response.error_message

    @pytest.mark.asyncio
    async def test_unexpected_body_becomes_error(self, cart_repository, signed_in_context, navigator, notifier, dialogs):
        def backend(request):
            if request.url.path == "/api/beans":
                return httpx.Response(200, json={"beans": [{"id": 1, "name": "コロンビア"}]})
            return httpx.Response(200, json={"id": 1, "name": "コロンビア", "price": None})

        client = BeanStoreApiClient("http://api.test", transport=httpx.MockTransport(backend))
        catalog = BeanCatalogUseCase(
            HttpBeanRepository(client), cart_repository, signed_in_context, navigator, notifier, dialogs
        )

        listed = await catalog.list_beans()
        detail = await catalog.get_bean(1)
        await client.aclose()

        assert listed.success is False
        assert listed.error_message.startswith("データの取得に失敗しました: ")
        assert detail.success is False
        assert detail.error_message == listed.error_message


class TestMyBeans:
    """Test the signed-in user's bean list"""

    @pytest.mark.asyncio
    async def test_list_my_beans(self, catalog):
        response = await catalog.list_my_beans()

        assert response.success is True
        assert len(catalog.my_beans) == 2

    @pytest.mark.asyncio
    async def test_requires_session(
        self, bean_repository, cart_repository, signed_out_context, navigator, notifier, dialogs
    ):
        catalog = BeanCatalogUseCase(
            bean_repository, cart_repository, signed_out_context, navigator, notifier, dialogs
        )

        response = await catalog.list_my_beans()

        assert response.success is False
        assert response.error_message == "ログインが必要です。再度ログインしてください。"
        bean_repository.list_my_beans.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirmed_delete(self, catalog, bean_repository, dialogs, notifier):
        await catalog.list_my_beans()

        catalog.confirm_delete(catalog.my_beans[1])
        assert dialogs.current.body == "ケニアを削除しますか？"
        await dialogs.confirm()

        bean_repository.delete_bean.assert_awaited_once_with(2)
        assert [bean.id for bean in catalog.my_beans] == [1]
        assert notifier.last.message == "ケニアを削除しました。"

    @pytest.mark.asyncio
    async def test_delete_failure_keeps_bean(self, catalog, bean_repository, notifier):
        bean_repository.delete_bean = AsyncMock(side_effect=ApiError(403, "forbidden"))
        await catalog.list_my_beans()

        response = await catalog.delete_bean(1)

        assert response.success is False
        assert len(catalog.my_beans) == 2
        assert notifier.last.level is NotificationLevel.ERROR
        assert notifier.last.message == "コーヒー豆の削除に失敗しました。"


class TestAddToCart:
    """Test adding beans to the cart"""

    @pytest.mark.asyncio
    async def test_add_to_cart(self, catalog, cart_repository, notifier):
        response = await catalog.add_to_cart(AddToCartRequest(bean_id=1, quantity=2), bean_name="コロンビア")

        assert response.success is True
        cart_repository.add_item.assert_awaited_once_with(1, 2)
        assert notifier.last.message == "コロンビアをカートに追加しました。"

    @pytest.mark.asyncio
    async def test_signed_out_goes_to_login(
        self, bean_repository, cart_repository, signed_out_context, navigator, notifier, dialogs
    ):
        catalog = BeanCatalogUseCase(
            bean_repository, cart_repository, signed_out_context, navigator, notifier, dialogs
        )

        response = await catalog.add_to_cart(AddToCartRequest(bean_id=1))

        assert response.success is False
        assert navigator.current == "/login"
        cart_repository.add_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_quantity(self, catalog, cart_repository, notifier):
        response = await catalog.add_to_cart(AddToCartRequest(bean_id=1, quantity=0))

        assert response.success is False
        assert response.error_message == "数量は1以上で入力してください。"
        cart_repository.add_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_backend_failure(self, catalog, cart_repository):
        cart_repository.add_item = AsyncMock(side_effect=ApiError(500))

        response = await catalog.add_to_cart(AddToCartRequest(bean_id=1))

        assert response.error_message == "カートへの追加に失敗しました。"


class TestBeanEditor:
    """Test registering and editing beans"""

    @pytest.fixture
    def editor(self, bean_repository, signed_in_context, navigator, dialogs):
        return BeanEditor(bean_repository, signed_in_context, navigator, dialogs)

    @pytest.mark.asyncio
    async def test_create(self, editor, bean_repository, dialogs, navigator):
        response = await editor.create(valid_form())

        assert response.success is True
        bean_repository.create_bean.assert_awaited_once_with(
            {"name": "ケニア", "origin": "Kenya", "price": 1800, "process": "washed", "roast_profile": "city"}
        )
        assert dialogs.current.title == "登録完了"

        await dialogs.confirm()
        assert navigator.current == "/"

    @pytest.mark.asyncio
    async def test_create_invalid_form(self, editor, bean_repository):
        response = await editor.create(BeanForm(name="ケニア", price="-5"))

        assert response.success is False
        assert response.field_errors["price"] == "価格を0以上で入力してください"
        assert "name" not in response.field_errors
        bean_repository.create_bean.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_error_shows_server_message(self, editor, bean_repository):
        bean_repository.create_bean = AsyncMock(side_effect=ApiError(400, "name is required"))

        response = await editor.create(valid_form())

        assert response.error_message == "name is required"
        assert editor.is_submitting is False

    @pytest.mark.asyncio
    async def test_create_error_without_message(self, editor, bean_repository):
        bean_repository.create_bean = AsyncMock(side_effect=ApiError(502))

        response = await editor.create(valid_form())

        assert response.error_message == "HTTP error! status: 502"

    @pytest.mark.asyncio
    async def test_load_fills_form(self, editor):
        response = await editor.load(1)

        assert response.success is True
        assert editor.form.name == "コロンビア"
        assert editor.form.price == "1500"

    @pytest.mark.asyncio
    async def test_update(self, editor, bean_repository, dialogs, navigator):
        response = await editor.update(1, valid_form())

        assert response.success is True
        bean_repository.update_bean.assert_awaited_once()
        assert dialogs.current.title == "更新完了"
        await dialogs.confirm()
        assert navigator.current == "/my-beans"

    @pytest.mark.asyncio
    async def test_update_requires_session(self, bean_repository, signed_out_context, navigator, dialogs):
        editor = BeanEditor(bean_repository, signed_out_context, navigator, dialogs)

        response = await editor.update(1, valid_form())

        assert response.success is False
        bean_repository.update_bean.assert_not_called()
