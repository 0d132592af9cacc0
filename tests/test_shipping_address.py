"""
Shipping Address and Profile Tests

Postal code input with address completion, shipping validation and the
profile editor that reuses the same postal code input.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from beanstore.application.use_cases.profile_use_case import ProfileEditor
from beanstore.application.use_cases.shipping_address_use_case import (
    LOOKUP_FAILED,
    LOOKUP_FOUND,
    LOOKUP_NOT_FOUND,
    PostalCodeInput,
    ShippingAddressForm,
    validate_shipping_details,
)
from beanstore.domain.entities.profile_entity import Profile
from beanstore.domain.entities.shipping_entity import ShippingDetails
from beanstore.domain.repositories.address_lookup import AddressLookupResult
from beanstore.domain.value_objects.postal_code import PostalCode
from beanstore.infrastructure.utilities.exceptions import ApiError, NetworkError

TOKYO = AddressLookupResult(prefecture="東京都", city="千代田区千代田")


@pytest.fixture
def address_lookup():
    lookup = MagicMock()
    lookup.lookup = AsyncMock(return_value=TOKYO)
    return lookup


class TestPostalCodeInput:
    """Test postal code formatting and lookup triggering"""

    @pytest.mark.asyncio
    async def test_typing_digit_by_digit(self, address_lookup):
        field = PostalCodeInput(address_lookup)
        shown = []
        for raw in ["1", "10", "100", "100-0", "100-00", "100-000", "100-0001"]:
            shown.append(await field.change(raw))

        assert shown == ["1", "10", "100-", "100-0", "100-00", "100-000", "100-0001"]
        address_lookup.lookup.assert_awaited_once_with(PostalCode("1000001"))
        assert field.prefecture == "東京都"
        assert field.city == "千代田区千代田"
        assert field.last_lookup == LOOKUP_FOUND

    @pytest.mark.asyncio
    async def test_backspace_over_hyphen(self, address_lookup):
        field = PostalCodeInput(address_lookup, "1234")
        assert field.value == "123-4"

        assert await field.change("123-") == "123"
        assert await field.change("12") == "12"

    @pytest.mark.asyncio
    async def test_pasted_value_is_cleaned(self, address_lookup):
        field = PostalCodeInput(address_lookup)

        assert await field.change("〒100 0001 ") == "100-0001"
        assert field.is_complete is True

    @pytest.mark.asyncio
    async def test_no_lookup_until_complete(self, address_lookup):
        field = PostalCodeInput(address_lookup)

        await field.change("100-000")

        address_lookup.lookup.assert_not_called()
        assert field.last_lookup is None

    @pytest.mark.asyncio
    async def test_not_found_clears_fields(self, address_lookup):
        field = PostalCodeInput(address_lookup)
        await field.change("1000001")
        address_lookup.lookup = AsyncMock(return_value=None)

        await field.change("9999999")

        assert field.prefecture == ""
        assert field.city == ""
        assert field.last_lookup == LOOKUP_NOT_FOUND

    @pytest.mark.asyncio
    async def test_lookup_failure_keeps_fields(self, address_lookup):
        field = PostalCodeInput(address_lookup)
        await field.change("1000001")
        address_lookup.lookup = AsyncMock(side_effect=NetworkError("down"))

        await field.change("1500001")

        assert field.prefecture == "東京都"
        assert field.last_lookup == LOOKUP_FAILED

    @pytest.mark.asyncio
    async def test_stale_lookup_dropped(self, address_lookup):
        """Test a lookup answered after the input changed is ignored"""
        release = asyncio.Event()

        async def slow_lookup(code):
            await release.wait()
            return TOKYO

        address_lookup.lookup = AsyncMock(side_effect=slow_lookup)
        field = PostalCodeInput(address_lookup)

        pending = asyncio.create_task(field.change("1000001"))
        await asyncio.sleep(0)
        field.value = "100-000"
        release.set()
        await pending

        assert field.prefecture == ""
        assert field.last_lookup is None


class TestShippingForm:
    """Test the shipping form"""

    @pytest.mark.asyncio
    async def test_lookup_fills_address(self, address_lookup):
        form = ShippingAddressForm(address_lookup)

        details = await form.change_postal_code("1000001")

        assert details.postal_code == "100-0001"
        assert details.prefecture == "東京都"
        assert details.city == "千代田区千代田"

    @pytest.mark.asyncio
    async def test_not_found_clears_address(self, address_lookup):
        address_lookup.lookup = AsyncMock(return_value=None)
        form = ShippingAddressForm(
            address_lookup, ShippingDetails(prefecture="大阪府", city="大阪市北区")
        )

        details = await form.change_postal_code("0000000")

        assert details.prefecture == ""
        assert details.city == ""

    @pytest.mark.asyncio
    async def test_failure_keeps_typed_address(self, address_lookup):
        address_lookup.lookup = AsyncMock(side_effect=NetworkError("down"))
        form = ShippingAddressForm(address_lookup, ShippingDetails(prefecture="大阪府", city="大阪市北区"))

        details = await form.change_postal_code("5300001")

        assert details.prefecture == "大阪府"

    def test_validate_complete_form(self, address_lookup):
        form = ShippingAddressForm(
            address_lookup,
            ShippingDetails(
                name="山田太郎",
                phone="09012345678",
                postal_code="1000001",
                prefecture="東京都",
                city="千代田区",
                line1="1-1",
            ),
        )
        assert form.details.postal_code == "100-0001"
        assert form.validate() == {}

    def test_validate_reports_each_field(self):
        details = ShippingDetails(name=" ", postal_code="123")

        errors = validate_shipping_details(details)

        assert errors["name"] == "お名前を入力してください。"
        assert errors["postal_code"] == "郵便番号は7桁で入力してください。"
        assert details.errors is errors


class TestProfileEditor:
    """Test profile editing"""

    @pytest.fixture
    def profile_repository(self):
        repo = MagicMock()
        repo.create_profile = AsyncMock(side_effect=lambda profile: profile)
        repo.update_profile = AsyncMock(side_effect=lambda profile: profile)
        return repo

    @pytest.mark.asyncio
    async def test_post_code_fills_address(self, profile_repository, address_lookup, signed_in_context, notifier):
        editor = ProfileEditor(profile_repository, address_lookup, signed_in_context, notifier)

        profile = await editor.change_post_code("1000001")

        assert profile.post_code == "100-0001"
        assert profile.address == "東京都千代田区千代田"

    @pytest.mark.asyncio
    async def test_not_found_keeps_address(self, profile_repository, address_lookup, signed_in_context, notifier):
        address_lookup.lookup = AsyncMock(return_value=None)
        editor = ProfileEditor(
            profile_repository, address_lookup, signed_in_context, notifier, Profile(address="自宅")
        )

        profile = await editor.change_post_code("0000000")

        assert profile.address == "自宅"

    @pytest.mark.asyncio
    async def test_save_updates(self, profile_repository, address_lookup, signed_in_context, notifier):
        editor = ProfileEditor(profile_repository, address_lookup, signed_in_context, notifier)

        saved = await editor.save(Profile(display_name="Taro"))

        assert saved is True
        profile_repository.update_profile.assert_awaited_once()
        profile_repository.create_profile.assert_not_called()
        assert notifier.last.message == "プロフィールを保存しました。"

    @pytest.mark.asyncio
    async def test_save_creates(self, profile_repository, address_lookup, signed_in_context, notifier):
        editor = ProfileEditor(profile_repository, address_lookup, signed_in_context, notifier)

        assert await editor.save(Profile(display_name="Taro"), create=True) is True
        profile_repository.create_profile.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_requires_session(self, profile_repository, address_lookup, signed_out_context, notifier):
        editor = ProfileEditor(profile_repository, address_lookup, signed_out_context, notifier)

        assert await editor.save() is False
        assert editor.error_message == "ログインが必要です。再度ログインしてください。"
        profile_repository.update_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_failure(self, profile_repository, address_lookup, signed_in_context, notifier):
        profile_repository.update_profile = AsyncMock(side_effect=ApiError(500))
        editor = ProfileEditor(profile_repository, address_lookup, signed_in_context, notifier)

        assert await editor.save() is False
        assert editor.error_message == "プロフィールの保存に失敗しました。"
