"""
Payment Resume Tests
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from beanstore.application.use_cases.payment_resume_use_case import (
    PaymentResumeUseCase,
    outcome_for,
    read_client_secret_param,
)
from beanstore.domain.repositories.payment_gateway import PaymentIntentResult
from beanstore.domain.value_objects.payment_status import PaymentIntentStatus
from beanstore.infrastructure.utilities.exceptions import PaymentError


def gateway_returning(*statuses):
    gateway = MagicMock()
    gateway.retrieve_payment_intent = AsyncMock(
        side_effect=[
            PaymentIntentResult(status=PaymentIntentStatus.from_raw(s), raw_status=s) for s in statuses
        ]
    )
    return gateway


class TestOutcomes:
    """Test the four outcome views"""

    def test_succeeded_links_home(self):
        outcome = outcome_for(PaymentIntentStatus.SUCCEEDED)
        assert outcome.message == "ご購入ありがとうございます。お支払いが正常に完了しました。"
        assert outcome.link_path == "/"
        assert outcome.link_label == "トップページに戻る"

    def test_processing_shows_loader(self):
        outcome = outcome_for(PaymentIntentStatus.PROCESSING)
        assert outcome.show_loader is True
        assert outcome.link_path is None
        assert outcome.needs_refresh is True

    def test_failed_links_to_cart(self):
        outcome = outcome_for(PaymentIntentStatus.REQUIRES_PAYMENT_METHOD)
        assert outcome.link_path == "/cart"
        assert outcome.link_label == "カートに戻る"

    def test_other(self):
        outcome = outcome_for(PaymentIntentStatus.OTHER)
        assert outcome.message == "何らかの問題が発生しました。サポートにお問い合わせください。"
        assert outcome.needs_refresh is False


class TestReadClientSecret:
    def test_from_query_string(self):
        assert read_client_secret_param("?payment_intent_client_secret=pi_1_secret_x&redirect_status=succeeded") == "pi_1_secret_x"

    def test_from_mapping(self):
        assert read_client_secret_param({"payment_intent_client_secret": "pi_1_secret_x"}) == "pi_1_secret_x"

    def test_missing(self):
        assert read_client_secret_param("") is None
        assert read_client_secret_param({"payment_intent_client_secret": ""}) is None


class TestPaymentResume:
    """Test resuming after the provider redirect"""

    @pytest.mark.asyncio
    async def test_missing_secret_goes_home(self, navigator):
        gateway = gateway_returning()
        navigator.navigate("/checkout/success")
        use_case = PaymentResumeUseCase(gateway, navigator)

        outcome = await use_case.resume("")

        assert outcome is None
        assert navigator.current == "/"
        assert navigator.last_replace is True
        gateway.retrieve_payment_intent.assert_not_called()

    @pytest.mark.asyncio
    async def test_succeeded(self, navigator):
        use_case = PaymentResumeUseCase(gateway_returning("succeeded"), navigator)

        outcome = await use_case.resume("payment_intent_client_secret=pi_1_secret_x")

        assert outcome.status is PaymentIntentStatus.SUCCEEDED
        assert use_case.outcome is outcome

    @pytest.mark.asyncio
    async def test_processing_then_refresh(self, navigator):
        """Test a processing payment is polled again by refresh"""
        gateway = gateway_returning("processing", "succeeded")
        use_case = PaymentResumeUseCase(gateway, navigator)

        first = await use_case.resume({"payment_intent_client_secret": "pi_1_secret_x"})
        second = await use_case.refresh()

        assert first.status is PaymentIntentStatus.PROCESSING
        assert second.status is PaymentIntentStatus.SUCCEEDED
        assert gateway.retrieve_payment_intent.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_status_is_other(self, navigator):
        use_case = PaymentResumeUseCase(gateway_returning("requires_capture"), navigator)

        outcome = await use_case.resume("payment_intent_client_secret=pi_1_secret_x")

        assert outcome.status is PaymentIntentStatus.OTHER

    @pytest.mark.asyncio
    async def test_retrieval_error_is_other(self, navigator):
        gateway = MagicMock()
        gateway.retrieve_payment_intent = AsyncMock(side_effect=PaymentError("invalid_request_error"))
        use_case = PaymentResumeUseCase(gateway, navigator)

        outcome = await use_case.resume("payment_intent_client_secret=pi_1_secret_x")

        assert outcome.status is PaymentIntentStatus.OTHER

    @pytest.mark.asyncio
    async def test_refresh_before_resume(self, navigator):
        use_case = PaymentResumeUseCase(gateway_returning(), navigator)
        assert await use_case.refresh() is None
