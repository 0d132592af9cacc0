"""
Dependency injection container for the storefront client.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from beanstore.application.auth_context import AuthContext, AuthSessionManager
from beanstore.application.use_cases.bean_catalog_use_case import BeanCatalogUseCase
from beanstore.application.use_cases.bean_editor_use_case import BeanEditor
from beanstore.application.use_cases.cart_store_use_case import CartStore
from beanstore.application.use_cases.checkout_use_case import CheckoutOrchestrator
from beanstore.application.use_cases.login_use_case import LoginUseCase
from beanstore.application.use_cases.payment_resume_use_case import PaymentResumeUseCase
from beanstore.application.use_cases.profile_use_case import ProfileEditor
from beanstore.infrastructure.configuration.config import Settings, get_config
from beanstore.infrastructure.http.api_client import BeanStoreApiClient
from beanstore.infrastructure.repositories import (
    HttpBeanRepository,
    HttpCartRepository,
    HttpCheckoutRepository,
    HttpProfileRepository,
)
from beanstore.infrastructure.services import (
    StripePaymentGateway,
    SupabaseAuthProvider,
    ZipcloudAddressLookup,
)
from beanstore.infrastructure.utilities.i18n import i18n
from beanstore.presentation import DialogQueue, HistoryNavigator, InMemoryNotifier

logger = logging.getLogger(__name__)


class Container:
    """
    Builds and caches the shared services.

    `transport` is passed to every httpx client the container creates, which
    lets tests route all outgoing traffic through one httpx.MockTransport.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_config()
        self._transport = transport
        self.services: Dict[str, Any] = {}
        i18n.set_language(self.config.language)

    def _get(self, name: str, factory: Callable[[], Any]) -> Any:
        if name not in self.services:
            self.services[name] = factory()
            logger.debug("Created service %s", name)
        return self.services[name]

    # Shared state and presentation ports

    def get_auth_context(self) -> AuthContext:
        return self._get("auth_context", AuthContext)

    def get_session_manager(self) -> AuthSessionManager:
        return self._get(
            "session_manager",
            lambda: AuthSessionManager(self.get_auth_context(), self.get_auth_provider()),
        )

    def get_notifier(self) -> InMemoryNotifier:
        return self._get("notifier", InMemoryNotifier)

    def get_navigator(self) -> HistoryNavigator:
        return self._get("navigator", HistoryNavigator)

    def get_dialogs(self) -> DialogQueue:
        return self._get("dialogs", DialogQueue)

    # Infrastructure

    def get_api_client(self) -> BeanStoreApiClient:
        auth_context = self.get_auth_context()
        return self._get(
            "api_client",
            lambda: BeanStoreApiClient(
                self.config.api_base_url,
                token_provider=lambda: auth_context.access_token,
                timeout=self.config.request_timeout_seconds,
                transport=self._transport,
            ),
        )

    def get_cart_repository(self) -> HttpCartRepository:
        return self._get("cart_repository", lambda: HttpCartRepository(self.get_api_client()))

    def get_bean_repository(self) -> HttpBeanRepository:
        return self._get("bean_repository", lambda: HttpBeanRepository(self.get_api_client()))

    def get_checkout_repository(self) -> HttpCheckoutRepository:
        return self._get(
            "checkout_repository", lambda: HttpCheckoutRepository(self.get_api_client())
        )

    def get_profile_repository(self) -> HttpProfileRepository:
        return self._get(
            "profile_repository", lambda: HttpProfileRepository(self.get_api_client())
        )

    def get_payment_gateway(self) -> StripePaymentGateway:
        return self._get(
            "payment_gateway",
            lambda: StripePaymentGateway(
                self.config.stripe_publishable_key,
                api_base=self.config.stripe_api_base,
                timeout=self.config.request_timeout_seconds,
                transport=self._transport,
            ),
        )

    def get_auth_provider(self) -> SupabaseAuthProvider:
        return self._get(
            "auth_provider",
            lambda: SupabaseAuthProvider(
                self.config.supabase_url,
                self.config.supabase_anon_key,
                timeout=self.config.request_timeout_seconds,
                transport=self._transport,
            ),
        )

    def get_address_lookup(self) -> ZipcloudAddressLookup:
        return self._get(
            "address_lookup",
            lambda: ZipcloudAddressLookup(
                self.config.postal_lookup_url,
                timeout=self.config.request_timeout_seconds,
                transport=self._transport,
            ),
        )

    # Use cases; each view gets a fresh instance

    def create_cart_store(self) -> CartStore:
        return CartStore(
            self.get_cart_repository(),
            self.get_auth_context(),
            self.get_navigator(),
            self.get_notifier(),
            self.get_dialogs(),
            max_quantity=self.config.max_cart_quantity,
        )

    def create_checkout(self) -> CheckoutOrchestrator:
        return CheckoutOrchestrator(
            self.get_cart_repository(),
            self.get_checkout_repository(),
            self.get_payment_gateway(),
            self.get_auth_context(),
            self.get_navigator(),
            app_origin=self.config.app_origin,
        )

    def create_payment_resume(self) -> PaymentResumeUseCase:
        return PaymentResumeUseCase(self.get_payment_gateway(), self.get_navigator())

    def create_catalog(self) -> BeanCatalogUseCase:
        return BeanCatalogUseCase(
            self.get_bean_repository(),
            self.get_cart_repository(),
            self.get_auth_context(),
            self.get_navigator(),
            self.get_notifier(),
            self.get_dialogs(),
            max_quantity=self.config.max_cart_quantity,
        )

    def create_bean_editor(self) -> BeanEditor:
        return BeanEditor(
            self.get_bean_repository(),
            self.get_auth_context(),
            self.get_navigator(),
            self.get_dialogs(),
        )

    def create_login(self) -> LoginUseCase:
        return LoginUseCase(
            self.get_auth_provider(),
            self.get_session_manager(),
            self.get_navigator(),
            self.get_notifier(),
            app_origin=self.config.app_origin,
        )

    def create_profile_editor(self) -> ProfileEditor:
        return ProfileEditor(
            self.get_profile_repository(),
            self.get_address_lookup(),
            self.get_auth_context(),
            self.get_notifier(),
        )

    async def aclose(self) -> None:
        """Close pooled HTTP connections"""
        client = self.services.get("api_client")
        if client is not None:
            await client.aclose()


_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global container instance"""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    global _container
    _container = None
