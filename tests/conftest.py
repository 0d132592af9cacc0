"""
Test configuration and fixtures for the bean store client
"""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from beanstore.application.auth_context import AuthContext, AuthSessionManager
from beanstore.domain.entities.cart_entity import CartLineItem
from beanstore.domain.entities.session_entity import AuthSession, AuthUser
from beanstore.infrastructure.configuration.config import reset_config
from beanstore.infrastructure.utilities.i18n import i18n
from beanstore.presentation import DialogQueue, HistoryNavigator, InMemoryNotifier


# Mock environment variables for testing
@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        "API_BASE_URL": "http://api.test",
        "APP_ORIGIN": "http://shop.test",
        "SUPABASE_URL": "https://project.supabase.test",
        "SUPABASE_ANON_KEY": "anon-key-123",
        "STRIPE_PUBLISHABLE_KEY": "pk_test_123",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
    }

    reset_config()
    i18n.set_language("ja")
    with patch.dict(os.environ, test_env, clear=True):
        yield test_env
    reset_config()


@pytest.fixture
def user():
    return AuthUser(id="user-1", email="taro@example.com")


@pytest.fixture
def session(user):
    return AuthSession(access_token="token-abc", refresh_token="refresh-abc", user=user)


@pytest.fixture
def auth_provider(user):
    """Mock auth provider that accepts every token"""
    provider = MagicMock()
    provider.get_user = AsyncMock(return_value=user)
    provider.send_magic_link = AsyncMock(return_value=None)
    provider.sign_out = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def auth_context():
    return AuthContext()


@pytest.fixture
def session_manager(auth_context, auth_provider):
    return AuthSessionManager(auth_context, auth_provider)


@pytest.fixture
def signed_in_context(auth_context, session_manager, session):
    """Auth context with a signed-in session"""
    session_manager.signed_in(session)
    return auth_context


@pytest.fixture
def signed_out_context(auth_context, session_manager):
    """Auth context that finished loading without a session"""
    session_manager.signed_out()
    return auth_context


@pytest.fixture
def notifier():
    return InMemoryNotifier()


@pytest.fixture
def navigator():
    return HistoryNavigator()


@pytest.fixture
def dialogs():
    return DialogQueue()


@pytest.fixture
def cart_items():
    """Two cart lines: 1200 x 2 and 1500 x 1"""
    return [
        CartLineItem(id="line-1", bean_id=1, name="エチオピア イルガチェフェ", price=1200, quantity=2),
        CartLineItem(id="line-2", bean_id=2, name="グアテマラ アンティグア", price=1500, quantity=1),
    ]


@pytest.fixture
def cart_repository(cart_items):
    """Mock cart repository holding the two cart lines"""
    repo = MagicMock()
    repo.get_cart_items = AsyncMock(return_value=list(cart_items))
    repo.add_item = AsyncMock(return_value=None)
    repo.update_quantity = AsyncMock(return_value=None)
    repo.remove_item = AsyncMock(return_value=None)
    return repo
