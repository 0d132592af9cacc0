"""
Application constants for the bean storefront client

Centralizes magic numbers, API paths, routes and form choices so that use
cases and adapters never hard-code them.
"""

from typing import Final


# HTTP client settings
class HttpSettings:
    """Timeouts and thresholds for outgoing requests"""

    DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
    SLOW_REQUEST_THRESHOLD_SECONDS: Final[float] = 2.0
    USER_AGENT: Final[str] = "beanstore-client/1.0"


# Backend REST paths
class ApiPaths:
    """Paths on the storefront REST backend"""

    BEANS: Final[str] = "/api/beans"
    BEAN_DETAIL: Final[str] = "/api/beans/{bean_id}"
    MY_BEANS: Final[str] = "/api/my/beans"
    CART: Final[str] = "/api/cart"
    CART_ITEMS: Final[str] = "/api/cart/items"
    CART_ITEM_DETAIL: Final[str] = "/api/cart/items/{item_id}"
    PAYMENT_INTENT: Final[str] = "/api/checkout/payment-intent"
    PROFILE: Final[str] = "/api/profile"


# Client-side routes used as navigation targets
class Routes:
    """Navigation targets of the storefront views"""

    HOME: Final[str] = "/"
    LOGIN: Final[str] = "/login"
    CART: Final[str] = "/cart"
    CHECKOUT: Final[str] = "/checkout"
    CHECKOUT_SUCCESS: Final[str] = "/checkout/success"
    MY_BEANS: Final[str] = "/my-beans"
    NEW_BEAN: Final[str] = "/beans/new"
    BEAN_DETAIL: Final[str] = "/beans/{bean_id}"
    EDIT_BEAN: Final[str] = "/beans/{bean_id}/edit"

    PROTECTED: Final[tuple] = (
        "/beans/new",
        "/my-beans",
        "/beans/{bean_id}/edit",
        "/cart",
        "/checkout",
    )

    CLIENT_SECRET_PARAM: Final[str] = "payment_intent_client_secret"


# Cart rules
class CartSettings:
    """Cart quantity bounds"""

    MIN_QUANTITY: Final[int] = 1
    MAX_QUANTITY: Final[int] = 99
    DEFAULT_ADD_QUANTITY: Final[int] = 1
    WRAPPED_ITEMS_FIELD: Final[str] = "items"


# Checkout and payment provider constants
class PaymentSettings:
    """Payment intent fields and provider error types"""

    CLIENT_SECRET_FIELD: Final[str] = "client_secret"
    LEGACY_CLIENT_SECRET_FIELD: Final[str] = "clientSecret"
    CLIENT_SECRET_SEPARATOR: Final[str] = "_secret_"
    CARD_LEVEL_ERROR_TYPES: Final[tuple] = ("card_error", "validation_error")
    DEFAULT_COUNTRY: Final[str] = "JP"


# Bean form choices
class BeanOptions:
    """Allowed values of the bean form selects"""

    PROCESSES: Final[tuple] = ("natural", "washed", "honey")
    ROAST_PROFILES: Final[tuple] = (
        "light",
        "cinnamon",
        "medium",
        "high",
        "city",
        "full_city",
        "french",
        "italian",
    )
    MIN_PRICE: Final[int] = 0


# Postal code input
class PostalCodeSettings:
    """Japanese postal code formatting and lookup"""

    DIGITS: Final[int] = 7
    HYPHEN_POSITION: Final[int] = 3
    HYPHEN: Final[str] = "-"
    LOOKUP_OK_STATUS: Final[int] = 200


# Auth provider constants
class AuthSettings:
    """Supabase GoTrue endpoints and session events"""

    OTP_PATH: Final[str] = "/auth/v1/otp"
    USER_PATH: Final[str] = "/auth/v1/user"
    LOGOUT_PATH: Final[str] = "/auth/v1/logout"
    AUTHORIZE_PATH: Final[str] = "/auth/v1/authorize"
    DEFAULT_OAUTH_PROVIDER: Final[str] = "google"

    EVENT_INITIAL_SESSION: Final[str] = "INITIAL_SESSION"
    EVENT_SIGNED_IN: Final[str] = "SIGNED_IN"
    EVENT_SIGNED_OUT: Final[str] = "SIGNED_OUT"
    EVENT_TOKEN_REFRESHED: Final[str] = "TOKEN_REFRESHED"

    EMAIL_PATTERN: Final[str] = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# Logging configuration constants
class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    PERFORMANCE_LOG_FILE_SIZE: Final[int] = 5 * 1024 * 1024  # 5MB

    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    ERROR_LOG_BACKUP_COUNT: Final[int] = 10
    PERFORMANCE_LOG_BACKUP_COUNT: Final[int] = 5


# File and directory constants
class FileSettings:
    """File paths and directory settings"""

    LOGS_DIRECTORY: Final[str] = "logs"
    LOCALES_DIRECTORY: Final[str] = "locales"

    MAIN_LOG_FILE: Final[str] = "beanstore.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"
    PERFORMANCE_LOG_FILE: Final[str] = "performance.log"


# Error codes
class ErrorCodes:
    """Standardized error codes"""

    GENERAL_ERROR: Final[str] = "GENERAL_ERROR"
    NETWORK_ERROR: Final[str] = "NETWORK_ERROR"
    API_ERROR: Final[str] = "API_ERROR"
    BUSINESS_ERROR: Final[str] = "BUSINESS_ERROR"
    AUTHENTICATION_ERROR: Final[str] = "AUTHENTICATION_ERROR"
    PAYMENT_ERROR: Final[str] = "PAYMENT_ERROR"


# Configuration validation
class ConfigValidation:
    """Configuration validation constants"""

    VALID_ENVIRONMENTS: Final[list[str]] = ["development", "test", "staging", "production"]
    VALID_LANGUAGES: Final[list[str]] = ["ja", "en"]
    URL_PREFIXES: Final[tuple] = ("http://", "https://")
    STRIPE_KEY_PREFIX: Final[str] = "pk_"
