"""
Custom exceptions and error reporting for the bean storefront client
"""

import logging
import traceback

from beanstore.infrastructure.utilities.constants import ErrorCodes, PaymentSettings

logger = logging.getLogger(__name__)


class BeanStoreError(Exception):
    """Base exception for the storefront client"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "エラーが発生しました。もう一度お試しください。"
        self.error_code = error_code or ErrorCodes.GENERAL_ERROR


class NetworkError(BeanStoreError):
    """The request never produced an HTTP response"""

    def __init__(self, message: str, url: str = None):
        super().__init__(
            message,
            "通信エラーが発生しました。ネットワーク接続をご確認ください。",
            ErrorCodes.NETWORK_ERROR,
        )
        self.url = url


class ApiError(BeanStoreError):
    """Non-2xx response from a backend"""

    def __init__(self, status_code: int, message: str = None, url: str = None):
        super().__init__(
            message or f"HTTP error! status: {status_code}",
            message,
            ErrorCodes.API_ERROR,
        )
        self.status_code = status_code
        self.server_message = message
        self.url = url

    def display_message(self, fallback: str = None) -> str:
        """Server message when it sent one, otherwise the fallback"""
        if self.server_message:
            return self.server_message
        return fallback or f"HTTP error! status: {self.status_code}"


class InvalidResponseError(BeanStoreError):
    """2xx response whose body does not have the expected shape"""

    def __init__(self, url: str, detail: str = None):
        super().__init__(
            f"Unexpected response body from {url}: {detail or 'unreadable'}",
            "サーバーから予期しない形式のデータを受信しました。",
            ErrorCodes.API_ERROR,
        )
        self.url = url


class AuthenticationRequiredError(BeanStoreError):
    """Operation needs a signed-in session"""

    def __init__(self, operation: str = None):
        super().__init__(
            f"Authentication required for {operation or 'operation'}",
            "ログインが必要です。再度ログインしてください。",
            ErrorCodes.AUTHENTICATION_ERROR,
        )
        self.operation = operation


class BusinessLogicError(BeanStoreError):
    """Business rule violations"""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message, user_message or message, ErrorCodes.BUSINESS_ERROR)


class MissingClientSecretError(BusinessLogicError):
    """Payment intent response carried no client secret"""

    def __init__(self):
        super().__init__(
            "Payment intent response has no client secret",
            "client_secretがレスポンスに含まれていません。",
        )


class InvalidQuantityError(BusinessLogicError):
    """Quantity outside the allowed bounds"""

    def __init__(self, quantity: int):
        super().__init__(
            f"Invalid quantity: {quantity}", "数量は1以上で入力してください。"
        )
        self.quantity = quantity


class PaymentError(BeanStoreError):
    """Error reported by the payment provider"""

    def __init__(self, error_type: str, message: str = None, code: str = None):
        super().__init__(
            message or f"Payment provider error: {error_type}",
            message,
            ErrorCodes.PAYMENT_ERROR,
        )
        self.error_type = error_type
        self.provider_message = message
        self.code = code

    @property
    def is_card_level(self) -> bool:
        """Card and validation errors carry a message meant for the customer"""
        return self.error_type in PaymentSettings.CARD_LEVEL_ERROR_TYPES


# pylint: disable=too-few-public-methods
class ErrorReporter:
    """Error reporting helpers"""

    @staticmethod
    def report_critical_error(error: Exception):
        """Report critical errors to the log"""
        logger.critical(
            "CRITICAL ERROR: %s",
            error,
            extra={
                "error_type": type(error).__name__,
                "traceback": traceback.format_exc(),
            },
        )

    @staticmethod
    def report_operation_error(error: BeanStoreError, operation: str):
        """Report a handled error for later analysis"""
        logger.info(
            "Handled error in %s: %s - %s",
            operation,
            error.error_code,
            error,
            extra={
                "error_code": error.error_code,
                "operation": operation,
                "error_type": type(error).__name__,
            },
        )
