"""
Configuration management for the bean storefront client
"""

import logging
import threading
from pathlib import Path
from typing import Optional

import httpx
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from beanstore.infrastructure.utilities.constants import (
    CartSettings,
    ConfigValidation,
    HttpSettings,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Storefront backend
    api_base_url: str = Field(
        default="http://localhost:8080", description="Base URL of the storefront REST API"
    )
    app_origin: str = Field(
        default="http://localhost:5173",
        description="Origin the storefront is served from, used for redirect URLs",
    )
    request_timeout_seconds: float = Field(
        default=HttpSettings.DEFAULT_TIMEOUT_SECONDS,
        description="Timeout for outgoing HTTP requests",
        gt=0,
    )

    # Auth provider
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_anon_key: str = Field(default="", description="Supabase anonymous API key")

    # Payment provider
    stripe_publishable_key: str = Field(default="", description="Stripe publishable key")
    stripe_api_base: str = Field(
        default="https://api.stripe.com", description="Stripe API base URL"
    )

    # Postal code lookup
    postal_lookup_url: str = Field(
        default="https://zipcloud.ibsnet.co.jp/api/search",
        description="Postal code to address lookup endpoint",
    )

    # Cart
    max_cart_quantity: int = Field(
        default=CartSettings.MAX_QUANTITY,
        description="Largest quantity a single cart line may hold",
        ge=CartSettings.MIN_QUANTITY,
    )

    # Application settings
    language: str = Field(default="ja", description="Language of user-facing messages")
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: str = Field(default="logs", description="Directory for log files")
    environment: str = Field(default="development", description="Application environment")


_settings_instance: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next get_config() re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None


class ConfigValidator:
    """Validates configuration before the client talks to any backend"""

    def __init__(self, config: Optional[Settings] = None):
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.config: Optional[Settings] = config

    def validate_all(self, check_connectivity: bool = False) -> bool:
        """Run all validation checks and collect results"""
        if self.config is None:
            try:
                self.config = get_config()
            except (ValueError, TypeError) as exc:
                self.errors.append(f"Failed to load configuration: {exc}")
                return False

        self._validate_urls()
        self._validate_provider_keys()
        self._validate_environment_settings()
        if check_connectivity:
            self._validate_backend_reachable()

        self._log_validation_results()
        return not self.errors

    def get_validation_report(self) -> dict[str, object]:
        """Return detailed report after running `validate_all()`."""
        return {
            "valid": not self.errors,
            "errors": self.errors,
            "warnings": self.warnings,
            "config_summary": {
                "environment": self.config.environment if self.config else None,
                "api_base_url": self.config.api_base_url if self.config else None,
                "auth_configured": bool(
                    self.config and self.config.supabase_url and self.config.supabase_anon_key
                ),
                "payments_configured": bool(
                    self.config and self.config.stripe_publishable_key
                ),
            },
        }

    def _validate_urls(self):
        for name in ("api_base_url", "app_origin", "stripe_api_base", "postal_lookup_url"):
            value = getattr(self.config, name)
            if not value:
                self.errors.append(f"{name.upper()} is required")
            elif not value.startswith(ConfigValidation.URL_PREFIXES):
                self.errors.append(f"{name.upper()} must be an http(s) URL: {value}")

        if self.config.supabase_url and not self.config.supabase_url.startswith(
            ConfigValidation.URL_PREFIXES
        ):
            self.errors.append(f"SUPABASE_URL must be an http(s) URL: {self.config.supabase_url}")

    def _validate_provider_keys(self):
        if not self.config.supabase_url:
            self.errors.append("SUPABASE_URL is required")
        if not self.config.supabase_anon_key:
            self.errors.append("SUPABASE_ANON_KEY is required")

        key = self.config.stripe_publishable_key
        if not key:
            self.errors.append("STRIPE_PUBLISHABLE_KEY is required")
        elif not key.startswith(ConfigValidation.STRIPE_KEY_PREFIX):
            self.errors.append("STRIPE_PUBLISHABLE_KEY must be a publishable (pk_) key")
        elif self.config.environment == "production" and key.startswith("pk_test_"):
            self.warnings.append("Using a Stripe test key in production")

    def _validate_environment_settings(self):
        if self.config.environment not in ConfigValidation.VALID_ENVIRONMENTS:
            self.warnings.append(f"Unknown environment: {self.config.environment}")
        if self.config.environment == "production":
            if self.config.log_level.upper() == "DEBUG":
                self.warnings.append("DEBUG logging in production may impact performance")
        if self.config.language not in ConfigValidation.VALID_LANGUAGES:
            self.warnings.append(f"Unsupported language: {self.config.language}")

        log_dir = Path(self.config.log_dir)
        if log_dir.exists() and not log_dir.is_dir():
            self.errors.append(f"LOG_DIR is not a directory: {log_dir}")

    def _validate_backend_reachable(self):
        try:
            response = httpx.get(
                self.config.api_base_url.rstrip("/") + "/api/beans",
                timeout=self.config.request_timeout_seconds,
            )
            if response.status_code >= 400:
                self.warnings.append(
                    f"Backend health check returned status {response.status_code}"
                )
        except httpx.RequestError as exc:
            self.warnings.append(f"Could not reach backend: {exc}")

    def _log_validation_results(self):
        if self.errors:
            logger.error(
                "Configuration validation failed",
                extra={"errors": self.errors, "warnings": self.warnings},
            )
        elif self.warnings:
            logger.warning(
                "Configuration validation passed with warnings",
                extra={"warnings": self.warnings},
            )
        else:
            logger.info("Configuration validation passed successfully")


def validate_production_readiness(check_connectivity: bool = False) -> bool:
    """Validate configuration and print a summary to the console."""
    validator = ConfigValidator()
    is_valid = validator.validate_all(check_connectivity=check_connectivity)
    report = validator.get_validation_report()

    if not is_valid:
        print("❌ Configuration validation FAILED:")
        for err in report["errors"]:
            print(f"  - {err}")
    elif report["warnings"]:
        print("⚠️  Configuration validation passed with warnings:")
        for warn in report["warnings"]:
            print(f"  - {warn}")
    else:
        print("✅ Configuration validation PASSED without warnings")
    return is_valid
