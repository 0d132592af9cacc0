"""
Profile use case
"""

import logging
from typing import Optional

from beanstore.application.auth_context import AuthContext
from beanstore.application.interfaces import Notifier
from beanstore.application.use_cases.shipping_address_use_case import (
    LOOKUP_FOUND,
    PostalCodeInput,
)
from beanstore.domain.entities.profile_entity import Profile
from beanstore.domain.repositories.address_lookup import AddressLookup
from beanstore.domain.repositories.profile_repository import ProfileRepository
from beanstore.infrastructure.utilities.exceptions import ApiError, BeanStoreError, ErrorReporter
from beanstore.infrastructure.utilities.i18n import tr


class ProfileEditor:
    """Edits the signed-in user's profile"""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        address_lookup: AddressLookup,
        auth_context: AuthContext,
        notifier: Notifier,
        profile: Optional[Profile] = None,
    ):
        self._profile_repository = profile_repository
        self._auth_context = auth_context
        self._notifier = notifier
        self.profile = profile or Profile()
        self.post_code = PostalCodeInput(address_lookup, self.profile.post_code)
        self.profile.post_code = self.post_code.value
        self.error_message: Optional[str] = None
        self._logger = logging.getLogger(self.__class__.__name__)

    async def change_post_code(self, raw: str) -> Profile:
        """Format the post code and prefill the address from it"""
        self.profile.post_code = await self.post_code.change(raw)
        if self.post_code.last_lookup == LOOKUP_FOUND:
            self.profile.address = self.post_code.prefecture + self.post_code.city
        return self.profile

    async def save(self, profile: Optional[Profile] = None, create: bool = False) -> bool:
        """POST a new profile or PUT changes to the existing one"""
        if profile is not None:
            self.profile = profile
        self.error_message = None

        if not self._auth_context.is_authenticated:
            self.error_message = tr("LOGIN_REQUIRED")
            return False

        try:
            if create:
                saved = await self._profile_repository.create_profile(self.profile)
            else:
                saved = await self._profile_repository.update_profile(self.profile)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "profile.save")
            if isinstance(e, ApiError):
                self.error_message = e.display_message(tr("PROFILE_SAVE_FAILED"))
            else:
                self.error_message = e.user_message
            self._notifier.error(tr("ERROR_TITLE"), self.error_message)
            return False

        self.profile = saved
        self._notifier.success(tr("SUCCESS_TITLE"), tr("PROFILE_SAVED"))
        self._logger.info("👤 PROFILE SAVED (create=%s)", create)
        return True
