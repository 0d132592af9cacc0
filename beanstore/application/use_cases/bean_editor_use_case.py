"""
Bean editor use case

Registration and editing of beans through the bean form.
"""

import logging
from typing import Dict, Optional

from beanstore.application.auth_context import AuthContext
from beanstore.application.dtos.bean_dtos import BeanResponse
from beanstore.application.use_cases.bean_catalog_use_case import fetch_error_message
from beanstore.application.interfaces import Dialog, DialogPresenter, Navigator
from beanstore.domain.entities.bean_entity import BeanForm
from beanstore.domain.repositories.bean_repository import BeanRepository
from beanstore.infrastructure.utilities.constants import Routes
from beanstore.infrastructure.utilities.exceptions import ApiError, BeanStoreError, ErrorReporter
from beanstore.infrastructure.utilities.i18n import tr


def form_messages() -> Dict[str, str]:
    return {
        "name": tr("BEAN_NAME_REQUIRED"),
        "origin": tr("BEAN_ORIGIN_REQUIRED"),
        "price": tr("BEAN_PRICE_INVALID"),
        "process": tr("BEAN_PROCESS_REQUIRED"),
        "roast_profile": tr("BEAN_ROAST_REQUIRED"),
    }


def submit_error_message(error: BeanStoreError) -> str:
    """Server message, else `HTTP error! status: N`, else the generic text"""
    if isinstance(error, ApiError):
        return error.display_message(tr("HTTP_STATUS_ERROR", status=error.status_code))
    return error.user_message


class BeanEditor:
    """Create and update beans"""

    def __init__(
        self,
        bean_repository: BeanRepository,
        auth_context: AuthContext,
        navigator: Navigator,
        dialogs: DialogPresenter,
    ):
        self._bean_repository = bean_repository
        self._auth_context = auth_context
        self._navigator = navigator
        self._dialogs = dialogs
        self.form = BeanForm()
        self.error_message: Optional[str] = None
        self.is_submitting = False
        self._logger = logging.getLogger(self.__class__.__name__)

    def _invalid(self, form: BeanForm) -> BeanResponse:
        return BeanResponse(success=False, field_errors=dict(form.errors))

    async def create(self, form: BeanForm) -> BeanResponse:
        """Register a new bean; the backend does not require a session for this"""
        self.form = form
        self.error_message = None
        if not form.validate(form_messages()):
            return self._invalid(form)

        self.is_submitting = True
        try:
            bean = await self._bean_repository.create_bean(form.to_payload())
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "bean_editor.create")
            self.error_message = submit_error_message(e)
            return BeanResponse(success=False, error_message=self.error_message)
        finally:
            self.is_submitting = False

        self._logger.info("✅ BEAN CREATED: %s", bean.id)
        self._dialogs.open(
            Dialog(
                title=tr("BEAN_CREATED_TITLE"),
                body=tr("BEAN_CREATED_BODY"),
                confirm_label=tr("DIALOG_OK"),
                on_confirm=lambda: self._navigator.navigate(Routes.HOME),
            )
        )
        return BeanResponse(success=True, bean=bean)

    async def load(self, bean_id: int) -> BeanResponse:
        """Fill the form with an existing bean"""
        self.error_message = None
        try:
            bean = await self._bean_repository.get_bean(bean_id)
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "bean_editor.load")
            self.error_message = fetch_error_message(e)
            return BeanResponse(success=False, error_message=self.error_message)

        self.form = BeanForm.from_bean(bean)
        return BeanResponse(success=True, bean=bean)

    async def update(self, bean_id: int, form: BeanForm) -> BeanResponse:
        """Save changes to a bean owned by the signed-in user"""
        self.form = form
        self.error_message = None
        if not self._auth_context.is_authenticated:
            self.error_message = tr("LOGIN_REQUIRED")
            return BeanResponse(success=False, error_message=self.error_message)
        if not form.validate(form_messages()):
            return self._invalid(form)

        self.is_submitting = True
        try:
            bean = await self._bean_repository.update_bean(bean_id, form.to_payload())
        except BeanStoreError as e:
            ErrorReporter.report_operation_error(e, "bean_editor.update")
            self.error_message = submit_error_message(e)
            return BeanResponse(success=False, error_message=self.error_message)
        finally:
            self.is_submitting = False

        self._logger.info("✅ BEAN UPDATED: %s", bean_id)
        self._dialogs.open(
            Dialog(
                title=tr("BEAN_UPDATED_TITLE"),
                body=tr("BEAN_UPDATED_BODY"),
                confirm_label=tr("DIALOG_OK"),
                on_confirm=lambda: self._navigator.navigate(Routes.MY_BEANS),
            )
        )
        return BeanResponse(success=True, bean=bean)
