"""
HTTP Profile Repository
"""

import logging

from beanstore.domain.entities.profile_entity import Profile
from beanstore.domain.repositories.profile_repository import ProfileRepository
from beanstore.infrastructure.http.api_client import BeanStoreApiClient
from beanstore.infrastructure.utilities.constants import ApiPaths


class HttpProfileRepository(ProfileRepository):
    """REST implementation of profile repository"""

    def __init__(self, client: BeanStoreApiClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    async def create_profile(self, profile: Profile) -> Profile:
        payload = await self._client.post(ApiPaths.PROFILE, json=profile.to_payload(), auth=True)
        return Profile.from_dict(payload) if isinstance(payload, dict) else profile

    async def update_profile(self, profile: Profile) -> Profile:
        payload = await self._client.put(ApiPaths.PROFILE, json=profile.to_payload(), auth=True)
        return Profile.from_dict(payload) if isinstance(payload, dict) else profile
