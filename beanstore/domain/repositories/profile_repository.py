"""
Profile repository interface
"""

from abc import ABC, abstractmethod

from beanstore.domain.entities.profile_entity import Profile


class ProfileRepository(ABC):
    """Repository interface for profile operations"""

    @abstractmethod
    async def create_profile(self, profile: Profile) -> Profile:
        """Create the signed-in user's profile"""

    @abstractmethod
    async def update_profile(self, profile: Profile) -> Profile:
        """Update the signed-in user's profile"""
