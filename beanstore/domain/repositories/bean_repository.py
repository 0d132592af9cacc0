"""
Bean repository interface

Defines the contract for bean catalog access.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from beanstore.domain.entities.bean_entity import Bean, BeanSummary


class BeanRepository(ABC):
    """Repository interface for bean operations"""

    @abstractmethod
    async def list_beans(self) -> List[BeanSummary]:
        """List every bean in the catalog"""

    @abstractmethod
    async def get_bean(self, bean_id: int) -> Bean:
        """Get one bean with all of its fields"""

    @abstractmethod
    async def list_my_beans(self) -> List[Bean]:
        """List beans registered by the signed-in user"""

    @abstractmethod
    async def create_bean(self, payload: Dict[str, Any]) -> Bean:
        """Register a new bean"""

    @abstractmethod
    async def update_bean(self, bean_id: int, payload: Dict[str, Any]) -> Bean:
        """Update an existing bean"""

    @abstractmethod
    async def delete_bean(self, bean_id: int) -> None:
        """Delete a bean"""
