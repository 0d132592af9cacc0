"""
Bean DTOs
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from beanstore.domain.entities.bean_entity import Bean, BeanSummary


@dataclass
class BeanListResponse:
    """Response for catalog list operations"""
    success: bool
    beans: List[BeanSummary] = field(default_factory=list)
    error_message: Optional[str] = None


@dataclass
class MyBeansResponse:
    """Response for the signed-in user's bean list"""
    success: bool
    beans: List[Bean] = field(default_factory=list)
    error_message: Optional[str] = None


@dataclass
class BeanResponse:
    """Response for single bean operations"""
    success: bool
    bean: Optional[Bean] = None
    error_message: Optional[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)
