# pylint: disable=too-many-instance-attributes
"""
Bean Entity - coffee bean records and the editable bean form
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from beanstore.infrastructure.utilities.constants import BeanOptions


@dataclass(frozen=True)
class BeanSummary:
    """Bean as shown in list views"""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BeanSummary":
        return cls(id=int(data["id"]), name=str(data.get("name", "")))


@dataclass
class Bean:
    """Coffee bean domain entity"""

    id: Optional[int]
    name: str
    origin: str
    price: int
    process: str
    roast_profile: str
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bean":
        return cls(
            id=int(data["id"]) if data.get("id") is not None else None,
            name=str(data.get("name", "")),
            origin=str(data.get("origin", "")),
            price=int(data.get("price", 0)),
            process=str(data.get("process", "")),
            roast_profile=str(data.get("roast_profile", "")),
            user_id=data.get("user_id"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_summary(self) -> BeanSummary:
        return BeanSummary(id=self.id or 0, name=self.name)


@dataclass
class BeanForm:
    """Editable bean fields; price stays text until validated"""

    name: str = ""
    origin: str = ""
    price: str = ""
    process: str = ""
    roast_profile: str = ""
    errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_bean(cls, bean: Bean) -> "BeanForm":
        return cls(
            name=bean.name,
            origin=bean.origin,
            price=str(bean.price),
            process=bean.process,
            roast_profile=bean.roast_profile,
        )

    def parsed_price(self) -> Optional[int]:
        try:
            price = int(str(self.price).strip())
        except (TypeError, ValueError):
            return None
        return price if price >= BeanOptions.MIN_PRICE else None

    def validate(self, messages: Dict[str, str]) -> bool:
        """Fill `errors` with one message per invalid field; True when valid"""
        self.errors = {}
        if not self.name.strip():
            self.errors["name"] = messages["name"]
        if not self.origin.strip():
            self.errors["origin"] = messages["origin"]
        if self.parsed_price() is None:
            self.errors["price"] = messages["price"]
        if self.process not in BeanOptions.PROCESSES:
            self.errors["process"] = messages["process"]
        if self.roast_profile not in BeanOptions.ROAST_PROFILES:
            self.errors["roast_profile"] = messages["roast_profile"]
        return not self.errors

    def to_payload(self) -> Dict[str, Any]:
        """Request body: the bean fields minus id"""
        return {
            "name": self.name.strip(),
            "origin": self.origin.strip(),
            "price": self.parsed_price(),
            "process": self.process,
            "roast_profile": self.roast_profile,
        }
