"""
Profile Entity
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Profile:
    """User profile kept by the storefront backend"""

    display_name: str = ""
    icon_url: str = ""
    post_code: str = ""
    address: str = ""
    about_me: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "display_name": self.display_name.strip(),
            "icon_url": self.icon_url.strip(),
            "post_code": self.post_code,
            "address": self.address.strip(),
            "about_me": self.about_me,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            display_name=data.get("display_name") or "",
            icon_url=data.get("icon_url") or "",
            post_code=data.get("post_code") or "",
            address=data.get("address") or "",
            about_me=data.get("about_me") or "",
        )
