"""Partner contact and session user models."""

from dataclasses import dataclass
from typing import Dict, Any

CONTACT_TYPES = ("Vendor", "Customer", "Internal")
USER_ROLES = ("Manager", "Staff")


@dataclass
class Contact:
    """A vendor, customer or internal partner."""

    id: str
    name: str
    type: str = "Vendor"
    email: str = ""
    phone: str = ""
    address: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Contact name cannot be empty")

        if self.type not in CONTACT_TYPES:
            raise ValueError(f"Contact type must be one of {', '.join(CONTACT_TYPES)}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "email": self.email,
            "phone": self.phone,
            "address": self.address
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        return cls(
            id=data["id"],
            name=data["name"],
            type=data.get("type", "Vendor"),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            address=data.get("address", "")
        )


@dataclass
class User:
    """Logged-in user. Cosmetic: credentials are never verified."""

    id: str
    name: str
    email: str
    role: str
    warehouse: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "warehouse": self.warehouse
        }
