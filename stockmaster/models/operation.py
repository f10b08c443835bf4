"""Stock operation data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional

# Pseudo-locations that are never registered warehouses
VENDOR_LOCATION = "Vendor"
CUSTOMER_LOCATION = "Customer"
ADJUSTMENT_LOCATION = "Adjustment"


class OperationType(str, Enum):
    RECEIPT = "Incoming Receipt"
    DELIVERY = "Delivery Order"
    INTERNAL = "Internal Transfer"
    ADJUSTMENT = "Inventory Adjustment"

    @property
    def reference_code(self) -> str:
        """Short code used in operation references (``WH/IN/1234``)."""
        if self is OperationType.RECEIPT:
            return "IN"
        if self is OperationType.DELIVERY:
            return "OUT"
        return "INT"


class OperationStatus(str, Enum):
    DRAFT = "Draft"
    WAITING = "Waiting"
    READY = "Ready"
    SHIPPED = "Shipped"
    DONE = "Done"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OperationStatus.DONE, OperationStatus.CANCELLED)


@dataclass
class OperationItem:
    """A single line of an operation."""

    product_id: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperationItem":
        return cls(product_id=data.get("productId", ""), quantity=int(data.get("quantity", 0)))


@dataclass
class Operation:
    """Receipt, delivery, internal transfer or adjustment of stock."""

    id: str
    type: OperationType
    status: OperationStatus
    reference: str
    source_location: str
    dest_location: str
    items: List[OperationItem] = field(default_factory=list)
    date: str = field(default_factory=lambda: datetime.utcnow().isoformat())
    partner_id: Optional[str] = None

    def __post_init__(self):
        """Coerce enum fields given as plain strings."""
        self.type = OperationType(self.type)
        self.status = OperationStatus(self.status)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "type": self.type.value,
            "status": self.status.value,
            "reference": self.reference,
            "sourceLocation": self.source_location,
            "destLocation": self.dest_location,
            "items": [item.to_dict() for item in self.items],
            "date": self.date,
            "partnerId": self.partner_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Operation":
        """Create instance from dictionary."""
        return cls(
            id=data["id"],
            type=data["type"],
            status=data.get("status", OperationStatus.DRAFT),
            reference=data.get("reference", ""),
            source_location=data.get("sourceLocation", ""),
            dest_location=data.get("destLocation", ""),
            items=[OperationItem.from_dict(item) for item in data.get("items", [])],
            date=data.get("date") or datetime.utcnow().isoformat(),
            partner_id=data.get("partnerId")
        )
