"""Result models returned by stock-mutating actions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional

from .operation import OperationStatus


class Outcome(str, Enum):
    COMPLETED = "completed"
    SHIPPED = "shipped"
    ADJUSTED = "adjusted"
    NOOP = "noop"
    GEOFENCE_VIOLATION = "geofence_violation"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NEGATIVE_STOCK = "negative_stock"


@dataclass
class ItemError:
    """Represents a rejected operation line."""

    product_id: str
    error_type: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details
        }


@dataclass
class OperationResult:
    """Outcome of validating an operation or writing stock directly."""

    success: bool
    operation_id: Optional[str] = None
    outcome: Optional[Outcome] = None
    message: str = ""
    from_status: Optional[OperationStatus] = None
    to_status: Optional[OperationStatus] = None
    items_applied: int = 0
    errors: List[ItemError] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def add_error(self, product_id: str, error_type: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Record a rejected line and mark the result as failed."""
        self.errors.append(ItemError(
            product_id=product_id,
            error_type=error_type,
            message=message,
            details=details
        ))
        self.success = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "success": self.success,
            "operation_id": self.operation_id,
            "outcome": self.outcome.value if self.outcome else None,
            "message": self.message,
            "from_status": self.from_status.value if self.from_status else None,
            "to_status": self.to_status.value if self.to_status else None,
            "items_applied": self.items_applied,
            "errors": [error.to_dict() for error in self.errors],
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }

    def get_summary(self) -> str:
        """Get a human-readable summary."""
        status_change = ""
        if self.from_status and self.to_status and self.from_status != self.to_status:
            status_change = f" ({self.from_status.value} -> {self.to_status.value})"

        summary_lines = [f"{self.operation_id or '-'}: {self.outcome.value if self.outcome else 'unknown'}{status_change}"]
        if self.message:
            summary_lines.append(f"  {self.message}")

        for error in self.errors[:5]:
            summary_lines.append(f"  - {error.product_id}: {error.message}")
        if len(self.errors) > 5:
            summary_lines.append(f"  ... and {len(self.errors) - 5} more errors")

        return "\n".join(summary_lines)
