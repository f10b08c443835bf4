"""Dashboard aggregates."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class DashboardMetrics:
    total_products: int = 0
    low_stock_count: int = 0
    pending_receipts: int = 0
    pending_deliveries: int = 0
    internal_transfers: int = 0

    @property
    def healthy_stock_count(self) -> int:
        return self.total_products - self.low_stock_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalProducts": self.total_products,
            "lowStockCount": self.low_stock_count,
            "healthyStockCount": self.healthy_stock_count,
            "pendingReceipts": self.pending_receipts,
            "pendingDeliveries": self.pending_deliveries,
            "internalTransfers": self.internal_transfers
        }
