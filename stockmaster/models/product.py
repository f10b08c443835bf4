"""Product data model."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class Product:
    """A stocked item. ``location`` is the single warehouse holding all of its units."""

    id: str
    name: str
    sku: str
    barcode: str = ""
    category: str = ""
    uom: str = "Units"
    stock: int = 0
    location: str = ""
    price: float = 0.0
    min_stock_rule: int = 0

    def __post_init__(self):
        """Validate and normalize data."""
        if not self.id:
            raise ValueError("Product id cannot be empty")

        if not self.name:
            raise ValueError("Product name cannot be empty")

        if not self.sku:
            raise ValueError("SKU cannot be empty")

        self.stock = int(self.stock)
        self.min_stock_rule = int(self.min_stock_rule)

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock_rule

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "barcode": self.barcode,
            "category": self.category,
            "uom": self.uom,
            "stock": self.stock,
            "location": self.location,
            "price": self.price,
            "minStockRule": self.min_stock_rule
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Create instance from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            sku=data["sku"],
            barcode=data.get("barcode", ""),
            category=data.get("category", ""),
            uom=data.get("uom", "Units"),
            stock=data.get("stock", 0),
            location=data.get("location", ""),
            price=data.get("price", 0.0),
            min_stock_rule=data.get("minStockRule", 0)
        )
