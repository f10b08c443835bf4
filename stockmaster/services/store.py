"""In-memory entity store.

One store instance owns every collection for the lifetime of the process.
Nothing is persisted: a restart reseeds the demo catalog.
"""

import random
from typing import Dict, List, Optional, Tuple

from ..data import seed
from ..data.warehouses import WAREHOUSE_LOCATIONS
from ..models.contact import Contact, User
from ..models.operation import Operation, OperationStatus
from ..models.product import Product
from ..models.warehouse import WarehouseLocation
from ..utils.exceptions import (
    ContactNotFoundError,
    InvalidOperationError,
    NegativeStockError,
    OperationNotFoundError,
    ProductNotFoundError,
    WarehouseNotFoundError,
)


class InventoryStore:
    """Products, operations, contacts and the session/geofencing context."""

    def __init__(
        self,
        products: Optional[List[Product]] = None,
        operations: Optional[List[Operation]] = None,
        contacts: Optional[List[Contact]] = None,
        warehouses: Optional[Dict[str, WarehouseLocation]] = None,
        geofencing_enabled: bool = False
    ):
        self.products: List[Product] = list(products or [])
        self.operations: List[Operation] = list(operations or [])
        self.contacts: List[Contact] = list(contacts or [])
        self.warehouses: Dict[str, WarehouseLocation] = dict(
            WAREHOUSE_LOCATIONS if warehouses is None else warehouses
        )
        self.geofencing_enabled = geofencing_enabled
        self.user_location: Optional[Tuple[float, float]] = None
        self.current_user: Optional[User] = None

    @classmethod
    def seeded(
        cls,
        seed_value: Optional[int] = None,
        generated_products: int = 150,
        generated_contacts: int = 80,
        geofencing_enabled: bool = False
    ) -> "InventoryStore":
        """Build a store filled with the demo catalog."""
        rng = random.Random(seed_value)
        return cls(
            products=seed.initial_products(rng, generated_products),
            operations=seed.sample_operations(),
            contacts=seed.initial_contacts(rng, generated_contacts),
            geofencing_enabled=geofencing_enabled
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def get_product(self, product_id: str) -> Product:
        product = self.find_product(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product not found: {product_id}", details={"product_id": product_id})
        return product

    def get_operation(self, operation_id: str) -> Operation:
        for op in self.operations:
            if op.id == operation_id:
                return op
        raise OperationNotFoundError(f"Operation not found: {operation_id}", details={"operation_id": operation_id})

    def get_contact(self, contact_id: str) -> Contact:
        for contact in self.contacts:
            if contact.id == contact_id:
                return contact
        raise ContactNotFoundError(f"Contact not found: {contact_id}", details={"contact_id": contact_id})

    def get_warehouse(self, name: str) -> WarehouseLocation:
        location = self.warehouses.get(name)
        if location is None:
            raise WarehouseNotFoundError(f"Warehouse has no registered coordinate: {name}", details={"warehouse": name})
        return location

    @property
    def default_warehouse(self) -> str:
        """Warehouse of the session user, else the first registered one."""
        if self.current_user and self.current_user.warehouse:
            return self.current_user.warehouse
        return next(iter(self.warehouses), "")

    # ------------------------------------------------------------------
    # Inserts
    # ------------------------------------------------------------------

    def add_product(self, product: Product) -> Product:
        if self.find_product(product.id) is not None:
            raise InvalidOperationError(f"Duplicate product id: {product.id}", details={"product_id": product.id})
        self.products.append(product)
        return product

    def add_operation(self, operation: Operation) -> Operation:
        if any(op.id == operation.id for op in self.operations):
            raise InvalidOperationError(f"Duplicate operation id: {operation.id}", details={"operation_id": operation.id})
        self.operations.insert(0, operation)
        return operation

    def add_contact(self, contact: Contact) -> Contact:
        self.contacts.append(contact)
        return contact

    def remove_contact(self, contact_id: str) -> Contact:
        contact = self.get_contact(contact_id)
        self.contacts = [c for c in self.contacts if c.id != contact_id]
        return contact

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def write_stock(self, product_id: str, new_stock: int, audited: bool = True) -> Product:
        """
        Single write path for product stock levels.

        Args:
            product_id: Product to update
            new_stock: Absolute stock level to store
            audited: Reject values below zero when set

        Raises:
            ProductNotFoundError: Unknown product
            NegativeStockError: Audited write below zero
        """
        product = self.get_product(product_id)
        if audited and new_stock < 0:
            raise NegativeStockError(
                f"Stock for {product.name} cannot go below zero",
                details={"product_id": product_id, "current": product.stock, "requested": new_stock}
            )
        product.stock = int(new_stock)
        return product

    def move_product(self, product_id: str, location: str) -> Product:
        product = self.get_product(product_id)
        product.location = location
        return product

    def set_status(self, operation_id: str, status: OperationStatus) -> Operation:
        operation = self.get_operation(operation_id)
        operation.status = status
        return operation
