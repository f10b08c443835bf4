"""Inventory operations: validation state machine, stock writes and queries.

Validation flow for an operation that is not yet terminal:
  1. Geofencing gate (only with geofencing enabled and a known user coordinate).
  2. Stock sufficiency gate (deliveries and internal transfers).
  3. Per-line stock/location mutation.
  4. Status transition: deliveries go to Shipped, everything else to Done.

Both gates run before any line is touched, so a rejection leaves the store
exactly as it was. A shipped delivery is closed by a second validation that
only changes its status.
"""

import functools
import math
import random
import threading
import uuid
from collections import Counter
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .notifications import NotificationCenter
from .store import InventoryStore
from ..models.contact import Contact, User
from ..models.dashboard import DashboardMetrics
from ..models.operation import (
    Operation,
    OperationItem,
    OperationStatus,
    OperationType,
    ADJUSTMENT_LOCATION,
    CUSTOMER_LOCATION,
    VENDOR_LOCATION,
)
from ..models.operation_result import OperationResult, Outcome
from ..models.product import Product
from ..utils.config import get_config
from ..utils.exceptions import (
    AuthenticationError,
    InvalidOperationError,
    InvalidQuantityError,
    NegativeStockError,
)
from ..utils.geo import within_radius
from ..utils.logger import get_inventory_logger

STOCK_CHECKED_TYPES = (OperationType.DELIVERY, OperationType.INTERNAL)
ADJUSTMENT_MODES = ("overwrite", "add")
INTERNAL_AUDIT_PARTNER = "Internal Audit"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _locked(method):
    """Run `method` under the service lock; sync endpoints share a threadpool."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class InventoryService:
    """Owns the store and is the only place that mutates it."""

    def __init__(
        self,
        store: Optional[InventoryStore] = None,
        notifications: Optional[NotificationCenter] = None,
        rng: Optional[random.Random] = None
    ):
        self.config = get_config()
        self.logger = get_inventory_logger()

        inventory_config = self.config.inventory
        self.store = store or InventoryStore.seeded(
            seed_value=inventory_config.seed,
            generated_products=inventory_config.generated_products,
            generated_contacts=inventory_config.generated_contacts,
            geofencing_enabled=inventory_config.geofencing_enabled
        )
        self.notifications = notifications or NotificationCenter(self.config.notifications.ttl_seconds)
        self.rng = rng or random.Random()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Operation validation
    # ------------------------------------------------------------------

    @_locked
    def validate_operation(self, operation_id: str) -> OperationResult:
        """
        Advance an operation through its next status, applying stock changes.

        Args:
            operation_id: Operation to validate

        Returns:
            OperationResult describing the transition or the rejection

        Raises:
            OperationNotFoundError: Unknown operation id
        """
        op = self.store.get_operation(operation_id)
        result = OperationResult(
            success=True,
            operation_id=op.id,
            from_status=op.status,
            to_status=op.status
        )

        if op.status.is_terminal:
            self.logger.info(f"{op.reference}: already {op.status.value}, nothing to validate")
            result.outcome = Outcome.NOOP
            result.message = f"Operation is already {op.status.value}."
            return result

        # Second phase of a delivery: stock left at the Shipped transition
        if op.type == OperationType.DELIVERY and op.status == OperationStatus.SHIPPED:
            self.store.set_status(op.id, OperationStatus.DONE)
            result.outcome = Outcome.COMPLETED
            result.to_status = OperationStatus.DONE
            result.message = "Delivery marked as completed."
            self.logger.info(f"{op.reference}: Shipped -> Done")
            self.notifications.add("success", result.message)
            return result

        if not self._check_geofence(op, result):
            return self._reject(op, result)

        if not self._check_stock(op, result):
            return self._reject(op, result)

        result.items_applied = self._apply_items(op)

        next_status = OperationStatus.SHIPPED if op.type == OperationType.DELIVERY else OperationStatus.DONE
        self.store.set_status(op.id, next_status)
        result.to_status = next_status

        if op.type == OperationType.DELIVERY:
            result.outcome = Outcome.SHIPPED
            result.message = "Order marked as Shipped."
        else:
            result.outcome = Outcome.COMPLETED
            result.message = "Operation validated successfully."

        self.logger.info(
            f"{op.reference}: {result.from_status.value} -> {next_status.value} "
            f"({result.items_applied} line(s) applied)"
        )
        self.notifications.add("success", result.message)
        return result

    def _required_location(self, op: Operation) -> str:
        """Warehouse the user must stand in to validate ``op``."""
        if op.type == OperationType.RECEIPT:
            return op.dest_location
        return op.source_location

    def _check_geofence(self, op: Operation, result: OperationResult) -> bool:
        if not self.store.geofencing_enabled or self.store.user_location is None:
            return True

        location_name = self._required_location(op)
        warehouse = self.store.warehouses.get(location_name)

        # Unregistered warehouses are not fenced
        if warehouse is None:
            self.logger.warning(
                f"{op.reference}: no coordinate registered for '{location_name}', geofence check skipped"
            )
            result.details["geofence_skipped"] = True
            result.details["location"] = location_name
            return True

        user_lat, user_lng = self.store.user_location
        inside, distance = within_radius(user_lat, user_lng, warehouse)
        result.details.update({
            "location": location_name,
            "distance": distance,
            "radius": warehouse.radius
        })

        if not inside:
            result.success = False
            result.outcome = Outcome.GEOFENCE_VIOLATION
            result.message = (
                f"Geofence Violation: You are {_round_half_up(distance)}m away from "
                f"{location_name}. Operation blocked."
            )
            return False

        return True

    def _check_stock(self, op: Operation, result: OperationResult) -> bool:
        if op.type not in STOCK_CHECKED_TYPES:
            return True

        # Lines repeating a product draw on the same stock
        requested = Counter()
        for item in op.items:
            requested[item.product_id] += item.quantity

        for product_id, quantity in requested.items():
            product = self.store.find_product(product_id)
            if product is None:
                result.add_error(product_id, "ProductNotFound", "Product does not exist")
            elif product.stock < quantity:
                result.add_error(
                    product_id,
                    "InsufficientStock",
                    f"Requested {quantity}, available {product.stock}",
                    details={"requested": quantity, "available": product.stock}
                )

        if result.errors:
            result.outcome = Outcome.INSUFFICIENT_STOCK
            result.message = "Validation Failed: Insufficient stock for one or more items."
            return False

        return True

    def _apply_items(self, op: Operation) -> int:
        applied = 0
        for item in op.items:
            product = self.store.find_product(item.product_id)
            if product is None:
                self.logger.warning(f"{op.reference}: skipping unknown product {item.product_id}")
                continue

            if op.type == OperationType.RECEIPT:
                self.store.write_stock(product.id, product.stock + item.quantity)
            elif op.type == OperationType.DELIVERY:
                self.store.write_stock(product.id, product.stock - item.quantity)
            elif op.type == OperationType.INTERNAL:
                # Single location per product: the whole record moves
                self.store.move_product(product.id, op.dest_location)
            else:
                continue
            applied += 1
        return applied

    def _reject(self, op: Operation, result: OperationResult) -> OperationResult:
        self.logger.warning(f"{op.reference}: rejected ({result.outcome.value}) - {result.message}")
        self.notifications.add("error", result.message)
        return result

    # ------------------------------------------------------------------
    # Direct stock paths
    # ------------------------------------------------------------------

    def _direct_write(self, product_id: str, new_stock: int) -> Product:
        return self.store.write_stock(
            product_id, new_stock, audited=self.config.inventory.audit_direct_writes
        )

    @_locked
    def update_stock(self, product_id: str, new_quantity: int) -> Product:
        """Overwrite a product's stock without any gate."""
        product = self._direct_write(product_id, new_quantity)
        self.logger.info(f"Stock of {product.name} set to {product.stock}")
        self.notifications.add("success", "Stock adjusted manually.")
        return product

    @_locked
    def quick_add_stock(self, product_id: str, quantity: int) -> OperationResult:
        """Add units to a product and log a Done adjustment record."""
        if quantity <= 0:
            raise InvalidQuantityError("Quantity to add must be positive", details={"quantity": quantity})

        product = self.store.get_product(product_id)
        new_stock = product.stock + quantity

        log_entry = self._record_adjustment(Operation(
            id=self._new_id("quick-add"),
            type=OperationType.ADJUSTMENT,
            status=OperationStatus.DONE,
            reference=f"ADJ/QUICK/{self.rng.randint(1000, 9999)}",
            source_location=ADJUSTMENT_LOCATION,
            dest_location=product.location,
            items=[OperationItem(product.id, quantity)]
        ))
        return self._finish_direct_write(log_entry, product, new_stock)

    @_locked
    def adjust_stock(
        self,
        product_id: str,
        value: int,
        mode: str = "overwrite",
        location: Optional[str] = None,
        reason: str = ""
    ) -> OperationResult:
        """
        Correct stock from a physical count or an ad-hoc addition.

        Args:
            product_id: Product to correct
            value: New count (overwrite) or units to add (add)
            mode: "overwrite" or "add"
            location: Warehouse where the count happened
            reason: Free-text note, logged only

        Returns:
            OperationResult for the logged adjustment record
        """
        if mode not in ADJUSTMENT_MODES:
            raise InvalidOperationError(f"Unknown adjustment mode: {mode}", details={"mode": mode})

        product = self.store.get_product(product_id)
        location = location or self.store.default_warehouse

        if mode == "add":
            final_quantity = product.stock + value
            logged_quantity = value
        else:
            final_quantity = value
            logged_quantity = abs(product.stock - value)

        log_entry = self._record_adjustment(Operation(
            id=self._new_id("adj"),
            type=OperationType.ADJUSTMENT,
            status=OperationStatus.DONE,
            reference=f"INV/ADJ/{self.rng.randint(1000, 9999)}",
            source_location=location,
            dest_location=location,
            items=[OperationItem(product.id, logged_quantity)],
            partner_id=INTERNAL_AUDIT_PARTNER
        ))
        if reason:
            self.logger.info(f"{log_entry.reference}: reason '{reason}'")
        return self._finish_direct_write(log_entry, product, final_quantity)

    def _record_adjustment(self, log_entry: Operation) -> Operation:
        # Silent: the stock write that follows emits the notification
        self.store.add_operation(log_entry)
        self.logger.info(f"{log_entry.reference}: adjustment recorded for {log_entry.items[0].product_id}")
        return log_entry

    def _finish_direct_write(self, log_entry: Operation, product: Product, new_stock: int) -> OperationResult:
        result = OperationResult(
            success=True,
            operation_id=log_entry.id,
            from_status=log_entry.status,
            to_status=log_entry.status,
            details={"product_id": product.id, "previous_stock": product.stock}
        )
        try:
            self.update_stock(product.id, new_stock)
        except NegativeStockError as e:
            # The log record stays; it is cosmetic
            result.success = False
            result.outcome = Outcome.NEGATIVE_STOCK
            result.message = e.message
            result.details.update(e.details)
            self.logger.warning(f"{log_entry.reference}: {e.message}")
            self.notifications.add("error", e.message)
            return result

        result.outcome = Outcome.ADJUSTED
        result.items_applied = 1
        result.details["new_stock"] = product.stock
        result.message = f"Stock updated for {product.name} to {product.stock} units."
        return result

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    @_locked
    def add_product(self, data: Dict[str, Any]) -> Product:
        """Create a product from a camelCase payload; ``name`` and ``sku`` are required."""
        if not data.get("name") or not data.get("sku"):
            raise InvalidOperationError("Product name and SKU are required", details={"payload": data})

        payload = dict(data)
        payload["id"] = payload.get("id") or self._new_id("p")
        payload["barcode"] = payload.get("barcode") or str(self.rng.randint(10000000, 99999999))
        payload.setdefault("location", self.store.default_warehouse)

        try:
            product = Product.from_dict(payload)
        except (TypeError, ValueError) as e:
            raise InvalidOperationError(f"Invalid product: {e}", details={"payload": data})

        self.store.add_product(product)
        self.logger.info(f"Product {product.id} ({product.name}) created with stock {product.stock}")
        self.notifications.add("success", f"Product {product.name} created.")
        return product

    @_locked
    def add_operation(self, operation: Operation) -> Operation:
        self.store.add_operation(operation)
        self.logger.info(f"{operation.type.value} {operation.reference} recorded as {operation.status.value}")
        self.notifications.add("info", f"{operation.type.value} created ({operation.reference}).")
        return operation

    @_locked
    def create_operation(
        self,
        op_type: OperationType,
        items: Iterable[Any],
        source_location: Optional[str] = None,
        dest_location: Optional[str] = None,
        partner_id: Optional[str] = None,
        reference_prefix: str = "WH",
        reference_number: Optional[int] = None
    ) -> Operation:
        """
        Create a Draft operation from form input.

        Lines without a product or with a non-positive quantity are dropped.
        Product ids are not checked here; validation rejects dangling lines.

        Raises:
            InvalidOperationError: No usable line remains
        """
        op_type = OperationType(op_type)
        valid_items = [item for item in self._coerce_items(items) if item.product_id and item.quantity > 0]
        if not valid_items:
            raise InvalidOperationError("An operation needs at least one product with a positive quantity")

        default_source, default_dest = self._default_locations(op_type)
        number = self.rng.randint(1000, 9999) if reference_number is None else reference_number

        return self.add_operation(Operation(
            id=self._new_id("op"),
            type=op_type,
            status=OperationStatus.DRAFT,
            reference=f"{reference_prefix}/{op_type.reference_code}/{number}",
            source_location=source_location or default_source,
            dest_location=dest_location or default_dest,
            items=valid_items,
            partner_id=partner_id or None
        ))

    def _default_locations(self, op_type: OperationType) -> Tuple[str, str]:
        current = self.store.default_warehouse
        first = next(iter(self.store.warehouses), current)
        if op_type == OperationType.RECEIPT:
            return VENDOR_LOCATION, current
        if op_type == OperationType.DELIVERY:
            return current, CUSTOMER_LOCATION
        return current, first

    @staticmethod
    def _coerce_items(items: Iterable[Any]) -> List[OperationItem]:
        coerced = []
        for item in items:
            if isinstance(item, OperationItem):
                coerced.append(item)
            elif isinstance(item, dict):
                coerced.append(OperationItem.from_dict(item))
            else:
                product_id, quantity = item
                coerced.append(OperationItem(product_id, int(quantity)))
        return coerced

    @_locked
    def add_contact(self, data: Dict[str, Any]) -> Contact:
        if not data.get("name") or not data.get("type"):
            raise InvalidOperationError("Contact name and type are required", details={"payload": data})

        payload = dict(data)
        payload["id"] = payload.get("id") or self._new_id("c")
        try:
            contact = Contact.from_dict(payload)
        except ValueError as e:
            raise InvalidOperationError(str(e), details={"payload": data})

        self.store.add_contact(contact)
        self.notifications.add("success", f"Contact {contact.name} added.")
        return contact

    @_locked
    def delete_contact(self, contact_id: str) -> Contact:
        contact = self.store.remove_contact(contact_id)
        self.notifications.add("info", "Contact removed.")
        return contact

    # ------------------------------------------------------------------
    # Session and geofencing settings
    # ------------------------------------------------------------------

    def login(self, email: str, password: str, warehouse: Optional[str] = None) -> User:
        """Cosmetic login: any non-empty pair is accepted."""
        if not email or not password:
            raise AuthenticationError("Email and password are required")

        warehouse = warehouse or next(iter(self.store.warehouses), "")
        name = email.split("@")[0]
        self.store.current_user = User(id="u1", name=name, email=email, role="Manager", warehouse=warehouse)
        self.notifications.add("success", f"Welcome to {warehouse}, {name}!")
        return self.store.current_user

    def logout(self):
        self.store.current_user = None
        self.notifications.add("info", "Logged out successfully.")

    def toggle_geofencing(self, enabled: bool):
        self.store.geofencing_enabled = bool(enabled)
        self.logger.info(f"Geofencing {'enabled' if enabled else 'disabled'}")

    def set_user_location(self, lat: float, lng: float):
        self.store.user_location = (float(lat), float(lng))

    def teleport_to(self, warehouse_name: str) -> Tuple[float, float]:
        """Place the user at a registered warehouse coordinate."""
        warehouse = self.store.get_warehouse(warehouse_name)
        self.set_user_location(warehouse.lat, warehouse.lng)
        return self.store.user_location

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search_products(self, term: str = "") -> List[Product]:
        term_lower = term.lower()
        return [
            p for p in self.store.products
            if term_lower in p.name.lower()
            or term_lower in p.sku.lower()
            or (p.barcode and term in p.barcode)
        ]

    def low_stock_products(self) -> List[Product]:
        return [p for p in self.store.products if p.is_low_stock]

    def find_product_by_name(self, name: str) -> Optional[Product]:
        """First product whose name contains ``name`` (case-insensitive)."""
        needle = (name or "").lower()
        return next((p for p in self.store.products if needle in p.name.lower()), None)

    def find_contact_by_name(self, name: str) -> Optional[Contact]:
        needle = (name or "").lower()
        return next((c for c in self.store.contacts if needle in c.name.lower()), None)

    def dashboard_metrics(self) -> DashboardMetrics:
        def pending(op_type: OperationType) -> int:
            return sum(1 for o in self.store.operations if o.type == op_type and o.status != OperationStatus.DONE)

        return DashboardMetrics(
            total_products=len(self.store.products),
            low_stock_count=len(self.low_stock_products()),
            pending_receipts=pending(OperationType.RECEIPT),
            pending_deliveries=pending(OperationType.DELIVERY),
            internal_transfers=pending(OperationType.INTERNAL)
        )

    def category_breakdown(self, top: int = 5) -> List[Dict[str, Any]]:
        """Product count per category, largest first, tail folded into ``Others``."""
        counts = Counter(p.category or "Uncategorized" for p in self.store.products)
        ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)

        breakdown = [{"name": name, "value": value} for name, value in ranked[:top]]
        others = sum(value for _, value in ranked[top:])
        if others > 0:
            breakdown.append({"name": "Others", "value": others})
        return breakdown

    def operations_for_warehouse(self, warehouse: str, op_type: Optional[OperationType] = None) -> List[Operation]:
        return [
            op for op in self.store.operations
            if (op.source_location == warehouse or op.dest_location == warehouse)
            and (op_type is None or op.type == OperationType(op_type))
        ]

    def history(self) -> List[Operation]:
        return [
            op for op in self.store.operations
            if op.status in (OperationStatus.DONE, OperationStatus.SHIPPED)
        ]

    def partner_options(self, op_type: OperationType) -> List[Contact]:
        op_type = OperationType(op_type)
        if op_type == OperationType.RECEIPT:
            wanted = "Vendor"
        elif op_type == OperationType.DELIVERY:
            wanted = "Customer"
        else:
            return []
        return [c for c in self.store.contacts if c.type == wanted]

    def search_contacts(self, term: str = "") -> List[Contact]:
        term_lower = term.lower()
        return [
            c for c in self.store.contacts
            if term_lower in c.name.lower() or term_lower in c.email.lower()
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _new_id(prefix: str) -> str:
        return f"{prefix}-{datetime.utcnow().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6]}"
