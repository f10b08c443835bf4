"""Tests for data models."""

import pytest
from pydantic import ValidationError

from stockmaster.models.assistant import AICommandResponse, CommandData
from stockmaster.models.contact import Contact
from stockmaster.models.dashboard import DashboardMetrics
from stockmaster.models.notification import Notification
from stockmaster.models.operation import Operation, OperationItem, OperationStatus, OperationType
from stockmaster.models.operation_result import OperationResult, Outcome
from stockmaster.models.product import Product


class TestProduct:
    """Tests for Product model."""

    def test_create_product(self, sample_product):
        """Test creating a valid Product."""
        assert sample_product.sku == "RM-900"
        assert sample_product.stock == 30
        assert sample_product.location == "Main Warehouse"

    def test_product_validation_empty_sku(self):
        """Test that empty SKU raises ValueError."""
        with pytest.raises(ValueError, match="SKU cannot be empty"):
            Product(id="p1", name="Steel Rods", sku="")

    def test_product_validation_empty_name(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            Product(id="p1", name="", sku="RM-001")

    def test_low_stock_is_inclusive(self):
        """Stock equal to the reorder threshold counts as low."""
        assert Product(id="p1", name="A", sku="A", stock=15, min_stock_rule=15).is_low_stock
        assert not Product(id="p1", name="A", sku="A", stock=16, min_stock_rule=15).is_low_stock

    def test_product_to_dict_uses_camel_case(self, sample_product):
        data = sample_product.to_dict()

        assert data["minStockRule"] == 40
        assert "min_stock_rule" not in data

    def test_product_from_dict(self):
        """Test creating Product from dictionary."""
        product = Product.from_dict({
            "id": "p9",
            "name": "Bolt",
            "sku": "HW-9",
            "stock": "12",
            "minStockRule": 5
        })

        assert product.stock == 12
        assert product.min_stock_rule == 5
        assert product.uom == "Units"


class TestOperation:
    """Tests for Operation model."""

    def test_enum_fields_coerced_from_strings(self):
        op = Operation(
            id="x",
            type="Delivery Order",
            status="Ready",
            reference="WH/OUT/1",
            source_location="Main Warehouse",
            dest_location="Customer"
        )

        assert op.type is OperationType.DELIVERY
        assert op.status is OperationStatus.READY

    def test_invalid_status_rejected(self):
        with pytest.raises(ValueError):
            Operation(id="x", type="Delivery Order", status="Lost", reference="", source_location="", dest_location="")

    def test_terminal_statuses(self):
        assert OperationStatus.DONE.is_terminal
        assert OperationStatus.CANCELLED.is_terminal
        assert not OperationStatus.SHIPPED.is_terminal
        assert not OperationStatus.DRAFT.is_terminal

    def test_reference_codes(self):
        assert OperationType.RECEIPT.reference_code == "IN"
        assert OperationType.DELIVERY.reference_code == "OUT"
        assert OperationType.INTERNAL.reference_code == "INT"

    def test_from_dict(self):
        op = Operation.from_dict({
            "id": "op9",
            "type": "Incoming Receipt",
            "sourceLocation": "Vendor",
            "destLocation": "Main Warehouse",
            "items": [{"productId": "p1", "quantity": "5"}],
            "partnerId": "c1"
        })

        assert op.status is OperationStatus.DRAFT
        assert op.items == [OperationItem("p1", 5)]
        assert op.to_dict()["items"] == [{"productId": "p1", "quantity": 5}]


class TestOperationResult:
    """Tests for OperationResult model."""

    def test_add_error_marks_failure(self):
        result = OperationResult(success=True, operation_id="op2")

        result.add_error("p3", "InsufficientStock", "Requested 10, available 8")

        assert result.success is False
        assert len(result.errors) == 1
        assert result.errors[0].product_id == "p3"

    def test_summary_shows_transition(self):
        result = OperationResult(
            success=True,
            operation_id="op3",
            outcome=Outcome.COMPLETED,
            message="Operation validated successfully.",
            from_status=OperationStatus.DRAFT,
            to_status=OperationStatus.DONE
        )

        summary = result.get_summary()

        assert summary.splitlines()[0] == "op3: completed (Draft -> Done)"
        assert "Operation validated successfully." in summary

    def test_to_dict(self):
        result = OperationResult(success=False, operation_id="op2", outcome=Outcome.INSUFFICIENT_STOCK)
        result.add_error("p3", "InsufficientStock", "short", details={"requested": 10, "available": 8})

        data = result.to_dict()

        assert data["outcome"] == "insufficient_stock"
        assert data["errors"][0]["details"]["available"] == 8


class TestAICommandResponse:
    """Tests for the assistant reply schema."""

    def test_valid_reply(self):
        response = AICommandResponse.model_validate({
            "intent": "create_operation",
            "data": {"productName": "Steel", "quantity": 5.0, "operationType": "in"},
            "reply": "Drafting receipt."
        })

        assert response.intent == "CREATE_OPERATION"
        assert response.data.quantity == 5
        assert response.data.operation_type == "IN"

    def test_unknown_intent_rejected(self):
        with pytest.raises(ValidationError):
            AICommandResponse.model_validate({"intent": "DELETE_EVERYTHING"})

    def test_fractional_quantity_rejected(self):
        with pytest.raises(ValidationError):
            CommandData.model_validate({"quantity": 2.5})

    def test_non_positive_quantity_rejected(self):
        with pytest.raises(ValidationError):
            CommandData.model_validate({"quantity": 0})

    def test_bad_operation_type_rejected(self):
        with pytest.raises(ValidationError):
            CommandData.model_validate({"operationType": "SIDEWAYS"})


class TestMiscModels:
    """Tests for contact, notification and dashboard models."""

    def test_contact_type_validated(self):
        with pytest.raises(ValueError, match="Contact type"):
            Contact(id="c9", name="Acme", type="Supplier")

    def test_notification_expiry(self):
        notification = Notification(id="n1", type="info", message="hi", timestamp=100.0)

        assert not notification.is_expired(5.0, now=104.9)
        assert notification.is_expired(5.0, now=105.0)

    def test_notification_type_validated(self):
        with pytest.raises(ValueError):
            Notification(id="n1", type="fatal", message="boom")

    def test_dashboard_metrics(self):
        metrics = DashboardMetrics(
            total_products=10,
            low_stock_count=3,
            pending_receipts=1,
            pending_deliveries=2,
            internal_transfers=0
        )

        data = metrics.to_dict()

        assert data["healthyStockCount"] == 7
        assert data["pendingDeliveries"] == 2
