"""AI assistant: executive summaries and free-text commands.

The hosted model is an untrusted boundary. Every reply is schema-checked
before use, and any failure degrades to a fixed fallback instead of raising.
"""

import json
from typing import Optional, Sequence

from pydantic import ValidationError

from .inventory_service import InventoryService
from ..api.gemini_client import GeminiClient
from ..models.assistant import AICommandResponse, RESPONSE_SCHEMA
from ..models.operation import Operation, OperationStatus, OperationType, CUSTOMER_LOCATION, VENDOR_LOCATION
from ..models.product import Product
from ..utils.config import get_config
from ..utils.exceptions import BaseAppException
from ..utils.logger import get_assistant_logger, get_error_logger

MISSING_KEY_SUMMARY = "API Key is missing. Please configure the environment variable."
SUMMARY_FAILED = "Unable to generate insights at this time. Please try again later."
MISSING_KEY_REPLY = "AI Configuration missing."
UNREADABLE_REPLY = "I'm having trouble understanding the neural link."
UNMATCHED_REPLY = "I understood the intent but was unable to execute the parameter match."
SYSTEM_ERROR_REPLY = "System error processing voice command."

_SUMMARY_PROMPT = """
You are an expert Inventory Manager AI for 'StockMaster'.
Analyze the following inventory data and provide a concise executive summary and 3 actionable recommendations.

Data:
- Total Products: {total}
- Low Stock Items: {low_stock}
- Recent Operations Pending: {pending}

Keep the tone professional and efficient.
"""

_COMMAND_PROMPT = """
You are the Voice Assistant for an Inventory System.
User Command: "{command}"

Context:
- Existing Products: {products}...
- Existing Partners: {partners}...

Task: classify the intent and extract entities.

Intents:
1. CREATE_PRODUCT: User wants to define a new item.
2. CREATE_OPERATION: User wants to move stock (Buy/Receive, Sell/Deliver, Move/Transfer).
3. CHECK_STOCK: User asks about quantity or location.
4. UNKNOWN: Gibberish or unrelated.

Return JSON complying with this schema:
{{
  intent: string,
  data: {{
    productName?: string (fuzzy matched if possible),
    quantity?: number,
    partnerName?: string (fuzzy matched),
    operationType?: 'IN' (Receipt) | 'OUT' (Delivery) | 'INT' (Internal),
    targetLocation?: string
  }},
  reply: string (A short, robotic, cool response confirming what you are doing)
}}
"""


class AssistantService:
    """Bridges the inventory service and the hosted generative model."""

    def __init__(self, inventory: InventoryService, client: Optional[GeminiClient] = None):
        self.config = get_config()
        self.logger = get_assistant_logger()
        self.error_logger = get_error_logger()
        self.inventory = inventory
        self._client = client

    def _get_client(self) -> Optional[GeminiClient]:
        if self._client is None and self.config.env.gemini_api_key:
            self._client = GeminiClient()
        return self._client

    # ------------------------------------------------------------------
    # Executive summary
    # ------------------------------------------------------------------

    def analyze_inventory(
        self,
        products: Optional[Sequence[Product]] = None,
        operations: Optional[Sequence[Operation]] = None
    ) -> str:
        """Natural-language summary with recommendations; never raises."""
        client = self._get_client()
        if client is None:
            return MISSING_KEY_SUMMARY

        products = self.inventory.store.products if products is None else products
        operations = self.inventory.store.operations if operations is None else operations

        low_stock = ", ".join(
            f"{p.name} (Qty: {p.stock}, Min: {p.min_stock_rule})" for p in products if p.is_low_stock
        )
        pending = sum(1 for o in operations if o.status != OperationStatus.DONE)
        prompt = _SUMMARY_PROMPT.format(total=len(products), low_stock=low_stock, pending=pending)

        try:
            return client.generate_text(prompt)
        except BaseAppException as e:
            self.error_logger.error(f"Inventory summary failed: {e.message}", extra={"details": e.details})
            return SUMMARY_FAILED

    # ------------------------------------------------------------------
    # Command interpretation
    # ------------------------------------------------------------------

    def interpret_command(
        self,
        command: str,
        product_names: Sequence[str],
        partner_names: Sequence[str]
    ) -> AICommandResponse:
        """Classify ``command`` into an intent; failures come back as UNKNOWN."""
        client = self._get_client()
        if client is None:
            return AICommandResponse(intent="UNKNOWN", reply=MISSING_KEY_REPLY)

        prompt = _COMMAND_PROMPT.format(
            command=command,
            products=", ".join(list(product_names)[:self.config.ai.max_product_names]),
            partners=", ".join(list(partner_names)[:self.config.ai.max_partner_names])
        )

        try:
            text = client.generate_text(prompt, response_schema=RESPONSE_SCHEMA)
            return AICommandResponse.model_validate(json.loads(text))
        except BaseAppException as e:
            self.error_logger.error(f"Command interpretation failed: {e.message}", extra={"details": e.details})
        except (ValueError, ValidationError) as e:
            self.error_logger.error(f"Unusable model reply: {str(e)}")

        return AICommandResponse(intent="UNKNOWN", reply=UNREADABLE_REPLY)

    def process_command(self, text: str) -> str:
        """Interpret ``text`` and carry out the resulting intent."""
        store = self.inventory.store
        try:
            result = self.interpret_command(
                text,
                [p.name for p in store.products],
                [c.name for c in store.contacts]
            )
            self.logger.info(f"Command '{text}' -> {result.intent}")

            if result.intent == "UNKNOWN":
                return result.reply

            data = result.data
            if result.intent == "CHECK_STOCK" and data and data.product_name:
                return self._check_stock(data.product_name)

            if result.intent == "CREATE_PRODUCT" and data and data.product_name:
                product = self.inventory.add_product({
                    "name": data.product_name,
                    "sku": f"AUTO-{self.inventory.rng.randrange(9000)}",
                    "category": "Uncategorized",
                    "uom": "Units",
                    "stock": data.quantity or 0,
                    "location": store.default_warehouse,
                    "price": 0,
                    "minStockRule": 10
                })
                return result.reply or f"Created new product: {product.name}"

            if result.intent == "CREATE_OPERATION" and data is not None:
                return self._create_operation(result)

            return UNMATCHED_REPLY

        except Exception as e:
            self.error_logger.error(f"Voice command failed: {str(e)}", exc_info=True)
            return SYSTEM_ERROR_REPLY

    def _check_stock(self, product_name: str) -> str:
        product = self.inventory.find_product_by_name(product_name)
        if product is None:
            return f"I couldn't find a product named {product_name}."
        return f"We have {product.stock} units of {product.name} in {product.location}."

    def _create_operation(self, result: AICommandResponse) -> str:
        data = result.data
        product = self.inventory.find_product_by_name(data.product_name) if data.product_name else None
        if product is None:
            return f"Could not identify product: {data.product_name}"

        partner = self.inventory.find_contact_by_name(data.partner_name) if data.partner_name else None
        store = self.inventory.store
        current = store.default_warehouse

        if data.operation_type == "IN":
            op_type, source, dest = OperationType.RECEIPT, VENDOR_LOCATION, current
        elif data.operation_type == "OUT":
            op_type, source, dest = OperationType.DELIVERY, current, CUSTOMER_LOCATION
        else:
            target = data.target_location if data.target_location in store.warehouses else current
            op_type, source, dest = OperationType.INTERNAL, current, target

        operation = self.inventory.create_operation(
            op_type,
            [(product.id, data.quantity or 1)],
            source_location=source,
            dest_location=dest,
            partner_id=partner.id if partner else None,
            reference_prefix="AI",
            reference_number=self.inventory.rng.randrange(1000)
        )
        return result.reply or f"{op_type.value} {operation.reference} drafted."

    def close(self):
        if self._client is not None:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
