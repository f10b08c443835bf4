"""Schema of the structured reply expected from the hosted model."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Intent = Literal["CREATE_PRODUCT", "CREATE_OPERATION", "CHECK_STOCK", "UNKNOWN"]

# Declared to the model as its response schema (OpenAPI subset)
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "intent": {"type": "STRING"},
        "data": {
            "type": "OBJECT",
            "properties": {
                "productName": {"type": "STRING"},
                "quantity": {"type": "NUMBER"},
                "partnerName": {"type": "STRING"},
                "operationType": {"type": "STRING"},
                "targetLocation": {"type": "STRING"}
            }
        },
        "reply": {"type": "STRING"}
    }
}


class CommandData(BaseModel):
    """Entities extracted from a free-text command."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_name: Optional[str] = Field(default=None, alias="productName")
    quantity: Optional[int] = None
    partner_name: Optional[str] = Field(default=None, alias="partnerName")
    operation_type: Optional[Literal["IN", "OUT", "INT"]] = Field(default=None, alias="operationType")
    target_location: Optional[str] = Field(default=None, alias="targetLocation")

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value):
        # The schema declares NUMBER, so 3.0 is a legal reply
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("quantity must be a whole number")
            return int(value)
        return value

    @field_validator("quantity")
    @classmethod
    def positive_quantity(cls, value):
        if value is not None and value <= 0:
            raise ValueError("quantity must be positive")
        return value

    @field_validator("operation_type", mode="before")
    @classmethod
    def normalize_operation_type(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or None
        return value


class AICommandResponse(BaseModel):
    """Intent classification returned by the assistant."""

    model_config = ConfigDict(extra="ignore")

    intent: Intent
    data: Optional[CommandData] = None
    reply: str = ""

    @field_validator("intent", mode="before")
    @classmethod
    def normalize_intent(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value
