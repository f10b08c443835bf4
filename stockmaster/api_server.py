"""FastAPI server exposing the in-memory inventory.

State lives in one process-wide ``InventoryService`` and resets on restart.
The notification purge and low stock report jobs run in the same process.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .models.operation import OperationType
from .scheduler import create_background_scheduler
from .services.assistant_service import AssistantService
from .services.inventory_service import InventoryService
from .utils.config import get_config
from .utils.exceptions import AuthenticationError, BaseAppException, NotFoundError
from .utils.logger import get_server_logger

config = get_config()
logger = get_server_logger()
inventory_service = InventoryService()
assistant_service = AssistantService(inventory_service)


def get_inventory() -> InventoryService:
    return inventory_service


def get_assistant() -> AssistantService:
    return assistant_service


# ------------------------------------------------------------------
# Request bodies
# ------------------------------------------------------------------

class LoginRequest(BaseModel):
    email: str
    password: str
    warehouse: Optional[str] = None


class ProductRequest(BaseModel):
    name: str
    sku: str
    barcode: str = ""
    category: str = ""
    uom: str = "Units"
    stock: int = 0
    location: Optional[str] = None
    price: float = 0.0
    minStockRule: int = 0


class QuickAddRequest(BaseModel):
    quantity: int


class AdjustmentRequest(BaseModel):
    productId: str
    value: int
    mode: Literal["overwrite", "add"] = "overwrite"
    location: Optional[str] = None
    reason: str = ""


class OperationItemRequest(BaseModel):
    productId: str = ""
    quantity: int = 0


class OperationRequest(BaseModel):
    type: OperationType
    items: List[OperationItemRequest]
    sourceLocation: Optional[str] = None
    destLocation: Optional[str] = None
    partnerId: Optional[str] = None


class ContactRequest(BaseModel):
    name: str
    type: Literal["Vendor", "Customer", "Internal"] = "Vendor"
    email: str = ""
    phone: str = ""
    address: str = ""


class GeofencingRequest(BaseModel):
    enabled: bool


class LocationRequest(BaseModel):
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    warehouse: Optional[str] = None


class CommandRequest(BaseModel):
    text: str


# ------------------------------------------------------------------
# Lifespan
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage startup / shutdown of the application."""
    logger.info("=" * 60)
    logger.info("StockMaster Inventory Server Starting")
    logger.info("=" * 60)
    logger.info(f"Environment:          {config.env.environment}")
    logger.info(f"Port:                 {config.env.port}")
    logger.info(f"Products loaded:      {len(inventory_service.store.products)}")
    logger.info(f"Geofencing:           {inventory_service.store.geofencing_enabled}")
    logger.info(f"AI assistant:         {'configured' if config.env.gemini_api_key else 'no API key'}")
    logger.info("=" * 60)

    scheduler = create_background_scheduler(inventory_service)
    scheduler.start()
    logger.info("Background jobs started")

    yield

    logger.info("Shutting down background jobs...")
    scheduler.shutdown(wait=True)
    assistant_service.close()
    logger.info("Server shut down.")


app = FastAPI(
    title="StockMaster Inventory Server",
    description="In-memory inventory with geofenced operation validation",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/")
async def root():
    return {
        "service": "StockMaster Inventory Server",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": config.env.environment
    }


# ------------------------------------------------------------------
# Session
# ------------------------------------------------------------------

@app.post("/auth/login")
def login(body: LoginRequest, service: InventoryService = Depends(get_inventory)):
    user = service.login(body.email, body.password, body.warehouse)
    return user.to_dict()


@app.post("/auth/logout")
def logout(service: InventoryService = Depends(get_inventory)):
    service.logout()
    return {"status": "logged_out"}


# ------------------------------------------------------------------
# Products and stock
# ------------------------------------------------------------------

@app.get("/products")
def list_products(
    search: str = "",
    low_stock: bool = False,
    service: InventoryService = Depends(get_inventory)
):
    products = service.search_products(search)
    if low_stock:
        products = [p for p in products if p.is_low_stock]
    return [p.to_dict() for p in products]


@app.post("/products", status_code=201)
def create_product(body: ProductRequest, service: InventoryService = Depends(get_inventory)):
    payload = body.model_dump(exclude_none=True)
    return service.add_product(payload).to_dict()


@app.post("/products/{product_id}/quick-add")
def quick_add(product_id: str, body: QuickAddRequest, service: InventoryService = Depends(get_inventory)):
    result = service.quick_add_stock(product_id, body.quantity)
    return _result_response(result)


@app.post("/adjustments")
def adjust(body: AdjustmentRequest, service: InventoryService = Depends(get_inventory)):
    result = service.adjust_stock(body.productId, body.value, body.mode, body.location, body.reason)
    return _result_response(result)


# ------------------------------------------------------------------
# Operations
# ------------------------------------------------------------------

@app.get("/operations")
def list_operations(
    warehouse: Optional[str] = None,
    op_type: Optional[OperationType] = Query(default=None, alias="type"),
    service: InventoryService = Depends(get_inventory)
):
    if warehouse:
        operations = service.operations_for_warehouse(warehouse, op_type)
    else:
        operations = [op for op in service.store.operations if op_type is None or op.type == op_type]
    return [op.to_dict() for op in operations]


@app.post("/operations", status_code=201)
def create_operation(body: OperationRequest, service: InventoryService = Depends(get_inventory)):
    operation = service.create_operation(
        body.type,
        [item.model_dump() for item in body.items],
        source_location=body.sourceLocation,
        dest_location=body.destLocation,
        partner_id=body.partnerId
    )
    return operation.to_dict()


@app.get("/operations/{operation_id}")
def get_operation(operation_id: str, service: InventoryService = Depends(get_inventory)):
    return service.store.get_operation(operation_id).to_dict()


@app.post("/operations/{operation_id}/validate")
def validate_operation(operation_id: str, service: InventoryService = Depends(get_inventory)):
    result = service.validate_operation(operation_id)
    return _result_response(result)


@app.get("/history")
def history(service: InventoryService = Depends(get_inventory)):
    return [op.to_dict() for op in service.history()]


def _result_response(result) -> JSONResponse:
    """200 for applied or no-op results, 409 for rejections."""
    return JSONResponse(status_code=200 if result.success else 409, content=result.to_dict())


# ------------------------------------------------------------------
# Contacts
# ------------------------------------------------------------------

@app.get("/contacts")
def list_contacts(
    search: str = "",
    for_type: Optional[OperationType] = None,
    service: InventoryService = Depends(get_inventory)
):
    contacts = service.partner_options(for_type) if for_type else service.search_contacts(search)
    return [c.to_dict() for c in contacts]


@app.post("/contacts", status_code=201)
def create_contact(body: ContactRequest, service: InventoryService = Depends(get_inventory)):
    return service.add_contact(body.model_dump()).to_dict()


@app.delete("/contacts/{contact_id}")
def delete_contact(contact_id: str, service: InventoryService = Depends(get_inventory)):
    contact = service.delete_contact(contact_id)
    return {"status": "deleted", "id": contact.id}


# ------------------------------------------------------------------
# Dashboard and assistant
# ------------------------------------------------------------------

@app.get("/dashboard")
def dashboard(service: InventoryService = Depends(get_inventory)):
    return {
        "metrics": service.dashboard_metrics().to_dict(),
        "categories": service.category_breakdown()
    }


@app.get("/dashboard/summary")
def dashboard_summary(assistant: AssistantService = Depends(get_assistant)):
    return {"summary": assistant.analyze_inventory()}


@app.post("/assistant/command")
def assistant_command(body: CommandRequest, assistant: AssistantService = Depends(get_assistant)):
    return {"reply": assistant.process_command(body.text)}


# ------------------------------------------------------------------
# Notifications and settings
# ------------------------------------------------------------------

@app.get("/notifications")
def list_notifications(service: InventoryService = Depends(get_inventory)):
    return [n.to_dict() for n in service.notifications.active()]


@app.delete("/notifications/{notification_id}")
def dismiss_notification(notification_id: str, service: InventoryService = Depends(get_inventory)):
    if not service.notifications.remove(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"status": "dismissed", "id": notification_id}


@app.get("/settings/geofencing")
def get_geofencing(service: InventoryService = Depends(get_inventory)):
    return {"enabled": service.store.geofencing_enabled}


@app.put("/settings/geofencing")
def put_geofencing(body: GeofencingRequest, service: InventoryService = Depends(get_inventory)):
    service.toggle_geofencing(body.enabled)
    return {"enabled": service.store.geofencing_enabled}


@app.get("/settings/location")
def get_location(service: InventoryService = Depends(get_inventory)):
    location = service.store.user_location
    if location is None:
        return {"lat": None, "lng": None}
    return {"lat": location[0], "lng": location[1]}


@app.put("/settings/location")
def put_location(body: LocationRequest, service: InventoryService = Depends(get_inventory)):
    if body.warehouse:
        lat, lng = service.teleport_to(body.warehouse)
    elif body.lat is not None and body.lng is not None:
        service.set_user_location(body.lat, body.lng)
        lat, lng = body.lat, body.lng
    else:
        raise HTTPException(status_code=400, detail="Provide lat and lng, or a warehouse name")
    return {"lat": lat, "lng": lng}


@app.get("/warehouses")
def list_warehouses(service: InventoryService = Depends(get_inventory)):
    return [w.to_dict() for w in service.store.warehouses.values()]


# ------------------------------------------------------------------
# Exception handlers
# ------------------------------------------------------------------

@app.exception_handler(BaseAppException)
async def app_exception_handler(request: Request, exc: BaseAppException):
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, AuthenticationError):
        status_code = 401
    else:
        status_code = 400
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "details": exc.details, "status_code": status_code}
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"HTTP {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Last-resort handler for unexpected errors."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if not config.is_production else "An error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stockmaster.api_server:app",
        host="0.0.0.0",
        port=config.env.port,
        reload=not config.is_production
    )
