"""Command-line interface for the in-memory inventory.

Every invocation starts from a freshly seeded store, so commands that
mutate stock only show the effect within the same run.
"""

import sys
from typing import Optional, Tuple

import click

from .data.warehouses import WAREHOUSE_LOCATIONS
from .models.operation_result import Outcome
from .services.assistant_service import AssistantService
from .services.inventory_service import InventoryService
from .utils.config import get_config
from .utils.exceptions import BaseAppException
from .utils.geo import calculate_distance

_OUTCOME_COLORS = {
    Outcome.COMPLETED: "green",
    Outcome.SHIPPED: "cyan",
    Outcome.ADJUSTED: "green",
    Outcome.NOOP: "yellow",
}


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """
    StockMaster inventory CLI.

    Inspect the demo catalog and run operations through the validator.
    """
    pass


@cli.command()
@click.option("--search", default="", help="Filter by name, SKU or barcode")
@click.option("--low-stock", is_flag=True, help="Only products at or below their reorder threshold")
@click.option("--limit", default=20, show_default=True, help="Maximum rows to print")
def products(search: str, low_stock: bool, limit: int):
    """List products."""
    service = InventoryService()
    rows = service.search_products(search)
    if low_stock:
        rows = [p for p in rows if p.is_low_stock]

    click.echo(f"{'ID':<8}{'SKU':<12}{'Name':<28}{'Stock':>8}  Location")
    click.echo("─" * 80)
    for product in rows[:limit]:
        line = f"{product.id:<8}{product.sku:<12}{product.name[:27]:<28}{product.stock:>8}  {product.location}"
        click.echo(click.style(line, fg="red") if product.is_low_stock else line)

    if len(rows) > limit:
        click.echo(f"... and {len(rows) - limit} more")


@cli.command()
@click.option("--warehouse", default=None, help="Only operations touching this warehouse")
def operations(warehouse: Optional[str]):
    """List operations, newest first."""
    service = InventoryService()
    rows = service.operations_for_warehouse(warehouse) if warehouse else service.store.operations

    for op in rows:
        items = ", ".join(f"{item.product_id} x{item.quantity}" for item in op.items)
        click.echo(
            f"{op.id:<6}{op.reference:<14}{op.type.value:<22}{op.status.value:<10}"
            f"{op.source_location} -> {op.dest_location}  [{items}]"
        )


@cli.command()
@click.argument("operation_ids", nargs=-1, required=True)
@click.option("--geofence/--no-geofence", default=None, help="Override the geofencing setting")
@click.option("--lat", type=float, default=None, help="User latitude")
@click.option("--lng", type=float, default=None, help="User longitude")
@click.option("--at", "at_warehouse", default=None, help="Place the user at a registered warehouse")
def validate(
    operation_ids: Tuple[str, ...],
    geofence: Optional[bool],
    lat: Optional[float],
    lng: Optional[float],
    at_warehouse: Optional[str]
):
    """
    Validate one or more operations in order.

    Repeat an id to walk a delivery through Shipped and Done:
    `stockmaster validate op2 op2`.
    """
    service = InventoryService()

    try:
        if geofence is not None:
            service.toggle_geofencing(geofence)
        if at_warehouse:
            service.teleport_to(at_warehouse)
        elif lat is not None and lng is not None:
            service.set_user_location(lat, lng)

        rejected = 0
        for operation_id in operation_ids:
            result = service.validate_operation(operation_id)
            color = _OUTCOME_COLORS.get(result.outcome, "red")
            mark = "✓" if result.success else "✗"
            click.echo(click.style(f"{mark} {result.get_summary()}", fg=color))
            if not result.success:
                rejected += 1

        sys.exit(1 if rejected else 0)

    except BaseAppException as e:
        click.echo(click.style(f"✗ {e.message}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@click.argument("lat1", type=float)
@click.argument("lng1", type=float)
@click.argument("lat2", type=float)
@click.argument("lng2", type=float)
def distance(lat1: float, lng1: float, lat2: float, lng2: float):
    """Great-circle distance in meters between two coordinates."""
    click.echo(f"{calculate_distance(lat1, lng1, lat2, lng2):.1f} m")


@cli.command()
def summary():
    """Ask the AI assistant for an executive summary."""
    with AssistantService(InventoryService()) as assistant:
        click.echo(assistant.analyze_inventory())


@cli.command()
@click.argument("text")
def ask(text: str):
    """Send a free-text command to the AI assistant."""
    with AssistantService(InventoryService()) as assistant:
        click.echo(assistant.process_command(text))


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", type=int, default=None, help="Defaults to the PORT setting")
def serve(host: str, port: Optional[int]):
    """Run the HTTP API server."""
    import uvicorn

    config = get_config()
    uvicorn.run("stockmaster.api_server:app", host=host, port=port or config.env.port)


@cli.command("config-info")
def config_info():
    """Display current configuration settings."""
    try:
        config = get_config()

        click.echo("Configuration Settings:")
        click.echo("=" * 60)
        click.echo()

        click.echo("Environment:")
        click.echo(f"  Environment:       {config.env.environment}")
        click.echo(f"  Log level:         {config.logging.level}")
        click.echo(f"  Port:              {config.env.port}")
        click.echo()

        click.echo("Inventory:")
        click.echo(f"  Geofencing:        {config.inventory.geofencing_enabled}")
        click.echo(f"  Seed:              {config.inventory.seed}")
        click.echo(f"  Warehouses:        {len(WAREHOUSE_LOCATIONS)}")
        click.echo(f"  Audited direct:    {config.inventory.audit_direct_writes}")
        click.echo(f"  Notification TTL:  {config.notifications.ttl_seconds}s")
        click.echo()

        api_key = config.env.gemini_api_key
        click.echo("AI assistant:")
        click.echo(f"  Model:             {config.ai.model}")
        click.echo(f"  API key:           {api_key[:6] + '...' if api_key else 'not set'}")
        click.echo()

    except Exception as e:
        click.echo(click.style(f"✗ Error loading config: {str(e)}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
