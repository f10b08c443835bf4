"""Warehouse reference data model."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class WarehouseLocation:
    """Registered warehouse coordinate with its geofence radius in meters."""

    name: str
    lat: float
    lng: float
    radius: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "lat": self.lat, "lng": self.lng, "radius": self.radius}
