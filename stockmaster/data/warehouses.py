"""Registered warehouses and their geofence coordinates."""

from typing import Dict, List

from ..models.warehouse import WarehouseLocation

DEFAULT_HUB_RADIUS = 300  # meters

_PRIMARY_SITES = [
    WarehouseLocation("Main Warehouse", 40.7128, -74.0060, 500),
    WarehouseLocation("Production Floor", 34.0522, -118.2437, 300),
    WarehouseLocation("Distribution Center", 51.5074, -0.1278, 1000),
]

# Mumbai, Navi Mumbai, Thane and suburbs
_MUMBAI_HUBS = [
    ("Andheri East Hub", 19.1136, 72.8697),
    ("Bandra Terminus Depot", 19.0544, 72.8402),
    ("Kurla Logistics Park", 19.0726, 72.8794),
    ("Goregaon Distribution", 19.1646, 72.8493),
    ("Powai Storage", 19.1187, 72.9073),
    ("Vashi Sector 17", 19.0771, 73.0022),
    ("Thane West Warehouse", 19.2183, 72.9781),
    ("Dadar Central", 19.0178, 72.8478),
    ("Colaba Cold Chain", 18.9067, 72.8147),
    ("Worli Stockyard", 19.0144, 72.8152),
    ("Saki Naka Hub", 19.1064, 72.8868),
    ("Malad West Zone", 19.1874, 72.8282),
    ("Borivali Dispatch", 19.2316, 72.8456),
    ("Chembur East", 19.0522, 72.9005),
    ("Ghatkopar Industrial", 19.0863, 72.9083),
    ("Mulund Check Naka", 19.1726, 72.9425),
    ("Airoli Mindspace", 19.1648, 72.9953),
    ("Kopar Khairane", 19.1034, 73.0113),
    ("Turbhe MIDC", 19.0745, 73.0288),
    ("Sanpada Yard", 19.0634, 73.0113),
    ("Nerul Cross", 19.0330, 73.0297),
    ("Belapur CBD", 19.0237, 73.0402),
    ("Panvel Junction", 18.9894, 73.1175),
    ("Taloja MIDC", 19.0601, 73.1212),
    ("Bhiwandi Complex A", 19.2966, 73.0631),
    ("Bhiwandi Complex B", 19.2812, 73.0489),
    ("Bhiwandi Complex C", 19.2756, 73.0578),
    ("Kalyan West", 19.2403, 73.1305),
    ("Dombivli MIDC", 19.2094, 73.1022),
    ("Ambernath Badlapur", 19.1984, 73.1988),
    ("Vasai East", 19.3919, 72.8397),
    ("Nalasopara Hub", 19.4176, 72.8192),
    ("Virar Industrial", 19.4565, 72.7925),
    ("Mira Road Extension", 19.2813, 72.8561),
    ("Dahisar Check Naka", 19.2496, 72.8596),
    ("Kandivali East", 19.2047, 72.8691),
    ("Jogeshwari Caves", 19.1321, 72.8646),
    ("Santacruz Airport", 19.0896, 72.8656),
    ("Vile Parle East", 19.0992, 72.8542),
    ("Sion Circle", 19.0390, 72.8619),
    ("Wadala Truck Terminus", 19.0254, 72.8756),
    ("Sewri Timber Pond", 18.9951, 72.8593),
    ("Mazgaon Docks", 18.9678, 72.8464),
    ("Byculla Zoo Area", 18.9792, 72.8333),
    ("Mahalaxmi Racecourse", 18.9827, 72.8240),
    ("Lower Parel Phoenix", 18.9934, 72.8275),
    ("Elphinstone Road", 19.0070, 72.8297),
    ("Parel TT", 19.0094, 72.8376),
    ("Matunga Central", 19.0269, 72.8553),
    ("Mahim Causeway", 19.0434, 72.8409),
    ("Bandra Reclamation", 19.0469, 72.8197),
    ("Khar Road West", 19.0683, 72.8330),
    ("Juhu Beach Depot", 19.0959, 72.8265),
    ("Versova Link", 19.1349, 72.8140),
    ("Mumbai Port Trust", 18.9520, 72.8510),
    ("Kalbadevi Market", 18.9502, 72.8307),
    ("Crawford Storage", 18.9474, 72.8350),
]


def build_registry() -> Dict[str, WarehouseLocation]:
    """Name -> location map, primary sites first."""
    registry = {site.name: site for site in _PRIMARY_SITES}
    for name, lat, lng in _MUMBAI_HUBS:
        registry[name] = WarehouseLocation(name, lat, lng, DEFAULT_HUB_RADIUS)
    return registry


WAREHOUSE_LOCATIONS: Dict[str, WarehouseLocation] = build_registry()
WAREHOUSES: List[str] = list(WAREHOUSE_LOCATIONS)
