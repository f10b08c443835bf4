"""Demo catalog: products, partner contacts and a few sample operations.

Generated entries come from a ``random.Random`` instance so that a fixed seed
reproduces the same catalog between runs.
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ..models.contact import Contact
from ..models.operation import (
    Operation,
    OperationItem,
    OperationStatus,
    OperationType,
    CUSTOMER_LOCATION,
    VENDOR_LOCATION,
)
from ..models.product import Product
from .warehouses import WAREHOUSES

_CATEGORIES = [
    "Raw Material", "Work in Progress", "Finished Goods", "Safety Gear",
    "Tools", "Packaging", "Office Supplies", "Electronics",
]
_UOMS = ["Units", "Meters", "Kg", "Liters", "Box", "Roll", "Pair"]
_MATERIALS = ["Steel", "Wood", "Plastic", "Aluminum", "Copper", "Glass", "Rubber", "Cotton", "Nylon", "Leather"]
_ITEMS = [
    "Tube", "Sheet", "Screw", "Bolt", "Nut", "Panel", "Wire", "Cable", "Valve",
    "Gasket", "Filter", "Paint", "Glue", "Tape", "Box", "Gloves", "Helmet",
]

_BUSINESSES = [
    ("Steel & Alloys", "Vendor", ["Carnac Bunder", "Masjid Bunder", "Kalamboli"]),
    ("Pharma Distributors", "Vendor", ["Andheri MIDC", "Saki Naka", "Dava Bazaar"]),
    ("Textiles Pvt Ltd", "Vendor", ["Kalbadevi", "Dadar Market", "Bhiwandi"]),
    ("Electronics World", "Vendor", ["Lamington Road", "Grant Road", "Manish Market"]),
    ("Polymers & Plast", "Vendor", ["Goregaon East", "Vasai East", "Saki Naka"]),
    ("Logistics Solutions", "Internal", ["Nhava Sheva", "Bhiwandi", "Taloja"]),
    ("Retail Mart", "Customer", ["Bandra West", "Colaba", "Juhu"]),
    ("Supermarkets", "Customer", ["Thane West", "Kalyan", "Borivali"]),
    ("Builders & Developers", "Customer", ["Worli", "Lower Parel", "Navi Mumbai"]),
    ("Enterprises", "Vendor", ["Kurla West", "Ghatkopar", "Sion"]),
    ("Trading Co", "Vendor", ["Masjid Bunder", "Crawford Market", "Byculla"]),
    ("Tech Solutions", "Customer", ["Powai", "Airoli Mindspace", "Malad Mindspace"]),
    ("Automobiles", "Customer", ["Kurla", "Andheri West", "Worli Naka"]),
    ("Chemicals Corp", "Vendor", ["Turbhe MIDC", "Mahape", "Rabale"]),
    ("Packaging Industries", "Vendor", ["Vasai", "Palghar", "Bhiwandi"]),
]
_NAME_PREFIXES = [
    "Ramesh", "Suresh", "Jayant", "Aditya", "Vijay", "Ketan", "Rajesh", "Amit", "Sanjay", "Manoj",
    "Pooja", "Deepak", "Anil", "Sunil", "Chetan", "Nitin", "Gaurav", "Rahul", "Prakash", "Vinay",
    "Om", "Sai", "Shree", "Royal", "Apex", "Zenith", "Global", "National", "Bombay", "Maharashtra",
    "United", "Prime", "Star", "Delta", "Sigma", "Alpha", "Classic", "Modern", "Metro", "Urban",
]


def random_barcode(rng: random.Random) -> str:
    return str(rng.randint(10000000, 99999999))


def base_products() -> List[Product]:
    """Hand-written products referenced by the sample operations."""
    return [
        Product("p1", "Steel Rods", "RM-001", "10000001", "Raw Material", "Units", 100, "Main Warehouse", 50, 20),
        Product("p2", "Chair Frame", "WIP-001", "10000002", "Work in Progress", "Units", 45, "Production Floor", 120, 10),
        Product("p3", "Office Chair", "FG-001", "10000003", "Finished Goods", "Units", 8, "Main Warehouse", 350, 15),
        Product("p4", "Fabric Roll", "RM-002", "10000004", "Raw Material", "Meters", 200, "Main Warehouse", 15, 50),
    ]


def generate_products(
    rng: random.Random,
    start_id: int,
    count: int,
    warehouses: Sequence[str] = WAREHOUSES
) -> List[Product]:
    """Generate ``count`` products spread across ``warehouses``."""
    products = []
    for i in range(count):
        category = rng.choice(_CATEGORIES)
        products.append(Product(
            id=f"p{start_id + i}",
            name=f"{rng.choice(_MATERIALS)} {rng.choice(_ITEMS)} {rng.randrange(100)}",
            sku=f"{category[:2].upper()}-{rng.randint(10000, 99999)}",
            barcode=random_barcode(rng),
            category=category,
            uom=rng.choice(_UOMS),
            stock=rng.randrange(1000),
            location=rng.choice(list(warehouses)),
            price=round(rng.uniform(1, 501), 2),
            min_stock_rule=rng.randint(5, 54)
        ))
    return products


def base_contacts() -> List[Contact]:
    return [
        Contact("c1", "Tata Steel Ltd", "Vendor", "sales@tatasteel.com", "+91-22-66658282", "Bombay House, Fort, Mumbai"),
        Contact("c2", "Reliance Retail", "Customer", "procurement@ril.com", "+91-22-44770000", "Reliance Corporate Park, Ghansoli"),
        Contact("c3", "Godrej & Boyce Mfg", "Vendor", "info@godrej.com", "+91-22-67965656", "Pirojshanagar, Vikhroli, Mumbai"),
        Contact("c4", "Asian Paints", "Vendor", "supply@asianpaints.com", "+91-22-62181000", "Santacruz East, Mumbai"),
        Contact("c5", "Larsen & Toubro", "Customer", "projects@larsentoubro.com", "+91-22-67525656", "Powai Campus, Mumbai"),
    ]


def generate_contacts(rng: random.Random, count: int) -> List[Contact]:
    contacts = []
    for i in range(count):
        suffix, contact_type, areas = rng.choice(_BUSINESSES)
        prefix = rng.choice(_NAME_PREFIXES)
        domain = f"{prefix.lower().replace(' ', '')}{suffix.split(' ')[0].lower()}"
        contacts.append(Contact(
            id=f"c-mum-{i}",
            name=f"{prefix} {suffix}",
            type=contact_type,
            email=f"contact@{domain}.com",
            phone=f"+91-{rng.randint(9000000000, 9999999998)}",
            address=f"Shop {rng.randint(1, 500)}, {rng.choice(areas)}, Mumbai"
        ))
    return contacts


def sample_operations(now: Optional[datetime] = None) -> List[Operation]:
    """One completed receipt, one ready delivery and one draft transfer, newest first."""
    now = now or datetime.utcnow()
    return [
        Operation(
            id="op1",
            type=OperationType.RECEIPT,
            status=OperationStatus.DONE,
            reference="WH/IN/0001",
            source_location=VENDOR_LOCATION,
            dest_location="Main Warehouse",
            items=[OperationItem("p1", 50)],
            date=(now - timedelta(days=2)).isoformat(),
            partner_id="c1"
        ),
        Operation(
            id="op2",
            type=OperationType.DELIVERY,
            status=OperationStatus.READY,
            reference="WH/OUT/0005",
            source_location="Main Warehouse",
            dest_location=CUSTOMER_LOCATION,
            items=[OperationItem("p3", 10)],
            date=now.isoformat(),
            partner_id="c2"
        ),
        Operation(
            id="op3",
            type=OperationType.INTERNAL,
            status=OperationStatus.DRAFT,
            reference="WH/INT/0012",
            source_location="Main Warehouse",
            dest_location="Production Floor",
            items=[OperationItem("p1", 20)],
            date=now.isoformat()
        ),
    ]


def initial_products(rng: random.Random, generated: int) -> List[Product]:
    base = base_products()
    return base + generate_products(rng, len(base) + 1, generated)


def initial_contacts(rng: random.Random, generated: int) -> List[Contact]:
    return base_contacts() + generate_contacts(rng, generated)
