"""Sample inventory used to bootstrap an empty database.

Run ``stocktrack-init-db`` to create the schema and load these items.
"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from stocktrack.core.config import get_settings
from stocktrack.database import Database
from stocktrack.models.inventory_item import InventoryItem
from stocktrack.services.alert_reconciler import reconcile_after_write
from stocktrack.services.item_store import ItemStore

logger = logging.getLogger("stocktrack.seed")

SEED_ITEMS = [
    {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse with USB receiver",
        "sku": "MOUSE-001",
        "quantity": 45,
        "unit": "pieces",
        "category": "Electronics",
        "min_threshold": 15,
        "max_threshold": 100,
        "unit_price": 24.99,
        "supplier": "Tech Supplies Inc.",
        "location": "Warehouse A - Shelf 12",
    },
    {
        "name": "Office Paper A4",
        "description": "Premium white office paper, 500 sheets per ream",
        "sku": "PAPER-A4-001",
        "quantity": 8,
        "unit": "reams",
        "category": "Office Supplies",
        "min_threshold": 10,
        "max_threshold": 200,
        "unit_price": 5.99,
        "supplier": "Paper World Ltd.",
        "location": "Warehouse B - Shelf 5",
    },
    {
        "name": "USB-C Cable",
        "description": "High-speed USB-C charging and data cable, 6ft",
        "sku": "CABLE-USBC-001",
        "quantity": 120,
        "unit": "pieces",
        "category": "Electronics",
        "min_threshold": 20,
        "max_threshold": 150,
        "unit_price": 12.99,
        "supplier": "Cable Connect Corp.",
        "location": "Warehouse A - Shelf 8",
    },
    {
        "name": "Ballpoint Pens (Blue)",
        "description": "Box of 50 blue ballpoint pens",
        "sku": "PEN-BLUE-001",
        "quantity": 5,
        "unit": "boxes",
        "category": "Office Supplies",
        "min_threshold": 8,
        "max_threshold": 50,
        "unit_price": 15.99,
        "supplier": "Pen & Paper Co.",
        "location": "Warehouse B - Shelf 3",
    },
    {
        "name": "Laptop Stand",
        "description": "Adjustable aluminum laptop stand",
        "sku": "STAND-001",
        "quantity": 32,
        "unit": "pieces",
        "category": "Electronics",
        "min_threshold": 10,
        "max_threshold": 50,
        "unit_price": 39.99,
        "supplier": "Tech Supplies Inc.",
        "location": "Warehouse A - Shelf 15",
    },
    {
        "name": "Sticky Notes (3x3)",
        "description": "Yellow sticky notes, pack of 12 pads",
        "sku": "STICKY-001",
        "quantity": 3,
        "unit": "packs",
        "category": "Office Supplies",
        "min_threshold": 5,
        "max_threshold": 30,
        "unit_price": 8.99,
        "supplier": "Paper World Ltd.",
        "location": "Warehouse B - Shelf 2",
    },
    {
        "name": "HDMI Cable 2.0",
        "description": "4K HDMI cable, 10ft length",
        "sku": "HDMI-001",
        "quantity": 67,
        "unit": "pieces",
        "category": "Electronics",
        "min_threshold": 15,
        "max_threshold": 80,
        "unit_price": 18.99,
        "supplier": "Cable Connect Corp.",
        "location": "Warehouse A - Shelf 9",
    },
    {
        "name": "Desk Organizer",
        "description": "Multi-compartment desk organizer",
        "sku": "ORG-001",
        "quantity": 18,
        "unit": "pieces",
        "category": "Office Supplies",
        "min_threshold": 10,
        "max_threshold": 40,
        "unit_price": 22.99,
        "supplier": "Office Essentials Ltd.",
        "location": "Warehouse B - Shelf 7",
    },
]


def seed(db: Session) -> int:
    """Insert the sample items into an empty inventory; returns how many."""
    existing = db.query(func.count(InventoryItem.id)).scalar()

    if existing:
        logger.info("Database already contains data. Skipping seed.")
        return 0

    store = ItemStore(db)

    for fields in SEED_ITEMS:
        item = store.create(fields)
        reconcile_after_write(db, item.id)
        logger.info("Added: %s", item.name)

    logger.info("Database seeded with %d items", len(SEED_ITEMS))
    return len(SEED_ITEMS)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    database = Database(get_settings().DATABASE_URL)

    try:
        database.init()
        with database.session() as db:
            seed(db)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
