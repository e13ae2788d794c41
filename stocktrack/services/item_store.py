import logging

from sqlalchemy import case, func, update
from sqlalchemy.orm import Session

from stocktrack.core.exceptions import NotFoundError, ValidationError
from stocktrack.models.enums import ActivityAction, StockOperation
from stocktrack.models.inventory_item import InventoryItem
from stocktrack.services.activity import log_activity
from stocktrack.services.transaction import transaction

logger = logging.getLogger("stocktrack.services.items")

ITEM_DEFAULTS = {
    "unit": "units",
    "min_threshold": 10,
    "max_threshold": 100,
    "unit_price": 0.0,
}

ITEM_FIELDS = (
    "name",
    "description",
    "sku",
    "quantity",
    "unit",
    "category",
    "min_threshold",
    "max_threshold",
    "unit_price",
    "supplier",
    "location",
)


class ItemStore:
    """CRUD over ``inventory_items``.

    Every mutation commits together with its ``activity_log`` row. Alert
    reconciliation is not triggered from here; callers run it after the
    write has committed.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, item_id: int) -> InventoryItem:
        item = self.db.get(InventoryItem, item_id)

        if item is None:
            raise NotFoundError("Item not found")

        return item

    def list(self, category: str | None = None, low_stock: bool = False) -> list[InventoryItem]:
        query = self.db.query(InventoryItem)

        if category:
            query = query.filter(InventoryItem.category == category)

        if low_stock:
            query = query.filter(InventoryItem.quantity <= InventoryItem.min_threshold)

        return query.order_by(InventoryItem.name.asc()).all()

    def create(self, fields: dict) -> InventoryItem:
        if not fields.get("name") or not fields.get("sku") or fields.get("quantity") is None:
            raise ValidationError("Name, SKU, and quantity are required fields")

        if fields["quantity"] < 0:
            raise ValidationError("Quantity cannot be negative")

        values = {key: fields.get(key) for key in ITEM_FIELDS}
        for key, default in ITEM_DEFAULTS.items():
            if values[key] is None:
                values[key] = default

        item = InventoryItem(**values)

        with transaction(self.db):
            self.db.add(item)
            self.db.flush()
            log_activity(self.db, item.id, ActivityAction.create, f"Created new item: {item.name}")

        self.db.refresh(item)
        logger.info("Created item %s (SKU: %s)", item.id, item.sku)

        return item

    def update(self, item_id: int, fields: dict) -> InventoryItem:
        item = self.get(item_id)

        changes = {
            key: value
            for key, value in fields.items()
            if key in ITEM_FIELDS and value is not None
        }

        if changes.get("quantity", 0) < 0:
            raise ValidationError("Quantity cannot be negative")

        with transaction(self.db):
            for key, value in changes.items():
                setattr(item, key, value)
            item.updated_at = func.now()
            log_activity(self.db, item.id, ActivityAction.update, f"Updated item: {item.name}")

        self.db.refresh(item)

        return item

    def delete(self, item_id: int) -> None:
        item = self.get(item_id)

        with transaction(self.db):
            # Logged first so the row exists when the FK nulls it out
            log_activity(self.db, item.id, ActivityAction.delete, f"Deleted item: {item.name}")
            self.db.flush()
            self.db.delete(item)

        logger.info("Deleted item %s", item_id)

    def adjust_stock(self, item_id: int, amount: int, operation: StockOperation | str) -> InventoryItem:
        if not amount or operation is None:
            raise ValidationError("Quantity and operation (add/remove) are required")

        try:
            operation = StockOperation(operation)
        except ValueError:
            raise ValidationError('Invalid operation. Use "add" or "remove"')

        if amount < 0:
            raise ValidationError("Quantity must be a positive number")

        item = self.get(item_id)

        if operation is StockOperation.add:
            new_quantity = InventoryItem.quantity + amount
        else:
            new_quantity = case(
                (InventoryItem.quantity - amount < 0, 0),
                else_=InventoryItem.quantity - amount,
            )

        with transaction(self.db):
            self.db.execute(
                update(InventoryItem)
                .where(InventoryItem.id == item.id)
                .values(quantity=new_quantity, updated_at=func.now())
                .execution_options(synchronize_session=False)
            )
            self.db.refresh(item)

            verb = "Added" if operation is StockOperation.add else "Removed"
            log_activity(
                self.db,
                item.id,
                ActivityAction(operation.value.upper()),
                f"{verb} {amount} units. New quantity: {item.quantity}",
            )

        self.db.refresh(item)

        return item

    def stats(self) -> dict:
        total_items = self.db.query(func.count(InventoryItem.id)).scalar()

        low_stock_items = (
            self.db.query(func.count(InventoryItem.id))
            .filter(InventoryItem.quantity <= InventoryItem.min_threshold)
            .scalar()
        )

        total_value = (
            self.db.query(func.coalesce(func.sum(InventoryItem.quantity * InventoryItem.unit_price), 0))
            .scalar()
        )

        categories = (
            self.db.query(InventoryItem.category, func.count(InventoryItem.id))
            .filter(InventoryItem.category.isnot(None))
            .group_by(InventoryItem.category)
            .order_by(InventoryItem.category.asc())
            .all()
        )

        return {
            "total_items": total_items or 0,
            "low_stock_items": low_stock_items or 0,
            "total_inventory_value": f"{float(total_value or 0):.2f}",
            "categories": [
                {"category": category, "count": count}
                for category, count in categories
            ],
        }
