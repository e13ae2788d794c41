from stocktrack.models.activity_log import ActivityLog
from stocktrack.models.alert import Alert
from stocktrack.models.inventory_item import InventoryItem

__all__ = ["ActivityLog", "Alert", "InventoryItem"]
