from enum import Enum


class StockOperation(str, Enum):
    add = "add"
    remove = "remove"


class AlertType(str, Enum):
    low_stock = "LOW_STOCK"


class AlertSeverity(str, Enum):
    critical = "critical"
    high = "high"
    warning = "warning"


class ActivityAction(str, Enum):
    create = "CREATE"
    update = "UPDATE"
    delete = "DELETE"
    add = "ADD"
    remove = "REMOVE"
