from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AlertResponse(BaseModel):
    id: int
    item_id: int
    alert_type: str
    message: str
    severity: str
    is_resolved: bool
    created_at: datetime | None
    resolved_at: datetime | None

    # Current state of the item, not the state captured in ``message``
    item_name: str
    sku: str
    quantity: int
    min_threshold: int

    model_config = ConfigDict(from_attributes=True)
