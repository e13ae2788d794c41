from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityResponse(BaseModel):
    id: int
    item_id: int | None
    action: str
    details: str | None
    user: str | None
    timestamp: datetime | None

    model_config = ConfigDict(from_attributes=True)
