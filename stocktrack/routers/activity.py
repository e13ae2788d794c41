# stocktrack/routers/activity.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stocktrack.database import get_db
from stocktrack.schemas.activity import ActivityResponse
from stocktrack.schemas.common import ListResponse
from stocktrack.services.activity import list_activity

router = APIRouter(
    prefix="/api/activity",
    tags=["Activity"],
)


@router.get("", response_model=ListResponse[ActivityResponse])
def activity_log(
    item_id: int | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    entries = list_activity(db, item_id=item_id, limit=limit)

    return ListResponse[ActivityResponse](
        count=len(entries),
        data=[ActivityResponse.model_validate(entry) for entry in entries],
    )
