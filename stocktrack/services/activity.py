from sqlalchemy.orm import Session

from stocktrack.models.activity_log import ActivityLog
from stocktrack.models.enums import ActivityAction


def log_activity(
    db: Session,
    item_id: int | None,
    action: ActivityAction,
    details: str,
    user: str = "system",
) -> ActivityLog:
    # Joins the caller's transaction; the caller commits
    entry = ActivityLog(
        item_id=item_id,
        action=action.value,
        details=details,
        user=user,
    )
    db.add(entry)
    return entry


def list_activity(db: Session, item_id: int | None = None, limit: int = 100):
    query = db.query(ActivityLog)

    if item_id is not None:
        query = query.filter(ActivityLog.item_id == item_id)

    return query.order_by(ActivityLog.id.desc()).limit(limit).all()
