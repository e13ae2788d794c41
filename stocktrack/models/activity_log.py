# stocktrack/models/activity_log.py

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import func

from stocktrack.database import Base


class ActivityLog(Base):
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Rows outlive the item they describe
    item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="SET NULL"),
        nullable=True,
    )

    action = Column(Text, nullable=False)
    details = Column(Text, nullable=True)
    user = Column(Text, default="system", server_default="system")

    timestamp = Column(DateTime, server_default=func.now())
