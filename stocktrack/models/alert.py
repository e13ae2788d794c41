# stocktrack/models/alert.py

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text, false, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stocktrack.database import Base
from stocktrack.models.enums import AlertSeverity


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(
        Integer,
        ForeignKey("inventory_items.id", ondelete="CASCADE"),
        nullable=False,
    )
    alert_type = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    severity = Column(Text, default=AlertSeverity.warning.value, server_default="warning")
    is_resolved = Column(Boolean, default=False, server_default=false())

    created_at = Column(DateTime, server_default=func.now())
    resolved_at = Column(DateTime, nullable=True)

    item = relationship("InventoryItem", back_populates="alerts")

    __table_args__ = (
        # At most one open alert of each type per item
        Index(
            "uq_alerts_open_per_item",
            "item_id",
            "alert_type",
            unique=True,
            sqlite_where=text("NOT is_resolved"),
            postgresql_where=text("NOT is_resolved"),
        ),
    )
