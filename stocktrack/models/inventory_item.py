# stocktrack/models/inventory_item.py

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stocktrack.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    sku = Column(Text, unique=True, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    unit = Column(Text, nullable=False, default="units", server_default="units")
    category = Column(Text, nullable=True)
    min_threshold = Column(Integer, default=10, server_default="10")
    max_threshold = Column(Integer, default=100, server_default="100")
    unit_price = Column(Float, default=0.0, server_default="0")
    supplier = Column(Text, nullable=True)
    location = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    alerts = relationship(
        "Alert",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_threshold
