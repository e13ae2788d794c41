"""Keeps the ``alerts`` table in line with item stock levels.

An item is low on stock when ``quantity <= min_threshold``. While it is low
there is exactly one unresolved LOW_STOCK alert for it; once it recovers
that alert is marked resolved. The alert is rated and worded once, when it
is opened. Dropping further while an alert is already open (for example
from ``warning`` down to zero) leaves the open alert untouched.
"""

import logging

from sqlalchemy import case, false, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager

from stocktrack.core.exceptions import ConflictError, InventoryError, NotFoundError
from stocktrack.models.alert import Alert
from stocktrack.models.enums import AlertSeverity, AlertType
from stocktrack.models.inventory_item import InventoryItem
from stocktrack.services.transaction import transaction

logger = logging.getLogger("stocktrack.services.alerts")

SEVERITY_ORDER = case(
    (Alert.severity == AlertSeverity.critical.value, 1),
    (Alert.severity == AlertSeverity.high.value, 2),
    (Alert.severity == AlertSeverity.warning.value, 3),
    else_=4,
)


def compute_severity(quantity: int, min_threshold: int) -> AlertSeverity:
    if quantity == 0:
        return AlertSeverity.critical
    if quantity <= min_threshold // 2:
        return AlertSeverity.high
    return AlertSeverity.warning


def render_message(item: InventoryItem) -> str:
    return (
        f"Low stock alert: {item.name} (SKU: {item.sku}) has only "
        f"{item.quantity} {item.unit} remaining. "
        f"Minimum threshold: {item.min_threshold}"
    )


def serialize_alert(alert: Alert) -> dict:
    item = alert.item
    return {
        "id": alert.id,
        "item_id": alert.item_id,
        "alert_type": alert.alert_type,
        "message": alert.message,
        "severity": alert.severity,
        "is_resolved": bool(alert.is_resolved),
        "created_at": alert.created_at,
        "resolved_at": alert.resolved_at,
        "item_name": item.name,
        "sku": item.sku,
        "quantity": item.quantity,
        "min_threshold": item.min_threshold,
    }


class AlertReconciler:
    def __init__(self, db: Session):
        self.db = db

    def _open_alert(self, item_id: int) -> Alert | None:
        return (
            self.db.query(Alert)
            .filter(
                Alert.item_id == item_id,
                Alert.alert_type == AlertType.low_stock.value,
                Alert.is_resolved == false(),
            )
            .first()
        )

    def reconcile(self, item_id: int) -> Alert | None:
        """Open or resolve the item's LOW_STOCK alert from its current stock.

        Returns the open alert after reconciling, or None when the item is
        above its threshold or no longer exists.
        """
        item = self.db.get(InventoryItem, item_id, populate_existing=True)

        if item is None:
            return None

        if item.is_low_stock:
            existing = self._open_alert(item.id)
            if existing is not None:
                return existing

            alert = Alert(
                item_id=item.id,
                alert_type=AlertType.low_stock.value,
                message=render_message(item),
                severity=compute_severity(item.quantity, item.min_threshold).value,
                is_resolved=False,
            )

            try:
                with transaction(self.db, conflict_message="Low stock alert already open"):
                    self.db.add(alert)
            except ConflictError:
                # Another request opened it between our read and write
                return self._open_alert(item.id)

            logger.warning("Low stock alert created for: %s (%s)", item.name, alert.severity)
            return alert

        with transaction(self.db):
            resolved = (
                self.db.query(Alert)
                .filter(
                    Alert.item_id == item.id,
                    Alert.alert_type == AlertType.low_stock.value,
                    Alert.is_resolved == false(),
                )
                .update(
                    {Alert.is_resolved: True, Alert.resolved_at: func.now()},
                    synchronize_session=False,
                )
            )

        if resolved:
            logger.info("Resolved %d low stock alert(s) for: %s", resolved, item.name)

        return None

    def _joined(self):
        return (
            self.db.query(Alert)
            .join(Alert.item)
            .options(contains_eager(Alert.item))
        )

    def list_active(self) -> list[Alert]:
        return (
            self._joined()
            .filter(Alert.is_resolved == false())
            .order_by(SEVERITY_ORDER, Alert.created_at.desc(), Alert.id.desc())
            .all()
        )

    def list_all(self) -> list[Alert]:
        return (
            self._joined()
            .order_by(Alert.created_at.desc(), Alert.id.desc())
            .all()
        )

    def get(self, alert_id: int) -> Alert:
        alert = self.db.get(Alert, alert_id)

        if alert is None:
            raise NotFoundError("Alert not found")

        return alert

    def resolve(self, alert_id: int) -> Alert:
        alert = self.get(alert_id)

        if alert.is_resolved:
            return alert

        with transaction(self.db):
            alert.is_resolved = True
            alert.resolved_at = func.now()

        self.db.refresh(alert)
        logger.info("Alert %s resolved manually", alert_id)

        return alert

    def delete(self, alert_id: int) -> None:
        alert = self.get(alert_id)

        with transaction(self.db):
            self.db.delete(alert)

        logger.info("Alert %s deleted", alert_id)


def reconcile_after_write(db: Session, item_id: int) -> Alert | None:
    """Reconcile once an item write has committed.

    Failures, including raw database errors from the reads, are rolled back,
    logged and swallowed so the committed write still reports success to
    its caller.
    """
    try:
        return AlertReconciler(db).reconcile(item_id)
    except (InventoryError, SQLAlchemyError):
        db.rollback()
        logger.exception("Low stock check failed for item %s", item_id)
        return None
