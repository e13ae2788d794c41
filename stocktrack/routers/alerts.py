# stocktrack/routers/alerts.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stocktrack.database import get_db
from stocktrack.schemas.alert import AlertResponse
from stocktrack.schemas.common import ListResponse, MessageResponse
from stocktrack.services.alert_reconciler import AlertReconciler, serialize_alert

router = APIRouter(
    prefix="/api/alerts",
    tags=["Alerts"],
)


def _alert_list(alerts):
    return ListResponse[AlertResponse](
        count=len(alerts),
        data=[AlertResponse.model_validate(serialize_alert(alert)) for alert in alerts],
    )


@router.get("/active", response_model=ListResponse[AlertResponse])
def list_active_alerts(db: Session = Depends(get_db)):
    return _alert_list(AlertReconciler(db).list_active())


@router.get("", response_model=ListResponse[AlertResponse])
def list_alerts(db: Session = Depends(get_db)):
    return _alert_list(AlertReconciler(db).list_all())


@router.patch("/{alert_id}/resolve", response_model=MessageResponse)
def resolve_alert(alert_id: int, db: Session = Depends(get_db)):
    AlertReconciler(db).resolve(alert_id)

    return MessageResponse(message="Alert resolved successfully")


@router.delete("/{alert_id}", response_model=MessageResponse)
def delete_alert(alert_id: int, db: Session = Depends(get_db)):
    AlertReconciler(db).delete(alert_id)

    return MessageResponse(message="Alert deleted successfully")
