# backend/edara/routers/notifications.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.notification_settings import NotificationSettings
from ..schemas import NotificationOut, NotificationSettingsIO, ScanOut
from ..services import notification_service as svc
from ..services.alert_store import ReadFailure, SqlAlertStore, WriteFailure
from ..services.settings_store import (
    SqlKeyValueStore,
    load_notification_settings,
    save_notification_settings,
    toggle_notification_setting,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
def list_notifications(
    unread_only: bool = Query(default=False),
    apply_settings: bool = Query(default=True, description="hide types switched off in settings"),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    display = load_notification_settings(SqlKeyValueStore(db)) if apply_settings else None
    return svc.list_notifications(db, unread_only=unread_only, limit=limit, display=display)


@router.get("/unread-count", response_model=dict)
def unread_count(db: Session = Depends(get_db)):
    return {"count": svc.unread_count(db)}


@router.post("/generate", response_model=ScanOut)
def generate(db: Session = Depends(get_db)):
    """Manual scan. Safe to re-run: already-alerted events are skipped."""
    try:
        inserted = svc.generate_notifications(SqlAlertStore(db))
    except ReadFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    except WriteFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return ScanOut(inserted=inserted)


@router.post("/read-all", response_model=dict)
def read_all(db: Session = Depends(get_db)):
    return {"ok": True, "updated": svc.mark_all_read(db)}


@router.get("/settings", response_model=NotificationSettingsIO)
def get_settings(db: Session = Depends(get_db)):
    return load_notification_settings(SqlKeyValueStore(db)).to_dict()


@router.put("/settings", response_model=NotificationSettingsIO)
def put_settings(payload: NotificationSettingsIO, db: Session = Depends(get_db)):
    saved = save_notification_settings(SqlKeyValueStore(db), NotificationSettings.from_dict(payload.model_dump()))
    return saved.to_dict()


@router.post("/settings/{alert_type}/toggle", response_model=NotificationSettingsIO)
def toggle_setting(alert_type: str, db: Session = Depends(get_db)):
    try:
        return toggle_notification_setting(SqlKeyValueStore(db), alert_type).to_dict()
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{notification_id}/read", response_model=dict)
def read_one(notification_id: int, db: Session = Depends(get_db)):
    if not svc.mark_read(db, notification_id):
        raise HTTPException(status_code=404, detail="notification not found")
    return {"ok": True}


@router.delete("/{notification_id}")
def delete_one(notification_id: int, db: Session = Depends(get_db)):
    if not svc.delete_notification(db, notification_id):
        raise HTTPException(status_code=404, detail="notification not found")
    return {"ok": True}


@router.delete("")
def clear_all(db: Session = Depends(get_db)):
    return {"ok": True, "deleted": svc.clear_notifications(db)}
