# alliance_wars/crud/crud_system.py
import logging
from sqlalchemy.orm import Session
from alliance_wars.schemas.system import SystemAlert
from typing import List, Optional

logger = logging.getLogger("alliance_wars.crud.system")

def create_alert(db: Session, level: str, message: str, details: str = None) -> Optional[SystemAlert]:
    """Creates a new system alert record."""
    try:
        alert = SystemAlert(level=level, message=message, details=details)
        db.add(alert)
        db.commit()
        db.refresh(alert)
        logger.info(f"Logged new system alert: [{level}] {message}")
        return alert
    except Exception as e:
        # If writing the alert fails we still want it in the regular log
        logger.critical(f"CRITICAL: FAILED TO LOG ALERT TO DATABASE: {e}")
        logger.critical(f"Original Alert: [{level}] {message} | Details: {details}")
        db.rollback()
        return None

def get_latest_alerts(db: Session, limit: int = 50) -> List[SystemAlert]:
    """Retrieves the most recent system alerts."""
    return db.query(SystemAlert).order_by(SystemAlert.timestamp.desc(), SystemAlert.id.desc()).limit(limit).all()
