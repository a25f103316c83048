# alliance_wars/crud/crud_kv.py
import logging
from typing import Any, List
from sqlalchemy.orm import Session
from alliance_wars.schemas.kv_entry import KVEntry

logger = logging.getLogger("alliance_wars.crud.kv")  # Logger for this module

def get_value(db: Session, key: str) -> Any | None:
    entry = db.query(KVEntry).filter(KVEntry.key == key).first()
    return entry.value if entry else None

def set_value(db: Session, key: str, value: Any) -> None:
    entry = db.query(KVEntry).filter(KVEntry.key == key).first()
    if entry:
        entry.value = value
    else:
        db.add(KVEntry(key=key, value=value))
    db.commit()
    logger.debug(f"Stored key '{key}'")

def delete_value(db: Session, key: str) -> bool:
    """Deletes a key. Returns True if it existed."""
    entry = db.query(KVEntry).filter(KVEntry.key == key).first()
    if not entry:
        return False
    db.delete(entry)
    db.commit()
    logger.info(f"Deleted key '{key}'")
    return True

def key_exists(db: Session, key: str) -> bool:
    return db.query(KVEntry.key).filter(KVEntry.key == key).first() is not None

def list_keys(db: Session, prefix: str = "") -> List[str]:
    """Returns all keys starting with `prefix`, sorted."""
    query = db.query(KVEntry.key)
    if prefix:
        query = query.filter(KVEntry.key.startswith(prefix, autoescape=True))
    return [row[0] for row in query.order_by(KVEntry.key).all()]
