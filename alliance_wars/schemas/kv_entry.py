# alliance_wars/schemas/kv_entry.py
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func
from alliance_wars.db.base_class import Base

class KVEntry(Base):
    """One key of the game's key-value store, e.g. 'player:+15551234' or 'game:48213'."""
    __tablename__ = "kventries"

    key = Column(String, primary_key=True, index=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
