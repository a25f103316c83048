# alliance_wars/schemas/system.py
from sqlalchemy import Column, String, Integer, DateTime, Text
from sqlalchemy.sql import func
from alliance_wars.db.base_class import Base

class SystemAlert(Base):
    """Stores unexpected errors caught at the command endpoint for admin review."""
    __tablename__ = "systemalerts"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    level = Column(String, default="ERROR") # e.g., 'ERROR', 'CRITICAL'
    message = Column(String, nullable=False)
    details = Column(Text, nullable=True) # Stack trace or offending command
