from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class SystemAlertPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    level: str
    message: str
    details: Optional[str] = None

class RestartResponse(BaseModel):
    success: bool
    message: str
    players_deleted: int = 0
