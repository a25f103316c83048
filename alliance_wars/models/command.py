# alliance_wars/models/command.py
from typing import Optional
from pydantic import BaseModel, Field

class CommandRequest(BaseModel):
    player_id: str = Field(description="Stable external id, e.g. a phone number or 'web-client'.")
    text: str = Field(description="Raw chat text, e.g. 'attack Bob'.")

class CommandResponse(BaseModel):
    success: bool
    message: str
    error_code: Optional[str] = None
