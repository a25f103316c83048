# alliance_wars/models/player.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class PlayerState(BaseModel):
    # Stored and served in camelCase ("gameId", "defensePoints", ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    registered: bool = False
    is_admin: bool = False
    game_id: str = "" # Empty string = lobby / not in a game
    resources: int = 0
    defense_points: int = 0
    attack_power: int = 0
    level: int = 1
    # Unix seconds, 0 = never
    last_attack: int = 0
    last_collect: int = 0
    last_defense: int = 0
    last_recovery_check: int = 0
    alliances: List[str] = Field(default_factory=list, description="Ids of players with a completed handshake.")
    pending_alliances: List[str] = Field(default_factory=list, description="Ids this player proposed to, not yet reciprocated.")
    successful_battles: int = 0
    language: str = "en"
    message_history: List[str] = Field(default_factory=list, description="Most recent command first.")
    last_message: Optional[str] = None

class PlayerSummary(BaseModel):
    id: str
    name: str
    level: int
    game_id: str
