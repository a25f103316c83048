# alliance_wars/models/game.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

from alliance_wars.models.enums import GameStatus

class GameConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    duration: int = Field(description="Game length in seconds.")
    max_players: int
    starting_resources: Optional[int] = None
    starting_defense: Optional[int] = None
    starting_attack: Optional[int] = None
    created_at: int = 0
    host_id: str = ""

class GameData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    config: GameConfig
    # Roster of player ids; each PlayerState lives under its own player key
    players: List[str] = Field(default_factory=list)
    status: GameStatus = GameStatus.PENDING

    def is_full(self) -> bool:
        return len(self.players) >= self.config.max_players

    def time_left(self, now: int) -> int:
        return max(0, self.config.created_at + self.config.duration - now)

class GameSummary(BaseModel):
    id: str
    name: str
    status: GameStatus
    players_count: int
    max_players: int
    time_left_seconds: int
