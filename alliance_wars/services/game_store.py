# alliance_wars/services/game_store.py
import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from alliance_wars.core.config import Settings, settings as default_settings
from alliance_wars.core.errors import GameError
from alliance_wars.crud import crud_kv
from alliance_wars.models.enums import GameErrorCode
from alliance_wars.models.game import GameData
from alliance_wars.models.player import PlayerState
from alliance_wars.services.fuzzy_matcher import best_fuzzy_match
from alliance_wars.services.validation import validate_player_state

logger = logging.getLogger("alliance_wars.services.game_store")  # Logger for this module

PLAYER_KEY_PREFIX = "player:"
GAME_KEY_PREFIX = "game:"


def player_key(player_id: str) -> str:
    return f"{PLAYER_KEY_PREFIX}{player_id}"

def game_key(game_id: str) -> str:
    return f"{GAME_KEY_PREFIX}{game_id}"


class GameStore:
    """
    Player and game records on top of the key-value table.
    Every PlayerState is stored under its own player key, whether or not the
    player is in a game; a GameData only keeps the roster of player ids.
    """
    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings

    # -- Players ---------------------------------------------------------

    def new_player_state(self, player_id: str) -> PlayerState:
        return PlayerState(
            id=player_id,
            resources=self.settings.DEFAULT_STARTING_RESOURCES,
            defense_points=self.settings.DEFAULT_STARTING_DEFENSE,
            attack_power=self.settings.DEFAULT_STARTING_ATTACK,
            level=1,
            language=self.settings.DEFAULT_LANGUAGE,
        )

    def get_player(self, player_id: str) -> PlayerState:
        """Returns the stored state or a fresh unregistered one (not saved yet)."""
        raw = crud_kv.get_value(self.db, player_key(player_id))
        if raw is None:
            return self.new_player_state(player_id)
        return PlayerState.model_validate(raw)

    def player_exists(self, player_id: str) -> bool:
        return crud_kv.key_exists(self.db, player_key(player_id))

    def save_player(self, state: PlayerState) -> None:
        validate_player_state(state)
        crud_kv.set_value(self.db, player_key(state.id), state.model_dump(mode="json", by_alias=True))

    def delete_player(self, player_id: str) -> bool:
        return crud_kv.delete_value(self.db, player_key(player_id))

    def delete_all_players(self) -> int:
        keys = crud_kv.list_keys(self.db, PLAYER_KEY_PREFIX)
        for key in keys:
            crud_kv.delete_value(self.db, key)
        logger.warning(f"Deleted all {len(keys)} player records")
        return len(keys)

    def list_all_players(self) -> List[PlayerState]:
        players = []
        for key in crud_kv.list_keys(self.db, PLAYER_KEY_PREFIX):
            raw = crud_kv.get_value(self.db, key)
            if raw is not None:
                players.append(PlayerState.model_validate(raw))
        return players

    def find_player_by_name(self, name: str, game_id: Optional[str] = None) -> Optional[PlayerState]:
        """
        Best approximate match on display name among registered players,
        optionally limited to one game's members.
        """
        candidates = [
            (p.name, p) for p in self.list_all_players()
            if p.registered and p.name and (game_id is None or p.game_id == game_id)
        ]
        return best_fuzzy_match(
            name,
            candidates,
            threshold=self.settings.FUZZY_MATCH_THRESHOLD,
            max_distance=self.settings.FUZZY_MAX_DISTANCE,
        )

    # -- Games -----------------------------------------------------------

    def get_game(self, game_id: str) -> Optional[GameData]:
        raw = crud_kv.get_value(self.db, game_key(game_id))
        if raw is None:
            return None
        return GameData.model_validate(raw)

    def game_exists(self, game_id: str) -> bool:
        return crud_kv.key_exists(self.db, game_key(game_id))

    def create_game(self, data: GameData) -> None:
        crud_kv.set_value(self.db, game_key(data.config.id), data.model_dump(mode="json", by_alias=True))
        logger.info(f"Created game {data.config.id} ('{data.config.name}') hosted by {data.config.host_id or 'admin'}")

    def save_game(self, data: GameData) -> None:
        """Updates an existing game. Raises GameError(GAME_NOT_FOUND) if its record is gone."""
        if not self.game_exists(data.config.id):
            logger.error(f"Tried to save game {data.config.id} but its record no longer exists")
            raise GameError(GameErrorCode.GAME_NOT_FOUND, f"Game {data.config.id} no longer exists.")
        crud_kv.set_value(self.db, game_key(data.config.id), data.model_dump(mode="json", by_alias=True))

    def list_all_games(self) -> List[GameData]:
        games = []
        for key in crud_kv.list_keys(self.db, GAME_KEY_PREFIX):
            raw = crud_kv.get_value(self.db, key)
            if raw is not None:
                games.append(GameData.model_validate(raw))
        return games

    def get_game_players(self, game: GameData) -> List[PlayerState]:
        """Loads the roster; ids whose record disappeared are skipped."""
        players = []
        for pid in game.players:
            if self.player_exists(pid):
                players.append(self.get_player(pid))
            else:
                logger.warning(f"Game {game.config.id} lists player {pid} but no record exists")
        return players

    def generate_game_id(self) -> str:
        """Random 5-digit id that is not used by any stored game."""
        for _ in range(self.settings.GAME_ID_MAX_ATTEMPTS):
            candidate = str(random.randint(10000, 99999))
            if not self.game_exists(candidate):
                return candidate
            logger.debug(f"Game id {candidate} already taken, retrying")
        raise GameError(
            GameErrorCode.GAME_ID_EXHAUSTED,
            f"Could not find a free game id after {self.settings.GAME_ID_MAX_ATTEMPTS} attempts.",
        )
