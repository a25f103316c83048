# alliance_wars/services/validation.py
import logging
from typing import Any, Dict

from pydantic import ValidationError

from alliance_wars.core.config import Settings, settings as default_settings
from alliance_wars.core.errors import GameError
from alliance_wars.models.enums import GameErrorCode
from alliance_wars.models.game import GameConfig
from alliance_wars.models.player import PlayerState

logger = logging.getLogger("alliance_wars.services.validation")  # Logger for this module


def validate_game_config(raw: Dict[str, Any] | GameConfig, settings: Settings = default_settings) -> GameConfig:
    """
    Checks a game configuration and fills unset starting stats with the global defaults.
    Raises GameError(INVALID_GAME_CONFIG) for an empty id, a non-positive duration
    or fewer than two max players.
    """
    data = raw.model_dump() if isinstance(raw, GameConfig) else dict(raw)

    if not str(data.get("id") or "").strip():
        raise GameError(GameErrorCode.INVALID_GAME_CONFIG, "Game id must not be empty.")

    duration = data.get("duration")
    if not isinstance(duration, int) or duration <= 0:
        raise GameError(GameErrorCode.INVALID_GAME_CONFIG, f"Game duration must be a positive number of seconds, got {duration!r}.")

    max_players = data.get("max_players", data.get("maxPlayers"))
    if not isinstance(max_players, int) or max_players <= 1:
        raise GameError(GameErrorCode.INVALID_GAME_CONFIG, f"A game needs more than one player, got max players {max_players!r}.")

    try:
        config = GameConfig.model_validate(data)
    except ValidationError as e:
        raise GameError(GameErrorCode.INVALID_GAME_CONFIG, f"Invalid game configuration: {e.errors()[0]['msg']}") from e

    if config.starting_resources is None:
        config.starting_resources = settings.DEFAULT_STARTING_RESOURCES
    if config.starting_defense is None:
        config.starting_defense = settings.DEFAULT_STARTING_DEFENSE
    if config.starting_attack is None:
        config.starting_attack = settings.DEFAULT_STARTING_ATTACK
    return config


def validate_player_state(state: PlayerState) -> PlayerState:
    """Raises GameError(INVALID_PLAYER_STATE) for negative resources or a level below 1."""
    if state.resources < 0:
        logger.error(f"Refusing player state for {state.id}: negative resources {state.resources}")
        raise GameError(GameErrorCode.INVALID_PLAYER_STATE, f"Resources cannot be negative (player {state.id}).")
    if state.level < 1:
        logger.error(f"Refusing player state for {state.id}: level {state.level}")
        raise GameError(GameErrorCode.INVALID_PLAYER_STATE, f"Level must be at least 1 (player {state.id}).")
    return state
