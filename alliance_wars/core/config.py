# alliance_wars/core/config.py
import pathlib
import logging
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

logger = logging.getLogger("alliance_wars.core.config")  # Logger for this module

BASE_DIR = pathlib.Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    PROJECT_NAME: str = "Alliance Wars"
    API_V1_STR: str = "/api/v1"
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'alliance_wars.db'}"
    DEFAULT_LANGUAGE: str = "en"

    # Player ids that are always treated as admins (the web client acts as the game master)
    ADMIN_PLAYER_IDS: List[str] = ["web-client"]
    ADMIN_API_TOKEN: str = "change-this-admin-token"

    # --- Starting values for new players and games ---
    DEFAULT_STARTING_RESOURCES: int = 100
    DEFAULT_STARTING_DEFENSE: int = 50
    DEFAULT_STARTING_ATTACK: int = 30
    DEFAULT_GAME_DURATION_SECONDS: int = 24 * 3600
    DEFAULT_MAX_PLAYERS: int = 10

    # --- Cooldowns (seconds) ---
    ATTACK_COOLDOWN_SECONDS: int = 6 * 3600
    DEFEND_COOLDOWN_SECONDS: int = 3600
    COLLECT_COOLDOWN_SECONDS: int = 600

    # --- Recovery boost for weak players ---
    RECOVERY_INTERVAL_SECONDS: int = 24 * 3600
    WEAK_PLAYER_THRESHOLD: float = 0.5  # Fraction of DEFAULT_STARTING_RESOURCES
    RECOVERY_BOOST_AMOUNT: int = 50  # Defense gets half of this

    # --- Formulas ---
    STEAL_RATE: float = 0.10
    BASE_COLLECTION: int = 15
    COLLECTION_PER_LEVEL: int = 2
    DEFENSE_BOOST_PER_LEVEL: int = 5

    MESSAGE_HISTORY_LIMIT: int = 5

    # --- Fuzzy matching of commands and player names ---
    FUZZY_MATCH_THRESHOLD: float = 0.7
    FUZZY_MAX_DISTANCE: int = 3

    GAME_ID_MAX_ATTEMPTS: int = 20

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache()
def get_settings():
    settings_instance = Settings()
    logger.info(f"Settings loaded for '{settings_instance.PROJECT_NAME}' using database {settings_instance.DATABASE_URL}")
    return settings_instance

settings = get_settings()
