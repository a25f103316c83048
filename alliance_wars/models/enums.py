from enum import Enum

class CanonicalCommand(str, Enum):
    REGISTER = "register"
    CREATE = "create"
    JOIN = "join"
    ATTACK = "attack"
    DEFEND = "defend"
    COLLECT = "collect"
    ALLIANCE = "alliance"
    STATUS = "status"
    PLAYERS = "players"
    LEAVE = "leave"
    HELP = "help"
    HISTORY = "history"
    CONFIG = "config"
    # Admin only
    DELETE = "delete"
    GIVE = "give"
    SETLEVEL = "setlevel"
    CREATE_GAME = "create_game"

ADMIN_COMMANDS = frozenset({
    CanonicalCommand.DELETE,
    CanonicalCommand.GIVE,
    CanonicalCommand.SETLEVEL,
    CanonicalCommand.CREATE_GAME,
})

class GameStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"

class GameErrorCode(str, Enum):
    INVALID_GAME_CONFIG = "INVALID_GAME_CONFIG"
    INVALID_PLAYER_STATE = "INVALID_PLAYER_STATE"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_ID_EXHAUSTED = "GAME_ID_EXHAUSTED"
