# alliance_wars/core/errors.py
from alliance_wars.models.enums import GameErrorCode


class GameError(Exception):
    """
    Raised for configuration/validation problems and storage inconsistencies.
    Ordinary user mistakes (cooldowns, unknown targets, ...) are never raised,
    they come back as plain reply messages.
    """
    def __init__(self, code: GameErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
