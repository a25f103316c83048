# alliance_wars/services/command_dispatcher.py
import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from alliance_wars.core.config import Settings, settings as default_settings
from alliance_wars.models.enums import ADMIN_COMMANDS, CanonicalCommand
from alliance_wars.models.player import PlayerState
from alliance_wars.services import game_engine
from alliance_wars.services.fuzzy_matcher import build_vocabulary, match_command
from alliance_wars.services.game_engine import CommandContext
from alliance_wars.services.game_store import GameStore
from alliance_wars.services.translations import get_translation

logger = logging.getLogger("alliance_wars.services.command_dispatcher")  # Logger for this module

CommandHandler = Callable[[CommandContext], str]

REPEAT_LAST_COMMAND = "."


class CommandRegistry:
    """Explicit canonical command -> handler table."""
    def __init__(self):
        self._handlers: Dict[CanonicalCommand, CommandHandler] = {}

    def register(self, command: CanonicalCommand, handler: CommandHandler) -> None:
        if command in self._handlers:
            logger.warning(f"Replacing handler for command '{command.value}'")
        self._handlers[command] = handler

    def get_handler(self, command: CanonicalCommand) -> Optional[CommandHandler]:
        return self._handlers.get(command)

    def is_admin_command(self, command: CanonicalCommand) -> bool:
        return command in ADMIN_COMMANDS

    def vocabulary(self, include_admin: bool = False) -> List[Tuple[str, CanonicalCommand]]:
        """Spellings the fuzzy matcher may resolve to, limited to registered commands."""
        return [
            (label, command)
            for label, command in build_vocabulary(include_admin=include_admin)
            if command in self._handlers
        ]


def build_default_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(CanonicalCommand.REGISTER, game_engine.handle_register)
    registry.register(CanonicalCommand.CREATE, game_engine.handle_create)
    registry.register(CanonicalCommand.JOIN, game_engine.handle_join)
    registry.register(CanonicalCommand.ATTACK, game_engine.handle_attack)
    registry.register(CanonicalCommand.DEFEND, game_engine.handle_defend)
    registry.register(CanonicalCommand.COLLECT, game_engine.handle_collect)
    registry.register(CanonicalCommand.ALLIANCE, game_engine.handle_alliance)
    registry.register(CanonicalCommand.STATUS, game_engine.handle_status)
    registry.register(CanonicalCommand.PLAYERS, game_engine.handle_players)
    registry.register(CanonicalCommand.LEAVE, game_engine.handle_leave)
    registry.register(CanonicalCommand.HELP, game_engine.handle_help)
    registry.register(CanonicalCommand.HISTORY, game_engine.handle_history)
    registry.register(CanonicalCommand.CONFIG, game_engine.handle_config)
    registry.register(CanonicalCommand.DELETE, game_engine.handle_delete)
    registry.register(CanonicalCommand.GIVE, game_engine.handle_give)
    registry.register(CanonicalCommand.SETLEVEL, game_engine.handle_setlevel)
    registry.register(CanonicalCommand.CREATE_GAME, game_engine.handle_create_game)
    return registry


class CommandDispatcher:
    """
    Entry point for one line of player text.

    Per call: load the player, run the daily recovery check, expand '.',
    fuzzy-match the command word, record it in the history, then hand off
    to the command's handler. The whole sequence runs under one
    process-wide lock so two commands never interleave their
    load/mutate/save cycles.
    """
    _lock = threading.Lock()

    def __init__(
        self,
        store: GameStore,
        registry: Optional[CommandRegistry] = None,
        settings: Settings = default_settings,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.registry = registry or build_default_registry()
        self.settings = settings
        self.clock = clock

    def is_admin(self, player: PlayerState) -> bool:
        return player.is_admin or player.id in self.settings.ADMIN_PLAYER_IDS

    def handle_command(self, player_id: str, raw_text: str) -> str:
        with self._lock:
            return self._handle_locked(player_id, raw_text)

    def _handle_locked(self, player_id: str, raw_text: str) -> str:
        now = int(self.clock())
        player = self.store.get_player(player_id)
        log_extra = {"player_id": player_id, "game_id": player.game_id}

        recovery = game_engine.apply_recovery_check(player, now, self.settings)
        prefix = ""
        if recovery.boosted:
            prefix = get_translation(
                player.language, "recovery_boost",
                resources=recovery.resources, defense=recovery.defense,
            ) + "\n\n"

        text = " ".join(raw_text.split())
        record_history = True
        if text == REPEAT_LAST_COMMAND:
            if not player.last_message:
                self._save_if(recovery.checked, player)
                return prefix + get_translation(player.language, "no_last_command")
            text = player.last_message
            record_history = False
            logger.debug(f"Repeating last command for {player_id}: '{text}'", extra=log_extra)

        is_admin = self.is_admin(player)
        parts = text.split()
        command = None
        if parts:
            command = match_command(
                parts[0],
                self.registry.vocabulary(include_admin=is_admin),
                threshold=self.settings.FUZZY_MATCH_THRESHOLD,
                max_distance=self.settings.FUZZY_MAX_DISTANCE,
            )
        handler = self.registry.get_handler(command) if command is not None else None
        if handler is None:
            logger.info(f"Unrecognised command from {player_id}: '{text}'", extra=log_extra)
            self._save_if(recovery.checked, player)
            ctx = CommandContext(self.store, player, [], now, self.settings, is_admin=is_admin)
            return prefix + game_engine.handle_help(ctx)

        if record_history:
            game_engine.push_history(player, text, self.settings.MESSAGE_HISTORY_LIMIT)
        self._save_if(record_history or recovery.checked, player)

        log_extra["command"] = command.value
        logger.info(f"Dispatching '{command.value}' for {player_id}", extra=log_extra)
        ctx = CommandContext(
            store=self.store,
            player=player,
            args=parts[1:],
            now=now,
            settings=self.settings,
            is_admin=is_admin,
            command_word=parts[0].lower(),
            log_extra=log_extra,
        )
        return prefix + handler(ctx)

    def _save_if(self, condition: bool, player: PlayerState) -> None:
        if condition:
            self.store.save_player(player)
