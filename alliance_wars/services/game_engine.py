# alliance_wars/services/game_engine.py
"""
Per-command game rules.

Every handler takes a CommandContext whose `player` was loaded fresh for this
request, checks its preconditions and either returns a user-facing message
without touching state, or mutates and saves the affected records itself.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from alliance_wars.core.config import Settings
from alliance_wars.models.enums import GameStatus
from alliance_wars.models.game import GameData
from alliance_wars.models.player import PlayerState
from alliance_wars.services.game_store import GameStore
from alliance_wars.services.translations import (
    get_available_languages,
    get_translation,
    is_valid_language,
)
from alliance_wars.services.validation import validate_game_config

logger = logging.getLogger("alliance_wars.services.game_engine")  # Logger for this module


@dataclass
class CommandContext:
    store: GameStore
    player: PlayerState
    args: List[str]
    now: int
    settings: Settings
    is_admin: bool = False
    command_word: str = ""
    log_extra: dict = field(default_factory=dict)

    def t(self, key: str, **params) -> str:
        return get_translation(self.player.language, key, **params)


class RecoveryResult(NamedTuple):
    checked: bool
    resources: int = 0
    defense: int = 0

    @property
    def boosted(self) -> bool:
        return self.resources > 0 or self.defense > 0


# --- Formulas ---------------------------------------------------------------

def calculate_damage(attacker: PlayerState, defender: PlayerState) -> int:
    """floor(max(0, attack - defense) * attacker.level / defender.level)"""
    raw_damage = max(0, attacker.attack_power - defender.defense_points)
    return raw_damage * attacker.level // max(1, defender.level)

def calculate_stolen_coins(damage: int, steal_rate: float) -> int:
    # round() first: with floats 0.29 * 100 == 28.999999999999996
    return math.floor(round(damage * steal_rate, 9))

def calculate_collection(player: PlayerState, settings: Settings) -> int:
    return settings.BASE_COLLECTION + player.level * settings.COLLECTION_PER_LEVEL

def calculate_defense_boost(player: PlayerState, settings: Settings) -> int:
    return math.floor(player.level * settings.DEFENSE_BOOST_PER_LEVEL)

def cooldown_remaining(last_used: int, cooldown: int, now: int) -> int:
    """Seconds left before an action is available again, 0 when ready."""
    elapsed = now - last_used
    return cooldown - elapsed if elapsed < cooldown else 0

def apply_recovery_check(player: PlayerState, now: int, settings: Settings) -> RecoveryResult:
    """
    Once per RECOVERY_INTERVAL_SECONDS, players below the weak threshold get
    RECOVERY_BOOST_AMOUNT resources and half of it as defense. The check
    timestamp is refreshed whenever the interval has elapsed, boost or not.
    """
    if now - player.last_recovery_check < settings.RECOVERY_INTERVAL_SECONDS:
        return RecoveryResult(checked=False)

    player.last_recovery_check = now
    if player.resources < settings.WEAK_PLAYER_THRESHOLD * settings.DEFAULT_STARTING_RESOURCES:
        resources_boost = settings.RECOVERY_BOOST_AMOUNT
        defense_boost = settings.RECOVERY_BOOST_AMOUNT // 2
        player.resources += resources_boost
        player.defense_points += defense_boost
        logger.info(f"Recovery boost for {player.id}: +{resources_boost} resources, +{defense_boost} defense")
        return RecoveryResult(checked=True, resources=resources_boost, defense=defense_boost)
    return RecoveryResult(checked=True)

def push_history(player: PlayerState, text: str, limit: int) -> None:
    player.message_history = ([text] + player.message_history)[:limit]
    player.last_message = text


# --- Shared helpers -----------------------------------------------------------

def _require_registered(ctx: CommandContext) -> Optional[str]:
    if not ctx.player.registered:
        return ctx.t("not_registered")
    return None

def _require_in_game(ctx: CommandContext) -> Optional[str]:
    if not ctx.player.registered:
        return ctx.t("not_registered")
    if not ctx.player.game_id:
        return ctx.t("not_in_game")
    return None

def _resolve_target(ctx: CommandContext, name: str, same_game: bool) -> Optional[PlayerState]:
    target = ctx.store.find_player_by_name(name, game_id=ctx.player.game_id if same_game else None)
    if target is not None and target.id == ctx.player.id:
        # Keep working on the in-memory caller so nothing stale gets written back
        return ctx.player
    return target

def _reset_to_lobby(player: PlayerState, settings: Settings) -> None:
    player.game_id = ""
    player.resources = settings.DEFAULT_STARTING_RESOURCES
    player.defense_points = settings.DEFAULT_STARTING_DEFENSE
    player.attack_power = settings.DEFAULT_STARTING_ATTACK
    player.last_attack = 0
    player.last_collect = 0
    player.last_defense = 0
    player.alliances = []
    player.pending_alliances = []

def _detach_from_game(store: GameStore, player: PlayerState) -> None:
    """
    Removes `player` from its game's roster and from every alliance or
    proposal that references it. Does not save `player` itself.
    """
    affected_ids = set(player.alliances)
    game = store.get_game(player.game_id) if player.game_id else None
    if game is None:
        if player.game_id:
            logger.warning(f"Player {player.id} referenced missing game {player.game_id}")
    else:
        affected_ids.update(game.players)
        if player.id in game.players:
            game.players.remove(player.id)
            store.save_game(game)

    affected_ids.discard(player.id)
    for other_id in sorted(affected_ids):
        if not store.player_exists(other_id):
            continue
        other = store.get_player(other_id)
        changed = False
        if player.id in other.alliances:
            other.alliances.remove(player.id)
            changed = True
        if player.id in other.pending_alliances:
            other.pending_alliances.remove(player.id)
            changed = True
        if changed:
            store.save_player(other)

def _enter_game(ctx: CommandContext, game: GameData) -> None:
    """Moves the caller into `game` with the game's starting stats. Saves nothing."""
    player = ctx.player
    if player.game_id:
        _detach_from_game(ctx.store, player)
        _reset_to_lobby(player, ctx.settings)
    player.game_id = game.config.id
    player.resources = game.config.starting_resources
    player.defense_points = game.config.starting_defense
    player.attack_power = game.config.starting_attack
    if player.id not in game.players:
        game.players.append(player.id)

def _format_duration(seconds: int) -> str:
    hours, rest = divmod(max(0, seconds), 3600)
    return f"{hours}h {rest // 60}m"


# --- Player commands ----------------------------------------------------------

def handle_register(ctx: CommandContext) -> str:
    if ctx.player.registered:
        return ctx.t("already_registered")
    name = " ".join(ctx.args).strip()
    if not name:
        return ctx.t("invalid_name")

    ctx.player.name = name
    ctx.player.registered = True
    ctx.store.save_player(ctx.player)
    logger.info(f"Player {ctx.player.id} registered as '{name}'", extra=ctx.log_extra)
    return ctx.t("registration_success", name=name)

def handle_create(ctx: CommandContext) -> str:
    error = _require_registered(ctx)
    if error:
        return error
    game_name = " ".join(ctx.args).strip()
    if not game_name:
        return ctx.t("missing_game_name")

    config = validate_game_config({
        "id": ctx.store.generate_game_id(),
        "name": game_name,
        "duration": ctx.settings.DEFAULT_GAME_DURATION_SECONDS,
        "max_players": ctx.settings.DEFAULT_MAX_PLAYERS,
        "created_at": ctx.now,
        "host_id": ctx.player.id,
    }, ctx.settings)
    game = GameData(config=config, players=[], status=GameStatus.ACTIVE)
    _enter_game(ctx, game)
    ctx.store.create_game(game)
    ctx.store.save_player(ctx.player)

    logger.info(f"Player {ctx.player.id} created and joined game {config.id}", extra=ctx.log_extra)
    return ctx.t("game_created", name=game_name, id=config.id, commands=ctx.t("in_game_commands"))

def handle_join(ctx: CommandContext) -> str:
    error = _require_registered(ctx)
    if error:
        return error
    if not ctx.args:
        return ctx.t("invalid_game_id")

    game_id = ctx.args[0]
    if ctx.player.game_id == game_id:
        return ctx.t("already_in_game", id=game_id)
    game = ctx.store.get_game(game_id)
    if game is None:
        return ctx.t("game_not_found")
    if game.is_full():
        logger.debug(f"Player {ctx.player.id} rejected from full game {game_id}", extra=ctx.log_extra)
        return ctx.t("game_full")

    _enter_game(ctx, game)
    if game.status == GameStatus.PENDING:
        game.status = GameStatus.ACTIVE
    ctx.store.save_game(game)
    ctx.store.save_player(ctx.player)

    logger.info(f"Player {ctx.player.id} joined game {game_id} ({len(game.players)}/{game.config.max_players})", extra=ctx.log_extra)
    return ctx.t("game_joined", name=game.config.name or game_id, commands=ctx.t("in_game_commands"))

def handle_attack(ctx: CommandContext) -> str:
    error = _require_in_game(ctx)
    if error:
        return error
    if not ctx.args:
        return ctx.t("attack_missing_target")

    attacker = ctx.player
    remaining = cooldown_remaining(attacker.last_attack, ctx.settings.ATTACK_COOLDOWN_SECONDS, ctx.now)
    if remaining:
        return ctx.t("attack_cooldown", time=remaining)

    target_name = " ".join(ctx.args)
    target = _resolve_target(ctx, target_name, same_game=True)
    if target is None:
        return ctx.t("player_not_found", name=target_name)
    if target.id == attacker.id:
        return ctx.t("attack_self")
    if target.id in attacker.alliances:
        return ctx.t("attack_ally", name=target.name)

    damage = calculate_damage(attacker, target)
    stolen_coins = calculate_stolen_coins(damage, ctx.settings.STEAL_RATE)
    attacker.resources += stolen_coins
    target.resources = max(0, target.resources - stolen_coins)
    attacker.successful_battles += 1
    attacker.last_attack = ctx.now

    ctx.store.save_player(target)
    ctx.store.save_player(attacker)
    logger.info(
        f"{attacker.id} attacked {target.id}: damage={damage}, stolen={stolen_coins}",
        extra=ctx.log_extra,
    )
    return ctx.t("attack_success", damage=damage, coins=stolen_coins, target=target.name, resources=attacker.resources)

def handle_defend(ctx: CommandContext) -> str:
    error = _require_in_game(ctx)
    if error:
        return error
    remaining = cooldown_remaining(ctx.player.last_defense, ctx.settings.DEFEND_COOLDOWN_SECONDS, ctx.now)
    if remaining:
        return ctx.t("defend_cooldown", time=remaining)

    boost = calculate_defense_boost(ctx.player, ctx.settings)
    ctx.player.defense_points += boost
    ctx.player.last_defense = ctx.now
    ctx.store.save_player(ctx.player)
    logger.info(f"{ctx.player.id} boosted defense by {boost}", extra=ctx.log_extra)
    return ctx.t("defend_success", amount=boost, total=ctx.player.defense_points)

def handle_collect(ctx: CommandContext) -> str:
    error = _require_in_game(ctx)
    if error:
        return error
    remaining = cooldown_remaining(ctx.player.last_collect, ctx.settings.COLLECT_COOLDOWN_SECONDS, ctx.now)
    if remaining:
        return ctx.t("collect_cooldown", time=remaining)

    amount = calculate_collection(ctx.player, ctx.settings)
    ctx.player.resources += amount
    ctx.player.last_collect = ctx.now
    ctx.store.save_player(ctx.player)
    logger.info(f"{ctx.player.id} collected {amount}", extra=ctx.log_extra)
    return ctx.t("collect_success", amount=amount, total=ctx.player.resources)

def handle_alliance(ctx: CommandContext) -> str:
    """
    Two-step handshake: A proposes to B (pending on A's side); when B proposes
    back, both get each other in `alliances` and the pending entries go away.
    """
    error = _require_in_game(ctx)
    if error:
        return error
    if not ctx.args:
        return ctx.t("alliance_missing_target")

    player = ctx.player
    target_name = " ".join(ctx.args)
    target = _resolve_target(ctx, target_name, same_game=True)
    if target is None:
        return ctx.t("player_not_found", name=target_name)
    if target.id == player.id:
        return ctx.t("alliance_self")
    if target.id in player.alliances:
        return ctx.t("already_allied", name=target.name)

    if player.id in target.pending_alliances:
        player.alliances.append(target.id)
        target.alliances.append(player.id)
        target.pending_alliances.remove(player.id)
        if target.id in player.pending_alliances:
            player.pending_alliances.remove(target.id)
        ctx.store.save_player(target)
        ctx.store.save_player(player)
        logger.info(f"Alliance formed between {player.id} and {target.id}", extra=ctx.log_extra)
        return ctx.t("alliance_formed", name=target.name)

    if target.id in player.pending_alliances:
        return ctx.t("alliance_already_proposed", name=target.name)

    player.pending_alliances.append(target.id)
    ctx.store.save_player(player)
    logger.info(f"{player.id} proposed an alliance to {target.id}", extra=ctx.log_extra)
    return ctx.t("alliance_proposed", name=target.name)

def handle_leave(ctx: CommandContext) -> str:
    error = _require_in_game(ctx)
    if error:
        return error
    old_game_id = ctx.player.game_id
    _detach_from_game(ctx.store, ctx.player)
    _reset_to_lobby(ctx.player, ctx.settings)
    ctx.store.save_player(ctx.player)
    logger.info(f"{ctx.player.id} left game {old_game_id}", extra=ctx.log_extra)
    return ctx.t("game_left")

def handle_status(ctx: CommandContext) -> str:
    error = _require_registered(ctx)
    if error:
        return error
    player = ctx.player
    settings = ctx.settings

    game = ctx.store.get_game(player.game_id) if player.game_id else None
    if game is not None:
        game_label = f"{game.config.name} ({game.config.id})"
        time_left = _format_duration(game.time_left(ctx.now))
    else:
        game_label = player.game_id or ctx.t("none")
        time_left = ctx.t("not_available")

    def names_for(ids: List[str]) -> str:
        if not ids:
            return ctx.t("none")
        return ", ".join(
            (ctx.store.get_player(pid).name or pid) if ctx.store.player_exists(pid) else pid
            for pid in ids
        )

    def readiness(last_used: int, cooldown: int) -> str:
        remaining = cooldown_remaining(last_used, cooldown, ctx.now)
        return ctx.t("cooling_down", time=remaining) if remaining else ctx.t("ready")

    return ctx.t(
        "status_message",
        name=player.name,
        game=game_label,
        resources=player.resources,
        defense=player.defense_points,
        attack=player.attack_power,
        level=player.level,
        battles=player.successful_battles,
        time_left=time_left,
        alliances=names_for(player.alliances),
        pending=names_for(player.pending_alliances),
        attack_ready=readiness(player.last_attack, settings.ATTACK_COOLDOWN_SECONDS),
        defend_ready=readiness(player.last_defense, settings.DEFEND_COOLDOWN_SECONDS),
        collect_ready=readiness(player.last_collect, settings.COLLECT_COOLDOWN_SECONDS),
    )

def handle_players(ctx: CommandContext) -> str:
    """Lists the caller's game roster, or every registered player from the lobby."""
    game = ctx.store.get_game(ctx.player.game_id) if ctx.player.game_id else None
    if game is not None:
        players = [p for p in ctx.store.get_game_players(game) if p.registered]
    else:
        players = [p for p in ctx.store.list_all_players() if p.registered]

    if not players:
        return ctx.t("no_players")
    lines = "\n".join(ctx.t("player_level", name=p.name, level=p.level) for p in players)
    return ctx.t("players_list", players=lines)

def handle_history(ctx: CommandContext) -> str:
    history = ctx.player.message_history[:ctx.settings.MESSAGE_HISTORY_LIMIT]
    if not history:
        return ctx.t("no_history")
    lines = "\n".join(f"{i}. {text}" for i, text in enumerate(history, start=1))
    return ctx.t("history_list", commands=lines)

def handle_help(ctx: CommandContext) -> str:
    text = ctx.t("help")
    if ctx.is_admin:
        text += "\n\n" + ctx.t("help_admin")
    return text

def handle_config(ctx: CommandContext) -> str:
    """Accepts 'config lang <code>', 'config <code>' and 'language <code>'."""
    args = list(ctx.args)
    if args and args[0].lower() in ("lang", "language"):
        args = args[1:]
    if not args:
        return ctx.t("config_usage")

    new_language = args[0].lower()
    if not is_valid_language(new_language):
        return ctx.t("invalid_language", languages=get_available_languages())

    ctx.player.language = new_language
    ctx.store.save_player(ctx.player)
    logger.info(f"{ctx.player.id} switched language to {new_language}", extra=ctx.log_extra)
    return ctx.t("language_updated", language=new_language)


# --- Admin commands -----------------------------------------------------------

def handle_delete(ctx: CommandContext) -> str:
    if not ctx.args:
        return ctx.t("delete_usage")
    name = " ".join(ctx.args)
    target = _resolve_target(ctx, name, same_game=False)
    if target is None:
        return ctx.t("player_not_found", name=name)

    if target.game_id or target.alliances:
        _detach_from_game(ctx.store, target)
    ctx.store.delete_player(target.id)
    logger.warning(f"Admin {ctx.player.id} deleted player {target.id} ('{target.name}')", extra=ctx.log_extra)
    return ctx.t("player_deleted", name=target.name)

def _parse_admin_target_and_number(ctx: CommandContext):
    """'<player name ...> <number>' -> (name, int or None)"""
    name = " ".join(ctx.args[:-1])
    try:
        number = int(ctx.args[-1])
    except ValueError:
        number = None
    return name, number

def handle_give(ctx: CommandContext) -> str:
    if len(ctx.args) < 2:
        return ctx.t("give_usage")
    name, amount = _parse_admin_target_and_number(ctx)
    if amount is None:
        return ctx.t("invalid_amount")
    target = _resolve_target(ctx, name, same_game=False)
    if target is None:
        return ctx.t("player_not_found", name=name)

    target.resources = max(0, target.resources + amount)
    ctx.store.save_player(target)
    logger.info(f"Admin {ctx.player.id} gave {amount} resources to {target.id}", extra=ctx.log_extra)
    return ctx.t("resources_given", amount=amount, name=target.name)

def handle_setlevel(ctx: CommandContext) -> str:
    if len(ctx.args) < 2:
        return ctx.t("setlevel_usage")
    name, level = _parse_admin_target_and_number(ctx)
    if level is None or level < 1:
        return ctx.t("invalid_level")
    target = _resolve_target(ctx, name, same_game=False)
    if target is None:
        return ctx.t("player_not_found", name=name)

    target.level = level
    ctx.store.save_player(target)
    logger.info(f"Admin {ctx.player.id} set level of {target.id} to {level}", extra=ctx.log_extra)
    return ctx.t("level_set", name=target.name, level=level)

def handle_create_game(ctx: CommandContext) -> str:
    """create_game <game_id> <duration_hours> <max_players>; the game waits for its first join."""
    if len(ctx.args) < 3:
        return ctx.t("create_game_usage")
    game_id = ctx.args[0]
    try:
        hours = int(ctx.args[1])
        max_players = int(ctx.args[2])
    except ValueError:
        return ctx.t("create_game_usage")
    if ctx.store.game_exists(game_id):
        return ctx.t("game_exists", id=game_id)

    # Raises GameError(INVALID_GAME_CONFIG) for non-positive durations or too few players
    config = validate_game_config({
        "id": game_id,
        "name": game_id,
        "duration": hours * 3600,
        "max_players": max_players,
        "created_at": ctx.now,
        "host_id": ctx.player.id,
    }, ctx.settings)
    ctx.store.create_game(GameData(config=config, players=[], status=GameStatus.PENDING))
    return ctx.t("admin_game_created", id=game_id, hours=hours, max_players=max_players)
