# tests/services/test_command_dispatcher.py
import pytest

from alliance_wars.models.enums import CanonicalCommand
from alliance_wars.services.command_dispatcher import CommandRegistry, build_default_registry
from alliance_wars.services.translations import get_translation


def en(key, **params):
    return get_translation("en", key, **params)

def test_default_registry_covers_every_command():
    registry = build_default_registry()
    for command in CanonicalCommand:
        assert registry.get_handler(command) is not None

def test_registry_vocabulary_limited_to_registered_commands():
    registry = CommandRegistry()
    registry.register(CanonicalCommand.HELP, lambda ctx: "help")
    registry.register(CanonicalCommand.GIVE, lambda ctx: "give")

    assert registry.vocabulary(include_admin=False) == [("help", CanonicalCommand.HELP)]
    assert ("give", CanonicalCommand.GIVE) in registry.vocabulary(include_admin=True)
    assert registry.is_admin_command(CanonicalCommand.GIVE)

def test_full_flow_register_create_join(dispatcher, store):
    assert "Welcome Alice" in dispatcher.handle_command("p1", "register Alice")
    reply = dispatcher.handle_command("p1", "create Friday")
    game_id = store.get_player("p1").game_id
    assert game_id in reply

    dispatcher.handle_command("p2", "register Bob")
    dispatcher.handle_command("p2", f"join {game_id}")
    assert store.get_game(game_id).players == ["p1", "p2"]

def test_fuzzy_command_word(dispatcher, store):
    dispatcher.handle_command("p1", "regster Alice")
    assert store.get_player("p1").name == "Alice"

def test_unknown_command_returns_help(dispatcher, store):
    assert dispatcher.handle_command("p1", "xyz123 foo") == en("help")
    assert store.get_player("p1").message_history == []

def test_history_keeps_last_five_most_recent_first(dispatcher, store):
    dispatcher.handle_command("p1", "register Alice")
    for i in range(6):
        dispatcher.handle_command("p1", f"status {i}")

    player = store.get_player("p1")
    assert player.message_history == ["status 5", "status 4", "status 3", "status 2", "status 1"]
    assert player.last_message == "status 5"

def test_history_is_recorded_even_when_preconditions_fail(dispatcher, store):
    assert dispatcher.handle_command("p1", "attack  Bob") == en("not_registered")
    assert store.get_player("p1").message_history == ["attack Bob"]

def test_repeat_last_command(dispatcher, store, clock):
    dispatcher.handle_command("p1", "register Alice")
    dispatcher.handle_command("p1", "create Arena")
    dispatcher.handle_command("p1", "collect")
    clock.advance(600)

    reply = dispatcher.handle_command("p1", ".")

    player = store.get_player("p1")
    assert reply == en("collect_success", amount=17, total=134)
    assert player.message_history == ["collect", "create Arena", "register Alice"]

def test_repeat_without_previous_command(dispatcher):
    assert dispatcher.handle_command("p1", ".") == en("no_last_command")

def test_cooldown_with_fixed_clock(dispatcher, store, clock):
    dispatcher.handle_command("p1", "register Alice")
    dispatcher.handle_command("p1", "create Arena")
    dispatcher.handle_command("p1", "defend")
    clock.advance(1800)

    assert dispatcher.handle_command("p1", "defend") == en("defend_cooldown", time=1800)

def test_recovery_notice_is_prefixed(dispatcher, store, clock, test_settings):
    dispatcher.handle_command("p1", "register Alice")
    player = store.get_player("p1")
    player.resources = 10
    player.last_recovery_check = clock.now - test_settings.RECOVERY_INTERVAL_SECONDS
    store.save_player(player)

    reply = dispatcher.handle_command("p1", "help")

    assert reply.startswith(en("recovery_boost", resources=50, defense=25))
    assert reply.endswith(en("help"))
    player = store.get_player("p1")
    assert player.resources == 60
    assert player.last_recovery_check == clock.now

    # Only once per interval
    assert dispatcher.handle_command("p1", "help") == en("help")

def test_recovery_check_persisted_for_unmatched_commands(dispatcher, store, clock):
    dispatcher.handle_command("p1", "qqqqqq")
    assert store.get_player("p1").last_recovery_check == clock.now

@pytest.mark.parametrize("player_id, expected_admin", [("web-client", True), ("p1", False)])
def test_admin_commands_gated_by_vocabulary(dispatcher, store, player_id, expected_admin):
    dispatcher.handle_command(player_id, "register Someone")
    reply = dispatcher.handle_command(player_id, "create_game arena 2 4")

    assert store.game_exists("arena") is expected_admin
    if not expected_admin:
        assert reply == en("help")
    else:
        assert reply == en("admin_game_created", id="arena", hours=2, max_players=4)

def test_is_admin_flag_on_player(dispatcher, store):
    dispatcher.handle_command("p1", "register Alice")
    player = store.get_player("p1")
    player.is_admin = True
    store.save_player(player)

    dispatcher.handle_command("p1", "give Alice 25")
    assert store.get_player("p1").resources == 125

def test_language_alias_switches_replies(dispatcher, store):
    dispatcher.handle_command("p1", "register Alice")
    dispatcher.handle_command("p1", "language es")

    assert dispatcher.handle_command("p1", "leave") == get_translation("es", "not_in_game")

def test_admin_help_mentions_admin_commands(dispatcher):
    assert en("help_admin") in dispatcher.handle_command("web-client", "help")
    assert en("help_admin") not in dispatcher.handle_command("p1", "help")
