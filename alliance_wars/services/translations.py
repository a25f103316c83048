# alliance_wars/services/translations.py
import logging
from typing import Dict

logger = logging.getLogger("alliance_wars.services.translations")  # Logger for this module

DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES: Dict[str, str] = {
    "en": "English",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "it": "Italiano",
    "pt": "Português",
    "ru": "Русский",
    "zh": "中文",
    "ja": "日本語",
    "ko": "한국어",
    "he": "עברית",
}

_EN: Dict[str, str] = {
    "welcome": "Welcome to the game!",
    "invalid_language": "Invalid language. Please choose from: {languages}",
    "language_updated": "Language updated to {language}",
    "config_usage": "*Available Configurations:*\n• *config lang <language>*: Set your language",
    "help": (
        "*Available Commands:*\n"
        "• *register <name>*: Set your player name\n"
        "• *create <name>*: Create a new game\n"
        "• *join <game_id>*: Join a game\n"
        "• *attack <player>*: Attack another player\n"
        "• *defend*: Boost your defense\n"
        "• *collect*: Gather resources\n"
        "• *alliance <player>*: Propose alliance\n"
        "• *status*: Check your status\n"
        "• *players*: List all players\n"
        "• *leave*: Leave current game\n"
        "• *history*: Show your last commands\n"
        "• *.*: Repeat your last command\n"
        "• *config lang <language>*: Set your language"
    ),
    "help_admin": (
        "*Admin Commands:*\n"
        "• *create_game <game_id> <duration_hours> <max_players>*: Create a new game\n"
        "• *delete <player>*: Delete a player\n"
        "• *give <player> <amount>*: Give resources to a player\n"
        "• *setlevel <player> <level>*: Set a player's level"
    ),
    "in_game_commands": (
        "🎮 *Available Commands:*\n"
        "• *attack <player>*: Attack another player\n"
        "• *defend*: Boost your defense\n"
        "• *collect*: Gather resources\n"
        "• *alliance <player>*: Propose alliance\n"
        "• *status*: Check your status\n"
        "• *players*: List all players\n"
        "• *leave*: Leave the game"
    ),
    "not_registered": "Please register first using 'register <your_name>'",
    "not_in_game": "Please join a game first! Use 'join <game_id>' or 'create <name>'.",
    "already_registered": "You are already registered!",
    "invalid_name": "Please provide your name!",
    "registration_success": "*Welcome {name}!* You've been registered successfully. Type 'join <game_id>' to join a game!",
    "missing_game_name": "Please provide a name for the game!",
    "game_created": "*Game Created!*\nGame '{name}' created with ID: {id}\n\n{commands}",
    "create_game_usage": "Usage: create_game <game_id> <duration_hours> <max_players>",
    "game_exists": "A game with ID {id} already exists!",
    "admin_game_created": "Game '{id}' created: {hours}h, up to {max_players} players.",
    "invalid_game_id": "Please provide a game ID to join!",
    "game_not_found": "Game not found! Use 'create <name>' to create a new game.",
    "game_full": "Game is full!",
    "already_in_game": "You are already in game {id}!",
    "game_joined": "*Welcome to {name}!*\n\n{commands}",
    "player_not_found": "Player {name} not found! Please try again.",
    "attack_missing_target": "Please provide a player to attack!",
    "attack_self": "You cannot attack yourself!",
    "attack_ally": "You cannot attack your ally {name}!",
    "attack_cooldown": "⏳ Attack Cooldown: {time} seconds remaining",
    "attack_success": (
        "*Attack successful!*\n"
        "• Damage dealt: {damage}\n"
        "• Coins stolen: {coins}\n"
        "• Target: {target}\n"
        "• Your resources: {resources}"
    ),
    "defend_cooldown": "⏳ Defense Cooldown: {time} seconds remaining",
    "defend_success": "🛡️ *Defense Boosted!*\n• Boost amount: {amount}\n• Total defense: {total}",
    "collect_cooldown": "⏳ Collection Cooldown: {time} seconds remaining",
    "collect_success": "💰 *Resources Collected!*\n• Amount: {amount} coins\n• Total resources: {total}",
    "alliance_missing_target": "Please provide a player to propose alliance!",
    "alliance_self": "You cannot form an alliance with yourself!",
    "already_allied": "You already have an alliance with {name}!",
    "alliance_already_proposed": "You already proposed an alliance to {name}. They need to accept it.",
    "alliance_proposed": "*Alliance proposal sent to {name}!*\nThey will need to accept your proposal.",
    "alliance_formed": "🤝 *Alliance formed with {name}!*",
    "game_left": "*You have left the game.*\nUse 'join <game_id>' to join another game!",
    "status_message": (
        "📊 *Status:*\n"
        "• Name: {name}\n"
        "• Game: {game}\n"
        "• Resources: {resources}\n"
        "• Defense: {defense}\n"
        "• Attack: {attack}\n"
        "• Level: {level}\n"
        "• Battles won: {battles}\n"
        "• Time left: {time_left}\n"
        "• Alliances: {alliances}\n"
        "• Pending proposals: {pending}\n"
        "• Attack: {attack_ready}\n"
        "• Defend: {defend_ready}\n"
        "• Collect: {collect_ready}"
    ),
    "ready": "✅ Ready",
    "cooling_down": "⏳ {time}s",
    "none": "None",
    "not_available": "N/A",
    "players_list": "*Players:*\n{players}",
    "player_level": "• {name} (Level {level})",
    "no_players": "No players found!",
    "history_list": "*Your last commands:*\n{commands}",
    "no_history": "No commands yet.",
    "no_last_command": "There is no previous command to repeat.",
    "recovery_boost": "🩹 Recovery boost: +{resources} resources, +{defense} defense",
    "delete_usage": "Please specify a player name!",
    "player_deleted": "Player {name} has been deleted!",
    "give_usage": "Usage: give <player> <amount>",
    "invalid_amount": "Invalid amount!",
    "resources_given": "Gave {amount} resources to {name}",
    "setlevel_usage": "Usage: setlevel <player> <level>",
    "invalid_level": "Invalid level!",
    "level_set": "Set {name}'s level to {level}",
}

_ES: Dict[str, str] = {
    "welcome": "¡Bienvenido al juego!",
    "invalid_language": "Idioma no válido. Por favor elige entre: {languages}",
    "language_updated": "Idioma actualizado a {language}",
    "config_usage": "*Configuraciones disponibles:*\n• *config lang <idioma>*: Cambia tu idioma",
    "help": (
        "*Comandos disponibles:*\n"
        "• *register <nombre>*: Define tu nombre de jugador\n"
        "• *create <nombre>*: Crea una partida nueva\n"
        "• *join <id_partida>*: Únete a una partida\n"
        "• *attack <jugador>*: Ataca a otro jugador\n"
        "• *defend*: Refuerza tu defensa\n"
        "• *collect*: Recolecta recursos\n"
        "• *alliance <jugador>*: Propón una alianza\n"
        "• *status*: Consulta tu estado\n"
        "• *players*: Lista de jugadores\n"
        "• *leave*: Abandona la partida\n"
        "• *history*: Tus últimos comandos\n"
        "• *.*: Repite tu último comando\n"
        "• *config lang <idioma>*: Cambia tu idioma"
    ),
    "not_registered": "Primero regístrate con 'register <tu_nombre>'",
    "not_in_game": "¡Primero únete a una partida! Usa 'join <id_partida>' o 'create <nombre>'.",
    "already_registered": "¡Ya estás registrado!",
    "invalid_name": "¡Por favor indica tu nombre!",
    "registration_success": "*¡Bienvenido {name}!* Te has registrado correctamente. ¡Escribe 'join <id_partida>' para unirte a una partida!",
    "missing_game_name": "¡Por favor indica un nombre para la partida!",
    "invalid_game_id": "¡Por favor indica el ID de la partida!",
    "game_not_found": "¡Partida no encontrada! Usa 'create <nombre>' para crear una nueva.",
    "game_full": "¡La partida está llena!",
    "already_in_game": "¡Ya estás en la partida {id}!",
    "player_not_found": "¡Jugador {name} no encontrado! Inténtalo de nuevo.",
    "attack_missing_target": "¡Indica a qué jugador quieres atacar!",
    "attack_self": "¡No puedes atacarte a ti mismo!",
    "attack_ally": "¡No puedes atacar a tu aliado {name}!",
    "attack_cooldown": "⏳ Espera de ataque: quedan {time} segundos",
    "defend_cooldown": "⏳ Espera de defensa: quedan {time} segundos",
    "defend_success": "🛡️ *¡Defensa reforzada!*\n• Aumento: {amount}\n• Defensa total: {total}",
    "collect_cooldown": "⏳ Espera de recolección: quedan {time} segundos",
    "collect_success": "💰 *¡Recursos recolectados!*\n• Cantidad: {amount} monedas\n• Recursos totales: {total}",
    "alliance_missing_target": "¡Indica a qué jugador quieres proponer una alianza!",
    "alliance_self": "¡No puedes aliarte contigo mismo!",
    "already_allied": "¡Ya tienes una alianza con {name}!",
    "alliance_already_proposed": "Ya propusiste una alianza a {name}. Debe aceptarla.",
    "alliance_proposed": "*¡Propuesta de alianza enviada a {name}!*\nDeberá aceptar tu propuesta.",
    "alliance_formed": "🤝 *¡Alianza formada con {name}!*",
    "game_left": "*Has abandonado la partida.*\n¡Usa 'join <id_partida>' para unirte a otra!",
    "ready": "✅ Listo",
    "none": "Ninguna",
    "no_players": "¡No se encontraron jugadores!",
    "no_history": "Todavía no hay comandos.",
    "no_last_command": "No hay un comando anterior para repetir.",
    "recovery_boost": "🩹 Recuperación: +{resources} recursos, +{defense} defensa",
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": _EN,
    "es": _ES,
    "fr": {
        "welcome": "Bienvenue dans le jeu!",
        "invalid_language": "Langue invalide. Veuillez choisir parmi: {languages}",
        "language_updated": "Langue mise à jour en {language}",
    },
    "de": {
        "welcome": "Willkommen im Spiel!",
        "invalid_language": "Ungültige Sprache. Bitte wählen Sie aus: {languages}",
        "language_updated": "Sprache aktualisiert auf {language}",
    },
    "it": {
        "welcome": "Benvenuto nel gioco!",
        "invalid_language": "Lingua non valida. Scegli tra: {languages}",
        "language_updated": "Lingua aggiornata a {language}",
    },
    "pt": {
        "welcome": "Bem-vindo ao jogo!",
        "invalid_language": "Idioma inválido. Por favor escolha entre: {languages}",
        "language_updated": "Idioma atualizado para {language}",
    },
    "ru": {
        "welcome": "Добро пожаловать в игру!",
        "invalid_language": "Неверный язык. Пожалуйста, выберите из: {languages}",
        "language_updated": "Язык обновлен на {language}",
    },
    "zh": {
        "welcome": "欢迎来到游戏！",
        "invalid_language": "无效的语言。请从以下选择：{languages}",
        "language_updated": "语言已更新为 {language}",
    },
    "ja": {
        "welcome": "ゲームへようこそ！",
        "invalid_language": "無効な言語です。以下から選択してください：{languages}",
        "language_updated": "言語が {language} に更新されました",
    },
    "ko": {
        "welcome": "게임에 오신 것을 환영합니다!",
        "invalid_language": "잘못된 언어입니다. 다음 중에서 선택하세요: {languages}",
        "language_updated": "언어가 {language}로 업데이트되었습니다",
    },
    "he": {
        "welcome": "!ברוכים הבאים למשחק",
        "invalid_language": "{languages} :שפה לא חוקית. אנא בחר מתוך",
        "language_updated": "{language}-השפה עודכנה ל",
    },
}


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def is_valid_language(code: str) -> bool:
    return code in SUPPORTED_LANGUAGES


def get_available_languages() -> str:
    return ", ".join(f"{code} ({name})" for code, name in SUPPORTED_LANGUAGES.items())


def get_translation(language: str, key: str, **params) -> str:
    """
    Looks up `key` for `language`, falling back to English, and fills the
    {named} placeholders. Placeholders without a value are left untouched.
    """
    template = TRANSLATIONS.get(language, {}).get(key)
    if template is None:
        template = TRANSLATIONS[DEFAULT_LANGUAGE].get(key)
    if template is None:
        logger.error(f"Missing translation key '{key}' (language '{language}')")
        return key
    return template.format_map(_KeepMissing({k: str(v) for k, v in params.items()}))
