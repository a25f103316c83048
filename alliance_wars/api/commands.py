# alliance_wars/api/commands.py
import logging
import time
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from alliance_wars.api import deps
from alliance_wars.core.errors import GameError
from alliance_wars.crud import crud_system
from alliance_wars.models.command import CommandRequest, CommandResponse
from alliance_wars.models.game import GameSummary
from alliance_wars.models.player import PlayerState
from alliance_wars.services.command_dispatcher import CommandDispatcher
from alliance_wars.services.game_store import GameStore

logger = logging.getLogger("alliance_wars.api.commands")  # Logger for this module
router = APIRouter()

INTERNAL_ERROR_MESSAGE = "Something went wrong while processing your command. Please try again."


@router.post("/commands", response_model=CommandResponse)
def process_command(
    request: CommandRequest,
    dispatcher: CommandDispatcher = Depends(deps.get_dispatcher),
    db: Session = Depends(deps.get_db),
):
    """
    Runs one line of chat text for a player and returns the reply text.
    Game rule violations come back as a normal reply with success=false.
    """
    if not request.player_id.strip() or not request.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="player_id and text are required")

    try:
        message = dispatcher.handle_command(request.player_id.strip(), request.text)
        return CommandResponse(success=True, message=message)
    except GameError as e:
        logger.warning(f"Game error for {request.player_id}: {e}", extra={"player_id": request.player_id})
        return CommandResponse(success=False, message=f"Error: {e.message}", error_code=e.code.value)
    except Exception as e:
        logger.exception(f"Unhandled error while processing '{request.text}' for {request.player_id}: {e}")
        crud_system.create_alert(db, "ERROR", "Command processing failed", f"player={request.player_id} text={request.text!r}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=CommandResponse(success=False, message=INTERNAL_ERROR_MESSAGE).model_dump(),
        )


@router.get("/players/{player_id}", response_model=PlayerState, response_model_by_alias=True)
def read_player(player_id: str, store: GameStore = Depends(deps.get_store)):
    if not store.player_exists(player_id):
        raise HTTPException(status_code=404, detail="Player not found")
    return store.get_player(player_id)


@router.get("/games", response_model=List[GameSummary])
def list_games(store: GameStore = Depends(deps.get_store)):
    now = int(time.time())
    return [
        GameSummary(
            id=game.config.id,
            name=game.config.name,
            status=game.status,
            players_count=len(game.players),
            max_players=game.config.max_players,
            time_left_seconds=game.time_left(now),
        )
        for game in store.list_all_games()
    ]
