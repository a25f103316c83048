# alliance_wars/api/admin.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from alliance_wars.api import deps
from alliance_wars.crud import crud_system
from alliance_wars.models.monitoring import RestartResponse, SystemAlertPublic
from alliance_wars.services.game_store import GameStore

logger = logging.getLogger("alliance_wars.api.admin")  # Logger for this module

protected_router = APIRouter(
    dependencies=[Depends(deps.verify_admin_token)],
    tags=["Admin"]
)

WEB_CLIENT_ID = "web-client"


@protected_router.post("/restart", response_model=RestartResponse)
def restart_game(store: GameStore = Depends(deps.get_store)):
    """Wipes every player record and recreates the web-client game master."""
    deleted = store.delete_all_players()

    admin = store.new_player_state(WEB_CLIENT_ID)
    admin.name = "Admin"
    admin.registered = True
    admin.is_admin = True
    admin.resources = 1000
    admin.defense_points = 100
    admin.attack_power = 100
    admin.level = 10
    store.save_player(admin)

    logger.warning(f"Game restarted by admin request: {deleted} player records removed")
    return RestartResponse(success=True, message="Game restarted successfully", players_deleted=deleted)


@protected_router.get("/alerts", response_model=List[SystemAlertPublic])
def read_alerts(
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(deps.get_db),
):
    return crud_system.get_latest_alerts(db, limit=limit)
