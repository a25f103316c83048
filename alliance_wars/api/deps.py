# alliance_wars/api/deps.py
import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from alliance_wars.core.config import settings
from alliance_wars.db.session import SessionLocal
from alliance_wars.services.command_dispatcher import CommandDispatcher, CommandRegistry, build_default_registry
from alliance_wars.services.game_store import GameStore

logger = logging.getLogger("alliance_wars.api.deps")  # Logger for this module

# Handlers are stateless, one table serves every request
_registry: CommandRegistry = build_default_registry()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_store(db: Session = Depends(get_db)) -> GameStore:
    return GameStore(db, settings)

def get_dispatcher(store: GameStore = Depends(get_store)) -> CommandDispatcher:
    return CommandDispatcher(store, registry=_registry, settings=settings)

async def verify_admin_token(x_admin_token: Optional[str] = Header(default=None)) -> None:
    if not x_admin_token or not secrets.compare_digest(x_admin_token, settings.ADMIN_API_TOKEN):
        logger.warning("Rejected admin request with missing or invalid X-Admin-Token header")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
