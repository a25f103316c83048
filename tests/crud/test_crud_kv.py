# tests/crud/test_crud_kv.py
from sqlalchemy.orm import Session
from alliance_wars.crud import crud_kv
from alliance_wars.schemas.kv_entry import KVEntry as DBEntry  # SQLAlchemy model

def test_set_and_get_value(db_session: Session):
    crud_kv.set_value(db_session, "player:alice", {"id": "alice", "resources": 100})

    assert crud_kv.get_value(db_session, "player:alice") == {"id": "alice", "resources": 100}
    queried = db_session.query(DBEntry).filter(DBEntry.key == "player:alice").first()
    assert queried is not None
    assert queried.updated_at is not None

def test_set_value_overwrites(db_session: Session):
    crud_kv.set_value(db_session, "game:12345", {"status": "pending"})
    crud_kv.set_value(db_session, "game:12345", {"status": "active"})

    assert crud_kv.get_value(db_session, "game:12345") == {"status": "active"}
    assert db_session.query(DBEntry).filter(DBEntry.key == "game:12345").count() == 1

def test_get_missing_value_returns_none(db_session: Session):
    assert crud_kv.get_value(db_session, "player:nobody") is None
    assert crud_kv.key_exists(db_session, "player:nobody") is False

def test_delete_value(db_session: Session):
    crud_kv.set_value(db_session, "player:bob", {"id": "bob"})

    assert crud_kv.delete_value(db_session, "player:bob") is True
    assert crud_kv.key_exists(db_session, "player:bob") is False
    assert crud_kv.delete_value(db_session, "player:bob") is False

def test_list_keys_by_prefix(db_session: Session):
    crud_kv.set_value(db_session, "player:b", {})
    crud_kv.set_value(db_session, "player:a", {})
    crud_kv.set_value(db_session, "game:1", {})
    crud_kv.set_value(db_session, "player_x", {})  # '_' must not act as a wildcard

    assert crud_kv.list_keys(db_session, "player:") == ["player:a", "player:b"]
    assert crud_kv.list_keys(db_session, "game:") == ["game:1"]
    assert len(crud_kv.list_keys(db_session)) == 4
