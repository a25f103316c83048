# tests/crud/test_crud_system.py
from sqlalchemy.orm import Session
from alliance_wars.crud import crud_system

def test_create_and_list_alerts(db_session: Session):
    first = crud_system.create_alert(db_session, "WARNING", "First alert")
    second = crud_system.create_alert(db_session, "ERROR", "Second alert", details="trace")

    assert first is not None and first.id is not None
    assert second.details == "trace"

    alerts = crud_system.get_latest_alerts(db_session, limit=10)
    assert [a.message for a in alerts][:2] == ["Second alert", "First alert"]

def test_create_alert_survives_db_failure(mocker):
    db = mocker.MagicMock()
    db.commit.side_effect = RuntimeError("database is gone")

    assert crud_system.create_alert(db, "ERROR", "Cannot store this") is None
    db.rollback.assert_called_once()
