import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from tablescript.core import db_connector
from tablescript.core.errors import DatabaseConnectionError
from tablescript.models.connection import ConnectionRequest

REQ = ConnectionRequest(database="TestDB", username="sa", password="secret")


def test_create_engine_validates_connection(monkeypatch):
    engine = MagicMock()
    monkeypatch.setattr(db_connector, "create_engine", lambda *a, **k: engine)

    assert db_connector.create_engine_from_request(REQ) is engine
    engine.connect.return_value.__enter__.return_value.execute.assert_called_once()


def test_connection_failure_is_fatal_and_typed(monkeypatch):
    engine = MagicMock()
    engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("login failed"))
    monkeypatch.setattr(db_connector, "create_engine", lambda *a, **k: engine)

    with pytest.raises(DatabaseConnectionError) as exc:
        db_connector.create_engine_from_request(REQ)
    assert isinstance(exc.value, ConnectionError)
    assert "secret" not in str(exc.value)
    engine.dispose.assert_called_once()


def test_catalog_connection_disposes_engine(monkeypatch):
    engine = MagicMock()
    monkeypatch.setattr(db_connector, "create_engine", lambda *a, **k: engine)

    with db_connector.catalog_connection(REQ) as conn:
        assert conn is engine.connect.return_value.__enter__.return_value
    engine.dispose.assert_called_once()
