from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from sipplanner.app import create_app
from sipplanner.storage import Store


@pytest.fixture()
def app(tmp_path) -> Flask:
    return create_app({"DB_PATH": str(tmp_path / "sipplanner-test.db"), "TESTING": True})


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def store(tmp_path) -> Store:
    store = Store(tmp_path / "store.db")
    store.init_db()
    return store
