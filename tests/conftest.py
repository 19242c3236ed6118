# tests/conftest.py

from __future__ import annotations

import uuid

import pytest

from ratboard import create_app
from ratboard.board import BoardClient, LocalStorage

from .fakes import FlaskApi


@pytest.fixture()
def app():
    """
    App with its own shared in-memory database.

    A unique name per test keeps tables from leaking between tests.
    """
    app = create_app({
        "TESTING": True,
        "DATABASE": f"file:ratboard-{uuid.uuid4().hex}?mode=memory&cache=shared",
    })
    yield app
    app.extensions["ratboard.keeper"].close()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def api(client) -> FlaskApi:
    return FlaskApi(client)


@pytest.fixture()
def board(api) -> BoardClient:
    return BoardClient(api, LocalStorage())
