import os
from collections import namedtuple
from typing import Generator
from unittest.mock import patch

import pytest
from _pytest.tmpdir import TempPathFactory
from flask import Flask

from grant_tracker import create_app
from tests.models import _ClientFactory, _GrantFactory

TEST_ADMIN_KEY = "test-admin-key"  # pragma: allowlist secret


@pytest.fixture(scope="session")
def app(tmp_path_factory: TempPathFactory) -> Generator[Flask, None, None]:
    db_path = tmp_path_factory.mktemp("db") / "grants.db"
    with patch.dict(
        os.environ,
        {
            "FLASK_ENV": "unit_test",
            "DB_PATH": str(db_path),
            "ADMIN_PASSWORD": TEST_ADMIN_KEY,
        },
    ):
        app = create_app()

    app.config.update({"TESTING": True})
    yield app


@pytest.fixture(scope="function", autouse=True)
def db_session(app: Flask) -> Generator[None, None, None]:
    # Overridden in the `unit` and `integration` sub-directories; this just makes sure there's an app context.
    with app.app_context():
        yield


_Factories = namedtuple("_Factories", ["client", "grant"])


@pytest.fixture(scope="function")
def factories(db_session: None) -> _Factories:
    return _Factories(client=_ClientFactory, grant=_GrantFactory)
