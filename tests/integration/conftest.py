import typing as t
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_sqlalchemy_lite import SQLAlchemy
from sqlalchemy.orm import Session
from werkzeug.test import TestResponse

from grant_tracker.common.data.base import BaseModel
from tests.conftest import TEST_ADMIN_KEY


@pytest.fixture(scope="session")
def db(app: Flask) -> Generator[SQLAlchemy, None, None]:
    yield app.extensions["sqlalchemy"]

    with app.app_context():
        for engine in app.extensions["sqlalchemy"].engines.values():
            engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def db_session(app: Flask, db: SQLAlchemy) -> Generator[Session, None, None]:
    # Every test gets empty tables. Requests made through the test clients commit for real, so tests can check what
    # was persisted with a separate session from `db.sessionmaker()`.
    with app.app_context():
        BaseModel.metadata.create_all(db.engine)
        try:
            yield db.session
        finally:
            db.session.close()
            BaseModel.metadata.drop_all(db.engine)


@pytest.fixture()
def anonymous_client(app: Flask, db: SQLAlchemy) -> FlaskClient:
    class CustomClient(FlaskClient):
        # Requests may share the test's app context (and so its session). Drop anything the request left behind, so
        # the test only ever sees what was committed.
        def open(self, *args: t.Any, **kwargs: t.Any) -> TestResponse:
            response = super().open(*args, **kwargs)
            db.session.rollback()
            db.session.expire_all()
            return response

    app.test_client_class = CustomClient
    return app.test_client()


@pytest.fixture()
def admin_client(app: Flask, anonymous_client: FlaskClient) -> FlaskClient:
    # `anonymous_client` installs the client class; this is a separate client that always sends the admin key
    client = app.test_client()
    client.environ_base["HTTP_X_ADMIN_KEY"] = TEST_ADMIN_KEY
    return client


@pytest.fixture()
def persisted(db: SQLAlchemy) -> Generator[Session, None, None]:
    """A session independent of the one requests use, for checking what actually reached the database."""
    with db.sessionmaker() as session:
        yield session
