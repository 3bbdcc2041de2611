from typing import Generator

import pytest
from flask import Flask
from flask_sqlalchemy_lite import SQLAlchemy


@pytest.fixture(scope="function", autouse=True)
def db_session(app: Flask) -> Generator[None, None, None]:
    # Blocks access to the DB for unit tests. Fixtures in the `integration` sub-directory set up a real database.
    # FactoryBoy's `build()` still works, as it never touches the session.
    with app.app_context():
        original_session_property = SQLAlchemy.session

        def session_error(self: SQLAlchemy) -> None:
            raise RuntimeError("No access to DB session available outside of integration tests")

        SQLAlchemy.session = property(session_error)  # type: ignore[method-assign, assignment]

        try:
            yield
        finally:
            SQLAlchemy.session = original_session_property  # type: ignore[method-assign]
